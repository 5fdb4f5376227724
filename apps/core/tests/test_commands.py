import json
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import OperationalError
from django.db.models.query import QuerySet
from django.test import TestCase

from apps.projects.models import Project
from apps.tasks.models import Task


def run(*args, **options):
    out = StringIO()
    call_command(*args, stdout=out, **options)
    return out.getvalue()


class CommandFlowTests(TestCase):

    def test_new_project_and_subproject(self):
        self.assertIn("Project 'Home' created successfully", run('new', 'project', name='Home'))
        run('new', 'project', name='Garden', project='Home')

        garden = Project.objects.get(name='Garden')
        self.assertEqual(garden.parent_project.name, 'Home')

    def test_new_task(self):
        run('new', 'project', name='Home')
        output = run('new', 'task', name='Mow', project='Home', due='2024-09-11 14:30', priority='2')

        self.assertIn("with priority Medium", output)
        self.assertEqual(Task.objects.get().name, 'Mow')

    def test_errors_become_command_errors(self):
        with self.assertRaisesMessage(CommandError, "Project name is required."):
            run('new', 'project')
        with self.assertRaisesMessage(CommandError, "Project 'Nowhere' not found"):
            run('new', 'task', name='Mow', project='Nowhere')
        with self.assertRaises(CommandError):
            run('edit', 'task', 'abc')

    def test_duplicate_project_name(self):
        run('new', 'project', name='Home')
        with self.assertRaisesMessage(CommandError, "Could not create project 'Home'"):
            run('new', 'project', name='Home')

    def test_edit_task(self):
        run('new', 'project', name='Home')
        run('new', 'task', name='Mow', project='Home')
        task = Task.objects.get()

        output = run('edit', 'task', str(task.id), name='Mow lawn', priority='1')

        self.assertIn("Task 'Mow lawn' updated successfully.", output)
        self.assertIn("Priority: High", output)

    def test_toggle_recursive(self):
        run('new', 'project', name='Home')
        run('new', 'task', name='Root', project='Home')
        root = Task.objects.get(name='Root')
        run('new', 'task', name='Child', project='Home', task=str(root.id))

        output = run('toggle', str(root.id), recursive=True)

        self.assertIn("Task 'Root'", output)
        self.assertIn("Task 'Child'", output)
        self.assertEqual(Task.objects.filter(task_completed=True).count(), 2)

    def test_remove_project_with_subprojects_and_tasks(self):
        run('new', 'project', name='Home')
        run('new', 'project', name='Garden', project='Home')
        run('new', 'task', name='Mow', project='Garden')
        home = Project.objects.get(name='Home')

        output = run('remove', 'project', str(home.id))

        self.assertIn("removed successfully (2 project(s))", output)
        self.assertFalse(Project.objects.exists())
        self.assertFalse(Task.objects.exists())

    def test_remove_missing_task(self):
        with self.assertRaisesMessage(CommandError, "Task '42' not found"):
            run('remove', 'task', '42')


class ListCommandTests(TestCase):

    def setUp(self):
        run('new', 'project', name='Home')
        run('new', 'project', name='Garden', project='Home')
        run('new', 'project', name='Work')
        run('new', 'task', name='Mow', project='Garden', due='2000-01-01 00:00')
        mow = Task.objects.get(name='Mow')
        run('new', 'task', name='Edge', project='Garden', task=str(mow.id))
        run('new', 'task', name='Report', project='Work')

    def test_projects_table(self):
        output = run('list', 'projects')
        for name in ('Home', 'Garden', 'Work'):
            self.assertIn(name, output)

    def test_projects_tree(self):
        output = run('list', 'projects', tree=True)
        self.assertIn("└── Garden", output)

    def test_projects_json(self):
        data = json.loads(run('list', 'projects', json=True))
        self.assertEqual([p['name'] for p in data], ['Home', 'Garden', 'Work'])
        self.assertEqual(data[1]['parent_project_id'], data[0]['id'])

    def test_tasks_filtered_by_project(self):
        data = json.loads(run('list', 'tasks', project='Garden', json=True))
        self.assertEqual([t['name'] for t in data], ['Mow', 'Edge'])

    def test_tasks_table_title(self):
        self.assertIn("Tasks in project 'Work'", run('list', 'tasks', project='Work'))
        self.assertIn("All Tasks", run('list', 'tasks'))

    def test_tasks_by_status(self):
        mow = Task.objects.get(name='Mow')
        run('toggle', str(mow.id))

        done = json.loads(run('list', 'tasks', status='done', json=True))
        pending = json.loads(run('list', 'tasks', status='pending', json=True))

        self.assertEqual([t['name'] for t in done], ['Mow'])
        self.assertEqual([t['name'] for t in pending], ['Edge', 'Report'])

    def test_tasks_tree(self):
        output = run('list', 'tasks', tree=True)
        self.assertIn("Mow (ID:", output)
        self.assertIn("└── Edge (ID:", output)

    def test_unknown_project_filter(self):
        with self.assertRaises(CommandError):
            run('list', 'tasks', project='Nowhere')


class VersionCommandTests(TestCase):

    def test_version(self):
        self.assertIn("Clido version", run('version'))


class StorageFailureTests(TestCase):

    def test_read_failure_becomes_command_error(self):
        with mock.patch.object(QuerySet, '__iter__', side_effect=OperationalError("database is locked")):
            with self.assertRaisesMessage(CommandError, "Could not list projects: database is locked"):
                run('list', 'projects')
