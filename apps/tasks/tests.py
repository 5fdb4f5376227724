from datetime import datetime
from unittest import mock

from django.db import OperationalError
from django.db.models.query import QuerySet
from django.test import TestCase

from apps.core.errors import NotFoundError, StorageError, ValidationError
from apps.projects.adapters.orm_repositories import DjangoProjectRepository
from apps.projects.domain.entities import ProjectEntity
from apps.tasks.adapters.orm_repositories import DjangoTaskRepository
from apps.tasks.application.use_cases import (
    CreateTaskInput,
    CreateTaskUseCase,
    EditTaskInput,
    EditTaskUseCase,
    parse_priority,
)
from apps.tasks.domain.entities import Priority, TaskEntity
from apps.tasks.domain.services import TaskService
from apps.tasks.models import Task as TaskModel


class TaskTestCase(TestCase):

    def setUp(self):
        self.project_repo = DjangoProjectRepository()
        self.repo = DjangoTaskRepository()
        self.service = TaskService(self.repo)
        self.project = self.project_repo.create(ProjectEntity(id=None, name="Home"))

    def make_task(self, name, parent=None, completed=False, **kwargs):
        return self.repo.create(TaskEntity(
            id=None,
            name=name,
            project_id=kwargs.pop('project_id', self.project.id),
            parent_task_id=parent.id if parent else None,
            task_completed=completed,
            **kwargs
        ))

    def assertCompletionInvariant(self, task):
        self.assertEqual(task.completion_date is not None, task.task_completed)


class TaskRepositoryTests(TaskTestCase):

    def test_defaults_on_create(self):
        task = self.make_task("Dishes")

        self.assertEqual(task.priority, Priority.NONE)
        self.assertFalse(task.task_completed)
        self.assertCompletionInvariant(task)
        self.assertIsNotNone(task.creation_date)

    def test_create_completed_sets_completion_date(self):
        task = self.make_task("Done already", completed=True)
        self.assertCompletionInvariant(task)

    def test_list_by_project_any_depth(self):
        other = self.project_repo.create(ProjectEntity(id=None, name="Other"))
        top = self.make_task("Top")
        sub = self.make_task("Sub", parent=top)
        self.make_task("Deep", parent=sub)
        self.make_task("Elsewhere", project_id=other.id)

        names = [t.name for t in self.repo.list_by_project(self.project.id)]
        self.assertEqual(names, ["Top", "Sub", "Deep"])
        self.assertEqual([t.name for t in self.repo.list_by_parent(top.id)], ["Sub"])

    def test_filter(self):
        self.make_task("Open", priority=Priority.HIGH)
        self.make_task("Closed", completed=True, priority=Priority.LOW)

        self.assertEqual([t.name for t in self.repo.filter(completed=True)], ["Closed"])
        self.assertEqual([t.name for t in self.repo.filter(completed=False)], ["Open"])
        self.assertEqual([t.name for t in self.repo.filter(priority=Priority.HIGH)], ["Open"])
        self.assertEqual(len(self.repo.filter(project_id=self.project.id)), 2)

    def test_delete_with_subtasks_is_rejected(self):
        top = self.make_task("Top")
        self.make_task("Sub", parent=top)

        with self.assertRaises(StorageError):
            self.repo.delete(top.id)

    def test_missing_task(self):
        with self.assertRaises(NotFoundError):
            self.repo.get_by_id(999)
        with self.assertRaises(NotFoundError):
            self.repo.delete(999)

    def test_read_failures_are_storage_errors(self):
        locked = OperationalError("database is locked")

        with mock.patch.object(TaskModel.objects, 'get', side_effect=locked):
            with self.assertRaises(StorageError) as ctx:
                self.repo.get_by_id(3)
        self.assertEqual(ctx.exception.operation, "get")
        self.assertEqual(ctx.exception.entity_id, 3)

        with mock.patch.object(QuerySet, '__iter__', side_effect=locked):
            for read in (
                self.repo.list_all,
                lambda: self.repo.list_by_parent(1),
                lambda: self.repo.list_by_project(self.project.id),
                lambda: self.repo.filter(completed=True),
            ):
                with self.subTest(read=read):
                    with self.assertRaises(StorageError) as ctx:
                        read()
                    self.assertEqual(ctx.exception.operation, "list")


class ToggleTests(TaskTestCase):

    def test_toggle_sets_and_clears_completion_date(self):
        task = self.make_task("Dishes")

        [done] = self.service.toggle_completion(task.id)
        self.assertTrue(done.task_completed)
        self.assertCompletionInvariant(done)

        [undone] = self.service.toggle_completion(task.id)
        self.assertFalse(undone.task_completed)
        self.assertCompletionInvariant(undone)

    def test_non_recursive_touches_one_task(self):
        root = self.make_task("Root")
        child = self.make_task("Child", parent=root)

        toggled = self.service.toggle_completion(root.id)

        self.assertEqual([t.id for t in toggled], [root.id])
        self.assertFalse(self.repo.get_by_id(child.id).task_completed)

    def test_recursive_flips_each_task_independently(self):
        root = self.make_task("Root")
        child = self.make_task("Child", parent=root, completed=True)
        grandchild = self.make_task("Grandchild", parent=child)

        toggled = self.service.toggle_completion(root.id, recursive=True)

        self.assertEqual([t.id for t in toggled], [root.id, child.id, grandchild.id])
        self.assertTrue(self.repo.get_by_id(root.id).task_completed)
        self.assertFalse(self.repo.get_by_id(child.id).task_completed)
        self.assertTrue(self.repo.get_by_id(grandchild.id).task_completed)
        for task in self.repo.list_all():
            self.assertCompletionInvariant(task)

    def test_toggle_missing_task(self):
        with self.assertRaises(NotFoundError):
            self.service.toggle_completion(404, recursive=True)

    def test_read_failure_reports_processed_tasks(self):
        root = self.make_task("Root")

        with mock.patch.object(QuerySet, '__iter__', side_effect=OperationalError("disk I/O error")):
            with self.assertLogs('apps.core.domain.hierarchy', 'ERROR') as logs:
                with self.assertRaises(StorageError):
                    self.service.toggle_completion(root.id, recursive=True)

        self.assertIn(f"already processed: [{root.id}]", logs.output[0])


class RemoveTaskTests(TaskTestCase):

    def test_removes_subtree(self):
        root = self.make_task("Root")
        child = self.make_task("Child", parent=root)
        grandchild = self.make_task("Grandchild", parent=child)
        sibling = self.make_task("Sibling")

        removed = self.service.remove_task(root.id)

        self.assertEqual(removed, [grandchild.id, child.id, root.id])
        for task_id in removed:
            with self.assertRaises(NotFoundError):
                self.repo.get_by_id(task_id)
        self.assertEqual(self.repo.get_by_id(sibling.id).name, "Sibling")

    def test_leaf_task(self):
        task = self.make_task("Leaf")
        self.assertEqual(self.service.remove_task(task.id), [task.id])

    def test_retry_after_removal_reports_not_found(self):
        task = self.make_task("Leaf")
        self.service.remove_task(task.id)
        with self.assertRaises(NotFoundError):
            self.service.remove_task(task.id)


class UseCaseTests(TaskTestCase):

    def create(self, **kwargs):
        kwargs.setdefault('project', "Home")
        return CreateTaskUseCase(self.repo, self.project_repo).execute(CreateTaskInput(**kwargs))

    def edit(self, **kwargs):
        return EditTaskUseCase(self.repo, self.project_repo).execute(EditTaskInput(**kwargs))

    def test_create_full(self):
        parent = self.create(name="Parent")
        task = self.create(
            name="Child",
            project=str(self.project.id),
            description="details",
            parent_task=str(parent.id),
            due="2024-09-11 14:30",
            priority="1",
        )

        self.assertEqual(task.parent_task_id, parent.id)
        self.assertEqual(task.due_date, datetime(2024, 9, 11, 14, 30))
        self.assertEqual(task.priority, Priority.HIGH)
        self.assertEqual(task.description, "details")

    def test_create_validation_errors(self):
        with self.assertRaises(ValidationError):
            self.create(name="")
        with self.assertRaises(ValidationError):
            self.create(name="Task", project="")
        with self.assertRaises(ValidationError):
            self.create(name="Task", parent_task="abc")
        with self.assertRaises(ValidationError):
            self.create(name="Task", due="not a date")
        with self.assertRaises(ValidationError):
            self.create(name="Task", priority="7")

    def test_create_missing_references(self):
        with self.assertRaises(NotFoundError):
            self.create(name="Task", project="Nowhere")
        with self.assertRaises(NotFoundError):
            self.create(name="Task", parent_task="999")

    def test_edit_changes_only_given_fields(self):
        task = self.create(name="Task", description="keep me", priority="2")
        edited = self.edit(task_id=task.id, name="Renamed", due="2030-01-01 08:00")

        self.assertEqual(edited.name, "Renamed")
        self.assertEqual(edited.description, "keep me")
        self.assertEqual(edited.priority, Priority.MEDIUM)
        self.assertEqual(edited.due_date, datetime(2030, 1, 1, 8, 0))
        self.assertGreaterEqual(edited.last_updated_date, task.last_updated_date)

    def test_edit_moves_task_to_other_project(self):
        self.project_repo.create(ProjectEntity(id=None, name="Work"))
        task = self.create(name="Task")
        self.assertEqual(self.edit(task_id=task.id, project="Work").project_id,
                         self.project_repo.get_by_name("Work").id)

    def test_create_rejects_parent_from_other_project(self):
        self.project_repo.create(ProjectEntity(id=None, name="Work"))
        parent = self.create(name="Parent")

        with self.assertRaises(ValidationError):
            self.create(name="Child", project="Work", parent_task=str(parent.id))
        self.assertEqual([t.name for t in self.repo.list_all()], ["Parent"])

    def test_edit_rejects_parent_from_other_project(self):
        work = self.project_repo.create(ProjectEntity(id=None, name="Work"))
        home_task = self.create(name="Home task")
        work_task = self.create(name="Work task", project="Work")

        with self.assertRaises(ValidationError):
            self.edit(task_id=work_task.id, parent_task=str(home_task.id))
        self.assertIsNone(self.repo.get_by_id(work_task.id).parent_task_id)
        self.assertEqual(self.repo.get_by_id(work_task.id).project_id, work.id)

    def test_edit_rejects_moving_subtask_away_from_parent_project(self):
        self.project_repo.create(ProjectEntity(id=None, name="Work"))
        parent = self.create(name="Parent")
        child = self.create(name="Child", parent_task=str(parent.id))

        with self.assertRaises(ValidationError):
            self.edit(task_id=child.id, project="Work")
        self.assertEqual(self.repo.get_by_id(child.id).project_id, self.project.id)

    def test_edit_rejects_moving_task_with_subtasks(self):
        self.project_repo.create(ProjectEntity(id=None, name="Work"))
        parent = self.create(name="Parent")
        self.create(name="Child", parent_task=str(parent.id))

        with self.assertRaises(ValidationError):
            self.edit(task_id=parent.id, project="Work")
        self.assertEqual(self.repo.get_by_id(parent.id).project_id, self.project.id)

    def test_edit_moves_task_and_parent_together(self):
        work = self.project_repo.create(ProjectEntity(id=None, name="Work"))
        work_parent = self.create(name="Work parent", project="Work")
        task = self.create(name="Task")

        moved = self.edit(task_id=task.id, project="Work", parent_task=str(work_parent.id))

        self.assertEqual(moved.project_id, work.id)
        self.assertEqual(moved.parent_task_id, work_parent.id)

    def test_edit_rejects_cyclic_parent(self):
        root = self.create(name="Root")
        child = self.create(name="Child", parent_task=str(root.id))

        with self.assertRaises(ValidationError):
            self.edit(task_id=root.id, parent_task=str(child.id))
        with self.assertRaises(ValidationError):
            self.edit(task_id=root.id, parent_task=str(root.id))

    def test_parse_priority(self):
        self.assertIsNone(parse_priority(None))
        self.assertIsNone(parse_priority("0"))
        self.assertEqual(parse_priority("4"), Priority.NONE)
        with self.assertRaises(ValidationError):
            parse_priority("high")
