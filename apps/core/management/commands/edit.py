from apps.core.management.base import ClidoCommand
from apps.core.presentation.formatting import format_date
from apps.core.validation import parse_id
from apps.tasks.application.use_cases import EditTaskInput, EditTaskUseCase


class Command(ClidoCommand):
    help = 'Edit an existing project or task identified by its ID'

    def add_arguments(self, parser):
        parser.add_argument('kind', choices=['project', 'task'])
        parser.add_argument('id')
        parser.add_argument('-n', '--name', default='', help='New name')
        parser.add_argument('-d', '--description', default='', help='New description')
        parser.add_argument('-p', '--project', default='',
                            help='New parent project (projects) or project (tasks), name or ID')
        parser.add_argument('-t', '--task', default='', help='New parent task ID for subtasks')
        parser.add_argument('-D', '--due', default='', help='New due date for task (format: YYYY-MM-DD HH:MM)')
        parser.add_argument('-r', '--priority', default=None,
                            help='New priority for task (1: High, 2: Medium, 3: Low, 4: None)')

    def run(self, *args, **options):
        entity_id = parse_id(options['id'])

        if options['kind'] == 'project':
            project = self.project_service.edit_project(
                entity_id,
                name=options['name'],
                description=options['description'],
                parent_identifier=options['project'],
            )
            self.success(f"Project '{project.name}' updated successfully.")
            return

        task = EditTaskUseCase(self.task_repository, self.project_repository).execute(
            EditTaskInput(
                task_id=entity_id,
                name=options['name'],
                description=options['description'],
                project=options['project'],
                parent_task=options['task'],
                due=options['due'],
                priority=options['priority'],
            )
        )
        self.success(f"Task '{task.name}' updated successfully.")
        self.stdout.write(
            f"New details: Priority: {task.priority.label}, Due Date: {format_date(task.due_date)}"
        )
