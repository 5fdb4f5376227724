from apps.core.management.base import ClidoCommand
from apps.tasks.application.use_cases import CreateTaskInput, CreateTaskUseCase


class Command(ClidoCommand):
    help = 'Create a new project or task'

    def add_arguments(self, parser):
        parser.add_argument('kind', choices=['project', 'task'])
        parser.add_argument('-n', '--name', default='', help='Name of the project or task')
        parser.add_argument('-d', '--description', default='', help='Description of the project or task')
        parser.add_argument('-p', '--project', default='',
                            help='Parent project name or ID for subprojects or tasks')
        parser.add_argument('-t', '--task', default='', help='Parent task ID for subtasks')
        parser.add_argument('-D', '--due', default='', help='Due date for the task (format: YYYY-MM-DD HH:MM)')
        parser.add_argument('-r', '--priority', default=None,
                            help='Priority of the task (1: High, 2: Medium, 3: Low, 4: None)')

    def run(self, *args, **options):
        if options['kind'] == 'project':
            project = self.project_service.create_project(
                name=options['name'],
                description=options['description'],
                parent_identifier=options['project'],
            )
            self.success(f"Project '{project.name}' created successfully (ID: {project.id}).")
            return

        task = CreateTaskUseCase(self.task_repository, self.project_repository).execute(
            CreateTaskInput(
                name=options['name'],
                project=options['project'],
                description=options['description'],
                parent_task=options['task'],
                due=options['due'],
                priority=options['priority'],
            )
        )
        self.success(
            f"Task '{task.name}' created successfully (ID: {task.id}) "
            f"with priority {task.priority.label}."
        )
