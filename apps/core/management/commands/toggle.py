from apps.core.management.base import ClidoCommand
from apps.core.validation import parse_id


class Command(ClidoCommand):
    help = 'Toggle the completion status of a task identified by its ID'

    def add_arguments(self, parser):
        parser.add_argument('task_id')
        parser.add_argument('-r', '--recursive', action='store_true',
                            help='Toggle the completion status of all subtasks as well')

    def run(self, *args, **options):
        task_id = parse_id(options['task_id'], "task ID")

        for task in self.task_service.toggle_completion(task_id, recursive=options['recursive']):
            status = "completed" if task.task_completed else "not completed"
            self.success(f"Task '{task.name}' (ID: {task.id}) marked as {status}.")
