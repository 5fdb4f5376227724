from apps.core.management.base import ClidoCommand
from apps.core.validation import parse_id


class Command(ClidoCommand):
    help = 'Remove a project or task along with all its subprojects or subtasks'

    def add_arguments(self, parser):
        parser.add_argument('kind', choices=['project', 'task'])
        parser.add_argument('id')

    def run(self, *args, **options):
        entity_id = parse_id(options['id'])

        if options['kind'] == 'project':
            removed = self.project_service.remove_project(entity_id)
            self.success(
                f"Project (ID: {entity_id}) and all its subprojects removed successfully "
                f"({len(removed)} project(s))."
            )
            return

        removed = self.task_service.remove_task(entity_id)
        self.success(
            f"Task (ID: {entity_id}) and all its subtasks removed successfully "
            f"({len(removed)} task(s))."
        )
