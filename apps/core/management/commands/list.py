import json
import logging
from dataclasses import asdict

from django.core.serializers.json import DjangoJSONEncoder

from apps.core.domain.forest import build_forest
from apps.core.management.base import ClidoCommand
from apps.core.presentation.tables import project_table, task_table
from apps.core.presentation.trees import project_tree, task_tree
from apps.tasks.application.use_cases import parse_priority

logger = logging.getLogger(__name__)

STATUS_FILTERS = {'all': None, 'done': True, 'pending': False}


class Command(ClidoCommand):
    help = 'List all projects or tasks, optionally filtered by project for tasks'

    def add_arguments(self, parser):
        parser.add_argument('kind', choices=['projects', 'tasks'])
        parser.add_argument('-p', '--project', default='', help='Filter tasks by project name or ID')
        parser.add_argument('--status', choices=sorted(STATUS_FILTERS), default='all',
                            help='Filter tasks by completion status')
        parser.add_argument('-r', '--priority', default=None, help='Filter tasks by priority (1-4)')
        parser.add_argument('-j', '--json', action='store_true', help='Output list in JSON format')
        parser.add_argument('-t', '--tree', action='store_true',
                            help='Display projects or tasks in a tree-like structure')

    def run(self, *args, **options):
        if options['kind'] == 'projects':
            self.list_projects(options)
        else:
            self.list_tasks(options)

    def list_projects(self, options):
        projects = self.project_service.list_projects()

        if options['json']:
            self.write_json(projects)
        elif options['tree']:
            self.render(project_tree(self.forest(projects, "project")))
        else:
            self.render(project_table(projects))

    def list_tasks(self, options):
        # Walidacja przed dostępem do bazy
        priority = parse_priority(options['priority'])

        project = None
        if options['project']:
            project = self.project_service.resolve(options['project'])

        tasks = self.task_service.list_tasks(
            project_id=project.id if project else None,
            completed=STATUS_FILTERS[options['status']],
            priority=priority,
        )

        if options['json']:
            self.write_json(tasks)
            return

        if options['tree']:
            # Przy filtrowaniu rodzic może wypaść z listy; to nie jest błąd danych
            filtered = project is not None or priority is not None or options['status'] != 'all'
            self.render(task_tree(self.forest(tasks, "task", warn=not filtered)))
            return

        project_names = {p.id: p.name for p in self.project_service.list_projects()}
        task_names = {t.id: t.name for t in self.task_service.list_tasks()}
        title = f"Tasks in project '{project.name}'" if project else "All Tasks"
        self.render(task_table(tasks, project_names, task_names, title=title))

    def forest(self, entities, kind: str, warn: bool = True):
        forest = build_forest(entities)
        if forest.orphans:
            log = logger.warning if warn else logger.debug
            log(
                "Skipping %d %s(s) whose parent is missing: %s",
                len(forest.orphans), kind, ", ".join(str(e.id) for e in forest.orphans),
            )
        return forest

    def write_json(self, entities):
        self.stdout.write(json.dumps([asdict(e) for e in entities], cls=DjangoJSONEncoder, indent=2))
