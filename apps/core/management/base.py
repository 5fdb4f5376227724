# apps/core/management/base.py
from django.core.management.base import BaseCommand, CommandError

from apps.core.errors import ClidoError
from apps.core.presentation.rendering import render_to_text
from apps.projects.adapters.orm_repositories import DjangoProjectRepository
from apps.projects.services.project_service import ProjectService
from apps.tasks.adapters.orm_repositories import DjangoTaskRepository
from apps.tasks.domain.services import TaskService


class ClidoCommand(BaseCommand):
    """Wspólna baza komend: repozytoria, wyjście rich i mapowanie błędów."""

    requires_system_checks = []

    def handle(self, *args, **options):
        self.use_color = options.get('force_color') or (
            not options.get('no_color') and self.stdout.isatty()
        )
        self.project_repository = DjangoProjectRepository()
        self.task_repository = DjangoTaskRepository()

        try:
            self.run(*args, **options)
        except ClidoError as e:
            raise CommandError(str(e)) from e

    def run(self, *args, **options):
        raise NotImplementedError('subclasses of ClidoCommand must provide a run() method')

    @property
    def project_service(self) -> ProjectService:
        return ProjectService(self.project_repository, self.task_repository)

    @property
    def task_service(self) -> TaskService:
        return TaskService(self.task_repository)

    def render(self, renderable):
        self.stdout.write(render_to_text(renderable, color=self.use_color), ending="")

    def success(self, message: str):
        self.stdout.write(self.style.SUCCESS(message))
