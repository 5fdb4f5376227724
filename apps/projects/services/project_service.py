# apps/projects/services/project_service.py
import logging
from typing import List, Optional
from apps.core.domain.hierarchy import collect_descendants, remove_subtree
from apps.core.errors import ValidationError
from apps.core.validation import is_numeric, parse_id, require_name
from apps.projects.domain.entities import ProjectEntity
from apps.projects.ports.repositories import IProjectRepository
from apps.tasks.ports.repositories import ITaskRepository

logger = logging.getLogger(__name__)


def resolve_project(repository: IProjectRepository, identifier) -> ProjectEntity:
    """Projekt po ID (same cyfry) albo po nazwie."""
    if is_numeric(identifier):
        return repository.get_by_id(parse_id(identifier, "project ID"))
    if identifier is None or not str(identifier).strip():
        raise ValidationError("Project name or numeric ID is required.")
    return repository.get_by_name(str(identifier).strip())


class ProjectService:
    def __init__(self, repository: IProjectRepository, task_repository: ITaskRepository):
        self.repository = repository
        self.task_repository = task_repository

    def resolve(self, identifier) -> ProjectEntity:
        return resolve_project(self.repository, identifier)

    def create_project(self, name: str, description: str = "",
                       parent_identifier: Optional[str] = None) -> ProjectEntity:
        name = require_name(name, "project")

        parent_id = None
        if parent_identifier:
            parent_id = self.resolve(parent_identifier).id

        project = self.repository.create(ProjectEntity(
            id=None,
            name=name,
            description=description or "",
            parent_project_id=parent_id,
        ))
        logger.info("Created project %s '%s'", project.id, project.name)
        return project

    def edit_project(self, project_id: int, name: Optional[str] = None,
                     description: Optional[str] = None,
                     parent_identifier: Optional[str] = None) -> ProjectEntity:
        """Puste wartości oznaczają 'bez zmian'."""
        project = self.repository.get_by_id(project_id)

        if name:
            project.name = require_name(name, "project")
        if description:
            project.description = description

        if parent_identifier:
            parent = self.resolve(parent_identifier)
            # Przeniesienie pod samego siebie lub potomka stworzyłoby cykl
            if parent.id == project.id or parent.id in collect_descendants(self.repository, project.id):
                raise ValidationError(
                    f"Project '{parent.name}' cannot become the parent of '{project.name}'."
                )
            project.parent_project_id = parent.id

        project = self.repository.update(project)
        logger.info("Updated project %s", project.id)
        return project

    def list_projects(self) -> List[ProjectEntity]:
        return self.repository.list_all()

    def list_subprojects(self, parent_id: int) -> List[ProjectEntity]:
        return self.repository.list_by_parent(parent_id)

    def remove_project(self, project_id: int) -> List[int]:
        """Usuwa projekt, wszystkie podprojekty i ich zadania (liście najpierw)."""
        return remove_subtree(self.repository, project_id, before_delete=self._purge_tasks)

    def _purge_tasks(self, project_id: int):
        tasks = self.task_repository.list_by_project(project_id)
        task_ids = {t.id for t in tasks}
        removed = set()

        for task in tasks:
            # Podzadania znikają razem ze swoim korzeniem
            if task.parent_task_id in task_ids or task.id in removed:
                continue
            removed.update(remove_subtree(self.task_repository, task.id))

        if removed:
            logger.info("Removed %d task(s) of project %s", len(removed), project_id)
