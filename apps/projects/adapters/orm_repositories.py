# apps/projects/adapters/orm_repositories.py
from typing import List
from django.db import DatabaseError, transaction
from django.utils import timezone
from apps.core.errors import NotFoundError, StorageError
from apps.projects.domain.entities import ProjectEntity
from apps.projects.ports.repositories import IProjectRepository
from apps.projects.models import Project as ProjectModel


class DjangoProjectRepository(IProjectRepository):
    def to_entity(self, model: ProjectModel) -> ProjectEntity:
        """Konwertuje Model Django -> Czystą Encję."""
        return ProjectEntity(
            id=model.id,
            name=model.name,
            description=model.description,
            parent_project_id=model.parent_project_id,
            creation_date=model.creation_date,
            last_modified_date=model.last_modified_date,
        )

    def _data(self, project: ProjectEntity) -> dict:
        return {
            'name': project.name,
            'description': project.description or "",
            'parent_project_id': project.parent_project_id,
        }

    def create(self, project: ProjectEntity) -> ProjectEntity:
        try:
            # Savepoint: odrzucony zapis nie psuje połączenia
            with transaction.atomic():
                obj = ProjectModel.objects.create(**self._data(project))
        except DatabaseError as e:
            raise StorageError(
                f"Could not create project '{project.name}': {e}", operation="create"
            ) from e
        return self.to_entity(obj)

    def get_by_id(self, project_id: int) -> ProjectEntity:
        try:
            return self.to_entity(ProjectModel.objects.get(id=project_id))
        except ProjectModel.DoesNotExist:
            raise NotFoundError("project", project_id) from None
        except DatabaseError as e:
            raise StorageError(
                f"Could not read project {project_id}: {e}", operation="get", entity_id=project_id
            ) from e

    def get_by_name(self, name: str) -> ProjectEntity:
        try:
            return self.to_entity(ProjectModel.objects.get(name=name))
        except ProjectModel.DoesNotExist:
            raise NotFoundError("project", name) from None
        except DatabaseError as e:
            raise StorageError(f"Could not read project '{name}': {e}", operation="get") from e

    def list_all(self) -> List[ProjectEntity]:
        try:
            return [self.to_entity(p) for p in ProjectModel.objects.order_by('id')]
        except DatabaseError as e:
            raise StorageError(f"Could not list projects: {e}", operation="list") from e

    def list_by_parent(self, parent_id: int) -> List[ProjectEntity]:
        try:
            # Lista wymusza wykonanie zapytania wewnątrz try
            qs = ProjectModel.objects.filter(parent_project_id=parent_id).order_by('id')
            return [self.to_entity(p) for p in qs]
        except DatabaseError as e:
            raise StorageError(
                f"Could not list subprojects of project {parent_id}: {e}",
                operation="list", entity_id=parent_id
            ) from e

    def update(self, project: ProjectEntity) -> ProjectEntity:
        data = self._data(project)
        data['last_modified_date'] = timezone.now()

        try:
            with transaction.atomic():
                updated = ProjectModel.objects.filter(id=project.id).update(**data)
        except DatabaseError as e:
            raise StorageError(
                f"Could not update project {project.id}: {e}",
                operation="update", entity_id=project.id
            ) from e

        if not updated:
            raise NotFoundError("project", project.id)
        return self.get_by_id(project.id)

    def delete(self, project_id: int) -> None:
        try:
            with transaction.atomic():
                deleted, _ = ProjectModel.objects.filter(id=project_id).delete()
        except DatabaseError as e:
            # ProtectedError: projekt ma jeszcze podprojekty albo zadania
            raise StorageError(
                f"Could not delete project {project_id}: {e}",
                operation="delete", entity_id=project_id
            ) from e

        if not deleted:
            raise NotFoundError("project", project_id)
