# apps/projects/ports/repositories.py
from abc import abstractmethod
from typing import List
from apps.core.domain.hierarchy import HierarchyRepository
from apps.projects.domain.entities import ProjectEntity


class IProjectRepository(HierarchyRepository):
    kind = "project"

    @abstractmethod
    def create(self, project: ProjectEntity) -> ProjectEntity:
        """Nadaje ID i znaczniki czasu; StorageError przy zduplikowanej nazwie."""
        pass

    @abstractmethod
    def get_by_id(self, project_id: int) -> ProjectEntity:
        pass

    @abstractmethod
    def get_by_name(self, name: str) -> ProjectEntity:
        pass

    @abstractmethod
    def list_all(self) -> List[ProjectEntity]:
        pass

    @abstractmethod
    def list_by_parent(self, parent_id: int) -> List[ProjectEntity]:
        """Bezpośrednie podprojekty."""
        pass

    @abstractmethod
    def update(self, project: ProjectEntity) -> ProjectEntity:
        pass

    @abstractmethod
    def delete(self, project_id: int) -> None:
        pass
