# apps/tasks/ports/repositories.py
from abc import abstractmethod
from typing import List, Optional
from apps.core.domain.hierarchy import HierarchyRepository
from apps.tasks.domain.entities import Priority, TaskEntity


class ITaskRepository(HierarchyRepository):
    kind = "task"

    @abstractmethod
    def create(self, task: TaskEntity) -> TaskEntity:
        pass

    @abstractmethod
    def get_by_id(self, task_id: int) -> TaskEntity:
        pass

    @abstractmethod
    def list_all(self) -> List[TaskEntity]:
        pass

    @abstractmethod
    def list_by_parent(self, parent_id: int) -> List[TaskEntity]:
        """Bezpośrednie podzadania."""
        pass

    @abstractmethod
    def list_by_project(self, project_id: int) -> List[TaskEntity]:
        """Wszystkie zadania projektu, na dowolnej głębokości."""
        pass

    @abstractmethod
    def filter(self, project_id: Optional[int] = None, completed: Optional[bool] = None,
               priority: Optional[Priority] = None) -> List[TaskEntity]:
        pass

    @abstractmethod
    def update(self, task: TaskEntity) -> TaskEntity:
        pass

    @abstractmethod
    def delete(self, task_id: int) -> None:
        pass
