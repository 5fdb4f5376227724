# apps/tasks/domain/services/task_service.py
import logging
from typing import List, Optional
from django.utils import timezone
from apps.core.domain.hierarchy import apply_to_subtree, remove_subtree
from apps.tasks.domain.entities import Priority, TaskEntity
from apps.tasks.ports.repositories import ITaskRepository

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, repository: ITaskRepository):
        self.repository = repository

    def get_task(self, task_id: int) -> TaskEntity:
        return self.repository.get_by_id(task_id)

    def list_tasks(self, project_id: Optional[int] = None, completed: Optional[bool] = None,
                   priority: Optional[Priority] = None) -> List[TaskEntity]:
        if project_id is None and completed is None and priority is None:
            return self.repository.list_all()
        return self.repository.filter(project_id=project_id, completed=completed, priority=priority)

    def list_subtasks(self, task_id: int) -> List[TaskEntity]:
        return self.repository.list_by_parent(task_id)

    def toggle_completion(self, task_id: int, recursive: bool = False) -> List[TaskEntity]:
        """
        Odwraca stan wykonania zadania (i przy recursive=True wszystkich podzadań).
        Każde zadanie jest odwracane niezależnie: rodzic i dziecko mogą
        skończyć z różnymi stanami.
        Zwraca zaktualizowane zadania, korzeń pierwszy.
        """
        def toggle(task: TaskEntity) -> TaskEntity:
            task.toggle(timezone.now())
            updated = self.repository.update(task)
            logger.info(
                "Task %s marked as %s",
                updated.id, "completed" if updated.task_completed else "not completed",
            )
            return updated

        return apply_to_subtree(self.repository, task_id, toggle, recursive=recursive)

    def remove_task(self, task_id: int) -> List[int]:
        """Usuwa zadanie razem ze wszystkimi podzadaniami."""
        return remove_subtree(self.repository, task_id)
