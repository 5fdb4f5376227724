# apps/tasks/application/use_cases.py
import logging
from dataclasses import dataclass
from typing import Optional
from apps.core.domain.hierarchy import collect_descendants
from apps.core.errors import ValidationError
from apps.core.validation import parse_due_date, parse_id, require_name
from apps.projects.ports.repositories import IProjectRepository
from apps.projects.services.project_service import resolve_project
from apps.tasks.domain.entities import Priority, TaskEntity
from apps.tasks.ports.repositories import ITaskRepository

logger = logging.getLogger(__name__)


def parse_priority(value) -> Optional[Priority]:
    """1: High, 2: Medium, 3: Low, 4: None. Puste/0 = brak zmiany."""
    if value in (None, "", 0, "0"):
        return None
    try:
        return Priority(int(value))
    except (TypeError, ValueError):
        raise ValidationError(
            f"Invalid priority '{value}'. Use 1 (High), 2 (Medium), 3 (Low) or 4 (None)."
        ) from None


@dataclass
class CreateTaskInput:
    name: str
    project: str  # nazwa albo ID projektu
    description: str = ""
    parent_task: Optional[str] = None
    due: Optional[str] = None
    priority: Optional[int] = None


@dataclass
class EditTaskInput:
    task_id: int
    name: Optional[str] = None
    description: Optional[str] = None
    project: Optional[str] = None
    parent_task: Optional[str] = None
    due: Optional[str] = None
    priority: Optional[int] = None


class CreateTaskUseCase:
    def __init__(self, repository: ITaskRepository, project_repository: IProjectRepository):
        self.repository = repository
        self.project_repository = project_repository

    def execute(self, input_dto: CreateTaskInput) -> TaskEntity:
        # 1. Walidacja (przed dostępem do bazy)
        name = require_name(input_dto.name, "task")
        if not input_dto.project:
            raise ValidationError("Task must be associated with a project (name or numeric ID).")
        parent_task_id = parse_id(input_dto.parent_task, "parent task ID") if input_dto.parent_task else None
        due_date = parse_due_date(input_dto.due)
        priority = parse_priority(input_dto.priority) or Priority.NONE

        # 2. Referencje muszą istnieć
        project = resolve_project(self.project_repository, input_dto.project)
        if parent_task_id is not None:
            parent = self.repository.get_by_id(parent_task_id)
            # Podzadanie zawsze w projekcie rodzica
            if parent.project_id != project.id:
                raise ValidationError(
                    f"Parent task {parent.id} belongs to another project; "
                    f"a subtask must stay in the project of its parent."
                )

        task = self.repository.create(TaskEntity(
            id=None,
            name=name,
            description=input_dto.description or "",
            project_id=project.id,
            parent_task_id=parent_task_id,
            due_date=due_date,
            priority=priority,
        ))
        logger.info("Created task %s '%s' in project %s", task.id, task.name, project.id)
        return task


class EditTaskUseCase:
    def __init__(self, repository: ITaskRepository, project_repository: IProjectRepository):
        self.repository = repository
        self.project_repository = project_repository

    def execute(self, input_dto: EditTaskInput) -> TaskEntity:
        """Puste pola oznaczają 'bez zmian'."""
        parent_task_id = parse_id(input_dto.parent_task, "parent task ID") if input_dto.parent_task else None
        due_date = parse_due_date(input_dto.due)
        priority = parse_priority(input_dto.priority)

        task = self.repository.get_by_id(input_dto.task_id)

        if input_dto.name:
            task.name = require_name(input_dto.name, "task")
        if input_dto.description:
            task.description = input_dto.description
        if due_date is not None:
            task.due_date = due_date
        if priority is not None:
            task.priority = priority
        if input_dto.project:
            project_id = resolve_project(self.project_repository, input_dto.project).id
            if project_id != task.project_id and self.repository.list_by_parent(task.id):
                raise ValidationError(
                    f"Task {task.id} has subtasks and cannot be moved to another project."
                )
            task.project_id = project_id

        if parent_task_id is not None:
            self.repository.get_by_id(parent_task_id)
            # Przeniesienie pod samego siebie lub potomka stworzyłoby cykl
            if parent_task_id == task.id or parent_task_id in collect_descendants(self.repository, task.id):
                raise ValidationError(
                    f"Task {parent_task_id} cannot become the parent of task {task.id}."
                )
            task.parent_task_id = parent_task_id

        if task.parent_task_id is not None:
            parent = self.repository.get_by_id(task.parent_task_id)
            if parent.project_id != task.project_id:
                raise ValidationError(
                    f"Parent task {parent.id} belongs to another project; "
                    f"a subtask must stay in the project of its parent."
                )

        task = self.repository.update(task)
        logger.info("Updated task %s", task.id)
        return task
