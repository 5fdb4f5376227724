# apps/tasks/adapters/orm_repositories.py
from typing import List, Optional
from django.db import DatabaseError, transaction
from django.utils import timezone
from apps.core.errors import NotFoundError, StorageError, ValidationError
from apps.tasks.domain.entities import Priority, TaskEntity
from apps.tasks.filters import TaskFilter
from apps.tasks.ports.repositories import ITaskRepository
from apps.tasks.models import Task as TaskModel


class DjangoTaskRepository(ITaskRepository):
    def to_entity(self, model: TaskModel) -> TaskEntity:
        """Konwertuje Model Django -> Czystą Encję."""
        return TaskEntity(
            id=model.id,
            name=model.name,
            description=model.description,
            project_id=model.project_id,
            parent_task_id=model.parent_task_id,
            due_date=model.due_date,
            completion_date=model.completion_date,
            task_completed=model.task_completed,
            priority=Priority.from_value(model.priority),
            creation_date=model.creation_date,
            last_updated_date=model.last_updated_date,
        )

    def _data(self, task: TaskEntity) -> dict:
        return {
            'name': task.name,
            'description': task.description or "",
            'project_id': task.project_id,
            'parent_task_id': task.parent_task_id,
            'due_date': task.due_date,
            'completion_date': task.completion_date if task.task_completed else None,
            'task_completed': task.task_completed,
            'priority': int(task.priority),
        }

    def create(self, task: TaskEntity) -> TaskEntity:
        data = self._data(task)
        if task.task_completed and data['completion_date'] is None:
            data['completion_date'] = timezone.now()

        try:
            with transaction.atomic():
                obj = TaskModel.objects.create(**data)
        except DatabaseError as e:
            raise StorageError(f"Could not create task '{task.name}': {e}", operation="create") from e
        return self.to_entity(obj)

    def get_by_id(self, task_id: int) -> TaskEntity:
        try:
            return self.to_entity(TaskModel.objects.get(id=task_id))
        except TaskModel.DoesNotExist:
            raise NotFoundError("task", task_id) from None
        except DatabaseError as e:
            raise StorageError(
                f"Could not read task {task_id}: {e}", operation="get", entity_id=task_id
            ) from e

    def _fetch(self, qs, message: str, entity_id: Optional[int] = None) -> List[TaskEntity]:
        try:
            return [self.to_entity(t) for t in qs]
        except DatabaseError as e:
            raise StorageError(f"{message}: {e}", operation="list", entity_id=entity_id) from e

    def list_all(self) -> List[TaskEntity]:
        return self._fetch(TaskModel.objects.order_by('id'), "Could not list tasks")

    def list_by_parent(self, parent_id: int) -> List[TaskEntity]:
        qs = TaskModel.objects.filter(parent_task_id=parent_id).order_by('id')
        return self._fetch(qs, f"Could not list subtasks of task {parent_id}", parent_id)

    def list_by_project(self, project_id: int) -> List[TaskEntity]:
        qs = TaskModel.objects.filter(project_id=project_id).order_by('id')
        return self._fetch(qs, f"Could not list tasks of project {project_id}", project_id)

    def filter(self, project_id: Optional[int] = None, completed: Optional[bool] = None,
               priority: Optional[Priority] = None) -> List[TaskEntity]:
        data = {}
        if project_id is not None:
            data['project'] = project_id
        if completed is not None:
            data['completed'] = completed
        if priority is not None:
            data['priority'] = int(priority)

        task_filter = TaskFilter(data, queryset=TaskModel.objects.order_by('id'))
        if not task_filter.is_valid():
            raise ValidationError(f"Invalid task filter: {dict(task_filter.errors)}")
        return self._fetch(task_filter.qs, "Could not filter tasks")

    def update(self, task: TaskEntity) -> TaskEntity:
        data = self._data(task)
        if task.task_completed and data['completion_date'] is None:
            data['completion_date'] = timezone.now()
        data['last_updated_date'] = timezone.now()

        try:
            with transaction.atomic():
                updated = TaskModel.objects.filter(id=task.id).update(**data)
        except DatabaseError as e:
            raise StorageError(
                f"Could not update task {task.id}: {e}", operation="update", entity_id=task.id
            ) from e

        if not updated:
            raise NotFoundError("task", task.id)
        return self.get_by_id(task.id)

    def delete(self, task_id: int) -> None:
        try:
            with transaction.atomic():
                deleted, _ = TaskModel.objects.filter(id=task_id).delete()
        except DatabaseError as e:
            # ProtectedError: zadanie ma jeszcze podzadania
            raise StorageError(
                f"Could not delete task {task_id}: {e}", operation="delete", entity_id=task_id
            ) from e

        if not deleted:
            raise NotFoundError("task", task_id)
