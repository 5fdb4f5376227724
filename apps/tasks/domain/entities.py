# apps/tasks/domain/entities.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from enum import IntEnum


class Priority(IntEnum):
    HIGH = 1
    MEDIUM = 2
    LOW = 3
    NONE = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_value(cls, value) -> 'Priority':
        """Nieznane wartości (np. stare wiersze) traktujemy jak NONE."""
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.NONE


@dataclass
class TaskEntity:
    id: Optional[int]  # ID może być None przed zapisem
    name: str
    project_id: int
    description: str = ""

    # Hierarchia (tylko ID, żeby nie wiązać obiektów domenowych z ORM)
    parent_task_id: Optional[int] = None

    # Czas
    due_date: Optional[datetime] = None
    completion_date: Optional[datetime] = None
    task_completed: bool = False

    priority: Priority = Priority.NONE

    # Audyt
    creation_date: Optional[datetime] = None
    last_updated_date: Optional[datetime] = None

    @property
    def parent_id(self) -> Optional[int]:
        return self.parent_task_id

    @property
    def display_name(self) -> str:
        return self.name

    def is_root(self) -> bool:
        return self.parent_task_id is None

    def toggle(self, now: datetime) -> bool:
        """
        Odwraca stan wykonania. completion_date jest ustawiona
        dokładnie wtedy, gdy task_completed == True.
        """
        self.task_completed = not self.task_completed
        self.completion_date = now if self.task_completed else None
        self.last_updated_date = now
        return self.task_completed
