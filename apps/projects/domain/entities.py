# apps/projects/domain/entities.py
from dataclasses import dataclass
from typing import Optional
from datetime import datetime


@dataclass
class ProjectEntity:
    id: Optional[int]  # ID może być None przed zapisem
    name: str
    description: str = ""

    # Hierarchia
    parent_project_id: Optional[int] = None

    # Audyt (ustawiane przez bazę)
    creation_date: Optional[datetime] = None
    last_modified_date: Optional[datetime] = None

    @property
    def parent_id(self) -> Optional[int]:
        return self.parent_project_id

    @property
    def display_name(self) -> str:
        return self.name

    def is_root(self) -> bool:
        return self.parent_project_id is None
