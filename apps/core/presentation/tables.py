# apps/core/presentation/tables.py
from datetime import datetime
from typing import Dict, List, Optional

from rich.table import Table
from rich.text import Text

from apps.core.presentation.formatting import format_date, past_due_text, priority_label, wrap_text
from apps.projects.domain.entities import ProjectEntity
from apps.tasks.domain.entities import TaskEntity

PROJECT_COLUMNS = ["ID", "Name", "Description", "Type", "Child Of"]
TASK_COLUMNS = [
    "ID", "Name", "Description", "Due Date", "Completed", "Past Due",
    "Priority", "Project", "Type", "Parent/Child Of",
]


def _relation(parent_id: Optional[int], names: Dict[int, str]):
    """(Typ, nazwa rodzica) dla kolumn Type / Child Of."""
    if parent_id is None:
        return "Parent", "None"
    return "Child", names.get(parent_id, "None")


def project_table(projects: List[ProjectEntity], names: Optional[Dict[int, str]] = None) -> Table:
    names = names if names is not None else {p.id: p.name for p in projects}

    table = Table(title="Projects", show_lines=True)
    for header in PROJECT_COLUMNS:
        table.add_column(header)

    for project in projects:
        type_field, child_of = _relation(project.parent_project_id, names)
        table.add_row(
            str(project.id),
            Text(wrap_text(project.name, 30)),
            Text(wrap_text(project.description, 50)),
            type_field,
            Text(child_of),
        )
    return table


def task_table(tasks: List[TaskEntity], project_names: Dict[int, str],
               task_names: Optional[Dict[int, str]] = None,
               now: Optional[datetime] = None, title: str = "Tasks") -> Table:
    task_names = task_names if task_names is not None else {t.id: t.name for t in tasks}

    table = Table(title=title, show_lines=True)
    for header in TASK_COLUMNS:
        table.add_column(header)

    for task in tasks:
        type_field, child_of = _relation(task.parent_task_id, task_names)
        table.add_row(
            str(task.id),
            Text(wrap_text(task.name, 20)),
            Text(wrap_text(task.description, 30)),
            format_date(task.due_date),
            str(task.task_completed).lower(),
            past_due_text(task.due_date, task.task_completed, now),
            priority_label(task.priority),
            Text(wrap_text(project_names.get(task.project_id, ""), 20)),
            type_field,
            Text(wrap_text(child_of, 20)),
        )
    return table
