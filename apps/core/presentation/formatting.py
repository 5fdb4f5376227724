# apps/core/presentation/formatting.py
import textwrap
from datetime import datetime
from enum import Enum
from typing import Optional

from rich.text import Text

from apps.core.validation import DUE_DATE_FORMAT
from apps.tasks.domain.entities import Priority


class PastDue(str, Enum):
    NOT_DUE = 'no'
    OVERDUE = 'yes'
    WAS_DUE = 'was due'


PAST_DUE_STYLES = {
    PastDue.NOT_DUE: 'green',
    PastDue.OVERDUE: 'bold red',
    PastDue.WAS_DUE: 'green',
}


def wrap_text(text: Optional[str], max_length: int) -> str:
    """Zawija po słowach; słowa dłuższe niż max_length nie są cięte."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return textwrap.fill(text, width=max_length, break_long_words=False, break_on_hyphens=False)


def format_date(value: Optional[datetime]) -> str:
    if value is None:
        return "None"
    return value.strftime(DUE_DATE_FORMAT)


def priority_label(priority) -> str:
    return Priority.from_value(priority).label


def past_due_status(due_date: Optional[datetime], completed: bool,
                    now: Optional[datetime] = None) -> PastDue:
    """
    Liczone w momencie renderowania (czas lokalny), nie zapisywane w bazie,
    więc ten sam wiersz może zmienić status między wywołaniami.
    """
    if due_date is None:
        return PastDue.NOT_DUE

    now = now or datetime.now()
    if now > due_date.replace(tzinfo=None):
        return PastDue.WAS_DUE if completed else PastDue.OVERDUE
    return PastDue.NOT_DUE


def past_due_text(due_date: Optional[datetime], completed: bool,
                  now: Optional[datetime] = None) -> Text:
    status = past_due_status(due_date, completed, now)
    return Text(status.value, style=PAST_DUE_STYLES[status])
