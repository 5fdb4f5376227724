# apps/core/validation.py
from datetime import datetime
from typing import Optional

from dateutil import parser as date_parser

from apps.core.errors import ValidationError

DUE_DATE_FORMAT = "%Y-%m-%d %H:%M"


def parse_id(value, label: str = "ID") -> int:
    """Identyfikator musi być liczbą całkowitą dodatnią."""
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    else:
        text = str(value).strip() if value is not None else ""
        if not text.isdigit():
            raise ValidationError(f"Invalid {label} '{value}'. Please provide a numeric ID.")
        number = int(text)

    if number <= 0:
        raise ValidationError(f"Invalid {label} '{value}'. IDs start at 1.")
    return number


def is_numeric(value: Optional[str]) -> bool:
    return value is not None and str(value).strip().isdigit()


def require_name(name: Optional[str], kind: str) -> str:
    if name is None or not name.strip():
        raise ValidationError(f"{kind.capitalize()} name is required.")
    return name.strip()


def parse_due_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parsuje termin w formacie YYYY-MM-DD HH:MM (dateutil akceptuje też
    warianty typu '2024-09-11' czy '2024-09-11T14:30').
    Pusty tekst oznacza brak terminu.
    """
    if value is None or not value.strip():
        return None

    try:
        parsed = date_parser.parse(value.strip(), yearfirst=True)
    except (ValueError, OverflowError):
        raise ValidationError(
            f"Invalid due date '{value}'. Expected format: YYYY-MM-DD HH:MM."
        ) from None

    # Przechowujemy czas lokalny bez strefy
    return parsed.replace(tzinfo=None, second=0, microsecond=0)
