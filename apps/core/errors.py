# apps/core/errors.py
from typing import Optional


class ClidoError(Exception):
    """Bazowy błąd domenowy; komendy zamieniają go na CommandError."""


class ValidationError(ClidoError):
    """Niepoprawne dane wejściowe, wykryte przed dostępem do bazy."""


class NotFoundError(ClidoError):
    def __init__(self, kind: str, identifier):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind.capitalize()} '{identifier}' not found")


class StorageError(ClidoError):
    """Baza odrzuciła operację (ograniczenie, I/O)."""

    def __init__(self, message: str, operation: Optional[str] = None, entity_id: Optional[int] = None):
        self.operation = operation
        self.entity_id = entity_id
        super().__init__(message)
