"""
Domain errors.

These represent expected business failures. The domain layer returns them
inside ``Err`` results; the HTTP layer raises them so the exception handlers
in ``app.main`` can map them to status codes:

- ValidationError / ValidationErrors -> 400
- NotFoundError -> 404
- any other DomainError -> 400
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional


class DomainError(Exception):
    """Base exception for domain layer errors"""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(message)

    def to_json(self) -> Dict[str, Any]:
        return {
            "name": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }


class ValidationError(DomainError):
    """Validation failure for a single field"""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__("VALIDATION_ERROR", message)

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

    def __repr__(self) -> str:
        return f"ValidationError(field={self.field!r}, message={self.message!r})"

    def to_json(self) -> Dict[str, Any]:
        return {**super().to_json(), "field": self.field}


class ValidationErrors(DomainError):
    """
    Aggregate of independent validation failures.

    Returned (or raised at the HTTP edge) when several rules fail at once so
    callers can present all of them, not just the first.
    """

    def __init__(self, errors: Optional[Iterable[ValidationError]] = None):
        self.errors: List[ValidationError] = list(errors or [])
        super().__init__("VALIDATION_ERROR", self._summary())

    @classmethod
    def empty(cls) -> "ValidationErrors":
        return cls([])

    @property
    def is_empty(self) -> bool:
        return not self.errors

    @property
    def count(self) -> int:
        return len(self.errors)

    def add(self, error: ValidationError) -> None:
        self.errors.append(error)
        self.message = self._summary()
        self.args = (self.message,)

    def fields(self) -> List[str]:
        return [e.field for e in self.errors]

    def _summary(self) -> str:
        return "; ".join(str(e) for e in self.errors) or "No validation errors"

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def to_json(self) -> List[Dict[str, Any]]:  # type: ignore[override]
        return [e.to_json() for e in self.errors]


class NotFoundError(DomainError):
    """Raised (by persistence) when an identifier has no stored record"""

    def __init__(self, resource_type: str, resource_id: str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            "NOT_FOUND", f"{resource_type} with id '{resource_id}' not found"
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            **super().to_json(),
            "resourceType": self.resource_type,
            "resourceId": self.resource_id,
        }
