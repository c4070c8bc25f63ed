"""
Domain Exceptions

Raised by services and routers, converted to HTTP responses by the
exception handlers registered in bookshelf.main.

- NotFoundError → 404 {"detail": "..."}
- ValidationFailed → 400 [{"field": "...", "message": "..."}, ...]
"""

from dataclasses import dataclass


class BookshelfError(Exception):
    """Base class for errors raised by the Bookshelf API."""


class NotFoundError(BookshelfError):
    """An entity id could not be resolved."""

    def __init__(self, entity: str, entity_id: int) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id {entity_id} not found")


@dataclass(frozen=True)
class Violation:
    """A single failed field constraint."""

    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ValidationFailed(BookshelfError):
    """One or more field constraints were violated."""

    def __init__(self, violations: list[Violation]) -> None:
        self.violations = violations
        super().__init__(
            "; ".join(f"{v.field}: {v.message}" for v in violations)
        )
