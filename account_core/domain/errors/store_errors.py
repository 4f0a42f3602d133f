"""Persistence conflict exceptions.

Unlike DomainError values these ARE raised: repositories raise them from
inside a unit of work and AccountService translates them into the matching
Failure (DuplicateEmail, InvalidOrExpiredCode or ValidationFailed).
"""


class StoreConflict(Exception):
    """Base exception for write conflicts detected by the store."""

    pass


class DuplicateRecordError(StoreConflict):
    """A unique constraint rejected the write.

    Attributes:
        field: Constrained field ("email", "pending_email", "active_code").
    """

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"Duplicate value for {field}")


class StaleRecordError(StoreConflict):
    """The record changed since it was read (optimistic version mismatch)."""

    pass
