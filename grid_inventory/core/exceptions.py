"""Domain-level exception hierarchy for service and repository layers."""

from __future__ import annotations

from collections.abc import Iterable


class DomainError(Exception):
    """Base class for domain-specific failures."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""


class ConflictError(DomainError):
    """Raised when a state conflict occurs (e.g. duplicate entries)."""


class ValidationError(DomainError):
    """Raised when input validation fails at the domain/service layer.

    ``errors`` always carries every failure that was found, in the order the
    checks ran, so that callers importing many records can report all of them.
    """

    def __init__(self, message: str, errors: Iterable[str] | None = None) -> None:
        super().__init__(message)
        self.errors: list[str] = list(errors) if errors is not None else [message]


class StorageError(DomainError):
    """Raised when the persistence layer fails after validation has passed."""
