from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator


class AssistantError(Exception):
    """Base error for the recommendation core.

    ``operation`` names the core operation the failure surfaced from
    (e.g. ``"update"``), so callers can report it without parsing messages.
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message


class InvalidInput(AssistantError):
    """A required request field is missing or malformed."""


class NotFound(AssistantError):
    """The referenced session (or vehicle) does not exist."""


class StorageFailure(AssistantError):
    """The catalog or session store collaborator failed."""


@contextmanager
def storage_call(operation: str) -> Iterator[None]:
    """Surface collaborator failures as ``StorageFailure`` tagged with *operation*."""
    try:
        yield
    except AssistantError as exc:
        if exc.operation is None:
            exc.operation = operation
        raise
    except Exception as exc:
        raise StorageFailure(f"{type(exc).__name__}: {exc}", operation=operation) from exc
