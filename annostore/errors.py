"""Exceptions raised by the storage layer."""

from __future__ import annotations

from typing import Any


class AnnostoreError(Exception):
    """Base class for all storage-layer errors."""


class MissingAnnotationIdError(AnnostoreError, TypeError):
    """Raised when ``update`` or ``delete`` is called on an annotation without an id."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"annotation must have an id for {operation}()")


class HookVetoError(AnnostoreError):
    """Raised by a hook listener to cancel the operation in progress."""


class StoreRequestError(AnnostoreError):
    """A remote store request failed (transport error, bad status or bad body)."""

    def __init__(
        self,
        message: str,
        *,
        action: str,
        annotation_id: Any = None,
        status_code: int | None = None,
    ) -> None:
        self.message = message
        self.action = action
        self.annotation_id = annotation_id
        self.status_code = status_code
        super().__init__(message)
