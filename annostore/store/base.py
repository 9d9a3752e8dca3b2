"""Annotation store interface.

A store is a dumb persistence surface: it receives plain annotation dicts
(already stripped of ``_local`` by the adapter) and returns its own
representation of them.  Methods may return values directly or awaitables;
the adapter awaits whichever it gets.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any, Protocol, runtime_checkable

from annostore.models.query import QueryResult


@runtime_checkable
class AnnotationStore(Protocol):
    """Protocol for annotation persistence backends."""

    def create(self, annotation: dict[str, Any]) -> dict[str, Any] | Awaitable[dict[str, Any]]:
        """Persist a new annotation and return it with its assigned ``id``."""
        ...

    def update(self, annotation: dict[str, Any]) -> dict[str, Any] | Awaitable[dict[str, Any]]:
        """Replace a stored annotation.  ``annotation["id"]`` is always set."""
        ...

    def delete(self, annotation: dict[str, Any]) -> dict[str, Any] | Awaitable[dict[str, Any]]:
        """Remove a stored annotation and return its final representation."""
        ...

    def query(self, query: dict[str, Any] | None) -> QueryResult | Awaitable[QueryResult]:
        """Return annotations matching ``query``.  Interpretation is store-defined."""
        ...
