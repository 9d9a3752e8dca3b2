"""In-memory stores for development and tests.

Neither store persists anything.  ``NullStore`` does the bare minimum to
satisfy the store contract; ``DebugStore`` additionally logs every call so the
persistence traffic of other components can be watched during development.
"""

from __future__ import annotations

import copy
import itertools
from typing import Any

from loguru import logger

from annostore.models.query import QueryResult


class NullStore:
    """No-op store.  Ids come from a per-store counter starting at 0."""

    def __init__(self) -> None:
        self._ids = itertools.count()

    def create(self, annotation: dict[str, Any]) -> dict[str, Any]:
        if annotation.get("id") is None:
            annotation["id"] = next(self._ids)
        return annotation

    def update(self, annotation: dict[str, Any]) -> dict[str, Any]:
        return annotation

    def delete(self, annotation: dict[str, Any]) -> dict[str, Any]:
        return annotation

    def query(self, query: dict[str, Any] | None = None) -> QueryResult:
        return QueryResult()


class DebugStore:
    """Store that logs a snapshot of every call at DEBUG level."""

    def __init__(self) -> None:
        self._ids = itertools.count()

    def trace(self, action: str, payload: Any) -> None:
        logger.debug("DebugStore: {} {}", action, copy.deepcopy(payload))

    def create(self, annotation: dict[str, Any]) -> dict[str, Any]:
        if annotation.get("id") is None:
            annotation["id"] = next(self._ids)
        self.trace("create", annotation)
        return annotation

    def update(self, annotation: dict[str, Any]) -> dict[str, Any]:
        self.trace("update", annotation)
        return annotation

    def delete(self, annotation: dict[str, Any]) -> dict[str, Any]:
        self.trace("destroy", annotation)
        return annotation

    def query(self, query: dict[str, Any] | None = None) -> QueryResult:
        self.trace("query", query)
        return QueryResult(results=[], meta={"total": 0})
