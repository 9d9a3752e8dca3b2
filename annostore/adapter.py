"""Storage adapter -- runs lifecycle hooks around store operations.

The adapter wraps any :class:`~annostore.store.base.AnnotationStore` and
cycles each create/update/delete through the same sequence::

    before-hook -> store call -> in-place update of the record -> after-hook

The annotation dict handed in by the caller keeps its identity for the whole
cycle: once the store answers, every key except ``_local`` is cleared and
replaced with the store's representation, so anyone holding a reference sees
the update.  ``_local`` carries adapter/UI-private data and is never sent to
the store.
"""

from __future__ import annotations

import copy
import inspect
from collections.abc import Awaitable, Coroutine
from typing import TYPE_CHECKING, Any, TypeVar

from loguru import logger

from annostore.errors import MissingAnnotationIdError
from annostore.models.enums import Hook

if TYPE_CHECKING:
    from annostore.hooks import HookRunner
    from annostore.models.query import QueryResult
    from annostore.store.base import AnnotationStore

T = TypeVar("T")

LOCAL_KEY = "_local"


async def _resolve(value: T | Awaitable[T]) -> T:
    """Await ``value`` if it is awaitable, otherwise return it as-is."""
    if inspect.isawaitable(value):
        return await value
    return value


def _require_id(annotation: dict[str, Any], operation: str) -> None:
    if annotation.get("id") is None:
        raise MissingAnnotationIdError(operation)


class StorageAdapter:
    """Fires the appropriate hooks when annotations are created, updated or deleted.

    ``create``, ``update`` and ``delete`` check their arguments immediately and
    return a coroutine, so a missing id raises at call time without touching
    hooks or the store.
    """

    def __init__(self, store: AnnotationStore, run_hook: HookRunner) -> None:
        self.store = store
        self.run_hook = run_hook

    # -- Cycled operations -----------------------------------------------------

    def create(self, annotation: dict[str, Any] | None = None) -> Coroutine[Any, Any, dict[str, Any]]:
        """Create an annotation.

        Runs ``onBeforeAnnotationCreated`` so listeners can initialise the
        annotation (or veto it), then ``onAnnotationCreated`` once the store
        has assigned it an identity.
        """
        if annotation is None:
            annotation = {}
        return self._cycle(annotation, "create", Hook.BEFORE_ANNOTATION_CREATED, Hook.ANNOTATION_CREATED)

    def update(self, annotation: dict[str, Any]) -> Coroutine[Any, Any, dict[str, Any]]:
        """Update an annotation.  Raises ``MissingAnnotationIdError`` if it has no id."""
        _require_id(annotation, "update")
        return self._cycle(annotation, "update", Hook.BEFORE_ANNOTATION_UPDATED, Hook.ANNOTATION_UPDATED)

    def delete(self, annotation: dict[str, Any]) -> Coroutine[Any, Any, dict[str, Any]]:
        """Delete an annotation.  Raises ``MissingAnnotationIdError`` if it has no id."""
        _require_id(annotation, "delete")
        return self._cycle(annotation, "delete", Hook.BEFORE_ANNOTATION_DELETED, Hook.ANNOTATION_DELETED)

    # -- Queries ---------------------------------------------------------------

    async def query(self, query: dict[str, Any] | None = None) -> QueryResult:
        """Query the store.  No hooks fire."""
        return await _resolve(self.store.query(query))

    async def load(self, query: dict[str, Any] | None = None) -> QueryResult:
        """Query the store, then run ``onAnnotationsLoaded`` with the results.

        Returns once every listener has finished.
        """
        result = await self.query(query)
        await self.run_hook(Hook.ANNOTATIONS_LOADED, [result.results])
        return result

    # -- Cycle -----------------------------------------------------------------

    async def _cycle(
        self,
        annotation: dict[str, Any],
        store_method: str,
        before: Hook,
        after: Hook,
    ) -> dict[str, Any]:
        try:
            await self.run_hook(before, [annotation])
        except Exception as e:
            logger.warning("Adapter: {} vetoed by {} listener: {!r}", store_method, before, e)
            raise

        safe_copy = copy.deepcopy(annotation)
        safe_copy.pop(LOCAL_KEY, None)

        try:
            stored = await _resolve(getattr(self.store, store_method)(safe_copy))
        except Exception as e:
            logger.debug("Adapter: store {} failed: {!r}", store_method, e)
            raise

        # Replace contents without changing identity.
        for key in list(annotation):
            if key != LOCAL_KEY:
                del annotation[key]
        if stored:
            annotation.update((k, v) for k, v in stored.items() if k != LOCAL_KEY)

        await self.run_hook(after, [annotation])
        return annotation
