"""In-process hook registry.

Listeners subscribe to a :class:`Hook` and are invoked with the hook's
arguments whenever the storage adapter runs it.  ``HookRegistry.run`` is the
hook-runner the adapter expects: it resolves once every listener has finished
and raises the first listener exception, which vetoes the operation in
progress.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol

from loguru import logger

from annostore.models.enums import Hook

Listener = Callable[..., Awaitable[None] | None]


class HookRunner(Protocol):
    """Callable that runs every listener registered for ``hook``."""

    def __call__(self, hook: Hook, args: Sequence[Any]) -> Awaitable[None]: ...


def _coerce_hook(hook: Hook | str) -> Hook:
    try:
        return Hook(hook)
    except ValueError:
        msg = f"Unknown hook: {hook!r}"
        raise ValueError(msg) from None


class HookRegistry:
    """Registry of hook listeners.

    Listeners may be plain functions or coroutine functions.  All listeners
    for a hook are started together; a listener that raises (typically
    :class:`~annostore.errors.HookVetoError`) makes ``run`` raise.
    """

    def __init__(self) -> None:
        self._listeners: dict[Hook, list[Listener]] = {}

    # -- Mutation --------------------------------------------------------------

    def on(self, hook: Hook | str, listener: Listener) -> None:
        hook = _coerce_hook(hook)
        logger.debug("Hooks: register listener {} for {}", getattr(listener, "__name__", listener), hook)
        self._listeners.setdefault(hook, []).append(listener)

    def off(self, hook: Hook | str, listener: Listener) -> None:
        """Remove a listener.  No-op if it was never registered."""
        listeners = self._listeners.get(_coerce_hook(hook), [])
        if listener in listeners:
            listeners.remove(listener)

    # -- Query -----------------------------------------------------------------

    def listeners(self, hook: Hook | str) -> list[Listener]:
        """Return a snapshot of the listeners registered for ``hook``."""
        return list(self._listeners.get(_coerce_hook(hook), []))

    # -- Dispatch --------------------------------------------------------------

    async def run(self, hook: Hook | str, args: Sequence[Any] = ()) -> None:
        hook = _coerce_hook(hook)
        pending: list[Awaitable[None]] = []
        try:
            for listener in self.listeners(hook):
                result = listener(*args)
                if inspect.isawaitable(result):
                    pending.append(result)
        except BaseException:
            # A synchronous listener vetoed; drop the coroutines not yet scheduled.
            for awaitable in pending:
                if inspect.iscoroutine(awaitable):
                    awaitable.close()
            raise
        if not pending:
            return
        tasks = [asyncio.ensure_future(awaitable) for awaitable in pending]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            # First failure vetoes; stop the remaining listeners before re-raising.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    __call__ = run
