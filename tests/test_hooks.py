"""Unit tests for HookRegistry."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from annostore.errors import HookVetoError
from annostore.hooks import HookRegistry
from annostore.models.enums import Hook


async def test_run_calls_sync_and_async_listeners(hooks: HookRegistry) -> None:
    calls: list[str] = []

    def sync_listener(ann: dict) -> None:
        calls.append(f"sync:{ann['id']}")

    async def async_listener(ann: dict) -> None:
        await asyncio.sleep(0)
        calls.append(f"async:{ann['id']}")

    hooks.on(Hook.ANNOTATION_CREATED, sync_listener)
    hooks.on(Hook.ANNOTATION_CREATED, async_listener)

    await hooks.run(Hook.ANNOTATION_CREATED, [{"id": 1}])

    assert sorted(calls) == ["async:1", "sync:1"]


async def test_run_without_listeners_is_noop(hooks: HookRegistry) -> None:
    await hooks.run(Hook.ANNOTATION_DELETED, [{}])


async def test_only_matching_hook_runs(hooks: HookRegistry) -> None:
    listener = MagicMock()
    hooks.on(Hook.ANNOTATION_UPDATED, listener)

    await hooks.run(Hook.ANNOTATION_CREATED, [{}])

    listener.assert_not_called()


async def test_string_hook_names_are_coerced(hooks: HookRegistry) -> None:
    listener = MagicMock()
    hooks.on("onAnnotationsLoaded", listener)

    await hooks.run(Hook.ANNOTATIONS_LOADED, [[{"id": 1}]])

    listener.assert_called_once_with([{"id": 1}])


def test_unknown_hook_name_rejected(hooks: HookRegistry) -> None:
    with pytest.raises(ValueError, match="Unknown hook"):
        hooks.on("onSomethingElse", MagicMock())


async def test_async_veto_propagates(hooks: HookRegistry) -> None:
    async def veto(ann: dict) -> None:
        raise HookVetoError("nope")

    hooks.on(Hook.BEFORE_ANNOTATION_DELETED, veto)

    with pytest.raises(HookVetoError, match="nope"):
        await hooks.run(Hook.BEFORE_ANNOTATION_DELETED, [{"id": 1}])


async def test_sync_veto_closes_pending_coroutines(hooks: HookRegistry) -> None:
    started: list[bool] = []

    async def slow(ann: dict) -> None:
        started.append(True)

    def veto(ann: dict) -> None:
        raise HookVetoError("stop")

    hooks.on(Hook.BEFORE_ANNOTATION_CREATED, slow)
    hooks.on(Hook.BEFORE_ANNOTATION_CREATED, veto)

    with pytest.raises(HookVetoError):
        await hooks.run(Hook.BEFORE_ANNOTATION_CREATED, [{}])

    assert started == []


async def test_off_removes_listener(hooks: HookRegistry) -> None:
    listener = MagicMock()
    hooks.on(Hook.ANNOTATION_CREATED, listener)
    hooks.off(Hook.ANNOTATION_CREATED, listener)
    hooks.off(Hook.ANNOTATION_CREATED, listener)

    await hooks.run(Hook.ANNOTATION_CREATED, [{}])

    listener.assert_not_called()
    assert hooks.listeners(Hook.ANNOTATION_CREATED) == []


async def test_registry_is_callable_as_hook_runner(hooks: HookRegistry) -> None:
    listener = MagicMock()
    hooks.on(Hook.ANNOTATION_CREATED, listener)

    await hooks(Hook.ANNOTATION_CREATED, [{"id": 2}])

    listener.assert_called_once_with({"id": 2})


async def test_async_veto_cancels_slow_listener(hooks: HookRegistry) -> None:
    ran: list[str] = []

    async def slow(ann: dict) -> None:
        await asyncio.sleep(0.05)
        ran.append("slow")

    async def veto(ann: dict) -> None:
        raise HookVetoError("stop")

    hooks.on(Hook.BEFORE_ANNOTATION_UPDATED, slow)
    hooks.on(Hook.BEFORE_ANNOTATION_UPDATED, veto)

    with pytest.raises(HookVetoError, match="stop"):
        await hooks.run(Hook.BEFORE_ANNOTATION_UPDATED, [{"id": 1}])

    await asyncio.sleep(0.1)
    assert ran == []


async def test_second_failure_is_collected(hooks: HookRegistry) -> None:
    async def first(ann: dict) -> None:
        raise HookVetoError("first")

    async def second(ann: dict) -> None:
        await asyncio.sleep(0)
        raise RuntimeError("second")

    hooks.on(Hook.BEFORE_ANNOTATION_CREATED, first)
    hooks.on(Hook.BEFORE_ANNOTATION_CREATED, second)

    with pytest.raises(HookVetoError, match="first"):
        await hooks.run(Hook.BEFORE_ANNOTATION_CREATED, [{}])
