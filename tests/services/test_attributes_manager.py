"""Tests for the per-request attributes manager."""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Optional

import pytest

from principles_skill.adapters.persistence import InMemoryPersistenceAdapter
from principles_skill.core.exceptions import PersistenceError
from principles_skill.services.attributes import AttributesManager


class CountingStore:
    """Save/get-only store recording how often it is read."""

    def __init__(self, initial: Optional[dict[str, Any]] = None) -> None:
        self.data = initial
        self.reads = 0
        self.saved: list[dict[str, Any]] = []

    async def get_attributes(self, user_id: str) -> Optional[dict[str, Any]]:
        del user_id
        self.reads += 1
        return dict(self.data) if self.data is not None else None

    async def save_attributes(self, user_id: str, attributes: Mapping[str, Any]) -> None:
        del user_id
        self.saved.append(dict(attributes))
        self.data = dict(attributes)


def test_get_returns_default_when_absent() -> None:
    manager = AttributesManager(CountingStore(), "u1")

    assert asyncio.run(manager.get_attributes(True, {"fresh": True})) == {"fresh": True}


def test_get_uses_cache_unless_disabled() -> None:
    store = CountingStore({"lastHeardPrinciple": 2})
    manager = AttributesManager(store, "u1")

    async def run() -> None:
        await manager.get_attributes()
        await manager.get_attributes()
        assert store.reads == 1
        await manager.get_attributes(use_cache=False)
        assert store.reads == 2

    asyncio.run(run())


def test_mutating_a_copy_does_not_change_state() -> None:
    manager = AttributesManager(CountingStore({"lastHeardPrinciple": 2}), "u1")

    async def run() -> None:
        copy_ = await manager.get_attributes()
        copy_["lastHeardPrinciple"] = 5
        assert (await manager.get_attributes())["lastHeardPrinciple"] == 2

    asyncio.run(run())


def test_set_is_local_until_saved() -> None:
    store = CountingStore({"lastHeardPrinciple": 2, "other": "kept"})
    manager = AttributesManager(store, "u1")

    async def run() -> None:
        await manager.get_attributes()
        manager.set_attributes({"lastHeardPrinciple": 3})
        assert store.saved == []
        assert (await manager.get_attributes())["lastHeardPrinciple"] == 3
        await manager.save_attributes()
        assert store.saved == [{"lastHeardPrinciple": 3, "other": "kept"}]

    asyncio.run(run())


def test_delete_capability_depends_on_adapter() -> None:
    assert AttributesManager(InMemoryPersistenceAdapter(), "u1").can_delete is True

    manager = AttributesManager(CountingStore(), "u1")
    assert manager.can_delete is False
    with pytest.raises(PersistenceError, match="does not support deletion"):
        asyncio.run(manager.delete_attributes())


def test_delete_purges_store_and_cache() -> None:
    store = InMemoryPersistenceAdapter()
    manager = AttributesManager(store, "u1")

    async def run() -> None:
        await store.save_attributes("u1", {"lastHeardPrinciple": 4})
        assert await manager.get_attributes() == {"lastHeardPrinciple": 4}
        await manager.delete_attributes()
        assert await store.get_attributes("u1") is None
        assert await manager.get_attributes(True, {}) == {}

    asyncio.run(run())
