"""Per-request access to the caller's persistent attributes."""

from __future__ import annotations

import copy
from typing import Any, Mapping, Optional

from principles_skill.core.exceptions import PersistenceError
from principles_skill.core.ports import (
    AttributesGateway,
    DeletablePersistenceAdapterPort,
    PersistenceAdapterPort,
)


class AttributesManager(AttributesGateway):
    """Cache, merge and flush one user's attributes for a single dispatch.

    Callers only ever receive copies; changes become durable through
    :meth:`set_attributes` followed by :meth:`save_attributes`.
    """

    def __init__(self, adapter: PersistenceAdapterPort, user_id: str) -> None:
        self._adapter = adapter
        self._user_id = user_id
        self._cache: Optional[dict[str, Any]] = None
        self._loaded = False

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def can_delete(self) -> bool:
        return isinstance(self._adapter, DeletablePersistenceAdapterPort)

    async def get_attributes(
        self, use_cache: bool = True, default: Optional[Mapping[str, Any]] = None
    ) -> dict[str, Any]:
        if not (use_cache and self._loaded):
            self._cache = await self._adapter.get_attributes(self._user_id)
            self._loaded = True
        if self._cache is None:
            self._cache = dict(default or {})
        return copy.deepcopy(self._cache)

    def set_attributes(self, attributes: Mapping[str, Any]) -> None:
        merged = dict(self._cache or {})
        merged.update(copy.deepcopy(dict(attributes)))
        self._cache = merged

    async def save_attributes(self) -> None:
        await self._adapter.save_attributes(self._user_id, self._cache or {})

    async def delete_attributes(self) -> None:
        if not isinstance(self._adapter, DeletablePersistenceAdapterPort):
            raise PersistenceError("persistence adapter does not support deletion")
        await self._adapter.delete_attributes(self._user_id)
        self._cache = None
        self._loaded = False


__all__ = ["AttributesManager"]
