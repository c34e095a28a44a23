"""Protocol definitions for infrastructure adapters."""

# pylint: disable=unnecessary-ellipsis

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable


class PersistenceAdapterPort(Protocol):
    """Port exposing durable per-user attribute storage."""

    async def get_attributes(self, user_id: str) -> Optional[dict[str, Any]]:
        """Return the stored attributes for ``user_id`` or ``None`` if absent."""
        ...

    async def save_attributes(self, user_id: str, attributes: Mapping[str, Any]) -> None:
        """Replace the stored attributes for ``user_id``."""
        ...


@runtime_checkable
class DeletablePersistenceAdapterPort(PersistenceAdapterPort, Protocol):
    """Persistence port that can also purge a user's attributes."""

    async def delete_attributes(self, user_id: str) -> None:
        """Remove every stored attribute for ``user_id``."""
        ...


class AttributesGateway(Protocol):
    """Per-request view of the caller's persistent attributes."""

    @property
    def can_delete(self) -> bool:
        """Whether the underlying store supports purging attributes."""
        ...

    async def get_attributes(
        self, use_cache: bool = True, default: Optional[Mapping[str, Any]] = None
    ) -> dict[str, Any]:
        """Return a copy of the caller's attributes, or ``default`` when none exist."""
        ...

    def set_attributes(self, attributes: Mapping[str, Any]) -> None:
        """Merge ``attributes`` into the local copy without persisting."""
        ...

    async def save_attributes(self) -> None:
        """Flush the local copy to the durable store."""
        ...

    async def delete_attributes(self) -> None:
        """Purge the caller's stored attributes."""
        ...


__all__ = ["PersistenceAdapterPort", "DeletablePersistenceAdapterPort", "AttributesGateway"]
