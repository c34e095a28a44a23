"""Application bootstrap helpers for assembling the service container."""

from __future__ import annotations

from principles_skill.adapters.persistence import (
    InMemoryPersistenceAdapter,
    TinyDBPersistenceAdapter,
)
from principles_skill.core.config import Settings, settings
from principles_skill.core.ports import PersistenceAdapterPort
from principles_skill.services import ServiceContainer, build_default_services


def build_persistence_adapter(config: Settings = settings) -> PersistenceAdapterPort:
    """Return the attribute store selected by ``PERSISTENCE_BACKEND``."""

    if config.PERSISTENCE_BACKEND == "memory":
        return InMemoryPersistenceAdapter(
            table_name=config.PERSISTENCE_TABLE_NAME,
            partition_key=config.PERSISTENCE_PARTITION_KEY,
        )
    return TinyDBPersistenceAdapter.from_path(
        config.DATA_DIR / "db.json",
        table_name=config.PERSISTENCE_TABLE_NAME,
        partition_key=config.PERSISTENCE_PARTITION_KEY,
    )


def build_default_service_container(config: Settings = settings) -> ServiceContainer:
    """Return the default service container wired to production adapters."""

    return build_default_services(
        persistence_port=build_persistence_adapter(config),
        skill_id=config.SKILL_ID,
    )


__all__ = ["build_persistence_adapter", "build_default_service_container"]
