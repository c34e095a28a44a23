"""Tests for service container assembly."""

from __future__ import annotations

from pathlib import Path

from principles_skill.adapters.persistence import (
    InMemoryPersistenceAdapter,
    TinyDBPersistenceAdapter,
)
from principles_skill.bootstrap import build_default_service_container, build_persistence_adapter
from principles_skill.core.config import Settings
from principles_skill.core.corpus import DEFAULT_CORPUS


def test_tinydb_backend_writes_under_data_dir(tmp_path: Path) -> None:
    config = Settings(
        DATA_DIR=tmp_path / "data",
        PERSISTENCE_BACKEND="tinydb",
        PERSISTENCE_TABLE_NAME="users",
    )

    adapter = build_persistence_adapter(config)

    assert isinstance(adapter, TinyDBPersistenceAdapter)
    assert adapter.table_name == "users"
    assert (tmp_path / "data" / "db.json").exists()
    adapter.close()


def test_memory_backend_container(tmp_path: Path) -> None:
    config = Settings(DATA_DIR=tmp_path, PERSISTENCE_BACKEND="memory", SKILL_ID="skill-1")

    container = build_default_service_container(config)

    assert isinstance(container.persistence, InMemoryPersistenceAdapter)
    assert container.dispatcher is not None
    assert container.corpus is DEFAULT_CORPUS
    assert container.skill_id == "skill-1"
