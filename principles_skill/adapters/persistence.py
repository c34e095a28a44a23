"""Attribute persistence adapters backed by TinyDB.

One document per user holds the partition key and an ``attributes`` mapping.
TinyDB calls block, so they run in a worker thread to keep the dispatch
loop responsive.
"""

from __future__ import annotations

import asyncio
import copy
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional, TypeVar, cast

from tinydb import Query, TinyDB
from tinydb.storages import MemoryStorage

from principles_skill.core.exceptions import PersistenceError
from principles_skill.core.logging import get_logger
from principles_skill.core.ports import DeletablePersistenceAdapterPort

# Provide a QueryLike alias for static checkers; at runtime use Any.
if TYPE_CHECKING:  # pragma: no cover - typing only
    from tinydb.queries import QueryLike  # type: ignore
else:
    QueryLike = Any  # type: ignore[misc,assignment]

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_TABLE_NAME = "principles"
DEFAULT_PARTITION_KEY = "id"
ATTRIBUTES_FIELD = "attributes"


class TinyDBPersistenceAdapter(DeletablePersistenceAdapterPort):
    """Store per-user attributes in a TinyDB table."""

    def __init__(
        self,
        db: TinyDB,
        *,
        table_name: str = DEFAULT_TABLE_NAME,
        partition_key: str = DEFAULT_PARTITION_KEY,
    ) -> None:
        self._db = db
        self._table_name = table_name
        self._partition_key = partition_key
        self._lock = threading.Lock()

    @classmethod
    def from_path(
        cls,
        path: Path,
        *,
        table_name: str = DEFAULT_TABLE_NAME,
        partition_key: str = DEFAULT_PARTITION_KEY,
    ) -> "TinyDBPersistenceAdapter":
        """Open (or create) a JSON-file database at ``path``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        return cls(TinyDB(str(path)), table_name=table_name, partition_key=partition_key)

    @property
    def table_name(self) -> str:
        return self._table_name

    def _cond(self, user_id: str) -> QueryLike:
        q = Query()
        return cast(QueryLike, q[self._partition_key] == user_id)

    async def _run(self, operation: str, user_id: str, func: Callable[[], T]) -> T:
        def _locked() -> T:
            with self._lock:
                return func()

        try:
            return await asyncio.to_thread(_locked)
        except Exception as exc:  # TinyDB surfaces storage failures as arbitrary errors
            logger.error(
                "persistence %s failed",
                operation,
                extra={"event": "persistence_error", "table": self._table_name},
            )
            raise PersistenceError(f"could not {operation} attributes for {user_id}") from exc

    async def get_attributes(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Return a copy of the stored attributes for ``user_id``."""

        def _get() -> Optional[Dict[str, Any]]:
            raw = self._db.table(self._table_name).get(self._cond(user_id))
            doc = cast(Optional[Dict[str, Any]], raw)
            if not doc:
                return None
            attributes = doc.get(ATTRIBUTES_FIELD)
            return copy.deepcopy(attributes) if isinstance(attributes, dict) else {}

        return await self._run("read", user_id, _get)

    async def save_attributes(self, user_id: str, attributes: Mapping[str, Any]) -> None:
        """Upsert the attributes document for ``user_id``."""
        document = {
            self._partition_key: user_id,
            ATTRIBUTES_FIELD: copy.deepcopy(dict(attributes)),
        }

        def _save() -> None:
            self._db.table(self._table_name).upsert(document, self._cond(user_id))

        await self._run("save", user_id, _save)

    async def delete_attributes(self, user_id: str) -> None:
        """Remove the attributes document for ``user_id`` if present."""

        def _delete() -> None:
            self._db.table(self._table_name).remove(self._cond(user_id))

        await self._run("delete", user_id, _delete)

    def close(self) -> None:
        """Release the underlying storage handle."""
        self._db.close()


class InMemoryPersistenceAdapter(TinyDBPersistenceAdapter):
    """Volatile adapter for tests and local runs."""

    def __init__(
        self,
        *,
        table_name: str = DEFAULT_TABLE_NAME,
        partition_key: str = DEFAULT_PARTITION_KEY,
    ) -> None:
        super().__init__(
            TinyDB(storage=MemoryStorage), table_name=table_name, partition_key=partition_key
        )


__all__ = [
    "TinyDBPersistenceAdapter",
    "InMemoryPersistenceAdapter",
    "ATTRIBUTES_FIELD",
    "DEFAULT_TABLE_NAME",
    "DEFAULT_PARTITION_KEY",
]
