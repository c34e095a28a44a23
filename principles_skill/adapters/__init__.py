"""Infrastructure adapter exports."""

from principles_skill.core.exceptions import PersistenceError  # noqa: F401

from .persistence import InMemoryPersistenceAdapter, TinyDBPersistenceAdapter

__all__ = [
    "InMemoryPersistenceAdapter",
    "TinyDBPersistenceAdapter",
    "PersistenceError",
]
