"""Application service layer for skill request handling."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from principles_skill.core.corpus import DEFAULT_CORPUS, Corpus
from principles_skill.core.ports import PersistenceAdapterPort

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from .dispatcher import SkillDispatcher


@dataclass(slots=True)
class ServiceContainer:
    """Aggregate of application-level services available to the outer surfaces."""

    persistence: Optional[PersistenceAdapterPort] = None
    dispatcher: Optional["SkillDispatcher"] = None
    corpus: Corpus = DEFAULT_CORPUS
    skill_id: Optional[str] = None


def build_default_services(
    *,
    persistence_port: PersistenceAdapterPort,
    corpus: Corpus = DEFAULT_CORPUS,
    skill_id: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> ServiceContainer:
    """Return a service container with the default dispatcher wiring."""

    from .dispatcher import build_default_dispatcher  # pylint: disable=import-outside-toplevel

    dispatcher = build_default_dispatcher(persistence_port, corpus=corpus, rng=rng)
    return ServiceContainer(
        persistence=persistence_port,
        dispatcher=dispatcher,
        corpus=corpus,
        skill_id=skill_id,
    )


__all__ = ["ServiceContainer", "build_default_services"]
