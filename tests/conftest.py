"""Pytest configuration: ensure env vars and import path are set early.

This runs before any tests, so modules can import without local path hacks.
Also load .env before setting defaults so local overrides are honored.
"""
from __future__ import annotations

import os
import random
import sys
import tempfile
from pathlib import Path
from typing import Any, Callable

import pytest
from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

load_dotenv(override=False)

os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="principles-skill-"))
os.environ.setdefault("PERSISTENCE_BACKEND", "memory")
os.environ.setdefault("HEALTHCHECK_API_TOKEN", "test")
os.environ.setdefault("SKILL_ID", "amzn1.ask.skill.test")

# pylint: disable=wrong-import-position
from principles_skill.adapters.persistence import InMemoryPersistenceAdapter  # noqa: E402
from principles_skill.core.corpus import Corpus, Principle  # noqa: E402
from principles_skill.services.dispatcher import (  # noqa: E402
    SkillDispatcher,
    build_default_dispatcher,
)

TEST_SKILL_ID = "amzn1.ask.skill.test"
EventFactory = Callable[..., dict[str, Any]]


def build_event(
    request_type: str = "IntentRequest",
    *,
    intent: str | None = None,
    slots: dict[str, str] | None = None,
    user_id: str = "user-1",
    application_id: str = TEST_SKILL_ID,
    **request_fields: Any,
) -> dict[str, Any]:
    """Return a platform request envelope shaped like the real payloads."""
    request: dict[str, Any] = {
        "type": request_type,
        "requestId": "amzn1.echo-api.request.test",
        "timestamp": "2024-01-01T00:00:00Z",
        "locale": "en-US",
        **request_fields,
    }
    if intent is not None:
        request["intent"] = {
            "name": intent,
            "confirmationStatus": "NONE",
            "slots": {
                name: {"name": name, "value": value, "confirmationStatus": "NONE"}
                for name, value in (slots or {}).items()
            },
        }
    return {
        "version": "1.0",
        "session": {
            "new": True,
            "sessionId": "amzn1.echo-api.session.test",
            "application": {"applicationId": application_id},
            "user": {"userId": user_id},
        },
        "context": {
            "System": {
                "application": {"applicationId": application_id},
                "user": {"userId": user_id},
            }
        },
        "request": request,
    }


@pytest.fixture(name="make_event")
def _make_event() -> EventFactory:
    return build_event


@pytest.fixture(name="store")
def _store() -> InMemoryPersistenceAdapter:
    return InMemoryPersistenceAdapter()


@pytest.fixture(name="two_corpus")
def _two_corpus() -> Corpus:
    return Corpus(
        [
            Principle(name="Integrity", simple="Be honest.", extended="<p>Always.</p>"),
            Principle(name="Kindness", simple="Be kind.", extended="<p>To everyone.</p>"),
        ]
    )


@pytest.fixture(name="dispatcher")
def _dispatcher(store: InMemoryPersistenceAdapter) -> SkillDispatcher:
    return build_default_dispatcher(store, rng=random.Random(1234))
