"""Synchronous request-to-response entry point for function-style hosts."""

from __future__ import annotations

import asyncio
from typing import Any, Mapping

from principles_skill.bootstrap import build_default_service_container
from principles_skill.services import ServiceContainer, runtime


def _services() -> ServiceContainer:
    if not runtime.has_services():
        runtime.set_services(build_default_service_container())
    return runtime.get_services()


def invoke(event: Mapping[str, Any], services: ServiceContainer | None = None) -> dict[str, Any]:
    """Dispatch one platform event and return the serialized response envelope."""

    container = services or _services()
    if container.dispatcher is None:
        raise RuntimeError("Skill dispatcher has not been configured.")
    return asyncio.run(container.dispatcher.invoke(event, skill_id=container.skill_id))


def handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
    """Function-host handler signature: ``handler(event, context)``."""

    del context
    return invoke(event)


__all__ = ["invoke", "handler"]
