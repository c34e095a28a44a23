"""Info and liveness routes reporting what the skill is serving."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from principles_skill.core.responses import SKILL_NAME
from principles_skill.services import ServiceContainer

from ..dependencies import get_service_container, require_healthcheck_token

router = APIRouter(tags=["health"])

Container = Annotated[ServiceContainer, Depends(get_service_container)]


@router.get("/")
def read_root(container: Container) -> dict[str, Any]:
    return {
        "skill": SKILL_NAME,
        "principles": len(container.corpus),
        "message": "POST request envelopes to /skill.",
    }


@router.get("/alive", dependencies=[Depends(require_healthcheck_token)])
async def alive_check(container: Container) -> dict[str, Any]:
    """Token-guarded liveness check; reports whether dispatch is wired."""
    persistence = container.persistence
    return {
        "status": "ok" if container.dispatcher is not None else "degraded",
        "principles": len(container.corpus),
        "persistence": type(persistence).__name__ if persistence is not None else None,
    }


__all__ = ["router"]
