"""Skill endpoint receiving request envelopes from the voice platform."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from principles_skill.core.exceptions import SkillIdMismatchError
from principles_skill.core.logging import get_logger
from principles_skill.services import ServiceContainer
from principles_skill.services.dispatcher import SkillDispatcher

from ..dependencies import get_dispatcher, get_service_container

router = APIRouter(tags=["skill"])
logger = get_logger(__name__)


@router.post("/skill")
async def handle_skill_request(
    event: Annotated[Any, Body(...)],
    dispatcher: Annotated[SkillDispatcher, Depends(get_dispatcher)],
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> dict[str, Any]:
    """Dispatch one envelope and return the platform response payload."""
    try:
        return await dispatcher.invoke(event, skill_id=container.skill_id)
    except SkillIdMismatchError as exc:
        logger.warning("Rejected envelope for another skill: %s", exc)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except ValueError as exc:
        logger.warning("Rejected malformed envelope: %s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


__all__ = ["router"]
