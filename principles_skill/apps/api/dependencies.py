"""Shared FastAPI dependencies for token validation and service access."""

import hmac
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Request, status

from principles_skill.core.config import settings
from principles_skill.services import ServiceContainer, runtime
from principles_skill.services.dispatcher import SkillDispatcher


async def require_healthcheck_token(
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
    x_admin_token: Annotated[Optional[str], Header(alias="X-Admin-Token")] = None,
) -> None:
    """Bearer/X-Admin-Token guard for the health check endpoint."""
    if not settings.ENABLE_HEALTHCHECK_AUTH:
        return
    expected = settings.HEALTHCHECK_API_TOKEN
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token not configured",
            headers={"WWW-Authenticate": "Bearer"},
        )

    provided = None
    if authorization and authorization.lower().startswith("bearer "):
        provided = authorization.split(" ", 1)[1].strip()
    elif x_admin_token:
        provided = x_admin_token.strip()

    if not provided:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not hmac.compare_digest(provided, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_service_container(request: Request) -> ServiceContainer:
    """Resolve the app's service container, falling back to the global registry."""
    services = getattr(request.app.state, "services", None)
    if isinstance(services, ServiceContainer):
        return services
    try:
        return runtime.get_services()
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Service container not configured",
        ) from exc


def get_dispatcher(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> SkillDispatcher:
    """Return the skill dispatcher bound to the active container."""
    if container.dispatcher is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Skill dispatcher is unavailable",
        )
    return container.dispatcher


__all__ = ["get_dispatcher", "get_service_container", "require_healthcheck_token"]
