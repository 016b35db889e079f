from fastapi import Header
from typing import Literal

from app.domain.services.constants import DEFAULT_ACTOR

async def resolve_version(
    x_api_version: str | None = Header(default=None),
) -> Literal["v1","v2"]:
    """
    Dependency to resolve API version from request headers.
    - Explicit 'X-API-Version' header wins (values: '1', 'v1', '2', 'v2').
    - Defaults to 'v1' if nothing matches.
    """
    if x_api_version in {"1","v1"}: return "v1"
    if x_api_version in {"2","v2"}: return "v2"
    return "v1"

async def resolve_actor(
    x_admin_user: str | None = Header(default=None),
) -> str:
    """
    Identity recorded in the order status history ('X-Admin-User' header).
    Authentication happens upstream; this only names the caller.
    """
    actor = (x_admin_user or "").strip()
    return actor or DEFAULT_ACTOR
