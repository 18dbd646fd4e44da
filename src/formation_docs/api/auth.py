"""API authentication: a single static shared secret sent as a Bearer token."""

from __future__ import annotations

import logging
import secrets
from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

if TYPE_CHECKING:
    from formation_docs.core.config import AuthConfig

log = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


async def require_auth(
    request: Request,
    bearer: HTTPAuthorizationCredentials | None = Security(_bearer_scheme),
) -> None:
    """Reject the request unless it carries ``Authorization: Bearer <admin key>``."""
    config: AuthConfig = request.app.state.settings.auth

    if not config.enabled:
        return

    if bearer and config.admin_key and secrets.compare_digest(
        bearer.credentials.encode("utf-8"), config.admin_key.encode("utf-8")
    ):
        return

    log.warning("Rejected unauthenticated request to %s", request.url.path)
    raise HTTPException(
        status_code=401,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )
