"""Request authentication helpers.

Two unrelated credentials pass through the HTTP surface:

* the inter-service ``SERVICE_AUTH_TOKEN`` guarding ``/execute`` and
  ``/manifest`` (``Authorization: Bearer <token>``), and
* the caller's GitHub credential, forwarded untouched to the GitHub API.
  It arrives in ``X-GITHUB-TOKEN``; a bare ``Authorization`` header
  (``Bearer <t>`` or ``token <t>``) is accepted on ``/mcp`` when that header
  is absent.

Usage in a FastAPI app::

    from shared.auth import get_github_token, require_service_auth

    @app.post("/execute")
    async def execute(call: ToolCall, _=Depends(require_service_auth)):
        ...
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog
from fastapi import HTTPException, Request

from shared.config import get_settings

logger = structlog.get_logger()

GITHUB_TOKEN_HEADER = "x-github-token"


def _strip_scheme(value: str) -> str | None:
    for scheme in ("Bearer ", "token "):
        if value.startswith(scheme):
            return value[len(scheme):].strip() or None
    return None


def github_token_from_headers(headers: Mapping[str, str], allow_authorization: bool = False) -> str | None:
    """Return the request-scoped GitHub credential, if any.

    ``headers`` may be any mapping; keys are compared case-insensitively.
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    token = (lowered.get(GITHUB_TOKEN_HEADER) or "").strip()
    if token:
        return token
    if allow_authorization:
        return _strip_scheme(lowered.get("authorization", ""))
    return None


async def get_github_token(request: Request) -> str | None:
    """FastAPI dependency: GitHub credential from ``X-GITHUB-TOKEN`` only."""
    return github_token_from_headers(request.headers)


async def require_service_auth(request: Request) -> None:
    """FastAPI dependency that validates the inter-service auth token.

    Raises 401 if the token is missing or incorrect.
    Skips validation when ``service_auth_token`` is empty (dev mode).
    """
    settings = get_settings()
    expected = settings.service_auth_token
    if not expected:
        logger.debug("service_auth_disabled", path=request.url.path)
        return

    auth_header = request.headers.get("authorization", "")
    if not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing service auth token")

    token = auth_header[7:]  # strip "Bearer "
    if token != expected:
        logger.warning(
            "service_auth_failed",
            path=request.url.path,
            remote=request.client.host if request.client else "unknown",
        )
        raise HTTPException(status_code=401, detail="Invalid service auth token")
