"""Single shared API key guarding the /goals endpoints.

When GOALPULSE_API_KEY is unset every request passes. Otherwise the key must
arrive as an X-API-Key header or as an ``Authorization: Bearer`` token.
"""

from __future__ import annotations

import hmac

import structlog
from fastapi import Header, HTTPException, status

from goalpulse.config import settings

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "bearer "
CHALLENGE = {"WWW-Authenticate": 'Bearer realm="goalpulse"'}


def presented_key(x_api_key: str | None, authorization: str | None) -> str | None:
    """X-API-Key wins; the Bearer scheme name is case-insensitive."""
    if x_api_key:
        return x_api_key.strip()
    if authorization and authorization[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX:
        return authorization[len(BEARER_PREFIX):].strip() or None
    return None


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    expected = settings.goalpulse_api_key
    if not expected:
        return ""

    key = presented_key(x_api_key, authorization)
    if key is None:
        logger.info("goalpulse_auth_rejected", reason="missing")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="GoalPulse API key required",
            headers=CHALLENGE,
        )
    if not hmac.compare_digest(key.encode(), expected.encode()):
        logger.info("goalpulse_auth_rejected", reason="mismatch")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="GoalPulse API key rejected",
            headers=CHALLENGE,
        )
    return key
