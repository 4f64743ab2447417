"""
Authentication dependencies for FastAPI.

This module provides the access gate that protects every /api route.
"""

import logging
from typing import Optional
from fastapi import Header
from backend.app.core.exceptions import AuthMissingError, AuthInvalidError
from backend.app.core.jwt import decode_access_token
from backend.app.core.security import is_operator

logger = logging.getLogger("ledger.auth")

BEARER_PREFIX = "Bearer "


def extract_token(authorization: Optional[str]) -> str:
    """
    Pull the raw token out of an Authorization header value.

    Both "Bearer <token>" and a bare "<token>" are accepted.

    Raises:
        AuthMissingError: header absent, or a Bearer prefix with nothing after it
    """
    if not authorization:
        raise AuthMissingError()

    if authorization.startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
    else:
        token = authorization.strip()

    if not token:
        raise AuthMissingError("Invalid token format")
    return token


async def get_current_user(
    authorization: Optional[str] = Header(default=None)
) -> dict:
    """
    FastAPI dependency for JWT authentication.

    Returns:
        Decoded token payload

    Raises:
        AuthMissingError: 401 when no credential is presented
        AuthInvalidError: 403 when the token is malformed, expired or badly signed
    """
    token = extract_token(authorization)

    payload = decode_access_token(token)
    if payload is None:
        logger.warning("Rejected token: decode failed")
        raise AuthInvalidError()

    if not is_operator(payload.get("user")):
        logger.warning("Rejected token: unknown user claim")
        raise AuthInvalidError()

    return payload
