"""
Authentication utilities.
Issues and verifies the JWT bearer tokens that identify users.

Tokens carry the user's ``id`` and ``userName`` plus the standard
``iss``/``aud``/``iat``/``exp``/``jti`` claims. The claims are the sole
source of identity for protected routes.
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import jwt
from fastapi import Header

from shared.config.constants import ErrorMessages
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.utils.exceptions import AuthenticationError

logger = get_logger(__name__)

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"


def sign_jwt(
    payload: dict[str, Any],
    ttl_seconds: int | None = None,
    token_type: str = ACCESS_TOKEN_TYPE,
) -> str:
    """
    Sign a JWT token with the given payload.

    Args:
        payload: Claims to include in the token (id, userName).
        ttl_seconds: Token lifetime in seconds. Defaults to the access token expiry.
        token_type: Value of the ``type`` claim.

    Returns:
        Signed JWT token string.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_days * 24 * 60 * 60

    now = int(time.time())
    data = {
        **payload,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + ttl_seconds,
        "type": token_type,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(data, settings.jwt_secret, algorithm=JWT_ALGORITHM)


def sign_access_token(user_id: str, user_name: str) -> str:
    """Create the session token returned by register and login."""
    return sign_jwt({"id": user_id, "userName": user_name})


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Verify and decode a JWT token.

    Returns:
        Decoded token claims.

    Raises:
        AuthenticationError: If the token is invalid, expired, or lacks identity claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(ErrorMessages.TOKEN_EXPIRED)
    except jwt.InvalidTokenError as e:
        # Log the actual error, return a generic message to the client
        logger.warning("JWT validation failed", error=str(e))
        raise AuthenticationError(ErrorMessages.INVALID_TOKEN)

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise AuthenticationError(ErrorMessages.INVALID_TOKEN, reason="wrong token type")

    user_id = payload.get("id")
    user_name = payload.get("userName")
    if not isinstance(user_id, str) or not user_id or not isinstance(user_name, str):
        raise AuthenticationError(ErrorMessages.INVALID_TOKEN, reason="missing identity claims")

    return payload


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from Authorization header.

    Raises:
        AuthenticationError: If header is missing or malformed.
    """
    if not authorization:
        raise AuthenticationError("Missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError(
            "Invalid Authorization header format. Expected: Bearer <token>"
        )
    return token.strip()


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    FastAPI dependency to get the current user context from JWT.

    Usage:
        @router.get("/protected")
        def protected_endpoint(ctx: dict = Depends(current_user_context)):
            user_id = ctx["id"]
            ...

    Returns:
        Dict with: id, userName and the standard claims.
    """
    token = get_bearer_token(authorization)
    return verify_jwt(token)
