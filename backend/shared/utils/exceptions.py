"""
Centralized HTTP exceptions for consistent error handling.

Every exception logs itself on construction and is rendered by the
application's exception handlers as ``{"message": ..., "code": ...}``.

Usage:
    from shared.utils.exceptions import NotFoundError, ForbiddenError, ValidationError

    raise NotFoundError("Menu", menu_id)
    raise ForbiddenError("modify this menu")
    raise ValidationError("Start date must be before or equal to end date")
"""

from fastapi import HTTPException, status
from typing import Any

from shared.config.constants import ErrorMessages
from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found, or outside the caller's visibility (404).

    The id goes to the log only, never into the response.

    Usage:
        raise NotFoundError("Recipe", recipe_id)
    """

    def __init__(self, entity: str, entity_id: str | None = None, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{entity} not found",
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 401 Unauthorized Errors
# =============================================================================


class AuthenticationError(AppException):
    """
    Missing or invalid credentials (401).

    Usage:
        raise AuthenticationError(ErrorMessages.INVALID_CREDENTIALS)
    """

    def __init__(self, detail: str = ErrorMessages.NOT_AUTHENTICATED, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            log_level="warning",
            **log_context,
        )


# =============================================================================
# 403 Forbidden Errors
# =============================================================================


class ForbiddenError(AppException):
    """
    Authorization/permission error (403).

    Usage:
        raise ForbiddenError("delete this share")
        raise ForbiddenError(detail=ErrorMessages.SHARE_EXPIRED, share_id=share.id)
    """

    def __init__(
        self,
        action: str | None = None,
        detail: str | None = None,
        **log_context: Any,
    ):
        if detail is None:
            detail = f"Not authorized to {action}" if action else "Access denied"

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            log_level="warning",
            action=action,
            **log_context,
        )


class GroupMembershipError(ForbiddenError):
    """User is not a member of the family group."""

    def __init__(self, family_group_id: str | None = None, **log_context: Any):
        super().__init__(
            detail=ErrorMessages.NOT_GROUP_MEMBER,
            family_group_id=family_group_id,
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError(ErrorMessages.DATE_OUT_OF_RANGE, date=str(item_date))
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class DateRangeError(ValidationError):
    """Start date after end date, or item date outside the menu range."""

    def __init__(self, detail: str = ErrorMessages.INVALID_DATE_RANGE, **log_context: Any):
        super().__init__(detail, **log_context)


class DuplicateEntityError(ValidationError):
    """Entity already exists."""

    def __init__(self, entity: str, detail: str | None = None, **log_context: Any):
        super().__init__(detail or f"{entity} already exists", entity=entity, **log_context)


# =============================================================================
# 500 Internal Server Errors
# =============================================================================


class InternalError(AppException):
    """
    Internal server error (500).

    Usage:
        raise InternalError("Failed to build shared menu", share_id=share_id)
    """

    def __init__(self, detail: str = "Internal server error", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            log_level="error",
            **log_context,
        )


class DatabaseError(InternalError):
    """Database operation failed."""

    def __init__(self, operation: str, **log_context: Any):
        detail = f"Database error during {operation}. Please try again."
        super().__init__(detail, operation=operation, **log_context)


# =============================================================================
# Rate Limiting Errors
# =============================================================================


class RateLimitError(AppException):
    """Rate limit exceeded (429)."""

    def __init__(
        self,
        retry_after: int | None = None,
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        headers = dict(headers or {})
        if retry_after is not None:
            headers.setdefault("Retry-After", str(retry_after))

        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=ErrorMessages.RATE_LIMIT_EXCEEDED,
            log_level="warning",
            headers=headers or None,
            retry_after=retry_after,
            **log_context,
        )
