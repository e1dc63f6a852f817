"""
Principal resolution for routers.

Usage:
    @router.get("/recipes")
    def list_recipes(
        principal: Principal = Depends(current_principal),
        db: Session = Depends(get_db),
    ):
        return RecipeService(db, principal).list_recipes()
"""

from typing import Any

from fastapi import Depends, Header, Request
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from shared.config.constants import ErrorMessages
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context, get_bearer_token, verify_jwt
from shared.utils.exceptions import AuthenticationError
from menu_api.services.domain import MenuService
from menu_api.services.permissions import Principal


def client_ip(request: Request) -> str:
    """Client address as seen by the rate limiter."""
    return get_remote_address(request)


def current_principal(ctx: dict[str, Any] = Depends(current_user_context)) -> Principal:
    """Signed-in user from the bearer token."""
    return Principal.from_claims(ctx)


def menu_principal(
    menu_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    share_token: str | None = Header(default=None, alias="X-Share-Token"),
    db: Session = Depends(get_db),
) -> Principal:
    """
    Principal for menu item endpoints.

    A present ``X-Share-Token`` header takes precedence over the bearer token
    and must match an active share of this very menu.
    """
    if share_token is not None:
        share = MenuService(db).validate_share_token(menu_id, share_token)
        if share is None:
            raise AuthenticationError(ErrorMessages.INVALID_SHARE_TOKEN, menu_id=menu_id)
        return Principal.guest(share)

    return Principal.from_claims(verify_jwt(get_bearer_token(authorization)))
