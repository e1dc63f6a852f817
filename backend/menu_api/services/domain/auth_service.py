"""
Auth Service - account registration, login and profile.
"""

from __future__ import annotations

from shared.config.constants import ErrorMessages
from shared.config.logging import audit_auth_event, get_logger
from shared.security.auth import sign_access_token
from shared.security.password import hash_password, verify_password
from shared.utils.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    NotFoundError,
)
from shared.utils.schemas import LoginRequest, RegisterRequest, TokenResponse, UserProfile

from menu_api.models import User
from menu_api.repositories import UserRepository
from menu_api.services.base_service import BaseService

logger = get_logger(__name__)


class AuthService(BaseService):
    """Issues session tokens; needs no principal except for profile reads."""

    def __init__(self, db, principal=None):
        super().__init__(db, principal)
        self._users = UserRepository(db)

    def register(self, data: RegisterRequest, ip_address: str | None = None) -> TokenResponse:
        """Create an account and sign the caller in. User names are unique."""
        if self._users.find_by_user_name(data.user_name) is not None:
            audit_auth_event(
                "REGISTER", user_name=data.user_name, success=False,
                reason="duplicate user name", ip_address=ip_address,
            )
            raise DuplicateEntityError("User", detail=ErrorMessages.USER_EXISTS)

        user = self._users.save(
            User(
                user_name=data.user_name,
                name=data.name,
                password_hash=hash_password(data.password),
            )
        )
        self._commit(
            "register user",
            duplicate_entity="User",
            duplicate_detail=ErrorMessages.USER_EXISTS,
            user_name=data.user_name,
        )

        audit_auth_event("REGISTER", user_name=user.user_name, user_id=user.id, ip_address=ip_address)
        return TokenResponse(token=sign_access_token(user.id, user.user_name))

    def login(self, data: LoginRequest, ip_address: str | None = None) -> TokenResponse:
        """
        Exchange credentials for a session token.

        Unknown user and wrong password are indistinguishable to the caller.
        """
        user = self._users.find_by_user_name(data.user_name)
        if user is None or not verify_password(data.password, user.password_hash):
            audit_auth_event(
                "LOGIN", user_name=data.user_name, success=False,
                reason="user not found" if user is None else "wrong password",
                ip_address=ip_address,
            )
            raise AuthenticationError(ErrorMessages.INVALID_CREDENTIALS)

        audit_auth_event("LOGIN", user_name=user.user_name, user_id=user.id, ip_address=ip_address)
        return TokenResponse(token=sign_access_token(user.id, user.user_name))

    def get_profile(self) -> UserProfile:
        user = self._users.find_by_id(self.user_id)
        if user is None:
            raise NotFoundError("User", self.user_id)
        return UserProfile.model_validate(user)
