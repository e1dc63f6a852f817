"""
Authentication router.
Handles registration, login and profile lookup.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.rate_limit import limiter
from shared.utils.schemas import LoginRequest, RegisterRequest, TokenResponse, UserProfile
from menu_api.routers._common import client_ip, current_principal
from menu_api.services.domain import AuthService
from menu_api.services.permissions import Principal


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.register_rate_limit)
def register(
    request: Request,
    response: Response,
    body: RegisterRequest,
    db: Session = Depends(get_db),
) -> TokenResponse:
    """Create an account and return a session token."""
    return AuthService(db).register(body, ip_address=client_ip(request))


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.login_rate_limit)
def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    db: Session = Depends(get_db),
) -> TokenResponse:
    """
    Exchange credentials for a session token.

    Unknown user names and wrong passwords get the same 401 response.
    """
    return AuthService(db).login(body, ip_address=client_ip(request))


@router.get("/me", response_model=UserProfile)
def me(
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> UserProfile:
    return AuthService(db, principal).get_profile()
