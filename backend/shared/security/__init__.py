"""
Security module: Authentication, password hashing, identifiers, rate limiting.
"""

from shared.security.auth import (
    sign_jwt,
    sign_access_token,
    verify_jwt,
    get_bearer_token,
    current_user_context,
)
from shared.security.password import hash_password, verify_password
from shared.security.identifiers import (
    generate_id,
    generate_share_token,
    generate_invite_code,
)
from shared.security.rate_limit import (
    limiter,
    rate_limit_exceeded_handler,
)

__all__ = [
    # auth
    "sign_jwt",
    "sign_access_token",
    "verify_jwt",
    "get_bearer_token",
    "current_user_context",
    # password
    "hash_password",
    "verify_password",
    # identifiers
    "generate_id",
    "generate_share_token",
    "generate_invite_code",
    # rate_limit
    "limiter",
    "rate_limit_exceeded_handler",
]
