"""
Password hashing utilities using bcrypt.

Passwords are first keyed with HMAC-SHA256 using the application secret
(a pepper), then hashed with bcrypt. The HMAC digest is 64 hex characters,
which also keeps long passwords under bcrypt's 72 byte input limit.
"""

import hashlib
import hmac

import bcrypt

from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def _pepper(password: str, secret: str | None = None) -> bytes:
    key = (secret or settings.jwt_secret).encode("utf-8")
    return hmac.new(key, password.encode("utf-8"), hashlib.sha256).hexdigest().encode("ascii")


def hash_password(password: str, rounds: int = 12) -> str:
    """
    Hash a password using the keyed HMAC step followed by bcrypt.

    Args:
        password: Plain text password to hash.
        rounds: bcrypt cost factor.

    Returns:
        Hashed password string (includes salt and algorithm info).

    Example:
        hashed = hash_password("mypassword123")
        # Returns something like: $2b$12$...
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_pepper(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Non-bcrypt hashes are rejected outright.
    """
    if not hashed_password or not hashed_password.startswith(BCRYPT_PREFIXES):
        logger.warning("SECURITY: Non-bcrypt password hash rejected")
        return False

    return bcrypt.checkpw(_pepper(plain_password), hashed_password.encode("utf-8"))
