"""
Random identifier generation.

All entity ids and share secrets come from the `secrets` module.
"""

import secrets

# 16 bytes -> 22 URL-safe characters
ID_BYTES = 16
# Share tokens are bearer secrets; keep them well above guessable range
SHARE_TOKEN_BYTES = 32
INVITE_CODE_BYTES = 4


def generate_id() -> str:
    """Generate a collision-resistant entity id."""
    return secrets.token_urlsafe(ID_BYTES)


def generate_share_token() -> str:
    """Generate a high-entropy menu share token, distinct from any id."""
    return secrets.token_urlsafe(SHARE_TOKEN_BYTES)


def generate_invite_code() -> str:
    """Generate an 8 character uppercase family invite code."""
    return secrets.token_hex(INVITE_CODE_BYTES).upper()
