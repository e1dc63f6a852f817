"""
The caller on whose behalf a service operation runs.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Principal:
    """
    Either a signed-in user (from JWT claims) or a guest holding a menu
    share token.

    Guests act under the share creator's id but are confined to the
    shared menu.
    """

    user_id: str
    user_name: str = ""
    is_guest: bool = False
    share_id: str | None = None
    share_menu_id: str | None = None
    allow_edit: bool = False

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "Principal":
        return cls(user_id=claims["id"], user_name=claims.get("userName", ""))

    @classmethod
    def guest(cls, share: Any) -> "Principal":
        """Build a guest principal from a validated MenuShare."""
        return cls(
            user_id=share.created_by,
            is_guest=True,
            share_id=share.id,
            share_menu_id=share.menu_id,
            allow_edit=share.allow_edit,
        )
