"""
Authorization rules for recipes, menus and shares.

Usage:
    from menu_api.services.permissions import PermissionContext, Principal, Action

    ctx = PermissionContext(db, Principal.from_claims(claims))
    ctx.require(Action.WRITE, menu)
"""

from .principal import Principal
from .strategies import (
    Action,
    Scoped,
    PermissionStrategy,
    MemberStrategy,
    GuestShareStrategy,
    get_strategy,
)
from .context import PermissionContext

__all__ = [
    "Principal",
    "Action",
    "Scoped",
    "PermissionStrategy",
    "MemberStrategy",
    "GuestShareStrategy",
    "get_strategy",
    "PermissionContext",
]
