"""
HTTP routers, grouped by audience.

- auth/: registration, login, profile
- family/: family groups and membership
- content/: recipes, menus, menu items, shares
- public/: health and shared menus (no authentication)
"""

from .auth import router as auth_router
from .family import router as family_router
from .content import recipes_router, menus_router
from .public import health_router, shared_router

__all__ = [
    "auth_router",
    "family_router",
    "recipes_router",
    "menus_router",
    "health_router",
    "shared_router",
]
