"""
Content routers - recipes and menus.
- /recipes/* - Recipe CRUD scoped by ownership and family groups
- /menus/* - Menus, menu items and share links
"""

from .recipes import router as recipes_router
from .menus import router as menus_router

__all__ = [
    "recipes_router",
    "menus_router",
]
