"""
Domain Services - application layer.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from menu_api.services.domain import MenuService

    # In router
    service = MenuService(db, principal)
    menu = service.get_menu(menu_id)
"""

from .auth_service import AuthService
from .family_service import FamilyService
from .recipe_service import RecipeService
from .menu_service import MenuService

__all__ = [
    "AuthService",
    "FamilyService",
    "RecipeService",
    "MenuService",
]
