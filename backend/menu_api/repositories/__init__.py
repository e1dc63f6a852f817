"""
Repository Pattern implementation.
Centralizes data access and visibility scoping.

Usage:
    from menu_api.repositories import RecipeRepository, RecipeFilters

    repo = RecipeRepository(db)
    recipes = repo.find_all(RecipeFilters(user_id=user_id, group_ids=group_ids))
"""

from .base import BaseRepository, RepositoryFilters
from .user import UserRepository
from .family import FamilyRepository
from .recipe import RecipeRepository, RecipeFilters
from .menu import (
    MenuRepository,
    MenuFilters,
    MenuItemRepository,
    MenuShareRepository,
)

__all__ = [
    # Base
    "BaseRepository",
    "RepositoryFilters",
    # Accounts and groups
    "UserRepository",
    "FamilyRepository",
    # Recipes
    "RecipeRepository",
    "RecipeFilters",
    # Menus
    "MenuRepository",
    "MenuFilters",
    "MenuItemRepository",
    "MenuShareRepository",
]
