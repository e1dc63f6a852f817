"""
Services module for business logic.

- domain/: application services, one per aggregate - USE THESE
- permissions/: strategy pattern for scope-based access control
"""

from .base_service import BaseService
from .domain import AuthService, FamilyService, MenuService, RecipeService
from .permissions import Action, PermissionContext, Principal

__all__ = [
    "BaseService",
    "AuthService",
    "FamilyService",
    "MenuService",
    "RecipeService",
    "Action",
    "PermissionContext",
    "Principal",
]
