"""
SQLAlchemy ORM models.

Importing this package registers every table on ``Base.metadata``.
"""

from .base import Base, TimestampMixin, as_utc, utcnow
from .user import User
from .family import FamilyGroup, FamilyMember
from .recipe import Recipe
from .menu import Menu, MenuItem, MenuShare

__all__ = [
    "Base",
    "TimestampMixin",
    "as_utc",
    "utcnow",
    "User",
    "FamilyGroup",
    "FamilyMember",
    "Recipe",
    "Menu",
    "MenuItem",
    "MenuShare",
]
