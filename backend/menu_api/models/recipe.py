"""
Recipe Model.

Ingredients, steps and tags are JSON lists stored as text; see
shared.utils.validators.parse_json_list for how they are read back.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import ID_LENGTH, Base, TimestampMixin, id_column


class Recipe(TimestampMixin, Base):
    """
    A recipe owned by its creator, optionally shared with a family group.

    With a family group it is visible to every member of the group; without
    one only to its creator.
    """

    __tablename__ = "recipes"

    id: Mapped[str] = id_column()
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    difficulty: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    prep_time: Mapped[Optional[int]] = mapped_column(Integer)  # minutes
    cook_time: Mapped[Optional[int]] = mapped_column(Integer)  # minutes
    servings: Mapped[Optional[int]] = mapped_column(Integer)
    ingredients: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    steps: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    tags: Mapped[Optional[str]] = mapped_column(Text, default="[]")
    # Server-maintained counters, never written from request payloads
    favorites: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    created_by: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    family_group_id: Mapped[Optional[str]] = mapped_column(
        String(ID_LENGTH), ForeignKey("family_groups.id", ondelete="CASCADE"), index=True
    )

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, name='{self.name}')>"
