"""
Recipe Repository - visibility-scoped data access for recipes.
"""

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Select, or_

from shared.config.constants import Limits, RecipeSort
from shared.utils.validators import escape_like_pattern
from menu_api.models import Recipe
from .base import BaseRepository, RepositoryFilters


@dataclass
class RecipeFilters(RepositoryFilters):
    """
    Filters specific to recipes.

    ``user_id`` and ``group_ids`` form the visibility scope and are always
    applied: own recipes plus recipes of the caller's family groups.
    """

    max_limit: int = Limits.MAX_RECIPE_PAGE_SIZE
    user_id: str = ""
    group_ids: list[str] = field(default_factory=list)
    category: str | None = None
    difficulty: str | None = None
    family_group_id: str | None = None
    sort: str = RecipeSort.LATEST


def visible_to(user_id: str, group_ids: list[str]):
    """WHERE clause: created by the user, or owned by one of their groups."""
    clauses = [Recipe.created_by == user_id]
    if group_ids:
        clauses.append(Recipe.family_group_id.in_(group_ids))
    return or_(*clauses)


class RecipeRepository(BaseRepository[Recipe]):

    @property
    def model(self) -> type[Recipe]:
        return Recipe

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Apply the visibility scope, then the optional listing filters."""
        if not isinstance(filters, RecipeFilters):
            filters = RecipeFilters(**filters.__dict__)

        query = query.where(visible_to(filters.user_id, filters.group_ids))

        if filters.category:
            query = query.where(Recipe.category == filters.category)

        if filters.difficulty:
            query = query.where(Recipe.difficulty == filters.difficulty)

        if filters.family_group_id:
            query = query.where(Recipe.family_group_id == filters.family_group_id)

        if filters.search:
            search_term = f"%{escape_like_pattern(filters.search)}%"
            query = query.where(
                or_(
                    Recipe.name.ilike(search_term, escape="\\"),
                    Recipe.description.ilike(search_term, escape="\\"),
                )
            )

        return query

    def _order_by(self, filters: RepositoryFilters) -> list[Any]:
        newest = [Recipe.created_at.desc(), Recipe.id.desc()]
        sort = getattr(filters, "sort", RecipeSort.LATEST)
        if sort == RecipeSort.POPULAR:
            return [Recipe.favorites.desc(), *newest]
        if sort == RecipeSort.RATING:
            return [Recipe.rating.desc(), *newest]
        return newest

    def find_visible(self, recipe_id: str, user_id: str, group_ids: list[str]) -> Recipe | None:
        """Find a recipe by id only if it is inside the visibility scope."""
        query = self._base_query().where(
            Recipe.id == recipe_id,
            visible_to(user_id, group_ids),
        )
        return self._db.scalar(query)
