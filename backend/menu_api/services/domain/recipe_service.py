"""
Recipe Service - recipe CRUD scoped by ownership and family groups.

Every lookup goes through the visibility filter (own recipes plus the
caller's groups' recipes); a recipe outside it is reported as not found.
"""

from __future__ import annotations

from shared.config.logging import get_logger
from shared.utils.exceptions import NotFoundError
from shared.utils.schemas import (
    RecipeCreate,
    RecipeOutput,
    RecipeUpdate,
)
from shared.utils.validators import parse_json_list, serialize_json_list

from menu_api.models import Recipe
from menu_api.repositories import RecipeFilters, RecipeRepository
from menu_api.services.base_service import BaseService
from menu_api.services.permissions import Action

logger = get_logger(__name__)

# Stored as JSON text, exposed as lists
JSON_FIELDS = ("ingredients", "steps", "tags")


class RecipeService(BaseService):

    def __init__(self, db, principal):
        super().__init__(db, principal)
        self._recipes = RecipeRepository(db)
        self._entity_name = "Recipe"

    # =========================================================================
    # Queries
    # =========================================================================

    def list_recipes(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        category: str | None = None,
        difficulty: str | None = None,
        family_group_id: str | None = None,
        search: str | None = None,
        sort: str = "LATEST",
    ) -> list[RecipeOutput]:
        """One page of visible recipes; ``page`` is 1-indexed."""
        self.permissions.require_user("list recipes")
        filters = RecipeFilters(
            limit=limit,
            offset=(max(page, 1) - 1) * limit,
            search=search,
            user_id=self.user_id,
            group_ids=self.permissions.group_ids,
            category=category,
            difficulty=difficulty,
            family_group_id=family_group_id,
            sort=sort,
        )
        return [self._to_output(r) for r in self._recipes.find_all(filters)]

    def get_recipe(self, recipe_id: str) -> RecipeOutput:
        return self._to_output(self._get_visible(recipe_id))

    # =========================================================================
    # Commands
    # =========================================================================

    def create_recipe(self, data: RecipeCreate) -> RecipeOutput:
        """Create a recipe, personal or owned by one of the caller's groups."""
        self.permissions.require_user("create recipes")
        if data.family_group_id:
            self.permissions.require_member(data.family_group_id)

        values = data.model_dump(exclude=set(JSON_FIELDS))
        recipe = Recipe(
            **values,
            **{
                field_name: serialize_json_list(value)
                for field_name, value in data.model_dump(include=set(JSON_FIELDS), by_alias=True).items()
            },
            created_by=self.user_id,
        )
        self._recipes.save(recipe)
        self._commit("create recipe", user_id=self.user_id)

        logger.info("Recipe created", recipe_id=recipe.id, user_id=self.user_id)
        return self._to_output(recipe)

    def update_recipe(self, recipe_id: str, data: RecipeUpdate) -> RecipeOutput:
        """Apply only the fields present in ``data``."""
        recipe = self._get_visible(recipe_id)
        self.permissions.require(Action.WRITE, recipe)

        changes = data.model_dump(exclude_unset=True, exclude=set(JSON_FIELDS))
        if "family_group_id" in changes:
            self.permissions.require_move(recipe, changes["family_group_id"])

        for field_name, value in changes.items():
            setattr(recipe, field_name, value)

        # JSON lists keep the wire (camelCase) keys, as on create
        json_changes = data.model_dump(include=set(JSON_FIELDS), exclude_unset=True, by_alias=True)
        for field_name, value in json_changes.items():
            setattr(recipe, field_name, serialize_json_list(value))

        self._commit("update recipe", recipe_id=recipe_id)

        logger.info("Recipe updated", recipe_id=recipe_id, fields=sorted([*changes, *json_changes]))
        return self._to_output(recipe)

    def delete_recipe(self, recipe_id: str) -> None:
        recipe = self._get_visible(recipe_id)
        self.permissions.require(Action.WRITE, recipe)

        self._recipes.delete(recipe)
        self._commit("delete recipe", recipe_id=recipe_id)

        logger.info("Recipe deleted", recipe_id=recipe_id, user_id=self.user_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _get_visible(self, recipe_id: str) -> Recipe:
        self.permissions.require_user("access recipes")
        recipe = self._recipes.find_visible(recipe_id, self.user_id, self.permissions.group_ids)
        if recipe is None:
            raise NotFoundError(self._entity_name, recipe_id)
        return recipe

    @staticmethod
    def _to_output(recipe: Recipe) -> RecipeOutput:
        return RecipeOutput(
            id=recipe.id,
            name=recipe.name,
            description=recipe.description,
            category=recipe.category,
            difficulty=recipe.difficulty,
            prep_time=recipe.prep_time,
            cook_time=recipe.cook_time,
            servings=recipe.servings,
            ingredients=parse_json_list(recipe.ingredients, "ingredients"),
            steps=parse_json_list(recipe.steps, "steps"),
            tags=parse_json_list(recipe.tags, "tags"),
            favorites=recipe.favorites or 0,
            rating=recipe.rating or 0,
            created_by=recipe.created_by,
            family_group_id=recipe.family_group_id,
            created_at=recipe.created_at,
            updated_at=recipe.updated_at,
        )
