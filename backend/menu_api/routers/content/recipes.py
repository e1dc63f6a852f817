"""
Recipes router.
CRUD operations for recipes visible to the caller (own recipes and those of
the caller's family groups).
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shared.config.constants import Limits, RecipeSort as RecipeSortOption
from shared.infrastructure.db import get_db
from shared.utils.schemas import (
    Difficulty,
    RecipeCategory,
    RecipeCreate,
    RecipeOutput,
    RecipeSort,
    RecipeUpdate,
    SuccessResponse,
)
from menu_api.routers._common import current_principal
from menu_api.services.domain import RecipeService
from menu_api.services.permissions import Principal


router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.get("", response_model=list[RecipeOutput])
def list_recipes(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=Limits.DEFAULT_PAGE_SIZE, ge=1, le=Limits.MAX_RECIPE_PAGE_SIZE),
    category: RecipeCategory | None = None,
    difficulty: Difficulty | None = None,
    family_group_id: str | None = Query(default=None, alias="familyGroupId"),
    search: str | None = Query(default=None, max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    sort: RecipeSort = RecipeSortOption.LATEST,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> list[RecipeOutput]:
    """
    List visible recipes, newest first by default.

    ``sort=POPULAR`` orders by favorites, ``sort=RATING`` by rating.
    """
    return RecipeService(db, principal).list_recipes(
        page=page,
        limit=limit,
        category=category,
        difficulty=difficulty,
        family_group_id=family_group_id,
        search=search,
        sort=sort,
    )


@router.post("", response_model=RecipeOutput, status_code=status.HTTP_201_CREATED)
def create_recipe(
    body: RecipeCreate,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> RecipeOutput:
    return RecipeService(db, principal).create_recipe(body)


@router.get("/{recipe_id}", response_model=RecipeOutput)
def get_recipe(
    recipe_id: str,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> RecipeOutput:
    return RecipeService(db, principal).get_recipe(recipe_id)


@router.put("/{recipe_id}", response_model=RecipeOutput)
def update_recipe(
    recipe_id: str,
    body: RecipeUpdate,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> RecipeOutput:
    """Partial update: only fields present in the body change."""
    return RecipeService(db, principal).update_recipe(recipe_id, body)


@router.delete("/{recipe_id}", response_model=SuccessResponse)
def delete_recipe(
    recipe_id: str,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    RecipeService(db, principal).delete_recipe(recipe_id)
    return SuccessResponse()
