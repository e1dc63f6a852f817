"""
Shared Pydantic schemas used across the application.

Payloads are camelCase on the wire (``userName``, ``familyGroupId``) and
snake_case in Python; both spellings are accepted on input.
"""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from shared.config.constants import Limits


# =============================================================================
# Common Types
# =============================================================================

FamilyRole = Literal["admin", "member"]
RecipeCategory = Literal["MEAT", "VEGETABLE", "SOUP", "STAPLE", "SNACK"]
Difficulty = Literal["EASY", "MEDIUM", "HARD"]
IngredientUnit = Literal[
    "GRAM", "MILLILITER", "PIECE", "WHOLE", "ROOT", "SLICE", "SPOON", "AS_NEEDED"
]
RecipeSort = Literal["LATEST", "POPULAR", "RATING"]
MenuType = Literal["DAILY", "WEEKLY", "HOLIDAY", "SPECIAL"]
MenuStatus = Literal["DRAFT", "PUBLISHED", "ARCHIVED"]
MealTime = Literal["BREAKFAST", "LUNCH", "DINNER", "SNACK"]
ShareType = Literal["LINK", "TOKEN"]


class CamelModel(BaseModel):
    """Base model: camelCase aliases, populated from ORM objects or dicts."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _reject_null(value, info):
    """Patch fields may be omitted but not cleared when the column is required."""
    if value is None:
        raise ValueError(f"{info.field_name} cannot be null")
    return value


# =============================================================================
# Common Responses
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    message: str
    code: int
    errors: list[dict] | None = None


class SuccessResponse(BaseModel):
    """Returned by delete operations."""

    success: bool = True


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    environment: str
    uptime: float
    timestamp: dt.datetime


# =============================================================================
# Authentication Schemas
# =============================================================================


class RegisterRequest(CamelModel):
    """Register request body."""

    user_name: str = Field(
        min_length=Limits.MIN_USERNAME_LENGTH, max_length=Limits.MAX_USERNAME_LENGTH
    )
    name: str = Field(
        min_length=Limits.MIN_DISPLAY_NAME_LENGTH, max_length=Limits.MAX_DISPLAY_NAME_LENGTH
    )
    password: str = Field(min_length=Limits.MIN_PASSWORD_LENGTH, max_length=128)


class LoginRequest(CamelModel):
    """Login request body."""

    user_name: str = Field(min_length=1, max_length=Limits.MAX_USERNAME_LENGTH)
    password: str = Field(min_length=1, max_length=128)


class TokenResponse(BaseModel):
    """Session token returned by register and login."""

    token: str


class UserProfile(CamelModel):
    """User profile, never includes the password hash."""

    id: str
    user_name: str
    name: str
    created_at: dt.datetime
    updated_at: dt.datetime


# =============================================================================
# Family Group Schemas
# =============================================================================


class FamilyGroupCreate(CamelModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)


class JoinFamilyRequest(CamelModel):
    invite_code: str = Field(min_length=1, max_length=32)


class FamilyMemberOutput(CamelModel):
    user_id: str
    user_name: str
    name: str
    role: FamilyRole
    joined_at: dt.datetime


class FamilyGroupOutput(CamelModel):
    """A family group as seen by one of its members."""

    id: str
    name: str
    invite_code: str
    role: FamilyRole
    created_at: dt.datetime
    updated_at: dt.datetime


class FamilyGroupDetail(FamilyGroupOutput):
    members: list[FamilyMemberOutput] = []


# =============================================================================
# Recipe Schemas
# =============================================================================


class Ingredient(CamelModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    quantity: float = Field(ge=0)
    unit: IngredientUnit
    order_index: int = Field(ge=0)


class RecipeStep(CamelModel):
    description: str = Field(min_length=1, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    order_index: int = Field(ge=0)
    duration: int | None = Field(default=None, ge=0)  # minutes


class RecipeCreate(CamelModel):
    """
    Recipe creation payload.

    favorites and rating are server-maintained and not part of the payload;
    unknown keys are ignored.
    """

    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    category: RecipeCategory
    difficulty: Difficulty
    prep_time: int | None = Field(default=None, ge=0)
    cook_time: int | None = Field(default=None, ge=0)
    servings: int | None = Field(default=None, ge=1)
    ingredients: list[Ingredient] = []
    steps: list[RecipeStep] = []
    tags: list[str] = []
    family_group_id: str | None = None


class RecipeUpdate(CamelModel):
    """Partial recipe update: only fields present in the payload are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    category: RecipeCategory | None = None
    difficulty: Difficulty | None = None
    prep_time: int | None = Field(default=None, ge=0)
    cook_time: int | None = Field(default=None, ge=0)
    servings: int | None = Field(default=None, ge=1)
    ingredients: list[Ingredient] | None = None
    steps: list[RecipeStep] | None = None
    tags: list[str] | None = None
    family_group_id: str | None = None

    @field_validator("name", "category", "difficulty", "ingredients", "steps", "tags")
    @classmethod
    def reject_null(cls, value, info):
        return _reject_null(value, info)


class RecipeSummary(CamelModel):
    """Recipe fields embedded in menu items."""

    id: str
    name: str
    description: str | None = None
    category: RecipeCategory
    difficulty: Difficulty


class RecipeOutput(CamelModel):
    id: str
    name: str
    description: str | None = None
    category: RecipeCategory
    difficulty: Difficulty
    prep_time: int | None = None
    cook_time: int | None = None
    servings: int | None = None
    ingredients: list[Ingredient] = []
    steps: list[RecipeStep] = []
    tags: list[str] = []
    favorites: int = 0
    rating: float = 0
    created_by: str
    family_group_id: str | None = None
    created_at: dt.datetime
    updated_at: dt.datetime


# =============================================================================
# Menu Schemas
# =============================================================================


class MenuCreate(CamelModel):
    name: str = Field(min_length=Limits.MIN_MENU_NAME_LENGTH, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    type: MenuType = "DAILY"
    tags: list[str] | None = None
    start_date: dt.date
    end_date: dt.date
    family_group_id: str | None = None


class MenuUpdate(CamelModel):
    """Partial menu update: only fields present in the payload are applied."""

    name: str | None = Field(
        default=None, min_length=Limits.MIN_MENU_NAME_LENGTH, max_length=Limits.MAX_NAME_LENGTH
    )
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    type: MenuType | None = None
    tags: list[str] | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    status: MenuStatus | None = None
    family_group_id: str | None = None

    @field_validator("name", "type", "start_date", "end_date", "status")
    @classmethod
    def reject_null(cls, value, info):
        return _reject_null(value, info)


class MenuOutput(CamelModel):
    id: str
    name: str
    description: str | None = None
    type: MenuType
    tags: list[str] | None = None
    start_date: dt.date
    end_date: dt.date
    status: MenuStatus
    family_group_id: str | None = None
    created_by: str
    created_at: dt.datetime
    updated_at: dt.datetime


class MenuListResponse(BaseModel):
    menus: list[MenuOutput]
    total: int


class MenuItemCreate(CamelModel):
    recipe_id: str = Field(min_length=1)
    date: dt.date
    meal_time: MealTime
    servings: int = Field(default=1, ge=1)
    order_index: int = Field(default=0, ge=0)
    note: str | None = Field(default=None, max_length=Limits.MAX_NOTE_LENGTH)


class MenuItemUpdate(CamelModel):
    """Partial menu item update."""

    recipe_id: str | None = Field(default=None, min_length=1)
    date: dt.date | None = None
    meal_time: MealTime | None = None
    servings: int | None = Field(default=None, ge=1)
    order_index: int | None = Field(default=None, ge=0)
    note: str | None = Field(default=None, max_length=Limits.MAX_NOTE_LENGTH)

    @field_validator("recipe_id", "date", "meal_time", "servings", "order_index")
    @classmethod
    def reject_null(cls, value, info):
        return _reject_null(value, info)


class MenuItemOutput(CamelModel):
    id: str
    menu_id: str
    recipe_id: str
    date: dt.date
    meal_time: MealTime
    servings: int
    order_index: int
    note: str | None = None
    recipe: RecipeSummary | None = None
    created_at: dt.datetime
    updated_at: dt.datetime


class MenuShareCreate(CamelModel):
    share_type: ShareType
    allow_edit: bool = False
    expires_at: dt.datetime | None = None


class MenuShareOutput(CamelModel):
    id: str
    menu_id: str
    share_type: ShareType
    token: str | None = None
    allow_edit: bool
    expires_at: dt.datetime | None = None
    created_by: str
    created_at: dt.datetime


class MenuDetail(MenuOutput):
    """A menu with its items in serving order."""

    items: list[MenuItemOutput] = []


class SharedMenuOutput(MenuDetail):
    """A menu resolved through a share."""
