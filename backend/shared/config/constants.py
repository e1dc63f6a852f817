"""
Centralized constants for the backend application.
Avoid magic strings and repeated constants.

Usage:
    from shared.config.constants import MenuStatus, FamilyRoles

    if member.role == FamilyRoles.ADMIN:
        ...

    if menu.status == MenuStatus.PUBLISHED:
        ...
"""

from typing import Final


# =============================================================================
# Family Roles
# =============================================================================


class FamilyRoles:
    """Family group member role constants."""

    ADMIN: Final[str] = "admin"
    MEMBER: Final[str] = "member"

    ALL: Final[list[str]] = [ADMIN, MEMBER]


# =============================================================================
# Recipe Constants
# =============================================================================


class RecipeCategory:
    """Recipe category constants."""

    MEAT: Final[str] = "MEAT"
    VEGETABLE: Final[str] = "VEGETABLE"
    SOUP: Final[str] = "SOUP"
    STAPLE: Final[str] = "STAPLE"
    SNACK: Final[str] = "SNACK"

    ALL: Final[list[str]] = [MEAT, VEGETABLE, SOUP, STAPLE, SNACK]


class Difficulty:
    """Recipe difficulty constants."""

    EASY: Final[str] = "EASY"
    MEDIUM: Final[str] = "MEDIUM"
    HARD: Final[str] = "HARD"

    ALL: Final[list[str]] = [EASY, MEDIUM, HARD]


class IngredientUnit:
    """Ingredient measurement unit constants."""

    GRAM: Final[str] = "GRAM"
    MILLILITER: Final[str] = "MILLILITER"
    PIECE: Final[str] = "PIECE"
    WHOLE: Final[str] = "WHOLE"
    ROOT: Final[str] = "ROOT"
    SLICE: Final[str] = "SLICE"
    SPOON: Final[str] = "SPOON"
    AS_NEEDED: Final[str] = "AS_NEEDED"

    ALL: Final[list[str]] = [GRAM, MILLILITER, PIECE, WHOLE, ROOT, SLICE, SPOON, AS_NEEDED]


class RecipeSort:
    """Recipe listing sort modes."""

    LATEST: Final[str] = "LATEST"  # created_at desc
    POPULAR: Final[str] = "POPULAR"  # favorites desc
    RATING: Final[str] = "RATING"  # rating desc

    ALL: Final[list[str]] = [LATEST, POPULAR, RATING]


# =============================================================================
# Menu Constants
# =============================================================================


class MenuType:
    """Menu type constants."""

    DAILY: Final[str] = "DAILY"
    WEEKLY: Final[str] = "WEEKLY"
    HOLIDAY: Final[str] = "HOLIDAY"
    SPECIAL: Final[str] = "SPECIAL"

    ALL: Final[list[str]] = [DAILY, WEEKLY, HOLIDAY, SPECIAL]


class MenuStatus:
    """Menu status constants."""

    DRAFT: Final[str] = "DRAFT"
    PUBLISHED: Final[str] = "PUBLISHED"
    ARCHIVED: Final[str] = "ARCHIVED"

    ALL: Final[list[str]] = [DRAFT, PUBLISHED, ARCHIVED]


class MealTime:
    """Meal time constants, listed in serving order."""

    BREAKFAST: Final[str] = "BREAKFAST"
    LUNCH: Final[str] = "LUNCH"
    DINNER: Final[str] = "DINNER"
    SNACK: Final[str] = "SNACK"

    ALL: Final[list[str]] = [BREAKFAST, LUNCH, DINNER, SNACK]


class ShareType:
    """Menu share type constants."""

    LINK: Final[str] = "LINK"  # Anyone holding the share id
    TOKEN: Final[str] = "TOKEN"  # Share id plus secret token

    ALL: Final[list[str]] = [LINK, TOKEN]


# =============================================================================
# Validation Limits
# =============================================================================


class Limits:
    """Validation limits."""

    # Users
    MIN_USERNAME_LENGTH: Final[int] = 3
    MAX_USERNAME_LENGTH: Final[int] = 20
    MIN_DISPLAY_NAME_LENGTH: Final[int] = 2
    MAX_DISPLAY_NAME_LENGTH: Final[int] = 50
    MIN_PASSWORD_LENGTH: Final[int] = 6

    # String lengths
    MAX_NAME_LENGTH: Final[int] = 100
    MIN_MENU_NAME_LENGTH: Final[int] = 2
    MAX_DESCRIPTION_LENGTH: Final[int] = 500
    MAX_NOTE_LENGTH: Final[int] = 500
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100

    # Pagination defaults
    DEFAULT_PAGE_SIZE: Final[int] = 10
    MAX_RECIPE_PAGE_SIZE: Final[int] = 50
    MAX_MENU_PAGE_SIZE: Final[int] = 100


# =============================================================================
# Error Messages
# =============================================================================


class ErrorMessages:
    """Standardized error messages."""

    # Auth errors
    NOT_AUTHENTICATED: Final[str] = "Not authenticated"
    INVALID_TOKEN: Final[str] = "Invalid token"
    TOKEN_EXPIRED: Final[str] = "Token expired"
    INVALID_CREDENTIALS: Final[str] = "Invalid credentials"
    USER_EXISTS: Final[str] = "User already exists"
    INVALID_SHARE_TOKEN: Final[str] = "Invalid or expired share token"

    # Access errors
    NOT_GROUP_MEMBER: Final[str] = "You are not a member of this family group"
    NOT_OWNER: Final[str] = "Only the creator can access this resource"
    SHARE_READ_ONLY: Final[str] = "This share does not allow editing"
    SHARE_EXPIRED: Final[str] = "Share has expired"
    SHARE_INVALID_TOKEN: Final[str] = "Invalid token"

    # Validation errors
    INVALID_DATE_RANGE: Final[str] = "Start date must be before or equal to end date"
    DATE_OUT_OF_RANGE: Final[str] = "Item date must be within the menu date range"
    ITEMS_OUT_OF_RANGE: Final[str] = "Existing menu items fall outside the new date range"

    # Rate limit
    RATE_LIMIT_EXCEEDED: Final[str] = "Too many requests, please try again later"
