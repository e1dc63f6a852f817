"""
Configuration module: Settings, logging, constants.
"""

from shared.config.settings import settings, get_settings
from shared.config.logging import get_logger, setup_logging
from shared.config.constants import (
    FamilyRoles,
    MenuStatus,
    MealTime,
    ShareType,
    Limits,
    ErrorMessages,
)

__all__ = [
    # settings
    "settings",
    "get_settings",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "FamilyRoles",
    "MenuStatus",
    "MealTime",
    "ShareType",
    "Limits",
    "ErrorMessages",
]
