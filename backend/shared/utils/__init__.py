"""
Utilities module: Exceptions, validators, schemas.
"""

from shared.utils.exceptions import (
    NotFoundError,
    AuthenticationError,
    ForbiddenError,
    ValidationError,
)
from shared.utils.validators import (
    escape_like_pattern,
    sanitize_search_term,
    parse_json_list,
    serialize_json_list,
)
from shared.utils.schemas import ErrorResponse

__all__ = [
    # exceptions
    "NotFoundError",
    "AuthenticationError",
    "ForbiddenError",
    "ValidationError",
    # validators
    "escape_like_pattern",
    "sanitize_search_term",
    "parse_json_list",
    "serialize_json_list",
    # schemas
    "ErrorResponse",
]
