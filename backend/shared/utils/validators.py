"""
Shared validators and normalizers for input sanitization and stored JSON.
"""

import json
import re
from typing import Any

from shared.config.constants import Limits
from shared.config.logging import get_logger

logger = get_logger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def escape_like_pattern(value: str) -> str:
    """
    Escape special characters in LIKE patterns.

    SQL LIKE uses % and _ as wildcards; user search text must match them
    literally. Use with ``escape="\\\\"`` on the SQLAlchemy ``like`` call.
    """
    if not value:
        return value

    # Escape the escape character first, then the wildcards
    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")
    return value


def sanitize_search_term(term: str | None, max_length: int = Limits.MAX_SEARCH_TERM_LENGTH) -> str:
    """
    Sanitize search term for safe use in queries.

    Trims whitespace, caps the length and strips control characters.
    """
    if not term:
        return ""

    term = term.strip()[:max_length]
    return _CONTROL_CHARS.sub("", term)


def parse_json_list(value: Any, field: str = "value") -> list:
    """
    Normalize a JSON list column to a Python list.

    Accepts the stored text form or an already decoded list. Missing or
    unreadable values become an empty list.
    """
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return value
    try:
        decoded = json.loads(value)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Unreadable JSON column, using empty list", field=field)
        return []
    return decoded if isinstance(decoded, list) else []


def serialize_json_list(value: list | None) -> str | None:
    """Serialize a list to JSON text, keeping non-ASCII characters readable."""
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False)
