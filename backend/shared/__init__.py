"""
Shared module for configuration, security and infrastructure used by the
menu API.

STRUCTURE:
- shared.security: Authentication and abuse protection
  - auth.py: JWT signing/verification, current_user_context
  - password.py: Peppered bcrypt hashing
  - identifiers.py: Entity ids, share tokens, invite codes
  - rate_limit.py: slowapi limiter and 429 handler

- shared.infrastructure: Database and request plumbing
  - db.py: SQLAlchemy engine and sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and logging filter

- shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging and audit events
  - constants.py: Roles, statuses, limits, error messages

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Search sanitization, JSON list columns
  - schemas.py: Pydantic request/response schemas

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, current_user_context
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import FamilyRoles, MenuStatus
    from shared.utils.exceptions import NotFoundError, ForbiddenError
"""
