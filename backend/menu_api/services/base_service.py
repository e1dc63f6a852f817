"""
Base service for domain operations.

Architecture:
    Router (thin) -> Service (business logic) -> Repository (data access) -> Model

Services are constructed per request with that request's session and
principal; nothing is shared between requests.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import DatabaseError, DuplicateEntityError

from menu_api.services.permissions import PermissionContext, Principal

logger = get_logger(__name__)


class BaseService:
    """
    Holds the session and, for authenticated operations, the permission
    context of the caller.
    """

    def __init__(self, db: Session, principal: Principal | None = None):
        self._db = db
        self._principal = principal
        self._permissions = PermissionContext(db, principal) if principal else None

    @property
    def permissions(self) -> PermissionContext:
        if self._permissions is None:
            raise RuntimeError(f"{type(self).__name__} was created without a principal")
        return self._permissions

    @property
    def user_id(self) -> str:
        return self.permissions.user_id

    def _commit(
        self,
        operation: str,
        duplicate_entity: str | None = None,
        duplicate_detail: str | None = None,
        **log_context,
    ) -> None:
        """
        Commit the unit of work.

        A unique constraint violation becomes DuplicateEntityError when
        ``duplicate_entity`` is given; any other database failure becomes
        DatabaseError.
        """
        try:
            safe_commit(self._db)
        except IntegrityError as e:
            if duplicate_entity:
                raise DuplicateEntityError(duplicate_entity, detail=duplicate_detail, **log_context)
            logger.error(f"Failed to {operation}", error=str(e), **log_context)
            raise DatabaseError(operation, **log_context)
        except SQLAlchemyError as e:
            logger.error(f"Failed to {operation}", error=str(e), **log_context)
            raise DatabaseError(operation, **log_context)
