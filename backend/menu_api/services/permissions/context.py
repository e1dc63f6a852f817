"""
Permission Context - Main entry point for permission checks.
"""

from sqlalchemy.orm import Session

from shared.config.constants import ErrorMessages
from shared.utils.exceptions import ForbiddenError, GroupMembershipError
from menu_api.repositories import FamilyRepository

from .principal import Principal
from .strategies import Action, PermissionStrategy, Scoped, get_strategy


class PermissionContext:
    """
    Context for performing permission checks for one principal.

    The caller's family group ids are loaded once per context.

    Usage:
        ctx = PermissionContext(db, principal)

        ctx.require(Action.WRITE, menu)
        ctx.require_member(family_group_id)

        recipes = repo.find_all(RecipeFilters(user_id=ctx.user_id, group_ids=ctx.group_ids))
    """

    def __init__(self, db: Session, principal: Principal):
        self._principal = principal
        self._families = FamilyRepository(db)
        self._group_ids: list[str] | None = None
        self._strategy = get_strategy(principal, self.is_member)

    @property
    def principal(self) -> Principal:
        return self._principal

    @property
    def user_id(self) -> str:
        return self._principal.user_id

    @property
    def strategy(self) -> PermissionStrategy:
        return self._strategy

    @property
    def group_ids(self) -> list[str]:
        """Family groups the caller belongs to; always empty for guests."""
        if self._group_ids is None:
            if self._principal.is_guest:
                self._group_ids = []
            else:
                self._group_ids = self._families.group_ids_for_user(self.user_id)
        return self._group_ids

    def is_member(self, family_group_id: str) -> bool:
        return family_group_id in self.group_ids

    def can(self, action: Action, resource: Scoped) -> bool:
        return self._strategy.can(self._principal, action, resource)

    def require(self, action: Action, resource: Scoped) -> None:
        """
        Raise ForbiddenError unless the caller may perform ``action``.

        Guests get a read-only message when they could read but not write.
        """
        if self.can(action, resource):
            return

        if self._principal.is_guest:
            if action == Action.WRITE and self.can(Action.READ, resource):
                raise ForbiddenError(
                    detail=ErrorMessages.SHARE_READ_ONLY,
                    share_id=self._principal.share_id,
                )
            raise ForbiddenError(
                "access this resource with a share token",
                share_id=self._principal.share_id,
            )

        if resource.family_group_id:
            raise GroupMembershipError(resource.family_group_id, user_id=self.user_id)
        raise ForbiddenError(detail=ErrorMessages.NOT_OWNER, user_id=self.user_id)

    def require_user(self, action: str) -> None:
        """Only signed-in users, never guests, may ``action``."""
        if self._principal.is_guest:
            raise ForbiddenError(action, share_id=self._principal.share_id)

    def require_member(self, family_group_id: str) -> None:
        if self._principal.is_guest or not self.is_member(family_group_id):
            raise GroupMembershipError(family_group_id, user_id=self.user_id)

    def require_move(self, resource: Scoped, target_group_id: str | None) -> None:
        """
        Check a change of owning scope.

        The caller must already pass the write check on the resource. Moving
        into a group requires membership of it; moving a group resource back
        to personal scope is reserved to its creator.
        """
        if target_group_id == resource.family_group_id:
            return
        self.require_user("move this resource")
        if target_group_id is not None:
            self.require_member(target_group_id)
        elif resource.created_by != self.user_id:
            raise ForbiddenError(detail=ErrorMessages.NOT_OWNER, user_id=self.user_id)
