"""
Family Service - family groups and their membership.

Membership is what makes group-scoped recipes and menus visible, so every
group operation here is also an authorization boundary.
"""

from __future__ import annotations

from shared.config.constants import FamilyRoles
from shared.config.logging import get_logger
from shared.utils.exceptions import (
    ForbiddenError,
    GroupMembershipError,
    NotFoundError,
    ValidationError,
)
from shared.utils.schemas import (
    FamilyGroupCreate,
    FamilyGroupDetail,
    FamilyGroupOutput,
    FamilyMemberOutput,
    JoinFamilyRequest,
)

from menu_api.models import FamilyGroup, FamilyMember
from menu_api.repositories import FamilyRepository
from menu_api.services.base_service import BaseService

logger = get_logger(__name__)


class FamilyService(BaseService):

    def __init__(self, db, principal):
        super().__init__(db, principal)
        self._families = FamilyRepository(db)
        self._entity_name = "Family group"

    # =========================================================================
    # Queries
    # =========================================================================

    def list_groups(self) -> list[FamilyGroupOutput]:
        """Groups the caller belongs to, with the caller's role in each."""
        memberships = self._families.memberships_for_user(self.user_id)
        return [self._to_output(m.family_group, m.role) for m in memberships]

    def get_group(self, family_group_id: str) -> FamilyGroupDetail:
        """A group with its members. Members only."""
        group = self._families.find_by_id(family_group_id)
        if group is None:
            raise NotFoundError(self._entity_name, family_group_id)
        membership = self._require_membership(family_group_id)

        members = [
            FamilyMemberOutput(
                user_id=m.user_id,
                user_name=m.user.user_name,
                name=m.user.name,
                role=m.role,
                joined_at=m.joined_at,
            )
            for m in self._families.members(family_group_id)
        ]
        return FamilyGroupDetail(
            **self._to_output(group, membership.role).model_dump(),
            members=members,
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def create_group(self, data: FamilyGroupCreate) -> FamilyGroupOutput:
        """Create a group; the creator becomes its admin."""
        self.permissions.require_user("create a family group")

        group = self._families.save(FamilyGroup(name=data.name))
        group.members.append(FamilyMember(user_id=self.user_id, role=FamilyRoles.ADMIN))
        self._commit(
            "create family group",
            duplicate_entity=self._entity_name,
            duplicate_detail="Invite code collision, please retry",
            user_id=self.user_id,
        )

        logger.info("Family group created", family_group_id=group.id, user_id=self.user_id)
        return self._to_output(group, FamilyRoles.ADMIN)

    def join_group(self, data: JoinFamilyRequest) -> FamilyGroupOutput:
        """Join a group by invite code as a regular member."""
        self.permissions.require_user("join a family group")

        group = self._families.find_by_invite_code(data.invite_code.strip().upper())
        if group is None:
            raise NotFoundError(self._entity_name, invite_code=data.invite_code)

        if self._families.is_member(self.user_id, group.id):
            raise ValidationError(
                "You are already a member of this family group",
                family_group_id=group.id,
            )

        self._families.add_member(group.id, self.user_id, FamilyRoles.MEMBER)
        self._commit(
            "join family group",
            duplicate_entity="Family member",
            duplicate_detail="You are already a member of this family group",
            family_group_id=group.id,
        )

        logger.info("Joined family group", family_group_id=group.id, user_id=self.user_id)
        return self._to_output(group, FamilyRoles.MEMBER)

    def remove_member(self, family_group_id: str, user_id: str) -> None:
        """
        Remove a member, or leave when ``user_id`` is the caller.

        Admins may remove anyone. The last admin cannot leave while other
        members remain.
        """
        caller = self._require_membership(family_group_id)

        if user_id != self.user_id and not caller.is_admin:
            raise ForbiddenError("remove other members", family_group_id=family_group_id)

        target = self._families.find_membership(user_id, family_group_id)
        if target is None:
            raise NotFoundError("Family member", user_id, family_group_id=family_group_id)

        if target.is_admin and self._families.count_admins(family_group_id) == 1:
            if len(self._families.members(family_group_id)) > 1:
                raise ValidationError(
                    "The last admin cannot leave while other members remain",
                    family_group_id=family_group_id,
                )

        self._families.remove_member(target)
        self._commit("remove family member", family_group_id=family_group_id, user_id=user_id)

        logger.info(
            "Family member removed",
            family_group_id=family_group_id,
            user_id=user_id,
            removed_by=self.user_id,
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require_membership(self, family_group_id: str) -> FamilyMember:
        self.permissions.require_user("manage family groups")
        membership = self._families.find_membership(self.user_id, family_group_id)
        if membership is None:
            raise GroupMembershipError(family_group_id, user_id=self.user_id)
        return membership

    def _to_output(self, group: FamilyGroup, role: str) -> FamilyGroupOutput:
        return FamilyGroupOutput(
            id=group.id,
            name=group.name,
            invite_code=group.invite_code,
            role=role,
            created_at=group.created_at,
            updated_at=group.updated_at,
        )
