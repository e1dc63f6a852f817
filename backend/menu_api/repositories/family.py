"""
Family Repository - groups and memberships.

Membership rows are the source of truth for group-scoped visibility.
"""

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import joinedload

from shared.config.constants import FamilyRoles
from menu_api.models import FamilyGroup, FamilyMember
from .base import BaseRepository


class FamilyRepository(BaseRepository[FamilyGroup]):

    @property
    def model(self) -> type[FamilyGroup]:
        return FamilyGroup

    def group_ids_for_user(self, user_id: str) -> list[str]:
        """Ids of every family group the user belongs to."""
        query = select(FamilyMember.family_group_id).where(FamilyMember.user_id == user_id)
        return list(self._db.scalars(query).all())

    def find_membership(self, user_id: str, family_group_id: str) -> FamilyMember | None:
        query = select(FamilyMember).where(
            FamilyMember.user_id == user_id,
            FamilyMember.family_group_id == family_group_id,
        )
        return self._db.scalar(query)

    def is_member(self, user_id: str, family_group_id: str) -> bool:
        return self.find_membership(user_id, family_group_id) is not None

    def find_by_invite_code(self, invite_code: str) -> FamilyGroup | None:
        return self._db.scalar(
            self._base_query().where(FamilyGroup.invite_code == invite_code)
        )

    def memberships_for_user(self, user_id: str) -> Sequence[FamilyMember]:
        """The user's memberships with their groups loaded, oldest first."""
        query = (
            select(FamilyMember)
            .where(FamilyMember.user_id == user_id)
            .options(joinedload(FamilyMember.family_group))
            .order_by(FamilyMember.joined_at)
        )
        return self._db.execute(query).scalars().unique().all()

    def members(self, family_group_id: str) -> Sequence[FamilyMember]:
        """Members of a group with their users loaded, oldest first."""
        query = (
            select(FamilyMember)
            .where(FamilyMember.family_group_id == family_group_id)
            .options(joinedload(FamilyMember.user))
            .order_by(FamilyMember.joined_at, FamilyMember.id)
        )
        return self._db.execute(query).scalars().unique().all()

    def count_admins(self, family_group_id: str) -> int:
        query = select(func.count()).select_from(FamilyMember).where(
            FamilyMember.family_group_id == family_group_id,
            FamilyMember.role == FamilyRoles.ADMIN,
        )
        return self._db.scalar(query) or 0

    def add_member(self, family_group_id: str, user_id: str, role: str) -> FamilyMember:
        member = FamilyMember(family_group_id=family_group_id, user_id=user_id, role=role)
        self._db.add(member)
        return member

    def remove_member(self, member: FamilyMember) -> None:
        self._db.delete(member)
