"""
Family group models.

A family group is a sharing scope: membership grants visibility into the
group's recipes and menus.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import FamilyRoles
from shared.security.identifiers import generate_invite_code

from .base import ID_LENGTH, Base, TimestampMixin, id_column, utcnow

if TYPE_CHECKING:
    from .user import User


class FamilyGroup(TimestampMixin, Base):
    __tablename__ = "family_groups"

    id: Mapped[str] = id_column()
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    invite_code: Mapped[str] = mapped_column(
        String(16), unique=True, nullable=False, default=generate_invite_code
    )

    members: Mapped[list["FamilyMember"]] = relationship(
        back_populates="family_group",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="FamilyMember.joined_at",
    )

    def __repr__(self) -> str:
        return f"<FamilyGroup(id={self.id}, name='{self.name}')>"


class FamilyMember(Base):
    """
    Links a user to a family group with a role (admin | member).
    Removed when either the user or the group is deleted.
    """

    __tablename__ = "family_members"

    id: Mapped[str] = id_column()
    family_group_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("family_groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(String(10), nullable=False, default=FamilyRoles.MEMBER)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    __table_args__ = (
        UniqueConstraint("family_group_id", "user_id", name="uq_family_member_group_user"),
    )

    family_group: Mapped["FamilyGroup"] = relationship(back_populates="members")
    user: Mapped["User"] = relationship(back_populates="memberships")

    @property
    def is_admin(self) -> bool:
        return self.role == FamilyRoles.ADMIN

    def __repr__(self) -> str:
        return f"<FamilyMember(group={self.family_group_id}, user={self.user_id}, role={self.role})>"
