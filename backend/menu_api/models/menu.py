"""
Menu, MenuItem and MenuShare Models.
"""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import MenuStatus, MenuType, ShareType

from .base import ID_LENGTH, Base, TimestampMixin, as_utc, id_column, utcnow

if TYPE_CHECKING:
    from .recipe import Recipe


class Menu(TimestampMixin, Base):
    """
    A dated menu. Personal (no family group) menus are mutable only by their
    creator; group menus by any member of the group.
    """

    __tablename__ = "menus"

    id: Mapped[str] = id_column()
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    type: Mapped[str] = mapped_column(String(10), nullable=False, default=MenuType.DAILY)
    tags: Mapped[Optional[str]] = mapped_column(Text)  # JSON list
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default=MenuStatus.DRAFT)
    family_group_id: Mapped[Optional[str]] = mapped_column(
        String(ID_LENGTH), ForeignKey("family_groups.id", ondelete="CASCADE"), index=True
    )
    created_by: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    items: Mapped[list["MenuItem"]] = relationship(
        back_populates="menu", cascade="all, delete-orphan", passive_deletes=True
    )
    shares: Mapped[list["MenuShare"]] = relationship(
        back_populates="menu", cascade="all, delete-orphan", passive_deletes=True
    )

    def covers(self, day: dt.date) -> bool:
        """Whether ``day`` falls within [start_date, end_date]."""
        return self.start_date <= day <= self.end_date

    def __repr__(self) -> str:
        return f"<Menu(id={self.id}, name='{self.name}', {self.start_date}..{self.end_date})>"


class MenuItem(TimestampMixin, Base):
    """A recipe scheduled on a date and meal time of its menu."""

    __tablename__ = "menu_items"

    id: Mapped[str] = id_column()
    menu_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("menus.id", ondelete="CASCADE"), nullable=False
    )
    recipe_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    meal_time: Mapped[str] = mapped_column(String(10), nullable=False)
    servings: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    note: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        Index("ix_menu_item_menu_date", "menu_id", "date"),
    )

    menu: Mapped["Menu"] = relationship(back_populates="items")
    recipe: Mapped["Recipe"] = relationship()

    def __repr__(self) -> str:
        return f"<MenuItem(id={self.id}, menu={self.menu_id}, {self.date} {self.meal_time})>"


class MenuShare(Base):
    """
    A capability granting access to one menu.

    LINK shares need only the share id; TOKEN shares also need the token.
    A share is active until ``expires_at`` passes, then it is inert for good.
    """

    __tablename__ = "menu_shares"

    id: Mapped[str] = id_column()
    menu_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("menus.id", ondelete="CASCADE"), nullable=False, index=True
    )
    share_type: Mapped[str] = mapped_column(String(10), nullable=False, default=ShareType.LINK)
    token: Mapped[Optional[str]] = mapped_column(String(64), unique=True)
    allow_edit: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    expires_at: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True))
    created_by: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    menu: Mapped["Menu"] = relationship(back_populates="shares")

    def is_expired(self, now: dt.datetime | None = None) -> bool:
        """Expiry is evaluated at read time; a share without expiry never expires."""
        if self.expires_at is None:
            return False
        return as_utc(self.expires_at) <= (now or utcnow())

    def __repr__(self) -> str:
        return f"<MenuShare(id={self.id}, menu={self.menu_id}, type={self.share_type})>"
