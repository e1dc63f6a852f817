"""
Menu Repository - data access for menus, menu items and shares.
"""

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from sqlalchemy import Select, case, func, or_, select
from sqlalchemy.orm import selectinload

from shared.config.constants import MealTime
from menu_api.models import Menu, MenuItem, MenuShare
from .base import BaseRepository, RepositoryFilters


# Serving order of meal times within a day
MEAL_TIME_ORDER = {meal_time: index for index, meal_time in enumerate(MealTime.ALL)}


@dataclass
class MenuFilters(RepositoryFilters):
    """
    Filters specific to menus.

    With ``family_group_id`` the listing is the group's menus; without it,
    only the caller's personal menus.
    """

    user_id: str = ""
    family_group_id: str | None = None
    status: str | None = None
    start_date: date | None = None
    end_date: date | None = None


class MenuRepository(BaseRepository[Menu]):

    @property
    def model(self) -> type[Menu]:
        return Menu

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        if not isinstance(filters, MenuFilters):
            filters = MenuFilters(**filters.__dict__)

        if filters.family_group_id:
            query = query.where(Menu.family_group_id == filters.family_group_id)
        else:
            query = query.where(
                Menu.created_by == filters.user_id,
                Menu.family_group_id.is_(None),
            )

        if filters.status:
            query = query.where(Menu.status == filters.status)

        # Window applies to the menu's own start date
        if filters.start_date:
            query = query.where(Menu.start_date >= filters.start_date)
        if filters.end_date:
            query = query.where(Menu.start_date <= filters.end_date)

        return query

    def find_for_update(self, menu_id: str) -> Menu | None:
        """
        Find a menu and lock its row until the transaction ends.

        Serializes item writes against the menu's date range and scope.
        SQLite has no row locks; the clause is omitted there.
        """
        query = select(Menu).where(Menu.id == menu_id).with_for_update()
        return self._db.scalar(query)


class MenuItemRepository(BaseRepository[MenuItem]):

    @property
    def model(self) -> type[MenuItem]:
        return MenuItem

    def _base_query(self) -> Select:
        return select(MenuItem).options(selectinload(MenuItem.recipe))

    def list_for_menu(self, menu_id: str) -> Sequence[MenuItem]:
        """Items ordered by date, then meal time, then order index."""
        meal_order = case(MEAL_TIME_ORDER, value=MenuItem.meal_time, else_=len(MEAL_TIME_ORDER))
        query = (
            self._base_query()
            .where(MenuItem.menu_id == menu_id)
            .order_by(MenuItem.date, meal_order, MenuItem.order_index, MenuItem.created_at)
        )
        return self._db.execute(query).scalars().unique().all()

    def find_in_menu(self, item_id: str, menu_id: str) -> MenuItem | None:
        query = self._base_query().where(MenuItem.id == item_id, MenuItem.menu_id == menu_id)
        return self._db.scalar(query)

    def count_outside_range(self, menu_id: str, start_date: date, end_date: date) -> int:
        """Number of items of the menu dated outside [start_date, end_date]."""
        query = select(func.count()).select_from(MenuItem).where(
            MenuItem.menu_id == menu_id,
            or_(MenuItem.date < start_date, MenuItem.date > end_date),
        )
        return self._db.scalar(query) or 0


class MenuShareRepository(BaseRepository[MenuShare]):

    @property
    def model(self) -> type[MenuShare]:
        return MenuShare

    def list_for_menu(self, menu_id: str) -> Sequence[MenuShare]:
        query = (
            self._base_query()
            .where(MenuShare.menu_id == menu_id)
            .order_by(MenuShare.created_at.desc(), MenuShare.id.desc())
        )
        return self._db.execute(query).scalars().all()

    def find_by_menu_and_token(self, menu_id: str, token: str) -> MenuShare | None:
        query = self._base_query().where(
            MenuShare.menu_id == menu_id,
            MenuShare.token == token,
        )
        return self._db.scalar(query)
