"""
Tests for MenuService - menus and menu items.

Covers date range rules, recipe scope for items, partial updates and
item ordering.
"""

from datetime import date

import pytest

from menu_api.models import FamilyGroup, FamilyMember, Menu
from menu_api.services.domain import MenuService
from shared.config.constants import ErrorMessages, FamilyRoles, MenuStatus
from shared.utils.exceptions import (
    DateRangeError,
    ForbiddenError,
    GroupMembershipError,
    NotFoundError,
)
from shared.utils.schemas import MenuCreate, MenuItemCreate, MenuItemUpdate, MenuUpdate
from tests.conftest import principal_for


def _menu_payload(**overrides) -> MenuCreate:
    payload = {
        "name": "January Week",
        "type": "WEEKLY",
        "startDate": "2024-01-01",
        "endDate": "2024-01-07",
    }
    payload.update(overrides)
    return MenuCreate.model_validate(payload)


def _item(recipe_id: str, day: date = date(2024, 1, 3), meal_time: str = "LUNCH", **extra) -> MenuItemCreate:
    return MenuItemCreate(recipe_id=recipe_id, date=day, meal_time=meal_time, **extra)


class TestMenuCreate:

    def test_create_personal_menu(self, db_session, alice):
        menu = MenuService(db_session, principal_for(alice)).create_menu(_menu_payload(tags=["kids"]))

        assert menu.status == MenuStatus.PUBLISHED
        assert menu.created_by == alice.id
        assert menu.family_group_id is None
        assert menu.tags == ["kids"]

    def test_single_day_menu_is_valid(self, db_session, alice):
        menu = MenuService(db_session, principal_for(alice)).create_menu(
            _menu_payload(startDate="2024-01-01", endDate="2024-01-01")
        )

        assert menu.start_date == menu.end_date

    def test_inverted_range_persists_nothing(self, db_session, alice):
        with pytest.raises(DateRangeError) as exc_info:
            MenuService(db_session, principal_for(alice)).create_menu(
                _menu_payload(startDate="2024-01-07", endDate="2024-01-01")
            )

        assert exc_info.value.status_code == 400
        assert db_session.query(Menu).count() == 0

    def test_group_menu_requires_membership(self, db_session, carol, family_group):
        with pytest.raises(GroupMembershipError):
            MenuService(db_session, principal_for(carol)).create_menu(
                _menu_payload(familyGroupId=family_group.id)
            )


class TestMenuQueries:

    def test_get_menu_scope(self, db_session, alice, bob, carol, family_group, make_menu):
        personal = make_menu(alice)
        group_menu = make_menu(alice, family_group)

        assert MenuService(db_session, principal_for(bob)).get_menu(group_menu.id).id == group_menu.id
        with pytest.raises(ForbiddenError):
            MenuService(db_session, principal_for(bob)).get_menu(personal.id)
        with pytest.raises(GroupMembershipError):
            MenuService(db_session, principal_for(carol)).get_menu(group_menu.id)

    def test_get_menu_includes_items(self, db_session, alice, make_menu, make_recipe):
        menu = make_menu(alice)
        recipe = make_recipe(alice, name="Congee")
        service = MenuService(db_session, principal_for(alice))
        service.add_item(menu.id, _item(recipe.id, day=date(2024, 1, 2), meal_time="DINNER"))
        service.add_item(menu.id, _item(recipe.id, day=date(2024, 1, 2), meal_time="BREAKFAST"))

        detail = service.get_menu(menu.id)

        assert [i.meal_time for i in detail.items] == ["BREAKFAST", "DINNER"]
        assert detail.items[0].recipe.name == "Congee"

    def test_get_empty_menu_has_no_items(self, db_session, alice, make_menu):
        menu = make_menu(alice)

        assert MenuService(db_session, principal_for(alice)).get_menu(menu.id).items == []

    def test_get_unknown_menu(self, db_session, alice):
        with pytest.raises(NotFoundError):
            MenuService(db_session, principal_for(alice)).get_menu("missing")

    def test_list_personal_and_group_menus(self, db_session, alice, bob, family_group, make_menu):
        personal = make_menu(alice, name="Mine")
        group_menu = make_menu(bob, family_group, name="Ours")
        service = MenuService(db_session, principal_for(alice))

        personal_list = service.list_menus()
        group_list = service.list_menus(family_group_id=family_group.id)

        assert [m.id for m in personal_list.menus] == [personal.id]
        assert personal_list.total == 1
        assert [m.id for m in group_list.menus] == [group_menu.id]

    def test_list_foreign_group_is_forbidden(self, db_session, carol, family_group):
        with pytest.raises(ForbiddenError):
            MenuService(db_session, principal_for(carol)).list_menus(family_group_id=family_group.id)

    def test_list_window_applies_to_start_date(self, db_session, alice, make_menu):
        make_menu(alice, start_date=date(2024, 1, 1), end_date=date(2024, 1, 7), name="Jan")
        make_menu(alice, start_date=date(2024, 2, 1), end_date=date(2024, 2, 7), name="Feb")
        service = MenuService(db_session, principal_for(alice))

        result = service.list_menus(start_date=date(2024, 1, 15), end_date=date(2024, 2, 15))

        assert [m.name for m in result.menus] == ["Feb"]
        assert result.total == 1

    def test_total_ignores_pagination(self, db_session, alice, make_menu):
        for i in range(3):
            make_menu(alice, name=f"Menu {i}")

        result = MenuService(db_session, principal_for(alice)).list_menus(page=2, limit=2)

        assert len(result.menus) == 1
        assert result.total == 3


class TestMenuUpdate:

    def test_partial_update(self, db_session, alice, make_menu):
        menu = make_menu(alice)

        updated = MenuService(db_session, principal_for(alice)).update_menu(
            menu.id, MenuUpdate(status="ARCHIVED")
        )

        assert updated.status == "ARCHIVED"
        assert updated.name == menu.name

    def test_personal_menu_only_by_creator(self, db_session, alice, bob, family_group, make_menu):
        menu = make_menu(alice)

        with pytest.raises(ForbiddenError) as exc_info:
            MenuService(db_session, principal_for(bob)).update_menu(menu.id, MenuUpdate(name="Hijack"))

        assert exc_info.value.detail == ErrorMessages.NOT_OWNER

    def test_update_cannot_invert_range(self, db_session, alice, make_menu):
        menu = make_menu(alice)

        with pytest.raises(DateRangeError):
            MenuService(db_session, principal_for(alice)).update_menu(
                menu.id, MenuUpdate(start_date=date(2024, 1, 10))
            )

    def test_shrinking_range_must_keep_items(self, db_session, alice, make_menu, make_recipe):
        menu = make_menu(alice)
        recipe = make_recipe(alice)
        service = MenuService(db_session, principal_for(alice))
        service.add_item(menu.id, _item(recipe.id, day=date(2024, 1, 6)))

        with pytest.raises(DateRangeError) as exc_info:
            service.update_menu(menu.id, MenuUpdate(end_date=date(2024, 1, 5)))

        assert exc_info.value.detail == ErrorMessages.ITEMS_OUT_OF_RANGE

    def test_move_personal_menu_into_own_group(self, db_session, alice, family_group, make_menu):
        menu = make_menu(alice)

        moved = MenuService(db_session, principal_for(alice)).update_menu(
            menu.id, MenuUpdate(family_group_id=family_group.id)
        )

        assert moved.family_group_id == family_group.id

    def test_move_into_foreign_group_is_forbidden(self, db_session, carol, family_group, make_menu):
        menu = make_menu(carol)

        with pytest.raises(GroupMembershipError):
            MenuService(db_session, principal_for(carol)).update_menu(
                menu.id, MenuUpdate(family_group_id=family_group.id)
            )

        db_session.refresh(menu)
        assert menu.family_group_id is None

    def test_move_between_groups_needs_both_memberships(
        self, db_session, alice, carol, family_group, make_menu
    ):
        other = FamilyGroup(name="Book Club")
        other.members.append(FamilyMember(user_id=carol.id, role=FamilyRoles.ADMIN))
        db_session.add(other)
        db_session.commit()
        menu = make_menu(alice, family_group)

        with pytest.raises(GroupMembershipError):
            MenuService(db_session, principal_for(alice)).update_menu(
                menu.id, MenuUpdate(family_group_id=other.id)
            )
        with pytest.raises(GroupMembershipError):
            MenuService(db_session, principal_for(carol)).update_menu(
                menu.id, MenuUpdate(family_group_id=other.id)
            )

        other.members.append(FamilyMember(user_id=alice.id, role=FamilyRoles.MEMBER))
        db_session.commit()
        moved = MenuService(db_session, principal_for(alice)).update_menu(
            menu.id, MenuUpdate(family_group_id=other.id)
        )
        assert moved.family_group_id == other.id

    def test_only_creator_moves_group_menu_to_personal(
        self, db_session, alice, bob, family_group, make_menu
    ):
        menu = make_menu(alice, family_group)

        with pytest.raises(ForbiddenError) as exc_info:
            MenuService(db_session, principal_for(bob)).update_menu(
                menu.id, MenuUpdate.model_validate({"familyGroupId": None})
            )
        assert exc_info.value.detail == ErrorMessages.NOT_OWNER

        moved = MenuService(db_session, principal_for(alice)).update_menu(
            menu.id, MenuUpdate.model_validate({"familyGroupId": None})
        )
        assert moved.family_group_id is None


class TestMenuItems:

    def test_add_item_within_range(self, db_session, alice, make_menu, make_recipe):
        menu = make_menu(alice)
        recipe = make_recipe(alice)

        item = MenuService(db_session, principal_for(alice)).add_item(
            menu.id, _item(recipe.id, servings=4, note="double batch")
        )

        assert item.menu_id == menu.id
        assert item.servings == 4
        assert item.recipe.id == recipe.id
        assert item.recipe.name == recipe.name

    @pytest.mark.parametrize("day", [date(2024, 1, 1), date(2024, 1, 7)])
    def test_range_bounds_are_inclusive(self, db_session, alice, make_menu, make_recipe, day):
        menu = make_menu(alice)
        recipe = make_recipe(alice)

        item = MenuService(db_session, principal_for(alice)).add_item(menu.id, _item(recipe.id, day=day))

        assert item.date == day

    @pytest.mark.parametrize("day", [date(2023, 12, 31), date(2024, 1, 8)])
    def test_item_outside_range(self, db_session, alice, make_menu, make_recipe, day):
        menu = make_menu(alice)
        recipe = make_recipe(alice)

        with pytest.raises(DateRangeError) as exc_info:
            MenuService(db_session, principal_for(alice)).add_item(menu.id, _item(recipe.id, day=day))

        assert exc_info.value.detail == ErrorMessages.DATE_OUT_OF_RANGE

    def test_recipe_invisible_to_creator_is_not_found(self, db_session, alice, carol, make_menu, make_recipe):
        menu = make_menu(alice)
        foreign = make_recipe(carol)

        with pytest.raises(NotFoundError):
            MenuService(db_session, principal_for(alice)).add_item(menu.id, _item(foreign.id))

    def test_group_menu_needs_group_recipe(self, db_session, alice, family_group, make_menu, make_recipe):
        menu = make_menu(alice, family_group)
        personal = make_recipe(alice)
        shared = make_recipe(alice, family_group)
        service = MenuService(db_session, principal_for(alice))

        with pytest.raises(NotFoundError):
            service.add_item(menu.id, _item(personal.id))
        assert service.add_item(menu.id, _item(shared.id)).recipe_id == shared.id

    def test_items_ordered_by_date_then_meal_time(self, db_session, alice, make_menu, make_recipe):
        menu = make_menu(alice)
        recipe = make_recipe(alice)
        service = MenuService(db_session, principal_for(alice))
        service.add_item(menu.id, _item(recipe.id, day=date(2024, 1, 2), meal_time="DINNER"))
        service.add_item(menu.id, _item(recipe.id, day=date(2024, 1, 2), meal_time="BREAKFAST"))
        service.add_item(menu.id, _item(recipe.id, day=date(2024, 1, 1), meal_time="SNACK"))
        service.add_item(menu.id, _item(recipe.id, day=date(2024, 1, 2), meal_time="LUNCH"))

        items = service.list_items(menu.id)

        assert [(i.date.day, i.meal_time) for i in items] == [
            (1, "SNACK"),
            (2, "BREAKFAST"),
            (2, "LUNCH"),
            (2, "DINNER"),
        ]

    def test_update_item(self, db_session, alice, make_menu, make_recipe):
        menu = make_menu(alice)
        first = make_recipe(alice, name="First")
        second = make_recipe(alice, name="Second")
        service = MenuService(db_session, principal_for(alice))
        item = service.add_item(menu.id, _item(first.id))

        updated = service.update_item(
            menu.id, item.id, MenuItemUpdate(recipe_id=second.id, date=date(2024, 1, 5))
        )

        assert updated.recipe_id == second.id
        assert updated.recipe.name == "Second"
        assert updated.date == date(2024, 1, 5)

    def test_update_item_outside_range(self, db_session, alice, make_menu, make_recipe):
        menu = make_menu(alice)
        recipe = make_recipe(alice)
        service = MenuService(db_session, principal_for(alice))
        item = service.add_item(menu.id, _item(recipe.id))

        with pytest.raises(DateRangeError):
            service.update_item(menu.id, item.id, MenuItemUpdate(date=date(2024, 2, 1)))

    def test_item_of_other_menu_is_not_found(self, db_session, alice, make_menu, make_recipe):
        menu = make_menu(alice)
        other = make_menu(alice, name="Other")
        recipe = make_recipe(alice)
        service = MenuService(db_session, principal_for(alice))
        item = service.add_item(other.id, _item(recipe.id))

        with pytest.raises(NotFoundError):
            service.delete_item(menu.id, item.id)

    def test_delete_item(self, db_session, alice, make_menu, make_recipe):
        menu = make_menu(alice)
        recipe = make_recipe(alice)
        service = MenuService(db_session, principal_for(alice))
        item = service.add_item(menu.id, _item(recipe.id))

        service.delete_item(menu.id, item.id)

        assert service.list_items(menu.id) == []

    def test_member_edits_group_menu_items(self, db_session, alice, bob, family_group, make_menu, make_recipe):
        menu = make_menu(alice, family_group)
        recipe = make_recipe(bob, family_group)

        item = MenuService(db_session, principal_for(bob)).add_item(menu.id, _item(recipe.id))

        assert item.recipe_id == recipe.id
