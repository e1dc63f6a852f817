"""
Menu Service - menus, their dated meal items, and share links.

Authorization is checked inside every operation against the menu's own
scope (its family group, or its creator for personal menus). Item and
share operations use the parent menu's scope.

Share lifecycle:
    active  --(expires_at passes)-->  expired

Expiry is evaluated at read time and is irreversible. An expired share is
inert: it neither resolves a guest principal nor opens the shared menu.
"""

from __future__ import annotations

import hmac
from datetime import date

from shared.config.constants import ErrorMessages, MenuStatus, ShareType
from shared.config.logging import audit_share_event, get_logger
from shared.security.identifiers import generate_share_token
from shared.utils.exceptions import (
    DateRangeError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from shared.utils.schemas import (
    MenuCreate,
    MenuItemCreate,
    MenuItemOutput,
    MenuItemUpdate,
    MenuListResponse,
    MenuDetail,
    MenuOutput,
    MenuShareCreate,
    MenuShareOutput,
    MenuUpdate,
    RecipeSummary,
    SharedMenuOutput,
)
from shared.utils.validators import parse_json_list, serialize_json_list

from menu_api.models import Menu, MenuItem, MenuShare, Recipe, as_utc, utcnow
from menu_api.repositories import (
    FamilyRepository,
    MenuFilters,
    MenuItemRepository,
    MenuRepository,
    MenuShareRepository,
    RecipeRepository,
)
from menu_api.services.base_service import BaseService
from menu_api.services.permissions import Action

logger = get_logger(__name__)


class MenuService(BaseService):
    """
    Menu operations for a signed-in user or a share guest.

    Share redemption (``validate_share_token``, ``get_shared_menu``) needs
    no principal.
    """

    def __init__(self, db, principal=None):
        super().__init__(db, principal)
        self._menus = MenuRepository(db)
        self._items = MenuItemRepository(db)
        self._shares = MenuShareRepository(db)
        self._recipes = RecipeRepository(db)
        self._families = FamilyRepository(db)

    # =========================================================================
    # Menus
    # =========================================================================

    def create_menu(self, data: MenuCreate) -> MenuOutput:
        """Create a menu; nothing is persisted when the date range is invalid."""
        self.permissions.require_user("create menus")
        _check_range(data.start_date, data.end_date)
        if data.family_group_id:
            self.permissions.require_member(data.family_group_id)

        menu = Menu(
            name=data.name,
            description=data.description,
            type=data.type,
            tags=serialize_json_list(data.tags),
            start_date=data.start_date,
            end_date=data.end_date,
            status=MenuStatus.PUBLISHED,
            family_group_id=data.family_group_id,
            created_by=self.user_id,
        )
        self._menus.save(menu)
        self._commit("create menu", user_id=self.user_id)

        logger.info("Menu created", menu_id=menu.id, user_id=self.user_id)
        return self._menu_output(menu)

    def get_menu(self, menu_id: str) -> MenuDetail:
        """The menu with its items and their recipe summaries."""
        menu = self._get_menu(menu_id, Action.READ)
        return self._menu_detail(menu, MenuDetail)

    def list_menus(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        family_group_id: str | None = None,
        status: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> MenuListResponse:
        """
        A page of the group's menus, or of the caller's personal menus when
        no group is given, newest first, with the total for paging.
        """
        self.permissions.require_user("list menus")
        if family_group_id:
            self.permissions.require_member(family_group_id)

        filters = MenuFilters(
            limit=limit,
            offset=(max(page, 1) - 1) * limit,
            user_id=self.user_id,
            family_group_id=family_group_id,
            status=status,
            start_date=start_date,
            end_date=end_date,
        )
        # Independent read-only queries over the same filters
        menus = self._menus.find_all(filters)
        total = self._menus.count(filters)
        return MenuListResponse(menus=[self._menu_output(m) for m in menus], total=total)

    def update_menu(self, menu_id: str, data: MenuUpdate) -> MenuOutput:
        """
        Apply only the fields present in ``data``.

        The resulting range must be valid and still cover every existing item.
        """
        self.permissions.require_user("update menus")
        menu = self._get_menu(menu_id, Action.WRITE, lock=True)

        changes = data.model_dump(exclude_unset=True)
        if "family_group_id" in changes:
            self.permissions.require_move(menu, changes["family_group_id"])

        start_date = changes.get("start_date", menu.start_date)
        end_date = changes.get("end_date", menu.end_date)
        _check_range(start_date, end_date)
        if (start_date, end_date) != (menu.start_date, menu.end_date):
            if self._items.count_outside_range(menu.id, start_date, end_date):
                raise DateRangeError(ErrorMessages.ITEMS_OUT_OF_RANGE, menu_id=menu.id)

        if "tags" in changes:
            changes["tags"] = serialize_json_list(changes["tags"])
        for field_name, value in changes.items():
            setattr(menu, field_name, value)

        self._commit("update menu", menu_id=menu.id)

        logger.info("Menu updated", menu_id=menu.id, fields=sorted(changes))
        return self._menu_output(menu)

    # =========================================================================
    # Menu items
    # =========================================================================

    def list_items(self, menu_id: str) -> list[MenuItemOutput]:
        """Items by date, meal time and order index. Guests may read."""
        menu = self._get_menu(menu_id, Action.READ)
        return [self._item_output(i) for i in self._items.list_for_menu(menu.id)]

    def add_item(self, menu_id: str, data: MenuItemCreate) -> MenuItemOutput:
        """
        Schedule a recipe on the menu.

        The menu row stays locked from the checks to the insert, so the
        range and scope checks hold at commit time.
        """
        menu = self._get_menu(menu_id, Action.WRITE, lock=True)
        self._check_item_date(menu, data.date)
        recipe = self._get_recipe_in_scope(menu, data.recipe_id)

        item = MenuItem(
            menu_id=menu.id,
            recipe_id=recipe.id,
            date=data.date,
            meal_time=data.meal_time,
            servings=data.servings,
            order_index=data.order_index,
            note=data.note,
        )
        item.recipe = recipe
        self._items.save(item)
        self._commit("add menu item", menu_id=menu.id)

        logger.info(
            "Menu item added",
            menu_id=menu.id,
            item_id=item.id,
            guest=self._principal.is_guest,
        )
        return self._item_output(item)

    def update_item(self, menu_id: str, item_id: str, data: MenuItemUpdate) -> MenuItemOutput:
        menu = self._get_menu(menu_id, Action.WRITE, lock=True)
        item = self._get_item(menu, item_id)

        changes = data.model_dump(exclude_unset=True)
        if "date" in changes:
            self._check_item_date(menu, changes["date"])
        if "recipe_id" in changes and changes["recipe_id"] != item.recipe_id:
            item.recipe = self._get_recipe_in_scope(menu, changes["recipe_id"])

        for field_name, value in changes.items():
            setattr(item, field_name, value)

        self._commit("update menu item", menu_id=menu.id, item_id=item.id)

        logger.info("Menu item updated", menu_id=menu.id, item_id=item.id, fields=sorted(changes))
        return self._item_output(item)

    def delete_item(self, menu_id: str, item_id: str) -> None:
        menu = self._get_menu(menu_id, Action.WRITE, lock=True)
        item = self._get_item(menu, item_id)

        self._items.delete(item)
        self._commit("delete menu item", menu_id=menu.id, item_id=item_id)

        logger.info("Menu item deleted", menu_id=menu.id, item_id=item_id)

    # =========================================================================
    # Shares
    # =========================================================================

    def create_share(self, menu_id: str, data: MenuShareCreate) -> MenuShareOutput:
        """
        Issue a share for the menu. TOKEN shares get a fresh secret token,
        LINK shares none.
        """
        self.permissions.require_user("share menus")
        menu = self._get_menu(menu_id, Action.WRITE)

        expires_at = as_utc(data.expires_at)
        if expires_at is not None and expires_at <= utcnow():
            raise ValidationError("expiresAt must be in the future", menu_id=menu.id)

        share = MenuShare(
            menu_id=menu.id,
            share_type=data.share_type,
            token=generate_share_token() if data.share_type == ShareType.TOKEN else None,
            allow_edit=data.allow_edit,
            expires_at=expires_at,
            created_by=self.user_id,
        )
        self._shares.save(share)
        self._commit("create menu share", menu_id=menu.id)

        audit_share_event(
            "SHARE_CREATED",
            share_id=share.id,
            menu_id=menu.id,
            share_type=share.share_type,
            allow_edit=share.allow_edit,
            user_id=self.user_id,
        )
        return MenuShareOutput.model_validate(share)

    def list_shares(self, menu_id: str) -> list[MenuShareOutput]:
        self.permissions.require_user("view menu shares")
        menu = self._get_menu(menu_id, Action.READ)
        return [MenuShareOutput.model_validate(s) for s in self._shares.list_for_menu(menu.id)]

    def delete_share(self, share_id: str) -> None:
        """Revoke a share; authorized against the share's menu."""
        self.permissions.require_user("revoke menu shares")
        share = self._shares.find_by_id(share_id)
        if share is None:
            raise NotFoundError("Share", share_id)
        self.permissions.require(Action.WRITE, share.menu)

        self._shares.delete(share)
        self._commit("delete menu share", share_id=share_id)

        audit_share_event("SHARE_DELETED", share_id=share_id, menu_id=share.menu_id, user_id=self.user_id)

    def validate_share_token(self, menu_id: str, token: str | None) -> MenuShare | None:
        """
        Resolve the active share of ``menu_id`` holding exactly ``token``.

        Returns None for a missing, mismatched or expired token.
        """
        if not token:
            return None

        share = self._shares.find_by_menu_and_token(menu_id, token)
        if share is None or not share.token or not hmac.compare_digest(share.token, token):
            audit_share_event("SHARE_REJECTED", menu_id=menu_id, token=token, success=False, reason="no match")
            return None
        if share.is_expired():
            audit_share_event("SHARE_REJECTED", share_id=share.id, menu_id=menu_id, success=False, reason="expired")
            return None
        return share

    def get_shared_menu(self, share_id: str, token: str | None = None) -> SharedMenuOutput:
        """
        Open a menu through a share id.

        Expired shares are forbidden. TOKEN shares also require the matching
        token; a mismatch is forbidden rather than not found because the
        share's existence is already implied by the id.
        """
        share = self._shares.find_by_id(share_id)
        if share is None:
            raise NotFoundError("Share", share_id)

        if share.is_expired():
            raise ForbiddenError(detail=ErrorMessages.SHARE_EXPIRED, share_id=share_id)

        if share.share_type == ShareType.TOKEN:
            if not token or not share.token or not hmac.compare_digest(share.token, token):
                audit_share_event("SHARE_REJECTED", share_id=share_id, token=token, success=False, reason="invalid token")
                raise ForbiddenError(detail=ErrorMessages.SHARE_INVALID_TOKEN, share_id=share_id)

        menu = share.menu
        if menu is None:
            raise NotFoundError("Menu", share.menu_id)

        audit_share_event("SHARE_REDEEMED", share_id=share_id, menu_id=menu.id)
        return self._menu_detail(menu, SharedMenuOutput)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _get_menu(self, menu_id: str, action: Action, lock: bool = False) -> Menu:
        menu = self._menus.find_for_update(menu_id) if lock else self._menus.find_by_id(menu_id)
        if menu is None:
            raise NotFoundError("Menu", menu_id)
        self.permissions.require(action, menu)
        return menu

    def _get_item(self, menu: Menu, item_id: str) -> MenuItem:
        item = self._items.find_in_menu(item_id, menu.id)
        if item is None:
            raise NotFoundError("Menu item", item_id, menu_id=menu.id)
        return item

    @staticmethod
    def _check_item_date(menu: Menu, item_date: date) -> None:
        if not menu.covers(item_date):
            raise DateRangeError(
                ErrorMessages.DATE_OUT_OF_RANGE,
                menu_id=menu.id,
                date=str(item_date),
            )

    def _get_recipe_in_scope(self, menu: Menu, recipe_id: str) -> Recipe:
        """
        The recipe must live in the menu's scope: the same family group for
        group menus, visible to the menu's creator for personal menus.
        """
        if menu.family_group_id:
            recipe = self._recipes.find_by_id(recipe_id)
            if recipe is not None and recipe.family_group_id != menu.family_group_id:
                recipe = None
        else:
            recipe = self._recipes.find_visible(
                recipe_id,
                menu.created_by,
                self._families.group_ids_for_user(menu.created_by),
            )
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id, menu_id=menu.id)
        return recipe

    @staticmethod
    def _menu_output(menu: Menu) -> MenuOutput:
        return MenuOutput(
            id=menu.id,
            name=menu.name,
            description=menu.description,
            type=menu.type,
            tags=parse_json_list(menu.tags, "tags") if menu.tags is not None else None,
            start_date=menu.start_date,
            end_date=menu.end_date,
            status=menu.status,
            family_group_id=menu.family_group_id,
            created_by=menu.created_by,
            created_at=menu.created_at,
            updated_at=menu.updated_at,
        )

    def _menu_detail(self, menu: Menu, output_cls: type[MenuDetail]) -> MenuDetail:
        items = [self._item_output(i) for i in self._items.list_for_menu(menu.id)]
        return output_cls(**self._menu_output(menu).model_dump(), items=items)

    @staticmethod
    def _item_output(item: MenuItem) -> MenuItemOutput:
        recipe = item.recipe
        return MenuItemOutput(
            id=item.id,
            menu_id=item.menu_id,
            recipe_id=item.recipe_id,
            date=item.date,
            meal_time=item.meal_time,
            servings=item.servings,
            order_index=item.order_index,
            note=item.note,
            recipe=RecipeSummary.model_validate(recipe) if recipe is not None else None,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


def _check_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise DateRangeError(start_date=str(start_date), end_date=str(end_date))
