"""
Menus router.

Menu and share management require a bearer token. Item endpoints also
accept an ``X-Share-Token`` header; shared-menu retrieval by share id is
public.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shared.config.constants import Limits
from shared.infrastructure.db import get_db
from shared.utils.schemas import (
    MenuCreate,
    MenuItemCreate,
    MenuItemOutput,
    MenuItemUpdate,
    MenuDetail,
    MenuListResponse,
    MenuOutput,
    MenuShareCreate,
    MenuShareOutput,
    MenuStatus,
    MenuUpdate,
    SharedMenuOutput,
    SuccessResponse,
)
from menu_api.routers._common import current_principal, menu_principal
from menu_api.services.domain import MenuService
from menu_api.services.permissions import Principal


router = APIRouter(prefix="/menus", tags=["menus"])


# =============================================================================
# Menus
# =============================================================================


@router.get("", response_model=MenuListResponse)
def list_menus(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=Limits.DEFAULT_PAGE_SIZE, ge=1, le=Limits.MAX_MENU_PAGE_SIZE),
    family_group_id: str | None = Query(default=None, alias="familyGroupId"),
    menu_status: MenuStatus | None = Query(default=None, alias="status"),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> MenuListResponse:
    """
    The group's menus when ``familyGroupId`` is given, otherwise the
    caller's personal menus. The date window applies to the start date.
    """
    return MenuService(db, principal).list_menus(
        page=page,
        limit=limit,
        family_group_id=family_group_id,
        status=menu_status,
        start_date=start_date,
        end_date=end_date,
    )


@router.post("", response_model=MenuOutput, status_code=status.HTTP_201_CREATED)
def create_menu(
    body: MenuCreate,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> MenuOutput:
    return MenuService(db, principal).create_menu(body)


@router.get("/{menu_id}", response_model=MenuDetail)
def get_menu(
    menu_id: str,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> MenuDetail:
    return MenuService(db, principal).get_menu(menu_id)


@router.put("/{menu_id}", response_model=MenuOutput)
def update_menu(
    menu_id: str,
    body: MenuUpdate,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> MenuOutput:
    return MenuService(db, principal).update_menu(menu_id, body)


# =============================================================================
# Menu items (bearer token or X-Share-Token)
# =============================================================================


@router.get("/{menu_id}/items", response_model=list[MenuItemOutput])
def list_menu_items(
    menu_id: str,
    principal: Principal = Depends(menu_principal),
    db: Session = Depends(get_db),
) -> list[MenuItemOutput]:
    return MenuService(db, principal).list_items(menu_id)


@router.post("/{menu_id}/items", response_model=MenuItemOutput, status_code=status.HTTP_201_CREATED)
def add_menu_item(
    menu_id: str,
    body: MenuItemCreate,
    principal: Principal = Depends(menu_principal),
    db: Session = Depends(get_db),
) -> MenuItemOutput:
    """Schedule a recipe; guests need a share with allowEdit."""
    return MenuService(db, principal).add_item(menu_id, body)


@router.put("/{menu_id}/items/{item_id}", response_model=MenuItemOutput)
def update_menu_item(
    menu_id: str,
    item_id: str,
    body: MenuItemUpdate,
    principal: Principal = Depends(menu_principal),
    db: Session = Depends(get_db),
) -> MenuItemOutput:
    return MenuService(db, principal).update_item(menu_id, item_id, body)


@router.delete("/{menu_id}/items/{item_id}", response_model=SuccessResponse)
def delete_menu_item(
    menu_id: str,
    item_id: str,
    principal: Principal = Depends(menu_principal),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    MenuService(db, principal).delete_item(menu_id, item_id)
    return SuccessResponse()


# =============================================================================
# Shares
# =============================================================================


@router.post("/{menu_id}/shares", response_model=MenuShareOutput, status_code=status.HTTP_201_CREATED)
def create_menu_share(
    menu_id: str,
    body: MenuShareCreate,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> MenuShareOutput:
    """Issue a share. The token is returned only here and in the share list."""
    return MenuService(db, principal).create_share(menu_id, body)


@router.get("/{menu_id}/shares", response_model=list[MenuShareOutput])
def list_menu_shares(
    menu_id: str,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> list[MenuShareOutput]:
    return MenuService(db, principal).list_shares(menu_id)


@router.delete("/share/{share_id}", response_model=SuccessResponse)
def delete_menu_share(
    share_id: str,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    MenuService(db, principal).delete_share(share_id)
    return SuccessResponse()


@router.get("/{share_id}/shared", response_model=SharedMenuOutput)
def get_shared_menu(
    share_id: str,
    token: str | None = None,
    db: Session = Depends(get_db),
) -> SharedMenuOutput:
    """Public: the shared menu with its items."""
    return MenuService(db).get_shared_menu(share_id, token)
