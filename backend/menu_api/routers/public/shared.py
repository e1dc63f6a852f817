"""
Shared menu endpoint.

LINK shares open with the share id alone; TOKEN shares also need
``?token=``.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.utils.schemas import SharedMenuOutput
from menu_api.services.domain import MenuService


router = APIRouter(prefix="/shared", tags=["shared"])


@router.get("/{share_id}", response_model=SharedMenuOutput)
def get_shared_menu(
    share_id: str,
    token: str | None = None,
    db: Session = Depends(get_db),
) -> SharedMenuOutput:
    return MenuService(db).get_shared_menu(share_id, token)
