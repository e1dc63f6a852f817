"""
Family group endpoints: create, join by invite code, list members,
remove members.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.utils.schemas import (
    FamilyGroupCreate,
    FamilyGroupDetail,
    FamilyGroupOutput,
    JoinFamilyRequest,
    SuccessResponse,
)
from menu_api.routers._common import current_principal
from menu_api.services.domain import FamilyService
from menu_api.services.permissions import Principal


router = APIRouter(prefix="/family", tags=["family"])


@router.get("", response_model=list[FamilyGroupOutput])
def list_groups(
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> list[FamilyGroupOutput]:
    """Groups the caller belongs to, with the caller's role in each."""
    return FamilyService(db, principal).list_groups()


@router.post("", response_model=FamilyGroupOutput, status_code=status.HTTP_201_CREATED)
def create_group(
    body: FamilyGroupCreate,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> FamilyGroupOutput:
    """Create a group; the caller becomes its admin."""
    return FamilyService(db, principal).create_group(body)


@router.post("/join", response_model=FamilyGroupOutput)
def join_group(
    body: JoinFamilyRequest,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> FamilyGroupOutput:
    return FamilyService(db, principal).join_group(body)


@router.get("/{family_group_id}", response_model=FamilyGroupDetail)
def get_group(
    family_group_id: str,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> FamilyGroupDetail:
    return FamilyService(db, principal).get_group(family_group_id)


@router.delete("/{family_group_id}/members/{user_id}", response_model=SuccessResponse)
def remove_member(
    family_group_id: str,
    user_id: str,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    """Admins remove anyone; members may remove themselves (leave)."""
    FamilyService(db, principal).remove_member(family_group_id, user_id)
    return SuccessResponse()
