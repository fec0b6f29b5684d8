"""
Group and membership routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.group import Group
from app.schemas.group import (
    GroupCreate, GroupResponse, GroupDetailResponse,
    GroupMemberResponse, MemberAdd, RoleUpdate
)
from app.services import member_service

router = APIRouter(prefix="/groups", tags=["groups"])


def check_group_exists(group_id: int, db: Session) -> Group:
    """Get group or raise 404."""
    try:
        return member_service.get_group(group_id, db)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found"
        )


def _member_responses(group_id: int, db: Session) -> List[GroupMemberResponse]:
    return [
        GroupMemberResponse(
            user_id=m.user_id,
            display_name=m.user.display_name,
            role=m.role,
            joined_at=m.joined_at
        )
        for m in member_service.list_memberships(group_id, db)
    ]


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: GroupCreate,
    db: Session = Depends(get_db)
):
    """Create a new group. The creator becomes its admin."""
    try:
        return member_service.create_group(group_data.name, group_data.creator_id, db)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.get("/{group_id}", response_model=GroupDetailResponse)
async def get_group(
    group_id: int,
    db: Session = Depends(get_db)
):
    """Get group details with members."""
    group = check_group_exists(group_id, db)
    return GroupDetailResponse(
        id=group.id,
        name=group.name,
        created_by=group.created_by,
        created_at=group.created_at,
        members=_member_responses(group_id, db)
    )


@router.get("/{group_id}/members", response_model=List[GroupMemberResponse])
async def list_members(
    group_id: int,
    db: Session = Depends(get_db)
):
    """List current members of a group."""
    check_group_exists(group_id, db)
    return _member_responses(group_id, db)


@router.post("/{group_id}/members", response_model=List[GroupMemberResponse], status_code=status.HTTP_201_CREATED)
async def add_member(
    group_id: int,
    member_data: MemberAdd,
    db: Session = Depends(get_db)
):
    """Add a user to a group."""
    check_group_exists(group_id, db)
    try:
        member_service.add_member(group_id, member_data.user_id, db, role=member_data.role)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return _member_responses(group_id, db)


@router.patch("/{group_id}/members/{user_id}", response_model=List[GroupMemberResponse])
async def change_role(
    group_id: int,
    user_id: int,
    role_data: RoleUpdate,
    db: Session = Depends(get_db)
):
    """Change a member's role."""
    check_group_exists(group_id, db)
    try:
        member_service.change_role(group_id, user_id, role_data.role, db)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    return _member_responses(group_id, db)


@router.delete("/{group_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    group_id: int,
    user_id: int,
    db: Session = Depends(get_db)
):
    """Remove a user from a group. Their expense history is kept."""
    check_group_exists(group_id, db)
    try:
        member_service.remove_member(group_id, user_id, db)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
