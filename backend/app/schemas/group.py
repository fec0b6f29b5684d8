"""
Pydantic schemas for Group entity.
"""
from pydantic import BaseModel, Field
from typing import List
from datetime import datetime
from app.models.group import GroupRole


class Member(BaseModel):
    """Identity of a group member."""
    user_id: int
    display_name: str


class GroupCreate(BaseModel):
    """Schema for group creation."""
    name: str = Field(min_length=1, max_length=200)
    creator_id: int


class MemberAdd(BaseModel):
    """Schema for adding a member to a group."""
    user_id: int
    role: GroupRole = GroupRole.MEMBER


class RoleUpdate(BaseModel):
    """Schema for changing a member's role."""
    role: GroupRole


class GroupMemberResponse(Member):
    """Schema for group member response."""
    role: GroupRole
    joined_at: datetime


class GroupResponse(BaseModel):
    """Schema for group response."""
    id: int
    name: str
    created_by: int
    created_at: datetime
    
    class Config:
        from_attributes = True


class GroupDetailResponse(GroupResponse):
    """Schema for detailed group response with members."""
    members: List[GroupMemberResponse] = []
