"""
Group model for shared expenses.
"""
from sqlalchemy import Column, String, Enum as SQLEnum, ForeignKey, Integer, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
import enum


class GroupRole(str, enum.Enum):
    """Member role enumeration."""
    ADMIN = "admin"
    MEMBER = "member"


class Group(BaseModel):
    """Group of members sharing expenses."""
    __tablename__ = "groups"
    
    name = Column(String(200), nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    
    # Relationships
    members = relationship("GroupMember", back_populates="group", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="group", cascade="all, delete-orphan")


class GroupMember(BaseModel):
    """Junction table for Group and User many-to-many relationship."""
    __tablename__ = "group_members"
    __table_args__ = (UniqueConstraint("group_id", "user_id", name="uq_group_member"),)
    
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    role = Column(SQLEnum(GroupRole), default=GroupRole.MEMBER, nullable=False)
    joined_at = Column(DateTime, nullable=False, server_default=func.now())
    
    # Relationships
    group = relationship("Group", back_populates="members")
    user = relationship("User", back_populates="memberships")
