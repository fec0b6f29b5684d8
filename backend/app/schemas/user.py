"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime


class UserCreate(BaseModel):
    """Schema for user creation."""
    username: str = Field(min_length=3, max_length=50)
    display_name: str = Field(min_length=1, max_length=100)
    email: EmailStr


class UserResponse(BaseModel):
    """Schema for user response."""
    id: int
    username: str
    display_name: str
    email: str
    created_at: datetime
    
    class Config:
        from_attributes = True
