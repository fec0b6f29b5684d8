"""
Pydantic schemas for personal budgeting.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date as dt_date, datetime
from decimal import Decimal


class CategoryCreate(BaseModel):
    """Schema for category creation."""
    name: str = Field(min_length=1, max_length=50)
    color: Optional[str] = None
    icon: Optional[str] = None


class CategoryUpdate(BaseModel):
    """Schema for category update. Only the given fields change."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    color: Optional[str] = None
    icon: Optional[str] = None


class CategoryResponse(CategoryCreate):
    """Schema for category response."""
    id: int
    user_id: int
    
    class Config:
        from_attributes = True


class PersonalExpenseCreate(BaseModel):
    """Schema for personal expense creation."""
    category_id: int
    amount: Decimal = Field(gt=0, decimal_places=2)
    description: Optional[str] = None
    date: Optional[dt_date] = None  # Defaults to today


class PersonalExpenseResponse(BaseModel):
    """Schema for personal expense response."""
    id: int
    user_id: int
    category_id: int
    amount: Decimal
    description: Optional[str] = None
    date: dt_date
    created_at: datetime
    
    class Config:
        from_attributes = True


class CategoryExpenseItem(BaseModel):
    """Schema for category expense item in summary."""
    category_id: int
    category: str
    total_amount: Decimal  # Total amount spent in this category
    expense_count: int  # Number of expenses in this category
    percentage: float  # Percentage of total expenses (0-100)


class CategorySummaryResponse(BaseModel):
    """Schema for category summary response."""
    user_id: int
    currency: str
    total_amount: Decimal
    categories: List[CategoryExpenseItem]  # Category-wise breakdown
