"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field, field_serializer
from typing import Dict, List, Optional
from datetime import date as dt_date, datetime
from decimal import Decimal
from app.core.money import quantize_cents
from app.models.expense import SplitPolicy
from app.schemas.split import MemberOverride


class ExpenseCreate(BaseModel):
    """Schema for expense creation."""
    payer_id: int
    description: str = Field(min_length=1, max_length=255)
    amount: Decimal = Field(gt=0, decimal_places=2)
    date: Optional[dt_date] = None  # Defaults to today
    member_ids: List[int]  # User IDs who share this expense
    policy: SplitPolicy = SplitPolicy.EQUAL
    overrides: Dict[int, MemberOverride] = {}


class ExpenseShareResponse(BaseModel):
    """Schema for expense share response."""
    user_id: int
    amount_owed: Decimal
    share_type: SplitPolicy
    custom_percentage: Optional[Decimal] = None
    custom_amount: Optional[Decimal] = None
    
    @field_serializer("amount_owed", "custom_amount")
    def round_for_display(self, value: Optional[Decimal]) -> Optional[Decimal]:
        return None if value is None else quantize_cents(value)
    
    class Config:
        from_attributes = True


class ExpenseResponse(BaseModel):
    """Schema for expense response."""
    id: int
    group_id: int
    payer_id: int
    description: str
    amount: Decimal
    date: dt_date
    shares: List[ExpenseShareResponse] = []
    created_at: datetime
    
    class Config:
        from_attributes = True
