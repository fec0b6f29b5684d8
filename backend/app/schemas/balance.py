"""
Pydantic schemas for group balances.
"""
from pydantic import BaseModel, field_serializer
from typing import List
from decimal import Decimal
from app.core.money import quantize_cents


class Balance(BaseModel):
    """Net position of one user in a group (positive = is owed money)."""
    user_id: int
    display_name: str
    net_amount: Decimal
    is_member: bool = True  # False for users who left the group but still carry history
    
    @field_serializer("net_amount")
    def round_for_display(self, value: Decimal) -> Decimal:
        return quantize_cents(value)


class Transfer(BaseModel):
    """Suggested payment to settle balances."""
    from_user_id: int
    to_user_id: int
    amount: Decimal
    
    @field_serializer("amount")
    def round_for_display(self, value: Decimal) -> Decimal:
        return quantize_cents(value)


class GroupBalancesResponse(BaseModel):
    """Schema for group balances response."""
    group_id: int
    currency: str
    total_expenses: Decimal
    balances: List[Balance]
    transfers: List[Transfer]
