"""
Pydantic schemas for split calculation.
"""
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from decimal import Decimal
from app.models.expense import SplitPolicy


class MemberOverride(BaseModel):
    """Per-member split input. Only the field matching the active policy is read."""
    percentage: Optional[Decimal] = None  # 0-100, read under PERCENTAGE
    amount: Optional[Decimal] = None  # >= 0, read under FIXED_AMOUNT
    
    def merged(self, update: "MemberOverride") -> "MemberOverride":
        """Return a copy with the fields set on `update` replacing ours."""
        return self.model_copy(update=update.model_dump(exclude_none=True))


class MemberShare(BaseModel):
    """One member's computed share of an expense."""
    user_id: int
    policy: SplitPolicy
    percentage: Optional[Decimal] = None
    amount: Optional[Decimal] = None
    owed_amount: Decimal


class SplitResult(BaseModel):
    """Result of a split calculation. Recomputed on demand, never persisted."""
    shares: List[MemberShare] = []
    total_amount: Decimal
    is_valid: bool
    errors: List[str] = []


class SplitRequest(BaseModel):
    """Schema for previewing a split."""
    amount: Decimal = Field(gt=0, decimal_places=2)
    member_ids: List[int]
    policy: SplitPolicy = SplitPolicy.EQUAL
    overrides: Dict[int, MemberOverride] = {}
