"""
Expense and share models for shared spending.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, Enum as SQLEnum
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
import enum


class SplitPolicy(str, enum.Enum):
    """How an expense total is divided among members."""
    EQUAL = "equal"
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"


class Expense(BaseModel):
    """Expense model representing a single payment event."""
    __tablename__ = "expenses"
    
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False, index=True)
    payer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    
    # Relationships
    group = relationship("Group", back_populates="expenses")
    payer = relationship("User", foreign_keys=[payer_id], back_populates="expenses_paid")
    shares = relationship("ExpenseShare", back_populates="expense", cascade="all, delete-orphan")


class ExpenseShare(BaseModel):
    """One member's portion of an expense. Never mutated after creation."""
    __tablename__ = "expense_shares"
    
    expense_id = Column(Integer, ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    amount_owed = Column(Numeric(19, 6), nullable=False)  # Ledger scale, rounded to cents only for display
    share_type = Column(SQLEnum(SplitPolicy), default=SplitPolicy.EQUAL, nullable=False)
    custom_percentage = Column(Numeric(7, 4), nullable=True)
    custom_amount = Column(Numeric(19, 6), nullable=True)
    
    # Relationships
    expense = relationship("Expense", back_populates="shares")
    user = relationship("User", back_populates="expense_shares")
