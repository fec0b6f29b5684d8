"""
User model acting as the member directory / profile store.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class User(BaseModel):
    """User profile referenced by id from groups and expenses."""
    __tablename__ = "users"
    
    username = Column(String(50), unique=True, nullable=False, index=True)
    display_name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    
    # Relationships
    memberships = relationship("GroupMember", back_populates="user", cascade="all, delete-orphan")
    expenses_paid = relationship("Expense", foreign_keys="Expense.payer_id", back_populates="payer")
    expense_shares = relationship("ExpenseShare", back_populates="user")
    categories = relationship("ExpenseCategory", back_populates="user", cascade="all, delete-orphan")
    personal_expenses = relationship("PersonalExpense", back_populates="user", cascade="all, delete-orphan")
