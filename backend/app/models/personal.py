"""
Personal budgeting models: per-user categories and expenses.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class ExpenseCategory(BaseModel):
    """User-defined category for personal expenses."""
    __tablename__ = "expense_categories"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_category_user_name"),)
    
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    color = Column(String(20), nullable=True)
    icon = Column(String(50), nullable=True)
    
    # Relationships
    user = relationship("User", back_populates="categories")
    expenses = relationship("PersonalExpense", back_populates="category", cascade="all, delete-orphan")


class PersonalExpense(BaseModel):
    """Single-user expense, not shared with any group."""
    __tablename__ = "personal_expenses"
    
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("expense_categories.id"), nullable=False, index=True)
    amount = Column(Numeric(15, 2), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False, index=True)
    
    # Relationships
    user = relationship("User", back_populates="personal_expenses")
    category = relationship("ExpenseCategory", back_populates="expenses")
