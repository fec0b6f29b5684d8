"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.group import Group, GroupMember, GroupRole
from app.models.expense import Expense, ExpenseShare, SplitPolicy
from app.models.personal import ExpenseCategory, PersonalExpense

__all__ = [
    "User",
    "Group",
    "GroupMember",
    "GroupRole",
    "Expense",
    "ExpenseShare",
    "SplitPolicy",
    "ExpenseCategory",
    "PersonalExpense",
]
