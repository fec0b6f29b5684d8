"""
Personal budgeting service: categories and single-user expenses.
"""
import logging
from sqlalchemy.orm import Session
from datetime import date
from decimal import Decimal
from typing import List, Optional
from app.core.config import settings
from app.models.personal import ExpenseCategory, PersonalExpense
from app.models.user import User
from app.schemas.personal import CategoryExpenseItem, CategorySummaryResponse

logger = logging.getLogger(__name__)


def _get_user(user_id: int, db: Session) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise ValueError("User not found")
    return user


def _check_name_free(user_id: int, name: str, db: Session, exclude_id: int = None):
    """Category names are unique per user, ignoring case."""
    existing = db.query(ExpenseCategory).filter(
        ExpenseCategory.user_id == user_id
    ).all()
    if any(c.name.lower() == name.lower() and c.id != exclude_id for c in existing):
        raise ValueError(f"Category '{name}' already exists")


def create_category(user_id: int, name: str, db: Session, color: str = None, icon: str = None) -> ExpenseCategory:
    """Create a category. Names are unique per user (case-insensitive)."""
    _get_user(user_id, db)
    name = name.strip()
    _check_name_free(user_id, name, db)

    category = ExpenseCategory(user_id=user_id, name=name, color=color, icon=icon)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def update_category(
    user_id: int,
    category_id: int,
    db: Session,
    name: str = None,
    color: str = None,
    icon: str = None
) -> ExpenseCategory:
    """Update the given fields of a category. Fields left as None are kept."""
    category = db.query(ExpenseCategory).filter(
        ExpenseCategory.id == category_id,
        ExpenseCategory.user_id == user_id
    ).first()
    if not category:
        raise LookupError("Category not found")

    if name is not None:
        name = name.strip()
        _check_name_free(user_id, name, db, exclude_id=category_id)
        category.name = name
    if color is not None:
        category.color = color
    if icon is not None:
        category.icon = icon

    db.commit()
    db.refresh(category)
    logger.info(f"Updated category {category_id} of user {user_id}")
    return category


def list_categories(user_id: int, db: Session) -> List[ExpenseCategory]:
    return db.query(ExpenseCategory).filter(
        ExpenseCategory.user_id == user_id
    ).order_by(ExpenseCategory.name).all()


def delete_category(user_id: int, category_id: int, db: Session):
    """Delete a category and the expenses filed under it."""
    category = db.query(ExpenseCategory).filter(
        ExpenseCategory.id == category_id,
        ExpenseCategory.user_id == user_id
    ).first()
    if not category:
        raise ValueError("Category not found")

    db.delete(category)
    db.commit()
    logger.info(f"Deleted category {category_id} of user {user_id}")


def create_personal_expense(
    user_id: int,
    category_id: int,
    amount: Decimal,
    description: str = None,
    expense_date: date = None,
    db: Session = None
) -> PersonalExpense:
    """Create a personal expense in one of the user's categories."""
    category = db.query(ExpenseCategory).filter(
        ExpenseCategory.id == category_id,
        ExpenseCategory.user_id == user_id
    ).first()
    if not category:
        raise ValueError("Category not found")

    expense = PersonalExpense(
        user_id=user_id,
        category_id=category_id,
        amount=amount,
        description=description,
        date=expense_date or date.today()
    )
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return expense


def list_personal_expenses(
    user_id: int,
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> List[PersonalExpense]:
    """Personal expenses of a user, newest first, optionally within a date range."""
    query = db.query(PersonalExpense).filter(PersonalExpense.user_id == user_id)
    if start_date:
        query = query.filter(PersonalExpense.date >= start_date)
    if end_date:
        query = query.filter(PersonalExpense.date <= end_date)
    return query.order_by(PersonalExpense.date.desc(), PersonalExpense.id.desc()).all()


def delete_personal_expense(user_id: int, expense_id: int, db: Session):
    expense = db.query(PersonalExpense).filter(
        PersonalExpense.id == expense_id,
        PersonalExpense.user_id == user_id
    ).first()
    if not expense:
        raise ValueError("Expense not found")

    db.delete(expense)
    db.commit()


def summarize_by_category(
    user_id: int,
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> CategorySummaryResponse:
    """
    Get expense summary by category for a user.
    Returns total amount, count and share of the overall total per category.
    """
    _get_user(user_id, db)
    expenses = list_personal_expenses(user_id, db, start_date, end_date)
    categories = {c.id: c.name for c in list_categories(user_id, db)}

    total_amount = sum((e.amount for e in expenses), Decimal(0))

    # Group expenses by category
    category_totals = {}
    category_counts = {}
    for expense in expenses:
        if expense.category_id not in category_totals:
            category_totals[expense.category_id] = Decimal(0)
            category_counts[expense.category_id] = 0
        category_totals[expense.category_id] += expense.amount
        category_counts[expense.category_id] += 1

    # Build category items with percentage
    category_items = []
    for category_id, amount in category_totals.items():
        percentage = float((amount / total_amount * 100) if total_amount > 0 else 0)
        category_items.append(CategoryExpenseItem(
            category_id=category_id,
            category=categories.get(category_id, ""),
            total_amount=amount,
            expense_count=category_counts[category_id],
            percentage=percentage
        ))

    # Sort by total amount (descending)
    category_items.sort(key=lambda x: x.total_amount, reverse=True)

    return CategorySummaryResponse(
        user_id=user_id,
        currency=settings.DEFAULT_CURRENCY,
        total_amount=total_amount,
        categories=category_items
    )
