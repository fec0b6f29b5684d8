"""
Expense service: atomic creation of expenses with their shares.
"""
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional
from app.core.money import quantize_storage
from app.models.expense import Expense, ExpenseShare, SplitPolicy
from app.schemas.split import MemberOverride, MemberShare
from app.services.split_calculator import calculate_split

logger = logging.getLogger(__name__)

PERCENT_PRECISION = Decimal("0.0001")


class InvalidSplitError(ValueError):
    """Raised when trying to persist a split that does not reconcile."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class ExpenseCreationError(RuntimeError):
    """Raised when an expense and its shares could not be stored together."""


def create_share_batch(expense_id: int, shares: List[MemberShare], db: Session) -> List[ExpenseShare]:
    """
    Add share rows for an expense to the open transaction.
    Does not commit; the caller owns the transaction.
    """
    rows = []
    for share in shares:
        row = ExpenseShare(
            expense_id=expense_id,
            user_id=share.user_id,
            amount_owed=quantize_storage(share.owed_amount),
            share_type=share.policy,
            custom_percentage=None if share.percentage is None else share.percentage.quantize(PERCENT_PRECISION),
            custom_amount=None if share.amount is None else quantize_storage(share.amount)
        )
        db.add(row)
        rows.append(row)
    return rows


def create_expense_with_shares(
    group_id: int,
    payer_id: int,
    description: str,
    amount: Decimal,
    shares: List[MemberShare],
    expense_date: date = None,
    db: Session = None
) -> Expense:
    """
    Create an expense and all its shares in one transaction.
    Either everything is stored or nothing is.
    """
    if not shares:
        raise ValueError("An expense needs at least one share")

    try:
        expense = Expense(
            group_id=group_id,
            payer_id=payer_id,
            description=description,
            amount=amount,
            date=expense_date or date.today()
        )
        db.add(expense)
        db.flush()

        create_share_batch(expense.id, shares, db)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to store expense for group {group_id}, rolled back: {e}", exc_info=True)
        raise ExpenseCreationError("Expense could not be saved") from e

    db.refresh(expense)
    logger.info(f"Created expense {expense.id} in group {group_id} with {len(shares)} shares")
    return expense


def create_expense_from_split(
    group_id: int,
    payer_id: int,
    description: str,
    amount: Decimal,
    member_ids: List[int],
    policy: SplitPolicy = SplitPolicy.EQUAL,
    overrides: Optional[Dict[int, MemberOverride]] = None,
    expense_date: date = None,
    db: Session = None
) -> Expense:
    """Calculate the split, refuse it if invalid, then store expense and shares."""
    result = calculate_split(amount, member_ids, policy, overrides)
    if not result.is_valid:
        logger.warning(f"Rejected invalid split for group {group_id}: {result.errors}")
        raise InvalidSplitError(result.errors)

    return create_expense_with_shares(
        group_id=group_id,
        payer_id=payer_id,
        description=description,
        amount=amount,
        shares=result.shares,
        expense_date=expense_date,
        db=db
    )


def list_expenses_by_group(group_id: int, db: Session) -> List[Expense]:
    """All expenses of a group, oldest first."""
    return db.query(Expense).options(
        selectinload(Expense.shares)
    ).filter(
        Expense.group_id == group_id
    ).order_by(Expense.date, Expense.id).all()


def list_shares_by_group(group_id: int, db: Session) -> List[ExpenseShare]:
    """All expense shares of a group, joined through their expense."""
    return db.query(ExpenseShare).join(Expense).filter(
        Expense.group_id == group_id
    ).order_by(ExpenseShare.id).all()


def delete_expense(expense_id: int, db: Session, group_id: int = None):
    """Delete an expense together with its shares."""
    query = db.query(Expense).filter(Expense.id == expense_id)
    if group_id is not None:
        query = query.filter(Expense.group_id == group_id)
    expense = query.first()
    if not expense:
        raise ValueError("Expense not found")

    db.delete(expense)
    db.commit()
    logger.info(f"Deleted expense {expense_id}")
