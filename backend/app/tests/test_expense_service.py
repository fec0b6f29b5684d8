"""
Tests for expense persistence.
"""
import pytest
from decimal import Decimal
from datetime import date
from sqlalchemy.exc import SQLAlchemyError
from app.models.expense import Expense, ExpenseShare, SplitPolicy
from app.schemas.split import MemberOverride
from app.services import expense_service
from app.services.expense_service import ExpenseCreationError, InvalidSplitError


def test_create_expense_with_equal_shares(db, users, group):
    alice, bob, carol = users
    expense = expense_service.create_expense_from_split(
        group.id, alice.id, "Groceries", Decimal("100.00"),
        [alice.id, bob.id, carol.id],
        expense_date=date(2024, 5, 1),
        db=db
    )

    assert expense.id is not None
    assert expense.date == date(2024, 5, 1)
    assert len(expense.shares) == 3
    # Shares keep ledger precision, cents are only for display
    assert all(s.amount_owed == Decimal("33.333333") for s in expense.shares)
    assert all(s.share_type == SplitPolicy.EQUAL for s in expense.shares)


def test_create_expense_with_percentage_shares(db, users, group):
    alice, bob, _ = users
    expense = expense_service.create_expense_from_split(
        group.id, alice.id, "Rent", Decimal("100.00"), [alice.id, bob.id],
        policy=SplitPolicy.PERCENTAGE,
        overrides={
            alice.id: MemberOverride(percentage=Decimal(60)),
            bob.id: MemberOverride(percentage=Decimal(40)),
        },
        db=db
    )

    rows = {s.user_id: s for s in expense.shares}
    assert rows[alice.id].amount_owed == Decimal(60)
    assert rows[bob.id].custom_percentage == Decimal(40)
    assert rows[bob.id].custom_amount is None


def test_invalid_split_is_not_persisted(db, users, group):
    alice, bob, _ = users
    with pytest.raises(InvalidSplitError) as exc_info:
        expense_service.create_expense_from_split(
            group.id, alice.id, "Rent", Decimal("100.00"), [alice.id, bob.id],
            policy=SplitPolicy.PERCENTAGE,
            overrides={
                alice.id: MemberOverride(percentage=Decimal(60)),
                bob.id: MemberOverride(percentage=Decimal(30)),
            },
            db=db
        )

    assert "90.0%" in exc_info.value.errors[0]
    assert db.query(Expense).count() == 0


def test_expense_without_shares_is_refused(db, users, group):
    with pytest.raises(ValueError):
        expense_service.create_expense_with_shares(
            group.id, users[0].id, "Nothing", Decimal(10), [], db=db
        )


def test_failed_share_insert_rolls_back_expense(db, users, group, monkeypatch):
    """An expense is never left behind without its shares."""
    alice, bob, _ = users

    def broken_batch(expense_id, shares, session):
        session.add(ExpenseShare(
            expense_id=expense_id,
            user_id=shares[0].user_id,
            amount_owed=Decimal(1),
            share_type=SplitPolicy.EQUAL
        ))
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(expense_service, "create_share_batch", broken_batch)

    with pytest.raises(ExpenseCreationError):
        expense_service.create_expense_from_split(
            group.id, alice.id, "Taxi", Decimal("20.00"), [alice.id, bob.id], db=db
        )

    assert db.query(Expense).count() == 0
    assert db.query(ExpenseShare).count() == 0


def test_list_by_group_only_returns_that_group(db, users, group):
    from app.services import member_service

    alice, bob, _ = users
    other = member_service.create_group("Office", bob.id, db)
    expense_service.create_expense_from_split(
        group.id, alice.id, "Groceries", Decimal(30), [alice.id, bob.id], db=db
    )
    expense_service.create_expense_from_split(
        other.id, bob.id, "Coffee", Decimal(4), [bob.id], db=db
    )

    expenses = expense_service.list_expenses_by_group(group.id, db)
    shares = expense_service.list_shares_by_group(group.id, db)

    assert [e.description for e in expenses] == ["Groceries"]
    assert sorted(s.user_id for s in shares) == [alice.id, bob.id]


def test_delete_expense_removes_shares(db, users, group):
    alice, bob, _ = users
    expense = expense_service.create_expense_from_split(
        group.id, alice.id, "Groceries", Decimal(30), [alice.id, bob.id], db=db
    )

    expense_service.delete_expense(expense.id, db, group_id=group.id)

    assert db.query(Expense).count() == 0
    assert db.query(ExpenseShare).count() == 0


def test_delete_unknown_expense(db):
    with pytest.raises(ValueError):
        expense_service.delete_expense(999, db)
