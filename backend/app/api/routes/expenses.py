"""
Shared expense routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.schemas.expense import ExpenseCreate, ExpenseResponse
from app.schemas.split import SplitRequest, SplitResult
from app.services import expense_service, member_service
from app.services.expense_service import ExpenseCreationError, InvalidSplitError
from app.services.split_calculator import calculate_split
from app.api.routes.groups import check_group_exists

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/groups", tags=["expenses"])


def check_members(group_id: int, user_ids: List[int], db: Session):
    """Raise 400 if any user is not a current member of the group."""
    current = {m.user_id for m in member_service.list_members(group_id, db)}
    outsiders = sorted(set(user_ids) - current)
    if outsiders:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Users are not members of this group: {outsiders}"
        )


@router.post("/{group_id}/splits/preview", response_model=SplitResult)
async def preview_split(
    group_id: int,
    split_data: SplitRequest,
    db: Session = Depends(get_db)
):
    """Calculate shares for the given input without saving anything."""
    check_group_exists(group_id, db)
    return calculate_split(
        split_data.amount,
        split_data.member_ids,
        split_data.policy,
        split_data.overrides
    )


@router.post("/{group_id}/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    group_id: int,
    expense_data: ExpenseCreate,
    db: Session = Depends(get_db)
):
    """Create an expense and its shares."""
    check_group_exists(group_id, db)
    check_members(group_id, [expense_data.payer_id] + expense_data.member_ids, db)

    try:
        return expense_service.create_expense_from_split(
            group_id=group_id,
            payer_id=expense_data.payer_id,
            description=expense_data.description.strip(),
            amount=expense_data.amount,
            member_ids=expense_data.member_ids,
            policy=expense_data.policy,
            overrides=expense_data.overrides,
            expense_date=expense_data.date,
            db=db
        )
    except InvalidSplitError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.errors
        )
    except ExpenseCreationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.get("/{group_id}/expenses", response_model=List[ExpenseResponse])
async def list_expenses(
    group_id: int,
    db: Session = Depends(get_db)
):
    """List all expenses of a group with their shares."""
    check_group_exists(group_id, db)
    return expense_service.list_expenses_by_group(group_id, db)


@router.delete("/{group_id}/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    group_id: int,
    expense_id: int,
    db: Session = Depends(get_db)
):
    """Delete an expense and its shares."""
    check_group_exists(group_id, db)
    try:
        expense_service.delete_expense(expense_id, db, group_id=group_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
