"""
Personal budgeting routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from app.db.session import get_db
from app.schemas.personal import (
    CategoryCreate, CategoryUpdate, CategoryResponse, CategorySummaryResponse,
    PersonalExpenseCreate, PersonalExpenseResponse
)
from app.services import personal_service

router = APIRouter(prefix="/users/{user_id}", tags=["personal"])


@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    user_id: int,
    category_data: CategoryCreate,
    db: Session = Depends(get_db)
):
    """Create a personal expense category."""
    try:
        return personal_service.create_category(
            user_id, category_data.name, db,
            color=category_data.color, icon=category_data.icon
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories(
    user_id: int,
    db: Session = Depends(get_db)
):
    """List a user's categories."""
    return personal_service.list_categories(user_id, db)


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    user_id: int,
    category_id: int,
    category_data: CategoryUpdate,
    db: Session = Depends(get_db)
):
    """Rename or restyle a category."""
    try:
        return personal_service.update_category(
            user_id, category_id, db,
            name=category_data.name,
            color=category_data.color,
            icon=category_data.icon
        )
    except LookupError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    user_id: int,
    category_id: int,
    db: Session = Depends(get_db)
):
    """Delete a category and its expenses."""
    try:
        personal_service.delete_category(user_id, category_id, db)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.post("/personal-expenses", response_model=PersonalExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_personal_expense(
    user_id: int,
    expense_data: PersonalExpenseCreate,
    db: Session = Depends(get_db)
):
    """Create a personal expense."""
    try:
        return personal_service.create_personal_expense(
            user_id=user_id,
            category_id=expense_data.category_id,
            amount=expense_data.amount,
            description=expense_data.description,
            expense_date=expense_data.date,
            db=db
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.get("/personal-expenses", response_model=List[PersonalExpenseResponse])
async def list_personal_expenses(
    user_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """List personal expenses, optionally within a date range."""
    return personal_service.list_personal_expenses(user_id, db, start_date, end_date)


@router.get("/personal-expenses/summary", response_model=CategorySummaryResponse)
async def get_category_summary(
    user_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """
    Get personal expense summary by category.
    Returns total amount spent in each category.
    """
    try:
        return personal_service.summarize_by_category(user_id, db, start_date, end_date)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.delete("/personal-expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_personal_expense(
    user_id: int,
    expense_id: int,
    db: Session = Depends(get_db)
):
    """Delete a personal expense."""
    try:
        personal_service.delete_personal_expense(user_id, expense_id, db)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
