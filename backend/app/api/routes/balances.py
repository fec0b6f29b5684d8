"""
Group balance routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.balance import GroupBalancesResponse
from app.services.balance_service import get_group_balance_summary
from app.api.routes.groups import check_group_exists

router = APIRouter(prefix="/groups", tags=["balances"])


@router.get("/{group_id}/balances", response_model=GroupBalancesResponse)
async def get_balances(
    group_id: int,
    db: Session = Depends(get_db)
):
    """Net balance per member plus suggested transfers to settle up."""
    check_group_exists(group_id, db)
    return get_group_balance_summary(group_id, db)
