"""
Balance service: net balance per member from a group's expense history.
"""
import logging
from sqlalchemy.orm import Session
from typing import Dict, Iterable, List, Optional
from decimal import Decimal
from app.core.config import settings
from app.core.money import to_decimal
from app.schemas.balance import Balance, GroupBalancesResponse, Transfer
from app.schemas.group import Member
from app.services import expense_service, member_service

logger = logging.getLogger(__name__)


def aggregate_balances(
    members: Iterable[Member],
    expenses: Iterable,
    shares: Iterable,
    display_names: Optional[Dict[int, str]] = None
) -> List[Balance]:
    """
    Fold expenses and shares into one Balance per user.

    Every current member gets an entry, even without activity. Expenses are
    read through `payer_id` and `amount`, shares through `user_id` and
    `amount_owed`, so ORM rows work as well as plain objects.

    Users that show up in the history but are not current members still get
    an entry (is_member=False) so no money disappears from the ledger.
    """
    display_names = display_names or {}
    net: Dict[int, Decimal] = {}
    names: Dict[int, str] = {}
    current = set()

    for member in members:
        net[member.user_id] = Decimal(0)
        names[member.user_id] = member.display_name
        current.add(member.user_id)

    def entry(user_id: int):
        if user_id not in net:
            logger.warning(f"User {user_id} has expense history but is not a group member")
            net[user_id] = Decimal(0)
            names[user_id] = display_names.get(user_id, str(user_id))

    # Subtract what each user owes
    for share in shares:
        entry(share.user_id)
        net[share.user_id] -= to_decimal(share.amount_owed)

    # Add what each user paid
    for expense in expenses:
        entry(expense.payer_id)
        net[expense.payer_id] += to_decimal(expense.amount)

    return [
        Balance(
            user_id=user_id,
            display_name=names[user_id],
            net_amount=amount,
            is_member=user_id in current
        )
        for user_id, amount in net.items()
    ]


def suggest_transfers(balances: Iterable[Balance], tolerance=None) -> List[Transfer]:
    """
    Minimize the number of transfers needed to settle balances.
    Uses a greedy algorithm: largest debtor pays largest creditor.
    Remainders within tolerance are treated as settled.
    """
    tolerance = settings.SPLIT_TOLERANCE if tolerance is None else to_decimal(tolerance)

    # Separate creditors (positive balance) and debtors (negative balance)
    creditors = [[b.user_id, b.net_amount] for b in balances if b.net_amount > tolerance]
    debtors = [[b.user_id, -b.net_amount] for b in balances if b.net_amount < -tolerance]

    # Sort in descending order
    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    transfers = []
    cred_idx = 0
    debt_idx = 0

    while cred_idx < len(creditors) and debt_idx < len(debtors):
        creditor = creditors[cred_idx]
        debtor = debtors[debt_idx]

        # Transfer the minimum of what's owed and what's needed
        amount = min(creditor[1], debtor[1])
        transfers.append(Transfer(from_user_id=debtor[0], to_user_id=creditor[0], amount=amount))

        creditor[1] -= amount
        debtor[1] -= amount

        if creditor[1] <= tolerance:
            cred_idx += 1
        if debtor[1] <= tolerance:
            debt_idx += 1

    return transfers


def get_group_balances(group_id: int, db: Session) -> List[Balance]:
    """Load a group's history and compute its balances."""
    member_service.get_group(group_id, db)

    members = member_service.list_members(group_id, db)
    expenses = expense_service.list_expenses_by_group(group_id, db)
    shares = expense_service.list_shares_by_group(group_id, db)

    known = {m.user_id for m in members}
    former = {s.user_id for s in shares} | {e.payer_id for e in expenses}
    display_names = member_service.resolve_display_names(former - known, db)

    return aggregate_balances(members, expenses, shares, display_names)


def get_group_balance_summary(group_id: int, db: Session) -> GroupBalancesResponse:
    """Balances plus suggested settle-up transfers for a group."""
    balances = get_group_balances(group_id, db)
    expenses = expense_service.list_expenses_by_group(group_id, db)

    return GroupBalancesResponse(
        group_id=group_id,
        currency=settings.DEFAULT_CURRENCY,
        total_expenses=sum((to_decimal(e.amount) for e in expenses), Decimal(0)),
        balances=balances,
        transfers=suggest_transfers(balances)
    )
