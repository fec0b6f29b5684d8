"""
Split calculator: divides an expense total among members.

Supports three policies:
1. EQUAL: every member owes total / member count
2. PERCENTAGE: every member owes total * percentage / 100
3. FIXED_AMOUNT: every member owes the amount entered for them

The calculation never raises for out-of-range numbers. Imbalances are
reported through SplitResult.errors and it is up to the caller to refuse
persisting an invalid result.
"""
import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from app.core.config import settings
from app.core.money import to_decimal, within_tolerance
from app.models.expense import SplitPolicy
from app.schemas.split import MemberOverride, MemberShare, SplitResult

logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)


def calculate_split(
    total_amount,
    member_ids: Iterable[int],
    policy: SplitPolicy = SplitPolicy.EQUAL,
    overrides: Optional[Dict[int, MemberOverride]] = None,
    tolerance=None
) -> SplitResult:
    """
    Compute every member's share of total_amount.

    Args:
        total_amount: Expense total. Not rejected here when <= 0.
        member_ids: Ordered member ids, output shares follow this order
        policy: Split policy
        overrides: Per-member percentage/amount, ignored under EQUAL
        tolerance: Reconciliation tolerance (defaults to settings.SPLIT_TOLERANCE)

    Returns:
        SplitResult with one share per member and the validation verdict
    """
    total = to_decimal(total_amount)
    members = list(member_ids)
    overrides = overrides or {}
    tolerance = settings.SPLIT_TOLERANCE if tolerance is None else to_decimal(tolerance)
    errors: List[str] = []

    if not members:
        errors.append("At least one member is required")
        return SplitResult(shares=[], total_amount=total, is_valid=False, errors=errors)

    if len(set(members)) != len(members):
        errors.append("Each member can only appear once in a split")

    shares: List[MemberShare] = []
    total_percentage = Decimal(0)
    total_calculated = Decimal(0)

    for user_id in members:
        override = overrides.get(user_id) or MemberOverride()
        percentage = None
        amount = None

        if policy == SplitPolicy.EQUAL:
            owed = total / len(members)
        elif policy == SplitPolicy.PERCENTAGE:
            percentage = to_decimal(override.percentage or 0)
            owed = total * percentage / HUNDRED
            total_percentage += percentage
        else:
            amount = to_decimal(override.amount or 0)
            owed = amount

        total_calculated += owed
        shares.append(MemberShare(
            user_id=user_id,
            policy=policy,
            percentage=percentage,
            amount=amount,
            owed_amount=owed
        ))

    if policy == SplitPolicy.PERCENTAGE and not within_tolerance(total_percentage, HUNDRED, tolerance):
        errors.append(f"Percentages must add up to 100% (actual: {total_percentage:.1f}%)")

    if policy == SplitPolicy.FIXED_AMOUNT and not within_tolerance(total_calculated, total, tolerance):
        errors.append(f"Amounts must add up to {total:.2f} (actual: {total_calculated:.2f})")

    if any(share.owed_amount < 0 for share in shares):
        errors.append("Shares cannot be negative")

    return SplitResult(
        shares=shares,
        total_amount=total,
        is_valid=not errors,
        errors=errors
    )


class SplitCalculator:
    """
    Stateful wrapper used while a user edits a split.

    Holds the active policy and per-member overrides. The result is derived
    from that state and cached until the next change.
    """

    def __init__(self, total_amount, member_ids: Iterable[int], policy: SplitPolicy = SplitPolicy.EQUAL):
        self._total_amount = to_decimal(total_amount)
        self._member_ids = list(member_ids)
        self._policy = policy
        self._overrides: Dict[int, MemberOverride] = {}
        self._result: Optional[SplitResult] = None

    @property
    def policy(self) -> SplitPolicy:
        return self._policy

    @property
    def total_amount(self) -> Decimal:
        return self._total_amount

    @property
    def member_ids(self) -> List[int]:
        return list(self._member_ids)

    @property
    def overrides(self) -> Dict[int, MemberOverride]:
        return {user_id: override.model_copy() for user_id, override in self._overrides.items()}

    def set_policy(self, policy: SplitPolicy):
        """Switch policy. Overrides are kept; EQUAL simply ignores them."""
        self._policy = policy
        self._result = None

    def set_total_amount(self, total_amount):
        self._total_amount = to_decimal(total_amount)
        self._result = None

    def set_members(self, member_ids: Iterable[int]):
        """Replace the member list, dropping overrides of removed members."""
        self._member_ids = list(member_ids)
        self._overrides = {
            user_id: override for user_id, override in self._overrides.items()
            if user_id in self._member_ids
        }
        self._result = None

    def update_member_split(self, user_id: int, percentage=None, amount=None):
        """Merge a partial override for one member. Fields not given are preserved."""
        update = MemberOverride(
            percentage=None if percentage is None else to_decimal(percentage),
            amount=None if amount is None else to_decimal(amount)
        )
        current = self._overrides.get(user_id) or MemberOverride()
        self._overrides[user_id] = current.merged(update)
        self._result = None

    def reset_to_equal(self):
        """Switch to EQUAL and clear every override."""
        self._policy = SplitPolicy.EQUAL
        self._overrides = {}
        self._result = None

    def distribute_equally(self):
        """Fill overrides with an even split for the active policy. No-op under EQUAL."""
        if not self._member_ids or self._policy == SplitPolicy.EQUAL:
            return

        count = len(self._member_ids)
        if self._policy == SplitPolicy.PERCENTAGE:
            self._overrides = {
                user_id: MemberOverride(percentage=HUNDRED / count) for user_id in self._member_ids
            }
        else:
            self._overrides = {
                user_id: MemberOverride(amount=self._total_amount / count) for user_id in self._member_ids
            }
        self._result = None

    def calculate(self) -> SplitResult:
        """Return the split for the current state."""
        if self._result is None:
            self._result = calculate_split(
                self._total_amount,
                self._member_ids,
                self._policy,
                self._overrides
            )
            if not self._result.is_valid:
                logger.debug(f"Split is not valid: {self._result.errors}")
        return self._result
