"""Share materialization for new expenses.

Shares are resolved once, when an expense is created, and stored as rows for
both split methods. The balance aggregator only ever reads stored shares.
"""

from decimal import Decimal, ROUND_DOWN
from typing import Mapping, Sequence

from groupsplit.domain.entities import SplitMethod
from groupsplit.domain.errors import ValidationError, custom_shares_mismatch
from groupsplit.domain.money import CENT, ZERO, to_cents


def even_shares(amount: Decimal, member_ids: Sequence[int]) -> dict[int, Decimal]:
    """Divide an amount equally, in whole cents.

    Every member gets ``amount / n`` rounded down to the cent; the leftover
    cents go one each to the first members in the given order. The shares
    always add up to exactly ``amount``.

    Args:
        amount: Expense amount, in whole cents
        member_ids: Members sharing the expense

    Returns:
        Mapping of member ID to share, in member order

    Raises:
        ValidationError: If there are no members to split between
    """
    if not member_ids:
        raise ValidationError("Cannot split an expense between zero members")

    count = len(member_ids)
    base = (amount / count).quantize(CENT, rounding=ROUND_DOWN)
    leftover_cents = int((amount - base * count) / CENT)

    shares = {}
    for index, member_id in enumerate(member_ids):
        shares[member_id] = base + CENT if index < leftover_cents else base
    return shares


def custom_shares(
    amount: Decimal, shares: Mapping[int, Decimal], member_ids: Sequence[int]
) -> dict[int, Decimal]:
    """Validate explicit per-member shares.

    Members that are not mentioned get a zero share so that every member has
    a row for every expense.

    Raises:
        ValidationError: If a share is negative, names a non-member, or the
            shares do not add up to the amount
    """
    if not shares:
        raise ValidationError("Custom split requires at least one share")

    known = set(member_ids)
    for user_id, share in shares.items():
        if user_id not in known:
            raise ValidationError(f"Share given for user {user_id}, who is not a member")
        if share < 0:
            raise ValidationError(f"Share for user {user_id} cannot be negative")
        if to_cents(share) != share:
            raise ValidationError(f"Share {share} has more than two decimal places")

    total = sum(shares.values(), ZERO)
    if total != amount:
        raise ValidationError(custom_shares_mismatch(total, amount))

    return {member_id: shares.get(member_id, ZERO) for member_id in member_ids}


def resolve_shares(
    amount: Decimal,
    split_method: SplitMethod,
    member_ids: Sequence[int],
    shares: Mapping[int, Decimal] | None = None,
) -> dict[int, Decimal]:
    """Resolve the stored shares of a new expense for either split method."""
    split_method = SplitMethod(split_method)
    if split_method is SplitMethod.EVEN:
        if shares:
            raise ValidationError("Shares can only be given for a CUSTOM split")
        return even_shares(amount, member_ids)
    return custom_shares(amount, shares or {}, member_ids)
