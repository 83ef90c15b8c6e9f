"""Balance aggregation over expense, share and settlement rows.

Sign convention: a positive ``net_balance`` means the member is owed money,
a negative one means the member owes money.

Shares are read as stored. Every expense, EVEN or CUSTOM, has one share row
per member (see ``groupsplit.domain.splitting``), so nothing here depends on
the split method.
"""

from decimal import Decimal
from typing import Iterable, Sequence

from groupsplit.domain.entities import (
    Expense,
    ExpenseShare,
    Member,
    MemberAggregate,
    Settlement,
    SettlementScope,
)
from groupsplit.domain.errors import InvalidAggregateInputError, invalid_aggregate_input
from groupsplit.domain.money import ZERO, TOLERANCE, as_decimal


def aggregate_balances(
    members: Sequence[Member],
    expenses: Iterable[Expense],
    expense_shares: Iterable[ExpenseShare],
    settlements: Iterable[Settlement],
    scope: SettlementScope = SettlementScope.UNSETTLED_ONLY,
) -> list[MemberAggregate]:
    """Compute one MemberAggregate per member.

    Args:
        members: Group members, in the order the result should follow
        expenses: All expenses of the group
        expense_shares: All share rows of those expenses
        settlements: Settlement records of the group
        scope: UNSETTLED_ONLY ignores records marked settled (current dues);
            ALL counts every record (full history)

    Returns:
        List of MemberAggregate, one per member, in member order

    Raises:
        InvalidAggregateInputError: If an amount is not a valid decimal, or a
            row references a user or expense that is not part of the input, or
            scope is not a SettlementScope
    """
    try:
        scope = SettlementScope(scope)
    except ValueError as e:
        raise InvalidAggregateInputError(
            invalid_aggregate_input(f"unknown settlement scope {scope!r}")
        ) from e

    paid: dict[int, Decimal] = {}
    for member in members:
        if member.user_id in paid:
            raise InvalidAggregateInputError(
                invalid_aggregate_input(f"member {member.user_id} is listed twice")
            )
        paid[member.user_id] = ZERO
    share: dict[int, Decimal] = dict.fromkeys(paid, ZERO)
    credit: dict[int, Decimal] = dict.fromkeys(paid, ZERO)
    debit: dict[int, Decimal] = dict.fromkeys(paid, ZERO)

    expense_ids = set()
    for expense in expenses:
        _require_member(paid, expense.created_by_id, f"expense {expense.id} payer")
        amount = as_decimal(expense.amount, f"amount of expense {expense.id}")
        paid[expense.created_by_id] += amount
        expense_ids.add(expense.id)

    for row in expense_shares:
        if row.expense_id not in expense_ids:
            raise InvalidAggregateInputError(
                invalid_aggregate_input(
                    f"share for user {row.user_id} references unknown expense {row.expense_id}"
                )
            )
        _require_member(share, row.user_id, f"share of expense {row.expense_id}")
        share[row.user_id] += as_decimal(
            row.share, f"share of user {row.user_id} in expense {row.expense_id}"
        )

    for settlement in settlements:
        if scope is SettlementScope.UNSETTLED_ONLY and settlement.settled:
            continue
        _require_member(credit, settlement.to_user_id, f"settlement {settlement.id} creditor")
        _require_member(debit, settlement.from_user_id, f"settlement {settlement.id} debtor")
        amount = as_decimal(settlement.amount, f"amount of settlement {settlement.id}")
        credit[settlement.to_user_id] += amount
        debit[settlement.from_user_id] += amount

    results = []
    for member in members:
        user_id = member.user_id
        settlement_balance = credit[user_id] - debit[user_id]
        results.append(
            MemberAggregate(
                user_id=user_id,
                user_name=member.user_name,
                total_paid=paid[user_id],
                total_share=share[user_id],
                settlement_credit=credit[user_id],
                settlement_debit=debit[user_id],
                settlement_balance=settlement_balance,
                net_balance=paid[user_id] - share[user_id] + settlement_balance,
                email=member.email,
                image_url=member.image_url,
            )
        )
    return results


def balance_residual(aggregates: Iterable[MemberAggregate]) -> Decimal:
    """Return the sum of net balances. Zero for consistent input."""
    return sum((agg.net_balance for agg in aggregates), ZERO)


def is_balanced(aggregates: Iterable[MemberAggregate], tolerance: Decimal = TOLERANCE) -> bool:
    """Check the zero-sum invariant within tolerance."""
    return abs(balance_residual(aggregates)) < tolerance


def _require_member(index: dict[int, Decimal], user_id: int, what: str) -> None:
    if user_id not in index:
        raise InvalidAggregateInputError(
            invalid_aggregate_input(f"{what} references user {user_id}, who is not a member")
        )
