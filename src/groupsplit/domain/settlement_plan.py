"""Greedy settlement planning.

The largest creditor is repeatedly matched against the largest debtor until
one side runs out. Each step closes at least one party, so a group of n
members needs at most n - 1 transfers.
"""

import logging
from collections import deque
from decimal import Decimal
from typing import Iterable, Sequence

from groupsplit.domain.entities import MemberAggregate, Transaction
from groupsplit.domain.money import ZERO, is_zero

logger = logging.getLogger(__name__)


class _Party:
    """Working balance of one member while a plan is being built."""

    __slots__ = ("user_id", "user_name", "balance")

    def __init__(self, aggregate: MemberAggregate):
        self.user_id = aggregate.user_id
        self.user_name = aggregate.user_name
        self.balance = aggregate.net_balance


def plan_settlement(member_aggregates: Sequence[MemberAggregate]) -> list[Transaction]:
    """Build the list of transfers that brings every balance to zero.

    Members with equal balances keep their input order (stable sort), so the
    pairing among exactly tied members follows the order they were given in.

    Args:
        member_aggregates: Balances to settle; only user_id, user_name and
            net_balance are read. The aggregates are not modified.

    Returns:
        Ordered list of Transaction, debtor paying creditor
    """
    parties = [_Party(agg) for agg in member_aggregates]
    creditors = deque(
        sorted((p for p in parties if p.balance > 0), key=lambda p: p.balance, reverse=True)
    )
    debtors = deque(sorted((p for p in parties if p.balance < 0), key=lambda p: p.balance))

    transactions = []
    while creditors and debtors:
        creditor = creditors[0]
        debtor = debtors[0]

        amount = min(creditor.balance, -debtor.balance)
        transactions.append(
            Transaction(
                from_user_id=debtor.user_id,
                from_user_name=debtor.user_name,
                to_user_id=creditor.user_id,
                to_user_name=creditor.user_name,
                amount=amount,
            )
        )

        creditor.balance -= amount
        debtor.balance += amount

        if is_zero(creditor.balance):
            creditors.popleft()
        if is_zero(debtor.balance):
            debtors.popleft()

    for party in list(creditors) + list(debtors):
        if not is_zero(party.balance):
            logger.debug(
                "Unmatched balance of %s left for user %s", party.balance, party.user_id
            )

    return transactions


def apply_transactions(
    balances: dict[int, Decimal], transactions: Iterable[Transaction]
) -> dict[int, Decimal]:
    """Replay transfers against starting balances.

    Args:
        balances: Mapping of user ID to net balance
        transactions: Transfers to apply

    Returns:
        New mapping of user ID to balance after every transfer is paid
    """
    result = dict(balances)
    for txn in transactions:
        result[txn.from_user_id] = result.get(txn.from_user_id, ZERO) + txn.amount
        result[txn.to_user_id] = result.get(txn.to_user_id, ZERO) - txn.amount
    return result
