"""Domain layer for groupsplit application.

Only the pure balance engine is re-exported here. Services live in their own
modules and are imported from there, since they depend on the database layer.
"""

from groupsplit.domain.balances import aggregate_balances, balance_residual, is_balanced
from groupsplit.domain.settlement_plan import apply_transactions, plan_settlement
from groupsplit.domain.entities import SettlementScope, SplitMethod

__all__ = [
    "aggregate_balances",
    "balance_residual",
    "is_balanced",
    "apply_transactions",
    "plan_settlement",
    "SettlementScope",
    "SplitMethod",
]
