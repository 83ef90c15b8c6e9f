"""Domain model entities for groupsplit.

These are pure data classes representing business concepts, independent of
database schema. The balance engine only ever sees these types, never ORM rows.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class SplitMethod(str, Enum):
    """How an expense is divided among group members."""

    EVEN = "EVEN"
    CUSTOM = "CUSTOM"


class SettlementScope(str, Enum):
    """Which settlement records count towards balances."""

    UNSETTLED_ONLY = "UNSETTLED_ONLY"
    ALL = "ALL"


@dataclass(frozen=True)
class Member:
    """Group member, joined from group membership and user records."""

    user_id: int
    user_name: str
    email: Optional[str] = None
    image_url: Optional[str] = None


@dataclass(frozen=True)
class Group:
    """Group domain entity."""

    id: int
    name: str
    description: Optional[str]
    goal_budget: Optional[Decimal]
    created_at: datetime


@dataclass(frozen=True)
class Expense:
    """Expense domain entity. ``created_by_id`` is the member who paid."""

    id: int
    group_id: int
    created_by_id: int
    amount: Decimal
    split_method: SplitMethod
    date: date
    description: Optional[str] = None


@dataclass(frozen=True)
class ExpenseShare:
    """One member's portion of an expense."""

    expense_id: int
    user_id: int
    share: Decimal


@dataclass(frozen=True)
class Settlement:
    """Directed debt record: ``from_user_id`` owes ``to_user_id``."""

    id: int
    group_id: int
    from_user_id: int
    to_user_id: int
    amount: Decimal
    settled: bool
    created_at: datetime


@dataclass(frozen=True)
class MemberAggregate:
    """Per-member balance summary derived from expenses and settlements."""

    user_id: int
    user_name: str
    total_paid: Decimal
    total_share: Decimal
    settlement_credit: Decimal
    settlement_debit: Decimal
    settlement_balance: Decimal
    net_balance: Decimal
    email: Optional[str] = None
    image_url: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """A transfer in a settlement plan: debtor pays creditor ``amount``."""

    from_user_id: int
    from_user_name: str
    to_user_id: int
    to_user_name: str
    amount: Decimal


@dataclass(frozen=True)
class BalanceInputs:
    """Rows of one group read together, ready for balance aggregation."""

    members: tuple[Member, ...] = ()
    expenses: tuple[Expense, ...] = ()
    expense_shares: tuple[ExpenseShare, ...] = ()
    settlements: tuple[Settlement, ...] = ()


@dataclass(frozen=True)
class GroupSummary:
    """Balances of every member of a group at one point in time."""

    group: Group
    current_expense: Decimal
    scope: SettlementScope
    members: tuple[MemberAggregate, ...] = ()
    residual: Decimal = Decimal("0")


@dataclass(frozen=True)
class SettlementPlan:
    """Group summary together with the transfers that settle it."""

    summary: GroupSummary
    transactions: tuple[Transaction, ...] = ()


@dataclass(frozen=True)
class PeriodTotals:
    """Amount paid per member name within one period (year, month or week)."""

    period: str
    totals_by_member: dict[str, Decimal] = field(default_factory=dict)
