"""Group summary domain service."""

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Sequence

from groupsplit.database.base import Database
from groupsplit.domain.balances import aggregate_balances, balance_residual
from groupsplit.domain.entities import (
    Expense,
    GroupSummary,
    MemberAggregate,
    PeriodTotals,
    SettlementPlan,
    SettlementScope,
)
from groupsplit.domain.errors import ValidationError
from groupsplit.domain.group import GroupService
from groupsplit.domain.money import ZERO, TOLERANCE
from groupsplit.domain.settlement_plan import plan_settlement

logger = logging.getLogger(__name__)

PERIODS = ("year", "month", "week")


class GroupSummaryService:
    """Service for member balances, settle-up plans and spending reports."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db
        self.groups = GroupService(db)

    def get_member_balances(
        self, group_id: int, scope: SettlementScope = SettlementScope.UNSETTLED_ONLY
    ) -> list[MemberAggregate]:
        """Compute the balance of every member of a group."""
        return list(self.get_group_summary(group_id, scope).members)

    def get_group_summary(
        self, group_id: int, scope: SettlementScope = SettlementScope.UNSETTLED_ONLY
    ) -> GroupSummary:
        """Build a summary of the group's balances.

        Args:
            group_id: Group ID
            scope: UNSETTLED_ONLY for current dues, ALL for the full history

        Returns:
            GroupSummary with one aggregate per member

        Raises:
            NotFoundError: If group does not exist
            InvalidAggregateInputError: If stored rows are inconsistent
        """
        group = self.groups.require_group(group_id)
        inputs = self.db.load_balance_inputs(group_id)

        members = aggregate_balances(
            inputs.members,
            inputs.expenses,
            inputs.expense_shares,
            inputs.settlements,
            scope=scope,
        )
        residual = balance_residual(members)
        if abs(residual) >= TOLERANCE:
            logger.warning(
                "Balances of group %s do not add up to zero (residual %s)", group_id, residual
            )

        return GroupSummary(
            group=group,
            current_expense=sum((e.amount for e in inputs.expenses), ZERO),
            scope=SettlementScope(scope),
            members=tuple(members),
            residual=residual,
        )

    def get_settlement_plan(self, group_id: int) -> SettlementPlan:
        """Compute the transfers that settle the group's current dues."""
        summary = self.get_group_summary(group_id, SettlementScope.UNSETTLED_ONLY)
        transactions = plan_settlement(summary.members)
        logger.debug(
            "Planned %s transfers for group %s", len(transactions), group_id
        )
        return SettlementPlan(summary=summary, transactions=tuple(transactions))

    def aggregate_expenses_by_period(
        self, group_id: int, period: str = "month"
    ) -> list[PeriodTotals]:
        """Sum the amounts each member paid, per year, month or ISO week.

        Args:
            group_id: Group ID
            period: "year", "month" or "week"

        Returns:
            List of PeriodTotals sorted by period key

        Raises:
            NotFoundError: If group does not exist
            ValidationError: If period is not recognized
        """
        period = period.strip().lower()
        if period not in PERIODS:
            raise ValidationError(
                f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
            )

        self.groups.require_group(group_id)
        expenses = self.db.list_expenses(group_id)
        names = {m.user_id: m.user_name for m in self.db.list_group_members(group_id)}

        grouped = self.group_expenses_by_period(expenses, period)
        results = []
        for key in sorted(grouped):
            totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
            for expense in sorted(grouped[key], key=lambda e: (e.date, e.id)):
                totals[self._payer_name(names, expense.created_by_id)] += expense.amount
            results.append(PeriodTotals(period=key, totals_by_member=dict(totals)))
        return results

    def group_expenses_by_period(
        self, expenses: Sequence[Expense], period: str
    ) -> dict[str, list[Expense]]:
        """Group expenses by year, month or ISO week."""
        grouped: dict[str, list[Expense]] = defaultdict(list)
        for expense in expenses:
            grouped[period_key(expense.date, period)].append(expense)
        return dict(grouped)

    def _payer_name(self, names: dict[int, str], user_id: int) -> str:
        if user_id not in names:
            user = self.db.get_user(user_id)
            names[user_id] = user.user_name if user is not None else "Unknown"
        return names[user_id]


def period_key(day: date, period: str) -> str:
    """Return the grouping key of a date: YYYY, YYYY-MM or YYYY-Www."""
    if period == "year":
        return day.strftime("%Y")
    if period == "month":
        return day.strftime("%Y-%m")
    if period == "week":
        iso_year, iso_week, _ = day.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    raise ValidationError(f"Unknown period: '{period}'")
