"""Expense domain service."""

import logging
from datetime import date as date_type
from decimal import Decimal
from typing import Mapping, Optional

from groupsplit.database.base import Database
from groupsplit.domain.entities import Expense, ExpenseShare, SplitMethod
from groupsplit.domain.errors import NotFoundError, ValidationError, expense_not_found
from groupsplit.domain.group import GroupService
from groupsplit.domain.money import to_cents
from groupsplit.domain.splitting import resolve_shares

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for recording and listing group expenses."""

    def __init__(self, db: Database):
        """Initialize expense service.

        Args:
            db: Database instance
        """
        self.db = db
        self.groups = GroupService(db)

    def create_expense(
        self,
        group_id: int,
        created_by_id: int,
        amount: Decimal,
        split_method: SplitMethod | str,
        shares: Optional[Mapping[int, Decimal]] = None,
        description: Optional[str] = None,
        date: Optional[date_type] = None,
    ) -> int:
        """Record an expense paid by one member.

        Share rows are written for every current member of the group. EVEN
        expenses are divided in whole cents; CUSTOM expenses use the given
        shares, which must add up to the amount exactly.

        Args:
            group_id: Group ID
            created_by_id: User ID of the member who paid
            amount: Amount paid, positive, in whole cents
            split_method: EVEN or CUSTOM
            shares: Per-member shares, required for CUSTOM only
            description: Optional description
            date: Expense date (defaults to today)

        Returns:
            Expense ID

        Raises:
            NotFoundError: If group does not exist
            ValidationError: If amount, split method, payer or shares are invalid
        """
        self.groups.require_group(group_id)
        self.groups.require_member(group_id, created_by_id)

        if amount <= 0:
            raise ValidationError("Expense amount must be greater than zero")
        if to_cents(amount) != amount:
            raise ValidationError(f"Expense amount {amount} has more than two decimal places")

        try:
            split_method = SplitMethod(split_method)
        except ValueError as e:
            raise ValidationError(f"Unknown splitting method '{split_method}'") from e

        member_ids = [member.user_id for member in self.db.list_group_members(group_id)]
        resolved = resolve_shares(amount, split_method, member_ids, shares)

        expense_id = self.db.create_expense(
            group_id=group_id,
            created_by_id=created_by_id,
            amount=amount,
            split_method=split_method,
            shares=resolved,
            date=date if date is not None else date_type.today(),
            description=description,
        )
        logger.info(
            "Created %s expense %s of %s in group %s paid by user %s",
            split_method.value,
            expense_id,
            amount,
            group_id,
            created_by_id,
        )
        return expense_id

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        return self.db.get_expense(expense_id)

    def list_expenses(
        self,
        group_id: int,
        start_date: Optional[date_type] = None,
        end_date: Optional[date_type] = None,
    ) -> list[Expense]:
        """List expenses of a group, newest first.

        Raises:
            NotFoundError: If group does not exist
        """
        self.groups.require_group(group_id)
        return self.db.list_expenses(group_id, start_date=start_date, end_date=end_date)

    def get_expense_shares(self, expense_id: int) -> list[ExpenseShare]:
        """List the share rows of an expense.

        Raises:
            NotFoundError: If expense does not exist
        """
        if self.db.get_expense(expense_id) is None:
            raise NotFoundError(expense_not_found(expense_id))
        return self.db.get_expense_shares(expense_id)
