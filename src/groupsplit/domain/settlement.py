"""Settlement record domain service.

A settlement record is a directed debt between two members of a group. It
stays open until the debtor (or the creditor) marks it settled.
"""

import logging
from decimal import Decimal
from typing import Optional

from groupsplit.database.base import Database
from groupsplit.domain.entities import Settlement, SettlementScope
from groupsplit.domain.errors import NotFoundError, ValidationError, no_matching_settlement
from groupsplit.domain.group import GroupService
from groupsplit.domain.money import to_cents

logger = logging.getLogger(__name__)


class SettlementService:
    """Service for recording, listing and closing debts between members."""

    def __init__(self, db: Database):
        """Initialize settlement service.

        Args:
            db: Database instance
        """
        self.db = db
        self.groups = GroupService(db)

    def record_debt(
        self, group_id: int, from_user_id: int, to_user_id: int, amount: Decimal
    ) -> int:
        """Record that one member owes another.

        Args:
            group_id: Group ID
            from_user_id: Debtor user ID
            to_user_id: Creditor user ID
            amount: Amount owed, positive, in whole cents

        Returns:
            Settlement ID

        Raises:
            NotFoundError: If group does not exist
            ValidationError: If amount is invalid, debtor and creditor are the
                same user, or either is not a member
        """
        self.groups.require_group(group_id)
        if from_user_id == to_user_id:
            raise ValidationError("A member cannot owe money to themselves")
        self.groups.require_member(group_id, from_user_id)
        self.groups.require_member(group_id, to_user_id)
        if amount <= 0:
            raise ValidationError("Settlement amount must be greater than zero")
        if to_cents(amount) != amount:
            raise ValidationError(f"Settlement amount {amount} has more than two decimal places")

        settlement_id = self.db.create_settlement(
            group_id=group_id,
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            amount=amount,
        )
        logger.info(
            "Recorded settlement %s in group %s: user %s owes user %s %s",
            settlement_id,
            group_id,
            from_user_id,
            to_user_id,
            amount,
        )
        return settlement_id

    def get_settlement(self, settlement_id: int) -> Optional[Settlement]:
        """Get settlement by ID."""
        return self.db.get_settlement(settlement_id)

    def list_settlements(
        self, group_id: int, scope: SettlementScope = SettlementScope.UNSETTLED_ONLY
    ) -> list[Settlement]:
        """List settlement records of a group, oldest first."""
        self.groups.require_group(group_id)
        settled = False if SettlementScope(scope) is SettlementScope.UNSETTLED_ONLY else None
        return self.db.list_settlements(group_id, settled=settled)

    def list_dues(self, group_id: int, user_id: int) -> list[Settlement]:
        """List open debts the user owes to others, oldest first."""
        self.groups.require_group(group_id)
        return self.db.list_settlements(group_id, settled=False, from_user_id=user_id)

    def list_receivables(self, group_id: int, user_id: int) -> list[Settlement]:
        """List open debts others owe to the user, oldest first."""
        self.groups.require_group(group_id)
        return self.db.list_settlements(group_id, settled=False, to_user_id=user_id)

    def mark_settled(self, settlement_id: int, user_id: int, as_creditor: bool = False) -> None:
        """Close an open debt on behalf of one of its parties.

        Args:
            settlement_id: Settlement ID
            user_id: User closing the debt; the debtor, or the creditor when
                as_creditor is True
            as_creditor: Close the debt as its creditor instead of its debtor

        Raises:
            NotFoundError: If no open settlement with that ID belongs to the user
        """
        if as_creditor:
            count = self.db.mark_settlement_settled(settlement_id, to_user_id=user_id)
        else:
            count = self.db.mark_settlement_settled(settlement_id, from_user_id=user_id)

        if count == 0:
            raise NotFoundError(no_matching_settlement(settlement_id))
        logger.info("User %s marked settlement %s as settled", user_id, settlement_id)

    def clear_settlements(self, group_id: int) -> int:
        """Delete every settlement record of a group.

        Returns:
            Number of deleted records
        """
        self.groups.require_group(group_id)
        count = self.db.delete_settlements(group_id)
        logger.info("Cleared %s settlements in group %s", count, group_id)
        return count
