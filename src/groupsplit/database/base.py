"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from groupsplit.domain.entities import (
    BalanceInputs,
    Expense,
    ExpenseShare,
    Group,
    Member,
    Settlement,
    SplitMethod,
)


class Database(ABC):
    """Abstract database interface for groupsplit."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(
        self, user_name: str, email: Optional[str] = None, image_url: Optional[str] = None
    ) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[Member]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_name(self, user_name: str) -> Optional[Member]:
        """Get user by user name."""
        pass

    @abstractmethod
    def list_users(self) -> list[Member]:
        """List all users."""
        pass

    # Group operations
    @abstractmethod
    def create_group(
        self,
        name: str,
        description: Optional[str] = None,
        goal_budget: Optional[Decimal] = None,
    ) -> int:
        """Create a group. Returns group ID."""
        pass

    @abstractmethod
    def get_group(self, group_id: int) -> Optional[Group]:
        """Get group by ID."""
        pass

    @abstractmethod
    def list_groups(self) -> list[Group]:
        """List all groups."""
        pass

    @abstractmethod
    def add_group_member(self, group_id: int, user_id: int) -> None:
        """Add a user to a group."""
        pass

    @abstractmethod
    def is_group_member(self, group_id: int, user_id: int) -> bool:
        """Check if a user belongs to a group."""
        pass

    @abstractmethod
    def list_group_members(self, group_id: int) -> list[Member]:
        """List members of a group in the order they joined."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        group_id: int,
        created_by_id: int,
        amount: Decimal,
        split_method: SplitMethod,
        shares: dict[int, Decimal],
        date: date,
        description: Optional[str] = None,
    ) -> int:
        """Create an expense together with its share rows. Returns expense ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def list_expenses(
        self,
        group_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Expense]:
        """List expenses of a group, newest first."""
        pass

    @abstractmethod
    def list_expense_shares(self, group_id: int) -> list[ExpenseShare]:
        """List share rows of every expense in a group."""
        pass

    @abstractmethod
    def get_expense_shares(self, expense_id: int) -> list[ExpenseShare]:
        """List share rows of one expense."""
        pass

    # Settlement operations
    @abstractmethod
    def create_settlement(
        self, group_id: int, from_user_id: int, to_user_id: int, amount: Decimal
    ) -> int:
        """Create an unsettled settlement record. Returns settlement ID."""
        pass

    @abstractmethod
    def get_settlement(self, settlement_id: int) -> Optional[Settlement]:
        """Get settlement by ID."""
        pass

    @abstractmethod
    def list_settlements(
        self,
        group_id: int,
        settled: Optional[bool] = None,
        from_user_id: Optional[int] = None,
        to_user_id: Optional[int] = None,
    ) -> list[Settlement]:
        """List settlements of a group, oldest first.

        Args:
            group_id: Group ID
            settled: If given, only return records with this settled flag
            from_user_id: Optional debtor filter
            to_user_id: Optional creditor filter
        """
        pass

    @abstractmethod
    def mark_settlement_settled(
        self,
        settlement_id: int,
        from_user_id: Optional[int] = None,
        to_user_id: Optional[int] = None,
    ) -> int:
        """Mark an unsettled settlement as settled.

        The optional user filters restrict the update to records where that
        user is the debtor or creditor. Returns the number of updated records.
        """
        pass

    @abstractmethod
    def delete_settlements(self, group_id: int) -> int:
        """Delete every settlement of a group. Returns the number deleted."""
        pass

    @abstractmethod
    def load_balance_inputs(self, group_id: int) -> BalanceInputs:
        """Read members, expenses, shares and settlements of a group together.

        All four collections come from the same session so they reflect the
        same state of the group.
        """
        pass
