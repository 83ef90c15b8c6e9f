"""Group and user domain service."""

import logging
from decimal import Decimal
from typing import Optional

from groupsplit.database.base import Database
from groupsplit.domain.entities import Group, Member
from groupsplit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    group_not_found,
    member_not_in_group,
    user_not_found,
)

logger = logging.getLogger(__name__)


class GroupService:
    """Service for managing users, groups and group membership."""

    def __init__(self, db: Database):
        """Initialize group service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(
        self, user_name: str, email: Optional[str] = None, image_url: Optional[str] = None
    ) -> int:
        """Create a user.

        Args:
            user_name: Unique user name
            email: Optional email address
            image_url: Optional avatar URL

        Returns:
            User ID

        Raises:
            ValidationError: If user name is empty
            ConflictError: If user name already exists
        """
        user_name = user_name.strip()
        if not user_name:
            raise ValidationError("User name cannot be empty")
        if self.db.get_user_by_name(user_name) is not None:
            raise ConflictError(f"User with name '{user_name}' already exists")

        user_id = self.db.create_user(user_name=user_name, email=email, image_url=image_url)
        logger.info("Created user %s (%s)", user_id, user_name)
        return user_id

    def get_user(self, user_id: int) -> Optional[Member]:
        """Get user by ID."""
        return self.db.get_user(user_id)

    def get_user_by_name(self, user_name: str) -> Optional[Member]:
        """Get user by name."""
        return self.db.get_user_by_name(user_name)

    def list_users(self) -> list[Member]:
        """List all users."""
        return self.db.list_users()

    def create_group(
        self,
        name: str,
        description: Optional[str] = None,
        goal_budget: Optional[Decimal] = None,
    ) -> int:
        """Create a group.

        Args:
            name: Group name
            description: Optional description
            goal_budget: Optional spending goal for the group

        Returns:
            Group ID

        Raises:
            ValidationError: If name is empty or goal budget is negative
        """
        name = name.strip()
        if not name:
            raise ValidationError("Group name cannot be empty")
        if goal_budget is not None and goal_budget < 0:
            raise ValidationError("Goal budget cannot be negative")

        group_id = self.db.create_group(
            name=name, description=description, goal_budget=goal_budget
        )
        logger.info("Created group %s (%s)", group_id, name)
        return group_id

    def get_group(self, group_id: int) -> Optional[Group]:
        """Get group by ID."""
        return self.db.get_group(group_id)

    def require_group(self, group_id: int) -> Group:
        """Get group by ID, raising NotFoundError if it does not exist."""
        group = self.db.get_group(group_id)
        if group is None:
            raise NotFoundError(group_not_found(group_id))
        return group

    def list_groups(self) -> list[Group]:
        """List all groups."""
        return self.db.list_groups()

    def add_member(self, group_id: int, user_id: int) -> None:
        """Add a user to a group.

        Raises:
            NotFoundError: If group or user does not exist
            ConflictError: If user is already a member
        """
        self.require_group(group_id)
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        if self.db.is_group_member(group_id, user_id):
            raise ConflictError(f"User {user_id} is already a member of group {group_id}")

        self.db.add_group_member(group_id, user_id)
        logger.info("Added user %s to group %s", user_id, group_id)

    def list_members(self, group_id: int) -> list[Member]:
        """List members of a group in the order they joined.

        Raises:
            NotFoundError: If group does not exist
        """
        self.require_group(group_id)
        return self.db.list_group_members(group_id)

    def require_member(self, group_id: int, user_id: int) -> None:
        """Raise ValidationError unless the user belongs to the group."""
        if not self.db.is_group_member(group_id, user_id):
            raise ValidationError(member_not_in_group(user_id, group_id))
