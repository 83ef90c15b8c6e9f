"""Utility for resolving user names to IDs."""

from groupsplit.domain.group import GroupService


def resolve_user(group_service: GroupService, user: str | int) -> int:
    """Resolve user name or ID to user ID.

    Args:
        group_service: GroupService instance
        user: User name (str) or ID (int or string representation of int)

    Returns:
        User ID

    Raises:
        ValueError: If user is not found
    """
    if isinstance(user, int):
        if group_service.get_user(user) is None:
            raise ValueError(f"User ID {user} not found")
        return user

    # Try to parse as integer (handles string IDs like "1")
    try:
        user_id = int(user)
    except (ValueError, TypeError):
        user_id = None

    if user_id is not None:
        if group_service.get_user(user_id) is None:
            raise ValueError(f"User ID {user_id} not found")
        return user_id

    member = group_service.get_user_by_name(user.strip())
    if member is None:
        raise ValueError(f"User '{user}' not found")
    return member.user_id
