"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InvalidAggregateInputError(ValidationError):
    """Balance engine received rows it cannot aggregate."""


def group_not_found(group_id: int) -> str:
    """Return message for missing group."""
    return f"Group {group_id} not found"


def user_not_found(user: int | str) -> str:
    """Return message for missing user by ID or name."""
    if isinstance(user, int):
        return f"User {user} not found"
    return f"User '{user}' not found"


def member_not_in_group(user_id: int, group_id: int) -> str:
    """Return message for a user who is not a member of the group."""
    return f"User {user_id} is not a member of group {group_id}"


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def no_matching_settlement(settlement_id: int) -> str:
    """Return message when no unsettled record matches the caller."""
    return f"No matching settlement found for settlement {settlement_id}"


def invalid_aggregate_input(detail: str) -> str:
    """Return message for rows the balance engine rejects."""
    return f"Invalid aggregate input: {detail}"


def custom_shares_mismatch(total, amount) -> str:
    """Return message when custom shares do not add up to the expense."""
    return f"Custom shares add up to {total} but the expense amount is {amount}"
