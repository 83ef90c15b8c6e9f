"""Decimal helpers shared by the balance aggregator and settlement planner."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from groupsplit.domain.errors import InvalidAggregateInputError, invalid_aggregate_input

# Balances closer to zero than this are treated as settled.
TOLERANCE = Decimal("0.001")

CENT = Decimal("0.01")
ZERO = Decimal("0")


def as_decimal(value, what: str) -> Decimal:
    """Convert a monetary value to Decimal, rejecting anything non-numeric.

    Args:
        value: Decimal, int, float or numeric string
        what: Description of the value, used in the error message

    Returns:
        Decimal value

    Raises:
        InvalidAggregateInputError: If value is missing, non-numeric or not finite
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise InvalidAggregateInputError(
            invalid_aggregate_input(f"{what} is not a number: {value!r}")
        )
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as e:
            raise InvalidAggregateInputError(
                invalid_aggregate_input(f"{what} is not a number: {value!r}")
            ) from e

    if not result.is_finite():
        raise InvalidAggregateInputError(
            invalid_aggregate_input(f"{what} is not finite: {value!r}")
        )
    return result


def is_zero(amount: Decimal) -> bool:
    """Return True if amount is within TOLERANCE of zero."""
    return abs(amount) < TOLERANCE


def to_cents(amount: Decimal) -> Decimal:
    """Round an amount to whole cents."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
