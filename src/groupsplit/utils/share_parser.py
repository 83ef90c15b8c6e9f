"""Custom share parsing utilities."""

from decimal import Decimal

from groupsplit.utils.amount_parser import parse_amount


def parse_share(share_str: str) -> tuple[str, Decimal]:
    """Parse a "USER=AMOUNT" pair.

    Examples:
        "alice=30" -> ("alice", Decimal("30"))
        "2=12.50" -> ("2", Decimal("12.50"))

    Raises:
        ValueError: If the pair is malformed or the amount cannot be parsed
    """
    user, sep, amount = share_str.partition("=")
    user = user.strip()
    if not sep or not user:
        raise ValueError(f"Invalid share '{share_str}': expected USER=AMOUNT")
    return user, parse_amount(amount)


def parse_shares(share_strs: list[str] | tuple[str, ...]) -> list[tuple[str, Decimal]]:
    """Parse several "USER=AMOUNT" pairs, rejecting repeated users."""
    seen = set()
    result = []
    for share_str in share_strs:
        user, amount = parse_share(share_str)
        if user in seen:
            raise ValueError(f"Share for '{user}' given more than once")
        seen.add(user)
        result.append((user, amount))
    return result
