"""Utility functions for groupsplit."""

from groupsplit.utils.date_parser import parse_date
from groupsplit.utils.amount_parser import parse_amount
from groupsplit.utils.share_parser import parse_shares

__all__ = ["parse_date", "parse_amount", "parse_shares"]
