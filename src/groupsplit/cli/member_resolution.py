"""CLI helpers for user resolution and error handling."""

from __future__ import annotations

import click
from groupsplit.cli.error_handling import handle_domain_error
from groupsplit.domain.group import GroupService
from groupsplit.utils.member_resolver import resolve_user


def resolve_user_or_exit(ctx: click.Context, group_service: GroupService, user: str | int) -> int:
    """Resolve user name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_user(group_service, user)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
