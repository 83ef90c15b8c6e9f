"""Debt (settlement record) commands."""

import click
from groupsplit.cli.error_handling import handle_domain_error
from groupsplit.cli.formatting import format_money
from groupsplit.cli.member_resolution import resolve_user_or_exit
from groupsplit.domain.group import GroupService
from groupsplit.domain.settlement import SettlementService
from groupsplit.utils.amount_parser import parse_amount


@click.group()
def debt_group():
    """Record, list and settle debts between members."""
    pass


@debt_group.command("add")
@click.argument("group_id", type=int)
@click.option("--from", "from_user", required=True, help="User name or ID of the debtor")
@click.option("--to", "to_user", required=True, help="User name or ID of the creditor")
@click.option("--amount", required=True, help="Amount owed (e.g., 25.00)")
@click.pass_context
def add_debt(ctx, group_id: int, from_user: str, to_user: str, amount: str):
    """Record that one member owes another.

    Examples:
        groupsplit debt add 1 --from bob --to alice --amount 25
    """
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = SettlementService(db)

    from_id = resolve_user_or_exit(ctx, group_service, from_user)
    to_id = resolve_user_or_exit(ctx, group_service, to_user)

    try:
        debt_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        settlement_id = service.record_debt(group_id, from_id, to_id, debt_amount)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded debt {settlement_id}: {format_money(debt_amount)}")


def _echo_settlements(settlements, names, counterpart: str) -> None:
    click.echo(f"\n{'ID':>4}  {'Created':<10}  {counterpart:<15}  {'Amount':>12}")
    click.echo("-" * 50)
    for s in settlements:
        other_id = s.to_user_id if counterpart == "Owed to" else s.from_user_id
        click.echo(
            f"{s.id:>4}  {s.created_at.date().isoformat():<10}  "
            f"{names.get(other_id, 'Unknown'):<15}  {format_money(s.amount):>12}"
        )


@debt_group.command("dues")
@click.argument("group_id", type=int)
@click.argument("user", metavar="USER")
@click.pass_context
def list_dues(ctx, group_id: int, user: str):
    """List open debts USER owes to other members."""
    db = ctx.obj["db"]
    group_service = GroupService(db)
    user_id = resolve_user_or_exit(ctx, group_service, user)

    try:
        dues = SettlementService(db).list_dues(group_id, user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not dues:
        click.echo("No open dues.")
        return

    names = {m.user_id: m.user_name for m in group_service.list_members(group_id)}
    _echo_settlements(dues, names, "Owed to")


@debt_group.command("owed")
@click.argument("group_id", type=int)
@click.argument("user", metavar="USER")
@click.pass_context
def list_receivables(ctx, group_id: int, user: str):
    """List open debts other members owe to USER."""
    db = ctx.obj["db"]
    group_service = GroupService(db)
    user_id = resolve_user_or_exit(ctx, group_service, user)

    try:
        receivables = SettlementService(db).list_receivables(group_id, user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not receivables:
        click.echo("Nobody owes you anything.")
        return

    names = {m.user_id: m.user_name for m in group_service.list_members(group_id)}
    _echo_settlements(receivables, names, "Owed by")


@debt_group.command("settle")
@click.argument("settlement_id", type=int)
@click.option("--user", required=True, help="User name or ID of the member closing the debt")
@click.option(
    "--as-creditor",
    is_flag=True,
    help="Close the debt as the member who is owed instead of the one who owes",
)
@click.pass_context
def settle_debt(ctx, settlement_id: int, user: str, as_creditor: bool):
    """Mark an open debt as settled.

    Examples:
        groupsplit debt settle 3 --user bob
        groupsplit debt settle 3 --user alice --as-creditor
    """
    db = ctx.obj["db"]
    user_id = resolve_user_or_exit(ctx, GroupService(db), user)

    try:
        SettlementService(db).mark_settled(settlement_id, user_id, as_creditor=as_creditor)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Marked debt {settlement_id} as settled")


@debt_group.command("clear")
@click.argument("group_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_debts(ctx, group_id: int, yes: bool):
    """Delete every debt record of a group, settled or not."""
    db = ctx.obj["db"]
    service = SettlementService(db)

    if not yes and not click.confirm(
        f"Are you sure you want to delete all debts of group {group_id}?"
    ):
        click.echo("Clear cancelled.")
        return

    try:
        count = service.clear_settlements(group_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted {count} debt record{'s' if count != 1 else ''}")


def register_commands(cli):
    """Register debt commands with main CLI."""
    cli.add_command(debt_group, name="debt")
