"""Balance and settle-up commands."""

import click
from groupsplit.cli.error_handling import handle_domain_error
from groupsplit.cli.formatting import format_money
from groupsplit.domain.entities import SettlementScope
from groupsplit.domain.money import is_zero
from groupsplit.domain.summary import GroupSummaryService


def _echo_residual_warning(summary) -> None:
    if not is_zero(summary.residual):
        click.echo(
            f"Warning: balances do not add up to zero (off by {format_money(summary.residual)})",
            err=True,
        )


@click.command("balances")
@click.argument("group_id", type=int)
@click.option(
    "--all-settlements",
    is_flag=True,
    help="Count settled debts too (full history instead of current dues)",
)
@click.pass_context
def show_balances(ctx, group_id: int, all_settlements: bool):
    """Show what each member paid, owes and is owed.

    A positive net balance means the member is owed money, a negative one
    means the member owes money.
    """
    service = GroupSummaryService(ctx.obj["db"])
    scope = SettlementScope.ALL if all_settlements else SettlementScope.UNSETTLED_ONLY

    try:
        summary = service.get_group_summary(group_id, scope)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nBalances for '{summary.group.name}'")
    click.echo(f"Total spent: {format_money(summary.current_expense)}")
    if summary.group.goal_budget is not None:
        click.echo(f"Goal budget: {format_money(summary.group.goal_budget)}")

    if not summary.members:
        click.echo("No members found.")
        return

    click.echo("-" * 80)
    click.echo(f"{'Member':<20} {'Paid':>14} {'Share':>14} {'Debts':>14} {'Net':>14}")
    click.echo("-" * 80)
    for agg in summary.members:
        click.echo(
            f"{agg.user_name:<20} {format_money(agg.total_paid):>14} "
            f"{format_money(agg.total_share):>14} {format_money(agg.settlement_balance):>14} "
            f"{format_money(agg.net_balance):>14}"
        )
    _echo_residual_warning(summary)


@click.command("settle-up")
@click.argument("group_id", type=int)
@click.pass_context
def settle_up(ctx, group_id: int):
    """Show the fewest payments that settle everyone's current balance."""
    service = GroupSummaryService(ctx.obj["db"])

    try:
        plan = service.get_settlement_plan(group_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not plan.transactions:
        click.echo("All balances are settled!")
        _echo_residual_warning(plan.summary)
        return

    click.echo(f"\nSettle up '{plan.summary.group.name}':")
    click.echo("-" * 60)
    for txn in plan.transactions:
        click.echo(f"{txn.from_user_name} pays {txn.to_user_name} {format_money(txn.amount)}")
    _echo_residual_warning(plan.summary)


def register_commands(cli):
    """Register balance commands with main CLI."""
    cli.add_command(show_balances)
    cli.add_command(settle_up)
