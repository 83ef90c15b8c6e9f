"""Spending report command."""

import click
from groupsplit.cli.error_handling import handle_domain_error
from groupsplit.cli.formatting import format_money
from groupsplit.domain.summary import PERIODS, GroupSummaryService


@click.command("report")
@click.argument("group_id", type=int)
@click.option(
    "--period",
    type=click.Choice(PERIODS, case_sensitive=False),
    default="month",
    show_default=True,
    help="Group spending by year, month or ISO week",
)
@click.pass_context
def report(ctx, group_id: int, period: str):
    """Show how much each member paid per period."""
    service = GroupSummaryService(ctx.obj["db"])

    try:
        rows = service.aggregate_expenses_by_period(group_id, period)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not rows:
        click.echo("No expenses found.")
        return

    click.echo(f"\nSpending by {period.lower()}:")
    click.echo("-" * 60)
    for row in rows:
        click.echo(row.period)
        for name, total in sorted(row.totals_by_member.items()):
            click.echo(f"    {name:<36} {format_money(total):>16}")


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
