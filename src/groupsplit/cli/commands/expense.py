"""Expense commands."""

import click
from groupsplit.cli.error_handling import handle_domain_error
from groupsplit.cli.formatting import format_money
from groupsplit.cli.member_resolution import resolve_user_or_exit
from groupsplit.domain.entities import SplitMethod
from groupsplit.domain.expense import ExpenseService
from groupsplit.domain.group import GroupService
from groupsplit.utils.amount_parser import parse_amount
from groupsplit.utils.date_parser import parse_date
from groupsplit.utils.share_parser import parse_shares


@click.group()
def expense_group():
    """Record and list expenses."""
    pass


@expense_group.command("add")
@click.argument("group_id", type=int)
@click.option("--paid-by", required=True, help="User name or ID of the member who paid")
@click.option("--amount", required=True, help="Amount paid (e.g., 123.45)")
@click.option(
    "--split",
    "split_method",
    type=click.Choice([m.value for m in SplitMethod], case_sensitive=False),
    default=SplitMethod.EVEN.value,
    show_default=True,
    help="How the expense is divided among members",
)
@click.option(
    "--share",
    "shares",
    multiple=True,
    help="USER=AMOUNT share for a CUSTOM split (repeatable)",
)
@click.option("--description", help="Expense description")
@click.option("--date", help="Expense date (YYYY-MM-DD or 'today', 'yesterday'; defaults to today)")
@click.pass_context
def add_expense(
    ctx,
    group_id: int,
    paid_by: str,
    amount: str,
    split_method: str,
    shares: tuple[str, ...],
    description: str | None,
    date: str | None,
):
    """Record an expense paid by one member.

    EVEN splits divide the amount equally among all group members. CUSTOM
    splits need one --share per member who owes part of it; the shares must
    add up to the amount.

    Examples:
        groupsplit expense add 1 --paid-by alice --amount 100 --description "Dinner"
        groupsplit expense add 1 --paid-by alice --amount 90 --split custom \\
            --share alice=30 --share bob=30 --share carol=30
    """
    db = ctx.obj["db"]
    group_service = GroupService(db)
    expense_service = ExpenseService(db)

    payer_id = resolve_user_or_exit(ctx, group_service, paid_by)

    try:
        expense_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    expense_date = None
    if date is not None:
        try:
            expense_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        parsed_shares = parse_shares(shares)
    except ValueError as e:
        handle_domain_error(ctx, e)
    share_map = {
        resolve_user_or_exit(ctx, group_service, user): share for user, share in parsed_shares
    }

    try:
        expense_id = expense_service.create_expense(
            group_id=group_id,
            created_by_id=payer_id,
            amount=expense_amount,
            split_method=split_method.upper(),
            shares=share_map or None,
            description=description,
            date=expense_date,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    expense = expense_service.get_expense(expense_id)
    click.echo(f"Created expense {expense_id}")
    click.echo(f"  Amount: {format_money(expense.amount)}")
    click.echo(f"  Split: {expense.split_method.value}")
    click.echo(f"  Date: {expense.date}")
    if description:
        click.echo(f"  Description: {description}")


@expense_group.command("list")
@click.argument("group_id", type=int)
@click.option("--since", help="Only expenses on or after this date (e.g., 2024-01-01, 'this month')")
@click.option("--until", help="Only expenses on or before this date (e.g., 'yesterday')")
@click.option("--verbose", "-v", is_flag=True, help="Show each member's share of every expense")
@click.pass_context
def list_expenses(ctx, group_id: int, since: str | None, until: str | None, verbose: bool):
    """List expenses of a group, newest first.

    Examples:
        groupsplit expense list 1 --since "last month" --until yesterday
    """
    db = ctx.obj["db"]
    expense_service = ExpenseService(db)
    group_service = GroupService(db)

    try:
        start_date = parse_date(since) if since else None
        end_date = parse_date(until) if until else None
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        expenses = expense_service.list_expenses(
            group_id, start_date=start_date, end_date=end_date
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not expenses:
        click.echo("No expenses found.")
        return

    names = {m.user_id: m.user_name for m in group_service.list_members(group_id)}

    click.echo(f"\n{'ID':>4}  {'Date':<10}  {'Paid by':<15}  {'Split':<6}  {'Amount':>12}  Description")
    click.echo("-" * 80)
    for expense in expenses:
        payer = names.get(expense.created_by_id, "Unknown")
        click.echo(
            f"{expense.id:>4}  {expense.date.isoformat():<10}  {payer:<15}  "
            f"{expense.split_method.value:<6}  {format_money(expense.amount):>12}  "
            f"{expense.description or ''}"
        )
        if verbose:
            for share in expense_service.get_expense_shares(expense.id):
                name = names.get(share.user_id, "Unknown")
                click.echo(f"{'':>6}{name:<15} {format_money(share.share):>12}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
