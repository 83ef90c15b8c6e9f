"""Group management commands."""

import click
from groupsplit.cli.error_handling import handle_domain_error
from groupsplit.cli.formatting import format_money
from groupsplit.cli.member_resolution import resolve_user_or_exit
from groupsplit.domain.group import GroupService
from groupsplit.utils.amount_parser import parse_amount


@click.group()
def group_group():
    """Manage groups and their members."""
    pass


@group_group.command("create")
@click.argument("name", metavar="GROUP_NAME")
@click.option("--description", help="Group description")
@click.option("--goal-budget", help="Spending goal for the group (e.g., 1500.00)")
@click.option(
    "--member",
    "members",
    multiple=True,
    help="User name or ID to add as a member (repeatable)",
)
@click.pass_context
def create_group(
    ctx,
    name: str,
    description: str | None,
    goal_budget: str | None,
    members: tuple[str, ...],
):
    """Create a new group.

    Examples:
        groupsplit group create "Ski trip"
        groupsplit group create "Flat 4B" --member alice --member bob
    """
    service = GroupService(ctx.obj["db"])

    budget = None
    if goal_budget is not None:
        try:
            budget = parse_amount(goal_budget)
        except ValueError as e:
            click.echo(f"Error: Invalid goal budget: {e}", err=True)
            ctx.exit(1)

    user_ids = [resolve_user_or_exit(ctx, service, member) for member in members]

    try:
        group_id = service.create_group(name=name, description=description, goal_budget=budget)
        for user_id in user_ids:
            service.add_member(group_id, user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created group '{name.strip()}' (ID: {group_id})")
    if user_ids:
        click.echo(f"Added {len(user_ids)} member{'s' if len(user_ids) != 1 else ''}")


@group_group.command("list")
@click.pass_context
def list_groups(ctx):
    """List all groups."""
    service = GroupService(ctx.obj["db"])

    groups = service.list_groups()
    if not groups:
        click.echo("No groups found.")
        return

    click.echo("\nGroups:")
    click.echo("-" * 60)
    for grp in groups:
        budget = f" | Budget: {format_money(grp.goal_budget)}" if grp.goal_budget is not None else ""
        click.echo(f"ID: {grp.id:3d} | {grp.name:20s}{budget}")


@group_group.command("add-member")
@click.argument("group_id", type=int)
@click.argument("user", metavar="USER")
@click.pass_context
def add_member(ctx, group_id: int, user: str):
    """Add a user to a group.

    USER can be a user name or ID.

    Examples:
        groupsplit group add-member 1 carol
    """
    service = GroupService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, service, user)

    try:
        service.add_member(group_id, user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added user {user_id} to group {group_id}")


@group_group.command("members")
@click.argument("group_id", type=int)
@click.pass_context
def list_members(ctx, group_id: int):
    """List members of a group."""
    service = GroupService(ctx.obj["db"])

    try:
        members = service.list_members(group_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not members:
        click.echo("No members found.")
        return

    click.echo("\nMembers:")
    click.echo("-" * 60)
    for member in members:
        email = member.email or ""
        click.echo(f"ID: {member.user_id:3d} | {member.user_name:20s} | {email}")


def register_commands(cli):
    """Register group commands with main CLI."""
    cli.add_command(group_group, name="group")
