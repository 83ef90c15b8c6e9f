"""User management commands."""

import click
from groupsplit.cli.error_handling import handle_domain_error
from groupsplit.domain.group import GroupService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("add")
@click.argument("name", metavar="USER_NAME")
@click.option("--email", help="Email address")
@click.option("--image-url", help="Avatar image URL")
@click.pass_context
def add_user(ctx, name: str, email: str | None, image_url: str | None):
    """Create a new user.

    Examples:
        groupsplit user add alice
        groupsplit user add bob --email bob@example.com
    """
    service = GroupService(ctx.obj["db"])

    try:
        user_id = service.create_user(user_name=name, email=email, image_url=image_url)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created user '{name.strip()}' (ID: {user_id})")


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    service = GroupService(ctx.obj["db"])

    users = service.list_users()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 60)
    for member in users:
        email = member.email or ""
        click.echo(f"ID: {member.user_id:3d} | {member.user_name:20s} | {email}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
