"""Shop profile and signed-in user commands."""

import click
from shopledger.domain.entities import UserProfile
from shopledger.utils.id_token import profile_from_id_token


@click.group()
def shop_group():
    """Manage the shop profile."""
    pass


@shop_group.command("name")
@click.argument("new_name", required=False)
@click.pass_context
def shop_name(ctx, new_name: str | None):
    """Show or change the shop name.

    Examples:
        shopledger shop name
        shopledger shop name "Rahman Gas House"
    """
    store = ctx.obj["store"]

    if new_name is None:
        click.echo(store.state.shop_name)
        return

    trimmed = new_name.strip()
    if not trimmed:
        click.echo("Error: Shop name cannot be empty", err=True)
        ctx.exit(1)

    store.set_shop_name(trimmed)
    click.echo(f"Shop name set to '{trimmed}'")


@shop_group.command("login")
@click.option("--credential", help="Google ID token returned by the sign-in widget")
@click.option("--name", help="User name")
@click.option("--email", help="User email")
@click.option("--picture", default="", help="Profile picture URL")
@click.pass_context
def login(ctx, credential: str | None, name: str | None, email: str | None, picture: str):
    """Record the signed-in user.

    Either pass the ID token from the sign-in provider with --credential, or
    give --name and --email directly.
    """
    store = ctx.obj["store"]

    if credential:
        try:
            profile = profile_from_id_token(credential)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
    elif name and email:
        profile = UserProfile(name=name, email=email, picture=picture)
    else:
        click.echo("Error: Provide --credential, or both --name and --email", err=True)
        ctx.exit(1)

    store.set_user(profile)
    click.echo(f"Signed in as {profile.name} <{profile.email}>")


@shop_group.command("logout")
@click.pass_context
def logout(ctx):
    """Forget the signed-in user."""
    store = ctx.obj["store"]
    if store.state.user is None:
        click.echo("Nobody is signed in.")
        return
    store.set_user(None)
    click.echo("Signed out.")


@shop_group.command("info")
@click.pass_context
def shop_info(ctx):
    """Show the shop profile and record counts."""
    state = ctx.obj["store"].state
    click.echo(f"Shop: {state.shop_name}")
    if state.user is not None:
        click.echo(f"User: {state.user.name} <{state.user.email}>")
    else:
        click.echo("User: (not signed in)")
    click.echo(f"Customers: {len(state.customers)}")
    click.echo(f"Products: {len(state.products)}")
    click.echo(f"Transactions: {len(state.transactions)}")
    click.echo(f"Expenses: {len(state.expenses)}")


def register_commands(cli):
    """Register shop commands with main CLI."""
    cli.add_command(shop_group, name="shop")
