"""Product management commands."""

import click
from decimal import Decimal
from shopledger.cli.error_handling import resolve_or_exit
from shopledger.utils.money import format_amount, parse_amount


@click.group()
def product_group():
    """Manage products."""
    pass


@product_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--price", default="0", help="Default unit price (informational)")
@click.pass_context
def add_product(ctx, name: str, price: str):
    """Add a product.

    Examples:
        shopledger product add "Gas 12 kg" --price 1450
    """
    store = ctx.obj["store"]

    name = name.strip()
    if not name:
        click.echo("Error: Product name cannot be empty", err=True)
        ctx.exit(1)

    try:
        default_price = parse_amount(price)
    except ValueError as e:
        click.echo(f"Error: Invalid price: {e}", err=True)
        ctx.exit(1)
    if default_price < Decimal("0"):
        click.echo("Error: Price cannot be negative", err=True)
        ctx.exit(1)

    product = store.add_product(name=name, default_price=default_price)
    click.echo(f"Created product '{product.name}' (ID: {product.id})")


@product_group.command("list")
@click.pass_context
def list_products(ctx):
    """List all products."""
    store = ctx.obj["store"]
    products = store.state.products

    if not products:
        click.echo("No products found.")
        return

    click.echo("\nProducts:")
    click.echo("-" * 60)
    for p in products:
        click.echo(f"ID: {p.id[:8]:<10} | {p.name:<25} | Price: {format_amount(p.default_price)}")


@product_group.command("delete")
@click.argument("product_ref", metavar="PRODUCT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_product(ctx, product_ref: str, yes: bool):
    """Delete a product.

    Transactions that reference the product are kept and show the product
    as "Unknown".
    """
    store = ctx.obj["store"]
    product = resolve_or_exit(ctx, store.state.products, product_ref, "Product")

    if not yes and not click.confirm(f"Delete product '{product.name}'?"):
        click.echo("Deletion cancelled.")
        return

    store.delete_product(product.id)
    click.echo(f"Deleted product '{product.name}'")


def register_commands(cli):
    """Register product commands with main CLI."""
    cli.add_command(product_group, name="product")
