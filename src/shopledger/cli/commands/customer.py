"""Customer management commands."""

import click
from shopledger.cli.error_handling import handle_domain_error, resolve_or_exit
from shopledger.domain import balance
from shopledger.domain.errors import DomainError
from shopledger.domain.reports import payment_reminder
from shopledger.utils.money import format_amount


@click.group()
def customer_group():
    """Manage customers."""
    pass


@customer_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--phone", default="", help="Phone number")
@click.option("--address", default="", help="Postal address")
@click.pass_context
def add_customer(ctx, name: str, phone: str, address: str):
    """Add a new customer.

    Examples:
        shopledger customer add "Rahim Uddin" --phone 01712345678
        shopledger customer add "Karim Stores" --address "Mirpur 10, Dhaka"
    """
    store = ctx.obj["store"]

    name = name.strip()
    if not name:
        click.echo("Error: Customer name cannot be empty", err=True)
        ctx.exit(1)

    customer = store.add_customer(name=name, phone=phone.strip(), address=address.strip())
    click.echo(f"Created customer '{customer.name}' (ID: {customer.id})")


@customer_group.command("list")
@click.option("--search", default="", help="Filter by name or phone number")
@click.pass_context
def list_customers(ctx, search: str):
    """List customers with their outstanding balance."""
    store = ctx.obj["store"]
    transactions = store.state.transactions

    customers = store.search_customers(search)
    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"\nCustomers ({len(customers)}):")
    click.echo("-" * 90)
    click.echo(f"{'ID':<10} {'Name':<25} {'Phone':<16} {'Balance':>14}  Address")
    click.echo("-" * 90)
    for c in customers:
        due = balance.balance_of(c.id, transactions)
        click.echo(
            f"{c.id[:8]:<10} {c.name[:25]:<25} {c.phone:<16} {format_amount(due):>14}  {c.address}"
        )


@customer_group.command("show")
@click.argument("customer_ref", metavar="CUSTOMER")
@click.pass_context
def show_customer(ctx, customer_ref: str):
    """Show a customer's details, balance and transaction history.

    CUSTOMER can be a name, an ID or a unique ID prefix.
    """
    store = ctx.obj["store"]
    customer = resolve_or_exit(ctx, store.state.customers, customer_ref, "Customer")

    history = store.customer_transactions(customer.id)
    due = balance.balance_of(customer.id, store.state.transactions)

    click.echo(f"\nCustomer: {customer.name}")
    click.echo(f"  ID: {customer.id}")
    click.echo(f"  Phone: {customer.phone or '-'}")
    click.echo(f"  Address: {customer.address or '-'}")
    click.echo(f"  Since: {customer.created_at:%Y-%m-%d}")
    click.echo(f"  Balance due: {format_amount(due)}")

    if not history:
        click.echo("\nNo transactions recorded.")
        return

    click.echo(f"\nTransactions ({len(history)}):")
    click.echo("-" * 80)
    for txn in history:
        product = store.get_product(txn.product_id)
        product_name = product.name if product is not None else ("Unknown" if txn.product_id else "")
        click.echo(
            f"{str(txn.date):<12} {txn.type.label:<18} {format_amount(txn.amount):>14}  "
            f"{product_name:<15} {txn.note}"
        )


@customer_group.command("update")
@click.argument("customer_ref", metavar="CUSTOMER")
@click.option("--name", help="New name")
@click.option("--phone", help="New phone number")
@click.option("--address", help="New address")
@click.pass_context
def update_customer(ctx, customer_ref: str, name: str | None, phone: str | None, address: str | None):
    """Update a customer's name, phone or address.

    Only the options given are changed.

    Examples:
        shopledger customer update "Rahim Uddin" --phone 01812345678
    """
    store = ctx.obj["store"]
    customer = resolve_or_exit(ctx, store.state.customers, customer_ref, "Customer")

    fields = {}
    if name is not None:
        if not name.strip():
            click.echo("Error: Customer name cannot be empty", err=True)
            ctx.exit(1)
        fields["name"] = name.strip()
    if phone is not None:
        fields["phone"] = phone.strip()
    if address is not None:
        fields["address"] = address.strip()

    if not fields:
        click.echo("Nothing to update.")
        return

    try:
        store.update_customer(customer.id, **fields)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated customer '{store.get_customer(customer.id).name}'")


@customer_group.command("delete")
@click.argument("customer_ref", metavar="CUSTOMER")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_customer(ctx, customer_ref: str, yes: bool):
    """Delete a customer and all of their transactions.

    Examples:
        shopledger customer delete "Rahim Uddin"
    """
    store = ctx.obj["store"]
    customer = resolve_or_exit(ctx, store.state.customers, customer_ref, "Customer")

    count = len(store.customer_transactions(customer.id))
    if not yes and not click.confirm(
        f"Delete customer '{customer.name}' and {count} transaction{'s' if count != 1 else ''}?"
    ):
        click.echo("Deletion cancelled.")
        return

    removed = store.delete_customer(customer.id)
    click.echo(f"Deleted customer '{customer.name}' and {removed} transaction(s)")


@customer_group.command("remind")
@click.argument("customer_ref", metavar="CUSTOMER")
@click.pass_context
def remind_customer(ctx, customer_ref: str):
    """Print a WhatsApp link reminding a customer of their balance."""
    store = ctx.obj["store"]
    customer = resolve_or_exit(ctx, store.state.customers, customer_ref, "Customer")

    if not customer.phone:
        click.echo(f"Error: Customer '{customer.name}' has no phone number", err=True)
        ctx.exit(1)

    message = payment_reminder(store.state, customer)
    click.echo(message.body)
    click.echo("")
    click.echo(message.url)


def register_commands(cli):
    """Register customer commands with main CLI."""
    cli.add_command(customer_group, name="customer")
