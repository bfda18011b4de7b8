"""Transaction management commands."""

import click
from shopledger.cli.error_handling import resolve_or_exit
from shopledger.domain import balance
from shopledger.domain.entities import TransactionType
from shopledger.utils.date_parser import parse_date
from shopledger.utils.money import format_amount, parse_positive_amount

TYPE_CHOICES = {
    "credit": TransactionType.CREDIT_SALE,
    "cash": TransactionType.CASH_SALE,
    "payment": TransactionType.PAYMENT_RECEIVED,
}


@click.group()
def transaction_group():
    """Record sales and payments."""
    pass


@transaction_group.command("add")
@click.option("--customer", "customer_ref", required=True, help="Customer name or ID")
@click.option(
    "--type",
    "type_name",
    type=click.Choice(sorted(TYPE_CHOICES), case_sensitive=False),
    default="credit",
    show_default=True,
    help="credit sale, cash sale or payment received",
)
@click.option("--amount", required=True, help="Amount in Taka (e.g., 500 or 1,250.50)")
@click.option("--product", "product_ref", help="Product name or ID (sales only)")
@click.option(
    "--date",
    "date_str",
    default="today",
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--note", default="", help="Free-text note")
@click.pass_context
def add_transaction(
    ctx,
    customer_ref: str,
    type_name: str,
    amount: str,
    product_ref: str | None,
    date_str: str,
    note: str,
):
    """Record a sale or a payment received.

    Examples:
        shopledger transaction add --customer "Rahim Uddin" --amount 1450 --product "Gas 12 kg"
        shopledger transaction add --customer "Rahim Uddin" --type payment --amount 500
        shopledger transaction add --customer Karim --type cash --amount 3200 --date yesterday
    """
    store = ctx.obj["store"]
    txn_type = TYPE_CHOICES[type_name.lower()]

    customer = resolve_or_exit(ctx, store.state.customers, customer_ref, "Customer")

    try:
        txn_amount = parse_positive_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount: {e}", err=True)
        ctx.exit(1)

    try:
        txn_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    product_id = None
    product_name = ""
    if product_ref:
        if not txn_type.expects_product:
            click.echo("Error: Payments received do not reference a product", err=True)
            ctx.exit(1)
        product = resolve_or_exit(ctx, store.state.products, product_ref, "Product")
        product_id = product.id
        product_name = product.name

    txn = store.add_transaction(
        customer_id=customer.id,
        product_id=product_id,
        date=txn_date,
        type=txn_type,
        amount=txn_amount,
        note=note,
    )

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Customer: {customer.name}")
    click.echo(f"  Type: {txn.type.label}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {format_amount(txn.amount)}")
    if product_name:
        click.echo(f"  Product: {product_name}")
    click.echo(
        f"  Balance due: {format_amount(balance.balance_of(customer.id, store.state.transactions))}"
    )


@transaction_group.command("list")
@click.option("--customer", "customer_ref", help="Customer name or ID")
@click.option(
    "--type",
    "type_name",
    type=click.Choice(sorted(TYPE_CHOICES), case_sensitive=False),
    help="Only show one kind of transaction",
)
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def list_transactions(
    ctx,
    customer_ref: str | None,
    type_name: str | None,
    start_date: str | None,
    end_date: str | None,
):
    """List transactions, newest first, with optional filters."""
    store = ctx.obj["store"]
    state = store.state

    start = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    end = None
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    transactions = list(state.transactions)
    if customer_ref:
        customer = resolve_or_exit(ctx, state.customers, customer_ref, "Customer")
        transactions = [t for t in transactions if t.customer_id == customer.id]
    if type_name:
        txn_type = TYPE_CHOICES[type_name.lower()]
        transactions = [t for t in transactions if t.type is txn_type]
    if start is not None:
        transactions = [t for t in transactions if t.date >= start]
    if end is not None:
        transactions = [t for t in transactions if t.date <= end]

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<10} {'Date':<12} {'Type':<18} {'Amount':>14}  {'Customer':<22} {'Product':<15} Note"
    )
    click.echo("-" * 110)
    for txn in reversed(transactions):
        customer = state.find_customer(txn.customer_id)
        product = state.find_product(txn.product_id)
        customer_name = customer.name if customer is not None else "Unknown"
        if product is not None:
            product_name = product.name
        else:
            product_name = "Unknown" if txn.product_id else ""
        click.echo(
            f"{txn.id[:8]:<10} {str(txn.date):<12} {txn.type.label:<18} "
            f"{format_amount(txn.amount):>14}  {customer_name[:22]:<22} {product_name[:15]:<15} {txn.note}"
        )

    click.echo("-" * 110)
    click.echo(
        f"Sales: {format_amount(balance.total_sales(transactions))} | "
        f"Payments: {format_amount(balance.total_by_type(transactions, TransactionType.PAYMENT_RECEIVED))} | "
        f"Count: {len(transactions)}"
    )


@transaction_group.command("delete")
@click.argument("transaction_ref", metavar="TRANSACTION_ID")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_ref: str, yes: bool):
    """Delete a transaction.

    TRANSACTION_ID can be the full ID or a unique prefix.

    Examples:
        shopledger transaction delete 3f9a1c2b
    """
    store = ctx.obj["store"]
    txn = resolve_or_exit(
        ctx, store.state.transactions, transaction_ref, "Transaction", get_name=lambda t: ""
    )

    if not yes and not click.confirm(
        f"Delete {txn.type.label.lower()} of {format_amount(txn.amount)} on {txn.date}?"
    ):
        click.echo("Deletion cancelled.")
        return

    store.delete_transaction(txn.id)
    click.echo(f"Deleted transaction {txn.id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
