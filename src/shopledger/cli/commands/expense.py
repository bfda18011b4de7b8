"""Expense management commands."""

import click
from shopledger.cli.error_handling import resolve_or_exit
from shopledger.domain import balance
from shopledger.domain.entities import DEFAULT_EXPENSE_CATEGORY, EXPENSE_CATEGORIES
from shopledger.utils.date_parser import parse_date
from shopledger.utils.money import format_amount, parse_positive_amount


@click.group()
def expense_group():
    """Manage shop expenses."""
    pass


@expense_group.command("add")
@click.option("--amount", required=True, help="Amount in Taka")
@click.option(
    "--category",
    default=DEFAULT_EXPENSE_CATEGORY,
    show_default=True,
    help=f"One of {', '.join(EXPENSE_CATEGORIES)}, or any other label",
)
@click.option(
    "--date",
    "date_str",
    default="today",
    help="Expense date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", default="", help="What the money was spent on")
@click.pass_context
def add_expense(ctx, amount: str, category: str, date_str: str, description: str):
    """Record an expense.

    Examples:
        shopledger expense add --amount 1000 --category Rent
        shopledger expense add --amount 150 --description "Packing tape"
    """
    store = ctx.obj["store"]

    try:
        expense_amount = parse_positive_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount: {e}", err=True)
        ctx.exit(1)

    try:
        expense_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    # Match fixed categories case-insensitively, keep free text as typed
    category = category.strip() or DEFAULT_EXPENSE_CATEGORY
    for known in EXPENSE_CATEGORIES:
        if known.lower() == category.lower():
            category = known
            break

    expense = store.add_expense(
        date=expense_date,
        category=category,
        amount=expense_amount,
        description=description,
    )
    click.echo(f"Created expense {expense.id}")
    click.echo(f"  Date: {expense.date}")
    click.echo(f"  Category: {expense.category}")
    click.echo(f"  Amount: {format_amount(expense.amount)}")


@expense_group.command("list")
@click.option("--category", help="Only show one category")
@click.pass_context
def list_expenses(ctx, category: str | None):
    """List expenses, newest first."""
    store = ctx.obj["store"]
    expenses = list(store.state.expenses)
    if category:
        expenses = [e for e in expenses if e.category.lower() == category.lower()]

    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo(f"\nFound {len(expenses)} expense(s):")
    click.echo("-" * 80)
    for e in reversed(expenses):
        click.echo(
            f"{e.id[:8]:<10} {str(e.date):<12} {e.category:<12} "
            f"{format_amount(e.amount):>14}  {e.description}"
        )
    click.echo("-" * 80)
    click.echo(f"Total: {format_amount(balance.total_expenses(expenses))}")


@expense_group.command("summary")
@click.pass_context
def expense_summary(ctx):
    """Show expenses broken down by category."""
    store = ctx.obj["store"]
    expenses = store.state.expenses
    total = balance.total_expenses(expenses)

    click.echo("\nExpenses by category:")
    click.echo("-" * 50)
    for category, amount in balance.expenses_by_category(expenses).items():
        share = (amount / total * 100) if total > 0 else 0
        click.echo(f"{category:<15} {format_amount(amount):>14}  {share:5.1f}%")
    click.echo("-" * 50)
    click.echo(f"{'Total':<15} {format_amount(total):>14}")


@expense_group.command("delete")
@click.argument("expense_ref", metavar="EXPENSE_ID")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_expense(ctx, expense_ref: str, yes: bool):
    """Delete an expense by ID or unique ID prefix."""
    store = ctx.obj["store"]
    expense = resolve_or_exit(
        ctx, store.state.expenses, expense_ref, "Expense", get_name=lambda e: ""
    )

    if not yes and not click.confirm(
        f"Delete {expense.category} expense of {format_amount(expense.amount)} on {expense.date}?"
    ):
        click.echo("Deletion cancelled.")
        return

    store.delete_expense(expense.id)
    click.echo(f"Deleted expense {expense.id}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
