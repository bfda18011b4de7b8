"""Dashboard command."""

import click
from shopledger.domain import balance
from shopledger.domain.reports import dashboard_metrics, recent_activity
from shopledger.utils.date_parser import parse_date
from shopledger.utils.money import format_amount


@click.command("dashboard")
@click.option("--date", "date_str", default="today", help="Day to report on (defaults to today)")
@click.option("--days", default=7, show_default=True, type=click.IntRange(1, 90), help="Length of the sales/expense series")
@click.option("--recent", default=5, show_default=True, type=click.IntRange(0, 100), help="Number of recent transactions to show")
@click.pass_context
def dashboard(ctx, date_str: str, days: int, recent: int):
    """Show headline figures, the daily sales/expense series and recent activity."""
    state = ctx.obj["store"].state

    try:
        today = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    metrics = dashboard_metrics(state, today)

    click.echo(f"\n{state.shop_name} - {today.isoformat()}")
    click.echo("=" * 50)
    click.echo(f"{'Total sales':<25} {format_amount(metrics.total_sales):>20}")
    click.echo(f"{'Total outstanding dues':<25} {format_amount(metrics.total_dues):>20}")
    click.echo(f"{'Cash sales today':<25} {format_amount(metrics.today_cash_sales):>20}")
    click.echo(f"{'Payments today':<25} {format_amount(metrics.today_payments):>20}")
    click.echo(f"{'Expenses today':<25} {format_amount(metrics.today_expenses):>20}")

    click.echo(f"\nLast {days} day(s):")
    click.echo("-" * 50)
    click.echo(f"{'Day':<16} {'Sales':>15} {'Expenses':>15}")
    for point in balance.daily_series(state.transactions, state.expenses, days=days, today=today):
        label = f"{point.day:%a %Y-%m-%d}"
        click.echo(f"{label:<16} {format_amount(point.sales):>15} {format_amount(point.expenses):>15}")

    if recent == 0:
        return

    click.echo("\nRecent transactions:")
    click.echo("-" * 50)
    lines = recent_activity(state, limit=recent)
    if not lines:
        click.echo("No transactions yet.")
        return
    for line in lines:
        txn = line.transaction
        click.echo(
            f"{str(txn.date):<12} {line.customer_name[:18]:<18} {txn.type.label:<18} "
            f"{format_amount(txn.amount):>14}"
        )


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
