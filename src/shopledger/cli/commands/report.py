"""Report commands."""

import click
from shopledger.domain.reports import daily_report
from shopledger.utils.date_parser import parse_date


@click.group()
def report_group():
    """Prepare reports to share."""
    pass


@report_group.command("daily")
@click.option("--date", "date_str", default="today", help="Day to report on (defaults to today)")
@click.option("--link", is_flag=True, help="Print only the mailto link")
@click.pass_context
def daily(ctx, date_str: str, link: bool):
    """Print the daily business summary and an email link for it."""
    state = ctx.obj["store"].state

    try:
        day = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    message = daily_report(state, day)
    if link:
        click.echo(message.url)
        return

    click.echo(f"Subject: {message.subject}\n")
    click.echo(message.body)
    click.echo(f"\n{message.url}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
