"""AI business insight command."""

import logging

import click
from shopledger.clients.gemini import create_gemini_client
from shopledger.domain.errors import InsightError
from shopledger.domain.insight import InsightService

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Could not get advice right now. Please try again later."


@click.command("insight")
@click.option("--model", help="Gemini model name (overrides SHOPLEDGER_GEMINI_MODEL)")
@click.pass_context
def insight(ctx, model: str | None):
    """Ask Gemini for advice based on the shop's totals.

    Only aggregate figures are sent (customer count, sales, dues and
    expenses). Needs GEMINI_API_KEY to be set.
    """
    state = ctx.obj["store"].state
    client = create_gemini_client(model_name=model)
    service = InsightService(client)

    try:
        text = service.summarize(state)
    except InsightError as e:
        logger.warning("Insight request failed: %s", e)
        click.echo(FALLBACK_MESSAGE)
        return

    click.echo(f"\nAdvice for {state.shop_name}:\n")
    click.echo(text)


def register_commands(cli):
    """Register insight command with main CLI."""
    cli.add_command(insight)
