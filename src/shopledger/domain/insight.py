"""Business insight domain service."""

import logging
from typing import Protocol

from shopledger.domain import balance
from shopledger.domain.entities import InsightSummary, LedgerState, TransactionType
from shopledger.domain.errors import InvalidResponseError
from shopledger.utils.money import format_amount

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a helpful business assistant for small retailers in Bangladesh."
)


class TextGenerationClient(Protocol):
    """Anything that turns a prompt into text.

    Implementations raise ServiceUnavailableError or InvalidResponseError.
    """

    def generate(self, prompt: str, system_instruction: str) -> str:
        ...


def build_summary(state: LedgerState) -> InsightSummary:
    """Reduce the ledger to the aggregates shared with the service."""
    return InsightSummary(
        shop_name=state.shop_name,
        customer_count=len(state.customers),
        cash_sales=balance.total_by_type(state.transactions, TransactionType.CASH_SALE),
        credit_sales=balance.total_by_type(state.transactions, TransactionType.CREDIT_SALE),
        outstanding=balance.total_outstanding(state.customers, state.transactions),
        expenses=balance.total_expenses(state.expenses),
    )


def build_prompt(summary: InsightSummary) -> str:
    """Render the aggregates into the request text."""
    return (
        f"Act as a retail business consultant for a shop named \"{summary.shop_name}\" "
        "in Bangladesh. Analyze this ledger summary and give 3-4 concise, actionable "
        "tips for the owner.\n\n"
        "Data summary:\n"
        f"- Number of customers: {summary.customer_count}\n"
        f"- Total cash sales: {format_amount(summary.cash_sales)}\n"
        f"- Total credit sales: {format_amount(summary.credit_sales)}\n"
        f"- Total outstanding dues: {format_amount(summary.outstanding)}\n"
        f"- Total operational expenses: {format_amount(summary.expenses)}\n\n"
        "Focus on sales balance, credit collection and expense control. "
        "Answer as short bullet points, under 150 words."
    )


class InsightService:
    """Service for requesting advice about the shop's figures."""

    def __init__(self, client: TextGenerationClient):
        """Initialize insight service.

        Args:
            client: Text-generation client
        """
        self.client = client

    def summarize(self, state: LedgerState) -> str:
        """Ask the text-generation service for advice on the ledger.

        Only aggregates leave the process, never individual records.

        Returns:
            Advisory text

        Raises:
            ServiceUnavailableError: If the service could not be reached
            InvalidResponseError: If the service returned no usable text
        """
        prompt = build_prompt(build_summary(state))
        logger.debug("Requesting insight for %s", state.shop_name)
        text = self.client.generate(prompt, SYSTEM_INSTRUCTION)
        if not text or not text.strip():
            raise InvalidResponseError("The insight service returned an empty response")
        return text.strip()
