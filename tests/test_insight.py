"""Tests for the insight service and the Gemini client."""

from datetime import date
from decimal import Decimal

import pytest

from shopledger.clients.gemini import GeminiClient, create_gemini_client
from shopledger.domain.entities import TransactionType
from shopledger.domain.errors import (
    InsightError,
    InvalidResponseError,
    ServiceUnavailableError,
)
from shopledger.domain.insight import InsightService, build_prompt, build_summary


class FakeClient:
    """Text-generation client that records prompts."""

    def __init__(self, reply="- Collect dues weekly", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate(self, prompt, system_instruction):
        self.prompts.append((prompt, system_instruction))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def insight_store(store, sample_customers):
    store.add_transaction(
        customer_id=sample_customers["rahim"].id,
        date=date(2024, 1, 17),
        type=TransactionType.CASH_SALE,
        amount=Decimal("1000"),
        note="secret note",
    )
    store.add_expense(date=date(2024, 1, 17), category="Rent", amount=Decimal("1150"))
    store.set_shop_name("Rahman Gas House")
    return store


def test_build_summary(insight_store):
    summary = build_summary(insight_store.state)

    assert summary.shop_name == "Rahman Gas House"
    assert summary.customer_count == 2
    assert summary.cash_sales == Decimal("1000")
    assert summary.credit_sales == Decimal("3700")
    assert summary.outstanding == Decimal("3500")
    assert summary.expenses == Decimal("1150")


def test_prompt_carries_only_aggregates(insight_store):
    prompt = build_prompt(build_summary(insight_store.state))

    assert "Rahman Gas House" in prompt
    assert "৳1,000.00" in prompt
    assert "৳3,700.00" in prompt
    assert "৳3,500.00" in prompt
    assert "৳1,150.00" in prompt
    assert "Rahim" not in prompt
    assert "secret note" not in prompt


def test_summarize_returns_text(insight_store):
    client = FakeClient(reply="  - Collect dues weekly\n")
    service = InsightService(client)

    assert service.summarize(insight_store.state) == "- Collect dues weekly"
    assert len(client.prompts) == 1


def test_summarize_rejects_empty_reply(insight_store):
    service = InsightService(FakeClient(reply="   "))

    with pytest.raises(InvalidResponseError):
        service.summarize(insight_store.state)


def test_summarize_propagates_service_failure(insight_store):
    before = insight_store.state
    service = InsightService(FakeClient(error=ServiceUnavailableError("down")))

    with pytest.raises(InsightError):
        service.summarize(insight_store.state)
    assert insight_store.state is before


def test_gemini_client_without_key_is_unavailable():
    client = GeminiClient(api_key="")

    with pytest.raises(ServiceUnavailableError):
        client.generate("prompt", "system")


def test_create_gemini_client_reads_environment(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("API_KEY", "fallback-key")
    monkeypatch.setenv("SHOPLEDGER_GEMINI_MODEL", "gemini-test")

    client = create_gemini_client()

    assert client.api_key == "fallback-key"
    assert client.model_name == "gemini-test"

    monkeypatch.setenv("GEMINI_API_KEY", "primary-key")
    assert create_gemini_client().api_key == "primary-key"
