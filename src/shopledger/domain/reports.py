"""Dashboard figures and outbound report messages."""

import re
from datetime import date
from typing import Optional
from urllib.parse import quote, urlencode

from shopledger.domain import balance
from shopledger.domain.entities import (
    ActivityLine,
    Customer,
    DashboardMetrics,
    LedgerState,
    OutboundMessage,
)
from shopledger.utils.money import format_amount

UNKNOWN = "Unknown"

BANGLADESH_COUNTRY_CODE = "88"


def dashboard_metrics(state: LedgerState, today: Optional[date] = None) -> DashboardMetrics:
    """Compute the headline dashboard figures.

    Args:
        state: Ledger state
        today: Day used for the "today" figures (defaults to the current date)

    Returns:
        DashboardMetrics for the given day
    """
    if today is None:
        today = date.today()
    return DashboardMetrics(
        total_dues=balance.total_outstanding(state.customers, state.transactions),
        total_sales=balance.total_sales(state.transactions),
        today_cash_sales=balance.cash_sales_on(today, state.transactions),
        today_payments=balance.payments_on(today, state.transactions),
        today_expenses=balance.expenses_on(today, state.expenses),
    )


def recent_activity(state: LedgerState, limit: int = 5) -> list[ActivityLine]:
    """Return the latest transactions, newest first, with names resolved.

    Missing customers or products show up as "Unknown".
    """
    if limit <= 0:
        return []
    lines = []
    for txn in reversed(state.transactions[-limit:]):
        customer = state.find_customer(txn.customer_id)
        product = state.find_product(txn.product_id)
        if product is not None:
            product_name = product.name
        elif txn.product_id is None:
            product_name = ""
        else:
            product_name = UNKNOWN
        lines.append(
            ActivityLine(
                transaction=txn,
                customer_name=customer.name if customer is not None else UNKNOWN,
                product_name=product_name,
            )
        )
    return lines


def daily_report(state: LedgerState, today: Optional[date] = None) -> OutboundMessage:
    """Build the owner's daily summary as an email draft.

    The mailto link is addressed to the signed-in user, if any.
    """
    if today is None:
        today = date.today()
    metrics = dashboard_metrics(state, today)
    subject = f"{state.shop_name} - Business report ({today.isoformat()})"
    body = (
        f"Summary for \"{state.shop_name}\" on {today.isoformat()}:\n\n"
        f"1. Cash sales today: {format_amount(metrics.today_cash_sales)}\n"
        f"2. Payments collected today: {format_amount(metrics.today_payments)}\n"
        f"3. Expenses today: {format_amount(metrics.today_expenses)}\n"
        f"4. Total outstanding dues: {format_amount(metrics.total_dues)}\n\n"
        "Thank you."
    )
    recipient = state.user.email if state.user is not None else ""
    query = urlencode({"subject": subject, "body": body}, quote_via=quote)
    return OutboundMessage(
        subject=subject,
        body=body,
        url=f"mailto:{recipient}?{query}",
    )


def normalize_phone(phone: str) -> str:
    """Strip a phone number to digits, adding the country code to local numbers.

    Bangladeshi mobile numbers written locally ("01XXXXXXXXX") get the "88"
    prefix; anything else is left as its digits.
    """
    digits = re.sub(r"\D", "", phone)
    if digits.startswith("01") and len(digits) == 11:
        digits = BANGLADESH_COUNTRY_CODE + digits
    return digits


def payment_reminder(state: LedgerState, customer: Customer) -> OutboundMessage:
    """Build a WhatsApp reminder of a customer's outstanding balance."""
    due = balance.balance_of(customer.id, state.transactions)
    subject = f"Balance reminder for {customer.name}"
    body = (
        f"Hello {customer.name},\n\n"
        f"Your current balance with \"{state.shop_name}\":\n"
        "--------------------------\n"
        f"Total due: {format_amount(due)}\n"
        "--------------------------\n"
        "Please settle at your earliest convenience. Thank you."
    )
    url = f"https://wa.me/{normalize_phone(customer.phone)}?text={quote(body, safe='')}"
    return OutboundMessage(subject=subject, body=body, url=url)
