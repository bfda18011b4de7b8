"""Balance and aggregate calculations.

Every function here is a pure, order-independent fold over the ledger logs.
Nothing is cached; balances are recomputed from the full log on each call.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from shopledger.domain.entities import (
    EXPENSE_CATEGORIES,
    Customer,
    DailyTotals,
    Expense,
    Transaction,
    TransactionType,
)

ZERO = Decimal("0")

SALE_TYPES = frozenset({TransactionType.CREDIT_SALE, TransactionType.CASH_SALE})


def balance_of(customer_id: str, transactions: Iterable[Transaction]) -> Decimal:
    """Return the amount a customer currently owes.

    Credit sales increase the balance, payments received decrease it and cash
    sales are ignored.

    Args:
        customer_id: Customer ID
        transactions: Full transaction log

    Returns:
        Outstanding balance (may be zero or negative)
    """
    balance = ZERO
    for txn in transactions:
        if txn.customer_id != customer_id:
            continue
        if txn.type is TransactionType.CREDIT_SALE:
            balance += txn.amount
        elif txn.type is TransactionType.PAYMENT_RECEIVED:
            balance -= txn.amount
    return balance


def total_by_type(transactions: Iterable[Transaction], txn_type: TransactionType) -> Decimal:
    """Sum amounts of all transactions of one type."""
    return sum((t.amount for t in transactions if t.type is txn_type), ZERO)


def total_sales(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of credit and cash sales."""
    return sum((t.amount for t in transactions if t.type in SALE_TYPES), ZERO)


def total_outstanding(
    customers: Iterable[Customer], transactions: Sequence[Transaction]
) -> Decimal:
    """Sum of balances over all live customers.

    Transactions whose customer no longer exists are not attributed to anyone
    and do not count.
    """
    return sum((balance_of(c.id, transactions) for c in customers), ZERO)


def total_expenses(expenses: Iterable[Expense]) -> Decimal:
    """Sum of all expense amounts."""
    return sum((e.amount for e in expenses), ZERO)


def expenses_by_category(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Break expenses down by category.

    Every fixed category is present (zero when unused); free-text categories
    follow in order of first appearance.
    """
    breakdown = {category: ZERO for category in EXPENSE_CATEGORIES}
    for expense in expenses:
        breakdown[expense.category] = breakdown.get(expense.category, ZERO) + expense.amount
    return breakdown


def sales_on(day: date, transactions: Iterable[Transaction]) -> Decimal:
    return total_sales(t for t in transactions if t.date == day)


def cash_sales_on(day: date, transactions: Iterable[Transaction]) -> Decimal:
    return total_by_type(
        (t for t in transactions if t.date == day), TransactionType.CASH_SALE
    )


def payments_on(day: date, transactions: Iterable[Transaction]) -> Decimal:
    return total_by_type(
        (t for t in transactions if t.date == day), TransactionType.PAYMENT_RECEIVED
    )


def expenses_on(day: date, expenses: Iterable[Expense]) -> Decimal:
    return total_expenses(e for e in expenses if e.date == day)


def daily_series(
    transactions: Sequence[Transaction],
    expenses: Sequence[Expense],
    days: int = 7,
    today: Optional[date] = None,
) -> list[DailyTotals]:
    """Build a trailing series of daily sales and expenses.

    Args:
        transactions: Transaction log
        expenses: Expense log
        days: Number of days in the series, ending today
        today: Last day of the series (defaults to the current date)

    Returns:
        One DailyTotals per day, oldest first
    """
    if today is None:
        today = date.today()
    series = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        series.append(
            DailyTotals(
                day=day,
                sales=sales_on(day, transactions),
                expenses=expenses_on(day, expenses),
            )
        )
    return series
