"""Domain model entities for shopledger.

These are pure data classes representing the shop's books, independent of the
storage format. Collections on LedgerState are tuples so a state value can be
shared freely and replaced in one assignment.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(Enum):
    """Kind of ledger transaction and its effect on a customer's balance."""

    CREDIT_SALE = "CREDIT_SALE"
    CASH_SALE = "CASH_SALE"
    PAYMENT_RECEIVED = "PAYMENT_RECEIVED"

    @property
    def label(self) -> str:
        return _TYPE_LABELS[self]

    @property
    def expects_product(self) -> bool:
        return self is not TransactionType.PAYMENT_RECEIVED


_TYPE_LABELS = {
    TransactionType.CREDIT_SALE: "Credit sale",
    TransactionType.CASH_SALE: "Cash sale",
    TransactionType.PAYMENT_RECEIVED: "Payment received",
}


# Fixed expense categories, in display order. Any other string is accepted
# as a free-text category.
EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Rent",
    "Utilities",
    "Salaries",
    "Supplies",
    "Marketing",
    "Repairs",
    "Other",
)

DEFAULT_EXPENSE_CATEGORY = "Supplies"

DEFAULT_SHOP_NAME = "Ledger Pro"


@dataclass(frozen=True)
class Customer:
    """Customer domain entity."""

    id: str
    name: str
    phone: str
    address: str
    created_at: datetime


@dataclass(frozen=True)
class Product:
    """Product domain entity.

    The default price is informational only; transactions carry their own
    amount.
    """

    id: str
    name: str
    default_price: Decimal


@dataclass(frozen=True)
class Transaction:
    """Sale or payment recorded against a customer."""

    id: str
    customer_id: str
    product_id: Optional[str]
    date: date
    type: TransactionType
    amount: Decimal
    note: str = ""


@dataclass(frozen=True)
class Expense:
    """Shop expense, independent of customers and products."""

    id: str
    date: date
    category: str
    amount: Decimal
    description: str = ""


@dataclass(frozen=True)
class UserProfile:
    """Signed-in user shown alongside the shop profile."""

    name: str
    email: str
    picture: str = ""


DEFAULT_PRODUCTS: tuple[Product, ...] = (
    Product(id="gas-12", name="Gas 12 kg", default_price=Decimal("0")),
    Product(id="gas-35", name="Gas 35 kg", default_price=Decimal("0")),
    Product(id="gas-45", name="Gas 45 kg", default_price=Decimal("0")),
)


@dataclass(frozen=True)
class LedgerState:
    """Complete state of one shop's books."""

    shop_name: str = DEFAULT_SHOP_NAME
    customers: tuple[Customer, ...] = ()
    products: tuple[Product, ...] = DEFAULT_PRODUCTS
    transactions: tuple[Transaction, ...] = ()
    expenses: tuple[Expense, ...] = ()
    user: Optional[UserProfile] = None

    def find_customer(self, customer_id: str) -> Optional[Customer]:
        """Return the customer with the given ID, or None."""
        for customer in self.customers:
            if customer.id == customer_id:
                return customer
        return None

    def find_product(self, product_id: Optional[str]) -> Optional[Product]:
        """Return the product with the given ID, or None."""
        if product_id is None:
            return None
        for product in self.products:
            if product.id == product_id:
                return product
        return None


@dataclass(frozen=True)
class DailyTotals:
    """Sales and expenses for one calendar day."""

    day: date
    sales: Decimal
    expenses: Decimal


@dataclass(frozen=True)
class DashboardMetrics:
    """Headline figures for the dashboard view."""

    total_dues: Decimal
    total_sales: Decimal
    today_cash_sales: Decimal
    today_payments: Decimal
    today_expenses: Decimal


@dataclass(frozen=True)
class ActivityLine:
    """A transaction with its customer and product names resolved."""

    transaction: Transaction
    customer_name: str
    product_name: str


@dataclass(frozen=True)
class InsightSummary:
    """Aggregates handed to the text-generation service."""

    shop_name: str
    customer_count: int
    cash_sales: Decimal
    credit_sales: Decimal
    outstanding: Decimal
    expenses: Decimal


@dataclass(frozen=True)
class OutboundMessage:
    """A prepared message and the link that opens it in another app."""

    subject: str
    body: str
    url: str
