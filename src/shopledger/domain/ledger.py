"""Ledger store: the single owner of the shop's books."""

import logging
from dataclasses import replace
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Callable, Optional
from uuid import uuid4

from shopledger.domain import snapshot
from shopledger.domain.entities import (
    Customer,
    Expense,
    LedgerState,
    Product,
    Transaction,
    TransactionType,
    UserProfile,
)
from shopledger.domain.errors import ValidationError, unknown_customer_fields

logger = logging.getLogger(__name__)

StateListener = Callable[[LedgerState], None]

UPDATABLE_CUSTOMER_FIELDS = frozenset({"name", "phone", "address"})


def generate_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid4().hex


def _now_millis() -> datetime:
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class LedgerStore:
    """State container for customers, products, transactions and expenses.

    Each mutation builds a new immutable LedgerState and commits it with a
    single assignment, then notifies subscribers with the committed state.
    Callers never see a half-applied change.
    """

    def __init__(self, state: Optional[LedgerState] = None):
        """Initialize the store.

        Args:
            state: Initial state (defaults to an empty ledger)
        """
        self._state = state if state is not None else LedgerState()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> LedgerState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called after every committed mutation.

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, new_state: LedgerState, action: str) -> None:
        self._state = new_state
        logger.debug("Committed %s", action)
        for listener in list(self._listeners):
            listener(new_state)

    # Customer operations
    def add_customer(self, name: str, phone: str = "", address: str = "") -> Customer:
        """Create a customer with a fresh ID and the current timestamp."""
        customer = Customer(
            id=generate_id(),
            name=name,
            phone=phone,
            address=address,
            created_at=_now_millis(),
        )
        self._commit(
            replace(self._state, customers=self._state.customers + (customer,)),
            f"add customer {customer.id}",
        )
        return customer

    def update_customer(self, customer_id: str, **fields: str) -> None:
        """Merge profile fields into a customer.

        Only name, phone and address can change. An unknown customer ID is a
        no-op.

        Raises:
            ValidationError: If a field other than name, phone or address is given
        """
        unknown = [name for name in fields if name not in UPDATABLE_CUSTOMER_FIELDS]
        if unknown:
            raise ValidationError(unknown_customer_fields(unknown))

        if self._state.find_customer(customer_id) is None:
            logger.debug("Ignoring update for unknown customer %s", customer_id)
            return

        customers = tuple(
            replace(c, **fields) if c.id == customer_id else c
            for c in self._state.customers
        )
        self._commit(
            replace(self._state, customers=customers),
            f"update customer {customer_id}",
        )

    def delete_customer(self, customer_id: str) -> int:
        """Delete a customer together with all of their transactions.

        Returns:
            Number of transactions removed with the customer
        """
        customers = tuple(c for c in self._state.customers if c.id != customer_id)
        transactions = tuple(
            t for t in self._state.transactions if t.customer_id != customer_id
        )
        removed = len(self._state.transactions) - len(transactions)
        self._commit(
            replace(self._state, customers=customers, transactions=transactions),
            f"delete customer {customer_id} ({removed} transactions)",
        )
        return removed

    # Product operations
    def add_product(self, name: str, default_price: Decimal = Decimal("0")) -> Product:
        product = Product(id=generate_id(), name=name, default_price=default_price)
        self._commit(
            replace(self._state, products=self._state.products + (product,)),
            f"add product {product.id}",
        )
        return product

    def delete_product(self, product_id: str) -> None:
        """Delete a product. Transactions keep their product reference."""
        products = tuple(p for p in self._state.products if p.id != product_id)
        self._commit(
            replace(self._state, products=products),
            f"delete product {product_id}",
        )

    # Transaction operations
    def add_transaction(
        self,
        customer_id: str,
        date: date,
        type: TransactionType,
        amount: Decimal,
        product_id: Optional[str] = None,
        note: str = "",
    ) -> Transaction:
        """Append a transaction.

        The customer ID is not checked here; a transaction for an unknown
        customer is stored but never shows up in any customer's balance.
        """
        transaction = Transaction(
            id=generate_id(),
            customer_id=customer_id,
            product_id=product_id,
            date=date,
            type=type,
            amount=amount,
            note=note,
        )
        self._commit(
            replace(self._state, transactions=self._state.transactions + (transaction,)),
            f"add transaction {transaction.id}",
        )
        return transaction

    def delete_transaction(self, transaction_id: str) -> None:
        transactions = tuple(
            t for t in self._state.transactions if t.id != transaction_id
        )
        self._commit(
            replace(self._state, transactions=transactions),
            f"delete transaction {transaction_id}",
        )

    # Expense operations
    def add_expense(
        self,
        date: date,
        category: str,
        amount: Decimal,
        description: str = "",
    ) -> Expense:
        expense = Expense(
            id=generate_id(),
            date=date,
            category=category,
            amount=amount,
            description=description,
        )
        self._commit(
            replace(self._state, expenses=self._state.expenses + (expense,)),
            f"add expense {expense.id}",
        )
        return expense

    def delete_expense(self, expense_id: str) -> None:
        expenses = tuple(e for e in self._state.expenses if e.id != expense_id)
        self._commit(
            replace(self._state, expenses=expenses),
            f"delete expense {expense_id}",
        )

    # Shop profile
    def set_shop_name(self, name: str) -> None:
        self._commit(replace(self._state, shop_name=name), "set shop name")

    def set_user(self, user: Optional[UserProfile]) -> None:
        self._commit(replace(self._state, user=user), "set user")

    # Snapshots
    def export_snapshot(self) -> str:
        """Serialize the full state as pretty-printed JSON."""
        return snapshot.dumps(self._state, indent=2)

    def import_snapshot(self, text: str | bytes) -> None:
        """Replace the entire state with a serialized snapshot.

        The document is fully decoded and validated before anything is
        replaced.

        Raises:
            SnapshotError: If the snapshot is malformed or lacks customers
                or transactions; the current state is left untouched
        """
        new_state = snapshot.loads(text, required=snapshot.IMPORT_REQUIRED_FIELDS)
        self._commit(new_state, "import snapshot")
        logger.info(
            "Imported snapshot with %d customers and %d transactions",
            len(new_state.customers),
            len(new_state.transactions),
        )

    # Read helpers
    def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self._state.find_customer(customer_id)

    def get_product(self, product_id: Optional[str]) -> Optional[Product]:
        return self._state.find_product(product_id)

    def customer_transactions(self, customer_id: str) -> list[Transaction]:
        """Return a customer's transactions in insertion order."""
        return [t for t in self._state.transactions if t.customer_id == customer_id]

    def search_customers(self, query: str = "") -> list[Customer]:
        """Find customers by case-insensitive name match or phone substring."""
        needle = query.strip().lower()
        if not needle:
            return list(self._state.customers)
        return [
            c
            for c in self._state.customers
            if needle in c.name.lower() or needle in c.phone
        ]
