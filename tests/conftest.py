"""Shared pytest fixtures for shopledger tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from shopledger.database.factories import create_sqlite_storage
from shopledger.domain.entities import TransactionType
from shopledger.domain.ledger import LedgerStore


@pytest.fixture
def temp_storage():
    """Create a temporary SQLite storage for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    storage = create_sqlite_storage(database_path=db_path)
    # Store the path for tests that need it
    storage.database_path = db_path
    storage.connect()

    yield storage

    storage.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def store(temp_storage):
    """Create a LedgerStore that writes through to the temporary storage."""
    ledger = LedgerStore(temp_storage.load_state())
    ledger.subscribe(temp_storage.save)
    return ledger


@pytest.fixture
def sample_customers(store):
    """Create two customers with a few transactions each."""
    rahim = store.add_customer(name="Rahim Uddin", phone="01712345678", address="Mirpur, Dhaka")
    karim = store.add_customer(name="Karim Stores", phone="01812345678", address="Uttara, Dhaka")

    store.add_transaction(
        customer_id=rahim.id,
        product_id="gas-12",
        date=date(2024, 1, 15),
        type=TransactionType.CREDIT_SALE,
        amount=Decimal("500"),
    )
    store.add_transaction(
        customer_id=rahim.id,
        date=date(2024, 1, 16),
        type=TransactionType.PAYMENT_RECEIVED,
        amount=Decimal("200"),
    )
    store.add_transaction(
        customer_id=karim.id,
        product_id="gas-35",
        date=date(2024, 1, 16),
        type=TransactionType.CREDIT_SALE,
        amount=Decimal("3200"),
    )
    return {"rahim": rahim, "karim": karim}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
