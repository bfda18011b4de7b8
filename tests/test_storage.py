"""Tests for the SQLAlchemy storage and write-through persistence."""

import json
from datetime import date
from decimal import Decimal

from shopledger.database.factories import create_sqlite_storage
from shopledger.domain import snapshot
from shopledger.domain.entities import LedgerState, TransactionType
from shopledger.domain.ledger import LedgerStore


class TestStorage:
    """Tests for loading and saving the ledger snapshot."""

    def test_empty_storage_loads_default_state(self, temp_storage):
        assert temp_storage.load() is None
        assert temp_storage.load_state() == LedgerState()

    def test_save_then_load(self, temp_storage):
        state = LedgerState(shop_name="Rahman Gas House")
        temp_storage.save(state)

        assert temp_storage.load_state() == state
        assert json.loads(temp_storage.load())["shopName"] == "Rahman Gas House"

    def test_save_overwrites_single_record(self, temp_storage):
        temp_storage.save(LedgerState(shop_name="First"))
        temp_storage.save(LedgerState(shop_name="Second"))

        assert temp_storage.load_state().shop_name == "Second"

    def test_corrupt_blob_falls_back_to_default(self, temp_storage, caplog):
        temp_storage.write_raw("{not valid json")

        with caplog.at_level("WARNING", logger="shopledger"):
            state = temp_storage.load_state()

        assert state == LedgerState()
        assert "unreadable" in caplog.text

    def test_malformed_document_falls_back_to_default(self, temp_storage):
        temp_storage.write_raw(json.dumps({"customers": "oops"}))
        assert temp_storage.load_state() == LedgerState()

    def test_out_of_range_created_at_falls_back_to_default(self, temp_storage):
        temp_storage.write_raw(
            json.dumps({"customers": [{"id": "c1", "createdAt": 10**20}], "transactions": []})
        )

        assert temp_storage.load_state() == LedgerState()

    def test_older_document_gets_defaults(self, temp_storage):
        temp_storage.write_raw(json.dumps({"customers": [{"id": "c1", "name": "Rahim"}]}))

        state = temp_storage.load_state()

        assert state.customers[0].name == "Rahim"
        assert state.transactions == ()
        assert state.shop_name == LedgerState().shop_name

    def test_state_survives_reopen(self, temp_storage):
        store = LedgerStore(temp_storage.load_state())
        store.subscribe(temp_storage.save)
        store.add_customer(name="Rahim")
        temp_storage.disconnect()

        reopened = create_sqlite_storage(database_path=temp_storage.database_path)
        try:
            assert [c.name for c in reopened.load_state().customers] == ["Rahim"]
        finally:
            reopened.disconnect()


def test_persisted_copy_tracks_every_mutation(store, temp_storage):
    """After each mutation the stored snapshot equals the in-memory state."""

    def assert_persisted():
        assert snapshot.loads(temp_storage.load()) == store.state

    customer = store.add_customer(name="Rahim", phone="017")
    assert_persisted()
    store.update_customer(customer.id, address="Dhaka")
    assert_persisted()
    product = store.add_product(name="Gas 20 kg", default_price=Decimal("1800"))
    assert_persisted()
    txn = store.add_transaction(
        customer_id=customer.id,
        product_id=product.id,
        date=date(2024, 1, 1),
        type=TransactionType.CREDIT_SALE,
        amount=Decimal("1800"),
    )
    assert_persisted()
    store.delete_product(product.id)
    assert_persisted()
    store.delete_transaction(txn.id)
    assert_persisted()
    expense = store.add_expense(date=date(2024, 1, 1), category="Rent", amount=Decimal("1000"))
    assert_persisted()
    store.delete_expense(expense.id)
    assert_persisted()
    store.set_shop_name("New name")
    assert_persisted()
    store.delete_customer(customer.id)
    assert_persisted()
