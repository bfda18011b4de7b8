"""Snapshot serialization for the whole ledger state.

A snapshot is one JSON document holding every collection. The same shape is
used for local persistence, backup export and backup import. Decoding is
all-or-nothing: a malformed document raises SnapshotError before any state
is built, and missing optional fields fall back to defaults so data saved by
older versions still loads.
"""

import json
from datetime import date, datetime, timedelta, UTC
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional

from shopledger.domain.entities import (
    DEFAULT_PRODUCTS,
    DEFAULT_SHOP_NAME,
    Customer,
    Expense,
    LedgerState,
    Product,
    Transaction,
    TransactionType,
    UserProfile,
)
from shopledger.domain.errors import SnapshotError, snapshot_missing_fields

# Fields an imported backup must carry to be accepted.
IMPORT_REQUIRED_FIELDS = ("customers", "transactions")

EXPORT_FILENAME_PATTERN = "ledger_backup_{day}.json"

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Transaction type labels written by the original web app's backups.
_LEGACY_TYPE_LABELS = {
    "বাকি বিক্রয়": TransactionType.CREDIT_SALE,
    "বাকি পরিশোধ": TransactionType.PAYMENT_RECEIVED,
    "নগদ বিক্রয়": TransactionType.CASH_SALE,
}


def export_filename(day: Optional[date] = None) -> str:
    """Return the default backup file name for a given day."""
    if day is None:
        day = date.today()
    return EXPORT_FILENAME_PATTERN.format(day=day.isoformat())


def to_epoch_millis(moment: datetime) -> int:
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def from_epoch_millis(millis: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=millis)


def _encode_amount(amount: Decimal) -> int | float | str:
    if amount == amount.to_integral_value():
        return int(amount)
    as_float = float(amount)
    # Amounts a float cannot hold exactly are written as decimal strings
    if Decimal(repr(as_float)) != amount:
        return str(amount)
    return as_float


def state_to_dict(state: LedgerState) -> dict[str, Any]:
    """Convert a LedgerState into a JSON-ready dictionary."""
    data: dict[str, Any] = {
        "shopName": state.shop_name,
        "customers": [
            {
                "id": c.id,
                "name": c.name,
                "phone": c.phone,
                "address": c.address,
                "createdAt": to_epoch_millis(c.created_at),
            }
            for c in state.customers
        ],
        "products": [
            {
                "id": p.id,
                "name": p.name,
                "defaultPrice": _encode_amount(p.default_price),
            }
            for p in state.products
        ],
        "transactions": [],
        "expenses": [
            {
                "id": e.id,
                "date": e.date.isoformat(),
                "category": e.category,
                "amount": _encode_amount(e.amount),
                "description": e.description,
            }
            for e in state.expenses
        ],
    }
    for t in state.transactions:
        record: dict[str, Any] = {
            "id": t.id,
            "customerId": t.customer_id,
            "date": t.date.isoformat(),
            "type": t.type.value,
            "amount": _encode_amount(t.amount),
            "note": t.note,
        }
        if t.product_id is not None:
            record["productId"] = t.product_id
        data["transactions"].append(record)
    if state.user is not None:
        data["user"] = {
            "name": state.user.name,
            "email": state.user.email,
            "picture": state.user.picture,
        }
    return data


def dumps(state: LedgerState, indent: Optional[int] = None) -> str:
    """Serialize a LedgerState to JSON text."""
    return json.dumps(state_to_dict(state), ensure_ascii=False, indent=indent)


def loads(text: str | bytes, required: Iterable[str] = ()) -> LedgerState:
    """Parse JSON text into a LedgerState.

    Args:
        text: JSON document
        required: Top-level fields that must be present

    Returns:
        Decoded LedgerState

    Raises:
        SnapshotError: If the text is not valid JSON or the document is malformed
    """
    try:
        data = json.loads(text, parse_float=Decimal)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SnapshotError(f"Snapshot is not valid JSON: {e}")
    return state_from_dict(data, required=required)


def state_from_dict(data: Any, required: Iterable[str] = ()) -> LedgerState:
    """Build a LedgerState from a decoded snapshot document.

    Raises:
        SnapshotError: If the document is malformed or lacks a required field
    """
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object")

    missing = [name for name in required if data.get(name) is None]
    if missing:
        raise SnapshotError(snapshot_missing_fields(missing))

    shop_name = data.get("shopName") or DEFAULT_SHOP_NAME
    if not isinstance(shop_name, str):
        raise SnapshotError("shopName must be a string")

    products_data = data.get("products")
    if products_data is None:
        products = DEFAULT_PRODUCTS
    else:
        products = tuple(
            _product(r) for r in _records(products_data, "products")
        )

    return LedgerState(
        shop_name=shop_name,
        customers=tuple(
            _customer(r) for r in _records(data.get("customers"), "customers")
        ),
        products=products,
        transactions=tuple(
            _transaction(r) for r in _records(data.get("transactions"), "transactions")
        ),
        expenses=tuple(
            _expense(r) for r in _records(data.get("expenses"), "expenses")
        ),
        user=_user(data.get("user")),
    )


def _records(value: Any, name: str) -> list[dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SnapshotError(f"{name} must be a list")
    for index, record in enumerate(value):
        if not isinstance(record, dict):
            raise SnapshotError(f"{name}[{index}] must be an object")
    return value


def _text(record: dict[str, Any], key: str, default: Optional[str] = None) -> str:
    value = record.get(key)
    if value is None:
        if default is None:
            raise SnapshotError(f"Record is missing '{key}'")
        return default
    if not isinstance(value, str):
        raise SnapshotError(f"'{key}' must be a string, got {value!r}")
    return value


def _amount(record: dict[str, Any], key: str, default: Optional[Decimal] = None) -> Decimal:
    value = record.get(key)
    if value is None and default is not None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, Decimal, float, str)):
        raise SnapshotError(f"'{key}' must be a number, got {value!r}")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise SnapshotError(f"'{key}' must be a number, got {value!r}")
    if not amount.is_finite():
        raise SnapshotError(f"'{key}' must be a finite number, got {value!r}")
    return amount


def _day(record: dict[str, Any], key: str) -> date:
    value = _text(record, key)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise SnapshotError(f"'{key}' must be a YYYY-MM-DD date, got {value!r}")


def _customer(record: dict[str, Any]) -> Customer:
    created = record.get("createdAt", 0)
    if isinstance(created, bool) or not isinstance(created, (int, Decimal)):
        raise SnapshotError(f"'createdAt' must be epoch milliseconds, got {created!r}")
    try:
        created_at = from_epoch_millis(int(created))
    except (OverflowError, ValueError):
        raise SnapshotError(f"'createdAt' out of range, got {created!r}")
    return Customer(
        id=_text(record, "id"),
        name=_text(record, "name", ""),
        phone=_text(record, "phone", ""),
        address=_text(record, "address", ""),
        created_at=created_at,
    )


def _product(record: dict[str, Any]) -> Product:
    return Product(
        id=_text(record, "id"),
        name=_text(record, "name", ""),
        default_price=_amount(record, "defaultPrice", Decimal("0")),
    )


def _transaction_type(value: Any) -> TransactionType:
    if isinstance(value, str):
        if value in _LEGACY_TYPE_LABELS:
            return _LEGACY_TYPE_LABELS[value]
        try:
            return TransactionType(value)
        except ValueError:
            pass
    raise SnapshotError(f"Unknown transaction type {value!r}")


def _transaction(record: dict[str, Any]) -> Transaction:
    # The web app stores an empty string when no product was selected
    product_id = _text(record, "productId", "") or None
    return Transaction(
        id=_text(record, "id"),
        customer_id=_text(record, "customerId"),
        product_id=product_id,
        date=_day(record, "date"),
        type=_transaction_type(record.get("type")),
        amount=_amount(record, "amount"),
        note=_text(record, "note", ""),
    )


def _expense(record: dict[str, Any]) -> Expense:
    return Expense(
        id=_text(record, "id"),
        date=_day(record, "date"),
        category=_text(record, "category", "Other"),
        amount=_amount(record, "amount"),
        description=_text(record, "description", ""),
    )


def _user(value: Any) -> Optional[UserProfile]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise SnapshotError("user must be an object")
    return UserProfile(
        name=_text(value, "name", ""),
        email=_text(value, "email", ""),
        picture=_text(value, "picture", ""),
    )
