"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class SnapshotError(DomainError):
    """A stored or imported snapshot is malformed and was not applied."""


class InsightError(DomainError):
    """The business insight could not be produced."""


class ServiceUnavailableError(InsightError):
    """The text-generation service could not be reached or refused the call."""


class InvalidResponseError(InsightError):
    """The text-generation service answered without usable text."""


def customer_not_found(customer_id: str) -> str:
    """Return message for missing customer."""
    return f"Customer {customer_id} not found"


def product_not_found(product_id: str) -> str:
    """Return message for missing product."""
    return f"Product {product_id} not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def expense_not_found(expense_id: str) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def unknown_customer_fields(fields: list[str]) -> str:
    """Return message for customer fields that cannot be updated."""
    return f"Cannot update customer field(s): {', '.join(sorted(fields))}"


def snapshot_missing_fields(fields: list[str]) -> str:
    """Return message for an import document lacking required collections."""
    return f"Snapshot is missing required field(s): {', '.join(fields)}"
