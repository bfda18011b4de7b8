"""Domain layer for shopledger application."""

from shopledger.domain.ledger import LedgerStore
from shopledger.domain.insight import InsightService

__all__ = [
    "LedgerStore",
    "InsightService",
]
