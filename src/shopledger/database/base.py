"""Abstract storage interface."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

# Import directly to avoid circular import through domain/__init__.py
from shopledger.domain import snapshot
from shopledger.domain.entities import LedgerState
from shopledger.domain.errors import SnapshotError

logger = logging.getLogger(__name__)

# Key of the single record holding the ledger snapshot.
STORAGE_KEY = "retail_ledger_data"


class Storage(ABC):
    """Durable home for the serialized ledger state."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the storage backend."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        pass

    @abstractmethod
    def load(self) -> Optional[str]:
        """Return the stored snapshot text, or None if nothing is stored."""
        pass

    @abstractmethod
    def save(self, state: LedgerState) -> None:
        """Replace the stored snapshot with the given state."""
        pass

    def load_state(self) -> LedgerState:
        """Load the stored state, falling back to defaults.

        A missing record gives a fresh ledger. A corrupt or malformed record is
        logged and also gives a fresh ledger rather than failing.
        """
        text = self.load()
        if text is None:
            return LedgerState()
        try:
            return snapshot.loads(text)
        except SnapshotError as e:
            logger.warning("Stored ledger is unreadable, starting fresh: %s", e)
            return LedgerState()
