"""Generic SQLAlchemy storage implementation."""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from shopledger.database.base import STORAGE_KEY, Storage
from shopledger.database.models import AppStateRecord, create_session_factory
from shopledger.domain import snapshot
from shopledger.domain.entities import LedgerState

logger = logging.getLogger(__name__)


class SQLAlchemyStorage(Storage):
    """SQLAlchemy-based implementation of the Storage interface."""

    def __init__(self, database_url: str, key: str = STORAGE_KEY):
        """Initialize SQLAlchemy storage.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
            key: Record key the snapshot is stored under
        """
        self.database_url = database_url
        self.key = key
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def load(self) -> Optional[str]:
        """Return the stored snapshot text, or None if nothing is stored."""
        session = self._get_session()
        # Another process may have written since the last read
        record = session.get(AppStateRecord, self.key, populate_existing=True)
        if record is None:
            return None
        return record.payload

    def save(self, state: LedgerState) -> None:
        """Write the full state under the storage key."""
        payload = snapshot.dumps(state)
        self.write_raw(payload)
        logger.debug("Saved ledger snapshot (%d bytes)", len(payload))

    def write_raw(self, payload: str) -> None:
        """Store raw text under the storage key, bypassing serialization."""
        session = self._get_session()
        record = session.get(AppStateRecord, self.key)
        if record is None:
            session.add(AppStateRecord(key=self.key, payload=payload))
        else:
            record.payload = payload
        session.commit()
