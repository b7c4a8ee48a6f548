"""Open editing sessions, one ledger each."""

from __future__ import annotations

import logging
import threading
import uuid

from iconsmith.variants.ledger import VariantLedger

logger = logging.getLogger(__name__)


class EditorSessions:
    def __init__(self):
        self._ledgers: dict[str, VariantLedger] = {}
        self._lock = threading.Lock()

    def open(self, ledger: VariantLedger) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._ledgers[session_id] = ledger
        logger.info("Opened session %s for %s", session_id, ledger.icon_name)
        return session_id

    def get(self, session_id: str) -> VariantLedger | None:
        with self._lock:
            return self._ledgers.get(session_id)

    def close(self, session_id: str) -> bool:
        with self._lock:
            ledger = self._ledgers.pop(session_id, None)
        if ledger is not None:
            logger.info("Closed session %s", session_id)
        return ledger is not None

    def __len__(self) -> int:
        return len(self._ledgers)
