#!/usr/bin/env python3
"""
JSON Transaction Store

File-backed implementation of the TransactionStore protocol. Transactions
and per-user sync status live as pretty-printed JSON in the store
directory. Every read-modify-write runs under a per-directory lock, and
`email_id` is unique across the store.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path

from ..core.datastore import DuplicateTransactionError
from ..core.json_utils import read_json, write_json
from ..core.models import ParsedTransaction, StoredTransaction, SyncStatus

logger = logging.getLogger(__name__)

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(directory: Path) -> threading.RLock:
    key = directory.resolve()
    with _locks_guard:
        if key not in _locks:
            _locks[key] = threading.RLock()
        return _locks[key]


class JsonTransactionStore:
    """
    DataStore for parsed transactions and sync status.

    Manages `transactions.json` (a list of transaction records) and
    `sync_status.json` (sync status keyed by user id).
    """

    def __init__(self, store_dir: Path):
        """
        Initialize transaction store.

        Args:
            store_dir: Directory holding the store files (data/transactions)
        """
        self.store_dir = store_dir
        self.transactions_file = store_dir / "transactions.json"
        self.status_file = store_dir / "sync_status.json"
        self._lock = _lock_for(store_dir)

    def exists(self) -> bool:
        """Check if the transactions file exists."""
        return self.transactions_file.exists()

    def load(self) -> list[StoredTransaction]:
        """
        Load every stored transaction.

        Returns:
            All transactions, in insertion order; empty if nothing stored yet

        Raises:
            ValueError: If the transactions file is corrupted
        """
        if not self.exists():
            return []

        data = read_json(self.transactions_file)
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of transactions in {self.transactions_file}")
        try:
            return [StoredTransaction.from_dict(record) for record in data]
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid transaction record in {self.transactions_file}: {e}") from e

    def save(self, data: list[StoredTransaction]) -> None:
        """Replace the stored transactions."""
        write_json(self.transactions_file, [txn.to_dict() for txn in data])

    def last_modified(self) -> datetime | None:
        """Get timestamp of the transactions file."""
        if not self.exists():
            return None
        return datetime.fromtimestamp(self.transactions_file.stat().st_mtime, tz=timezone.utc)

    def item_count(self) -> int | None:
        """Get count of stored transactions."""
        if not self.exists():
            return None
        return len(self.load())

    def summary_text(self) -> str:
        """Get human-readable summary."""
        count = self.item_count()
        if count is None:
            return "No transactions stored"
        return f"Transactions: {count} stored"

    def has_email(self, email_id: str) -> bool:
        """Check whether a transaction for this email id is already stored."""
        with self._lock:
            return any(txn.email_id == email_id for txn in self.load())

    def add(self, user_id: str, parsed: ParsedTransaction) -> StoredTransaction:
        """
        Store a parsed transaction for a user.

        The duplicate check and the write happen under one lock.

        Raises:
            DuplicateTransactionError: If the email id is already stored
        """
        with self._lock:
            existing = self.load()
            if any(txn.email_id == parsed.email_id for txn in existing):
                raise DuplicateTransactionError(parsed.email_id)

            stored = StoredTransaction.from_parsed(
                parsed,
                user_id=user_id,
                transaction_id=uuid.uuid4().hex,
                created_at=datetime.now(timezone.utc),
            )
            existing.append(stored)
            self.save(existing)

        logger.debug(f"Stored transaction {stored.id} for email {parsed.email_id}")
        return stored

    def transactions(self, user_id: str) -> list[StoredTransaction]:
        """All transactions for a user, newest first."""
        with self._lock:
            owned = [txn for txn in self.load() if txn.user_id == user_id]
        return sorted(owned, key=lambda txn: txn.transaction_date, reverse=True)

    def transactions_between(self, user_id: str, start: datetime, end: datetime) -> list[StoredTransaction]:
        """Transactions with start <= transaction_date < end, newest first."""
        return [txn for txn in self.transactions(user_id) if start <= txn.transaction_date < end]

    def _load_statuses(self) -> dict[str, SyncStatus]:
        if not self.status_file.exists():
            return {}
        data = read_json(self.status_file)
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object of sync statuses in {self.status_file}")
        return {user_id: SyncStatus.from_dict(record) for user_id, record in data.items()}

    def sync_status(self, user_id: str) -> SyncStatus | None:
        """Get the user's sync status, or None if never synced."""
        with self._lock:
            return self._load_statuses().get(user_id)

    def record_sync(self, user_id: str, synced_count: int, synced_at: datetime) -> SyncStatus:
        """
        Record a completed sync.

        Sets the last sync time and adds synced_count to the cumulative
        synced email counter, which never decreases.
        """
        if synced_count < 0:
            raise ValueError(f"synced_count must be non-negative, got {synced_count}")

        with self._lock:
            statuses = self._load_statuses()
            previous = statuses.get(user_id)
            total = (previous.synced_email_count if previous else 0) + synced_count
            status = SyncStatus(user_id=user_id, last_sync_at=synced_at, synced_email_count=total)
            statuses[user_id] = status
            write_json(self.status_file, {uid: s.to_dict() for uid, s in statuses.items()})

        return status
