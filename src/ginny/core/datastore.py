#!/usr/bin/env python3
"""
TransactionStore Protocol - persistence interface used by email sync.

Separates the sync orchestration logic from how transactions and sync
status are actually stored.
"""

from datetime import datetime
from typing import Protocol

from .models import ParsedTransaction, StoredTransaction, SyncStatus


class DuplicateTransactionError(ValueError):
    """Raised when a transaction with the same email id is already stored."""

    def __init__(self, email_id: str):
        self.email_id = email_id
        super().__init__(f"Transaction for email {email_id} already stored")


class TransactionStore(Protocol):
    """
    Protocol for transaction persistence.

    Implementations must treat `email_id` as unique: `add()` either stores
    the transaction or raises DuplicateTransactionError, atomically.
    """

    def has_email(self, email_id: str) -> bool:
        """
        Check whether a transaction for this email id is already stored.

        Returns:
            True if a stored transaction carries this email id
        """
        ...

    def add(self, user_id: str, parsed: ParsedTransaction) -> StoredTransaction:
        """
        Store a parsed transaction for a user.

        Raises:
            DuplicateTransactionError: If the email id is already stored
        """
        ...

    def transactions(self, user_id: str) -> list[StoredTransaction]:
        """All transactions for a user, newest first."""
        ...

    def transactions_between(self, user_id: str, start: datetime, end: datetime) -> list[StoredTransaction]:
        """Transactions with start <= transaction_date < end, newest first."""
        ...

    def sync_status(self, user_id: str) -> SyncStatus | None:
        """Get the user's sync status, or None if never synced."""
        ...

    def record_sync(self, user_id: str, synced_count: int, synced_at: datetime) -> SyncStatus:
        """Set last sync time and add synced_count to the cumulative counter."""
        ...
