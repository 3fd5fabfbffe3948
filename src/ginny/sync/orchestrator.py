#!/usr/bin/env python3
"""
Email Sync Orchestrator

Fetches candidate bank emails, parses each one, and persists new
transactions. Emails are processed one at a time in fetch order; a failure
on one email is logged and skipped, while a failure to reach the mailbox
aborts the whole sync before anything is written.
"""

import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Protocol

from ..bank_emails.parser import TransactionParser
from ..core.datastore import DuplicateTransactionError, TransactionStore
from ..core.dates import EmailDateError
from ..core.models import RawEmail

logger = logging.getLogger(__name__)


class EmailSource(Protocol):
    """Supplies candidate bank notification emails."""

    def fetch_bank_emails(self, max_results: int) -> list[RawEmail]:
        """
        Fetch up to max_results candidate emails.

        Raises:
            MailboxError: If the mailbox cannot be reached
        """
        ...


@dataclass
class SyncResult:
    """
    Outcome of one sync run.

    `synced` counts newly stored transactions; `total` counts fetched
    emails. The remaining counters split the rest of the batch.
    """

    synced: int = 0
    total: int = 0
    duplicates: int = 0
    skipped: int = 0
    failed: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SyncOrchestrator:
    """Runs an email sync for one user against a source and a store."""

    def __init__(
        self,
        source: EmailSource,
        store: TransactionStore,
        parser: TransactionParser | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.source = source
        self.store = store
        self.parser = parser or TransactionParser()
        self.clock = clock

    def sync(self, user_id: str, max_results: int) -> SyncResult:
        """
        Sync up to max_results emails into the user's transactions.

        Raises:
            MailboxError: If the source cannot fetch emails; nothing is
                written and the sync status is left untouched
        """
        emails = self.source.fetch_bank_emails(max_results)
        result = SyncResult(total=len(emails))
        logger.info(f"Syncing {len(emails)} fetched emails for {user_id}")

        for raw_email in emails:
            try:
                self._process(user_id, raw_email, result)
            except Exception as e:
                logger.warning(f"Failed to process email {raw_email.id}: {e}")
                result.failed += 1

        self.store.record_sync(user_id, result.synced, self.clock())
        logger.info(
            f"Sync complete for {user_id}: {result.synced} new of {result.total} fetched "
            f"({result.duplicates} already synced, {result.skipped} not transactions, {result.failed} failed)"
        )
        return result

    def _process(self, user_id: str, raw_email: RawEmail, result: SyncResult) -> None:
        if self.store.has_email(raw_email.id):
            result.duplicates += 1
            return

        try:
            parsed = self.parser.parse(raw_email)
        except EmailDateError as e:
            logger.warning(f"Skipping email {raw_email.id}: {e}")
            result.failed += 1
            return

        if parsed is None:
            result.skipped += 1
            return

        try:
            self.store.add(user_id, parsed)
        except DuplicateTransactionError:
            # Stored by a concurrent sync since the has_email check
            result.duplicates += 1
            return

        result.synced += 1
