#!/usr/bin/env python3
"""
Email source backed by a directory of saved .eml files.

Lets a sync run against exported notification emails without a mailbox.
"""

import email
import logging
from pathlib import Path

from ..core.models import RawEmail
from .email_fetcher import MailboxError, matches_search_terms, raw_email_from_message

logger = logging.getLogger(__name__)


class EmlDirectorySource:
    """Reads candidate bank emails from `*.eml` files in a directory."""

    def __init__(self, emails_dir: Path):
        """
        Args:
            emails_dir: Directory containing .eml files
        """
        self.emails_dir = emails_dir

    def fetch_bank_emails(self, max_results: int) -> list[RawEmail]:
        """
        Load up to max_results candidate emails in file name order.

        Files that cannot be read are logged and skipped.

        Raises:
            MailboxError: If the directory doesn't exist
        """
        if not self.emails_dir.is_dir():
            raise MailboxError(f"Email directory not found: {self.emails_dir}")

        emails: list[RawEmail] = []
        for eml_file in sorted(self.emails_dir.glob("*.eml")):
            if len(emails) >= max_results:
                break
            try:
                raw_email = load_eml_file(eml_file)
            except (OSError, UnicodeError, ValueError) as e:
                logger.warning(f"Error reading {eml_file.name}: {e}")
                continue

            if matches_search_terms(raw_email):
                emails.append(raw_email)
            else:
                logger.debug(f"Skipping non-bank email {eml_file.name}")

        logger.info(f"Loaded {len(emails)} candidate emails from {self.emails_dir}")
        return emails


def load_eml_file(eml_file: Path) -> RawEmail:
    """Parse one .eml file; the file stem is the id when Message-ID is absent."""
    msg = email.message_from_bytes(eml_file.read_bytes())
    return raw_email_from_message(msg, fallback_id=eml_file.stem)
