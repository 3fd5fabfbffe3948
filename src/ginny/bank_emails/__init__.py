"""
Bank Notification Email Package

Rule-based extraction of transactions from Spanish bank notification emails.

Key Components:
- amounts: ordered currency patterns with sanity bounds
- banks: bank registry and canonical display names
- rules: income cues and prioritized category rules
- parser: one email in, zero or one ParsedTransaction out
- email_fetcher: IMAP source for candidate bank emails
- eml_source: directory-of-.eml source for offline runs

The parsing functions are pure; the sources are the only parts that
touch the network or the file system.
"""

from .amounts import AMOUNT_PATTERNS, extract_amount
from .banks import BANK_REGISTRY, UNKNOWN_BANK, identify_bank
from .email_fetcher import (
    BankEmailFetcher,
    ImapSettings,
    MailboxAuthError,
    MailboxCredentials,
    MailboxError,
)
from .eml_source import EmlDirectorySource, load_eml_file
from .parser import TransactionParser, build_description, parse_email
from .rules import CATEGORY_RULES, CategoryRule, classify_category, classify_direction

__all__ = [
    "AMOUNT_PATTERNS",
    "BANK_REGISTRY",
    "CATEGORY_RULES",
    "UNKNOWN_BANK",
    "BankEmailFetcher",
    "CategoryRule",
    "EmlDirectorySource",
    "ImapSettings",
    "MailboxAuthError",
    "MailboxCredentials",
    "MailboxError",
    "TransactionParser",
    "build_description",
    "classify_category",
    "classify_direction",
    "extract_amount",
    "identify_bank",
    "load_eml_file",
    "parse_email",
]
