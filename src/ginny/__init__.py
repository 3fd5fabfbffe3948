"""
Ginny - Bank Notification Emails to Transactions

Reads the notification emails Dominican banks send for card purchases,
withdrawals, deposits and transfers, and turns them into categorized
transactions with per-month, per-category and per-bank summaries.

Domain Packages:
- core: Money, models, dates, configuration
- bank_emails: Rule-based email parsing and email sources (IMAP, .eml)
- sync: Sync orchestration and the JSON transaction store
- analysis: Monthly, category and bank summaries
- cli: The `ginny` command

Example Usage:
    from ginny.bank_emails import parse_email
    from ginny.core import RawEmail

    parsed = parse_email(RawEmail(id="m1", subject="Retiro", sender="alertas@banreservas.com",
                                  date="2024-03-15T14:30:00Z", body="Retiro de RD$1,500.00"))
"""

__version__ = "0.1.0"
__author__ = "Ginny Developers"

from .bank_emails.parser import TransactionParser, parse_email
from .core.config import Environment, get_config
from .core.models import Category, ParsedTransaction, RawEmail, StoredTransaction, TransactionType
from .core.money import Money

__all__ = [
    # Parsing
    "TransactionParser",
    "parse_email",
    # Core models
    "Category",
    "Money",
    "ParsedTransaction",
    "RawEmail",
    "StoredTransaction",
    "TransactionType",
    # Configuration
    "Environment",
    "get_config",
]
