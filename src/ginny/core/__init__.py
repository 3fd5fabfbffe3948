"""
Core Utilities Package

Shared models and utilities used by parsing, sync, storage and the CLI.

This package provides:
- Money handling with integer cents
- Transaction, email and category models
- Email date parsing and calendar helpers
- Configuration management for environment-specific settings
"""

from .config import (
    Config,
    Environment,
    get_config,
    get_data_dir,
    is_test,
    reload_config,
)
from .currency import (
    format_compact_currency,
    format_currency,
    parse_amount_text,
)
from .datastore import DuplicateTransactionError, TransactionStore
from .dates import (
    EmailDateError,
    format_relative_date,
    month_name,
    month_range,
    parse_email_date,
)
from .models import (
    CATEGORY_STYLES,
    Category,
    CategoryStyle,
    ParsedTransaction,
    RawEmail,
    StoredTransaction,
    SyncStatus,
    TransactionType,
    category_style,
)
from .money import Money

__all__ = [
    "CATEGORY_STYLES",
    "Category",
    "CategoryStyle",
    "Config",
    "DuplicateTransactionError",
    "EmailDateError",
    "Environment",
    "Money",
    "ParsedTransaction",
    "RawEmail",
    "StoredTransaction",
    "SyncStatus",
    "TransactionStore",
    "TransactionType",
    "category_style",
    "format_compact_currency",
    "format_currency",
    "format_relative_date",
    "get_config",
    "get_data_dir",
    "is_test",
    "month_name",
    "month_range",
    "parse_amount_text",
    "parse_email_date",
    "reload_config",
]
