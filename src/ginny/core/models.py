#!/usr/bin/env python3
"""
Core Data Models for Ginny

Data structures shared by the email parser, the sync orchestrator, the
transaction store and the presentation helpers.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from .dates import ensure_aware
from .money import Money


class TransactionType(Enum):
    """Direction of a bank transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class Category(Enum):
    """Fixed spending category taxonomy."""

    FOOD = "food"
    TRANSPORT = "transport"
    UTILITIES = "utilities"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"
    HEALTH = "health"
    EDUCATION = "education"
    SALARY = "salary"
    TRANSFER = "transfer"
    OTHER = "other"


@dataclass(frozen=True)
class CategoryStyle:
    """Display attributes for a category."""

    label: str
    icon: str
    light_color: str
    dark_color: str

    def color(self, dark: bool = False) -> str:
        return self.dark_color if dark else self.light_color


# Keyed by every Category member; tests assert the table is exhaustive.
CATEGORY_STYLES: dict[Category, CategoryStyle] = {
    Category.FOOD: CategoryStyle("Comida", "coffee", "#F59E0B", "#FBBF24"),
    Category.TRANSPORT: CategoryStyle("Transporte", "navigation", "#3B82F6", "#60A5FA"),
    Category.UTILITIES: CategoryStyle("Servicios", "zap", "#8B5CF6", "#A78BFA"),
    Category.ENTERTAINMENT: CategoryStyle("Entretenimiento", "film", "#EC4899", "#F472B6"),
    Category.SHOPPING: CategoryStyle("Compras", "shopping-bag", "#10B981", "#34D399"),
    Category.HEALTH: CategoryStyle("Salud", "heart", "#EF4444", "#F87171"),
    Category.EDUCATION: CategoryStyle("Educación", "book", "#6366F1", "#818CF8"),
    Category.SALARY: CategoryStyle("Salario", "briefcase", "#14B8A6", "#2DD4BF"),
    Category.TRANSFER: CategoryStyle("Transferencia", "repeat", "#6B7280", "#9CA3AF"),
    Category.OTHER: CategoryStyle("Otros", "more-horizontal", "#9CA3AF", "#D1D5DB"),
}


def category_style(category: Category) -> CategoryStyle:
    """Look up display attributes for a category."""
    return CATEGORY_STYLES[category]


@dataclass(frozen=True)
class RawEmail:
    """
    A fetched email as delivered by an email source.

    Consumed once by the parser and never mutated.
    """

    id: str
    subject: str
    sender: str
    date: str
    body: str = ""
    snippet: str = ""

    def combined_text(self) -> str:
        """Lower-cased subject, body and snippet joined by spaces."""
        return f"{self.subject} {self.body} {self.snippet}".lower()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RawEmail":
        """Build from the boundary shape {id, subject, from, date, body, snippet}."""
        return cls(
            id=data["id"],
            subject=data.get("subject") or "",
            sender=data.get("from") or data.get("sender") or "",
            date=data.get("date") or "",
            body=data.get("body") or "",
            snippet=data.get("snippet") or "",
        )


@dataclass(frozen=True)
class ParsedTransaction:
    """
    A transaction extracted from a single bank notification email.

    `amount` is always a positive magnitude; direction lives in `type`.
    """

    amount: Money
    type: TransactionType
    category: Category
    description: str
    bank_name: str
    email_id: str
    transaction_date: datetime

    def to_dict(self) -> dict[str, Any]:
        """Convert to the boundary shape (amount as a decimal string)."""
        return {
            "amount": str(self.amount.to_decimal()),
            "type": self.type.value,
            "category": self.category.value,
            "description": self.description,
            "bankName": self.bank_name,
            "emailId": self.email_id,
            "transactionDate": self.transaction_date.isoformat(),
        }


@dataclass(frozen=True)
class StoredTransaction:
    """A parsed transaction persisted for a user."""

    id: str
    user_id: str
    amount: Money
    type: TransactionType
    category: Category
    description: str
    bank_name: str | None
    email_id: str | None
    transaction_date: datetime
    created_at: datetime

    @classmethod
    def from_parsed(
        cls, parsed: ParsedTransaction, user_id: str, transaction_id: str, created_at: datetime
    ) -> "StoredTransaction":
        return cls(
            id=transaction_id,
            user_id=user_id,
            amount=parsed.amount,
            type=parsed.type,
            category=parsed.category,
            description=parsed.description,
            bank_name=parsed.bank_name,
            email_id=parsed.email_id,
            transaction_date=parsed.transaction_date,
            created_at=created_at,
        )

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Note: Money is stored as cents and datetimes as ISO-8601 strings.
        """
        return {
            "id": self.id,
            "user_id": self.user_id,
            "amount": self.amount.to_cents(),
            "type": self.type.value,
            "category": self.category.value,
            "description": self.description,
            "bank_name": self.bank_name,
            "email_id": self.email_id,
            "transaction_date": self.transaction_date.isoformat(),
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoredTransaction":
        """Create StoredTransaction from dictionary (inverse of to_dict)."""
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            amount=Money.from_cents(data["amount"]),
            type=TransactionType(data["type"]),
            category=Category(data["category"]),
            description=data["description"],
            bank_name=data.get("bank_name"),
            email_id=data.get("email_id"),
            transaction_date=ensure_aware(datetime.fromisoformat(data["transaction_date"])),
            created_at=ensure_aware(datetime.fromisoformat(data["created_at"])),
        )


@dataclass(frozen=True)
class SyncStatus:
    """Per-user record of the last email sync."""

    user_id: str
    last_sync_at: datetime | None = None
    synced_email_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "last_sync_at": self.last_sync_at.isoformat() if self.last_sync_at else None,
            "synced_email_count": self.synced_email_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncStatus":
        last_sync = data.get("last_sync_at")
        return cls(
            user_id=data["user_id"],
            last_sync_at=ensure_aware(datetime.fromisoformat(last_sync)) if last_sync else None,
            synced_email_count=data.get("synced_email_count", 0),
        )
