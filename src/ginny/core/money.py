#!/usr/bin/env python3
"""
Money Primitive Type

Immutable amount wrapper that uses integer cents internally.
Prevents floating-point errors when summing notification amounts.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import (
    cents_to_pesos_str,
    decimal_to_cents,
    format_currency,
    parse_pesos_to_cents,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents.

    Amounts parsed from emails are currency-agnostic magnitudes; display
    formatting assumes Dominican pesos.

    Examples:
        >>> amount = Money.from_pesos("RD$1,500.00")
        >>> amount.to_cents()
        150000
        >>> str(amount)
        'RD$1,500.00'
        >>> amount.to_decimal()
        Decimal('1500.00')
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_decimal(cls, value: Decimal) -> "Money":
        """Create Money from a decimal amount, rounding half up to cents."""
        return cls(cents=decimal_to_cents(value))

    @classmethod
    def from_pesos(cls, pesos: str | int) -> "Money":
        """
        Parse from a peso string like 'RD$1,234.50' or integer pesos.

        Args:
            pesos: String like "RD$12.34" or integer like 12

        Returns:
            Money object
        """
        if isinstance(pesos, int):
            return cls(cents=pesos * 100)
        return cls(cents=parse_pesos_to_cents(pesos))

    @classmethod
    def zero(cls) -> "Money":
        return cls(cents=0)

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_decimal(self) -> Decimal:
        """Get value as a two-place Decimal."""
        return Decimal(self.cents).scaleb(-2)

    def to_plain_str(self) -> str:
        """Get grouped number without the currency symbol, e.g. '1,500.00'."""
        return cents_to_pesos_str(self.cents)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def __add__(self, other: "Money") -> "Money":
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        return Money(cents=self.cents - other.cents)

    def __lt__(self, other: "Money") -> bool:
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as peso string."""
        return format_currency(self.cents)

    def __repr__(self) -> str:
        return f"Money(cents={self.cents})"
