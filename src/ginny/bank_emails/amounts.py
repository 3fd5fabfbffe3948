#!/usr/bin/env python3
"""
Amount Extraction for Bank Notification Emails

Finds the transaction amount in notification text by trying an ordered list
of currency patterns. Currency-tagged patterns come first so that dates and
reference numbers are not mistaken for the amount.
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal

from ..core.currency import parse_amount_text
from ..core.money import Money

logger = logging.getLogger(__name__)

# Accepted amounts are strictly inside (MIN_AMOUNT, MAX_AMOUNT)
MIN_AMOUNT = Decimal("0")
MAX_AMOUNT = Decimal("100000000")

_NUMBER = r"[\d,]+\.?\d*"


@dataclass(frozen=True)
class AmountPattern:
    """A named amount pattern; only its first match in the text is used."""

    name: str
    regex: re.Pattern

    def first_match(self, text: str) -> str | None:
        match = self.regex.search(text)
        return match.group(0) if match else None


AMOUNT_PATTERNS: tuple[AmountPattern, ...] = (
    AmountPattern("rd_peso_symbol", re.compile(rf"rd\$\s*{_NUMBER}", re.IGNORECASE)),
    AmountPattern("dop_code", re.compile(rf"dop\s*{_NUMBER}", re.IGNORECASE)),
    AmountPattern("dollar_symbol", re.compile(rf"\$\s*{_NUMBER}")),
    AmountPattern("monto_label", re.compile(rf"monto[:\s]*{_NUMBER}", re.IGNORECASE)),
    AmountPattern("valor_label", re.compile(rf"valor[:\s]*{_NUMBER}", re.IGNORECASE)),
    AmountPattern("cantidad_label", re.compile(rf"cantidad[:\s]*{_NUMBER}", re.IGNORECASE)),
)


def is_plausible_amount(value: Decimal) -> bool:
    """Check the sanity bounds for a transaction amount."""
    return MIN_AMOUNT < value < MAX_AMOUNT


def extract_amount(text: str) -> Money | None:
    """
    Extract the transaction amount from combined email text.

    Patterns are tried in order. For each, the first match is cleaned and
    parsed; an unparseable or out-of-bounds value moves on to the next
    pattern rather than the next match.

    Args:
        text: Lower-cased subject, body and snippet

    Returns:
        Positive Money, or None if no pattern yields a plausible amount
    """
    for pattern in AMOUNT_PATTERNS:
        matched = pattern.first_match(text)
        if matched is None:
            continue

        value = parse_amount_text(matched)
        if value is None or not is_plausible_amount(value):
            logger.debug(f"Rejected {pattern.name} match {matched!r}")
            continue

        amount = Money.from_decimal(value)
        if amount.to_cents() <= 0:
            logger.debug(f"Rejected {pattern.name} match {matched!r}: rounds to zero")
            continue

        return amount

    return None
