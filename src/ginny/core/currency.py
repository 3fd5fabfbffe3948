#!/usr/bin/env python3
"""
Currency Parsing and Formatting Utilities

Amount handling for bank notification emails and peso display.
All stored amounts are integer cents to avoid floating-point drift.

Currency Systems:
- Internal amounts use cents: 100 cents = RD$1.00
- Email text uses comma thousands separators: "RD$25,000.00"
- Display uses Dominican peso strings: "RD$25,000.00", "RD$25.0K"
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CURRENCY_SYMBOL = "RD$"


def parse_amount_text(amount_str: str) -> Decimal | None:
    """
    Parse a number as it appears in notification text.

    Strips everything except digits, commas and periods, then drops the
    comma thousands separators.

    Args:
        amount_str: Text like "rd$1,500.00" or "25,000"

    Returns:
        Decimal value, or None when nothing numeric remains

    Example:
        parse_amount_text("rd$1,500.00") -> Decimal("1500.00")
    """
    cleaned = "".join(ch for ch in amount_str if ch.isdigit() or ch in ",.")
    cleaned = cleaned.replace(",", "")
    if not cleaned:
        return None
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def decimal_to_cents(value: Decimal) -> int:
    """
    Convert a decimal amount to integer cents, rounding half up.

    Example:
        decimal_to_cents(Decimal("12.345")) -> 1235
    """
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_pesos_to_cents(amount_str: str) -> int:
    """
    Parse a peso string to cents.

    Args:
        amount_str: String like "RD$1,500.00", "-RD$12.34" or "12.34"

    Returns:
        Integer cents

    Raises:
        ValueError: If the string holds no number
    """
    text = amount_str.strip()
    negative = text.startswith("-")
    value = parse_amount_text(text)
    if value is None:
        raise ValueError(f"Not a currency amount: {amount_str!r}")
    cents = decimal_to_cents(value)
    return -cents if negative else cents


def cents_to_pesos_str(cents: int) -> str:
    """
    Convert cents to a grouped decimal string using integer arithmetic.

    Example:
        cents_to_pesos_str(150000) -> "1,500.00"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    whole = abs_cents // 100
    remainder = abs_cents % 100

    text = f"{whole:,}.{remainder:02d}"
    return f"-{text}" if is_negative else text


def format_currency(cents: int) -> str:
    """Format cents as a peso string, e.g. "RD$1,500.00"."""
    if cents < 0:
        return f"-{CURRENCY_SYMBOL}{cents_to_pesos_str(-cents)}"
    return f"{CURRENCY_SYMBOL}{cents_to_pesos_str(cents)}"


def format_compact_currency(cents: int) -> str:
    """
    Format cents in the short form used on summary cards.

    Examples:
        format_compact_currency(250_000_000) -> "RD$2.5M"
        format_compact_currency(150_000) -> "RD$1.5K"
        format_compact_currency(89_000) -> "RD$890.00"
        format_compact_currency(-150_000) -> "-RD$1.5K"
    """
    if cents < 0:
        return f"-{format_compact_currency(-cents)}"
    pesos = Decimal(cents) / 100
    if pesos >= 1_000_000:
        short = (pesos / 1_000_000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return f"{CURRENCY_SYMBOL}{short}M"
    if pesos >= 1_000:
        short = (pesos / 1_000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return f"{CURRENCY_SYMBOL}{short}K"
    return format_currency(cents)
