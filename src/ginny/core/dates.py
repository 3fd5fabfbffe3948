#!/usr/bin/env python3
"""
Date Handling for Bank Notification Emails

Parses the Date values delivered by email sources and provides the
calendar helpers used by monthly summaries and display code.
All datetimes leaving this module are timezone-aware.
"""

import email.utils
from datetime import date, datetime, timedelta, timezone

MONTH_NAMES = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)

_SHORT_MONTHS = ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sept", "oct", "nov", "dic")


class EmailDateError(ValueError):
    """Raised when an email's Date value cannot be parsed."""

    def __init__(self, value: str, email_id: str | None = None):
        self.value = value
        self.email_id = email_id
        where = f" in email {email_id}" if email_id else ""
        super().__init__(f"Unparseable email date{where}: {value!r}")


def ensure_aware(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; aware values pass through unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_email_date(value: str, email_id: str | None = None) -> datetime:
    """
    Parse an email Date value.

    Accepts RFC 2822 header dates ("Fri, 15 Mar 2024 10:00:00 -0400") and
    ISO-8601 strings ("2024-03-15T10:00:00Z"). Naive results are taken as UTC.

    Args:
        value: Raw date text
        email_id: Message id, only used in the error message

    Returns:
        Timezone-aware datetime

    Raises:
        EmailDateError: If neither format matches
    """
    text = (value or "").strip()
    if not text:
        raise EmailDateError(value, email_id)

    try:
        return ensure_aware(datetime.fromisoformat(text))
    except ValueError:
        pass

    try:
        parsed = email.utils.parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError) as e:
        raise EmailDateError(value, email_id) from e
    if parsed is None:
        raise EmailDateError(value, email_id)
    return ensure_aware(parsed)


def month_range(year: int, month: int) -> tuple[datetime, datetime]:
    """
    Get the UTC bounds of a calendar month.

    Returns:
        (start, end) where start is the first instant of the month and end is
        the first instant of the following month (exclusive)

    Raises:
        ValueError: If month is outside 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be 1-12, got {month}")
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    if month == 12:
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        end = datetime(year, month + 1, 1, tzinfo=timezone.utc)
    return start, end


def month_name(month: int) -> str:
    """Spanish month name for 1-12, empty string otherwise."""
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return ""


def format_date(value: date | datetime) -> str:
    """Format as "15 mar 2024"."""
    return f"{value.day} {_SHORT_MONTHS[value.month - 1]} {value.year}"


def format_relative_date(value: datetime, now: datetime | None = None) -> str:
    """
    Format a transaction date relative to now.

    Returns "Hoy", "Ayer", "Hace N días" within a week, otherwise the
    absolute date.
    """
    value = ensure_aware(value)
    now = ensure_aware(now) if now else datetime.now(timezone.utc)
    diff_days = (now - value) // timedelta(days=1)

    if diff_days == 0:
        return "Hoy"
    if diff_days == 1:
        return "Ayer"
    if 1 < diff_days < 7:
        return f"Hace {diff_days} días"
    return format_date(value)
