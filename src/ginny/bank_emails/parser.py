#!/usr/bin/env python3
"""
Bank Notification Parser Module

Turns one raw bank notification email into a ParsedTransaction, or None
when the email carries no plausible transaction amount.
"""

import logging

from ..core.dates import parse_email_date
from ..core.models import ParsedTransaction, RawEmail
from .amounts import extract_amount
from .banks import identify_bank
from .rules import CATEGORY_RULES, CategoryRule, classify_category, classify_direction

logger = logging.getLogger(__name__)

DESCRIPTION_MAX_CHARS = 100
DESCRIPTION_ELLIPSIS = "..."
DEFAULT_DESCRIPTION = "Bank transaction"


def build_description(subject: str) -> str:
    """
    Derive a transaction description from an email subject.

    Long subjects are cut so that the result, ellipsis included, never
    exceeds DESCRIPTION_MAX_CHARS.
    """
    subject = subject.strip()
    if not subject:
        return DEFAULT_DESCRIPTION
    if len(subject) <= DESCRIPTION_MAX_CHARS:
        return subject
    keep = DESCRIPTION_MAX_CHARS - len(DESCRIPTION_ELLIPSIS)
    return subject[:keep].rstrip() + DESCRIPTION_ELLIPSIS


class TransactionParser:
    """
    Rule-based parser for Spanish bank notification emails.

    Stateless: a single instance can be shared between threads.
    """

    def __init__(self, category_rules: tuple[CategoryRule, ...] = CATEGORY_RULES):
        self.category_rules = category_rules

    def parse(self, raw_email: RawEmail) -> ParsedTransaction | None:
        """
        Parse a raw email.

        Args:
            raw_email: Email as delivered by an email source

        Returns:
            ParsedTransaction, or None if no plausible amount is found

        Raises:
            EmailDateError: If the email carries an amount but its date
                cannot be parsed
        """
        text = raw_email.combined_text()

        amount = extract_amount(text)
        if amount is None:
            logger.debug(f"No amount in email {raw_email.id}, not a transaction")
            return None

        transaction_date = parse_email_date(raw_email.date, email_id=raw_email.id)

        parsed = ParsedTransaction(
            amount=amount,
            type=classify_direction(text),
            category=classify_category(text, self.category_rules),
            description=build_description(raw_email.subject),
            bank_name=identify_bank(raw_email.sender, text),
            email_id=raw_email.id,
            transaction_date=transaction_date,
        )
        logger.debug(
            f"Parsed email {raw_email.id}: {parsed.type.value} {parsed.amount} "
            f"{parsed.category.value} @ {parsed.bank_name}"
        )
        return parsed


_default_parser = TransactionParser()


def parse_email(raw_email: RawEmail) -> ParsedTransaction | None:
    """Parse a raw email with the default rules."""
    return _default_parser.parse(raw_email)
