#!/usr/bin/env python3
"""
Bank Identification

Maps noisy sender addresses and notification text to a canonical bank
display name using a fixed priority registry of Dominican banks.
"""

from dataclasses import dataclass

UNKNOWN_BANK = "Unknown Bank"


@dataclass(frozen=True)
class BankEntry:
    """A registry fragment and the display name it resolves to."""

    fragment: str
    display_name: str


# Display names that differ from plain first-letter capitalization
_DISPLAY_OVERRIDES = {
    "bhd": "BHD León",
    "popular": "Banco Popular",
    "banreservas": "Banreservas",
}

# Priority order, not alphabetical: the first fragment found wins
BANK_FRAGMENTS: tuple[str, ...] = (
    "banreservas",
    "popular",
    "bhd",
    "scotiabank",
    "banesco",
    "santa cruz",
    "promerica",
    "bdi",
    "ademi",
    "lafise",
    "caribe",
    "vimenca",
    "banco múltiple",
)


def _display_name(fragment: str) -> str:
    if fragment in _DISPLAY_OVERRIDES:
        return _DISPLAY_OVERRIDES[fragment]
    return fragment[:1].upper() + fragment[1:]


BANK_REGISTRY: tuple[BankEntry, ...] = tuple(BankEntry(f, _display_name(f)) for f in BANK_FRAGMENTS)


def _find_bank(haystack: str) -> BankEntry | None:
    for entry in BANK_REGISTRY:
        if entry.fragment in haystack:
            return entry
    return None


def identify_bank(sender: str, text: str) -> str:
    """
    Identify the bank behind a notification email.

    The sender is searched first, then the combined text, each in registry
    order. A sender match always beats a text match, so a BHD alert that
    mentions a transfer to Banco Popular is still attributed to BHD León.

    Args:
        sender: From header (address and/or display name)
        text: Lower-cased combined email text

    Returns:
        Canonical bank display name, or UNKNOWN_BANK
    """
    entry = _find_bank(sender.lower()) or _find_bank(text.lower())
    return entry.display_name if entry else UNKNOWN_BANK
