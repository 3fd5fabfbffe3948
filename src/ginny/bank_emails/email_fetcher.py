#!/usr/bin/env python3
"""
Bank Email Fetcher Module

IMAP fetching of bank notification emails. Candidates are found with one
search per bank sender fragment and per transaction subject keyword; the
union of the results is the boolean OR of all terms.
"""

import email
import email.header
import email.message
import imaplib
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from bs4 import BeautifulSoup

from ..core.config import get_config
from ..core.models import RawEmail
from .banks import BANK_FRAGMENTS

logger = logging.getLogger(__name__)

SUBJECT_KEYWORDS: tuple[str, ...] = (
    "transaccion",
    "transacción",
    "compra",
    "retiro",
    "deposito",
    "depósito",
    "transferencia",
    "pago",
    "notificacion",
    "notificación",
)

SNIPPET_MAX_CHARS = 200


class MailboxError(RuntimeError):
    """The mailbox could not be reached or searched."""


class MailboxAuthError(MailboxError):
    """Mailbox credentials are missing, expired or were rejected."""


@dataclass(frozen=True)
class MailboxCredentials:
    """
    Credentials handed to the fetcher by the caller.

    `expires_at` is set when the password is a short-lived access token.
    """

    username: str
    password: str
    expires_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at


@dataclass(frozen=True)
class ImapSettings:
    """IMAP server location."""

    server: str
    port: int = 993
    folder: str = "INBOX"


def build_search_terms() -> list[tuple[str, str]]:
    """
    IMAP search keys for candidate bank emails.

    Returns:
        (key, term) pairs: FROM for each bank fragment, then SUBJECT for
        each transaction keyword
    """
    terms = [("FROM", fragment) for fragment in BANK_FRAGMENTS]
    terms.extend(("SUBJECT", keyword) for keyword in SUBJECT_KEYWORDS)
    return terms


def matches_search_terms(raw_email: RawEmail) -> bool:
    """Local equivalent of the mailbox search, for sources without a server."""
    sender = raw_email.sender.lower()
    subject = raw_email.subject.lower()
    for key, term in build_search_terms():
        haystack = sender if key == "FROM" else subject
        if term in haystack:
            return True
    return False


def decode_header_value(header: str | None) -> str:
    """Decode an RFC 2047 header with proper encoding handling."""
    if not header:
        return ""

    try:
        decoded_parts = []
        for part, encoding in email.header.decode_header(header):
            if isinstance(part, bytes):
                decoded_parts.append(part.decode(encoding or "utf-8", errors="ignore"))
            else:
                decoded_parts.append(str(part))
        return "".join(decoded_parts)
    except (LookupError, ValueError) as e:
        logger.warning(f"Error decoding header {header!r}: {e}")
        return str(header)


def html_to_text(html: str) -> str:
    """Flatten an HTML body to whitespace-separated text."""
    return BeautifulSoup(html, "lxml").get_text(separator=" ", strip=True)


def _decode_part(part: email.message.Message) -> str | None:
    payload = part.get_payload(decode=True)
    if not payload or not isinstance(payload, bytes):
        return None
    charset = part.get_content_charset() or "utf-8"
    try:
        return payload.decode(charset, errors="ignore")
    except LookupError:
        return payload.decode("utf-8", errors="ignore")


def extract_body(msg: email.message.Message) -> str:
    """
    Extract the readable body of an email.

    Prefers text/plain; falls back to text/html converted to text.
    Attachments are skipped.
    """
    text_content = None
    html_content = None

    parts = msg.walk() if msg.is_multipart() else [msg]
    for part in parts:
        if "attachment" in str(part.get("Content-Disposition", "")):
            continue
        content_type = part.get_content_type()
        if content_type == "text/plain" and text_content is None:
            text_content = _decode_part(part)
        elif content_type == "text/html" and html_content is None:
            html_content = _decode_part(part)

    if text_content and text_content.strip():
        return text_content.strip()
    if html_content:
        return html_to_text(html_content)
    return ""


def make_snippet(body: str) -> str:
    """Short single-line preview of a body."""
    return " ".join(body.split())[:SNIPPET_MAX_CHARS]


def raw_email_from_message(msg: email.message.Message, fallback_id: str) -> RawEmail:
    """
    Convert a parsed email message to a RawEmail.

    The Message-ID header is the stable id; `fallback_id` is used when the
    header is missing.
    """
    body = extract_body(msg)
    message_id = (msg.get("Message-ID") or "").strip() or fallback_id
    return RawEmail(
        id=message_id,
        subject=decode_header_value(msg.get("Subject")),
        sender=decode_header_value(msg.get("From")),
        date=str(msg.get("Date", "")),
        body=body,
        snippet=make_snippet(body),
    )


class BankEmailFetcher:
    """
    Fetches candidate bank notification emails from an IMAP mailbox.

    Credentials are injected; the fetcher keeps no global session state.
    Usable as a context manager to hold one connection across calls.
    """

    def __init__(self, credentials: MailboxCredentials, settings: ImapSettings):
        self.credentials = credentials
        self.settings = settings
        self.connection: imaplib.IMAP4_SSL | None = None

    @classmethod
    def from_config(cls) -> "BankEmailFetcher":
        """
        Build a fetcher from application configuration.

        Raises:
            MailboxAuthError: If no mailbox username/password is configured
        """
        email_config = get_config().email
        if not email_config.username or not email_config.password:
            raise MailboxAuthError("Mailbox not connected: set EMAIL_USERNAME and EMAIL_PASSWORD")

        credentials = MailboxCredentials(
            username=email_config.username,
            password=email_config.password,
            expires_at=email_config.credentials_expire_at,
        )
        settings = ImapSettings(
            server=email_config.imap_server,
            port=email_config.imap_port,
            folder=email_config.folder,
        )
        return cls(credentials, settings)

    def __enter__(self) -> "BankEmailFetcher":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.disconnect()

    def connect(self) -> None:
        """
        Connect to the IMAP server, log in and select the folder.

        Raises:
            MailboxAuthError: If credentials are expired or rejected
            MailboxError: If the server cannot be reached or the folder selected
        """
        if self.credentials.is_expired():
            raise MailboxAuthError(f"Mailbox credentials for {self.credentials.username} have expired")

        logger.info(f"Connecting to IMAP server: {self.settings.server}:{self.settings.port}")
        try:
            self.connection = imaplib.IMAP4_SSL(self.settings.server, self.settings.port)
        except OSError as e:
            raise MailboxError(f"Cannot reach mailbox {self.settings.server}: {e}") from e

        try:
            self.connection.login(self.credentials.username, self.credentials.password)
        except imaplib.IMAP4.error as e:
            self._drop_connection()
            raise MailboxAuthError(f"Mailbox login failed for {self.credentials.username}: {e}") from e

        try:
            result, _ = self.connection.select(self.settings.folder, readonly=True)
        except imaplib.IMAP4.error as e:
            self._drop_connection()
            raise MailboxError(f"Cannot select mailbox folder {self.settings.folder!r}: {e}") from e
        if result != "OK":
            self._drop_connection()
            raise MailboxError(f"Cannot select mailbox folder {self.settings.folder!r}")

        logger.info("Successfully connected to IMAP server")

    def disconnect(self) -> None:
        """Disconnect from IMAP server."""
        if self.connection:
            try:
                self.connection.close()
                self.connection.logout()
                logger.info("Disconnected from IMAP server")
            except (imaplib.IMAP4.error, OSError) as e:
                logger.warning(f"Error during disconnect: {e}")
            finally:
                self.connection = None

    def _drop_connection(self) -> None:
        if self.connection:
            try:
                self.connection.shutdown()
            except OSError as e:
                logger.debug(f"Error closing socket: {e}")
            self.connection = None

    def fetch_bank_emails(self, max_results: int) -> list[RawEmail]:
        """
        Fetch up to max_results candidate bank emails, newest first.

        Messages that fail to download or decode are logged and skipped.

        Raises:
            MailboxError: If the mailbox cannot be reached or searched
        """
        owns_connection = self.connection is None
        if owns_connection:
            self.connect()

        try:
            uids = self._search_candidates()
            selected = uids[:max_results]
            logger.info(f"Found {len(uids)} candidate bank emails, fetching {len(selected)}")

            emails = []
            for uid in selected:
                raw_email = self._fetch_message(uid)
                if raw_email is not None:
                    emails.append(raw_email)
            return emails
        finally:
            if owns_connection:
                self.disconnect()

    def _search_candidates(self) -> list[bytes]:
        """Run every search term and return the unique UIDs, newest first."""
        if not self.connection:
            raise MailboxError("Not connected to mailbox")

        all_uids: set[bytes] = set()
        failures = 0
        terms = build_search_terms()

        for key, term in terms:
            try:
                result, data = self._search(key, term)
            except imaplib.IMAP4.abort as e:
                raise MailboxError(f"Mailbox connection lost during search: {e}") from e
            except imaplib.IMAP4.error as e:
                logger.debug(f"Search error for {key} {term!r}: {e}")
                failures += 1
                continue

            if result == "OK" and data and data[0]:
                all_uids.update(data[0].split())

        if failures == len(terms):
            raise MailboxError("Every mailbox search failed")

        return sorted(all_uids, key=int, reverse=True)

    def _search(self, key: str, term: str) -> tuple[str, list]:
        if not self.connection:
            raise MailboxError("Not connected to mailbox")
        if term.isascii():
            return self.connection.uid("SEARCH", None, f'{key} "{term}"')
        # Non-ASCII terms go out as a UTF-8 literal
        self.connection.literal = term.encode("utf-8")
        return self.connection.uid("SEARCH", "CHARSET", "UTF-8", key)

    def _fetch_message(self, uid: bytes) -> RawEmail | None:
        """Fetch and convert a single message; None on failure."""
        if not self.connection:
            raise MailboxError("Not connected to mailbox")
        uid_str = uid.decode()
        try:
            result, msg_data = self.connection.uid("FETCH", uid_str, "(RFC822)")
            if result != "OK" or not msg_data or not isinstance(msg_data[0], tuple):
                logger.warning(f"Could not fetch email UID {uid_str}: {result}")
                return None

            raw_bytes = msg_data[0][1]
            msg = email.message_from_bytes(raw_bytes)
            return raw_email_from_message(msg, fallback_id=f"{self.settings.folder}:{uid_str}")
        except imaplib.IMAP4.abort as e:
            raise MailboxError(f"Mailbox connection lost while fetching UID {uid_str}: {e}") from e
        except (imaplib.IMAP4.error, UnicodeError, ValueError) as e:
            logger.warning(f"Error processing email UID {uid_str}: {e}")
            return None
