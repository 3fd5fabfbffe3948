#!/usr/bin/env python3
"""Tests for the IMAP bank email fetcher."""

import email
import imaplib
from datetime import datetime, timedelta, timezone
from email.message import EmailMessage
from unittest.mock import MagicMock, patch

import pytest

from ginny.bank_emails.banks import BANK_FRAGMENTS
from ginny.bank_emails.email_fetcher import (
    SNIPPET_MAX_CHARS,
    SUBJECT_KEYWORDS,
    BankEmailFetcher,
    ImapSettings,
    MailboxAuthError,
    MailboxCredentials,
    MailboxError,
    build_search_terms,
    decode_header_value,
    extract_body,
    make_snippet,
    matches_search_terms,
    raw_email_from_message,
)
from tests.fixtures.bank_emails import build_eml, make_raw_email


def make_fetcher(expires_at: datetime | None = None) -> BankEmailFetcher:
    credentials = MailboxCredentials("usuario@example.com", "secret", expires_at=expires_at)
    return BankEmailFetcher(credentials, ImapSettings(server="imap.example.com"))


def connected_fetcher(connection: MagicMock) -> BankEmailFetcher:
    fetcher = make_fetcher()
    fetcher.connection = connection
    return fetcher


class TestSearchTerms:
    """Test the candidate search terms."""

    @pytest.mark.parsing
    def test_build_search_terms(self):
        """Test FROM terms for banks come before SUBJECT terms for keywords."""
        terms = build_search_terms()

        assert len(terms) == len(BANK_FRAGMENTS) + len(SUBJECT_KEYWORDS)
        assert terms[0] == ("FROM", "banreservas")
        assert ("SUBJECT", "retiro") in terms
        assert ("SUBJECT", "transacción") in terms

    @pytest.mark.parsing
    def test_matches_bank_sender(self):
        """Test bank senders match regardless of subject."""
        assert matches_search_terms(make_raw_email(subject="Hola", sender="info@bhd.com.do"))

    @pytest.mark.parsing
    def test_matches_subject_keyword(self):
        """Test transaction keywords in the subject match."""
        assert matches_search_terms(make_raw_email(subject="Confirmación de Pago", sender="x@example.com"))

    @pytest.mark.parsing
    def test_unrelated_email_does_not_match(self):
        """Test emails with neither a bank sender nor a keyword."""
        assert not matches_search_terms(make_raw_email(subject="Boletín", sender="news@example.com"))


class TestMessageConversion:
    """Test conversion of email messages into RawEmail."""

    @pytest.mark.parsing
    def test_decode_encoded_header(self):
        """Test RFC 2047 encoded headers are decoded."""
        assert decode_header_value("=?utf-8?q?Notificaci=C3=B3n?=") == "Notificación"

    @pytest.mark.parsing
    def test_decode_empty_header(self):
        """Test missing headers decode to an empty string."""
        assert decode_header_value(None) == ""

    @pytest.mark.parsing
    def test_plain_text_body(self):
        """Test plain text is preferred."""
        msg = email.message_from_bytes(
            build_eml(
                subject="Retiro",
                sender="alertas@banreservas.com",
                body="Retiro de RD$500.00",
                html="<p>Versión HTML</p>",
            )
        )
        assert extract_body(msg) == "Retiro de RD$500.00"

    @pytest.mark.parsing
    def test_html_only_body(self):
        """Test HTML bodies are flattened to text."""
        msg = EmailMessage()
        msg["Subject"] = "Compra"
        msg.set_content("<html><body><p>Compra por</p><b>RD$1,200.00</b></body></html>", subtype="html")

        assert extract_body(msg) == "Compra por RD$1,200.00"

    @pytest.mark.parsing
    def test_attachments_skipped(self):
        """Test attachment text is not treated as the body."""
        msg = EmailMessage()
        msg.set_content("Pago RD$75.00")
        msg.add_attachment(b"RD$999.00", maintype="text", subtype="plain", filename="estado.txt")

        assert extract_body(msg) == "Pago RD$75.00"

    @pytest.mark.parsing
    def test_snippet_is_collapsed_and_capped(self):
        """Test the snippet is single-line and bounded."""
        snippet = make_snippet("línea uno\n\nlínea   dos " + "x" * 300)

        assert snippet.startswith("línea uno línea dos ")
        assert len(snippet) == SNIPPET_MAX_CHARS

    @pytest.mark.parsing
    def test_raw_email_from_message(self):
        """Test Message-ID becomes the RawEmail id."""
        msg = email.message_from_bytes(
            build_eml(
                subject="Notificación de Retiro",
                sender="Banreservas <alertas@banreservas.com>",
                body="Retiro de RD$1,500.00",
                message_id="<abc@banreservas.com>",
            )
        )

        raw_email = raw_email_from_message(msg, fallback_id="INBOX:7")

        assert raw_email.id == "<abc@banreservas.com>"
        assert raw_email.subject == "Notificación de Retiro"
        assert "banreservas" in raw_email.sender
        assert raw_email.body == "Retiro de RD$1,500.00"
        assert raw_email.snippet == "Retiro de RD$1,500.00"
        assert "2024" in raw_email.date

    @pytest.mark.parsing
    def test_fallback_id_without_message_id(self):
        """Test the fallback id is used when Message-ID is missing."""
        msg = email.message_from_bytes(build_eml(subject="Pago", sender="a@popular.com.do", body="RD$1.00"))
        assert raw_email_from_message(msg, fallback_id="INBOX:9").id == "INBOX:9"


class TestMailboxCredentials:
    """Test credential expiry."""

    def test_no_expiry(self):
        """Test credentials without an expiry never expire."""
        assert not MailboxCredentials("u", "p").is_expired()

    def test_expired(self):
        """Test expiry in the past."""
        past = datetime.now(timezone.utc) - timedelta(minutes=1)
        assert MailboxCredentials("u", "p", expires_at=past).is_expired()


class TestBankEmailFetcher:
    """Test BankEmailFetcher against a mocked IMAP connection."""

    @pytest.mark.sync
    def test_expired_credentials_rejected_before_connecting(self):
        """Test expired credentials fail without touching the network."""
        fetcher = make_fetcher(expires_at=datetime.now(timezone.utc) - timedelta(hours=1))

        with patch("ginny.bank_emails.email_fetcher.imaplib.IMAP4_SSL") as mock_imap:
            with pytest.raises(MailboxAuthError):
                fetcher.connect()

        mock_imap.assert_not_called()

    @pytest.mark.sync
    def test_login_failure_is_auth_error(self):
        """Test a rejected login raises MailboxAuthError."""
        fetcher = make_fetcher()

        with patch("ginny.bank_emails.email_fetcher.imaplib.IMAP4_SSL") as mock_imap:
            mock_imap.return_value.login.side_effect = imaplib.IMAP4.error("AUTHENTICATIONFAILED")
            with pytest.raises(MailboxAuthError):
                fetcher.connect()

        assert fetcher.connection is None

    @pytest.mark.sync
    def test_unreachable_server_is_mailbox_error(self):
        """Test network failures raise MailboxError."""
        fetcher = make_fetcher()

        with patch("ginny.bank_emails.email_fetcher.imaplib.IMAP4_SSL", side_effect=OSError("refused")):
            with pytest.raises(MailboxError):
                fetcher.connect()

    @pytest.mark.sync
    def test_connect_selects_folder_readonly(self):
        """Test a successful connection logs in and selects the folder."""
        fetcher = make_fetcher()

        with patch("ginny.bank_emails.email_fetcher.imaplib.IMAP4_SSL") as mock_imap:
            mock_imap.return_value.select.return_value = ("OK", [b"3"])
            fetcher.connect()

        mock_imap.return_value.login.assert_called_once_with("usuario@example.com", "secret")
        mock_imap.return_value.select.assert_called_once_with("INBOX", readonly=True)

    @pytest.mark.sync
    def test_search_unions_terms_newest_first(self):
        """Test UIDs from every search are merged, de-duplicated and sorted descending."""
        connection = MagicMock()
        responses = {'FROM "banreservas"': [b"3 10"], 'SUBJECT "retiro"': [b"10 2"]}

        def uid(command, *args):
            if args[0] is None:
                return "OK", responses.get(args[1], [b""])
            return "OK", [b""]

        connection.uid.side_effect = uid
        fetcher = connected_fetcher(connection)

        assert fetcher._search_candidates() == [b"10", b"3", b"2"]

    @pytest.mark.sync
    def test_non_ascii_terms_sent_as_literal(self):
        """Test accented keywords are searched with a UTF-8 literal."""
        connection = MagicMock()
        connection.uid.return_value = ("OK", [b""])
        fetcher = connected_fetcher(connection)

        fetcher._search("SUBJECT", "depósito")

        assert connection.literal == "depósito".encode("utf-8")
        connection.uid.assert_called_once_with("SEARCH", "CHARSET", "UTF-8", "SUBJECT")

    @pytest.mark.sync
    def test_all_searches_failing_raises(self):
        """Test a mailbox that rejects every search is an error."""
        connection = MagicMock()
        connection.uid.side_effect = imaplib.IMAP4.error("BAD")
        fetcher = connected_fetcher(connection)

        with pytest.raises(MailboxError):
            fetcher._search_candidates()

    @pytest.mark.sync
    def test_connection_abort_during_search_raises(self):
        """Test a dropped connection aborts the fetch."""
        connection = MagicMock()
        connection.uid.side_effect = imaplib.IMAP4.abort("socket closed")
        fetcher = connected_fetcher(connection)

        with pytest.raises(MailboxError):
            fetcher._search_candidates()

    @pytest.mark.sync
    def test_fetch_bank_emails_respects_max_results(self):
        """Test only the newest max_results candidates are downloaded."""
        connection = MagicMock()
        message = build_eml(subject="Retiro", sender="alertas@banreservas.com", body="Retiro RD$10.00")

        def uid(command, *args):
            if command == "SEARCH":
                return "OK", [b"1 2 3"] if args[0] is None else [b""]
            return "OK", [(b"1 (RFC822 {100}", message), b")"]

        connection.uid.side_effect = uid
        fetcher = connected_fetcher(connection)

        emails = fetcher.fetch_bank_emails(max_results=2)

        fetched_uids = [call.args[1] for call in connection.uid.call_args_list if call.args[0] == "FETCH"]
        assert fetched_uids == ["3", "2"]
        assert [raw_email.id for raw_email in emails] == ["INBOX:3", "INBOX:2"]
        # Caller-owned connections stay open
        assert fetcher.connection is connection

    @pytest.mark.sync
    def test_failed_message_fetch_is_skipped(self):
        """Test a message that cannot be fetched is skipped, not fatal."""
        connection = MagicMock()
        connection.uid.return_value = ("NO", [None])
        fetcher = connected_fetcher(connection)

        assert fetcher._fetch_message(b"5") is None

    @pytest.mark.sync
    def test_from_config_requires_credentials(self, monkeypatch):
        """Test an unconnected mailbox is reported as an auth error."""
        from ginny.core.config import reload_config

        monkeypatch.delenv("EMAIL_USERNAME", raising=False)
        reload_config()

        with pytest.raises(MailboxAuthError):
            BankEmailFetcher.from_config()

    @pytest.mark.sync
    def test_from_config(self, monkeypatch):
        """Test settings and credentials come from configuration."""
        from ginny.core.config import reload_config

        monkeypatch.setenv("EMAIL_USERNAME", "usuario@example.com")
        monkeypatch.setenv("EMAIL_IMAP_SERVER", "imap.example.com")
        monkeypatch.setenv("EMAIL_FOLDER", "Bancos")
        reload_config()

        fetcher = BankEmailFetcher.from_config()

        assert fetcher.credentials.username == "usuario@example.com"
        assert fetcher.credentials.password == "test-password"
        assert fetcher.settings == ImapSettings(server="imap.example.com", port=993, folder="Bancos")
