#!/usr/bin/env python3
"""
Sync CLI - Bank Email Synchronization

Pulls candidate bank emails from the mailbox (or a directory of .eml
files) and stores the transactions they describe.
"""

from pathlib import Path

import click

from ..bank_emails.email_fetcher import BankEmailFetcher, MailboxError
from ..bank_emails.eml_source import EmlDirectorySource
from ..core.config import Config
from ..core.dates import format_relative_date
from ..sync.orchestrator import SyncOrchestrator
from .common import get_store, resolve_user

SYNC_FAILED_MESSAGE = "Failed to sync emails. Please reconnect your mailbox account and retry."


@click.group()
def sync() -> None:
    """Bank email synchronization commands."""
    pass


@sync.command("run")
@click.option("--user", help="User id to store transactions under (default: configured mailbox user)")
@click.option("--max-results", type=int, help="Maximum number of emails to fetch")
@click.option(
    "--eml-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Read .eml files from a directory instead of the IMAP mailbox",
)
@click.pass_context
def run(ctx: click.Context, user: str | None, max_results: int | None, eml_dir: Path | None) -> None:
    """
    Sync bank notification emails into transactions.

    Examples:
      ginny sync run
      ginny sync run --eml-dir ./emails --max-results 50
    """
    config: Config = ctx.obj["config"]
    user_id = resolve_user(ctx, user)
    limit = max_results if max_results is not None else config.sync.max_results
    if limit <= 0:
        raise click.BadParameter("must be positive", param_hint="--max-results")

    store = get_store(ctx)

    try:
        source = EmlDirectorySource(eml_dir) if eml_dir else BankEmailFetcher.from_config()
        result = SyncOrchestrator(source, store).sync(user_id, limit)
    except MailboxError as e:
        if ctx.obj.get("verbose"):
            click.echo(f"Mailbox error: {e}", err=True)
        raise click.ClickException(SYNC_FAILED_MESSAGE) from e

    click.echo(f"Synced {result.synced} of {result.total} emails")
    if ctx.obj.get("verbose"):
        click.echo(f"  Already synced: {result.duplicates}")
        click.echo(f"  Not transactions: {result.skipped}")
        click.echo(f"  Failed: {result.failed}")


@sync.command("status")
@click.option("--user", help="User id (default: configured mailbox user)")
@click.pass_context
def status(ctx: click.Context, user: str | None) -> None:
    """Show when the user last synced and how many emails were stored."""
    user_id = resolve_user(ctx, user)
    store = get_store(ctx)
    sync_status = store.sync_status(user_id)

    click.echo(f"User: {user_id}")
    if sync_status is None or sync_status.last_sync_at is None:
        click.echo("Last sync: never")
    else:
        click.echo(f"Last sync: {format_relative_date(sync_status.last_sync_at)}")
    click.echo(f"Synced emails: {sync_status.synced_email_count if sync_status else 0}")
    click.echo(store.summary_text())
