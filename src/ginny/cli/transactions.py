#!/usr/bin/env python3
"""
Transactions CLI - Stored Transaction Listing
"""

from datetime import datetime, timezone

import click

from ..core.dates import ensure_aware
from .common import format_transaction_line, get_store, resolve_user


def _parse_day(value: str | None, param_hint: str) -> datetime | None:
    if value is None:
        return None
    try:
        return ensure_aware(datetime.fromisoformat(value))
    except ValueError as e:
        raise click.BadParameter(f"expected YYYY-MM-DD, got {value!r}", param_hint=param_hint) from e


@click.group()
def transactions() -> None:
    """Stored transaction commands."""
    pass


@transactions.command("list")
@click.option("--user", help="User id (default: configured mailbox user)")
@click.option("--start", help="Earliest transaction date, inclusive (YYYY-MM-DD)")
@click.option("--end", help="Latest transaction date, exclusive (YYYY-MM-DD)")
@click.pass_context
def list_transactions(ctx: click.Context, user: str | None, start: str | None, end: str | None) -> None:
    """
    List a user's transactions, newest first.

    Examples:
      ginny transactions list
      ginny transactions list --start 2024-03-01 --end 2024-04-01
    """
    user_id = resolve_user(ctx, user)
    store = get_store(ctx)

    start_dt = _parse_day(start, "--start")
    end_dt = _parse_day(end, "--end")

    if start_dt or end_dt:
        txns = store.transactions_between(
            user_id,
            start_dt or datetime.min.replace(tzinfo=timezone.utc),
            end_dt or datetime.max.replace(tzinfo=timezone.utc),
        )
    else:
        txns = store.transactions(user_id)

    if not txns:
        click.echo(f"No transactions for {user_id}")
        return

    for txn in txns:
        click.echo(format_transaction_line(txn))
    click.echo(f"\n{len(txns)} transactions")
