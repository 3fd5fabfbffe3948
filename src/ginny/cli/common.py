#!/usr/bin/env python3
"""Helpers shared by the CLI command modules."""

from datetime import datetime, timezone

import click

from ..core.config import Config
from ..core.models import StoredTransaction, category_style
from ..sync.datastore import JsonTransactionStore


def get_store(ctx: click.Context) -> JsonTransactionStore:
    config: Config = ctx.obj["config"]
    return JsonTransactionStore(config.storage.store_dir)


def resolve_user(ctx: click.Context, user: str | None) -> str:
    config: Config = ctx.obj["config"]
    return user or config.sync.default_user


def resolve_month(year: int | None, month: int | None) -> tuple[int, int]:
    """Default to the current UTC month."""
    now = datetime.now(timezone.utc)
    return year or now.year, month or now.month


def format_transaction_line(txn: StoredTransaction) -> str:
    sign = "+" if txn.is_income else "-"
    label = category_style(txn.category).label
    bank = txn.bank_name or "-"
    return (
        f"{txn.transaction_date.date().isoformat()}  {sign}{txn.amount}  "
        f"{label:<15} {bank:<18} {txn.description}"
    )
