#!/usr/bin/env python3
"""
Stats CLI - Spending Summaries

Monthly totals, expense categories and per-bank summaries for a user's
stored transactions. Months are UTC calendar months and default to the
current one.
"""

import click

from ..analysis.summary import SpendingAnalyzer
from ..core.currency import format_compact_currency
from ..core.dates import month_name
from ..core.models import category_style
from ..core.money import Money
from .common import get_store, resolve_month, resolve_user


def _compact(amount: Money) -> str:
    return format_compact_currency(amount.to_cents())


@click.group()
def stats() -> None:
    """Spending summary commands."""
    pass


@stats.command()
@click.option("--user", help="User id (default: configured mailbox user)")
@click.option("--year", type=int, help="Year (default: current)")
@click.option("--month", type=click.IntRange(1, 12), help="Month 1-12 (default: current)")
@click.pass_context
def monthly(ctx: click.Context, user: str | None, year: int | None, month: int | None) -> None:
    """Income, expenses and balance for a month."""
    user_id = resolve_user(ctx, user)
    year, month = resolve_month(year, month)
    totals = SpendingAnalyzer(get_store(ctx)).monthly_stats(user_id, year, month)

    click.echo(f"{month_name(month)} {year}")
    click.echo(f"  Ingresos: {totals.income}")
    click.echo(f"  Gastos:   {totals.expenses}")
    click.echo(f"  Balance:  {totals.balance}")


@stats.command()
@click.option("--user", help="User id (default: configured mailbox user)")
@click.option("--year", type=int, help="Year (default: current)")
@click.option("--month", type=click.IntRange(1, 12), help="Month 1-12 (default: current)")
@click.pass_context
def categories(ctx: click.Context, user: str | None, year: int | None, month: int | None) -> None:
    """Expense totals per category for a month, largest first."""
    user_id = resolve_user(ctx, user)
    year, month = resolve_month(year, month)
    breakdown = SpendingAnalyzer(get_store(ctx)).category_breakdown(user_id, year, month)

    if not breakdown:
        click.echo(f"No expenses in {month_name(month)} {year}")
        return

    for entry in breakdown:
        click.echo(f"  {category_style(entry.category).label:<16} {entry.total}")


@stats.command()
@click.option("--user", help="User id (default: configured mailbox user)")
@click.pass_context
def banks(ctx: click.Context, user: str | None) -> None:
    """Transaction count and totals per bank."""
    user_id = resolve_user(ctx, user)
    summaries = SpendingAnalyzer(get_store(ctx)).banks_summary(user_id)

    if not summaries:
        click.echo(f"No transactions for {user_id}")
        return

    for summary in summaries:
        click.echo(
            f"  {summary.bank_name:<20} {summary.transaction_count:>4} txns  "
            f"+{_compact(summary.total_income)}  -{_compact(summary.total_expenses)}  = {_compact(summary.balance)}"
        )


@stats.command()
@click.argument("bank_name")
@click.option("--user", help="User id (default: configured mailbox user)")
@click.option("--year", type=int, help="Year (default: current)")
@click.option("--month", type=click.IntRange(1, 12), help="Month 1-12 (default: current)")
@click.pass_context
def bank(ctx: click.Context, bank_name: str, user: str | None, year: int | None, month: int | None) -> None:
    """Monthly totals and expense categories for one bank."""
    user_id = resolve_user(ctx, user)
    year, month = resolve_month(year, month)
    bank_stats = SpendingAnalyzer(get_store(ctx)).bank_stats(user_id, bank_name, year, month)

    click.echo(f"{bank_name} - {month_name(month)} {year}")
    click.echo(f"  Ingresos: {bank_stats.income}")
    click.echo(f"  Gastos:   {bank_stats.expenses}")
    for entry in bank_stats.categories:
        click.echo(f"    {category_style(entry.category).label:<16} {entry.total}")
