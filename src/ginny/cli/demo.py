#!/usr/bin/env python3
"""
Demo CLI - Sample Data Seeding
"""

import click

from ..sync.demo import seed_demo_transactions
from .common import get_store, resolve_user


@click.group()
def demo() -> None:
    """Demo data commands."""
    pass


@demo.command("seed")
@click.option("--user", help="User id to seed (default: configured mailbox user)")
@click.pass_context
def seed(ctx: click.Context, user: str | None) -> None:
    """Add a set of sample transactions dated over the past week."""
    user_id = resolve_user(ctx, user)
    created = seed_demo_transactions(get_store(ctx), user_id)
    click.echo(f"Created {created} demo transactions for {user_id}")
