#!/usr/bin/env python3
"""
Main CLI Entry Point for Ginny

Provides the `ginny` command group for syncing bank notification emails
and reviewing the resulting transactions.
"""

import logging
import os

import click

from ..core.config import get_config, reload_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Ginny - bank notification emails to transactions.

    Reads Spanish bank alert emails, extracts the transactions they
    describe, and summarizes spending by month, category and bank.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["GINNY_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    try:
        config = reload_config() if (config_env or debug) else get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("ginny").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Data directory: {config.data_dir}")


@main.command()
def version() -> None:
    """Show version information."""
    from ginny import __author__, __version__

    click.echo(f"Ginny v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Store Directory: {config_obj.storage.store_dir}")
    click.echo(f"  IMAP Server: {config_obj.email.imap_server}:{config_obj.email.imap_port}")
    click.echo(f"  Mailbox Connected: {bool(config_obj.email.username and config_obj.email.password)}")
    click.echo(f"  Sync Max Results: {config_obj.sync.max_results}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .demo import demo  # noqa: E402
from .parse import parse  # noqa: E402
from .stats import stats  # noqa: E402
from .sync import sync  # noqa: E402
from .transactions import transactions  # noqa: E402

main.add_command(sync)
main.add_command(parse)
main.add_command(transactions)
main.add_command(stats)
main.add_command(demo)


if __name__ == "__main__":
    main()
