#!/usr/bin/env python3
"""
Parse CLI - Single Email Inspection

Runs the transaction parser over one .eml file and prints the result as
JSON. Nothing is stored.
"""

from pathlib import Path

import click

from ..bank_emails.eml_source import load_eml_file
from ..bank_emails.parser import parse_email
from ..core.dates import EmailDateError
from ..core.json_utils import format_json


@click.command()
@click.argument("eml_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def parse(ctx: click.Context, eml_file: Path) -> None:
    """
    Parse a bank notification .eml file.

    Examples:
      ginny parse ./emails/retiro.eml
    """
    raw_email = load_eml_file(eml_file)

    if ctx.obj.get("verbose"):
        click.echo(f"Email: {raw_email.id}")
        click.echo(f"From: {raw_email.sender}")
        click.echo(f"Subject: {raw_email.subject}")

    try:
        parsed = parse_email(raw_email)
    except EmailDateError as e:
        raise click.ClickException(str(e)) from e

    if parsed is None:
        click.echo("No transaction found in this email")
        return

    click.echo(format_json(parsed.to_dict()))
