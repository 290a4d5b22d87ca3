"""Settings CLI commands for Retire Calc.

Manages settings.json - default tax year and tax rules directory.
"""

from pathlib import Path

import click

from retirecalc.sdk import (
    TaxRulesNotFoundError,
    get_default_tax_year,
    get_settings_path,
    get_tax_rules_dirs,
    load_settings,
    load_tax_rules,
    set_setting,
    unset_setting,
)
from retirecalc.sdk.config import KNOWN_SETTINGS


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - tax_year: default tax year for brackets and limits
    - tax_rules_dir: extra directory of <year>.yaml tax rules
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective values:")
    click.echo(f"  tax_year: {get_default_tax_year()}")
    click.echo(f"  tax_rules search: {', '.join(str(d) for d in get_tax_rules_dirs())}")


@settings.command("set")
@click.argument("key", type=click.Choice(KNOWN_SETTINGS))
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE.

    Examples:
        retire-calc settings set tax_year 2024
        retire-calc settings set tax_rules_dir ~/tax-rules
    """
    if key == "tax_year":
        if not value.isdigit() or len(value) != 4:
            raise click.BadParameter(f"Invalid year '{value}'. Must be 4 digits.")
        try:
            load_tax_rules(value)
        except TaxRulesNotFoundError as e:
            raise click.ClickException(str(e))
        stored = int(value)
    else:
        rules_dir = Path(value).expanduser().resolve()
        if not rules_dir.is_dir():
            raise click.ClickException(f"Not a directory: {rules_dir}")
        stored = str(rules_dir)

    path = set_setting(key, stored)
    click.echo(f"Set {key}: {stored}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key", type=click.Choice(KNOWN_SETTINGS))
def settings_unset(key):
    """Clear KEY, reverting to its default."""
    if unset_setting(key):
        click.echo(f"Cleared {key}.")
    else:
        click.echo(f"{key} was not set.")
