"""Tax rules CLI commands."""

import json

import click
from pydantic import ValidationError
from rich.console import Console

from retirecalc.sdk import TaxRulesNotFoundError, get_tax_rules_dirs, list_tax_years, load_tax_rules

from .renderers.scenario_renderer import render_tax_rules


@click.group("rules")
def rules():
    """Tax rules commands.

    Rules ship for the default tax year. To add or override a year, drop a
    <year>.yaml file in ~/.config/retire-calc/tax-rules/ (or the directory
    set with 'retire-calc settings set tax_rules_dir PATH').
    """
    pass


@rules.command("list")
def rules_list():
    """List available tax years and where rules are searched."""
    years = list_tax_years()

    click.echo("Search order:")
    for rules_dir in get_tax_rules_dirs():
        marker = "" if rules_dir.is_dir() else " (missing)"
        click.echo(f"  {rules_dir}{marker}")
    click.echo()

    if not years:
        click.echo("No tax rules found.")
        return

    click.echo("Available tax years:")
    for year in years:
        click.echo(f"  {year}")


@rules.command("show")
@click.argument("year", type=int, required=False)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def rules_show(year, as_json):
    """Show brackets, FICA and limits for YEAR (default: settings tax_year)."""
    try:
        tax_rules = load_tax_rules(year)
    except TaxRulesNotFoundError as e:
        raise click.ClickException(str(e))
    except ValidationError as e:
        raise click.ClickException(f"Invalid tax rules file:\n{e}")

    if as_json:
        click.echo(json.dumps(tax_rules.model_dump(mode="json"), indent=2))
    else:
        render_tax_rules(Console(width=120), tax_rules)
