"""Retire Calc CLI - Compare 401(k) contributions against a taxable brokerage."""

import functools
import json
import logging
import os

import click
from pydantic import ValidationError
from rich.console import Console

from retirecalc import __version__
from retirecalc.sdk import (
    PAY_PERIODS,
    RetirementAssumptions,
    ScenarioInputs,
    SolverSettings,
    TaxRulesNotFoundError,
    annual_target_from_paycheck,
    compare_scenarios,
    employee_contribution,
    is_target_reachable,
    load_tax_rules,
    optimize_allocation,
    period_take_home,
    solve_contribution_percent,
    with_contribution_scenario,
)

from .renderers.scenario_renderer import render_allocation, render_comparison, render_solution
from .rules_commands import rules as rules_group
from .settings_commands import settings as settings_group

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)


@click.group()
@click.version_option(version=__version__, prog_name="retire-calc")
def cli():
    """Retire Calc - 401(k) vs. brokerage comparison tools.

    Projects contributing to a 401(k) (traditional, Roth, employer match)
    against investing the after-tax equivalent in a brokerage account,
    then compares withdrawal outcomes.

    Settings are loaded from (in order):

    \b
    1. RETIRE_CALC_CONFIG_PATH environment variable
    2. ~/.config/retire-calc/settings.json (XDG default)

    Run 'retire-calc rules show' to see the tax tables in use.
    """
    pass


cli.add_command(rules_group)
cli.add_command(settings_group)


def scenario_options(f):
    """Options shared by compare, solve and optimize."""
    options = [
        click.argument("salary", type=float),
        click.option("--contribution", "-c", type=float, default=0, show_default=True,
                     help="Employee 401(k) contribution, % of salary"),
        click.option("--match", "-m", "match", type=float, default=0, show_default=True,
                     help="Employer match, % of your contribution"),
        click.option("--return", "-r", "return_pct", type=float, default=7, show_default=True,
                     help="Annual investment return %"),
        click.option("--years", "-y", type=int, default=30, show_default=True,
                     help="Years until withdrawal"),
        click.option("--frequency", "-f", type=click.Choice(list(PAY_PERIODS)), default="biweekly",
                     show_default=True, help="Pay frequency"),
        click.option("--target-paycheck", type=float, default=None,
                     help="Take-home target per paycheck; surplus is invested in brokerage"),
        click.option("--roth-401k-cap", type=float, default=None,
                     help="Portion of the 401(k) contribution made as Roth"),
        click.option("--roth-ira", type=float, default=0, show_default=True,
                     help="Annual Roth IRA contribution"),
        click.option("--retirement-income", type=float, default=0, show_default=True,
                     help="Other annual income in retirement"),
        click.option("--retirement-years", type=int, default=20, show_default=True,
                     help="Years to draw balances down over"),
        click.option("--tax-year", type=int, default=None,
                     help="Tax year for brackets and limits (default: settings tax_year)"),
        click.option("--json", "as_json", is_flag=True, help="Output as JSON."),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _handle_sdk_errors(f):
    """Convert SDK/validation errors into ClickExceptions."""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except TaxRulesNotFoundError as e:
            raise click.ClickException(str(e))
        except ValidationError as e:
            raise click.ClickException(f"Invalid input:\n{e}")
        except ValueError as e:
            raise click.ClickException(str(e))
    return wrapper


def _build_inputs(salary, contribution, match, return_pct, years, frequency,
                  target_paycheck, roth_401k_cap, roth_ira) -> ScenarioInputs:
    """Build validated ScenarioInputs from CLI options."""
    target = None
    if target_paycheck is not None:
        target = annual_target_from_paycheck(target_paycheck, frequency)

    return ScenarioInputs(
        gross_salary=salary,
        contribution_percent=contribution,
        employer_match_percent=match,
        annual_return_percent=return_pct,
        years=years,
        target_take_home=target,
        roth_401k_cap=roth_401k_cap,
        roth_ira_contribution=roth_ira,
        pay_frequency=frequency,
    )


def _echo_json(data: dict) -> None:
    click.echo(json.dumps(data, indent=2))


@cli.command("compare")
@scenario_options
@_handle_sdk_errors
def compare(salary, contribution, match, return_pct, years, frequency, target_paycheck,
            roth_401k_cap, roth_ira, retirement_income, retirement_years, tax_year, as_json):
    """Compare contributing to a 401(k) against investing in a brokerage.

    SALARY is gross annual salary.

    \b
    Examples:
      retire-calc compare 150000 -c 10 -m 50
      retire-calc compare 150000 -c 15 --roth-401k-cap 5000 --roth-ira 7000
      retire-calc compare 120000 -c 20 --target-paycheck 2500 --json
    """
    rules = load_tax_rules(tax_year)
    inputs = _build_inputs(salary, contribution, match, return_pct, years, frequency,
                           target_paycheck, roth_401k_cap, roth_ira)
    retirement = RetirementAssumptions(
        retirement_income=retirement_income,
        post_retirement_return_percent=return_pct,
        horizon_years=retirement_years,
    )

    result = compare_scenarios(inputs, rules, retirement)

    if as_json:
        _echo_json(result.model_dump(mode="json"))
    else:
        render_comparison(Console(width=120), result)


@cli.command("solve")
@scenario_options
@_handle_sdk_errors
def solve(salary, contribution, match, return_pct, years, frequency, target_paycheck,
          roth_401k_cap, roth_ira, retirement_income, retirement_years, tax_year, as_json):
    """Find the highest contribution % that keeps take-home at a target.

    SALARY is gross annual salary. Requires --target-paycheck.

    \b
    Examples:
      retire-calc solve 150000 --target-paycheck 3500
      retire-calc solve 150000 --target-paycheck 7000 -f monthly --roth-ira 7000
    """
    if target_paycheck is None:
        raise click.UsageError("solve requires --target-paycheck")

    rules = load_tax_rules(tax_year)
    inputs = _build_inputs(salary, contribution, match, return_pct, years, frequency,
                           target_paycheck, roth_401k_cap, roth_ira)
    settings = SolverSettings()
    target = inputs.target_take_home

    reachable = is_target_reachable(inputs, target, rules, settings)
    percent = solve_contribution_percent(inputs, target, rules, settings)

    solved = with_contribution_scenario(
        inputs.model_copy(update={"contribution_percent": percent, "target_take_home": None}),
        rules,
    )
    uncontributed = with_contribution_scenario(
        inputs.model_copy(update={"contribution_percent": 0, "target_take_home": None}),
        rules,
    )

    data = {
        "tax_year": rules.year,
        "reachable": reachable,
        "contribution_percent": percent,
        "annual_contribution": employee_contribution(salary, percent, rules.limits),
        "target_take_home": target,
        "target_period_take_home": target_paycheck,
        "take_home": solved.take_home,
        "period_take_home": solved.period_take_home,
        "max_period_take_home": period_take_home(uncontributed.take_home, frequency),
    }

    if as_json:
        _echo_json(data)
    else:
        render_solution(Console(width=120), data)


@cli.command("optimize")
@scenario_options
@click.option("--step", type=float, default=1000, show_default=True,
              help="Roth amount grid increment in dollars")
@_handle_sdk_errors
def optimize(salary, contribution, match, return_pct, years, frequency, target_paycheck,
             roth_401k_cap, roth_ira, retirement_income, retirement_years, tax_year, as_json, step):
    """Find the Roth / traditional split that maximizes lump-sum net worth.

    SALARY is gross annual salary. With --target-paycheck, the contribution
    percent is solved first and -c is ignored.

    \b
    Examples:
      retire-calc optimize 150000 -c 10 -m 50
      retire-calc optimize 150000 --target-paycheck 3500 --step 500
    """
    rules = load_tax_rules(tax_year)
    inputs = _build_inputs(salary, contribution, match, return_pct, years, frequency,
                           target_paycheck, roth_401k_cap, roth_ira)
    retirement = RetirementAssumptions(
        retirement_income=retirement_income,
        post_retirement_return_percent=return_pct,
        horizon_years=retirement_years,
    )

    if inputs.target_take_home is not None:
        if not is_target_reachable(inputs, inputs.target_take_home, rules):
            raise click.ClickException(
                f"Target of ${target_paycheck:,.2f} per paycheck is not reachable even with no 401(k) contribution."
            )
        percent = solve_contribution_percent(inputs, inputs.target_take_home, rules)
        inputs = inputs.model_copy(update={"contribution_percent": percent})
        if not as_json:
            click.echo(f"Solved contribution: {percent:.1f}%")

    result = optimize_allocation(inputs, rules, retirement, step=step)

    if as_json:
        output = result.model_dump(mode="json")
        output["contribution_percent"] = inputs.contribution_percent
        _echo_json(output)
    else:
        render_allocation(Console(width=120), result)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
