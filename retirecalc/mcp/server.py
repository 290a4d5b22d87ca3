"""Retire Calc MCP Server - FastMCP implementation for scenario tools."""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from retirecalc.sdk import (
    RetirementAssumptions,
    ScenarioInputs,
    compare_scenarios as sdk_compare_scenarios,
    is_target_reachable,
    load_tax_rules,
    optimize_allocation as sdk_optimize_allocation,
    solve_contribution_percent,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("retire-calc")


def _inputs(
    gross_salary: float,
    contribution_percent: float,
    employer_match_percent: float,
    annual_return_percent: float,
    years: int,
    target_take_home: float | None,
    roth_401k_cap: float | None,
    roth_ira_contribution: float,
    pay_frequency: str,
) -> ScenarioInputs:
    return ScenarioInputs(
        gross_salary=gross_salary,
        contribution_percent=contribution_percent,
        employer_match_percent=employer_match_percent,
        annual_return_percent=annual_return_percent,
        years=years,
        target_take_home=target_take_home,
        roth_401k_cap=roth_401k_cap,
        roth_ira_contribution=roth_ira_contribution,
        pay_frequency=pay_frequency,
    )


# --- Tools ---

@mcp.tool()
async def compare_scenarios(
    gross_salary: float = Field(description="Gross annual salary"),
    contribution_percent: float = Field(default=0, description="Employee 401(k) contribution, % of salary"),
    employer_match_percent: float = Field(default=0, description="Employer match, % of the employee contribution"),
    annual_return_percent: float = Field(default=7, description="Annual return % (e.g., 7)"),
    years: int = Field(default=30, description="Years until withdrawal"),
    target_take_home: float | None = Field(default=None, description="Annual take-home target; surplus goes to brokerage"),
    roth_401k_cap: float | None = Field(default=None, description="Roth portion of the 401(k) contribution"),
    roth_ira_contribution: float = Field(default=0, description="Annual Roth IRA contribution"),
    pay_frequency: str = Field(default="biweekly", description="weekly, biweekly, semimonthly, monthly or annually"),
    retirement_income: float = Field(default=0, description="Other annual income in retirement"),
    retirement_years: int = Field(default=20, description="Years to draw balances down over"),
    tax_year: int | None = Field(default=None, description="Tax year (default: configured tax_year)"),
) -> dict[str, Any]:
    """Compare contributing to a 401(k) against investing the after-tax amount in a brokerage.

    Returns both scenarios (taxes, take-home, contributions and future value by
    bucket), withdrawal outcomes (lump sum, annual, monthly) and benefit metrics.
    """
    try:
        rules = load_tax_rules(tax_year)
        inputs = _inputs(
            gross_salary, contribution_percent, employer_match_percent, annual_return_percent,
            years, target_take_home, roth_401k_cap, roth_ira_contribution, pay_frequency,
        )
        retirement = RetirementAssumptions(
            retirement_income=retirement_income,
            post_retirement_return_percent=annual_return_percent,
            horizon_years=retirement_years,
        )
        return sdk_compare_scenarios(inputs, rules, retirement).model_dump(mode="json")

    except Exception as e:
        logger.error(f"Error comparing scenarios: {e}")
        return {"error": str(e)}


@mcp.tool()
async def solve_contribution(
    gross_salary: float = Field(description="Gross annual salary"),
    target_take_home: float = Field(description="Annual take-home target"),
    employer_match_percent: float = Field(default=0, description="Employer match, % of the employee contribution"),
    roth_401k_cap: float | None = Field(default=None, description="Roth portion of the 401(k) contribution"),
    roth_ira_contribution: float = Field(default=0, description="Annual Roth IRA contribution"),
    tax_year: int | None = Field(default=None, description="Tax year (default: configured tax_year)"),
) -> dict[str, Any]:
    """Find the highest 401(k) contribution % that keeps annual take-home at or above a target."""
    try:
        rules = load_tax_rules(tax_year)
        inputs = _inputs(
            gross_salary, 0, employer_match_percent, 7, 30,
            target_take_home, roth_401k_cap, roth_ira_contribution, "biweekly",
        )
        reachable = is_target_reachable(inputs, target_take_home, rules)
        return {
            "tax_year": rules.year,
            "reachable": reachable,
            "contribution_percent": solve_contribution_percent(inputs, target_take_home, rules),
        }

    except Exception as e:
        logger.error(f"Error solving contribution: {e}")
        return {"error": str(e), "contribution_percent": None}


@mcp.tool()
async def optimize_allocation(
    gross_salary: float = Field(description="Gross annual salary"),
    contribution_percent: float = Field(description="Employee 401(k) contribution, % of salary"),
    employer_match_percent: float = Field(default=0, description="Employer match, % of the employee contribution"),
    annual_return_percent: float = Field(default=7, description="Annual return % (e.g., 7)"),
    years: int = Field(default=30, description="Years until withdrawal"),
    roth_401k_cap: float | None = Field(default=None, description="Largest Roth amount to consider (default: whole contribution)"),
    retirement_income: float = Field(default=0, description="Other annual income in retirement"),
    step: float = Field(default=1000, description="Roth amount grid increment in dollars"),
    tax_year: int | None = Field(default=None, description="Tax year (default: configured tax_year)"),
) -> dict[str, Any]:
    """Find the Roth / traditional 401(k) split that maximizes lump-sum net worth at withdrawal."""
    try:
        rules = load_tax_rules(tax_year)
        inputs = _inputs(
            gross_salary, contribution_percent, employer_match_percent, annual_return_percent,
            years, None, roth_401k_cap, 0, "biweekly",
        )
        retirement = RetirementAssumptions(
            retirement_income=retirement_income,
            post_retirement_return_percent=annual_return_percent,
        )
        return sdk_optimize_allocation(inputs, rules, retirement, step=step).model_dump(mode="json")

    except Exception as e:
        logger.error(f"Error optimizing allocation: {e}")
        return {"error": str(e)}


@mcp.tool()
async def get_tax_rules(
    tax_year: int | None = Field(default=None, description="Tax year (default: configured tax_year)"),
) -> dict[str, Any]:
    """Get the bracket tables, FICA rates and contribution limits for a tax year."""
    try:
        return load_tax_rules(tax_year).model_dump(mode="json")

    except Exception as e:
        logger.error(f"Error loading tax rules: {e}")
        return {"error": str(e)}


def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
