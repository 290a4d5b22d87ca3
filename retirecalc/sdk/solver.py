"""Solve for the largest contribution percent that still meets a take-home target."""

import logging
import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .scenario import with_contribution_scenario
from .schemas import ScenarioInputs
from .taxes import TaxRules, load_tax_rules

logger = logging.getLogger(__name__)


class SolverSettings(BaseModel):
    """Binary search tuning.

    The projection assumption is fixed rather than taken from the user's
    inputs. Take-home does not depend on return or horizon, so it only
    affects the scenario projections computed along the way.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    iterations: int = Field(default=30, ge=1)
    tolerance: float = Field(default=1.0, ge=0, description="Dollars below target still accepted")
    assumed_return_percent: float = Field(default=7.0, ge=0)
    assumed_years: int = Field(default=30, ge=0)


def _take_home_at(
    inputs: ScenarioInputs,
    percent: float,
    rules: TaxRules,
    settings: SolverSettings,
) -> float:
    trial = inputs.model_copy(update={
        "contribution_percent": percent,
        "annual_return_percent": settings.assumed_return_percent,
        "years": settings.assumed_years,
        "target_take_home": None,
    })
    return with_contribution_scenario(trial, rules).take_home


def max_contribution_percent(gross_salary: float, rules: TaxRules) -> float:
    """Percent of salary at which the employee limit is reached (at most 100)."""
    if gross_salary <= 0:
        return 0.0
    return min(100.0, rules.limits.employee_annual_max / gross_salary * 100)


def is_target_reachable(
    inputs: ScenarioInputs,
    target_take_home: float,
    rules: Optional[TaxRules] = None,
    settings: Optional[SolverSettings] = None,
) -> bool:
    """True if contributing 0% meets the target within tolerance."""
    if rules is None:
        rules = load_tax_rules()
    if settings is None:
        settings = SolverSettings()
    return _take_home_at(inputs, 0.0, rules, settings) >= target_take_home - settings.tolerance


def solve_contribution_percent(
    inputs: ScenarioInputs,
    target_take_home: float,
    rules: Optional[TaxRules] = None,
    settings: Optional[SolverSettings] = None,
) -> float:
    """Binary search the contribution percent that keeps take-home at target.

    Searches [0, max_contribution_percent] for a fixed number of iterations.
    Everything except the contribution percent (match, Roth carve-out, Roth
    IRA) comes from inputs.

    Args:
        inputs: Scenario inputs (contribution_percent is ignored)
        target_take_home: Annual take-home target
        rules: Tax rules (loads the default tax year if not provided)
        settings: Search settings (defaults if not provided)

    Returns:
        Percent rounded down to one decimal. 0 when even 0% misses the
        target; use is_target_reachable() to tell that apart from a real 0.
    """
    if rules is None:
        rules = load_tax_rules()
    if settings is None:
        settings = SolverSettings()

    low = 0.0
    high = max_contribution_percent(inputs.gross_salary, rules)
    best = 0.0
    floor = target_take_home - settings.tolerance

    for i in range(settings.iterations):
        mid = (low + high) / 2
        take_home = _take_home_at(inputs, mid, rules, settings)
        if take_home >= floor:
            best = mid
            low = mid
        else:
            high = mid
        logger.debug(f"solver iteration {i + 1}: {mid:.6f}% -> take-home {take_home:,.2f}")

    # Round down so the reported percent still meets the target
    result = math.floor(best * 10) / 10
    logger.debug(f"solved contribution: {result:.1f}% for target {target_take_home:,.2f}")
    return result
