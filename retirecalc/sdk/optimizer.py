"""Grid search over the Roth / traditional split of a fixed 401(k) budget."""

import logging
from typing import Optional

from .scenario import employee_contribution, with_contribution_scenario
from .schemas import AllocationCandidate, AllocationResult, RetirementAssumptions, ScenarioInputs
from .taxes import TaxRules, load_tax_rules
from .withdrawal import lump_sum_withdrawal

logger = logging.getLogger(__name__)

DEFAULT_STEP = 1000.0


def _grid(roth_cap: float, step: float) -> list[float]:
    """0, step, 2*step, ... below roth_cap, plus roth_cap itself."""
    points = []
    amount = 0.0
    while amount < roth_cap:
        points.append(amount)
        amount += step
    if not points or points[-1] != roth_cap:
        points.append(roth_cap)
    return points


def evaluate_allocation(
    inputs: ScenarioInputs,
    roth_401k: float,
    rules: TaxRules,
    retirement: RetirementAssumptions,
) -> AllocationCandidate:
    """Run the scenario with a Roth carve-out and value it as a lump sum."""
    scenario = with_contribution_scenario(inputs.model_copy(update={"roth_401k_cap": roth_401k}), rules)
    lump_sum = lump_sum_withdrawal(scenario.future_values, retirement.retirement_income, rules)
    return AllocationCandidate(
        roth_401k=scenario.contributions.roth_401k,
        traditional=scenario.contributions.traditional,
        total_future_value=scenario.total_future_value,
        net_worth=lump_sum.net,
    )


def optimize_allocation(
    inputs: ScenarioInputs,
    rules: Optional[TaxRules] = None,
    retirement: Optional[RetirementAssumptions] = None,
    step: float = DEFAULT_STEP,
) -> AllocationResult:
    """Find the Roth 401(k) carve-out that maximizes lump-sum net worth.

    The contribution budget comes from inputs.contribution_percent (run the
    solver first to size it to a take-home target). Candidates are
    all-traditional, all-Roth up to the cap, and a grid in step increments
    between them. inputs.roth_401k_cap bounds the search; without it the
    whole budget may go Roth.

    Args:
        inputs: Scenario inputs
        rules: Tax rules (loads the default tax year if not provided)
        retirement: Withdrawal-phase assumptions (defaults if not provided)
        step: Grid increment in dollars

    Returns:
        AllocationResult with the best candidate and every candidate evaluated

    Raises:
        ValueError: If step is not positive
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    if rules is None:
        rules = load_tax_rules()
    if retirement is None:
        retirement = RetirementAssumptions()

    budget = employee_contribution(inputs.gross_salary, inputs.contribution_percent, rules.limits)
    if inputs.roth_401k_cap is None:
        roth_cap = budget
    else:
        roth_cap = min(inputs.roth_401k_cap, budget)

    candidates = []
    best = None
    for roth_401k in _grid(roth_cap, step):
        candidate = evaluate_allocation(inputs, roth_401k, rules, retirement)
        candidates.append(candidate)
        logger.debug(f"roth_401k={roth_401k:,.2f}: net worth {candidate.net_worth:,.2f}")
        if best is None or candidate.net_worth > best.net_worth:
            best = candidate

    return AllocationResult(
        budget=budget,
        roth_cap=roth_cap,
        step=step,
        best=best,
        candidates=candidates,
    )
