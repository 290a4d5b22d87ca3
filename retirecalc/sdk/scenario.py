"""With- and without-contribution scenarios and their comparison.

Each scenario is a pure function of ScenarioInputs and TaxRules. Contributions
are split into buckets by tax character:

- traditional: pre-tax, reduces taxable income
- roth_401k: post-tax carve-out of the employee 401(k) contribution
- employer_match: pre-tax, funded by the employer
- roth_ira: post-tax, independent of the 401(k)
- brokerage: post-tax, taxable investment account

Every bucket is projected forward independently at the same return.
"""

import logging
from typing import Optional

from .projection import future_value
from .schemas import (
    BucketAmounts,
    ContributionLimitStatus,
    RetirementAssumptions,
    ScenarioComparison,
    ScenarioInputs,
    ScenarioResult,
)
from .taxes import ContributionLimits, TaxRules, calc_total_taxes, load_tax_rules
from .withdrawal import plan_withdrawals

logger = logging.getLogger(__name__)

# Pay periods by frequency
PAY_PERIODS = {
    "weekly": 52,
    "biweekly": 26,
    "semimonthly": 24,
    "monthly": 12,
    "annually": 1,
}


def get_pay_periods(frequency: str) -> int:
    """Get number of pay periods for a frequency.

    Raises:
        ValueError: If frequency is unknown
    """
    if frequency not in PAY_PERIODS:
        raise ValueError(f"Unknown pay frequency '{frequency}'. Use one of: {', '.join(PAY_PERIODS)}")
    return PAY_PERIODS[frequency]


def period_take_home(annual_take_home: float, frequency: str) -> float:
    """Take-home per paycheck."""
    return annual_take_home / get_pay_periods(frequency)


def annual_target_from_paycheck(per_paycheck: float, frequency: str) -> float:
    """Annual take-home target from a per-paycheck target."""
    return per_paycheck * get_pay_periods(frequency)


def employee_contribution(gross_salary: float, contribution_percent: float, limits: ContributionLimits) -> float:
    """Employee 401(k) contribution capped at the annual employee limit."""
    return min(gross_salary * contribution_percent / 100, limits.employee_annual_max)


def contribution_limit_status(
    gross_salary: float,
    contribution_percent: float,
    limits: ContributionLimits,
) -> ContributionLimitStatus:
    """Compare the requested contribution against the employee limit."""
    requested = gross_salary * contribution_percent / 100
    limit = limits.employee_annual_max
    allowed = min(requested, limit)
    percent_of_limit = min(allowed / limit * 100, 100.0) if limit > 0 else 0.0

    return ContributionLimitStatus(
        requested=requested,
        allowed=allowed,
        limit=limit,
        capped=requested > limit,
        percent_of_limit=percent_of_limit,
    )


def _project(contributions: BucketAmounts, inputs: ScenarioInputs) -> BucketAmounts:
    """Project each bucket forward over the horizon."""
    rate = inputs.annual_return_percent
    years = inputs.years
    return BucketAmounts(
        traditional=future_value(contributions.traditional, rate, years),
        roth_401k=future_value(contributions.roth_401k, rate, years),
        employer_match=future_value(contributions.employer_match, rate, years),
        roth_ira=future_value(contributions.roth_ira, rate, years),
        brokerage=future_value(contributions.brokerage, rate, years),
    )


def _surplus(take_home: float, target: Optional[float]) -> float:
    """Take-home above the target, invested rather than spent."""
    if target is None:
        return 0.0
    return max(0.0, take_home - target)


def with_contribution_scenario(inputs: ScenarioInputs, rules: Optional[TaxRules] = None) -> ScenarioResult:
    """Scenario where the employee contributes to the 401(k).

    Args:
        inputs: Scenario inputs
        rules: Tax rules (loads the default tax year if not provided)

    Returns:
        ScenarioResult with kind="with_contribution"
    """
    if rules is None:
        rules = load_tax_rules()

    salary = inputs.gross_salary
    limits = rules.limits

    total_contribution = employee_contribution(salary, inputs.contribution_percent, limits)
    # Match is a rate on the employee's own contribution and never exceeds it
    employer = min(total_contribution * inputs.employer_match_percent / 100, total_contribution)

    roth_401k = min(total_contribution, inputs.roth_401k_cap or 0)
    traditional = total_contribution - roth_401k
    roth_ira = min(inputs.roth_ira_contribution, limits.roth_ira_annual_max)

    taxable_income = max(0.0, salary - traditional)
    taxes = calc_total_taxes(taxable_income, rules)
    take_home = taxable_income - taxes.total - roth_401k - roth_ira

    brokerage = _surplus(take_home, inputs.target_take_home)

    contributions = BucketAmounts(
        traditional=traditional,
        roth_401k=roth_401k,
        employer_match=employer,
        roth_ira=roth_ira,
        brokerage=brokerage,
    )
    future_values = _project(contributions, inputs)

    logger.debug(
        f"with contribution: traditional={traditional:,.2f} roth_401k={roth_401k:,.2f} "
        f"employer={employer:,.2f} roth_ira={roth_ira:,.2f} brokerage={brokerage:,.2f} "
        f"take_home={take_home:,.2f}"
    )

    return ScenarioResult(
        kind="with_contribution",
        gross_salary=salary,
        taxable_income=taxable_income,
        taxes=taxes,
        take_home=take_home,
        pay_frequency=inputs.pay_frequency,
        period_take_home=period_take_home(take_home, inputs.pay_frequency),
        contributions=contributions,
        future_values=future_values,
        total_future_value=future_values.total,
    )


def without_contribution_scenario(inputs: ScenarioInputs, rules: Optional[TaxRules] = None) -> ScenarioResult:
    """Scenario where the 401(k) money goes to a taxable brokerage instead.

    With a take-home target, the brokerage receives the surplus above it.
    Without one, it receives the after-tax equivalent of the contribution
    that would have been made, de-grossed by the average federal + state
    rate on the full salary. That is an approximation of the marginal tax
    saving, kept as-is.
    """
    if rules is None:
        rules = load_tax_rules()

    salary = inputs.gross_salary
    limits = rules.limits

    roth_ira = min(inputs.roth_ira_contribution, limits.roth_ira_annual_max)
    taxes = calc_total_taxes(salary, rules)
    take_home = salary - taxes.total - roth_ira

    if inputs.target_take_home is not None:
        brokerage = _surplus(take_home, inputs.target_take_home)
    else:
        potential = employee_contribution(salary, inputs.contribution_percent, limits)
        if salary > 0:
            brokerage = max(0.0, potential * (1 - (taxes.federal + taxes.state) / salary))
        else:
            brokerage = 0.0

    contributions = BucketAmounts(roth_ira=roth_ira, brokerage=brokerage)
    future_values = _project(contributions, inputs)

    logger.debug(f"without contribution: brokerage={brokerage:,.2f} take_home={take_home:,.2f}")

    return ScenarioResult(
        kind="without_contribution",
        gross_salary=salary,
        taxable_income=salary,
        taxes=taxes,
        take_home=take_home,
        pay_frequency=inputs.pay_frequency,
        period_take_home=period_take_home(take_home, inputs.pay_frequency),
        contributions=contributions,
        future_values=future_values,
        total_future_value=future_values.total,
    )


def compare_scenarios(
    inputs: ScenarioInputs,
    rules: Optional[TaxRules] = None,
    retirement: Optional[RetirementAssumptions] = None,
) -> ScenarioComparison:
    """Run both scenarios, their withdrawal plans and the comparison metrics.

    This is the single entry point a host application calls whenever its
    inputs change.

    Args:
        inputs: Scenario inputs
        rules: Tax rules (loads the default tax year if not provided)
        retirement: Withdrawal-phase assumptions (defaults if not provided)

    Returns:
        ScenarioComparison
    """
    if rules is None:
        rules = load_tax_rules()
    if retirement is None:
        retirement = RetirementAssumptions()

    with_401k = with_contribution_scenario(inputs, rules)
    without_401k = without_contribution_scenario(inputs, rules)

    tax_savings = without_401k.taxes.total - with_401k.taxes.total
    wealth_difference = with_401k.total_future_value - without_401k.total_future_value

    employee_total = (with_401k.contributions.traditional + with_401k.contributions.roth_401k) * inputs.years
    roi_percent = wealth_difference / employee_total * 100 if employee_total > 0 else 0.0

    return ScenarioComparison(
        tax_year=rules.year,
        inputs=inputs,
        retirement=retirement,
        with_contribution=with_401k,
        without_contribution=without_401k,
        with_contribution_withdrawal=plan_withdrawals(with_401k.future_values, retirement, rules),
        without_contribution_withdrawal=plan_withdrawals(without_401k.future_values, retirement, rules),
        limit_status=contribution_limit_status(inputs.gross_salary, inputs.contribution_percent, rules.limits),
        tax_savings=tax_savings,
        take_home_difference=without_401k.take_home - with_401k.take_home,
        wealth_difference=wealth_difference,
        roi_percent=roi_percent,
    )
