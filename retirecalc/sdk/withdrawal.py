"""Net-of-tax outcomes for withdrawing projected balances.

Tax character by bucket:
- traditional + employer_match: ordinary income, stacked on retirement income
- roth_401k + roth_ira: tax-free
- brokerage: flat long-term capital gains rate (no bracket tiers)

Ordinary-income tax on a withdrawal is the increase in total tax (federal,
state, FICA) that the withdrawal causes on top of retirement income, so the
effective rate of a withdrawal never exceeds the top combined marginal rate.
"""

import logging
from typing import Optional

from .projection import annual_withdrawal
from .schemas import BucketAmounts, RetirementAssumptions, WithdrawalOutcome, WithdrawalPlan
from .taxes import TaxRules, calc_total_taxes, load_tax_rules

logger = logging.getLogger(__name__)


def ordinary_income_tax(amount: float, retirement_income: float, rules: TaxRules) -> float:
    """Tax attributable to amount when added on top of retirement income."""
    if amount <= 0:
        return 0.0
    base = calc_total_taxes(retirement_income, rules).total
    stacked = calc_total_taxes(retirement_income + amount, rules).total
    return stacked - base


def _outcome(gross: float, ordinary_tax: float, capital_gains_tax: float) -> WithdrawalOutcome:
    taxes = ordinary_tax + capital_gains_tax
    return WithdrawalOutcome(
        gross=gross,
        ordinary_income_tax=ordinary_tax,
        capital_gains_tax=capital_gains_tax,
        taxes=taxes,
        net=gross - taxes,
        effective_rate=taxes / gross * 100 if gross > 0 else 0.0,
    )


def lump_sum_withdrawal(
    balances: BucketAmounts,
    retirement_income: float,
    rules: TaxRules,
) -> WithdrawalOutcome:
    """Withdraw every bucket in a single taxable year."""
    total = balances.total
    if total <= 0:
        return WithdrawalOutcome.zero()

    ordinary_tax = ordinary_income_tax(balances.pretax, retirement_income, rules)
    capital_gains_tax = balances.brokerage * rules.capital_gains.long_term_rate

    return _outcome(total, ordinary_tax, capital_gains_tax)


def level_annual_withdrawal(
    balances: BucketAmounts,
    retirement_income: float,
    post_retirement_return_percent: float,
    horizon_years: int,
    rules: TaxRules,
) -> WithdrawalOutcome:
    """Withdraw a level annual amount that depletes all buckets over the horizon.

    Each withdrawal is drawn from the buckets in proportion to their share of
    the total. The brokerage share is split into gain and return of principal
    by a fixed fraction rather than tracked cost basis.
    """
    total = balances.total
    if total <= 0 or horizon_years <= 0:
        return WithdrawalOutcome.zero()

    withdrawal = annual_withdrawal(total, post_retirement_return_percent / 100, horizon_years)

    pretax_portion = withdrawal * balances.pretax / total
    brokerage_portion = withdrawal * balances.brokerage / total

    cg = rules.capital_gains
    ordinary_tax = ordinary_income_tax(pretax_portion, retirement_income, rules)
    capital_gains_tax = brokerage_portion * cg.brokerage_gain_fraction * cg.long_term_rate

    return _outcome(withdrawal, ordinary_tax, capital_gains_tax)


def monthly_from_annual(annual: WithdrawalOutcome) -> WithdrawalOutcome:
    """The level-annual outcome expressed per month."""
    return WithdrawalOutcome(
        gross=annual.gross / 12,
        ordinary_income_tax=annual.ordinary_income_tax / 12,
        capital_gains_tax=annual.capital_gains_tax / 12,
        taxes=annual.taxes / 12,
        net=annual.net / 12,
        effective_rate=annual.effective_rate,
    )


def plan_withdrawals(
    balances: BucketAmounts,
    retirement: Optional[RetirementAssumptions] = None,
    rules: Optional[TaxRules] = None,
) -> WithdrawalPlan:
    """Lump-sum, level-annual and monthly outcomes for the same balances.

    Args:
        balances: Future values by bucket
        retirement: Withdrawal-phase assumptions (defaults if not provided)
        rules: Tax rules (loads the default tax year if not provided)

    Returns:
        WithdrawalPlan
    """
    if retirement is None:
        retirement = RetirementAssumptions()
    if rules is None:
        rules = load_tax_rules()

    lump_sum = lump_sum_withdrawal(balances, retirement.retirement_income, rules)
    annual = level_annual_withdrawal(
        balances,
        retirement.retirement_income,
        retirement.post_retirement_return_percent,
        retirement.horizon_years,
        rules,
    )

    logger.debug(
        f"withdrawal plan on {balances.total:,.2f}: lump sum net={lump_sum.net:,.2f} "
        f"annual={annual.gross:,.2f} net={annual.net:,.2f}"
    )

    return WithdrawalPlan(
        lump_sum=lump_sum,
        annual=annual,
        monthly=monthly_from_annual(annual),
        horizon_years=retirement.horizon_years,
    )
