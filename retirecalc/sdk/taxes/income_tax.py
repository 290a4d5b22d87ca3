"""Progressive bracket tax, FICA and combined tax breakdown."""

import logging

from ..schemas import TaxBreakdown
from .schemas import FicaRules, TaxBracketTable, TaxRules

logger = logging.getLogger(__name__)


def tax_owed(income: float, table: TaxBracketTable) -> float:
    """Calculate tax owed on income under a progressive bracket table.

    Each bracket taxes the slice of income between its lower bound and
    min(income, upper bound). Income <= 0 owes nothing. Negative income is
    not clamped here; callers clamp before calling.
    """
    tax = 0.0
    for bracket in table.brackets:
        if income <= bracket.lower:
            break
        tax += (min(income, bracket.upper_bound) - bracket.lower) * bracket.rate
    return tax


def fica_tax(income: float, fica: FicaRules) -> float:
    """Social Security (capped at the wage base) plus Medicare (uncapped).

    No Additional Medicare Tax is modeled.
    """
    social_security = min(income, fica.social_security_wage_base) * fica.social_security_rate
    medicare = income * fica.medicare_rate
    return social_security + medicare


def calc_total_taxes(income: float, rules: TaxRules) -> TaxBreakdown:
    """Federal + state + FICA on the same income."""
    federal = tax_owed(income, rules.federal)
    state = tax_owed(income, rules.state)
    fica = fica_tax(income, rules.fica)

    logger.debug(
        f"taxes on {income:,.2f}: federal={federal:,.2f} "
        f"{rules.state.name}={state:,.2f} fica={fica:,.2f}"
    )
    return TaxBreakdown(
        federal=federal,
        state=state,
        fica=fica,
        total=federal + state + fica,
    )
