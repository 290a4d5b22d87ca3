"""taxes - Tax tables and bracket math.

Scope:
- Year-specific tax rules (brackets, FICA, contribution limits)
- Progressive bracket tax, FICA, combined federal + state + FICA breakdown

Constraints:
- Pure calculation - rules are passed in, never read from globals
- Year-specific rules loaded from tax-rules/{year}.yaml

Usage:
    from retirecalc.sdk.taxes import load_tax_rules, calc_total_taxes

    rules = load_tax_rules(2024)
    taxes = calc_total_taxes(135000, rules)
"""

from .schemas import (
    TaxBracket,
    TaxBracketTable,
    FicaRules,
    ContributionLimits,
    CapitalGainsRules,
    TaxRules,
)

from .rules import (
    TaxRulesNotFoundError,
    find_tax_rules_file,
    list_tax_years,
    load_tax_rules,
)

from .income_tax import (
    tax_owed,
    fica_tax,
    calc_total_taxes,
)

__all__ = [
    # Schemas
    "TaxBracket",
    "TaxBracketTable",
    "FicaRules",
    "ContributionLimits",
    "CapitalGainsRules",
    "TaxRules",
    # Rules loading
    "TaxRulesNotFoundError",
    "find_tax_rules_file",
    "list_tax_years",
    "load_tax_rules",
    # Calculations
    "tax_owed",
    "fica_tax",
    "calc_total_taxes",
]
