"""Retire Calc SDK - Core calculations for retirement contribution comparisons."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    get_default_tax_year,
    get_tax_rules_dirs,
    DEFAULT_TAX_YEAR,
)

from .schemas import (
    ScenarioInputs,
    RetirementAssumptions,
    TaxBreakdown,
    BucketAmounts,
    ScenarioResult,
    ContributionLimitStatus,
    WithdrawalOutcome,
    WithdrawalPlan,
    ScenarioComparison,
    AllocationCandidate,
    AllocationResult,
)

from .taxes import (
    TaxRules,
    TaxRulesNotFoundError,
    list_tax_years,
    load_tax_rules,
    tax_owed,
    fica_tax,
    calc_total_taxes,
)

from .projection import (
    future_value,
    annual_withdrawal,
    remaining_balance,
)

from .withdrawal import (
    lump_sum_withdrawal,
    level_annual_withdrawal,
    plan_withdrawals,
)

from .scenario import (
    PAY_PERIODS,
    period_take_home,
    annual_target_from_paycheck,
    employee_contribution,
    contribution_limit_status,
    with_contribution_scenario,
    without_contribution_scenario,
    compare_scenarios,
)

from .solver import (
    SolverSettings,
    is_target_reachable,
    solve_contribution_percent,
)

from .optimizer import (
    optimize_allocation,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "get_default_tax_year",
    "get_tax_rules_dirs",
    "DEFAULT_TAX_YEAR",
    # Schemas
    "ScenarioInputs",
    "RetirementAssumptions",
    "TaxBreakdown",
    "BucketAmounts",
    "ScenarioResult",
    "ContributionLimitStatus",
    "WithdrawalOutcome",
    "WithdrawalPlan",
    "ScenarioComparison",
    "AllocationCandidate",
    "AllocationResult",
    # Taxes
    "TaxRules",
    "TaxRulesNotFoundError",
    "list_tax_years",
    "load_tax_rules",
    "tax_owed",
    "fica_tax",
    "calc_total_taxes",
    # Projection
    "future_value",
    "annual_withdrawal",
    "remaining_balance",
    # Withdrawal
    "lump_sum_withdrawal",
    "level_annual_withdrawal",
    "plan_withdrawals",
    # Scenarios
    "PAY_PERIODS",
    "period_take_home",
    "annual_target_from_paycheck",
    "employee_contribution",
    "contribution_limit_status",
    "with_contribution_scenario",
    "without_contribution_scenario",
    "compare_scenarios",
    # Solver / optimizer
    "SolverSettings",
    "is_target_reachable",
    "solve_contribution_percent",
    "optimize_allocation",
]
