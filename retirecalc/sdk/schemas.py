"""Pydantic schemas for scenario inputs and calculation results.

All schemas use extra='forbid' to reject unknown fields. Result schemas are
frozen: they are snapshots recomputed from scratch on every call.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


PayFrequency = Literal["weekly", "biweekly", "semimonthly", "monthly", "annually"]


# =============================================================================
# Inputs
# =============================================================================


class ScenarioInputs(BaseModel):
    """Plain numeric inputs for one comparison.

    The input source is responsible for parsing; malformed fields should be
    defaulted (typically to 0) before constructing this model.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_salary: float = Field(..., ge=0, description="Gross annual salary")
    contribution_percent: float = Field(default=0, ge=0, le=100, description="Employee 401(k) contribution, % of salary")
    employer_match_percent: float = Field(
        default=0, ge=0, le=100,
        description="Employer match rate, % of the employee contribution",
    )
    annual_return_percent: float = Field(default=0, ge=0, description="Expected annual return (e.g., 7 for 7%)")
    years: int = Field(default=0, ge=0, description="Years until withdrawal")
    target_take_home: Optional[float] = Field(
        default=None, ge=0,
        description="Annual take-home target; surplus above it is invested in brokerage",
    )
    roth_401k_cap: Optional[float] = Field(
        default=None, ge=0,
        description="Portion of the 401(k) contribution carved out as Roth (None = all traditional)",
    )
    roth_ira_contribution: float = Field(default=0, ge=0, description="Requested annual Roth IRA contribution")
    pay_frequency: PayFrequency = Field(default="biweekly")


class RetirementAssumptions(BaseModel):
    """Assumptions for the withdrawal phase."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    retirement_income: float = Field(default=0, ge=0, description="Steady non-investment income in retirement")
    post_retirement_return_percent: float = Field(default=7.0, ge=0)
    horizon_years: int = Field(default=20, ge=0, description="Years over which balances are drawn down")


# =============================================================================
# Results
# =============================================================================


class TaxBreakdown(BaseModel):
    """Tax owed by jurisdiction."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    federal: float
    state: float
    fica: float
    total: float


class BucketAmounts(BaseModel):
    """Amounts per account bucket (contributions or future values)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    traditional: float = Field(default=0, ge=0, description="Traditional (pre-tax) 401(k)")
    roth_401k: float = Field(default=0, ge=0, description="Roth 401(k) carve-out")
    employer_match: float = Field(default=0, ge=0, description="Employer contribution (pre-tax)")
    roth_ira: float = Field(default=0, ge=0)
    brokerage: float = Field(default=0, ge=0, description="Taxable brokerage investment")

    @property
    def pretax(self) -> float:
        """Buckets taxed as ordinary income on withdrawal."""
        return self.traditional + self.employer_match

    @property
    def roth(self) -> float:
        """Buckets withdrawn tax-free."""
        return self.roth_401k + self.roth_ira

    @property
    def total(self) -> float:
        return self.traditional + self.roth_401k + self.employer_match + self.roth_ira + self.brokerage


class ScenarioResult(BaseModel):
    """Snapshot of one scenario (with or without 401(k) contributions)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["with_contribution", "without_contribution"]
    gross_salary: float
    taxable_income: float
    taxes: TaxBreakdown
    take_home: float = Field(..., description="Annual take-home pay")
    pay_frequency: PayFrequency
    period_take_home: float = Field(..., description="Take-home per paycheck")
    contributions: BucketAmounts
    future_values: BucketAmounts
    total_future_value: float


class ContributionLimitStatus(BaseModel):
    """How the requested employee contribution compares to the annual limit."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    requested: float
    allowed: float
    limit: float
    capped: bool
    percent_of_limit: float = Field(..., description="Allowed contribution as % of the limit (0-100)")


class WithdrawalOutcome(BaseModel):
    """Taxes and net proceeds of one withdrawal strategy."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross: float = Field(..., description="Amount withdrawn")
    ordinary_income_tax: float
    capital_gains_tax: float
    taxes: float
    net: float
    effective_rate: float = Field(..., description="taxes / gross, as a percent")

    @classmethod
    def zero(cls) -> "WithdrawalOutcome":
        return cls(gross=0, ordinary_income_tax=0, capital_gains_tax=0, taxes=0, net=0, effective_rate=0)


class WithdrawalPlan(BaseModel):
    """Lump-sum and level withdrawal outcomes for one set of balances."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    lump_sum: WithdrawalOutcome
    annual: WithdrawalOutcome
    monthly: WithdrawalOutcome
    horizon_years: int


class ScenarioComparison(BaseModel):
    """Everything a presentation layer needs for one set of inputs."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: int
    inputs: ScenarioInputs
    retirement: RetirementAssumptions
    with_contribution: ScenarioResult
    without_contribution: ScenarioResult
    with_contribution_withdrawal: WithdrawalPlan
    without_contribution_withdrawal: WithdrawalPlan
    limit_status: ContributionLimitStatus
    tax_savings: float = Field(..., description="Annual tax saved by contributing")
    take_home_difference: float = Field(..., description="Take-home given up by contributing (without - with)")
    wealth_difference: float = Field(..., description="Future value gained by contributing (with - without)")
    roi_percent: float = Field(..., description="Wealth difference over total employee contributions, as a percent")


class AllocationCandidate(BaseModel):
    """One Roth/traditional split evaluated by the optimizer."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    roth_401k: float
    traditional: float
    total_future_value: float
    net_worth: float = Field(..., description="Lump-sum net at withdrawal")


class AllocationResult(BaseModel):
    """Best split found by the allocation grid search."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    budget: float = Field(..., description="Employee 401(k) contribution being split")
    roth_cap: float
    step: float
    best: AllocationCandidate
    candidates: List[AllocationCandidate]
