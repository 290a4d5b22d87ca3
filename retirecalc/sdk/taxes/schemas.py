"""Pydantic schemas for tax rules validation.

These schemas validate the tax-rules/*.yaml files and provide typed access
to tax parameters like bracket tables, FICA rates and contribution limits.
A TaxRules instance is the complete configuration for one tax year and is
passed explicitly into every calculation.
"""

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TaxBracket(BaseModel):
    """Single progressive tax bracket."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower: float = Field(..., ge=0, description="Lower bound (inclusive)")
    upper: Optional[float] = Field(default=None, description="Upper bound (None if top bracket)")
    rate: float = Field(..., ge=0, le=1, description="Marginal rate as decimal")

    @model_validator(mode="after")
    def check_bounds(self) -> "TaxBracket":
        if self.upper is not None and self.upper <= self.lower:
            raise ValueError(f"bracket upper bound {self.upper} must exceed lower bound {self.lower}")
        return self

    @property
    def upper_bound(self) -> float:
        """Upper bound with the top bracket mapped to infinity."""
        return math.inf if self.upper is None else self.upper


class TaxBracketTable(BaseModel):
    """Ordered bracket table for one jurisdiction (federal, state)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Jurisdiction name (e.g., 'federal', 'california')")
    brackets: list[TaxBracket] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_coverage(self) -> "TaxBracketTable":
        """Brackets must tile [0, inf) with non-decreasing rates."""
        first = self.brackets[0]
        if first.lower != 0:
            raise ValueError(f"{self.name}: first bracket must start at 0, got {first.lower}")

        for prev, curr in zip(self.brackets, self.brackets[1:]):
            if prev.upper is None:
                raise ValueError(f"{self.name}: only the last bracket may be unbounded")
            if curr.lower != prev.upper:
                raise ValueError(
                    f"{self.name}: bracket starting at {curr.lower} does not continue "
                    f"from previous upper bound {prev.upper}"
                )
            if curr.rate < prev.rate:
                raise ValueError(f"{self.name}: rates must be non-decreasing ({prev.rate} -> {curr.rate})")

        if self.brackets[-1].upper is not None:
            raise ValueError(f"{self.name}: last bracket must be unbounded")
        return self


class FicaRules(BaseModel):
    """Social Security and Medicare (employee portion)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    social_security_rate: float = Field(..., ge=0, le=1)
    social_security_wage_base: float = Field(..., gt=0, description="SS wage base (max taxable)")
    medicare_rate: float = Field(..., ge=0, le=1, description="Medicare rate, no wage cap")


class ContributionLimits(BaseModel):
    """Statutory contribution limits for a tax year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    employee_annual_max: float = Field(..., ge=0, description="Pre-tax + Roth 401(k) employee limit")
    total_annual_max: float = Field(
        ..., ge=0,
        description="Employee + employer limit (informational, not enforced on the combined sum)",
    )
    roth_ira_annual_max: float = Field(..., ge=0)


class CapitalGainsRules(BaseModel):
    """Simplified brokerage withdrawal taxation."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    long_term_rate: float = Field(default=0.20, ge=0, le=1, description="Flat LTCG rate")
    brokerage_gain_fraction: float = Field(
        default=0.70, ge=0, le=1,
        description="Share of a periodic brokerage withdrawal treated as gain",
    )


class TaxRules(BaseModel):
    """Complete tax rules for a year (single filer)."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    year: int
    federal: TaxBracketTable
    state: TaxBracketTable
    fica: FicaRules
    limits: ContributionLimits
    capital_gains: CapitalGainsRules = Field(default_factory=CapitalGainsRules)
