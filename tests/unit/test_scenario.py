"""Unit tests for with/without contribution scenarios and their comparison.

Reference case: $150,000 salary, 10% contribution, 50% employer match,
7% return over 30 years, 2024 federal + California rules.
"""

import math

import pytest
from pydantic import ValidationError

from retirecalc.sdk import (
    RetirementAssumptions,
    ScenarioInputs,
    annual_target_from_paycheck,
    compare_scenarios,
    contribution_limit_status,
    future_value,
    load_tax_rules,
    period_take_home,
    with_contribution_scenario,
    without_contribution_scenario,
)
from retirecalc.sdk.scenario import get_pay_periods


@pytest.fixture
def rules(tmp_path, monkeypatch):
    monkeypatch.setenv("RETIRE_CALC_CONFIG_PATH", str(tmp_path / "config"))
    return load_tax_rules(2024)


@pytest.fixture
def inputs():
    return ScenarioInputs(
        gross_salary=150000,
        contribution_percent=10,
        employer_match_percent=50,
        annual_return_percent=7,
        years=30,
    )


class TestPayPeriods:
    """Tests for pay frequency helpers."""

    @pytest.mark.parametrize("frequency,periods", [
        ("weekly", 52),
        ("biweekly", 26),
        ("semimonthly", 24),
        ("monthly", 12),
        ("annually", 1),
    ])
    def test_periods(self, frequency, periods):
        assert get_pay_periods(frequency) == periods

    def test_unknown_frequency(self):
        with pytest.raises(ValueError, match="Unknown pay frequency"):
            get_pay_periods("daily")

    def test_period_take_home(self):
        assert period_take_home(52000, "biweekly") == pytest.approx(2000)

    def test_annual_target_from_paycheck(self):
        assert annual_target_from_paycheck(3000, "semimonthly") == pytest.approx(72000)


class TestWithContribution:
    """Tests for with_contribution_scenario()."""

    def test_reference_case(self, inputs, rules):
        result = with_contribution_scenario(inputs, rules)

        assert result.kind == "with_contribution"
        assert result.contributions.traditional == pytest.approx(15000)
        assert result.contributions.employer_match == pytest.approx(7500)
        assert result.contributions.roth_401k == 0
        assert result.contributions.brokerage == 0
        assert result.taxable_income == pytest.approx(135000)
        assert result.taxes.total == pytest.approx(45435.975)
        assert result.take_home == pytest.approx(89564.025)
        assert result.period_take_home == pytest.approx(89564.025 / 26)

    def test_future_values_by_bucket(self, inputs, rules):
        result = with_contribution_scenario(inputs, rules)

        assert result.future_values.traditional == pytest.approx(future_value(15000, 7, 30))
        assert result.future_values.employer_match == pytest.approx(future_value(7500, 7, 30))
        assert result.total_future_value == pytest.approx(future_value(22500, 7, 30))

    def test_contribution_capped_at_employee_limit(self, rules):
        inputs = ScenarioInputs(gross_salary=300000, contribution_percent=10, employer_match_percent=100)
        result = with_contribution_scenario(inputs, rules)

        assert result.contributions.traditional == pytest.approx(23000)
        # Match never exceeds the (capped) employee contribution
        assert result.contributions.employer_match == pytest.approx(23000)
        assert result.taxable_income == pytest.approx(277000)

    def test_roth_carve_out(self, inputs, rules):
        result = with_contribution_scenario(inputs.model_copy(update={"roth_401k_cap": 5000}), rules)

        assert result.contributions.roth_401k == pytest.approx(5000)
        assert result.contributions.traditional == pytest.approx(10000)
        assert result.taxable_income == pytest.approx(140000)
        assert result.take_home == pytest.approx(140000 - result.taxes.total - 5000)

    def test_roth_cap_above_contribution(self, inputs, rules):
        result = with_contribution_scenario(inputs.model_copy(update={"roth_401k_cap": 50000}), rules)

        assert result.contributions.roth_401k == pytest.approx(15000)
        assert result.contributions.traditional == 0
        assert result.taxable_income == pytest.approx(150000)

    def test_roth_ira_capped_at_limit(self, inputs, rules):
        result = with_contribution_scenario(inputs.model_copy(update={"roth_ira_contribution": 10000}), rules)

        assert result.contributions.roth_ira == pytest.approx(7000)
        assert result.take_home == pytest.approx(89564.025 - 7000)

    def test_surplus_above_target_goes_to_brokerage(self, inputs, rules):
        result = with_contribution_scenario(inputs.model_copy(update={"target_take_home": 80000}), rules)

        assert result.contributions.brokerage == pytest.approx(9564.025)
        assert result.take_home == pytest.approx(89564.025)

    def test_target_above_take_home_invests_nothing(self, inputs, rules):
        result = with_contribution_scenario(inputs.model_copy(update={"target_take_home": 120000}), rules)
        assert result.contributions.brokerage == 0


class TestWithoutContribution:
    """Tests for without_contribution_scenario()."""

    def test_reference_case(self, inputs, rules):
        result = without_contribution_scenario(inputs, rules)

        assert result.kind == "without_contribution"
        assert result.taxable_income == pytest.approx(150000)
        assert result.taxes.total == pytest.approx(51578.475)
        assert result.take_home == pytest.approx(98421.525)
        assert result.contributions.traditional == 0
        assert result.contributions.employer_match == 0

    def test_brokerage_is_degrossed_contribution(self, inputs, rules):
        result = without_contribution_scenario(inputs, rules)

        # 15000 * (1 - (29400 + 10703.475) / 150000)
        assert result.contributions.brokerage == pytest.approx(10989.6525)

    def test_target_surplus_replaces_degrossing(self, inputs, rules):
        result = without_contribution_scenario(inputs.model_copy(update={"target_take_home": 80000}), rules)
        assert result.contributions.brokerage == pytest.approx(18421.525)

    def test_roth_ira_kept(self, inputs, rules):
        result = without_contribution_scenario(inputs.model_copy(update={"roth_ira_contribution": 7000}), rules)

        assert result.contributions.roth_ira == pytest.approx(7000)
        assert result.take_home == pytest.approx(98421.525 - 7000)


class TestContributionLimitStatus:
    """Tests for contribution_limit_status()."""

    def test_under_limit(self, rules):
        status = contribution_limit_status(150000, 10, rules.limits)

        assert status.requested == pytest.approx(15000)
        assert status.allowed == pytest.approx(15000)
        assert not status.capped
        assert status.percent_of_limit == pytest.approx(15000 / 23000 * 100)

    def test_over_limit(self, rules):
        status = contribution_limit_status(300000, 10, rules.limits)

        assert status.requested == pytest.approx(30000)
        assert status.allowed == pytest.approx(23000)
        assert status.capped
        assert status.percent_of_limit == pytest.approx(100)


class TestCompareScenarios:
    """Tests for compare_scenarios()."""

    def test_reference_case_metrics(self, inputs, rules):
        result = compare_scenarios(inputs, rules)

        assert result.tax_year == 2024
        assert result.tax_savings == pytest.approx(6142.5)
        assert result.take_home_difference == pytest.approx(8857.5)
        assert result.wealth_difference == pytest.approx(
            result.with_contribution.total_future_value - result.without_contribution.total_future_value
        )
        assert result.wealth_difference > 0
        assert result.roi_percent == pytest.approx(result.wealth_difference / (15000 * 30) * 100)

    def test_includes_withdrawal_plans(self, inputs, rules):
        retirement = RetirementAssumptions(horizon_years=25)
        result = compare_scenarios(inputs, rules, retirement)

        assert result.retirement.horizon_years == 25
        assert result.with_contribution_withdrawal.horizon_years == 25
        assert result.with_contribution_withdrawal.lump_sum.gross == pytest.approx(
            result.with_contribution.total_future_value
        )
        assert result.without_contribution_withdrawal.lump_sum.gross == pytest.approx(
            result.without_contribution.total_future_value
        )

    def test_recomputes_from_scratch(self, inputs, rules):
        first = compare_scenarios(inputs, rules)
        second = compare_scenarios(inputs, rules)
        assert first == second

    def test_all_zero_inputs_are_finite(self, rules):
        result = compare_scenarios(ScenarioInputs(gross_salary=0), rules)

        assert result.with_contribution.take_home == 0
        assert result.without_contribution.take_home == 0
        assert result.roi_percent == 0
        assert result.limit_status.percent_of_limit == 0
        for value in (
            result.tax_savings,
            result.wealth_difference,
            result.with_contribution_withdrawal.annual.effective_rate,
            result.without_contribution_withdrawal.lump_sum.net,
        ):
            assert math.isfinite(value)

    def test_zero_years(self, inputs, rules):
        result = compare_scenarios(inputs.model_copy(update={"years": 0}), rules)

        assert result.with_contribution.total_future_value == 0
        assert result.roi_percent == 0

    def test_loads_default_rules(self, inputs, rules):
        assert compare_scenarios(inputs).tax_year == 2024


class TestScenarioInputsValidation:
    """Tests for ScenarioInputs field validation."""

    def test_rejects_negative_salary(self):
        with pytest.raises(ValidationError):
            ScenarioInputs(gross_salary=-1)

    def test_rejects_contribution_over_100(self):
        with pytest.raises(ValidationError):
            ScenarioInputs(gross_salary=100000, contribution_percent=101)

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            ScenarioInputs(gross_salary=100000, bonus=5000)
