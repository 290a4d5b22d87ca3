"""Unit tests for withdrawal taxation (lump sum, level annual, monthly)."""

import pytest

from retirecalc.sdk import (
    BucketAmounts,
    RetirementAssumptions,
    WithdrawalOutcome,
    calc_total_taxes,
    level_annual_withdrawal,
    load_tax_rules,
    lump_sum_withdrawal,
    plan_withdrawals,
)
from retirecalc.sdk.withdrawal import monthly_from_annual, ordinary_income_tax


@pytest.fixture
def rules(tmp_path, monkeypatch):
    monkeypatch.setenv("RETIRE_CALC_CONFIG_PATH", str(tmp_path / "config"))
    return load_tax_rules(2024)


class TestOrdinaryIncomeTax:
    """Tests for ordinary_income_tax()."""

    def test_stacks_on_retirement_income(self, rules):
        expected = calc_total_taxes(90000, rules).total - calc_total_taxes(40000, rules).total
        assert ordinary_income_tax(50000, 40000, rules) == pytest.approx(expected)

    def test_no_retirement_income(self, rules):
        assert ordinary_income_tax(50000, 0, rules) == pytest.approx(calc_total_taxes(50000, rules).total)

    def test_zero_amount(self, rules):
        assert ordinary_income_tax(0, 40000, rules) == 0


class TestLumpSum:
    """Tests for lump_sum_withdrawal()."""

    def test_brokerage_at_flat_capital_gains_rate(self, rules):
        outcome = lump_sum_withdrawal(BucketAmounts(brokerage=100000), 0, rules)

        assert outcome.gross == pytest.approx(100000)
        assert outcome.capital_gains_tax == pytest.approx(20000)
        assert outcome.ordinary_income_tax == 0
        assert outcome.net == pytest.approx(80000)
        assert outcome.effective_rate == pytest.approx(20)

    def test_roth_is_tax_free(self, rules):
        outcome = lump_sum_withdrawal(BucketAmounts(roth_401k=60000, roth_ira=40000), 50000, rules)

        assert outcome.taxes == 0
        assert outcome.net == pytest.approx(100000)
        assert outcome.effective_rate == 0

    def test_pretax_is_ordinary_income(self, rules):
        balances = BucketAmounts(traditional=300000, employer_match=100000)
        outcome = lump_sum_withdrawal(balances, 30000, rules)

        assert outcome.ordinary_income_tax == pytest.approx(ordinary_income_tax(400000, 30000, rules))
        assert outcome.capital_gains_tax == 0

    def test_effective_rate_bounded_for_huge_balance(self, rules):
        outcome = lump_sum_withdrawal(BucketAmounts(traditional=5000000), 0, rules)
        assert 0 <= outcome.effective_rate <= 100
        assert outcome.net > 0

    def test_empty_balances(self, rules):
        outcome = lump_sum_withdrawal(BucketAmounts(), 0, rules)
        assert outcome.gross == 0
        assert outcome.effective_rate == 0


class TestLevelAnnual:
    """Tests for level_annual_withdrawal()."""

    def test_brokerage_gain_fraction(self, rules):
        outcome = level_annual_withdrawal(BucketAmounts(brokerage=100000), 0, 0, 10, rules)

        assert outcome.gross == pytest.approx(10000)
        # 70% of each withdrawal is gain, taxed at 20%
        assert outcome.capital_gains_tax == pytest.approx(1400)
        assert outcome.net == pytest.approx(8600)
        assert outcome.effective_rate == pytest.approx(14)

    def test_proportional_bucket_shares(self, rules):
        balances = BucketAmounts(traditional=50000, roth_ira=50000)
        outcome = level_annual_withdrawal(balances, 0, 0, 10, rules)

        # Half of each 10000 withdrawal is pre-tax
        assert outcome.ordinary_income_tax == pytest.approx(ordinary_income_tax(5000, 0, rules))
        assert outcome.capital_gains_tax == 0

    def test_zero_horizon(self, rules):
        outcome = level_annual_withdrawal(BucketAmounts(traditional=100000), 0, 7, 0, rules)
        assert outcome == outcome.zero()

    def test_rate_lower_than_lump_sum(self, rules):
        balances = BucketAmounts(traditional=2000000)
        annual = level_annual_withdrawal(balances, 0, 7, 20, rules)
        lump = lump_sum_withdrawal(balances, 0, rules)
        assert annual.effective_rate < lump.effective_rate


class TestPlanWithdrawals:
    """Tests for plan_withdrawals() and the monthly view."""

    def test_monthly_is_annual_over_twelve(self, rules):
        retirement = RetirementAssumptions(post_retirement_return_percent=0, horizon_years=10)
        plan = plan_withdrawals(BucketAmounts(brokerage=120000), retirement, rules)

        assert plan.annual.gross == pytest.approx(12000)
        assert plan.monthly.gross == pytest.approx(1000)
        assert plan.monthly.net == pytest.approx(plan.annual.net / 12)
        assert plan.monthly.effective_rate == pytest.approx(plan.annual.effective_rate)
        assert plan.horizon_years == 10

    def test_monthly_from_annual_zero(self):
        monthly = monthly_from_annual(WithdrawalOutcome.zero())
        assert monthly.gross == 0
        assert monthly.effective_rate == 0

    def test_defaults(self, rules):
        plan = plan_withdrawals(BucketAmounts(roth_ira=100000))
        assert plan.horizon_years == 20
        assert plan.lump_sum.net == pytest.approx(100000)
