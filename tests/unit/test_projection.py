"""Unit tests for future value and level withdrawal math."""

import pytest

from retirecalc.sdk.projection import annual_withdrawal, future_value, remaining_balance


class TestFutureValue:
    """Tests for future_value()."""

    def test_monthly_compounding(self):
        # 100/month at 1%/month for 12 months
        assert future_value(1200, 12, 1) == pytest.approx(1268.25, abs=0.01)

    def test_zero_rate_is_sum_of_contributions(self):
        assert future_value(12000, 0, 10) == pytest.approx(120000)

    def test_zero_years(self):
        assert future_value(12000, 7, 0) == 0

    def test_zero_contribution(self):
        assert future_value(0, 7, 30) == 0

    def test_linear_in_contribution(self):
        assert future_value(20000, 7, 30) == pytest.approx(2 * future_value(10000, 7, 30))

    def test_grows_with_rate(self):
        assert future_value(10000, 8, 30) > future_value(10000, 7, 30) > future_value(10000, 0, 30)


class TestAnnualWithdrawal:
    """Tests for annual_withdrawal()."""

    def test_zero_rate_splits_evenly(self):
        assert annual_withdrawal(100000, 0, 20) == pytest.approx(5000)

    def test_annuity_payment(self):
        assert annual_withdrawal(100000, 0.05, 10) == pytest.approx(12950.46, abs=0.01)

    def test_depletes_balance(self):
        payment = annual_withdrawal(500000, 0.07, 25)
        assert remaining_balance(500000, payment, 0.07, 25) == pytest.approx(0, abs=1e-6)

    def test_zero_principal(self):
        assert annual_withdrawal(0, 0.07, 20) == 0

    @pytest.mark.parametrize("years", [0, -1])
    def test_non_positive_years_rejected(self, years):
        with pytest.raises(ValueError, match="years must be positive"):
            annual_withdrawal(100000, 0.07, years)


class TestRemainingBalance:
    """Tests for remaining_balance()."""

    def test_no_withdrawal_compounds(self):
        assert remaining_balance(1000, 0, 0.10, 2) == pytest.approx(1210)

    def test_zero_years_unchanged(self):
        assert remaining_balance(1000, 500, 0.10, 0) == 1000
