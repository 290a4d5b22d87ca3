"""Future value and level withdrawal (annuity) math.

Both directions of the same ordinary-annuity formula:
- future_value compounds monthly contributions forward
- annual_withdrawal sizes the level payment that depletes a balance
"""


def future_value(annual_contribution: float, annual_return_percent: float, years: float) -> float:
    """Project periodic contributions forward with monthly compounding.

    Args:
        annual_contribution: Amount contributed per year, spread evenly by month
        annual_return_percent: Annual return as a percent (7 for 7%)
        years: Contribution horizon

    Returns:
        Balance after years*12 end-of-month contributions
    """
    monthly_contribution = annual_contribution / 12
    monthly_rate = annual_return_percent / 100 / 12
    months = years * 12

    if monthly_rate == 0:
        return monthly_contribution * months

    return monthly_contribution * (((1 + monthly_rate) ** months - 1) / monthly_rate)


def annual_withdrawal(principal: float, annual_return: float, years: int) -> float:
    """Level annual withdrawal that depletes principal over years.

    The remaining balance keeps earning annual_return (a fraction, 0.07 for
    7%). Uses PMT = PV * r(1+r)^n / ((1+r)^n - 1); a zero rate reduces to
    principal / years.

    Raises:
        ValueError: If years is not positive
    """
    if years <= 0:
        raise ValueError(f"years must be positive, got {years}")

    if annual_return == 0:
        return principal / years

    growth = (1 + annual_return) ** years
    return principal * (annual_return * growth) / (growth - 1)


def remaining_balance(principal: float, withdrawal: float, annual_return: float, years: int) -> float:
    """Balance left after growing then withdrawing once per year for years."""
    balance = principal
    for _ in range(years):
        balance = balance * (1 + annual_return) - withdrawal
    return balance
