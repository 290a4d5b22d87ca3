"""Rich renderers for scenario comparisons, solver and optimizer results.

Transforms SDK result models into formatted Rich tables.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from retirecalc.sdk import (
    AllocationResult,
    ScenarioComparison,
    TaxRules,
    WithdrawalPlan,
)


def render_comparison(console: Console, data: ScenarioComparison) -> None:
    """Render a full scenario comparison.

    Args:
        console: Rich Console instance
        data: SDK output from compare_scenarios()
    """
    if data.limit_status.capped:
        console.print(Panel(
            f"[yellow]Requested {_fmt(data.limit_status.requested)} exceeds the "
            f"{_fmt(data.limit_status.limit)} employee limit; contribution capped.[/yellow]",
            title="Note",
            border_style="yellow",
        ))

    _render_scenarios(console, data)
    _render_benefits(console, data)
    _render_withdrawals(console, data.with_contribution_withdrawal, "Withdrawal: With 401(k)")
    _render_withdrawals(console, data.without_contribution_withdrawal, "Withdrawal: Brokerage Only")


def _render_scenarios(console: Console, data: ScenarioComparison) -> None:
    """Render side-by-side scenario table."""
    without = data.without_contribution
    with_401k = data.with_contribution
    inputs = data.inputs

    table = Table(
        title=f"Scenario Comparison ({data.tax_year} tax year, {inputs.years} years at {inputs.annual_return_percent:g}%)",
        box=box.ROUNDED,
    )
    table.add_column("", style="bold", min_width=25)
    table.add_column("Without 401(k)", justify="right", min_width=14)
    table.add_column("With 401(k)", justify="right", min_width=14)

    table.add_row("Gross Salary", _fmt(without.gross_salary), _fmt(with_401k.gross_salary))
    table.add_row("Taxable Income", _fmt(without.taxable_income), _fmt(with_401k.taxable_income), style="dim")
    table.add_row("", "", "")

    table.add_row("[bold]TAXES[/bold]", "", "")
    table.add_row("  Federal", _fmt(without.taxes.federal), _fmt(with_401k.taxes.federal))
    table.add_row("  State", _fmt(without.taxes.state), _fmt(with_401k.taxes.state))
    table.add_row("  FICA", _fmt(without.taxes.fica), _fmt(with_401k.taxes.fica))
    table.add_row("  [dim]Total Taxes[/dim]", f"[dim]{_fmt(without.taxes.total)}[/dim]", f"[dim]{_fmt(with_401k.taxes.total)}[/dim]")
    table.add_row("", "", "")

    table.add_row("[bold]CONTRIBUTIONS[/bold]", "", "")
    for label, key in _BUCKETS:
        table.add_row(f"  {label}", _fmt(getattr(without.contributions, key)), _fmt(getattr(with_401k.contributions, key)))
    table.add_row("", "", "")

    table.add_row("[bold green]TAKE-HOME[/bold green]", _fmt(without.take_home), _fmt(with_401k.take_home))
    table.add_row(
        f"  Per Paycheck ({inputs.pay_frequency})",
        _fmt(without.period_take_home),
        _fmt(with_401k.period_take_home),
    )
    table.add_row("", "", "")

    table.add_row("[bold]FUTURE VALUE[/bold]", "", "")
    for label, key in _BUCKETS:
        table.add_row(f"  {label}", _fmt(getattr(without.future_values, key)), _fmt(getattr(with_401k.future_values, key)))
    table.add_row(
        "[bold green]TOTAL[/bold green]",
        f"[bold green]{_fmt(without.total_future_value)}[/bold green]",
        f"[bold green]{_fmt(with_401k.total_future_value)}[/bold green]",
    )

    console.print(table)


def _render_benefits(console: Console, data: ScenarioComparison) -> None:
    """Render the 401(k) benefit summary."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")

    table.add_row("Annual tax savings", _fmt(data.tax_savings))
    table.add_row("Take-home given up", _fmt(data.take_home_difference))
    table.add_row("Wealth difference", _fmt(data.wealth_difference))
    table.add_row("Return on contributions", f"{data.roi_percent:.1f}%")
    table.add_row(
        "Employee limit used",
        f"{_fmt(data.limit_status.allowed)} of {_fmt(data.limit_status.limit)} ({data.limit_status.percent_of_limit:.0f}%)",
    )

    console.print(Panel(table, title="401(k) Benefit", border_style="dim"))


def _render_withdrawals(console: Console, plan: WithdrawalPlan, title: str) -> None:
    """Render lump-sum / annual / monthly withdrawal outcomes."""
    table = Table(title=f"{title} ({plan.horizon_years}-year drawdown)", box=box.ROUNDED)
    table.add_column("Strategy", style="cyan")
    table.add_column("Withdrawal", justify="right")
    table.add_column("Taxes", justify="right")
    table.add_column("Net", justify="right", style="yellow")
    table.add_column("Rate", justify="right")

    for label, outcome in (("Lump sum", plan.lump_sum), ("Annual", plan.annual), ("Monthly", plan.monthly)):
        table.add_row(
            label,
            _fmt(outcome.gross),
            _fmt(outcome.taxes),
            _fmt(outcome.net),
            f"{outcome.effective_rate:.1f}%",
        )

    console.print(table)


def render_solution(console: Console, data: dict) -> None:
    """Render solver output.

    Args:
        console: Rich Console instance
        data: Dict built by the solve command
    """
    if not data["reachable"]:
        console.print(Panel(
            f"[red]Target of {_fmt(data['target_period_take_home'])} per paycheck is not reachable "
            f"even with no 401(k) contribution (max {_fmt(data['max_period_take_home'])}).[/red]",
            title="Unreachable",
            border_style="red",
        ))
        return

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")
    table.add_row("Target per paycheck", _fmt(data["target_period_take_home"]))
    table.add_row("Contribution", f"[bold green]{data['contribution_percent']:.1f}%[/bold green]")
    table.add_row("Annual contribution", _fmt(data["annual_contribution"]))
    table.add_row("Take-home per paycheck", _fmt(data["period_take_home"]))

    console.print(Panel(table, title="Max Contribution for Target", border_style="green"))


def render_allocation(console: Console, result: AllocationResult) -> None:
    """Render optimizer candidates with the best one highlighted."""
    table = Table(
        title=f"Roth / Traditional Split of {_fmt(result.budget)} (step {_fmt(result.step)})",
        box=box.ROUNDED,
    )
    table.add_column("Roth 401(k)", justify="right")
    table.add_column("Traditional", justify="right")
    table.add_column("Future Value", justify="right")
    table.add_column("Lump-Sum Net", justify="right", style="yellow")

    for candidate in result.candidates:
        style = "bold green" if candidate == result.best else None
        table.add_row(
            _fmt(candidate.roth_401k),
            _fmt(candidate.traditional),
            _fmt(candidate.total_future_value),
            _fmt(candidate.net_worth),
            style=style,
        )

    console.print(table)
    console.print(
        f"[bold]Best:[/bold] {_fmt(result.best.roth_401k)} Roth / "
        f"{_fmt(result.best.traditional)} traditional -> {_fmt(result.best.net_worth)} net"
    )


def render_tax_rules(console: Console, rules: TaxRules) -> None:
    """Render bracket tables, FICA and limits for a tax year."""
    for table_rules in (rules.federal, rules.state):
        table = Table(title=f"{table_rules.name.title()} Brackets ({rules.year})", box=box.ROUNDED)
        table.add_column("Over", justify="right")
        table.add_column("Up To", justify="right")
        table.add_column("Rate", justify="right")
        for bracket in table_rules.brackets:
            table.add_row(
                _fmt(bracket.lower),
                _fmt(bracket.upper) if bracket.upper is not None else "-",
                f"{bracket.rate * 100:.2f}%",
            )
        console.print(table)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")
    table.add_row("Social Security", f"{rules.fica.social_security_rate * 100:.2f}% up to {_fmt(rules.fica.social_security_wage_base)}")
    table.add_row("Medicare", f"{rules.fica.medicare_rate * 100:.2f}%")
    table.add_row("401(k) employee limit", _fmt(rules.limits.employee_annual_max))
    table.add_row("401(k) total limit", _fmt(rules.limits.total_annual_max))
    table.add_row("Roth IRA limit", _fmt(rules.limits.roth_ira_annual_max))
    table.add_row("Long-term capital gains", f"{rules.capital_gains.long_term_rate * 100:.0f}%")
    console.print(Panel(table, title="FICA & Limits", border_style="dim"))


_BUCKETS = (
    ("Traditional 401(k)", "traditional"),
    ("Roth 401(k)", "roth_401k"),
    ("Employer Match", "employer_match"),
    ("Roth IRA", "roth_ira"),
    ("Brokerage", "brokerage"),
)


def _fmt(amount: float | None) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return f"${amount:,.2f}"
