"""
Interactive Rich CLI for the buy / rent-out / keep-renting decision.

Flow:
  1. Banner (tax year + snapshot location)
  2. Load saved inputs, optionally edit them
  3. Income & tax panel
  4. Affordability + scenario comparison table
  5. Loan projection with an optional extra payment
  6. Savings projection (simple and compounding strategies)
  7. Sensitivity tables
  8. Decision timeline + five-year wealth comparison
  9. Optional save of the edited inputs
"""

import logging
import sys
from datetime import date

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt
from rich.table import Table
from rich.text import Text

from property_decision.calculator import compute_loan_projection
from property_decision.data.rates import TAX_YEAR
from property_decision.formatting import format_money, format_months, format_percentage
from property_decision.models import (
    ConsolidatedResult,
    PropertyInputs,
    SavingsProjection,
    SavingsStrategy,
)
from property_decision.savings import compute_savings_projection
from property_decision.scenarios import compute_all, projected_target_date
from property_decision.sensitivity import compute_sensitivity
from property_decision.storage import SnapshotStore
from property_decision.tax import compute_income_breakdown
from property_decision.timeline import build_decision_timeline
from property_decision.wealth import compute_five_year_positions

console = Console()

STATUS_STYLES = {"Good": "green", "Moderate": "yellow", "High": "red"}

# (field, label) pairs offered for editing, in prompt order
EDITABLE_FIELDS = [
    ("house_price", "House price"),
    ("down_payment", "Down payment"),
    ("prime_rate", "Prime rate (%)"),
    ("premium_above_prime", "Premium above prime (%)"),
    ("loan_term_years", "Loan term (years)"),
    ("monthly_income_local", "Monthly income (local)"),
    ("monthly_income_foreign", "Monthly income (foreign currency)"),
    ("exchange_rate", "Exchange rate"),
    ("rental_income", "Expected rental income"),
    ("monthly_rent", "Current rent"),
    ("investment_return_rate", "Investment return (%)"),
    ("personal_allocation", "Personal allocation"),
    ("personal_expenses", "Personal expenses"),
    ("property_levies", "Property levies"),
    ("current_savings", "Current savings"),
]


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


# ── Step 1: Banner ────────────────────────────────────────────────────────────

def show_banner(store: SnapshotStore) -> None:
    title = Text("Property Decision Dashboard", style="bold cyan")
    subtitle = Text(f"Tax tables {TAX_YEAR}  |  Snapshot: {store.path}", style="dim")
    console.print(Panel(f"[bold]{title}[/bold]\n{subtitle}", expand=False, border_style="cyan"))
    console.print()


# ── Step 2: Inputs ────────────────────────────────────────────────────────────

def prompt_inputs(inputs: PropertyInputs) -> PropertyInputs:
    console.print("[bold]Step 1: Inputs[/bold]\n")
    if not Confirm.ask("  Edit the loaded inputs?", default=False):
        return inputs

    while True:
        values = inputs.model_dump()
        for field, label in EDITABLE_FIELDS:
            current = values[field]
            if field == "loan_term_years":
                values[field] = IntPrompt.ask(f"  {label}", default=current)
            elif current is None:
                # Blank answer leaves an optional field unset
                values[field] = FloatPrompt.ask(f"  {label} (blank to skip)", default=None)
            else:
                values[field] = FloatPrompt.ask(f"  {label}", default=float(current))
        try:
            edited = PropertyInputs(**values)
            console.print()
            return edited
        except ValidationError as e:
            for error in e.errors():
                loc = ".".join(str(part) for part in error["loc"]) or "inputs"
                console.print(f"[red]Invalid {loc}: {error['msg']}[/red]")
            console.print("Please re-enter the inputs.")


# ── Step 3: Income & tax ──────────────────────────────────────────────────────

def show_income_panel(inputs: PropertyInputs) -> None:
    console.print("[bold]Step 2: Income & Tax[/bold]\n")
    income = compute_income_breakdown(inputs)
    tax = income.tax
    bracket = tax.applied_bracket

    text = (
        f"  Local income:            {format_money(income.local_income)}\n"
        f"  Foreign income:          {income.foreign_amount:,.0f} x {income.exchange_rate:.2f}"
        f" = {format_money(income.foreign_income)}\n"
        f"  Gross monthly:           {format_money(income.total_gross)}\n\n"
        f"  Annual gross:            {format_money(tax.annual_gross)}\n"
        f"  Bracket:                 {format_money(bracket.threshold)}+ at {bracket.rate:.0f}%\n"
        f"  Tax before rebate:       {format_money(tax.tax_before_rebate)}\n"
        f"  Rebate:                  [green]-{format_money(tax.rebate)}[/green]\n"
        f"  Monthly tax:             [red]{format_money(tax.monthly_tax)}[/red]\n"
        f"  Effective rate:          {format_percentage(tax.effective_rate)}\n"
        f"  ─────────────────────────────────────\n"
        f"  Net monthly income:      [bold]{format_money(income.net_income)}[/bold]\n"
    )
    console.print(Panel(text, title="Income & Tax", border_style="green"))
    console.print()


# ── Step 4: Affordability & scenarios ─────────────────────────────────────────

def show_scenarios(inputs: PropertyInputs, result: ConsolidatedResult) -> None:
    console.print("[bold]Step 3: Affordability & Scenarios[/bold]\n")

    style = STATUS_STYLES[result.affordability_status]
    target_date = projected_target_date(result, date.today())
    metrics = result.metrics
    text = (
        f"  Loan amount:             {format_money(result.loan_amount)}"
        f"  ({format_percentage(metrics.loan_to_value)} LTV)\n"
        f"  Bond payment:            {format_money(result.monthly_bond_payment)}"
        f" at {format_percentage(result.interest_rate)}\n"
        f"  Total housing cost:      {format_money(result.total_housing_cost)}\n"
        f"  Housing / net income:    [{style}]{format_percentage(result.housing_to_income_ratio)}"
        f" ({result.affordability_status})[/{style}]\n\n"
        f"  Rental yield:            {format_percentage(metrics.rental_yield)}"
        f"  (net {format_percentage(metrics.net_rental_yield)})\n"
        f"  Bond coverage by rent:   {format_percentage(metrics.bond_coverage)}\n"
        f"  Foreign income share:    {format_percentage(metrics.foreign_income_dependence)}\n"
        f"  +2% rate impact:         [red]{format_money(metrics.rate_increase_impact)}[/red]/month\n\n"
        f"  Savings target:          {format_money(result.savings_target)}"
        f"  (shortfall {format_money(result.down_payment_shortfall)})\n"
        f"  Monthly savings:         {format_money(result.monthly_savings)}\n"
        f"  Time to target:          {format_months(result.months_to_target)}"
        + (f"  ({target_date.isoformat()})" if target_date else "")
        + "\n"
    )
    console.print(Panel(text, title="Affordability", border_style="blue"))

    table = Table(title="Available Monthly Cash", border_style="blue", show_lines=True)
    table.add_column("Scenario", min_width=22)
    table.add_column("Income", justify="right")
    table.add_column("Costs", justify="right")
    table.add_column("Available", justify="right", style="bold")

    fixed = inputs.personal_expenses + inputs.personal_allocation
    rows = [
        ("Buy & live in", result.monthly_net_income,
         result.total_housing_cost + fixed, result.standard_available),
        ("Buy & rent out", result.monthly_net_income + inputs.rental_income,
         result.total_housing_cost + fixed + result.current_rent, result.rent_out_available),
        ("Keep renting & save", result.monthly_net_income,
         result.current_rent + fixed, result.rent_and_save_available),
    ]
    best = max(rows, key=lambda row: row[3])
    for label, income, costs, available in rows:
        table.add_row(
            label + (" ★" if label == best[0] else ""),
            format_money(income),
            format_money(costs),
            format_money(available),
            style="green" if label == best[0] else ("red" if available < 0 else ""),
        )
    console.print(table)
    console.print()


# ── Step 5: Loan projection ───────────────────────────────────────────────────

def show_loan_projection(inputs: PropertyInputs, result: ConsolidatedResult) -> None:
    console.print("[bold]Step 4: Loan Projection[/bold]\n")
    extra = FloatPrompt.ask(
        "  Extra monthly payment", default=max(round(result.standard_available, -2), 0.0)
    )
    projection = compute_loan_projection(
        result.loan_amount, result.interest_rate, inputs.loan_term_years, max(extra, 0.0)
    )
    original, accelerated = projection.original, projection.accelerated

    table = Table(title="Original vs Accelerated", border_style="magenta")
    table.add_column("")
    table.add_column("Original", justify="right")
    table.add_column("Accelerated", justify="right")
    table.add_row("Term", format_months(original.term_months), format_months(accelerated.term_months))
    table.add_row(
        "Total interest",
        format_money(original.total_interest),
        format_money(accelerated.total_interest),
    )
    table.add_row(
        "Total payments",
        format_money(original.total_payments),
        format_money(accelerated.total_payments),
    )
    console.print(table)
    if accelerated.converged:
        console.print(
            f"  [green]Saves {accelerated.years_saved:.1f} years and "
            f"{format_money(accelerated.interest_saved)} interest.[/green]"
        )
    else:
        console.print("  [yellow]Extra payment too small to shorten the bond.[/yellow]")
    console.print()


# ── Step 6: Savings projection ────────────────────────────────────────────────

def show_savings(inputs: PropertyInputs, result: ConsolidatedResult) -> SavingsProjection:
    console.print("[bold]Step 5: Savings Projection[/bold]\n")
    contribution = max(result.monthly_savings, 0.0)
    simple = compute_savings_projection(
        result.current_savings,
        result.savings_target,
        contribution,
        inputs.investment_return_rate,
        strategy=SavingsStrategy.SIMPLE,
    )
    compounding = compute_savings_projection(
        result.current_savings,
        result.savings_target,
        contribution,
        inputs.investment_return_rate,
        strategy=SavingsStrategy.COMPOUNDING,
    )

    table = Table(title="Milestones (simple strategy)", border_style="cyan")
    table.add_column("Month", justify="right")
    table.add_column("Flat contributions", justify="right")
    table.add_column("With returns", justify="right")
    for milestone in simple.milestones:
        table.add_row(
            str(milestone.month),
            format_money(milestone.standard_amount),
            format_money(milestone.with_returns),
        )
    console.print(table)

    def _reach(months: int, reached: bool) -> str:
        return format_months(months) if reached else f"not within {format_months(months)}"

    console.print(
        f"  Flat contributions:        {_reach(simple.months_to_target.standard, simple.target_reached.standard)}\n"
        f"  With {inputs.investment_return_rate:.1f}% returns:       "
        f"{_reach(simple.months_to_target.with_returns, simple.target_reached.with_returns)}\n"
        f"  Inflation-adjusted ({compounding.inflation_rate:.1f}%): "
        f"{_reach(compounding.months_to_target.with_returns, compounding.target_reached.with_returns)}"
    )
    console.print()
    return simple


# ── Step 7: Sensitivity ───────────────────────────────────────────────────────

def show_sensitivity(inputs: PropertyInputs, result: ConsolidatedResult) -> None:
    console.print("[bold]Step 6: Sensitivity (rent-out scenario)[/bold]\n")
    report = compute_sensitivity(inputs, result)

    rental = Table(title="Rental Income", border_style="yellow")
    rental.add_column("Change", justify="right")
    rental.add_column("Rent", justify="right")
    rental.add_column("Available", justify="right")
    rental.add_column("Time impact", justify="right")
    for row in report.rental_variations:
        rental.add_row(
            f"{row.variation:+d}%",
            format_money(row.income),
            format_money(row.available),
            f"{row.time_impact:.1f} yrs" if row.time_impact else "—",
        )

    vacancy = Table(title="Vacancy", border_style="yellow")
    vacancy.add_column("Months empty", justify="right")
    vacancy.add_column("Lost income", justify="right")
    vacancy.add_column("Monthly impact", justify="right")
    vacancy.add_column("Available", justify="right")
    for row in report.vacancy:
        vacancy.add_row(
            str(row.months),
            format_money(row.lost_income),
            f"-{format_money(row.monthly_impact)}",
            format_money(row.new_available),
        )

    fx = Table(title="Exchange Rate", border_style="yellow")
    fx.add_column("Rate", justify="right")
    fx.add_column("Foreign income", justify="right")
    fx.add_column("Change", justify="right")
    fx.add_column("Available", justify="right")
    for row in report.exchange_rate:
        fx.add_row(
            f"{row.rate:.2f}",
            format_money(row.local_value),
            format_money(row.net_change),
            format_money(row.new_available),
        )

    foreign = Table(title="Foreign Income", border_style="yellow")
    foreign.add_column("Change", justify="right")
    foreign.add_column("Amount", justify="right")
    foreign.add_column("Local value", justify="right")
    foreign.add_column("Available", justify="right")
    for row in report.foreign_income:
        foreign.add_row(
            f"{row.variation:+d}%",
            f"{row.amount:,.0f}",
            format_money(row.local_value),
            format_money(row.new_available),
        )

    for table in (rental, vacancy, fx, foreign):
        console.print(table)
    console.print()


# ── Step 8: Timeline & wealth ─────────────────────────────────────────────────

def show_timeline(
    inputs: PropertyInputs,
    result: ConsolidatedResult,
    projection: SavingsProjection,
) -> None:
    console.print("[bold]Step 7: Decision Timeline[/bold]\n")
    colors = {"milestone": "green", "warning": "red", "opportunity": "blue"}
    for event in build_decision_timeline(inputs, result, projection):
        color = colors[event.kind]
        value = f"  [dim]{format_money(event.value)}[/dim]" if event.value is not None else ""
        console.print(
            f"  [{color}]●[/{color}] Month {event.month:>3}  [bold]{event.title}[/bold]"
            f" — {event.description}{value}"
        )
    console.print()

    table = Table(title="Five-Year Wealth Position", border_style="green")
    table.add_column("Scenario")
    table.add_column("Savings", justify="right")
    table.add_column("Equity", justify="right")
    table.add_column("Appreciation", justify="right")
    table.add_column("Net rental", justify="right")
    table.add_column("Total", justify="right", style="bold")
    labels = {
        "keep_renting": "Keep renting & save",
        "buy_live_in": "Buy & live in",
        "buy_rent_out": "Buy & rent out",
    }
    for position in compute_five_year_positions(inputs, result):
        table.add_row(
            labels[position.scenario],
            format_money(position.savings),
            format_money(position.equity),
            format_money(position.appreciation),
            format_money(position.net_rental_income),
            format_money(position.total_position),
        )
    console.print(table)
    console.print()


# ── Main entry point ──────────────────────────────────────────────────────────

def main() -> None:
    _configure_logging()
    store = SnapshotStore()
    try:
        show_banner(store)

        loaded = store.load_inputs()
        inputs = prompt_inputs(loaded)

        result = compute_all(inputs)
        show_income_panel(inputs)
        show_scenarios(inputs, result)
        show_loan_projection(inputs, result)
        projection = show_savings(inputs, result)
        show_sensitivity(inputs, result)
        show_timeline(inputs, result, projection)

        if inputs != loaded and Confirm.ask("  Save these inputs?", default=True):
            store.save_inputs(inputs)
            console.print(f"  [green]Inputs saved to {store.path}[/green]")

        console.print("\n[bold cyan]Done.[/bold cyan]")

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
