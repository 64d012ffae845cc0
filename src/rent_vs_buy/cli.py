from __future__ import annotations

import json
import os
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import typer

from .locations import NATIONAL_AVERAGE, STATE_RATES, get_location_data, resolve_state
from .log import setup_logging
from .model import calculate_projections
from .schemas import Household, ProjectionResult, Scenario
from .storage import ResultStore

app = typer.Typer(help="Compare buying a home against renting and investing the difference.")


def _default_store_path() -> Path:
    return Path(
        os.environ.get("RENT_VS_BUY_STORE", "~/.rent_vs_buy/results.json")
    ).expanduser()


def _default_log_level() -> str:
    return os.environ.get("RENT_VS_BUY_LOG_LEVEL", "WARNING")


@app.callback()
def main(
    log_level: str = typer.Option(
        default_factory=_default_log_level,
        help="Logging level (env RENT_VS_BUY_LOG_LEVEL if omitted).",
    ),
) -> None:
    setup_logging(log_level)


@app.command()
def project(
    income: float = typer.Option(125000, help="Annual household income."),
    budget: float = typer.Option(3000, help="Monthly housing budget (starting rent)."),
    down_payment: float = typer.Option(100000, help="Cash available for a down payment."),
    home_price: float = typer.Option(500000, help="Purchase price of the home."),
    investment_return: float = typer.Option(
        0.07, help="Annual return on the renter's investments (e.g., 0.07 for 7%)."
    ),
    years: int = typer.Option(10, help="Years you plan to stay."),
    big_expenses: float = typer.Option(
        0, help="Upcoming large expenses paid out of the down payment."
    ),
    location: str = typer.Option("", help="Zip code or 2-letter state code."),
    total_savings: float = typer.Option(0, help="Savings beyond the down payment."),
    household: Household = typer.Option(Household.SINGLE, help="Household situation."),
    mortgage_rate: Optional[float] = typer.Option(None, help="Override mortgage rate."),
    home_appreciation: Optional[float] = typer.Option(
        None, help="Override annual home appreciation."
    ),
    rent_appreciation: Optional[float] = typer.Option(
        None, help="Override annual rent increase."
    ),
    maintenance: Optional[float] = typer.Option(
        None, help="Override yearly maintenance as a share of home value."
    ),
    closing_costs: Optional[float] = typer.Option(
        None, help="Override closing costs as a share of price."
    ),
    selling_costs: Optional[float] = typer.Option(
        None, help="Override selling costs as a share of home value."
    ),
    show_timeline: bool = typer.Option(
        False, help="If set, dump the yearly projection as JSON."
    ),
    save: bool = typer.Option(False, help="Save the scenario and result."),
    store_path: Path = typer.Option(
        default_factory=_default_store_path,
        help="Saved results file (env RENT_VS_BUY_STORE if omitted).",
    ),
) -> None:
    """
    Run a rent-vs-buy projection for one household.
    """
    try:
        scenario = Scenario(
            annual_income=income,
            monthly_budget=budget,
            down_payment=down_payment,
            home_price=home_price,
            investment_style=investment_return,
            years_to_stay=years,
            big_expenses=big_expenses,
            location=location,
            total_savings=total_savings,
            household=household,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    overrides: Dict[str, Optional[float]] = {
        "mortgage_rate": mortgage_rate,
        "home_appreciation": home_appreciation,
        "rent_appreciation": rent_appreciation,
        "maintenance": maintenance,
        "closing_costs_buy": closing_costs,
        "selling_costs": selling_costs,
    }
    try:
        if save:
            saved_result = ResultStore(store_path).add(scenario, overrides)
            result = saved_result.result
        else:
            result = calculate_projections(scenario, overrides)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    _echo_result(result)
    if save:
        typer.echo(f"Saved as {saved_result.id} ({saved_result.label})")

    if show_timeline:
        payload = [asdict(row) for row in result.projections]
        typer.echo(json.dumps(payload, indent=2))


@app.command()
def lookup(location: str = typer.Argument(..., help="Zip code or state code.")) -> None:
    """
    Show the property tax and insurance rates used for a location.
    """
    state = resolve_state(location)
    rates = get_location_data(location)
    if state is None:
        typer.echo(f"{location!r}: not recognised, using national average")
    else:
        typer.echo(f"{location}: {STATE_RATES[state].name} ({state})")
    typer.echo(f"Property tax rate: {rates.property_tax_rate:.2%}")
    typer.echo(f"Insurance rate: {rates.insurance_rate:.2%}")
    if state is not None:
        typer.echo(
            f"National average: {NATIONAL_AVERAGE.property_tax_rate:.2%} tax, "
            f"{NATIONAL_AVERAGE.insurance_rate:.2%} insurance"
        )


@app.command("saved")
def list_saved(
    store_path: Path = typer.Option(
        default_factory=_default_store_path, help="Saved results file."
    ),
) -> None:
    """
    List saved results, newest first.
    """
    results = ResultStore(store_path).load()
    if not results:
        typer.echo("No saved results.")
        return
    for item in results:
        when = datetime.fromtimestamp(item.saved_at / 1000).strftime("%Y-%m-%d %H:%M")
        typer.echo(f"{item.id}  {when}  {item.label}  -> {item.result.recommendation}")


@app.command()
def show(
    result_id: str = typer.Argument(..., help="Id of a saved result."),
    store_path: Path = typer.Option(
        default_factory=_default_store_path, help="Saved results file."
    ),
) -> None:
    """
    Recompute and print a saved result.
    """
    item = ResultStore(store_path).get(result_id)
    if item is None:
        typer.echo(f"No saved result with id {result_id}", err=True)
        raise typer.Exit(code=1)
    typer.echo(item.label)
    _echo_result(calculate_projections(item.scenario, item.assumption_overrides))


@app.command()
def delete(
    result_id: str = typer.Argument(..., help="Id of a saved result."),
    store_path: Path = typer.Option(
        default_factory=_default_store_path, help="Saved results file."
    ),
) -> None:
    """
    Delete one saved result.
    """
    if not ResultStore(store_path).delete(result_id):
        typer.echo(f"No saved result with id {result_id}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Deleted {result_id}")


@app.command()
def clear(
    store_path: Path = typer.Option(
        default_factory=_default_store_path, help="Saved results file."
    ),
) -> None:
    """
    Delete all saved results.
    """
    ResultStore(store_path).clear()
    typer.echo("Cleared saved results.")


def _echo_result(result: ProjectionResult) -> None:
    typer.echo(f"Monthly mortgage payment (P&I): ${result.monthly_mortgage_payment:,}")
    typer.echo(f"Total interest paid: ${result.total_interest_paid:,}")
    typer.echo(f"Total cost of buying: ${result.total_buy_cost:,}")
    typer.echo(f"Total cost of renting: ${result.total_rent_cost:,}")
    typer.echo("")
    typer.echo(f"Buyer net wealth: ${result.final_buyer_wealth:,}")
    typer.echo(f"Renter net wealth: ${result.final_renter_wealth:,}")
    typer.echo(f"Recommendation: {result.recommendation}")
    if result.breakeven_year:
        typer.echo(f"Break-even year: {result.breakeven_year}")
    typer.echo("")
    typer.echo(result.summary)


if __name__ == "__main__":
    app()
