from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from treasury_core.domain.models import (
    DEFAULT_RATE_TABLE,
    Allocation,
    InstrumentMixEntry,
    RateTable,
    SimulationInput,
    SimulationResult,
    UserProfile,
)
from treasury_core.io import config as config_io
from treasury_core.io import export as export_io
from treasury_core.io.store import ProfileStore
from treasury_core.services import catalog as catalog_service
from treasury_core.services import pipeline, portfolio, projector, simulator

app = typer.Typer(help="Deterministic DCA projections for savings and investment strategies.")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine details to stderr")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _save_json(path: Path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _emit(payload, out: Optional[Path], label: str):
    if out:
        _save_json(out, payload)
        typer.echo(f"{label} written to {out}")
    else:
        typer.echo(json.dumps(payload, indent=2))


def _rates(path: Optional[Path]) -> RateTable:
    return config_io.load_rate_table(path) if path else DEFAULT_RATE_TABLE


def _catalog(path: Optional[Path]) -> catalog_service.InstrumentCatalog:
    return config_io.load_catalog(path) if path else catalog_service.DEFAULT_CATALOG


def _parse_mix(raw: List[str]) -> List[InstrumentMixEntry]:
    """Accepts entries like "fintual=60"."""
    entries = []
    for item in raw:
        instrument_id, sep, pct = item.partition("=")
        if not sep:
            raise typer.BadParameter(f"Mix entry must look like id=percentage, got {item!r}")
        try:
            percentage = float(pct)
        except ValueError as exc:
            raise typer.BadParameter(f"Invalid percentage in {item!r}") from exc
        entries.append(InstrumentMixEntry(instrument_id=instrument_id.strip(), percentage=percentage))
    return entries


def _finish_simulation(result: SimulationResult, out: Optional[Path], csv: Optional[Path], label: str):
    if csv:
        export_io.write_csv(export_io.trajectory_frame(result), csv)
    _emit(result.to_dict(), out, label)


@app.command()
def simulate(
    capital: float = typer.Option(..., help="Initial capital"),
    contribution: float = typer.Option(0.0, help="Monthly contribution"),
    months: int = typer.Option(12, min=0, help="Horizon in months"),
    rate: float = typer.Option(..., help="Annual rate, e.g. 0.08 = 8%"),
    out: Optional[Path] = typer.Option(None, help="Output path for result JSON"),
    csv: Optional[Path] = typer.Option(None, help="Output path for month-by-month CSV"),
):
    """Run one compounding simulation at a fixed annual rate."""
    result = simulator.simulate(
        SimulationInput(
            initial_capital=capital,
            monthly_contribution=contribution,
            horizon_months=months,
            annual_rate=rate,
        )
    )
    _finish_simulation(result, out, csv, "Simulation")


@app.command("portfolio")
def portfolio_cmd(
    profile: Path = typer.Option(..., help="Profile JSON"),
    allocation: Optional[Path] = typer.Option(None, help="Allocation JSON (suggested from horizon if omitted)"),
    rates: Optional[Path] = typer.Option(None, help="Rate table JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for result JSON"),
    csv: Optional[Path] = typer.Option(None, help="Output path for month-by-month CSV"),
):
    """Simulate a profile's whole portfolio at its blended rate."""
    prof = config_io.load_profile(profile)
    alloc = config_io.load_allocation(allocation) if allocation else portfolio.suggest_allocation(prof)
    result = simulator.simulate_portfolio(prof, alloc, _rates(rates))
    _finish_simulation(result, out, csv, "Portfolio simulation")


@app.command()
def suggest(months: int = typer.Option(..., min=0, help="Horizon in months")):
    """Suggest a bonds/dividends/stocks split for a horizon."""
    prof = UserProfile(surplus=0.0, reserve=0.0, monthly_contribution=0.0, horizon_months=months)
    typer.echo(json.dumps(dataclasses.asdict(portfolio.suggest_allocation(prof)), indent=2))


@app.command()
def rate(
    bonds: float = typer.Option(..., help="Bonds weight"),
    dividends: float = typer.Option(..., help="Dividends weight"),
    stocks: float = typer.Option(..., help="Stocks weight"),
    rates: Optional[Path] = typer.Option(None, help="Rate table JSON"),
):
    """Blended annual rate of an allocation."""
    value = portfolio.blended_rate(Allocation(bonds=bonds, dividends=dividends, stocks=stocks), _rates(rates))
    typer.echo(json.dumps({"annual_rate": value}))


@app.command()
def instruments(catalog: Optional[Path] = typer.Option(None, help="Instrument catalog JSON")):
    """List the instrument catalog."""
    table = Table(title="Instruments")
    for col in ("id", "name", "rate", "risk", "min months", "cap USD"):
        table.add_column(col)
    for item in _catalog(catalog):
        table.add_row(
            item.id,
            item.name,
            f"{item.annual_rate*100:.1f}%",
            item.risk,
            str(item.min_horizon_months),
            f"{item.cap_usd:,.0f}" if item.cap_usd is not None else "-",
        )
    console.print(table)


@app.command()
def milestones(step: int = typer.Option(6, help="Step in months: 3, 6 or 12")):
    """Milestone months over the 3..36 range."""
    try:
        months = catalog_service.milestone_months(step)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(json.dumps(months))


@app.command()
def project(
    capital: float = typer.Option(..., help="Capital to split across the mix"),
    contribution: float = typer.Option(0.0, help="Monthly contribution to split across the mix"),
    mix: List[str] = typer.Option(..., "--mix", help="Mix entry id=percentage; repeat per instrument"),
    milestone: Optional[List[int]] = typer.Option(None, "--milestone", help="Milestone month; repeatable"),
    step: int = typer.Option(6, help="Milestone step when --milestone is not given"),
    catalog: Optional[Path] = typer.Option(None, help="Instrument catalog JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for projection JSON"),
    csv: Optional[Path] = typer.Option(None, help="Output path for milestone CSV"),
):
    """Project each instrument of a mix at the chosen milestone months."""
    try:
        points = milestone or catalog_service.milestone_months(step)
        series = projector.project_mix(capital, contribution, _parse_mix(mix), points, _catalog(catalog))
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    axis = projector.projection_milestones(points)
    if csv:
        export_io.write_csv(export_io.projection_frame(series, axis), csv)
    payload = {"milestones": axis, "series": [dataclasses.asdict(s) for s in series]}
    _emit(payload, out, "Projection")


@app.command()
def compare(
    profile: Path = typer.Option(..., help="Profile JSON"),
    allocation: Path = typer.Option(..., help="Candidate allocation JSON"),
    rates: Optional[Path] = typer.Option(None, help="Rate table JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for comparison JSON"),
):
    """Compare a candidate allocation against the suggested one."""
    prof = config_io.load_profile(profile)
    baseline = portfolio.suggest_allocation(prof)
    candidate = config_io.load_allocation(allocation)
    result = pipeline.compare_allocations(prof, baseline, candidate, _rates(rates))
    payload = {
        "baseline": {"allocation": dataclasses.asdict(baseline), "final_value": result.baseline.final_value},
        "candidate": {"allocation": dataclasses.asdict(candidate), "final_value": result.candidate.final_value},
        "delta": result.delta,
    }
    _emit(payload, out, "Comparison")


@app.command("profile-save")
def profile_save(
    user: str = typer.Option(..., help="User id"),
    profile: Path = typer.Option(..., help="Profile JSON"),
    allocation: Optional[Path] = typer.Option(None, help="Allocation JSON"),
    record: bool = typer.Option(False, help="Also append this profile/allocation to the simulation history"),
    store: Optional[Path] = typer.Option(None, help="Store directory"),
):
    """Persist a profile (and optionally an allocation) for a user."""
    db = ProfileStore(store)
    prof = config_io.load_profile(profile)
    db.save_profile(user, prof)
    alloc = config_io.load_allocation(allocation) if allocation else None
    if alloc is not None:
        db.save_allocation(user, alloc)
    if record:
        db.save_simulation(user, prof, alloc or portfolio.suggest_allocation(prof))
    typer.echo(f"Stored profile for {user} in {db.root}")


@app.command("profile-show")
def profile_show(
    user: str = typer.Option(..., help="User id"),
    store: Optional[Path] = typer.Option(None, help="Store directory"),
):
    """Show a stored profile and allocation."""
    db = ProfileStore(store)
    prof = db.load_profile(user)
    if prof is None:
        typer.echo(f"No profile found for {user}. Run: treasury profile-save --user {user} --profile <file>")
        raise typer.Exit(code=1)
    alloc = db.load_allocation(user)
    payload = {
        "profile": dataclasses.asdict(prof),
        "allocation": dataclasses.asdict(alloc) if alloc else None,
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def history(
    user: str = typer.Option(..., help="User id"),
    store: Optional[Path] = typer.Option(None, help="Store directory"),
):
    """List a user's recorded simulations, newest first."""
    records = ProfileStore(store).load_simulations(user)
    if not records:
        typer.echo("No simulations recorded.")
        return
    table = Table(title=f"Simulations for {user}")
    for col in ("created", "capital", "monthly", "months", "rate"):
        table.add_column(col)
    for r in records:
        table.add_row(
            r.created_at,
            f"{r.profile.surplus:,.2f}",
            f"{r.profile.monthly_contribution:,.2f}",
            str(r.profile.horizon_months),
            f"{portfolio.blended_rate(r.allocation)*100:.2f}%",
        )
    console.print(table)


if __name__ == "__main__":
    app()
