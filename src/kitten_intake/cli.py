import json
import logging
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path

import typer

from .doses import compute_doses, convert_to_pounds, dose_animals
from .models import TOPICALS
from .roster import load_roster
from .schedule import compute_schedule

app = typer.Typer(help="Kitten intake dosing utilities")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


@app.command()
def doses(
    weight_grams: float = typer.Option(..., min=0.0001, help="Weight in grams"),
    topical: str = typer.Option("revolution", help="Flea topical: revolution, advantage, none"),
) -> None:
    """Compute every medication dose for one weight."""
    topical = topical.lower()
    if topical not in TOPICALS:
        raise typer.BadParameter("topical must be one of: revolution, advantage, none", param_hint="--topical")
    weight_lb = convert_to_pounds(weight_grams)
    result = {
        key: round(value, 3) if isinstance(value, float) else value
        for key, value in compute_doses(weight_lb, topical).items()
    }
    typer.echo(
        json.dumps(
            {"weight_grams": weight_grams, "weight_lb": round(weight_lb, 3), "topical": topical, "doses": result},
            ensure_ascii=False,
        )
    )


@app.command()
def schedule(
    roster: Path = typer.Argument(..., exists=True, dir_okay=False, help="Intake roster JSON"),
    today: str = typer.Option(None, help="Override today's date (YYYY-MM-DD)"),
) -> None:
    """Build foster schedules and dispense totals for a roster."""
    try:
        start = datetime.strptime(today, "%Y-%m-%d").date() if today else date.today()
    except ValueError as exc:
        raise typer.BadParameter("expected YYYY-MM-DD", param_hint="--today") from exc
    try:
        animals = load_roster(roster)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    result = compute_schedule(dose_animals(animals), today=start)
    payload = {
        "schedules": [asdict(s) for s in result.schedules],
        "all_dates": result.all_dates,
        "totals": {key: round(value, 3) for key, value in result.totals.items()},
        "out_of_range": [{"animal_id": a, "medication": m} for a, m in result.out_of_range],
    }
    typer.echo(json.dumps(payload, ensure_ascii=False))


if __name__ == "__main__":
    app()
