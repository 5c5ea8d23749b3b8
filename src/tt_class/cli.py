"""CLI interface for tt-class."""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tt_class import __version__
from tt_class.catalog import NOT_FOUND, Catalog, display_label
from tt_class.config import get_catalog
from tt_class.database.engine import get_engine, get_session
from tt_class.exceptions import IntegrityError, ValidationError
from tt_class.export.csv_exporter import export_to_csv
from tt_class.export.json_exporter import export_to_json
from tt_class.models.pydantic_models import (
    TIRES_CATEGORY,
    ClassificationResult,
    SavedConfigurationRead,
    Selection,
    SubmissionRequest,
)
from tt_class.scoring.scorer import special_indicator_explanation
from tt_class.services.classification_service import ClassificationService
from tt_class.services.configuration_service import (
    ConfigurationNotFoundError,
    ConfigurationService,
)
from tt_class.services.submission_service import SubmissionService

app = typer.Typer(
    name="tt-class",
    help="Time-trial vehicle classification calculator",
    add_completion=False,
)
console = Console()

# Ladder colours for class badges
CLASS_STYLES = {
    "TTS": "grey50",
    "TTE": "blue",
    "TTD": "green",
    "TTC": "yellow",
    "TTB": "dark_orange",
    "TTA": "red",
    "TTX": "magenta",
}


def output_json(data: Any) -> None:
    """Output JSON to stdout (for programmatic consumption)."""
    print(json.dumps(data, indent=2, ensure_ascii=False))


def class_badge(class_code: str) -> str:
    """Return rich markup for a class code."""
    style = CLASS_STYLES.get(class_code, "white")
    return f"[bold {style}]{class_code}[/bold {style}]"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"tt-class version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Time-trial vehicle classification calculator."""
    pass


# ========== CATALOG ==========


@app.command()
def makes(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """List vehicle makes."""
    catalog = get_catalog()
    if json_output:
        output_json({"makes": catalog.list_makes()})
        return
    for make in catalog.list_makes():
        console.print(make)


@app.command()
def models(
    make: str = typer.Argument(..., help="Vehicle make."),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """List models for a make with their base classes."""
    catalog = get_catalog()
    names = catalog.list_models(make)

    if json_output:
        output_json({
            "make": make,
            "models": [
                {"model": name, "base_class": catalog.lookup_base_class(make, name)}
                for name in names
            ],
        })
        return

    if not names:
        console.print(f"[yellow]No models found for make '{make}'.[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"{make} models")
    table.add_column("Model", style="white")
    table.add_column("Base Class", justify="center")
    for name in names:
        table.add_row(name, str(catalog.lookup_base_class(make, name)))
    console.print(table)


@app.command()
def mods(
    category: str | None = typer.Option(
        None,
        "--category",
        "-c",
        help="Only show this category.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """List modification items and their points."""
    catalog = get_catalog()
    categories = [category] if category else catalog.list_categories()

    tables = {}
    for name in categories:
        items = catalog.score_table_for(name)
        if items is NOT_FOUND:
            console.print(f"[red]Unknown category: {name}[/red]")
            raise typer.Exit(1)
        tables[name] = items

    if json_output:
        output_json({"categories": tables})
        return

    for name, items in tables.items():
        title = f"{name.capitalize()}{' (required, pick one)' if name == TIRES_CATEGORY else ''}"
        table = Table(title=title)
        table.add_column("Item", style="white")
        table.add_column("Points", style="cyan", justify="right")
        for item, points in items.items():
            table.add_row(display_label(item), f"{points:+d}" if points else "0")
        console.print(table)


# ========== CLASSIFICATION ==========


def parse_mod_options(catalog: Catalog, raw_mods: list[str]) -> tuple[dict[str, list[str]], list[str]]:
    """Parse ``category=item`` options into a mods mapping.

    Items are resolved against the catalog by label or display label;
    unresolved items are kept as given and reported back as warnings.

    Returns:
        Tuple of (mods mapping, warnings).
    """
    selected: dict[str, list[str]] = {}
    warnings: list[str] = []

    for raw in raw_mods:
        category, sep, text = raw.partition("=")
        category = category.strip().lower()
        if not sep or not category or not text.strip():
            raise typer.BadParameter(f"Expected CATEGORY=ITEM, got '{raw}'", param_hint="--mod")
        if category == TIRES_CATEGORY:
            raise typer.BadParameter("Use --tires to choose tires", param_hint="--mod")

        item = catalog.find_item(category, text)
        if item is NOT_FOUND:
            warnings.append(f"'{text.strip()}' is not a known {category} item and scores 0 points")
            item = text.strip()
        selected.setdefault(category, []).append(item)

    return selected, warnings


def _print_result(result: ClassificationResult) -> None:
    explanation = special_indicator_explanation(result.base_class_raw)
    details = [
        f"[bold]Vehicle:[/bold] {result.make} {result.model}",
        f"[bold]Base Class:[/bold] {result.base_class_raw}",
    ]
    if explanation:
        details.append(f"[bold]Special Indicators:[/bold] {explanation}")
    details += [
        "",
        f"[bold]Base Class Points:[/bold] {result.base_bonus_points}",
        f"[bold]Modification Points:[/bold] {result.modification_points}",
        f"[bold]Total Points:[/bold] {result.total_points}",
        f"[bold]Promotion:[/bold] {result.tier} class(es)",
        "",
        f"[bold]Final Class:[/bold] {class_badge(result.final_class)}",
    ]
    console.print(Panel("\n".join(details), title="[bold blue]Classification[/bold blue]", expand=False))


@app.command(name="classify")
def classify_vehicle(
    make: str = typer.Argument(..., help="Vehicle make."),
    model: str = typer.Argument(..., help="Vehicle model."),
    tires: str | None = typer.Option(
        None,
        "--tires",
        "-t",
        help="Tire item (required).",
    ),
    mod: list[str] | None = typer.Option(
        None,
        "--mod",
        "-m",
        help="Modification as CATEGORY=ITEM (can specify multiple).",
    ),
    save: bool = typer.Option(False, "--save", "-s", help="Save the configuration."),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """Calculate the final class for a vehicle and its modifications."""
    catalog = get_catalog()
    service = ClassificationService(catalog)

    selected, warnings = parse_mod_options(catalog, mod or [])
    if tires:
        found = catalog.find_item(TIRES_CATEGORY, tires)
        if found is NOT_FOUND:
            warnings.append(f"'{tires}' is not a known tires item and scores 0 points")
        else:
            tires = found
    selection = Selection(tires=tires, mods=selected)

    try:
        result = service.evaluate(make, model, selection)
    except (ValidationError, IntegrityError) as e:
        if json_output:
            output_json({"status": "error", "error_type": type(e).__name__, "error": str(e)})
        else:
            console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    saved: SavedConfigurationRead | None = None
    if save:
        get_engine()
        with get_session() as session:
            saved = ConfigurationService(session).save(result, selection)

    if json_output:
        data: dict[str, Any] = {"status": "success", "result": result.model_dump()}
        if warnings:
            data["warnings"] = warnings
        if saved:
            data["saved_id"] = saved.id
        output_json(data)
        return

    for warning in warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")
    _print_result(result)
    if saved:
        console.print(f"[green]Saved as configuration #{saved.id}[/green]")


# ========== SAVED CONFIGURATIONS ==========


@app.command()
def saved(
    final_class: str | None = typer.Option(
        None,
        "--class",
        "-c",
        help="Only show configurations with this final class.",
    ),
    limit: int = typer.Option(20, "--limit", "-l", help="Maximum number to show."),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """List saved configurations."""
    get_engine()

    with get_session() as session:
        configs, total = ConfigurationService(session).list_saved(
            final_class=final_class, limit=limit
        )

    if json_output:
        output_json({
            "configurations": [c.model_dump(mode="json") for c in configs],
            "count": len(configs),
            "total": total,
        })
        return

    if not configs:
        console.print("[yellow]No saved configurations yet.[/yellow]")
        return

    table = Table(title=f"Saved Configurations ({len(configs)} shown)")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Vehicle", style="white", max_width=40)
    table.add_column("Base", justify="center")
    table.add_column("Points", style="green", justify="right")
    table.add_column("Final", justify="center")
    table.add_column("Saved", style="dim")

    for config in configs:
        table.add_row(
            str(config.id),
            f"{config.make} {config.model}",
            config.base_class,
            str(config.total_points),
            class_badge(config.final_class),
            config.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)

    if total > limit:
        console.print(f"[dim]Showing {limit} of {total} saved configurations[/dim]")


def _load_saved(config_id: int, json_output: bool) -> SavedConfigurationRead:
    get_engine()
    with get_session() as session:
        try:
            return ConfigurationService(session).get(config_id)
        except ConfigurationNotFoundError as e:
            if json_output:
                output_json({"error": f"Configuration #{config_id} not found"})
            else:
                console.print(f"[red]Configuration #{config_id} not found.[/red]")
            raise typer.Exit(1) from e


@app.command()
def show(
    config_id: int = typer.Argument(..., help="Configuration ID to show."),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """Show a saved configuration."""
    config = _load_saved(config_id, json_output)

    if json_output:
        output_json(config.model_dump(mode="json"))
        return

    details = [
        f"[bold]Vehicle:[/bold] {config.make} {config.model}",
        f"[bold]Base Class:[/bold] {config.base_class}",
        f"[bold]Points:[/bold] {config.total_points} "
        f"({config.base_class_points} from base class + {config.modification_points} from mods)",
        f"[bold]Final Class:[/bold] {class_badge(config.final_class)}",
        f"[bold]Saved:[/bold] {config.created_at.strftime('%Y-%m-%d %H:%M')}",
    ]
    for category, items in config.mods.items():
        if items:
            details.append("")
            details.append(f"[bold]{category.capitalize()}:[/bold]")
            details.extend(f"  - {item}" for item in items)

    console.print(
        Panel("\n".join(details), title=f"[bold blue]Configuration #{config.id}[/bold blue]", expand=False)
    )


@app.command()
def delete(
    config_id: int = typer.Argument(..., help="Configuration ID to delete."),
) -> None:
    """Delete a saved configuration."""
    get_engine()
    with get_session() as session:
        try:
            ConfigurationService(session).delete(config_id)
        except ConfigurationNotFoundError as e:
            console.print(f"[red]Configuration #{config_id} not found.[/red]")
            raise typer.Exit(1) from e
    console.print(f"[green]Deleted configuration #{config_id}[/green]")


@app.command()
def export(
    format: str = typer.Option("csv", "--format", "-f", help="Export format (csv, json)."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file path."),
) -> None:
    """Export saved configurations to a file."""
    if format not in ("csv", "json"):
        console.print(f"[red]Unknown format: {format}. Use 'csv' or 'json'.[/red]")
        raise typer.Exit(1)

    get_engine()
    with get_session() as session:
        configs, _ = ConfigurationService(session).list_saved()

    if not configs:
        console.print("[yellow]No saved configurations to export.[/yellow]")
        return

    if output is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output = Path(f"configurations_{timestamp}.{format}")

    if format == "csv":
        export_to_csv(configs, output)
    else:
        export_to_json(configs, output)

    console.print(f"[green]Exported {len(configs)} configurations to {output}[/green]")


@app.command()
def submit(
    config_id: int = typer.Argument(..., help="Configuration ID to submit."),
    driver_name: str = typer.Option(..., "--name", "-n", help="Driver name."),
    driver_email: str = typer.Option(..., "--email", "-e", help="Driver email address."),
    car_number: str = typer.Option(..., "--car-number", help="Car number."),
    effective_date: str = typer.Option(
        ...,
        "--date",
        "-d",
        help="Effective date (YYYY-MM-DD).",
    ),
    team: str | None = typer.Option(None, "--team", help="Team name."),
    comments: str = typer.Option("", "--comments", help="Additional comments."),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """Prepare a submission for a saved configuration and print it."""
    try:
        request = SubmissionRequest(
            configuration_id=config_id,
            driver_name=driver_name,
            driver_email=driver_email,
            car_number=car_number,
            effective_date=date.fromisoformat(effective_date),
            team=team,
            comments=comments,
        )
    except (ValueError, PydanticValidationError) as e:
        console.print(f"[red]Missing or invalid information: {e}[/red]")
        raise typer.Exit(1) from e

    get_engine()
    with get_session() as session:
        try:
            payload = SubmissionService(session).prepare(request)
        except ConfigurationNotFoundError as e:
            console.print(f"[red]Configuration #{config_id} not found.[/red]")
            raise typer.Exit(1) from e

    if json_output:
        output_json(payload.as_form_data())
        return

    lines = [f"[bold]{key}:[/bold] {value}" for key, value in payload.as_form_data().items()]
    console.print(Panel("\n".join(lines), title="[bold blue]Submission[/bold blue]", expand=False))


if __name__ == "__main__":
    app()
