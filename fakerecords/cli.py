"""Command line interface for the record faker."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import rich.traceback
import typer
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from . import generator as generator_module
from .config import ConfigError, GeneratorConfig, load_config
from .fields import FieldDescriptor, UnsupportedFieldTypeError
from .io import write_jsonl

rich.traceback.install(show_locals=False)

app = typer.Typer(help="Generate realistic fake records from field names and types.")
console = Console()


def _resolve_path(path: Path | str) -> Path:
    """Resolve a string or path to an absolute Path."""
    resolved = Path(path).expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"Path does not exist: {resolved}")
    return resolved


def _load_shape(path: Path) -> list[FieldDescriptor]:
    try:
        return generator_module.load_shape(_resolve_path(path))
    except (generator_module.InvalidArgumentError, UnsupportedFieldTypeError) as exc:
        raise typer.BadParameter(str(exc)) from exc


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(name)s %(levelname)s  %(message)s")


def _build_config(
    config_path: Optional[Path],
    seed: Optional[int],
    locale: Optional[str],
    currency_symbol: Optional[str],
) -> GeneratorConfig:
    base = GeneratorConfig()
    if config_path is not None:
        base = load_config(_resolve_path(config_path), base)
    return base.with_overrides(seed=seed, locale=locale, currency_symbol=currency_symbol)


@app.command()
def generate(
    shape_path: Path = typer.Argument(..., help="YAML file mapping field names to types."),
    output_path: Path = typer.Option(
        Path("records.jsonl"),
        "--output",
        "-o",
        help="Target path for generated JSONL records.",
    ),
    count: int = typer.Option(generator_module.DEFAULT_TOTAL, help="Number of records to generate."),
    seed: Optional[int] = typer.Option(None, help="Seed for deterministic generation."),
    locale: Optional[str] = typer.Option(None, help="Locale tag for generated values, e.g. en or fr-FR."),
    currency_symbol: Optional[str] = typer.Option(
        None, "--currency-symbol", help="Symbol prefixed to price values."
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Optional YAML configuration; options above override it."
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level."),
) -> None:
    """Generate fake records for a shape and write them as JSON lines."""

    _configure_logging(log_level)
    shape = _load_shape(shape_path)
    try:
        config = _build_config(config_path, seed, locale, currency_symbol)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        records = generator_module.iter_records(shape, count, config)
    except generator_module.InvalidArgumentError as exc:
        raise typer.BadParameter(str(exc)) from exc

    output_path = output_path.expanduser().resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", encoding="utf-8") as handle:
        if count > 0:
            with Progress(
                SpinnerColumn(),
                BarColumn(bar_width=None),
                TaskProgressColumn(),
                TimeElapsedColumn(),
                TimeRemainingColumn(),
            ) as progress:
                task_id = progress.add_task("Generating", total=count)

                def _progress_cb(done: int) -> None:
                    progress.update(task_id, completed=min(done, count))

                write_jsonl(records, handle, _progress_cb)
        else:
            write_jsonl(records, handle)

    console.print(f"Records written to [green]{output_path}[/green]")


@app.command()
def explain(
    shape_path: Path = typer.Argument(..., help="YAML file mapping field names to types."),
) -> None:
    """Show which rule fills each field of a shape."""

    shape = _load_shape(shape_path)

    table = Table(title=f"Resolution for {shape_path.name}")
    table.add_column("Field")
    table.add_column("Declared type")
    table.add_column("Rule")
    for descriptor, strategy in generator_module.resolve_shape(shape):
        table.add_row(descriptor.name, str(descriptor.declared_type), strategy.rule)
    console.print(table)


def main() -> None:
    """Entrypoint for `python -m fakerecords` usage."""

    app()


if __name__ == "__main__":  # pragma: no cover
    main()
