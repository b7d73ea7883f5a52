"""Click CLI for docclassify: classify parsed documents against the type catalog."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from docclassify.config.defaults import DEFAULT_LOG_LEVEL
from docclassify.config.hierarchy import build_config, load_config_hierarchy
from docclassify.types import ClassificationResult

console = Console()
error_console = Console(stderr=True)

_AMBIGUITY_STYLES = {
    "none": "green",
    "low": "green",
    "medium": "yellow",
    "high": "red",
    "very-high": "red",
}


def _log_level(verbosity: int, configured: str = DEFAULT_LOG_LEVEL) -> int:
    """Resolve the log level: -v flags win over the configured level name."""
    if verbosity == 1:
        return logging.INFO
    if verbosity >= 2:
        return logging.DEBUG
    level = logging.getLevelName(str(configured).upper())
    return level if isinstance(level, int) else logging.WARNING


def _setup_logging(verbosity: int, configured: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure logging based on verbosity and the configured level."""
    logging.basicConfig(
        level=_log_level(verbosity, configured),
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


@click.group()
@click.version_option(package_name="docclassify")
def cli() -> None:
    """docclassify: multi-signal document type classification."""


@cli.command()
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--types-dir", type=click.Path(exists=True, file_okay=False), help="Directory with custom type YAMLs."
)
@click.option("--rank", is_flag=True, default=False, help="Apply the candidate ranker pass.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON.")
@click.option("--db", type=click.Path(dir_okay=False), default=None, help="SQLite result store.")
@click.option("--confidence-threshold", type=float, default=None, help="Override confidence threshold.")
@click.option("--ambiguity-threshold", type=float, default=None, help="Override ambiguity threshold.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def classify(
    document_path: str,
    types_dir: str | None,
    rank: bool,
    as_json: bool,
    db: str | None,
    confidence_threshold: float | None,
    ambiguity_threshold: float | None,
    verbose: int,
) -> None:
    """Classify a parsed document (JSON or YAML)."""
    from docclassify.catalog.registry import TypeRegistry
    from docclassify.classification.engine import ClassificationEngine
    from docclassify.config.loader import load_document
    from docclassify.errors.exceptions import ClassifierError
    from docclassify.storage.sqlite import SQLiteResultStorage

    raw = load_config_hierarchy(
        confidence_threshold=confidence_threshold,
        ambiguity_threshold=ambiguity_threshold,
        apply_ranking=rank or None,
        db_path=db,
        types_dir=types_dir,
    )
    _setup_logging(verbose, raw.get("log_level", DEFAULT_LOG_LEVEL))

    try:
        config = build_config(raw)
        document = load_document(document_path)
    except (ValueError, OSError, yaml.YAMLError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    user_dirs = [Path(raw["types_dir"])] if raw.get("types_dir") else []
    storage = SQLiteResultStorage(Path(raw["db_path"])) if raw.get("db_path") else None
    engine = ClassificationEngine(
        registry=TypeRegistry(user_dirs=user_dirs),
        config=config,
        storage=storage,
    )

    try:
        result = engine.classify_sync(document)
    except ClassifierError as e:
        error_console.print(f"[red]Classification failed:[/red] {e.message}")
        sys.exit(1)
    finally:
        if storage is not None:
            storage.close()

    if as_json:
        click.echo(result.model_dump_json(indent=2))
        return
    _print_result(result, verbose)


def _print_result(result: ClassificationResult, verbose: int) -> None:
    """Print a classification result as rich tables."""
    from docclassify.classification.result import summarize_result

    summary = summarize_result(result)
    level = result.ambiguity_level.value
    style = _AMBIGUITY_STYLES.get(level, "white")

    table = Table(title="Classification Result", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Document", result.document_id)
    table.add_row("Detected type", result.detected_type_id or "[yellow]undetermined[/yellow]")
    table.add_row("Confidence", f"{result.confidence_score:.2f} ({summary.confidence})")
    table.add_row("Ambiguity", f"[{style}]{level}[/{style}]")
    table.add_row("Status", summary.status.value)
    table.add_row("Recommendation", summary.recommendation)
    console.print(table)

    candidates = Table(title="Candidates", show_header=True)
    candidates.add_column("#")
    candidates.add_column("Type", style="cyan")
    candidates.add_column("Score")
    if result.metadata.ranking_applied:
        candidates.add_column("Ranking")
    if verbose >= 1:
        for name in ("Structure", "Terms", "Compliance", "Metadata", "Ordering"):
            candidates.add_column(name)

    for index, c in enumerate(result.ranked_candidates, start=1):
        row = [str(index), c.type_id, f"{c.composite_score:.3f}"]
        if result.metadata.ranking_applied:
            row.append(f"{c.final_score:.3f}")
        if verbose >= 1:
            row.extend(f"{v:.2f}" for v in c.breakdown.values())
        candidates.add_row(*row)
    console.print(candidates)

    for reason in result.reasons:
        console.print(f"  - {reason}")

    # Per-signal reasons at -vv
    if verbose >= 2 and result.top_candidate is not None:
        console.print()
        console.print(f"[bold]Signal details for {result.top_candidate.type_id}[/bold]")
        for reason in result.top_candidate.breakdown.reasons:
            console.print(f"  {reason}")


@cli.command("types")
@click.option(
    "--types-dir", type=click.Path(exists=True, file_okay=False), help="Directory with custom type YAMLs."
)
def list_types(types_dir: str | None) -> None:
    """List available document types."""
    from docclassify.catalog.registry import TypeRegistry

    registry = TypeRegistry(user_dirs=[Path(types_dir)] if types_dir else None)

    table = Table(title="Document Types", show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Version")
    table.add_column("Sections")
    table.add_column("Source")

    for info in sorted(registry.list_types(), key=lambda t: t.id):
        table.add_row(
            info.id,
            info.name,
            info.category,
            info.version,
            str(info.section_count),
            "builtin" if info.builtin else "user",
        )

    console.print(table)


@cli.command("validate-type")
@click.argument("type_yaml", type=click.Path(exists=True, dir_okay=False))
def validate_type(type_yaml: str) -> None:
    """Validate a document type YAML file."""
    from docclassify.config.loader import load_type_yaml

    try:
        type_def = load_type_yaml(type_yaml)
        console.print(f"[green]Valid document type:[/green] {type_def.id} v{type_def.version}")
        console.print(f"  Category: {type_def.category} ({type_def.complexity.value})")
        console.print(f"  Required sections: {len(type_def.required_sections)}")
        console.print(f"  Optional sections: {len(type_def.optional_sections)}")
        console.print(f"  Compliance rules: {len(type_def.compliance_rules)}")
    except Exception as e:
        error_console.print(f"[red]Invalid document type:[/red] {e}")
        sys.exit(1)


@cli.command()
@click.argument("document_id")
@click.option("--db", type=click.Path(exists=True, dir_okay=False), required=True, help="SQLite result store.")
def history(document_id: str, db: str) -> None:
    """Show stored results for a document, newest first."""
    from docclassify.storage.sqlite import SQLiteResultStorage

    storage = SQLiteResultStorage(Path(db))
    try:
        results = storage.find_by_document_id(document_id)
    finally:
        storage.close()

    if not results:
        console.print(f"[yellow]No stored results for {document_id}.[/yellow]")
        return

    table = Table(title=f"History for {document_id}", show_header=True)
    table.add_column("Completed")
    table.add_column("Result ID", style="cyan")
    table.add_column("Detected type")
    table.add_column("Confidence")
    table.add_column("Ambiguity")

    for r in results:
        table.add_row(
            r.timestamps.completed.strftime("%Y-%m-%d %H:%M:%S"),
            r.id,
            r.detected_type_id or "-",
            f"{r.confidence_score:.2f}",
            r.ambiguity_level.value,
        )

    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    cli()
