"""CLI entry point for the school timetable generator."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .exceptions import HistoryNotFoundError, InvalidConfigError, SolverError, TeacherImportError
from .exporters import get_exporter
from .history import DEFAULT_HISTORY_DIR, TimetableHistory
from .importers import TeacherCSVImporter, write_template
from .scheduler import ConfigLoader, GenerationResult, create_scheduler
from .scheduler.constants import DEFAULT_SEED
from .scheduler.excel_generator import generate_timetable_excel
from .validators import validate_generation_input

app = typer.Typer(
    name="school-timetable",
    help="Generate weekly school timetables from a teacher roster and class configurations",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


class Strategy(str, Enum):
    """Generator options."""

    heuristic = "heuristic"
    cpsat = "cpsat"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _print_problems(title: str, problems: list[str]) -> None:
    console.print(f"\n[bold red]{title} ({len(problems)}):[/bold red]")
    for problem in problems:
        console.print(f"  [red]• {problem}[/red]")


def _load_input(input_path: Path) -> ConfigLoader:
    try:
        return ConfigLoader(input_path)
    except InvalidConfigError as e:
        _print_problems("Invalid input", e.problems)
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[bold red]Error:[/bold red] Invalid JSON: {e}")
        raise typer.Exit(1)


@app.command()
def generate(
    input_path: Annotated[
        Path,
        typer.Argument(help="Input JSON file or directory with teachers and classes"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file or directory path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Random seed for tie-breaking"),
    ] = None,
    strategy: Annotated[
        Optional[Strategy],
        typer.Option("--strategy", "-s", help="Generator to use"),
    ] = None,
    save_as: Annotated[
        Optional[str],
        typer.Option("--save-as", help="Save the result to history under this name"),
    ] = None,
    history_dir: Annotated[
        Path,
        typer.Option("--history-dir", help="History directory"),
    ] = DEFAULT_HISTORY_DIR,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate class timetables and teacher schedules."""
    if not input_path.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {input_path}")
        raise typer.Exit(1)

    _configure_logging(verbose)
    loaded = _load_input(input_path)

    if seed is None:
        seed = loaded.settings.seed if loaded.settings.seed is not None else DEFAULT_SEED
    settings = loaded.settings.with_overrides(
        seed=seed,
        strategy=strategy.value if strategy else None,
    )

    console.print(f"\n[bold]Timetable Generation for:[/bold] {input_path.name}")
    console.print(f"  Teachers: {len(loaded.teachers)}")
    console.print(f"  Classes: {len(loaded.class_configs)}")
    console.print(f"  Strategy: {settings.strategy} (seed {settings.seed})")

    scheduler = create_scheduler(settings=settings)
    try:
        with console.status("[bold green]Generating timetables..."):
            result = scheduler.generate(loaded.teachers, loaded.class_configs)
    except InvalidConfigError as e:
        _print_problems("Invalid input", e.problems)
        raise typer.Exit(1)
    except SolverError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _show_summary(result, verbose)

    exporter = get_exporter(format.value)
    if format == OutputFormat.csv:
        output_path = output or Path("output/timetables")
        if output_path.suffix:
            output_path = output_path.parent / output_path.stem
    else:
        suffix = ".xlsx" if format == OutputFormat.excel else ".json"
        output_path = output or Path(f"output/timetables{suffix}")
        if not output_path.suffix:
            output_path = output_path.with_suffix(suffix)

    with console.status(f"[bold green]Exporting to {format.value}..."):
        exporter.export(result, output_path)
    console.print(f"\n[bold green]✓[/bold green] Exported to: {output_path}")

    if save_as:
        entry = TimetableHistory(history_dir).save(
            save_as, result, loaded.teachers, loaded.class_configs
        )
        console.print(f"[bold green]✓[/bold green] Saved to history as '{entry.name}' ({entry.id})")


def _show_summary(result: GenerationResult, verbose: bool) -> None:
    """Show fill rates and diagnostics in tables."""
    stats = result.statistics
    diagnostics = result.diagnostics

    console.print("\n[bold]Generation Results:[/bold]")
    console.print(f"  Filled slots: {stats.filled_slots}/{stats.total_slots} ({stats.fill_rate:.1%})")
    console.print(f"  Substitutions: {len(diagnostics.substitutions)}")
    console.print(f"  Free periods: {len(diagnostics.free_periods)}")
    if stats.solver_time_seconds:
        console.print(f"  Solver time: {stats.solver_time_seconds:.2f}s")

    if stats.by_day:
        console.print("\n[bold]Distribution by day:[/bold]")
        for day in result.days:
            console.print(f"  {day}: {stats.by_day.get(day, 0)}")

    if diagnostics.is_complete:
        console.print("\n[bold green]✓ Every requested period was placed[/bold green]")
        return

    if diagnostics.under_assignments:
        table = Table(title="Under-assigned Subjects")
        table.add_column("Class", style="cyan")
        table.add_column("Subject", style="blue")
        table.add_column("Placed", style="green")
        table.add_column("Requested", style="yellow")
        table.add_column("Short", style="red")
        for item in diagnostics.under_assignments:
            table.add_row(
                item.class_name,
                item.subject,
                str(item.placed),
                str(item.requested),
                str(item.shortfall),
            )
        console.print(table)

    if diagnostics.cap_overruns:
        table = Table(title="Teachers Over Cap")
        table.add_column("Teacher", style="cyan")
        table.add_column("Placed", style="red")
        table.add_column("Cap", style="green")
        for item in diagnostics.cap_overruns:
            table.add_row(item.teacher_name, str(item.placed), str(item.cap))
        console.print(table)

    if diagnostics.skipped_assignments:
        console.print(
            f"\n[bold yellow]Skipped assignments ({len(diagnostics.skipped_assignments)}):[/bold yellow]"
        )
        for item in diagnostics.skipped_assignments[:10]:
            console.print(
                f"  [yellow]- {item.class_name} {item.subject}: unknown teacher '{item.teacher_id}'[/yellow]"
            )
        if len(diagnostics.skipped_assignments) > 10:
            console.print(f"  [yellow]... and {len(diagnostics.skipped_assignments) - 10} more[/yellow]")

    if verbose and diagnostics.substitutions:
        table = Table(title="Substitutions")
        table.add_column("Class", style="cyan")
        table.add_column("Slot", style="blue")
        table.add_column("Subject", style="magenta")
        table.add_column("Designated", style="yellow")
        table.add_column("Substitute", style="green")
        for item in diagnostics.substitutions:
            table.add_row(
                item.class_name,
                f"{item.day} P{item.period + 1}",
                item.subject,
                item.original_teacher_id,
                item.substitute_teacher_id,
            )
        console.print(table)


@app.command()
def validate(
    input_path: Annotated[
        Path,
        typer.Argument(help="Input JSON file or directory with teachers and classes"),
    ],
) -> None:
    """Validate generation input without generating."""
    if not input_path.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {input_path}")
        raise typer.Exit(1)

    loaded = _load_input(input_path)
    problems = validate_generation_input(loaded.teachers, loaded.class_configs)

    console.print(f"\n[bold]Validation Results for:[/bold] {input_path.name}")
    console.print(f"  Teachers: {len(loaded.teachers)}")
    console.print(f"  Classes: {len(loaded.class_configs)}")

    known = {t.id for t in loaded.teachers}
    warnings = []
    for config in loaded.class_configs:
        if config.requested_periods > config.total_periods:
            warnings.append(
                f"{config.name}: {config.requested_periods} periods requested "
                f"but only {config.total_periods} slots per week"
            )
        for assignment in config.subject_assignments:
            if assignment.teacher_id not in known:
                warnings.append(
                    f"{config.name} - {assignment.subject}: unknown teacher '{assignment.teacher_id}'"
                )

    if problems:
        console.print("[bold red]✗ Input has issues[/bold red]")
        _print_problems("Errors", problems)
    else:
        console.print("[bold green]✓ Input is valid[/bold green]")

    if warnings:
        console.print(f"\n[bold yellow]Warnings ({len(warnings)}):[/bold yellow]")
        for warning in warnings:
            console.print(f"  [yellow]• {warning}[/yellow]")

    if problems:
        raise typer.Exit(1)


@app.command("import-teachers")
def import_teachers(
    csv_file: Annotated[
        Path,
        typer.Argument(help="Teacher CSV file (or template destination with --template)"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output teachers JSON file"),
    ] = None,
    template: Annotated[
        bool,
        typer.Option("--template", help="Write an example CSV to CSV_FILE and exit"),
    ] = False,
) -> None:
    """Import a teacher roster from CSV."""
    if template:
        path = write_template(csv_file)
        console.print(f"[bold green]✓[/bold green] Template written to: {path}")
        return

    try:
        with console.status("[bold green]Importing teachers..."):
            result = TeacherCSVImporter().import_file(csv_file)
    except TeacherImportError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[bold]Import Results for:[/bold] {csv_file.name}")
    console.print(f"  Rows: {result.total_rows}")
    console.print(f"  Imported: {result.imported}")
    console.print(f"  Failed: {result.failed}")

    if result.errors:
        _print_problems("Errors", [str(e) for e in result.errors])

    output_path = output or csv_file.with_suffix(".json")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump([t.to_dict() for t in result.teachers], f, ensure_ascii=False, indent=2)
    console.print(f"\n[bold green]✓[/bold green] Teachers written to: {output_path}")


@app.command()
def history(
    history_dir: Annotated[
        Path,
        typer.Option("--history-dir", help="History directory"),
    ] = DEFAULT_HISTORY_DIR,
    delete: Annotated[
        Optional[str],
        typer.Option("--delete", help="Delete the entry with this id"),
    ] = None,
) -> None:
    """List saved timetables."""
    store = TimetableHistory(history_dir)

    if delete:
        try:
            store.delete(delete)
        except HistoryNotFoundError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(1)
        console.print(f"[bold green]✓[/bold green] Deleted {delete}")
        return

    entries = store.list()
    if not entries:
        console.print("[bold yellow]No saved timetables[/bold yellow]")
        return

    table = Table(title="Saved Timetables")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Classes", style="blue")
    table.add_column("Teachers", style="blue")
    table.add_column("Created", style="magenta")
    for entry in entries:
        summary = entry.summary()
        table.add_row(
            summary["id"],
            summary["name"],
            str(summary["classes"]),
            str(summary["teachers"]),
            summary["created_at"],
        )
    console.print(table)


@app.command()
def excel(
    input_file: Annotated[
        Path,
        typer.Argument(help="Result JSON file from the generate command"),
    ],
    output_dir: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output directory for Excel files"),
    ] = None,
    mode: Annotated[
        Optional[str],
        typer.Option("--mode", "-m", help="Workbook filter: 'class' or 'teacher'"),
    ] = None,
    school_name: Annotated[
        str,
        typer.Option("--school", help="School name for sheet titles"),
    ] = "",
) -> None:
    """Generate styled Excel timetables from a result JSON."""
    if not input_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {input_file}")
        raise typer.Exit(1)

    if mode and mode not in ("class", "teacher"):
        console.print(f"[bold red]Error:[/bold red] Invalid mode: {mode}. Use 'class' or 'teacher'.")
        raise typer.Exit(1)

    output_path = output_dir or Path("output/excel")

    with console.status("[bold green]Generating Excel files..."):
        files = generate_timetable_excel(input_file, output_path, mode, school_name)

    console.print(f"\n[bold green]✓[/bold green] Generated {len(files)} file(s):")
    for file in files:
        console.print(f"  {file}")


if __name__ == "__main__":
    app()
