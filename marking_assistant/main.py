"""
Marking Assistant CLI Application.

Provides a command-line interface for grading a student answer
against a marking guide and displaying the breakdown and feedback.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from marking_assistant.config import JudgeStrategy, Settings, get_settings
from marking_assistant.errors import EmptyGuideError, JudgeError, RequestValidationError
from marking_assistant.grading import GradingEngine, RandomJudge, create_judge
from marking_assistant.models import GradingResult, GradingRequest
from marking_assistant.rubric import CriterionParser

# Create Typer app
app = typer.Typer(
    name="marking-assistant",
    help="Grade free-text answers against a marking guide",
    add_completion=False,
)

console = Console()


def _setup_logging(settings: Settings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _read_text(value: Optional[str], file: Optional[Path], label: str) -> str:
    """Take a field either inline or from a UTF-8 text file."""
    if file is None:
        return value or ""
    if not file.exists():
        console.print(f"[red]Error:[/red] {label} file not found: {file}")
        raise typer.Exit(1)
    return file.read_text(encoding="utf-8")


@app.command()
def grade(
    question: Annotated[str, typer.Option("--question", "-q", help="The question being answered")] = "",
    total_marks: Annotated[str, typer.Option("--total-marks", "-m", help="Maximum mark")] = "",
    answer: Annotated[Optional[str], typer.Option("--answer", "-a", help="Student answer text")] = None,
    answer_file: Annotated[
        Optional[Path],
        typer.Option("--answer-file", help="Read the student answer from a text file"),
    ] = None,
    guide: Annotated[
        Optional[str],
        typer.Option("--guide", "-g", help="Marking guide, one point per line"),
    ] = None,
    guide_file: Annotated[
        Optional[Path],
        typer.Option("--guide-file", help="Read the marking guide from a text file"),
    ] = None,
    judge: Annotated[
        Optional[JudgeStrategy],
        typer.Option("--judge", "-j", help="Judge strategy (defaults to configuration)"),
    ] = None,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Seed for the random judge"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """
    Grade a student answer against a marking guide.

    Each non-blank line of the guide is one marking point, and all points
    carry an equal share of the total marks.
    """
    settings = get_settings()
    _setup_logging(settings, verbose)

    request = GradingRequest(
        question=question,
        total_marks=total_marks,
        student_answer=_read_text(answer, answer_file, "Answer"),
        marking_guide=_read_text(guide, guide_file, "Guide"),
    )

    try:
        strategy = judge or settings.judge_strategy
        if strategy == JudgeStrategy.RANDOM and seed is not None:
            criterion_judge = RandomJudge(settings.judge_pass_probability, seed=seed)
        else:
            criterion_judge = create_judge(settings, strategy)

        engine = GradingEngine(settings, judge=criterion_judge)

        with console.status("Analyzing..."):
            result = engine.grade_sync(request)

    except RequestValidationError as e:
        console.print(f"[red]Validation Error:[/red] {e.message}")
        raise typer.Exit(1)
    except EmptyGuideError as e:
        console.print(f"[red]Marking Guide Error:[/red] {e}")
        raise typer.Exit(1)
    except JudgeError as e:
        console.print(f"[red]Judge Error:[/red] {e}")
        raise typer.Exit(1)

    _display_results(result)


@app.command()
def parse_guide(
    guide_file: Annotated[Path, typer.Argument(help="Path to the marking guide file")],
) -> None:
    """
    Show how a marking guide splits into marking points.
    """
    if not guide_file.exists():
        console.print(f"[red]Error:[/red] File not found: {guide_file}")
        raise typer.Exit(1)

    try:
        criteria = CriterionParser().parse(guide_file.read_text(encoding="utf-8"))
    except EmptyGuideError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Marking Points")
    table.add_column("#", justify="right")
    table.add_column("Description", style="cyan")

    for criterion in criteria:
        table.add_row(str(criterion.position + 1), criterion.description)

    console.print(table)
    console.print(f"\n[bold]Marking points:[/bold] {len(criteria)}")


@app.command()
def health() -> None:
    """
    Check if the grading system is operational.

    Shows the configuration and, for the llm judge, checks API connectivity.
    """
    try:
        settings = get_settings()
        console.print("[bold]Marking Assistant Health Check[/bold]\n")

        console.print("[dim]Checking configuration...[/dim]")
        console.print(f"  Judge Strategy: {settings.judge_strategy.value}")
        console.print(f"  Simulated Latency: {settings.simulated_latency_seconds}s")
        if settings.judge_strategy == JudgeStrategy.LLM:
            console.print(f"  API Base URL: {settings.llm_base_url}")
            console.print(f"  Model: {settings.llm_model}")

        engine = GradingEngine(settings)

        if engine.health_check():
            console.print("[green]✓ Judge is ready[/green]")
        else:
            console.print("[red]✗ Judge is not reachable[/red]")
            raise typer.Exit(1)

        console.print("\n[green]All systems operational[/green]")

    except JudgeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _display_results(result: GradingResult) -> None:
    """Display grading results."""

    score_color = "green" if result.percentage >= 70 else "yellow" if result.percentage >= 50 else "red"
    console.print(
        Panel(
            f"[{score_color}][bold]{result.score_line}[/bold] "
            f"({result.percentage_display})[/{score_color}]",
            title="Final Score",
        )
    )

    table = Table(title="Marking Breakdown")
    table.add_column("Marking Point", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Status")

    for outcome in result.outcomes:
        table.add_row(
            outcome.criterion.description,
            f"{outcome.value:.2f}",
            "[green]✓ earned[/green]" if outcome.earned else "[red]✗ missed[/red]",
        )

    console.print(table)
    console.print(Panel(result.feedback, title="Feedback"))


if __name__ == "__main__":
    app()
