"""
Typer CLI for QuizPulse.

Commands:
    quizpulse quizzes                       - List quizzes with share links
    quizpulse show QUIZ_ID                  - Show questions and rubric
    quizpulse score QUIZ_ID ANSWERS.json    - Score answers (--save to record)
    quizpulse analytics QUIZ_ID             - Summary and per-option tallies
    quizpulse submissions QUIZ_ID           - List recorded submissions
    quizpulse import-quiz FILE              - Create/replace a quiz from JSON   (admin)
    quizpulse export-quiz QUIZ_ID [FILE]    - Write a quiz as JSON
    quizpulse delete-quiz QUIZ_ID           - Delete a quiz and its submissions (admin)
    quizpulse delete-submission ID          - Delete one submission             (admin)
    quizpulse seed                          - Insert the demo quiz              (admin)
    quizpulse serve                         - Run the REST API

Usage:
    quizpulse --help
    quizpulse --backend sql analytics demo-1
    quizpulse delete-quiz demo-1 --pin 1234
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..access import DemoModeGuard
from ..analytics import truncate_label
from ..config import Settings, get_settings
from ..exceptions import AccessDeniedError, QuizPulseError
from ..log import configure_logging
from ..models import Answer, QuestionType, Quiz
from ..service import QuizService
from ..storage import create_repository, demo_quiz

app = typer.Typer(
    help="QuizPulse CLI: author quizzes, score answers, read analytics",
    no_args_is_help=True,
)

console = Console()

BAR_WIDTH = 30


# =============================================================================
# Helpers
# =============================================================================


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


def _service(ctx: typer.Context) -> QuizService:
    """Build the service lazily so --help never touches storage."""
    if ctx.obj.get("service") is None:
        settings = _settings(ctx)
        ctx.obj["service"] = QuizService(create_repository(settings), share_base_url=settings.share_base_url)
        ctx.call_on_close(ctx.obj["service"].repository.close)
    return ctx.obj["service"]


def _unlock(ctx: typer.Context, pin: Optional[str]) -> None:
    """Demo-mode guard for admin commands."""
    guard = DemoModeGuard(_settings(ctx).admin_pin)
    if pin is None:
        pin = typer.prompt("Admin PIN", hide_input=True)
    try:
        guard.unlock(pin)
    except AccessDeniedError:
        console.print("[red]Invalid PIN[/red]")
        raise typer.Exit(1)


def _fail(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def _load_json(path: Path) -> Any:
    if not path.exists():
        _fail(f"File not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON in {path}: {e}")


def _parse_answers(data: Any) -> list[Answer]:
    """Accept a list of answers, ``{"answers": [...]}``, or a questionId mapping."""
    if isinstance(data, dict) and "answers" in data:
        data = data["answers"]
    if isinstance(data, dict):
        return [Answer.from_dict({"questionId": qid, **value}) for qid, value in data.items()]
    return [Answer.from_dict(a) for a in data]


def _bar(count: int, peak: int) -> str:
    if peak <= 0:
        return ""
    return "█" * max(1 if count else 0, round(count / peak * BAR_WIDTH))


# =============================================================================
# Global Options
# =============================================================================


@app.callback()
def main_callback(
    ctx: typer.Context,
    backend: Optional[str] = typer.Option(None, "--backend", "-b", help="Storage backend: memory, json, sql, http"),
    json_path: Optional[Path] = typer.Option(None, "--json-path", help="JSON store path (json backend)"),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="SQLAlchemy URL (sql backend)"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Remote API base URL (http backend)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Configure storage and logging."""
    settings = get_settings()
    overrides: dict[str, Any] = {}
    if backend:
        if backend not in ("memory", "json", "sql", "http"):
            raise typer.BadParameter(f"Unknown backend: {backend}", param_hint="--backend")
        overrides["storage_backend"] = backend
    if json_path:
        overrides["json_db_path"] = str(json_path)
    if database_url:
        overrides["database_url"] = database_url
    if api_url:
        overrides["api_base_url"] = api_url
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging("DEBUG" if verbose else "WARNING", settings.log_file)
    ctx.obj = {"settings": settings, "service": None}


# =============================================================================
# Quiz Commands
# =============================================================================


@app.command("quizzes")
def list_quizzes(ctx: typer.Context):
    """List quizzes with their share links."""
    service = _service(ctx)
    quizzes = service.list_quizzes()

    if not quizzes:
        console.print("[yellow]No quizzes yet.[/yellow]")
        return

    table = Table(title="Quizzes")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Questions", justify="right")
    table.add_column("Created")
    table.add_column("Share link", style="dim", overflow="fold")

    for quiz in quizzes:
        table.add_row(
            quiz.id,
            quiz.title,
            str(len(quiz.questions)),
            quiz.created_at[:10],
            service.share_url(quiz.id),
        )
    console.print(table)


@app.command("show")
def show_quiz(ctx: typer.Context, quiz_id: str = typer.Argument(..., help="Quiz ID")):
    """Show a quiz's questions, options and scores."""
    from ..scoring import max_score, question_max

    try:
        quiz = _service(ctx).get_quiz(quiz_id)
    except QuizPulseError as e:
        _fail(str(e))

    console.print(Panel(f"[bold]{escape(quiz.title)}[/bold]\n{escape(quiz.subtitle)}", subtitle=f"max score {max_score(quiz)}"))

    for number, question in enumerate(quiz.questions, 1):
        console.print(
            f"\n[bold]{number}. {escape(question.text)}[/bold] "
            f"[dim]({question.type.value}, max {question_max(question)})[/dim]"
        )
        for option in question.options:
            colour = "green" if option.score > 0 else "red" if option.score < 0 else "dim"
            label = f"keyword: {option.text}" if question.type is QuestionType.TEXT else option.text
            console.print(f"   [{colour}]{option.score:>+5}[/{colour}]  {escape(label)}  [dim]{option.id}[/dim]")


@app.command("import-quiz")
def import_quiz(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="Quiz JSON file"),
    pin: Optional[str] = typer.Option(None, "--pin", help="Admin PIN"),
):
    """Create or replace a quiz from a JSON document."""
    _unlock(ctx, pin)
    data = _load_json(source)
    try:
        quiz = _service(ctx).save_quiz(Quiz.from_dict(data))
    except (KeyError, ValueError, TypeError) as e:
        _fail(f"Not a valid quiz document: {e}")
    except QuizPulseError as e:
        _fail(str(e))
    console.print(f"[green]+[/green] Saved quiz [cyan]{quiz.id}[/cyan] ({len(quiz.questions)} questions)")


@app.command("export-quiz")
def export_quiz(
    ctx: typer.Context,
    quiz_id: str = typer.Argument(..., help="Quiz ID"),
    output: Optional[Path] = typer.Argument(None, help="Output file (stdout if omitted)"),
):
    """Write a quiz as JSON."""
    try:
        quiz = _service(ctx).get_quiz(quiz_id)
    except QuizPulseError as e:
        _fail(str(e))

    text = json.dumps(quiz.to_dict(), indent=2)
    if output is None:
        typer.echo(text)
    else:
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]+[/green] Exported to {output}")


@app.command("delete-quiz")
def delete_quiz(
    ctx: typer.Context,
    quiz_id: str = typer.Argument(..., help="Quiz ID"),
    pin: Optional[str] = typer.Option(None, "--pin", help="Admin PIN"),
):
    """Delete a quiz and all of its submissions."""
    _unlock(ctx, pin)
    _service(ctx).delete_quiz(quiz_id)
    console.print(f"[green]+[/green] Deleted quiz {quiz_id}")


@app.command("seed")
def seed(ctx: typer.Context, pin: Optional[str] = typer.Option(None, "--pin", help="Admin PIN")):
    """Insert (or reset) the demo quiz."""
    _unlock(ctx, pin)
    quiz = _service(ctx).save_quiz(demo_quiz())
    console.print(f"[green]+[/green] Seeded demo quiz [cyan]{quiz.id}[/cyan]")


# =============================================================================
# Scoring & Submissions
# =============================================================================


@app.command("score")
def score_answers(
    ctx: typer.Context,
    quiz_id: str = typer.Argument(..., help="Quiz ID"),
    answers_file: Path = typer.Argument(..., help="Answers JSON file"),
    save: bool = typer.Option(False, "--save", help="Record a submission"),
):
    """
    Score an answers file against a quiz.

    The file holds a list of answers (``questionId``, ``selectedOptionIds``,
    ``textAnswer``), optionally wrapped in ``{"answers": [...]}``.
    """
    service = _service(ctx)
    try:
        answers = _parse_answers(_load_json(answers_file))
    except (KeyError, TypeError, AttributeError) as e:
        _fail(f"Not a valid answers document: {e}")

    try:
        if save:
            submission = service.submit(quiz_id, answers)
            total, maximum = submission.total_score, submission.max_possible_score
        else:
            result = service.preview_score(quiz_id, answers)
            total, maximum = result.total, result.max
    except QuizPulseError as e:
        _fail(str(e))

    console.print(f"Score: [bold]{total}[/bold] / {maximum}")
    if save:
        console.print(f"[green]+[/green] Recorded submission [cyan]{submission.id}[/cyan]")


@app.command("submissions")
def list_submissions(ctx: typer.Context, quiz_id: str = typer.Argument(..., help="Quiz ID")):
    """List recorded submissions for a quiz."""
    subs = _service(ctx).submissions(quiz_id)
    if not subs:
        console.print("[yellow]No submissions yet.[/yellow]")
        return

    table = Table(title=f"Submissions: {quiz_id}")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Submitted")
    table.add_column("Score", justify="right")
    for sub in subs:
        table.add_row(sub.id, sub.timestamp[:19].replace("T", " "), f"{sub.total_score} / {sub.max_possible_score}")
    console.print(table)


@app.command("delete-submission")
def delete_submission(
    ctx: typer.Context,
    submission_id: str = typer.Argument(..., help="Submission ID"),
    pin: Optional[str] = typer.Option(None, "--pin", help="Admin PIN"),
):
    """Delete one submission."""
    _unlock(ctx, pin)
    _service(ctx).delete_submission(submission_id)
    console.print(f"[green]+[/green] Deleted submission {submission_id}")


# =============================================================================
# Analytics
# =============================================================================


@app.command("analytics")
def analytics(ctx: typer.Context, quiz_id: str = typer.Argument(..., help="Quiz ID")):
    """Show summary statistics and per-option response tallies."""
    service = _service(ctx)
    try:
        quiz = service.get_quiz(quiz_id)
        report = service.analytics(quiz_id)
    except QuizPulseError as e:
        _fail(str(e))

    summary = report.summary
    console.print(
        Panel(
            f"Total submissions: [bold]{summary.count}[/bold]\n"
            f"Average score:     [bold]{summary.average:.1f}[/bold]\n"
            f"Max possible:      [bold]{summary.max_possible}[/bold]",
            title=f"Analytics: {escape(quiz.title)}",
        )
    )

    for number, tally in enumerate(report.per_question, 1):
        table = Table(title=f"{number}. {escape(tally.text)}", title_justify="left", show_header=False, box=None)
        table.add_column("Option", style="cyan", no_wrap=True)
        table.add_column("Count", justify="right")
        table.add_column("Bar", style="magenta")

        peak = max((t.count for t in tally.options), default=0)
        for option in tally.options:
            table.add_row(escape(truncate_label(option.label)), str(option.count), _bar(option.count, peak))
        console.print(table)


# =============================================================================
# API Server
# =============================================================================


@app.command("serve")
def serve(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, "--host", help="Bind host"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
):
    """Run the REST API with uvicorn."""
    import uvicorn

    from ..api.main import create_app

    settings = _settings(ctx)
    configure_logging(settings.log_level, settings.log_file)
    logger.info(f"Serving QuizPulse API on {host or settings.api_host}:{port or settings.api_port}")

    if reload:
        uvicorn.run(
            "quizpulse.api.main:app",
            host=host or settings.api_host,
            port=port or settings.api_port,
            reload=True,
            log_level=settings.log_level.lower(),
        )
    else:
        uvicorn.run(
            create_app(settings),
            host=host or settings.api_host,
            port=port or settings.api_port,
            log_level=settings.log_level.lower(),
        )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
