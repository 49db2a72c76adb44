"""Gemina invoice client CLI."""

import json
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gemina.api import GeminaClient
from gemina.config import Settings
from gemina.errors import ConfigurationError, GeminaError
from gemina.logging import configure_logging, get_logger
from gemina.models import UploadRequest, WorkflowResult
from gemina.pipeline import PredictionPoller, fetch_prediction, run_workflow

app = typer.Typer(
    name="gemina",
    help="Upload invoices to the Gemina API and retrieve their predictions",
    add_completion=False,
)
console = Console()
logger = get_logger(__name__)


def _load_settings(
    max_attempts: Optional[int],
    poll_interval_ms: Optional[int],
    deadline: Optional[float],
    use_llm: Optional[bool] = None,
) -> Settings:
    """Read settings from the environment and apply command-line overrides."""
    settings = Settings()
    overrides = {
        "max_attempts": max_attempts,
        "poll_interval_ms": poll_interval_ms,
        "deadline_seconds": deadline,
        "use_llm": use_llm,
    }
    updates = {key: value for key, value in overrides.items() if value is not None}
    if updates:
        settings = settings.model_copy(update=updates)
    configure_logging(settings.log_level, settings.log_format)
    try:
        settings.require_credentials()
    except ConfigurationError as e:
        _fail(e)
    return settings


def _render_result(result: WorkflowResult, output: Optional[Path]) -> None:
    """Print the extracted fields and optionally save the raw prediction."""
    fields = result.prediction.extracted_fields()

    table = Table(title=f"Prediction {result.external_id}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_column("Confidence", justify="right")
    for name, field in fields.items():
        value = field.value if isinstance(field.value, str) else json.dumps(field.value)
        confidence = "" if field.confidence is None else str(field.confidence)
        table.add_row(name, value, confidence)

    if fields:
        console.print(table)
    else:
        console.print("[yellow]Prediction contains no extracted fields[/yellow]")
    console.print(f"[dim]Poll attempts: {result.poll_attempts}[/dim]")

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(result.raw_prediction, indent=4, ensure_ascii=False), encoding="utf-8")
        console.print(f"[green]Saved prediction to {output}[/green]")


def _fail(error: Exception) -> NoReturn:
    logger.error("Workflow failed", error=str(error), error_type=type(error).__name__)
    console.print(f"[bold red]error message:[/bold red] {escape(str(error))}")
    raise typer.Exit(code=1)


def _run(request: UploadRequest, settings: Settings, output: Optional[Path]) -> None:
    try:
        with GeminaClient(settings) as client:
            result = run_workflow(client, request, PredictionPoller.from_settings(client, settings))
    except GeminaError as e:
        _fail(e)

    if result.upload_outcome is not None:
        console.print(f"[green]Upload:[/green] {result.upload_outcome.value.replace('_', ' ')}")
    _render_result(result, output)


@app.command()
def process(
    path: Path = typer.Argument(..., help="Path to the invoice image to upload"),
    external_id: Optional[str] = typer.Option(None, help="Document identifier (default: random UUID)"),
    llm: Optional[bool] = typer.Option(None, "--llm/--no-llm", help="Request LLM-assisted extraction"),
    max_attempts: Optional[int] = typer.Option(None, min=1, help="Maximum number of poll requests"),
    poll_interval_ms: Optional[int] = typer.Option(None, min=0, help="Delay between poll requests"),
    deadline: Optional[float] = typer.Option(None, min=0.001, help="Give up polling after this many seconds"),
    output: Optional[Path] = typer.Option(None, help="Write the raw prediction JSON here"),
) -> None:
    """Upload a local invoice and wait for its prediction."""
    settings = _load_settings(max_attempts, poll_interval_ms, deadline, llm)
    console.print(f"[bold blue]Processing:[/bold blue] {path}")

    try:
        request = UploadRequest.from_file(
            path,
            client_id=settings.client_id,
            external_id=external_id,
            use_llm=settings.use_llm,
        )
    except FileNotFoundError as e:
        _fail(e)

    console.print(f"[dim]External id: {request.external_id}[/dim]")
    _run(request, settings, output)


@app.command("process-url")
def process_url(
    url: str = typer.Argument(..., help="URL of the invoice image"),
    external_id: Optional[str] = typer.Option(None, help="Document identifier (default: random UUID)"),
    llm: Optional[bool] = typer.Option(None, "--llm/--no-llm", help="Request LLM-assisted extraction"),
    max_attempts: Optional[int] = typer.Option(None, min=1, help="Maximum number of poll requests"),
    poll_interval_ms: Optional[int] = typer.Option(None, min=0, help="Delay between poll requests"),
    deadline: Optional[float] = typer.Option(None, min=0.001, help="Give up polling after this many seconds"),
    output: Optional[Path] = typer.Option(None, help="Write the raw prediction JSON here"),
) -> None:
    """Have Gemina fetch an invoice from a URL and wait for its prediction."""
    settings = _load_settings(max_attempts, poll_interval_ms, deadline, llm)
    console.print(f"[bold blue]Processing URL:[/bold blue] {url}")

    request = UploadRequest.from_url(
        url,
        client_id=settings.client_id,
        external_id=external_id,
        use_llm=settings.use_llm,
    )
    console.print(f"[dim]External id: {request.external_id}[/dim]")
    _run(request, settings, output)


@app.command()
def fetch(
    external_id: str = typer.Argument(..., help="Identifier the document was uploaded with"),
    max_attempts: Optional[int] = typer.Option(None, min=1, help="Maximum number of poll requests"),
    poll_interval_ms: Optional[int] = typer.Option(None, min=0, help="Delay between poll requests"),
    deadline: Optional[float] = typer.Option(None, min=0.001, help="Give up polling after this many seconds"),
    output: Optional[Path] = typer.Option(None, help="Write the raw prediction JSON here"),
) -> None:
    """Retrieve the prediction of a document uploaded earlier."""
    settings = _load_settings(max_attempts, poll_interval_ms, deadline)
    console.print(f"[bold blue]Fetching:[/bold blue] {external_id}")

    try:
        with GeminaClient(settings) as client:
            result = fetch_prediction(client, external_id, PredictionPoller.from_settings(client, settings))
    except GeminaError as e:
        _fail(e)

    _render_result(result, output)


if __name__ == "__main__":
    app()
