"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
import webbrowser
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from resume_tuner.config import load_api_key, load_config
from resume_tuner.export.exporter import ResultExporter
from resume_tuner.export.pdf_renderer import render_result_html
from resume_tuner.models.status import AppStatus
from resume_tuner.state.machine import TuningSession
from resume_tuner.tuning.tuner import create_tuner

app = typer.Typer(
    name="resume-tuner",
    help="Tailor a PDF resume to a job description with Claude.",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command()
def tune(
    resume: Path = typer.Argument(help="Resume PDF path"),
    jd: Path = typer.Option(None, "--jd", help="Job description text file"),
    jd_text: str = typer.Option(None, "--jd-text", help="Job description as a string"),
    output: Path = typer.Option(None, "--output", "-o", help="Output PDF path"),
    html: bool = typer.Option(False, "--html", help="Also write the rendered HTML"),
    open_browser: bool = typer.Option(False, "--open", help="Open the HTML preview in a browser"),
    config_path: Path = typer.Option(None, "--config", "-c", help="config.yaml path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Rewrite a resume to match a job description and export it as PDF."""
    _configure_logging(verbose)

    if jd is not None:
        if not jd.exists():
            console.print(f"[red]Job description file not found: {jd}[/red]")
            raise typer.Exit(1)
        jd_text = jd.read_text(encoding="utf-8")
    if not resume.exists():
        console.print(f"[red]Resume file not found: {resume}[/red]")
        raise typer.Exit(1)

    config = load_config(config_path)
    tuner = create_tuner(config.llm, api_key=load_api_key())
    session = TuningSession(tuner, max_file_bytes=config.ingest.max_file_bytes)

    if not asyncio.run(session.select_path(resume)):
        console.print(f"[red]{session.error_message}[/red]")
        raise typer.Exit(1)
    session.set_job_description(jd_text or "")

    if verbose:
        console.print(f"[dim]Resume: {session.resume.display_name} ({session.resume.file.size} bytes)[/dim]")
        console.print(f"[dim]Job description: {len(session.job_description)} chars[/dim]")
        console.print(f"[dim]Model: {config.llm.model}[/dim]")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Tuning resume... This might take a minute.", total=None)
        asyncio.run(session.submit())

    if session.status != AppStatus.SUCCESS:
        console.print(f"[red]{session.error_message}[/red]")
        if session.last_failure is not None and verbose:
            console.print(f"[dim]{session.last_failure.kind.value}: {session.last_failure.detail}[/dim]")
        raise typer.Exit(1)

    exporter = ResultExporter(config.export)
    if output is None:
        output = Path("./output") / exporter.filename
    output.parent.mkdir(parents=True, exist_ok=True)

    if html or open_browser:
        html_path = output.with_suffix(".html")
        html_path.write_text(render_result_html(session.result, settings=config.export), encoding="utf-8")
        console.print(f"[green]HTML saved: {html_path}[/green]")
        if open_browser:
            webbrowser.open(html_path.resolve().as_uri())

    pdf = exporter.export(session.result)
    if pdf is None:
        console.print(f"[yellow]PDF export failed: {exporter.last_error}[/yellow]")
        raise typer.Exit(1)
    output.write_bytes(pdf)

    usage = tuner.llm.get_token_summary()
    console.print(
        Panel(
            f"Saved: {output}\nTokens: {usage['input']} in / {usage['output']} out",
            title="Tuned resume",
        )
    )


@app.command()
def prompt() -> None:
    """Print the system instruction sent with every request."""
    from resume_tuner.tuning.prompts import SYSTEM_INSTRUCTION, SYSTEM_INSTRUCTION_VERSION

    console.print(Panel(SYSTEM_INSTRUCTION, title=f"System instruction v{SYSTEM_INSTRUCTION_VERSION}"))


if __name__ == "__main__":
    app()
