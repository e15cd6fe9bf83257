"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from resume_coach.clients.llm_client import LLMClient
from resume_coach.clients.suggestion_service import LLMSuggestionService
from resume_coach.config import AppConfig, load_config
from resume_coach.models.suggestion import (
    RefreshOutcome,
    RequestState,
    SuggestionItem,
    SuggestionSet,
)
from resume_coach.preview.blocks import split_blocks
from resume_coach.preview.renderer import render_preview_html, save_html
from resume_coach.refresh.coordinator import SuggestionCoordinator
from resume_coach.refresh.debounce import Debouncer
from resume_coach.refresh.suggestion_state import match_suggestions

app = typer.Typer(
    name="resume-coach",
    help="AI suggestions for Markdown resumes",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _build_coordinator(
    config: AppConfig,
    model: str | None,
    *,
    auto_refresh: bool,
) -> SuggestionCoordinator:
    llm = LLMClient(timeout=config.llm.timeout, max_retries=config.llm.max_retries)
    service = LLMSuggestionService(
        llm,
        temperature=config.llm.temperature,
        max_tokens=config.llm.max_tokens,
    )
    return SuggestionCoordinator(
        service,
        config.refresh,
        model=model or config.llm.default_model,
        auto_refresh=auto_refresh,
    )


def print_suggestions(content: str, suggestions: SuggestionSet) -> None:
    """Print each block that has suggestions, followed by its advice."""
    if not suggestions:
        console.print("[green]No suggestions - looking good.[/green]")
        return

    shown: set[SuggestionItem] = set()
    for block in split_blocks(content):
        if not block.annotatable:
            continue
        matches = match_suggestions(block.text, suggestions)
        if not matches:
            continue
        shown.update(matches)
        console.print(
            Panel(
                "\n".join(f"- {escape(item.advice)}" for item in matches),
                title=escape(block.text.splitlines()[0][:60]),
                title_align="left",
                border_style="blue",
            )
        )

    leftover = [item for item in suggestions if item not in shown]
    if leftover:
        console.print(
            Panel(
                "\n".join(f"- [dim]{escape(item.matcher)}[/dim]: {escape(item.advice)}" for item in leftover),
                title="Unmatched",
                title_align="left",
                border_style="yellow",
            )
        )


@app.command()
def suggest(
    file: Path = typer.Argument(help="Markdown resume file"),
    model: str = typer.Option(None, "--model", "-m", help="Model identifier (default from config)"),
    html: Path = typer.Option(None, "--html", help="Also write an HTML preview with suggestions"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Fetch suggestions for a resume once."""
    _setup_logging(verbose)
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)

    config = load_config()
    content = file.read_text(encoding="utf-8")

    async def _run() -> tuple[RefreshOutcome, RequestState, SuggestionSet]:
        coordinator = _build_coordinator(config, model, auto_refresh=False)
        coordinator.update_content(content)
        outcome = coordinator.request_refresh()
        await coordinator.wait_for_request()
        state = coordinator.state
        items = coordinator.suggestions.items
        coordinator.close()
        return outcome, state, items

    with console.status("Generating suggestions..."):
        outcome, state, items = asyncio.run(_run())

    if outcome is RefreshOutcome.SKIPPED:
        console.print("[yellow]Resume is empty - nothing to review.[/yellow]")
        raise typer.Exit(1)
    if state is RequestState.COOLDOWN_AFTER_FAILURE:
        console.print("[red]Could not get suggestions (run with -v for details).[/red]")
        raise typer.Exit(1)

    print_suggestions(content, items)

    if html:
        path = save_html(render_preview_html(content, items, title=file.stem), html)
        console.print(f"[green]HTML saved: {path}[/green]")


async def watch_file(
    path: Path,
    coordinator: SuggestionCoordinator,
    *,
    interval: float,
    layout_delay: float,
) -> None:
    """Poll ``path`` and feed every change to the coordinator until cancelled."""
    layout = Debouncer(layout_delay)

    def redraw() -> None:
        console.rule(f"[bold]{path.name}[/bold]")
        print_suggestions(coordinator.content, coordinator.suggestions.items)

    def on_state_change(state: RequestState) -> None:
        if state is RequestState.IN_FLIGHT:
            console.print("[dim]Generating suggestions...[/dim]")

    coordinator.on_state_change = on_state_change
    coordinator.on_suggestions_change = lambda _items: layout.submit(redraw)

    last_mtime: int | None = None
    try:
        while True:
            mtime = path.stat().st_mtime_ns
            if mtime != last_mtime:
                last_mtime = mtime
                coordinator.update_content(path.read_text(encoding="utf-8"))
                if not coordinator.auto_refresh:
                    outcome = coordinator.request_refresh()
                    if outcome is RefreshOutcome.UNAVAILABLE:
                        console.print(
                            "[yellow]Suggestions not available right now "
                            f"(retry in {coordinator.cooldown_remaining:.0f}s).[/yellow]"
                        )
            await asyncio.sleep(interval)
    finally:
        layout.cancel()
        coordinator.close()


@app.command()
def watch(
    file: Path = typer.Argument(help="Markdown resume file to watch"),
    model: str = typer.Option(None, "--model", "-m", help="Model identifier (default from config)"),
    auto: bool = typer.Option(
        True, "--auto/--no-auto", help="Refresh automatically after edits settle, or on every save"
    ),
    interval: float = typer.Option(0.5, "--interval", help="File polling interval (seconds)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Watch a resume file and refresh suggestions as it changes."""
    _setup_logging(verbose)
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)

    config = load_config()
    console.print(
        f"[dim]Watching {file} (auto-refresh: {'on' if auto else 'off'}). Ctrl+C to stop.[/dim]"
    )

    async def _run() -> None:
        coordinator = _build_coordinator(config, model, auto_refresh=auto)
        await watch_file(
            file,
            coordinator,
            interval=interval,
            layout_delay=config.refresh.layout_debounce_seconds,
        )

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/dim]")


@app.command()
def models() -> None:
    """List the model identifiers offered by the config."""
    config = load_config()
    for name in config.llm.available_models:
        marker = " [green](default)[/green]" if name == config.llm.default_model else ""
        console.print(f"  [bold]{name}[/bold]{marker}")


if __name__ == "__main__":
    app()
