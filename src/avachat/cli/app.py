"""Main CLI application using Typer."""
import asyncio
import logging

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from .providers import Settings, get_dispatcher, get_settings

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="avachat",
    help="Minimal chat client for a chat-completion proxy",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

LOG_LEVELS = ("debug", "info", "warning", "error")


def configure_logging(level: str) -> None:
    """Send avachat log records to the terminal through Rich."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    logging.getLogger("avachat").setLevel(level.upper())


def _check_log_level(value: str | None) -> str | None:
    if value is not None and value.lower() not in LOG_LEVELS:
        raise typer.BadParameter(f"must be one of: {', '.join(LOG_LEVELS)}")
    return value.lower() if value is not None else None


def _load_settings(**overrides: object) -> Settings:
    try:
        return get_settings(**overrides)
    except ValidationError as e:
        console.print(f"[red]Error: invalid configuration[/red]\n{e}")
        raise typer.Exit(code=1)


@app.command()
def ask(
    text: str = typer.Argument(..., help="Message to send"),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        "-u",
        help="Proxy base URL (env: AVACHAT_BASE_URL)"
    ),
    max_attempts: int | None = typer.Option(
        None,
        "--max-attempts",
        "-n",
        min=1,
        help="Give up after this many attempts (env: AVACHAT_MAX_ATTEMPTS)"
    ),
    retry_transport_errors: bool | None = typer.Option(
        None,
        "--retry-transport-errors/--no-retry-transport-errors",
        help="Also retry when no response was received (env: AVACHAT_RETRY_TRANSPORT)"
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        callback=_check_log_level,
        help="Terminal log level: debug, info, warning, or error"
    ),
):
    """Send one message with an empty history and print the reply."""
    configure_logging(log_level)
    settings = _load_settings(
        base_url=base_url,
        max_attempts=max_attempts,
        retry_transport_errors=retry_transport_errors,
    )

    async def _ask():
        dispatcher = get_dispatcher(settings)
        async with dispatcher.client:
            return await dispatcher.submit(text)

    result = asyncio.run(_ask())

    if not result.ok:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(code=1)

    console.print(Panel(result.reply or "", title="AVA", border_style="magenta"))
    if result.attempts > 1:
        console.print(f"[dim]Answered after {result.attempts} attempts[/dim]")


@app.command(name="tui")
def tui_command(
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        "-u",
        help="Proxy base URL (env: AVACHAT_BASE_URL)"
    ),
    max_attempts: int | None = typer.Option(
        None,
        "--max-attempts",
        "-n",
        min=1,
        help="Give up after this many attempts (env: AVACHAT_MAX_ATTEMPTS)"
    ),
    retry_transport_errors: bool | None = typer.Option(
        None,
        "--retry-transport-errors/--no-retry-transport-errors",
        help="Also retry when no response was received (env: AVACHAT_RETRY_TRANSPORT)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        callback=_check_log_level,
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive chat interface."""
    settings = _load_settings(
        base_url=base_url,
        max_attempts=max_attempts,
        retry_transport_errors=retry_transport_errors,
    )

    async def _tui():
        from ..ui import run_textual_tui

        dispatcher = get_dispatcher(settings)
        async with dispatcher.client:
            await run_textual_tui(dispatcher, log_level=log_level)
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
