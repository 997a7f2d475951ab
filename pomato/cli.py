"""Pomato CLI -- Pomodoro in the terminal."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version
from typing import Optional

import typer
from rich.live import Live

from pomato import display
from pomato.app import run_app
from pomato.config import configure_logging, load_config
from pomato.keys import KeyReader, TerminalError
from pomato.state import State

log = logging.getLogger(__name__)

app = typer.Typer(
    name="pomato",
    help="Pomodoro in the terminal.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if not value:
        return
    try:
        installed = version("pomato")
    except PackageNotFoundError:
        installed = "unknown"
    display.print_info(f"pomato {installed}")
    raise typer.Exit()


@app.command()
def main(
    show_version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Run the full-screen Pomodoro timer and task list."""
    config = load_config()
    try:
        configure_logging(config)
    except OSError as exc:
        display.print_error(f"Could not open log file {config.log_file}: {exc}")
        raise typer.Exit(1)
    state = State(work_minutes=config.work_minutes, break_minutes=config.break_minutes)

    try:
        with KeyReader() as keys, Live(
            console=display.console,
            screen=config.alt_screen,
            auto_refresh=False,
            transient=True,
        ) as live:
            run_app(state, keys, live, poll_interval=config.poll_interval)
    except TerminalError as exc:
        display.print_error(str(exc))
        raise typer.Exit(1)
    except KeyboardInterrupt:
        log.info("Interrupted")


if __name__ == "__main__":
    app()
