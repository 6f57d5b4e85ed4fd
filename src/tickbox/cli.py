"""CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from tickbox.backend import TerminalBackend
    from tickbox.config import Config

app = typer.Typer(
    name="tickbox",
    help="Pick one or more options from a list in the terminal.",
    no_args_is_help=True,
)
console = Console(stderr=True)

EXIT_CANCELLED = 1
EXIT_BACKEND_FAILURE = 2


def _get_config() -> Config:
    """Lazy import and load config."""
    from tickbox.config import Config

    return Config.load()


def _make_backend() -> TerminalBackend:
    """Lazy import and create the terminal backend."""
    from tickbox.backend import RichTerminal

    return RichTerminal()


def _setup_logging(log_file: Path | None, verbose: bool) -> None:
    """Send log records to a file; the terminal is owned by the widget."""
    if log_file is None:
        return
    handler = logging.FileHandler(log_file)
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger = logging.getLogger("tickbox")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _read_options_file(path: Path) -> list[str]:
    return [line for line in path.read_text().splitlines() if line.strip()]


@app.command()
def pick(
    options: Annotated[list[str] | None, typer.Argument(help="Options to choose from")] = None,
    item: Annotated[
        str, typer.Option("--item", "-i", help="What one option is (shown in the header)")
    ] = "items",
    from_file: Annotated[
        Path | None,
        typer.Option("--from-file", "-f", help="Read options from a file, one per line"),
    ] = None,
    json_: Annotated[bool, typer.Option("--json", help="Print the selection as JSON")] = False,
    log_file: Annotated[Path | None, typer.Option("--log-file", help="Write logs here")] = None,
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Debug logging")] = False,
):
    """Interactively select options and print the chosen ones."""
    from tickbox.backend import BackendFailure
    from tickbox.session import SelectionSession

    _setup_logging(log_file, verbose)

    choices = list(options or [])
    if from_file is not None:
        try:
            choices.extend(_read_options_file(from_file))
        except OSError as e:
            console.print(f"[red]Error:[/red] Cannot read {from_file}: {e}")
            raise typer.Exit(1)

    if not choices:
        console.print("[red]Error:[/red] No options given")
        raise typer.Exit(1)

    session = SelectionSession(choices, item, backend=_make_backend(), config=_get_config())
    try:
        result = session.run()
    except BackendFailure as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_BACKEND_FAILURE)

    if result.cancelled:
        console.print("[dim]Cancelled[/dim]")
        raise typer.Exit(EXIT_CANCELLED)

    chosen = result.chosen(choices)
    if json_:
        typer.echo(json.dumps(chosen))
    else:
        for label in chosen:
            typer.echo(label)


@app.command()
def config(
    key: Annotated[str | None, typer.Argument(help="Setting to change")] = None,
    value: Annotated[str | None, typer.Argument(help="New value")] = None,
):
    """Show settings, or change one with KEY VALUE."""
    cfg = _get_config()

    if key is None:
        table = Table(title="tickbox config", title_justify="left")
        table.add_column("Key", style="cyan", no_wrap=True)
        table.add_column("Value")
        table.add_column("Description", style="dim")
        for name, desc, enabled in cfg.get_toggles():
            table.add_row(name, "on" if enabled else "off", desc)
        for name, desc, val in cfg.get_settings():
            table.add_row(name, str(val), desc)
        Console().print(table)
        return

    if value is None:
        console.print(f"[red]Error:[/red] Missing value for '{key}'")
        raise typer.Exit(1)

    try:
        cfg.set(key, value)
    except KeyError:
        console.print(f"[red]Error:[/red] Unknown config key '{key}'")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error:[/red] Invalid value for '{key}': {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] {key} = {getattr(cfg, key)}")
