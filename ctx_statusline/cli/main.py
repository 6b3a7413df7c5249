"""
CLI interface for ctx-statusline.

The host runs the bare command and shows whatever it prints.
"""

import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ctx_statusline.config.loader import StatuslineConfig, load_config, load_default_config
from ctx_statusline.config.settings import (
    DEFAULT_COMMAND,
    DEFAULT_SETTINGS_PATH,
    InstallOutcome,
    install_statusline,
)
from ctx_statusline.statusline import build_status_line

app = typer.Typer()
console = Console()
# The host reads ANSI colours from a pipe, so colour is forced on
line_console = Console(force_terminal=True, color_system="standard", soft_wrap=True, highlight=False)

logger = logging.getLogger(__name__)

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

EXAMPLE_LINE = "[Opus 4.5] 🟢 Ctx: 33% | 1K↓ 2K↑ 45K⚡ | 🧠 | $5.57 | main"


def _configure_logging(debug: bool) -> None:
    """Send log records to stderr so stdout only carries the status line."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
    )


def _load_config(config_path: Optional[Path]) -> StatuslineConfig:
    """Load configuration, falling back to defaults so a line is always printed."""
    try:
        if config_path is None:
            return load_default_config()
        return load_config(config_path)
    except (OSError, yaml.YAMLError, ValueError) as e:
        logger.warning("Ignoring statusline config: %s", e)
        return StatuslineConfig()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML config file (default: ~/.claude/statusline.yaml)"
    ),
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        "-r",
        help="Directory to search for session transcripts"
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Print the status line without colours"
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log debug information to stderr"
    )
):
    """Print a status line for the most recent assistant session."""
    _configure_logging(debug)
    if ctx.invoked_subcommand is not None:
        return

    config = _load_config(config_path)
    if root is not None:
        config = dataclasses.replace(config, transcript_root=root.expanduser())

    line = build_status_line(config)
    if plain:
        typer.echo(line.plain)
    else:
        line_console.print(line)


@app.command()
def install(
    settings: Path = typer.Option(
        DEFAULT_SETTINGS_PATH,
        "--settings",
        "-s",
        help="Host settings.json to update"
    ),
    command: str = typer.Option(
        DEFAULT_COMMAND,
        "--command",
        help="Command the host runs to render the status line"
    )
):
    """Register the status line in the host's settings file."""
    try:
        outcome = install_statusline(settings, command)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error installing status line:[/] {escape(str(e))}")
        sys.exit(EXIT_CODE_FAIL)

    if outcome == InstallOutcome.CREATED:
        console.print(f"[green]✓[/] Created {escape(str(settings))} with statusLine config")
    elif outcome == InstallOutcome.ADDED:
        console.print(f"[green]✓[/] Added statusLine to {escape(str(settings))}")
    else:
        console.print(f"[yellow]⚠[/] statusLine already configured in {escape(str(settings))}")
        console.print(f"  Please verify it runs: {escape(command)}")

    console.print("\nRestart the assistant to see the status line.")
    console.print(f"\nExample output:\n  {escape(EXAMPLE_LINE)}")
    sys.exit(EXIT_CODE_PASS)


if __name__ == "__main__":
    app()
