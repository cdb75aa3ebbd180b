"""CLI entry point for taskcore.

Invoked as::

    taskcore [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m taskcore.cli.main
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from taskcore.config.defaults import DEFAULT_CONFIG_YAML
from taskcore.config.loader import ConfigLoader
from taskcore.schema.errors import ConfigurationError

console = Console()
error_console = Console(stderr=True, style="bold red")


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="taskcore")
@click.option("--verbose", "-v", is_flag=True, help="Enable DEBUG logging.")
def cli(verbose: bool) -> None:
    """Agent execution loop and event bus for browser task runners."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from taskcore import __version__

    console.print(f"[bold]taskcore[/bold] v{__version__}")
    console.print(f"Python {sys.version}")


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


@cli.command(name="init")
@click.option(
    "--directory",
    "-d",
    default=".",
    show_default=True,
    help="Directory in which to create the config file.",
)
def init_command(directory: str) -> None:
    """Initialise a taskcore config file in DIRECTORY."""
    target_dir = Path(directory).resolve()
    config_path = target_dir / "taskcore.yaml"

    if config_path.exists():
        console.print(
            f"[yellow]Config already exists at {config_path}. Skipping.[/yellow]"
        )
        return

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        config_path.write_text(DEFAULT_CONFIG_YAML, encoding="utf-8")
        console.print(f"[green]Created taskcore config at {config_path}[/green]")
    except OSError as exc:
        error_console.print(f"Failed to create config: {exc}")
        raise SystemExit(1) from exc


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


@cli.command(name="config")
@click.option(
    "--directory",
    "-d",
    default=".",
    show_default=True,
    help="Directory searched for taskcore.yaml / taskcore.json.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    default=None,
    help="Explicit path to a YAML or JSON config file.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the config as JSON.")
def config_command(directory: str, config_path: str | None, as_json: bool) -> None:
    """Show the resolved taskcore configuration."""
    loader = ConfigLoader()
    try:
        if config_path:
            cfg = loader.load_file(config_path)
        else:
            cfg = loader.load_auto(search_dir=directory)
    except ConfigurationError as exc:
        error_console.print(f"Could not load config: {exc}")
        raise SystemExit(1) from exc

    logging.getLogger("taskcore").setLevel(cfg.log_level)

    if as_json:
        console.print_json(cfg.model_dump_json(indent=2))
        return

    table = Table(title="taskcore config", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("session_name", cfg.session_name)
    table.add_row("log_level", cfg.log_level)
    table.add_row(
        "event_max_concurrency",
        "unbounded" if cfg.event_max_concurrency is None else str(cfg.event_max_concurrency),
    )
    for option, value in cfg.agent.model_dump().items():
        table.add_row(f"agent.{option}", str(value))

    console.print(table)


if __name__ == "__main__":
    cli()
