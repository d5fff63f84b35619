"""Typer entry point: the setup and cleanup commands."""

from __future__ import annotations

import os
from pathlib import Path

import typer

from pewsetup import __version__
from pewsetup.cli.context import build_service
from pewsetup.core.config import DEFAULT_VERSION
from pewsetup.core.result import Err
from pewsetup.output.console import RichConsole
from pewsetup.output.errors import print_setup_error, setup_error_exit_code
from pewsetup.platform.detection import detect
from pewsetup.services.setup import Phase, run_phase

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _execute(
    phase: Phase,
    *,
    version: str | None = None,
    token: str | None = None,
    tool_cache: Path | None = None,
    temp_dir: Path | None = None,
    dry_run: bool = False,
) -> None:
    console = RichConsole()
    platform = detect()
    result = run_phase(
        phase,
        lambda: build_service(
            version=version,
            token=token,
            tool_cache=tool_cache,
            temp_dir=temp_dir,
            console=console,
            platform=platform,
        ),
        platform=platform,
        dry_run=dry_run,
    )
    if isinstance(result, Err):
        print_setup_error(result.error, console, environ=os.environ, echo=typer.echo)
        raise typer.Exit(code=setup_error_exit_code(result.error))


@app.command()
def setup(
    version: str = typer.Option(
        DEFAULT_VERSION,
        "--version",
        envvar="INPUT_VERSION",
        help="Release to install: latest, an exact tag, or a ^/~ range.",
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        envvar="INPUT_TOKEN",
        help="Token used to query the release API.",
        show_default=False,
    ),
    tool_cache: Path | None = typer.Option(
        None,
        "--tool-cache",
        envvar="RUNNER_TOOL_CACHE",
        help="Root of the persistent tool cache.",
    ),
    temp_dir: Path | None = typer.Option(
        None,
        "--temp-dir",
        envvar="RUNNER_TEMP",
        help="Scratch directory for downloads (defaults to the system temp dir).",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Resolve only; do not install."),
) -> None:
    """Resolve, locate or install pewbuild and publish its path."""
    _execute(
        Phase.SETUP,
        version=version,
        token=token,
        tool_cache=tool_cache,
        temp_dir=temp_dir,
        dry_run=dry_run,
    )


@app.command()
def cleanup() -> None:
    """Post-job step. Nothing to tear down yet."""
    _execute(Phase.CLEANUP)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Install a pewbuild release into the CI tool cache."""


def main() -> None:
    app()
