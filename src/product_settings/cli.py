from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from . import __version__
from .settings.store import SettingsStore
from .ui.settings_textual import run_product_settings_dialog
from .ui.summary import render_summary

app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

_WORKDIR_OPTION = typer.Option(  # noqa: B008
    Path("."),
    "--workdir",
    envvar="PRODUCT_SETTINGS_WORKDIR",
    help="Project directory whose .aaagent/product-settings.json is used.",
)
_FILE_OPTION = typer.Option(  # noqa: B008
    None,
    "--file",
    envvar="PRODUCT_SETTINGS_FILE",
    help="Explicit settings file path (overrides --workdir).",
)


def _resolve_store(workdir: Path, file: Path | None) -> SettingsStore:
    if file is not None:
        return SettingsStore(file)
    return SettingsStore.for_workdir(workdir)


def _can_launch_interactive_dialog(console: Console) -> bool:
    return console.is_terminal and not console.is_dumb_terminal


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Print version and exit.",
        is_eager=True,
    ),
) -> None:
    if version:
        typer.echo(f"product-settings {__version__}")
        raise typer.Exit(0)


@app.command()
def edit(
    workdir: Path = _WORKDIR_OPTION,
    file: Path | None = _FILE_OPTION,
) -> None:
    """Open the interactive product settings dialog."""

    store = _resolve_store(workdir, file)
    if not _can_launch_interactive_dialog(Console()):
        render_summary(Console(stderr=True), store.load(), path=store.path)
        typer.echo("Product settings dialog requires a TTY terminal.", err=True)
        raise typer.Exit(2)

    result = run_product_settings_dialog(store)
    if result is None:
        typer.echo("No settings saved.", err=True)
        return
    typer.echo(str(store.path))


@app.command()
def show(
    workdir: Path = _WORKDIR_OPTION,
    file: Path | None = _FILE_OPTION,
) -> None:
    """Print the effective product settings (file merged over defaults)."""

    store = _resolve_store(workdir, file)
    render_summary(Console(), store.load(), path=store.path)


@app.command()
def path(
    workdir: Path = _WORKDIR_OPTION,
    file: Path | None = _FILE_OPTION,
) -> None:
    """Print the settings file location."""

    typer.echo(str(_resolve_store(workdir, file).path))
