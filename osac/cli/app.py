"""
Defines the command-line interface for the application using Typer.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from osac import __version__
from osac.core.config import PRODUCTS, load_settings
from osac.core.controller import OsacController
from osac.core.errors import OsacError, UsageError
from osac.core.logger import initialize_logging, verbosity_to_level

console = Console(highlight=False, soft_wrap=True, emoji=False)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

log = logging.getLogger("osac")

app = typer.Typer(
    name="osac",
    help=(
        "List and download the open-source packages published on"
        " opensource.apple.com. Use 'osac <command> --help' for more info."
    ),
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Root URL of the release index site."
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="JSON settings file (default: ~/.config/osac/settings.json)."
    ),
    log_dir: Optional[str] = typer.Option(
        None, "--log-dir", help="Directory for the osac log files."
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """osac - open source archive client"""
    if version:
        _echo(f"osac version {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        _echo(ctx.get_help())
        raise typer.Exit(code=1)

    with _handle_errors():
        config = load_settings(config_file, base_url=base_url, log_dir=log_dir, verbose=verbose)
    initialize_logging(config.log_dir, verbosity_to_level(config.verbose))
    log.debug(f"Using base URL {config.base_url}")
    ctx.obj = config


@contextmanager
def _handle_errors():
    """Report OsacError on stderr and exit with status 1."""
    try:
        yield
    except OsacError as e:
        log.debug("Command failed", exc_info=True)
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        if isinstance(e, UsageError):
            err_console.print("[dim]Run 'osac list' to see what is available.[/dim]")
        raise typer.Exit(code=1) from e


def _echo(line: str):
    console.print(line, markup=False)


def _product_key(value: Optional[str]) -> Optional[str]:
    """Strip a product key; an empty one is a usage error, not "no product"."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise typer.BadParameter("must not be empty", param_hint="PRODUCT")
    return value


@app.command(name="list")
def list_command(
    ctx: typer.Context,
    product: Optional[str] = typer.Argument(
        None, help=f"Product key: {', '.join(PRODUCTS)}."
    ),
    release: Optional[str] = typer.Argument(
        None, help="Release name as printed by 'osac list PRODUCT'."
    ),
):
    """List products, the releases of a product, or the packages of a release."""
    product = _product_key(product)

    with _handle_errors(), OsacController(ctx.obj) as controller:
        if product is None:
            _echo("Available products:")
            for key in controller.list_products():
                _echo(key)
        elif release is None:
            for r in controller.list_releases(product):
                _echo(r.release)
        else:
            for p in controller.list_packages(product, release):
                _echo(p.label)


@app.command(name="get")
def get_command(
    ctx: typer.Context,
    product: str = typer.Argument(..., help=f"Product key: {', '.join(PRODUCTS)}."),
    release: str = typer.Argument(..., help="Release name as printed by 'osac list PRODUCT'."),
    package: Optional[str] = typer.Argument(
        None, help="Only download the package with this name."
    ),
):
    """Download the packages of a release into ./<product>-<release>."""
    def on_progress(index: int, total: int, path: Path):
        _echo(str(path))
        log.info(f"[{index}/{total}] {path.name}")

    with _handle_errors(), OsacController(ctx.obj) as controller:
        written = controller.get(_product_key(product), release, package,
                                 progress=on_progress)

    err_console.print(f"[green]✓ Downloaded {len(written)} packages.[/green]")
