"""CLI entry point for dotenvk.

Every command reads the env file once, applies its change and writes the
file back once. Errors are printed to stderr and exit with status 1.
"""

import json
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..util.error import DotenvkError, format_error
from ..util.log import Log

app = typer.Typer(
    name="dotenvk",
    help="Edit .env files without losing comments, ordering or formatting",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)
log = Log.create({"service": "cli"})


@dataclass
class CliState:
    """Options shared by every subcommand."""

    file: Optional[Path] = None

    def env_file(self) -> Path:
        if self.file is not None:
            return self.file
        from ..core.config import ConfigManager

        return Path(ConfigManager.get().file)


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Turn application errors into a red message and exit status 1."""
    try:
        yield
    except DotenvkError as error:
        log.error("command failed", {"error": error})
        message = format_error(error)
        err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
        raise typer.Exit(1) from error


def _state(ctx: typer.Context) -> CliState:
    if not isinstance(ctx.obj, CliState):
        ctx.obj = CliState()
    return ctx.obj


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"dotenvk {__version__}")
        raise typer.Exit()


def _bootstrap_logging(ctx: typer.Context, level: Optional[str], format: Optional[str]) -> None:
    from ..core.config import ConfigError
    from ..runtime.logging import bootstrap_logging

    try:
        bootstrap_logging(level=level, format=format)
    except ConfigError as error:
        # `config --path` must still work to locate a broken config file.
        if ctx.invoked_subcommand != "config":
            raise
        bootstrap_logging(level=level, format=format, use_config=False)
        log.warn("ignoring invalid config", {"error": error})


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Env file to operate on (default: .env, or 'file' from config)",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level (debug, info, warn, error); enables stderr logging",
    ),
    log_format: Optional[str] = typer.Option(
        None,
        "--log-format",
        help="Log format (kv, json, pretty)",
    ),
):
    """dotenvk - edit .env files in place."""
    with reporting_errors():
        try:
            _bootstrap_logging(ctx, log_level, log_format)
        except ValueError as error:
            raise typer.BadParameter(str(error)) from error
    ctx.call_on_close(Log.close)
    ctx.obj = CliState(file=file)


@app.command("set")
def set_(
    ctx: typer.Context,
    pairs: List[str] = typer.Argument(..., help="KEY=VALUE pairs to set"),
):
    """Set one or more key=value pairs in the .env file."""
    from .cmd.edit import set_command

    with reporting_errors():
        set_command(_state(ctx).env_file(), pairs)


@app.command()
def unset(
    ctx: typer.Context,
    keys: List[str] = typer.Argument(..., help="Keys to remove"),
):
    """Remove one or more keys from the .env file."""
    from .cmd.edit import unset_command

    with reporting_errors():
        unset_command(_state(ctx).env_file(), keys)


@app.command()
def get(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Key to look up"),
):
    """Print the value of a key (exit status 1 if it is not set)."""
    from .cmd.view import get_command

    with reporting_errors():
        value = get_command(_state(ctx).env_file(), key)
    if value is None:
        raise typer.Exit(1)
    typer.echo(value)


@app.command()
def keys(ctx: typer.Context):
    """List all keys from the .env file."""
    from .cmd.view import keys_command

    with reporting_errors():
        names = keys_command(_state(ctx).env_file())
    for name in names:
        typer.echo(name)


@app.command()
def export(
    ctx: typer.Context,
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: bash or json (default from config, else bash)",
    ),
):
    """Export the .env file as bash export statements or JSON."""
    from ..core.config import ConfigManager
    from .cmd.view import export_command

    with reporting_errors():
        fmt = format or ConfigManager.get().export.format
        text = export_command(_state(ctx).env_file(), fmt)
    typer.echo(text, nl=False)


@app.command()
def randomize(
    ctx: typer.Context,
    keys: List[str] = typer.Argument(..., help="Keys to set with random values"),
    numeric: Optional[bool] = typer.Option(
        None,
        "--numeric/--no-numeric",
        help="Include numeric characters (0-9)",
    ),
    symbol: Optional[bool] = typer.Option(
        None,
        "--symbol/--no-symbol",
        help="Include symbol characters (!@#$%^&*()_+-=[]{}|;:,.<>?)",
    ),
    length: Optional[int] = typer.Option(
        None,
        "--length",
        "-l",
        help="Secret length (default: 32)",
    ),
    xkcd: Optional[bool] = typer.Option(
        None,
        "--xkcd/--no-xkcd",
        help="Generate an XKCD-style passphrase with xkcdpass",
    ),
):
    """Generate secure random values and set them for the given keys."""
    from ..core.config import ConfigManager
    from .cmd.edit import randomize_command

    with reporting_errors():
        defaults = ConfigManager.get().randomize
        randomize_command(
            _state(ctx).env_file(),
            keys,
            length=defaults.length if length is None else length,
            numeric=defaults.numeric if numeric is None else numeric,
            symbol=defaults.symbol if symbol is None else symbol,
            xkcd=defaults.xkcd if xkcd is None else xkcd,
            xkcd_command=defaults.xkcd_command,
        )


@app.command()
def config(
    show: bool = typer.Option(
        False,
        "--show",
        help="Show current configuration",
    ),
    path: bool = typer.Option(
        False,
        "--path",
        help="Show configuration directory",
    ),
):
    """Manage configuration."""
    from ..core.global_paths import GlobalPath

    if path:
        console.print(GlobalPath.config(), soft_wrap=True)
        return

    if show:
        from ..core.config import ConfigManager

        with reporting_errors():
            cfg = ConfigManager.get()
        console.print_json(json.dumps(cfg.model_dump(mode="json", by_alias=True, exclude_none=True)))
        return

    console.print("Use --show to display configuration or --path to show config path")


if __name__ == "__main__":
    app()
