"""Typer application and console-script entry point.

The root callback turns the global flags into an
:class:`~specmock.output.OutputManager` and a logging level; the commands
themselves live in :mod:`specmock.commands` and are attached by
:func:`register_commands`.

:func:`main` is what the ``specmock`` script runs. A
:class:`~specmock.exceptions.SpecmockError` that escapes a command becomes
its exit code; anything else is written to a crash log under
:func:`~specmock.config.get_data_dir` and exits with
:data:`~specmock.exit_codes.EXIT_GENERIC_FAILURE`.
"""

from __future__ import annotations

import logging
import sys
import traceback
from datetime import datetime

import typer
from rich.console import Console
from rich.logging import RichHandler

from specmock import __version__
from specmock.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="specmock",
    help="Serve authored OpenAPI 3.x examples as a mock backend.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"specmock {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send the ``specmock`` loggers to stderr through Rich.

    INFO logs one line per served request. DEBUG (``--verbose``) adds the
    engine stage that rejected a request. WARNING (``--quiet``) silences
    both.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger("specmock")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Print data as JSON."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Print data as plain, tab-separated text."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Never use colour."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only print data and errors."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug detail, including why a request got 404."
    ),
) -> None:
    """Install output and logging from the global flags."""
    from specmock.output import OutputFormat, OutputManager, set_output

    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = OutputFormat.AUTO

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    configure_logging(verbose=verbose, quiet=quiet)


def register_commands() -> None:
    """Attach the built-in commands to :data:`app`. Safe to call repeatedly."""
    from specmock.commands.resolve import resolve_command
    from specmock.commands.routes import routes_command
    from specmock.commands.serve import serve_command

    registered = {command.name for command in app.registered_commands}
    for name, callback in (
        ("serve", serve_command),
        ("resolve", resolve_command),
        ("routes", routes_command),
    ):
        if name not in registered:
            app.command(name)(callback)


def _write_crash_log() -> str:
    """Save the current traceback under the data directory and return its path."""
    from specmock.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """Run the CLI. Always ends in ``SystemExit``."""
    from specmock.exceptions import SpecmockError
    from specmock.output import error

    try:
        register_commands()
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nStopped.\n")
        sys.exit(130)
    except SpecmockError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception:
        error(f"Unexpected error. Debug log: {_write_crash_log()}")
        sys.exit(EXIT_GENERIC_FAILURE)
