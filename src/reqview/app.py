"""Typer application and CLI entry point for reqview.

This module wires together the top-level Typer application and registers
the built-in sub-commands (``fetch``, ``shell``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers, registers commands and
invokes the Typer app. :class:`~reqview.exceptions.ReqviewError` exits with
its mapped code; any other exception is written to a crash log under the
data directory.

See Also:
    :mod:`reqview.config`: Configuration resolution.
    :mod:`reqview.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from reqview import __version__
from reqview.commands.config import config_app
from reqview.commands.fetch import fetch_command
from reqview.commands.shell import shell_command
from reqview.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="reqview",
    help="Send an HTTP request and pretty-print the response.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("fetch")(fetch_command)
app.command("shell")(shell_command)
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"reqview {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Send reqview's own log records to stderr when ``--verbose`` is active."""
    logger = logging.getLogger("reqview")
    if not verbose:
        logger.setLevel(logging.WARNING)
        return
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("[debug] %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output, without the display panel."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Request timeout in seconds."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write the rendered body to a file."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~reqview.output.OutputManager` from CLI
    flags and stores the options that affect configuration resolution in
    ``ctx.obj``.
    """
    from reqview.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.PLAIN if plain_output else OutputFormat.AUTO

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
        output_file=output_file,
    )
    set_output(output)
    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["no_color"] = no_color
    ctx.obj["timeout"] = timeout
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from reqview.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``reqview`` console script.

    Unhandled :class:`~reqview.exceptions.ReqviewError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from reqview.exceptions import ReqviewError
        from reqview.output import error

        if isinstance(exc, ReqviewError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
