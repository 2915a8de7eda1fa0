"""Typer application and CLI entry point for jsonreference.

The :func:`main` function is the ``jsonref`` console-script entry point
declared in ``pyproject.toml``.  It installs a SIGINT handler and invokes the
Typer app.  :class:`~jsonreference.exceptions.JsonReferenceError` instances
that escape a command exit with their ``exit_code``; anything else is
written to a crash log under the data directory.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from jsonreference import __version__
from jsonreference.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="jsonref",
    help="Parse, inspect and resolve JSON References.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

from jsonreference.commands import inspect_command, resolve_command  # noqa: E402

app.command("inspect")(inspect_command)
app.command("resolve")(resolve_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"jsonref {__version__}")
        raise typer.Exit()


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
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
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
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~jsonreference.output.OutputManager`.
    ``--json`` and ``--plain`` win over the configured output format
    (``JSONREF_FORMAT`` or ``output.format`` in ``./jsonref.json``).
    """
    from jsonreference.config import resolve_config
    from jsonreference.exceptions import ConfigError
    from jsonreference.output import OutputFormat, OutputManager, error, set_output

    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        try:
            fmt = OutputFormat(resolve_config().output.format)
        except ConfigError as exc:
            set_output(OutputManager(no_color=no_color))
            error(str(exc))
            raise typer.Exit(code=exc.exit_code) from None

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from jsonreference.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``jsonref`` console script.

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
        from jsonreference.exceptions import JsonReferenceError
        from jsonreference.output import error

        if isinstance(exc, JsonReferenceError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
