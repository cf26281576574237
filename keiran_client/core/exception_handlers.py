"""
Exception Handlers.

Converts client exceptions into user-facing output and a process exit
code. All exceptions are logged; usage problems are printed to stdout
next to the usage text, everything else goes to stderr.

Usage:
    from keiran_client.core.exception_handlers import handle_error

    try:
        ...
    except ApplicationError as exc:
        raise typer.Exit(handle_error(exc, console, err_console))
"""

from rich.console import Console
from rich.markup import escape

from keiran_client.core.exceptions import (
    ApplicationError,
    FileError,
    NetworkError,
    ProtocolError,
    ServerError,
    UsageError,
)
from keiran_client.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

# Usage problems end the run cleanly; everything else is a failure
EXCEPTION_EXIT_CODE_MAP: dict[type[ApplicationError], int] = {
    UsageError: 0,
    FileError: 1,
    NetworkError: 1,
    ServerError: 1,
    ProtocolError: 1,
}

INTERRUPTED_EXIT_CODE = 130


def exit_code_for(exc: ApplicationError) -> int:
    """Exit code for an application error, 1 when the type is not mapped."""
    return EXCEPTION_EXIT_CODE_MAP.get(type(exc), 1)


def handle_error(exc: ApplicationError, console: Console, err_console: Console) -> int:
    """
    Report an ApplicationError and return the exit code to use.

    Args:
        exc: The error raised by a command
        console: Console bound to stdout
        err_console: Console bound to stderr

    Returns:
        Process exit code
    """
    exit_code = exit_code_for(exc)

    log_fields = {"code": exc.code, "error_message": exc.message, "exit_code": exit_code}
    if isinstance(exc, ServerError):
        log_fields["status_code"] = exc.status

    if isinstance(exc, UsageError):
        log_with_source(logger, "cli", "warning", "Usage error", **log_fields)
        if exc.message:
            console.print(escape(exc.message), soft_wrap=True)
        if exc.usage:
            console.print(escape(exc.usage), soft_wrap=True)
        return exit_code

    if isinstance(exc, FileError):
        log_with_source(logger, "cli", "warning", "File error", path=exc.path, **log_fields)
    else:
        log_with_source(logger, "cli", "error", "Request failed", **log_fields)

    err_console.print(f"[red]Error:[/red] {escape(exc.message)}", soft_wrap=True)
    return exit_code
