"""
Command Resolver.

Turns the raw argument list into exactly one Operation.

The first argument is either a command name (upload, shorten, stats) or
something we can infer a command from: an existing local path means
upload, an absolute URL means shorten. The existence check runs first,
so a file literally named like a URL is uploaded.
"""

import os
from collections.abc import Callable, Sequence
from urllib.parse import urlparse

from keiran_client.core.exceptions import UsageError
from keiran_client.schemas.operation import (
    Operation,
    ShortenOperation,
    StatsOperation,
    UploadOperation,
)

KNOWN_COMMANDS = ("upload", "shorten", "stats")

LONG_FLAGS = frozenset({"-long", "--long"})

USAGE = """Usage:
  client upload [-long] <file_path>
  client shorten [-long] <url>
  client stats

You can also directly provide a file or URL:
  client <file_path>    (uploads the file)
  client <url>          (shortens the URL)"""

COMMAND_USAGE = {
    "upload": "Usage: client upload [-long] <file_path>",
    "shorten": "Usage: client shorten [-long] <url>",
    "stats": "Usage: client stats",
}

_TRUE_VALUES = frozenset({"1", "t", "true"})
_FALSE_VALUES = frozenset({"0", "f", "false"})


def is_known_command(arg: str) -> bool:
    """Check whether the argument is an explicit command name."""
    return arg in KNOWN_COMMANDS


def is_absolute_url(arg: str) -> bool:
    """True for URLs with both a scheme and a network location."""
    try:
        parsed = urlparse(arg)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def guess_command(arg: str, file_exists: Callable[[str], bool] = os.path.exists) -> str | None:
    """
    Infer the command for an argument that is not a command name.

    Returns:
        "upload", "shorten", or None when nothing fits
    """
    if file_exists(arg):
        return "upload"
    if is_absolute_url(arg):
        return "shorten"
    return None


def _parse_bool(flag: str, value: str, command: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise UsageError(
        f'invalid boolean value "{value}" for flag {flag}',
        usage=COMMAND_USAGE[command],
    )


def _parse_command_args(command: str, args: Sequence[str]) -> tuple[bool, list[str]]:
    """
    Split command arguments into the -long flag and positionals.

    Flags may come before or after the positional; "--" ends flag parsing.
    """
    keep_long = False
    positionals: list[str] = []
    flags_done = False

    for arg in args:
        if flags_done or arg == "-" or not arg.startswith("-"):
            positionals.append(arg)
            continue
        if arg == "--":
            flags_done = True
            continue

        name, sep, value = arg.partition("=")
        if command == "stats" or name not in LONG_FLAGS:
            raise UsageError(
                f"flag provided but not defined: {name}",
                usage=COMMAND_USAGE[command],
            )
        keep_long = _parse_bool(name, value, command) if sep else True

    return keep_long, positionals


def build_operation(command: str, args: Sequence[str]) -> Operation:
    """Parse the arguments that follow a command name."""
    keep_long, positionals = _parse_command_args(command, args)

    if command == "stats":
        if positionals:
            raise UsageError(
                f"unexpected argument: {positionals[0]}",
                usage=COMMAND_USAGE[command],
            )
        return StatsOperation()

    if len(positionals) != 1 or not positionals[0]:
        raise UsageError("", usage=COMMAND_USAGE[command])

    if command == "upload":
        return UploadOperation(path=positionals[0], keep_long=keep_long)
    return ShortenOperation(url=positionals[0], keep_long=keep_long)


def resolve_operation(
    args: Sequence[str],
    file_exists: Callable[[str], bool] = os.path.exists,
) -> Operation:
    """
    Resolve the raw argument list into one Operation.

    Args:
        args: Arguments after the program name
        file_exists: Path existence check, injectable for tests

    Raises:
        UsageError: When no operation can be built from the arguments
    """
    if not args:
        raise UsageError("", usage=USAGE)

    command = args[0]
    if is_known_command(command):
        return build_operation(command, args[1:])

    guessed = guess_command(command, file_exists)
    if guessed is None:
        raise UsageError("Could not determine what you want to do.", usage=USAGE)

    # The inferred argument stays in place as the positional
    return build_operation(guessed, args)
