"""
keiran-client.

Command-line client for the keiran.cc content-sharing service.

- cli/: Typer entry point, command resolver, request encoder,
  response interpreter, progress bar, HTTP client
- core/: configuration, logging, exceptions
- schemas/: operations and server response bodies
"""

__version__ = "0.1.0"
