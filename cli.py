#!/usr/bin/env python3
"""
keiran-client CLI.

Development entry point; the installed console script is `client`.

Usage:
    python cli.py --help
    python cli.py upload [-long] <file_path>
    python cli.py shorten [-long] <url>
    python cli.py stats
    python cli.py <file_path>     # uploads the file
    python cli.py <url>           # shortens the URL

Options:
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
    --no-progress     Hide the upload progress bar
    --help            Show help message
"""

import sys
from pathlib import Path

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from keiran_client.cli.app import run  # noqa: E402

if __name__ == "__main__":
    run()
