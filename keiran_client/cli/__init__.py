"""
CLI Client Module.

Command-line client built with Typer for talking to the
content-sharing server.

Architecture:
- resolver: raw arguments -> one Operation (with command inference)
- encoder: Operation -> HTTP request (multipart upload, JSON shorten)
- client: the only component that touches the network (httpx)
- interpreter: HTTP response -> ServerResponse -> rendered summary
- progress: upload bar on stderr, never on stdout

Usage:
    client --help
    client upload [-long] <file_path>
    client shorten [-long] <url>
    client stats
    client <file_path> | <url>
"""
