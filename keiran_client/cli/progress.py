"""
Upload Progress Reporting.

Observes bytes handed to the transport and renders a bar on stderr.
Purely observational: it never touches the request, and each update is
a counter increment plus a clock read. Renders closer together than the
throttle interval are coalesced into one.
"""

import time
from collections.abc import Callable
from types import TracebackType

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TransferSpeedColumn,
)

DEFAULT_THROTTLE_SECONDS = 0.065


class UploadProgress:
    """
    Throttled rich progress bar for one upload.

    Usage:
        with UploadProgress(total=size) as progress:
            body = MultipartFileBody(..., on_chunk=progress.advance)
            ...
    """

    def __init__(
        self,
        total: int,
        description: str = "📤 Uploading",
        console: Console | None = None,
        throttle_seconds: float = DEFAULT_THROTTLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.total = total
        self.completed = 0
        self.renders = 0
        self.throttle_seconds = throttle_seconds
        self._clock = clock
        self._last_render: float | None = None
        self._finished = False

        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(bar_width=None),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=console or Console(stderr=True),
            auto_refresh=False,
            transient=False,
        )
        self._task_id = self._progress.add_task(description, total=total)

    def __enter__(self) -> "UploadProgress":
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.finish()

    def advance(self, nbytes: int) -> None:
        """Record bytes written; render only if the throttle window has passed."""
        self.completed += nbytes
        now = self._clock()
        if self._last_render is not None and now - self._last_render < self.throttle_seconds:
            return
        self._render(now)

    def _render(self, now: float) -> None:
        self._progress.update(self._task_id, completed=self.completed)
        self._progress.refresh()
        self._last_render = now
        self.renders += 1

    def finish(self) -> None:
        """Force a final render and end the line. Safe to call twice."""
        if self._finished:
            return
        self._finished = True
        self._render(self._clock())
        self._progress.stop()
        # rich only ends the line itself on a terminal
        if not self._progress.console.is_terminal:
            self._progress.console.line()


class NullProgress:
    """Drop-in replacement when progress output is disabled."""

    def __init__(self, total: int = 0) -> None:
        self.total = total
        self.completed = 0

    def __enter__(self) -> "NullProgress":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        return None

    def advance(self, nbytes: int) -> None:
        self.completed += nbytes

    def finish(self) -> None:
        return None
