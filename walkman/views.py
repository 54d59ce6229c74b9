"""Terminal presentation of download progress."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn
from rich.text import Text

from walkman.gateways import VideoCompleted, VideoDownloadEvent, VideoDownloading, VideoFailed
from walkman.interactors import DownloadVideoOutputBoundary


class DownloadVideoView(DownloadVideoOutputBoundary):
    """Shows a progress bar for one video download and reports its outcome."""

    def __init__(
        self,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
    ) -> None:
        self._console = console if console is not None else Console()
        self._error_console = error_console if error_console is not None else Console(stderr=True)
        self._progress = Progress(
            TextColumn("{task.fields[prefix]}"),
            BarColumn(bar_width=50),
            TextColumn("{task.fields[message]}"),
            console=self._console,
            auto_refresh=False,
        )
        self._task = self._progress.add_task("", total=100, prefix="", message="")
        self._running = False

    def _start(self) -> None:
        if not self._running:
            self._progress.start()
            self._running = True

    def _stop(self) -> None:
        if self._running:
            self._progress.stop()
            self._running = False

    async def update(self, event: VideoDownloadEvent) -> None:
        match event:
            case VideoDownloading(percentage=percentage, eta=eta, size=size, speed=speed):
                self._start()
                self._progress.update(
                    self._task,
                    completed=percentage,
                    prefix=f"{size:>10} {speed:>10} {eta:>4}",
                    message=f"{percentage}%",
                )
                self._progress.refresh()
            case VideoCompleted(video=video):
                self._start()
                self._progress.update(self._task, completed=100)
                self._stop()
                self._console.print(
                    Text.assemble("Downloaded ", (video.metadata.title, "bold green"), ".")
                )
            case VideoFailed(error=error):
                self._stop()
                self._error_console.print(Text(error, style="bold red"))