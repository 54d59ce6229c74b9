"""Video downloads driven by the yt-dlp command-line program."""

from __future__ import annotations

import asyncio
import re
from collections.abc import AsyncIterator, Sequence
from contextlib import suppress
from pathlib import Path
from typing import Optional, Union

from walkman.domain import Video, VideoMetadata
from walkman.gateways import (
    Downloader,
    PathLike,
    PlaylistDownloadEvent,
    VideoCompleted,
    VideoDownloadEvent,
    VideoDownloading,
    VideoFailed,
)

NOT_AVAILABLE = "NA"
DEFAULT_ETA = "00:00"

PROGRESS_TEMPLATE = (
    "[video-downloading]%(progress._percent_str)s;%(progress._eta_str)s;"
    "%(progress._total_bytes_str)s;%(progress._speed_str)s"
)
EXEC_TEMPLATE = (
    "echo [video-completed]%(filepath)s;%(id)s;%(title)s;%(album)s;%(artist)s;%(genre)s"
)

_DOWNLOADING = re.compile(
    r"\[video-downloading\]\s*(?P<percent>\d+)(?:\.\d+)?%;(?P<eta>[^;]+);"
    r"\s*(?P<size>[^;]+);\s*(?P<speed>[^\r\n]+)"
)
_COMPLETED = re.compile(
    r"\[video-completed\](?P<filepath>[^;]+);(?P<id>[^;]+);(?P<title>[^;]+);"
    r"(?P<album>[^;]+);(?P<artist>[^;]+);(?P<genre>[^\r\n]+)"
)
_FAILED = re.compile(r"ERROR: \{(?P<error>[^}]*)\}")


def parse_attr(captured: str) -> Optional[str]:
    """Trim a captured field; yt-dlp's "NA" placeholder becomes None."""
    value = captured.strip()
    return None if value == NOT_AVAILABLE else value


def parse_multivalued_attr(captured: str) -> list[str]:
    """Split a comma-separated field into trimmed values; "NA" gives no values."""
    value = parse_attr(captured)
    if value is None:
        return []
    return [part.strip() for part in value.split(",")]


def _parse_percentage(text: str) -> int:
    if text.isascii() and int(text) <= 0xFF:
        return int(text)
    return 0


def parse_line(line: str) -> Optional[VideoDownloadEvent]:
    """Turn one line of yt-dlp output into an event, or None if it carries none."""
    match = _DOWNLOADING.search(line)
    if match:
        percent = parse_attr(match["percent"])
        size = parse_attr(match["size"])
        speed = parse_attr(match["speed"])
        if percent is None or size is None or speed is None:
            return None
        eta = parse_attr(match["eta"])
        return VideoDownloading(
            percentage=_parse_percentage(percent),
            eta=DEFAULT_ETA if eta is None else eta,
            size=size,
            speed=speed,
        )

    match = _COMPLETED.search(line)
    if match:
        video_id = parse_attr(match["id"])
        title = parse_attr(match["title"])
        album = parse_attr(match["album"])
        path = parse_attr(match["filepath"])
        if video_id is None or title is None or album is None or path is None:
            return None
        metadata = VideoMetadata(
            title=title,
            album=album,
            artists=parse_multivalued_attr(match["artist"]),
            genres=parse_multivalued_attr(match["genre"]),
        )
        return VideoCompleted(Video(id=video_id, metadata=metadata, path=Path(path)))

    match = _FAILED.fullmatch(line)
    if match:
        error = parse_attr(match["error"])
        if error is not None:
            return VideoFailed(error)
    return None


def build_command(url: str, directory: PathLike) -> list[str]:
    """The yt-dlp command line that downloads one video as MP3 into a directory."""
    return [
        "yt-dlp",
        url,
        "--paths",
        str(directory),
        "--format",
        "bestaudio",
        "--extract-audio",
        "--audio-format",
        "mp3",
        "--output",
        "%(title)s.%(ext)s",
        "--quiet",
        "--newline",
        "--abort-on-error",
        "--no-playlist",
        "--force-overwrites",
        "--progress",
        "--progress-template",
        PROGRESS_TEMPLATE,
        "--exec",
        EXEC_TEMPLATE,
        "--color",
        "no_color",
    ]


def _strip_line_ending(raw: bytes) -> str:
    line = raw.decode("utf-8")
    line = line.removesuffix("\n")
    return line.removesuffix("\r")


class YtDlpDownloader(Downloader):
    """Runs yt-dlp and turns its progress output into download events."""

    def __init__(self, program: Union[str, Sequence[str]] = "yt-dlp") -> None:
        self._program = (program,) if isinstance(program, str) else tuple(program)

    async def download_video(
        self, url: str, directory: PathLike
    ) -> AsyncIterator[VideoDownloadEvent]:
        command = [*self._program, *build_command(url, directory)[1:]]
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
        return self._events(process)

    async def download_playlist(
        self, url: str, directory: PathLike
    ) -> tuple[AsyncIterator[PlaylistDownloadEvent], AsyncIterator[VideoDownloadEvent]]:
        raise RuntimeError("playlist downloads are not supported by the yt-dlp downloader")

    @staticmethod
    async def _events(
        process: asyncio.subprocess.Process,
    ) -> AsyncIterator[VideoDownloadEvent]:
        finished = False
        try:
            if process.stdout is not None:
                async for raw in process.stdout:
                    try:
                        line = _strip_line_ending(raw)
                    except UnicodeDecodeError:
                        break
                    event = parse_line(line)
                    if event is not None:
                        yield event
                else:
                    finished = True
        finally:
            if not finished and process.returncode is None:
                with suppress(ProcessLookupError):
                    process.kill()
            await process.wait()