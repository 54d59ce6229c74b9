"""Download events and the interfaces of downloaders and metadata writers."""

from __future__ import annotations

import asyncio
import os
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Union

from walkman.domain import Playlist, Video

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class VideoDownloading:
    """Progress report for a video that is still downloading."""

    percentage: int
    eta: str
    size: str
    speed: str


@dataclass(frozen=True)
class VideoCompleted:
    """A video finished downloading."""

    video: Video


@dataclass(frozen=True)
class VideoFailed:
    """A video could not be downloaded."""

    error: str


VideoDownloadEvent = Union[VideoDownloading, VideoCompleted, VideoFailed]


@dataclass(frozen=True)
class PlaylistDownloading:
    """Progress report for a playlist: one more video is done."""

    video: Video
    downloaded: int
    total: int


@dataclass(frozen=True)
class PlaylistCompleted:
    """A whole playlist finished downloading."""

    playlist: Playlist


@dataclass(frozen=True)
class PlaylistFailed:
    """A playlist could not be downloaded."""

    error: str


PlaylistDownloadEvent = Union[PlaylistDownloading, PlaylistCompleted, PlaylistFailed]


class Downloader(ABC):
    """Fetches videos and playlists, reporting progress as event streams."""

    @abstractmethod
    async def download_video(
        self, url: str, directory: PathLike
    ) -> AsyncIterator[VideoDownloadEvent]:
        """Start downloading one video and return its event stream."""

    @abstractmethod
    async def download_playlist(
        self, url: str, directory: PathLike
    ) -> tuple[AsyncIterator[PlaylistDownloadEvent], AsyncIterator[VideoDownloadEvent]]:
        """Start downloading a playlist and return its playlist and video event streams."""


class MetadataWriter(ABC):
    """Writes metadata tags into downloaded files."""

    @abstractmethod
    async def write_video(self, video: Video) -> None:
        """Write the tags of one video into its file."""

    async def write_playlist(self, playlist: Playlist) -> None:
        """Write the tags of every video in the playlist concurrently.

        Failures of individual videos do not stop the others and are not reported.
        """
        await asyncio.gather(
            *(self.write_video(video) for video in playlist.videos),
            return_exceptions=True,
        )