"""Use cases: download a video or a playlist and tag what was downloaded."""

from __future__ import annotations

import asyncio
import os
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from walkman.gateways import (
    Downloader,
    MetadataWriter,
    PlaylistCompleted,
    PlaylistDownloadEvent,
    VideoCompleted,
    VideoDownloadEvent,
)


@dataclass
class DownloadVideoRequestModel:
    """Where to download a single video from, and where to put it."""

    url: str
    directory: Path

    def __post_init__(self) -> None:
        self.directory = Path(self.directory)


@dataclass
class DownloadPlaylistRequestModel:
    """Where to download a playlist from, and where to put it."""

    url: str
    directory: Path

    def __post_init__(self) -> None:
        self.directory = Path(self.directory)


class DownloadVideoInputBoundary(ABC):
    @abstractmethod
    async def apply(self, model: DownloadVideoRequestModel) -> None:
        """Carry out a video download request."""


class DownloadVideoOutputBoundary(ABC):
    @abstractmethod
    async def update(self, event: VideoDownloadEvent) -> None:
        """Present one video download event."""


class DownloadPlaylistInputBoundary(ABC):
    @abstractmethod
    async def apply(self, model: DownloadPlaylistRequestModel) -> None:
        """Carry out a playlist download request."""


class DownloadPlaylistOutputBoundary(DownloadVideoOutputBoundary):
    @abstractmethod
    async def update_playlist(self, event: PlaylistDownloadEvent) -> None:
        """Present one playlist download event."""


class DownloadVideoInteractor(DownloadVideoInputBoundary):
    """Downloads one video, reports every event and tags the finished file."""

    def __init__(
        self,
        output_boundary: DownloadVideoOutputBoundary,
        downloader: Downloader,
        metadata_writer: MetadataWriter,
    ) -> None:
        self.output_boundary = output_boundary
        self.downloader = downloader
        self.metadata_writer = metadata_writer

    async def apply(self, model: DownloadVideoRequestModel) -> None:
        events = await self.downloader.download_video(model.url, model.directory)
        async for event in events:
            await self.output_boundary.update(event)
            if isinstance(event, VideoCompleted):
                await self.metadata_writer.write_video(event.video)


class DownloadPlaylistInteractor(DownloadPlaylistInputBoundary):
    """Downloads a playlist, following its playlist and video streams side by side."""

    def __init__(
        self,
        output_boundary: DownloadPlaylistOutputBoundary,
        downloader: Downloader,
        metadata_writer: MetadataWriter,
    ) -> None:
        self.output_boundary = output_boundary
        self.downloader = downloader
        self.metadata_writer = metadata_writer

    async def apply(self, model: DownloadPlaylistRequestModel) -> None:
        playlist_events, video_events = await self.downloader.download_playlist(
            model.url, model.directory
        )

        async def follow_playlist() -> None:
            async for event in playlist_events:
                await self.output_boundary.update_playlist(event)
                if isinstance(event, PlaylistCompleted):
                    await self.metadata_writer.write_playlist(event.playlist)

        async def follow_videos() -> None:
            async for event in video_events:
                await self.output_boundary.update(event)

        results = await asyncio.gather(follow_playlist(), follow_videos(), return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result


_Consumer = Callable[[], Awaitable[None]]
_Stream = AsyncIterator[Union[VideoDownloadEvent, PlaylistDownloadEvent]]
_PathLike = Union[str, "os.PathLike[str]"]