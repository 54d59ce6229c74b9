"""Core entities: videos, playlists and their metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class VideoMetadata:
    """Descriptive tags attached to a downloaded video."""

    title: str
    album: str
    artists: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)


@dataclass
class Video:
    """A single downloaded video and the file it was saved to."""

    id: str
    metadata: VideoMetadata
    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path)


@dataclass
class PlaylistMetadata:
    """Descriptive tags attached to a playlist."""

    title: str


@dataclass
class Playlist:
    """A playlist and the videos that belong to it."""

    id: str
    metadata: PlaylistMetadata
    videos: list[Video] = field(default_factory=list)