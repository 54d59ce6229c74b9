"""Download audio with yt-dlp, show its progress and tag the resulting MP3 files."""

__version__ = "0.1.0"