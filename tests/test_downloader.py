import sys
from pathlib import Path

import pytest

from walkman.domain import Video, VideoMetadata
from walkman.downloader import (
    EXEC_TEMPLATE,
    PROGRESS_TEMPLATE,
    YtDlpDownloader,
    build_command,
    parse_attr,
    parse_line,
    parse_multivalued_attr,
)
from walkman.gateways import VideoCompleted, VideoDownloading, VideoFailed


def test_parse_attr_trims():
    assert parse_attr("  value \t") == "value"


def test_parse_attr_not_available():
    assert parse_attr("  NA ") is None


def test_parse_multivalued_attr_splits_and_trims():
    assert parse_multivalued_attr(" a, b ,c ") == ["a", "b", "c"]


def test_parse_multivalued_attr_not_available():
    assert parse_multivalued_attr("NA") == []


def test_parse_downloading_line():
    event = parse_line("[video-downloading] 42.5%;00:10;  1.00MiB;  2.00MiB/s")
    assert event == VideoDownloading(percentage=42, eta="00:10", size="1.00MiB", speed="2.00MiB/s")


def test_parse_downloading_without_eta_uses_default():
    event = parse_line("[video-downloading]7%;NA;1.00MiB;2.00MiB/s")
    assert event == VideoDownloading(percentage=7, eta="00:00", size="1.00MiB", speed="2.00MiB/s")


def test_parse_downloading_without_size_is_dropped():
    assert parse_line("[video-downloading]7%;00:01;NA;2.00MiB/s") is None


def test_parse_downloading_overflowing_percentage_is_zero():
    event = parse_line("[video-downloading]300%;00:01;1.00MiB;2.00MiB/s")
    assert isinstance(event, VideoDownloading)
    assert event.percentage == 0


def test_parse_completed_line():
    event = parse_line("[video-completed]/music/song.mp3;abc123;Song;Album;A, B;Pop,Rock")
    assert event == VideoCompleted(
        Video(
            id="abc123",
            metadata=VideoMetadata(title="Song", album="Album", artists=["A", "B"], genres=["Pop", "Rock"]),
            path=Path("/music/song.mp3"),
        )
    )


def test_parse_completed_without_artists():
    event = parse_line("[video-completed]/music/song.mp3;abc123;Song;Album;NA;NA")
    assert isinstance(event, VideoCompleted)
    assert event.video.metadata.artists == []
    assert event.video.metadata.genres == []


def test_parse_completed_without_album_is_dropped():
    assert parse_line("[video-completed]/music/song.mp3;abc123;Song;NA;A;Pop") is None


def test_parse_failed_line():
    assert parse_line("ERROR: {video unavailable}") == VideoFailed("video unavailable")


def test_parse_failed_must_fill_whole_line():
    assert parse_line("  ERROR: {video unavailable}") is None
    assert parse_line("ERROR: {NA}") is None


def test_parse_unrelated_line():
    assert parse_line("[youtube] Extracting URL") is None


def test_build_command_layout(tmp_path):
    command = build_command("https://example.com/watch", tmp_path)
    assert command[:4] == ["yt-dlp", "https://example.com/watch", "--paths", str(tmp_path)]
    assert command[command.index("--progress-template") + 1] == PROGRESS_TEMPLATE
    assert command[command.index("--exec") + 1] == EXEC_TEMPLATE
    assert "--no-playlist" in command
    assert command[-2:] == ["--color", "no_color"]


_FAKE_PROGRAM = """\
import sys
directory = sys.argv[sys.argv.index("--paths") + 1]
print("[video-downloading] 50.0%;00:05; 3.00MiB; 1.00MiB/s", flush=True)
print("some noise", file=sys.stderr, flush=True)
print("[video-completed]" + directory + "/song.mp3;abc;Song;Album;A, B;Pop", flush=True)
"""


@pytest.mark.asyncio
async def test_download_video_streams_events(tmp_path):
    script = tmp_path / "fake.py"
    script.write_text(_FAKE_PROGRAM)
    downloader = YtDlpDownloader([sys.executable, str(script)])

    events = await downloader.download_video("https://example.com/watch", tmp_path)
    collected = [event async for event in events]

    assert collected == [
        VideoDownloading(percentage=50, eta="00:05", size="3.00MiB", speed="1.00MiB/s"),
        VideoCompleted(
            Video(
                id="abc",
                metadata=VideoMetadata(title="Song", album="Album", artists=["A", "B"], genres=["Pop"]),
                path=Path(f"{tmp_path}/song.mp3"),
            )
        ),
    ]


@pytest.mark.asyncio
async def test_download_video_missing_program(tmp_path):
    downloader = YtDlpDownloader(str(tmp_path / "missing-program"))
    with pytest.raises(FileNotFoundError):
        await downloader.download_video("https://example.com/watch", tmp_path)


@pytest.mark.asyncio
async def test_download_playlist_unsupported(tmp_path):
    with pytest.raises(RuntimeError):
        await YtDlpDownloader().download_playlist("https://example.com/list", tmp_path)