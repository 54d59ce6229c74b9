"""Writing ID3v2.3 tags into MP3 files."""

from __future__ import annotations

import asyncio
import codecs
from pathlib import Path

from walkman.domain import Video, VideoMetadata
from walkman.gateways import MetadataWriter

HEADER_SIZE = 10
_MAGIC = b"ID3"
_FOOTER_FLAG = 0x10
_LATIN1 = b"\x00"
_UTF16 = b"\x01"


def _syncsafe(value: int) -> bytes:
    if value >= 1 << 28:
        raise ValueError("ID3 tag is too large")
    return bytes((value >> shift) & 0x7F for shift in (21, 14, 7, 0))


def _text_frame(frame_id: str, text: str) -> bytes:
    try:
        payload = _LATIN1 + text.encode("latin-1")
    except UnicodeEncodeError:
        payload = _UTF16 + codecs.BOM_UTF16_LE + text.encode("utf-16-le")
    return frame_id.encode("ascii") + len(payload).to_bytes(4, "big") + b"\x00\x00" + payload


def encode_tag(metadata: VideoMetadata) -> bytes:
    """Encode title, album, artists and genres as a complete ID3v2.3 tag."""
    frames = b"".join(
        (
            _text_frame("TIT2", metadata.title),
            _text_frame("TALB", metadata.album),
            _text_frame("TPE1", ", ".join(metadata.artists)),
            _text_frame("TCON", ", ".join(metadata.genres)),
        )
    )
    return _MAGIC + bytes((3, 0, 0)) + _syncsafe(len(frames)) + frames


def strip_tag(data: bytes) -> bytes:
    """Remove a leading ID3v2 tag, if there is one, and return the rest."""
    if len(data) < HEADER_SIZE or not data.startswith(_MAGIC):
        return data
    flags = data[5]
    size_bytes = data[6:HEADER_SIZE]
    if any(byte & 0x80 for byte in size_bytes):
        raise ValueError("malformed ID3v2 tag size")
    size = 0
    for byte in size_bytes:
        size = (size << 7) | byte
    end = HEADER_SIZE + size + (HEADER_SIZE if flags & _FOOTER_FLAG else 0)
    if end > len(data):
        raise ValueError("truncated ID3v2 tag")
    return data[end:]


def _write_file(path: Path, metadata: VideoMetadata) -> None:
    audio = strip_tag(path.read_bytes())
    path.write_bytes(encode_tag(metadata) + audio)


class Id3MetadataWriter(MetadataWriter):
    """Replaces the ID3v2 tag of a downloaded file with one built from its metadata."""

    async def write_video(self, video: Video) -> None:
        await asyncio.to_thread(_write_file, video.path, video.metadata)