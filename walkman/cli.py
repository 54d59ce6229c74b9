"""Command-line entry point."""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from walkman.downloader import YtDlpDownloader
from walkman.id3 import Id3MetadataWriter
from walkman.interactors import DownloadVideoInteractor, DownloadVideoRequestModel
from walkman.views import DownloadVideoView

DEFAULT_URL = "https://youtu.be/dQw4w9WgXcQ?list=RDdQw4w9WgXcQ"


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the walkman command."""
    parser = argparse.ArgumentParser(prog="walkman")
    commands = parser.add_subparsers(dest="command", required=True)
    download_video = commands.add_parser("download-video")
    download_video.add_argument("-i", dest="url", default=DEFAULT_URL)
    download_video.add_argument("-o", dest="directory", type=Path, default=Path.cwd())
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the walkman command and return its exit status."""
    arguments = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    if not arguments:
        parser.print_help(sys.stderr)
        return 2

    args = parser.parse_args(arguments)
    interactor = DownloadVideoInteractor(DownloadVideoView(), YtDlpDownloader(), Id3MetadataWriter())
    model = DownloadVideoRequestModel(url=args.url, directory=args.directory)
    try:
        asyncio.run(interactor.apply(model))
    except Exception as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())