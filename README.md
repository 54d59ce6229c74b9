# walkman

`walkman` downloads the audio track of a video as an MP3 file and writes
its title, album, artists and genres into the file's ID3 tag.

Downloading is done by the `yt-dlp` program; walkman runs it, follows its
progress on a live progress bar, and tags the file once it is done.

## Requirements

- Python 3.10 or later
- `yt-dlp` on your `PATH`, together with `ffmpeg` for audio extraction

## Installation

```
pip install .
```

## Usage

Download a single video's audio into a directory:

```
walkman download-video -i "<video url>" -o ~/Music
```

Options of `download-video`:

- `-i URL` the video to download (a built-in example link if left out)
- `-o DIRECTORY` where the MP3 file is written (the current directory if left out)

Run without arguments, `walkman` prints its help and exits with status 2.

While the download runs, a progress bar shows size, speed, time remaining
and percentage. When it finishes, the title of the downloaded track is
printed and the ID3 tag is written. Errors reported by yt-dlp are printed
in red. If anything raises an error, it is printed as `Error: ...` and the
command exits with status 1.

## Tagging

`walkman.id3.Id3MetadataWriter` replaces any ID3v2 tag at the start of the
file with a new ID3v2.3 tag holding the title (`TIT2`), album (`TALB`),
artists (`TPE1`) and genres (`TCON`); several artists or genres are joined
with `", "`. Text that fits Latin-1 is stored as Latin-1, anything else as
UTF-16. `encode_tag` and `strip_tag` in the same module build and remove
such a tag on raw bytes.

## Using it as a library

The pieces can be combined in your own code:

```python
import asyncio
from pathlib import Path

from walkman.downloader import YtDlpDownloader
from walkman.id3 import Id3MetadataWriter
from walkman.interactors import DownloadVideoInteractor, DownloadVideoRequestModel
from walkman.views import DownloadVideoView

interactor = DownloadVideoInteractor(
    DownloadVideoView(), YtDlpDownloader(), Id3MetadataWriter()
)
asyncio.run(
    interactor.apply(DownloadVideoRequestModel(url="<video url>", directory=Path("music")))
)
```

- `walkman.downloader.parse_line` turns one line of yt-dlp output into a
  `VideoDownloading`, `VideoCompleted` or `VideoFailed` event (or `None`),
  and `build_command` gives the yt-dlp command line that is run.
- The view can be any `DownloadVideoOutputBoundary` subclass, and the
  download and tagging steps any `Downloader` or `MetadataWriter` subclass
  (all in `walkman.interactors` and `walkman.gateways`).
- `DownloadPlaylistInteractor` follows a downloader's playlist and video
  event streams side by side and tags every video of a completed playlist.

## What it does not do

There is no playlist download: `YtDlpDownloader.download_playlist` raises
`RuntimeError`, the command has no playlist subcommand, and no view for
playlist progress is provided. To use `DownloadPlaylistInteractor` you must
supply your own `Downloader` and `DownloadPlaylistOutputBoundary`.

## Running the tests

```
pip install ".[test]"
pytest
```