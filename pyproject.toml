[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "walkman"
version = "0.1.0"
description = "Download audio from video sites with yt-dlp and tag the resulting MP3 files"
requires-python = ">=3.10"
keywords = ["yt-dlp", "audio", "mp3", "id3", "downloader", "music"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio",
]
dependencies = [
    "rich",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
walkman = "walkman.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["walkman"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
