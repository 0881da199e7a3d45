from __future__ import annotations


class KnotDownloaderError(Exception):
    """Base class for errors raised by knot-downloader."""


class ConfigError(KnotDownloaderError):
    """Configuration is missing, unreadable, or invalid. Fatal at startup."""


class DirectoryCreationError(KnotDownloaderError):
    """A parent directory could not be created. Aborts the whole cycle."""


class WriteError(KnotDownloaderError):
    """A mirrored file could not be written. Aborts the whole cycle."""


class FetchError(KnotDownloaderError):
    """A single resource could not be fetched. Recovered per descriptor."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to download {url}: {reason}")
        self.url = url
        self.reason = reason
