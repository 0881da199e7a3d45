from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class Written:
    url: str
    path: str
    bytes_len: int
    additions: int
    removals: int


@dataclass(frozen=True, slots=True)
class SkippedUnchanged:
    url: str
    path: str


@dataclass(frozen=True, slots=True)
class SkippedNotModified:
    url: str
    path: str


@dataclass(frozen=True, slots=True)
class Failed:
    url: str
    path: str
    reason: str


CycleOutcome = Union[Written, SkippedUnchanged, SkippedNotModified, Failed]


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Classified result of one conditional GET that reached the server."""

    not_modified: bool
    etag: Optional[str] = None
    body: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LineDiff:
    changed: bool
    additions: int
    removals: int
