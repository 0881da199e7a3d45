from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

from knot_downloader.config.models import AppConfig, FileEntry
from knot_downloader.errors import FetchError
from knot_downloader.sync.diff import diff_lines
from knot_downloader.sync.etag_cache import EtagCache
from knot_downloader.sync.fetcher import HttpFetcher
from knot_downloader.sync.io import atomic_write_text, ensure_parent_dir, read_text_or_empty
from knot_downloader.sync.models import (
    CycleOutcome,
    Failed,
    SkippedNotModified,
    SkippedUnchanged,
    Written,
)

logger = logging.getLogger(__name__)

OutcomeSink = Callable[[CycleOutcome], None]


class SyncCycleExecutor:
    """
    Runs one fetch-compare-write pass over every configured file.

    Fetch failures are isolated to their entry. Directory and write failures
    propagate and abort the cycle.
    """

    def __init__(
        self,
        *,
        config: AppConfig,
        fetcher: HttpFetcher,
        etags: EtagCache,
        on_outcome: Optional[OutcomeSink] = None,
    ) -> None:
        self._config = config
        self._fetcher = fetcher
        self._etags = etags
        self._on_outcome = on_outcome

    async def run_cycle(self) -> list[CycleOutcome]:
        outcomes: list[CycleOutcome] = []
        for entry in self._config.files:
            outcome = await self.sync_one(entry)
            if self._on_outcome is not None:
                self._on_outcome(outcome)
            outcomes.append(outcome)
        return outcomes

    async def sync_one(self, entry: FileEntry) -> CycleOutcome:
        url, path = entry.url, entry.path
        try:
            response = await self._fetcher.conditional_get(url, etag=self._etags.get(url))
        except FetchError as e:
            return Failed(url=url, path=path, reason=e.reason)

        if response.not_modified:
            return SkippedNotModified(url=url, path=path)

        if response.etag:
            self._etags.put(url, response.etag)

        body = response.body or ""
        target = Path(path)
        if self._config.create_directories:
            ensure_parent_dir(target)

        current = await asyncio.to_thread(read_text_or_empty, target)
        diff = await asyncio.to_thread(diff_lines, current, body)
        if not diff.changed:
            return SkippedUnchanged(url=url, path=path)

        atomic_write_text(target, body)
        return Written(
            url=url,
            path=path,
            bytes_len=len(body.encode("utf-8")),
            additions=diff.additions,
            removals=diff.removals,
        )


def summarize(outcomes: Sequence[CycleOutcome]) -> dict[str, int]:
    counts = {"written": 0, "unchanged": 0, "not_modified": 0, "failed": 0}
    for outcome in outcomes:
        if isinstance(outcome, Written):
            counts["written"] += 1
        elif isinstance(outcome, SkippedUnchanged):
            counts["unchanged"] += 1
        elif isinstance(outcome, SkippedNotModified):
            counts["not_modified"] += 1
        elif isinstance(outcome, Failed):
            counts["failed"] += 1
    return counts
