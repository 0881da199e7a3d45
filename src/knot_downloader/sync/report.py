from __future__ import annotations

import logging

from knot_downloader.logging import GREEN, RED, colorize
from knot_downloader.sync.models import (
    CycleOutcome,
    Failed,
    SkippedNotModified,
    SkippedUnchanged,
    Written,
)
from knot_downloader.sync.utils import format_bytes

logger = logging.getLogger(__name__)


class OutcomeReporter:
    """Turns each cycle outcome into exactly one log line."""

    def __init__(self, *, color: bool) -> None:
        self._color = color

    def __call__(self, outcome: CycleOutcome) -> None:
        if isinstance(outcome, Written):
            logger.info(
                "Downloaded %s to %s (%s, %s/%s)",
                outcome.url,
                outcome.path,
                format_bytes(outcome.bytes_len),
                colorize(f"+{outcome.additions}", GREEN, enabled=self._color),
                colorize(f"-{outcome.removals}", RED, enabled=self._color),
            )
        elif isinstance(outcome, SkippedUnchanged):
            logger.debug("Skipped %s (no changes)", outcome.url)
        elif isinstance(outcome, SkippedNotModified):
            logger.debug("Skipped %s (not modified)", outcome.url)
        elif isinstance(outcome, Failed):
            logger.error("Failed to download %s: %s", outcome.url, outcome.reason)
        else:
            raise TypeError(f"Unknown cycle outcome: {outcome!r}")
