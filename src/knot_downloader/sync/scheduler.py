from __future__ import annotations

import asyncio
import logging
import signal
from typing import Literal, Optional

from knot_downloader.config.durations import format_duration
from knot_downloader.config.models import AppConfig
from knot_downloader.sync.etag_cache import EtagCache
from knot_downloader.sync.executor import OutcomeSink, SyncCycleExecutor, summarize
from knot_downloader.sync.fetcher import HttpFetcher

logger = logging.getLogger(__name__)

SchedulerState = Literal["idle", "running", "sleeping", "shutting_down", "terminated"]

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class SyncScheduler:
    """
    Drives sync cycles separated by the configured interval until stopped.

    A stop request is raced against both the running cycle and the sleep, so
    shutdown never waits on a slow request or a long interval. The ETag cache
    lives here for the lifetime of the process and is discarded on exit.
    """

    def __init__(
        self,
        *,
        config: AppConfig,
        fetcher: HttpFetcher,
        on_outcome: Optional[OutcomeSink] = None,
    ) -> None:
        self._config = config
        self._etags = EtagCache()
        self._executor = SyncCycleExecutor(
            config=config,
            fetcher=fetcher,
            etags=self._etags,
            on_outcome=on_outcome,
        )
        self._stop_event = asyncio.Event()
        self._state: SchedulerState = "idle"
        self._installed_signals: list[signal.Signals] = []
        self.cycles_completed = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def request_stop(self) -> None:
        if self._stop_event.is_set():
            return
        logger.debug("Stop requested. state=%s", self._state)
        self._stop_event.set()

    def install_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in SHUTDOWN_SIGNALS:
            try:
                loop.add_signal_handler(sig, self._on_signal, sig)
            except NotImplementedError:
                # Event loops without add_signal_handler (e.g. Windows).
                signal.signal(
                    sig,
                    lambda signum, _frame: loop.call_soon_threadsafe(self._on_signal, signal.Signals(signum)),
                )
            self._installed_signals.append(sig)

    def remove_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in self._installed_signals:
            try:
                loop.remove_signal_handler(sig)
            except NotImplementedError:
                signal.signal(sig, signal.SIG_DFL)
        self._installed_signals.clear()

    def _on_signal(self, sig: signal.Signals) -> None:
        logger.info("Received %s.", sig.name)
        self.request_stop()

    async def run(self, *, max_cycles: Optional[int] = None) -> None:
        logger.info(
            "Starting sync. files=%d interval=%s create_directories=%s",
            len(self._config.files),
            format_duration(self._config.interval),
            self._config.create_directories,
        )
        interval_seconds = self._config.interval.total_seconds()
        try:
            while not self._stop_event.is_set():
                self._state = "running"
                if not await self._run_cycle_until_stopped():
                    break
                self.cycles_completed += 1
                if max_cycles is not None and self.cycles_completed >= max_cycles:
                    break

                self._state = "sleeping"
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=interval_seconds)
                except asyncio.TimeoutError:
                    continue
            self._state = "shutting_down"
            logger.info("Shutting down. cycles_completed=%d", self.cycles_completed)
        finally:
            self._state = "terminated"

    async def _run_cycle_until_stopped(self) -> bool:
        """Run one cycle. Returns False if a stop request arrived first."""
        cycle_task = asyncio.create_task(self._executor.run_cycle())
        stop_task = asyncio.create_task(self._stop_event.wait())
        try:
            done, _ = await asyncio.wait({cycle_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            cycle_task.cancel()
            raise
        finally:
            stop_task.cancel()

        if cycle_task in done:
            outcomes = cycle_task.result()
            counts = summarize(outcomes)
            logger.debug(
                "Cycle finished. written=%d unchanged=%d not_modified=%d failed=%d",
                counts["written"],
                counts["unchanged"],
                counts["not_modified"],
                counts["failed"],
            )
            return True

        cycle_task.cancel()
        try:
            await cycle_task
        except asyncio.CancelledError:
            logger.debug("In-progress cycle abandoned for shutdown.")
        return False
