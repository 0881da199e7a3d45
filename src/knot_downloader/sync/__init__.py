from knot_downloader.sync.etag_cache import EtagCache
from knot_downloader.sync.executor import SyncCycleExecutor
from knot_downloader.sync.fetcher import HttpFetcher
from knot_downloader.sync.report import OutcomeReporter
from knot_downloader.sync.scheduler import SyncScheduler

__all__ = ["EtagCache", "HttpFetcher", "OutcomeReporter", "SyncCycleExecutor", "SyncScheduler"]
