from __future__ import annotations

import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class EtagCache:
    """
    In-memory url -> ETag mapping for conditional requests.

    Entries are only written after a successful response and are never evicted;
    the table is bounded by the number of configured files. Nothing is persisted,
    so every process start begins with unconditional requests.
    """

    def __init__(self) -> None:
        self._etags: Dict[str, str] = {}

    def get(self, url: str) -> Optional[str]:
        return self._etags.get(url)

    def put(self, url: str, etag: str) -> None:
        previous = self._etags.get(url)
        self._etags[url] = etag
        if previous != etag:
            logger.debug("Stored ETag. url=%s etag=%s", url, etag)

    def __contains__(self, url: object) -> bool:
        return url in self._etags

    def __len__(self) -> int:
        return len(self._etags)
