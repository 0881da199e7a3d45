from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from aiohttp import web


@dataclass
class Resource:
    body: str = ""
    etag: Optional[str] = None
    status: int = 200
    # ETag sent with a 304 when set; defaults to the current etag.
    not_modified_etag: Optional[str] = None
    gate: Optional[asyncio.Event] = None


@dataclass
class FakeOrigin:
    """A tiny HTTP origin that honours If-None-Match and records every request."""

    resources: Dict[str, Resource] = field(default_factory=dict)
    requests: List[Tuple[str, Optional[str]]] = field(default_factory=list)

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/{name:.*}", self._handle)
        return app

    def requests_for(self, name: str) -> List[Optional[str]]:
        return [if_none_match for requested, if_none_match in self.requests if requested == name]

    async def _handle(self, request: web.Request) -> web.Response:
        name = request.match_info["name"]
        if_none_match = request.headers.get("If-None-Match")
        self.requests.append((name, if_none_match))

        resource = self.resources.get(name)
        if resource is None:
            return web.Response(status=404, text="not found")
        if resource.gate is not None:
            await resource.gate.wait()
        if resource.status != 200:
            return web.Response(status=resource.status, text="origin error")

        headers = {}
        if resource.etag:
            headers["ETag"] = resource.etag
            if if_none_match == resource.etag:
                if resource.not_modified_etag:
                    headers["ETag"] = resource.not_modified_etag
                return web.Response(status=304, headers=headers)
        return web.Response(text=resource.body, headers=headers)
