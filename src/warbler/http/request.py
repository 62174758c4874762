"""The request a page script sees as ``p.request``.

GET actions read their input from ``request.query``; POST actions read
the JSON body the page client sends::

    @p.post("create_comment")
    async def create_comment():
        payload = await p.request.json()
        return {"content": payload["content"]}
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field, replace
from typing import Any

from warbler._internal.asgi import Receive, Scope
from warbler.http.headers import Headers
from warbler.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """Method, path, headers, query and route captures of one request.

    The body is read from ASGI on first access and kept, so every copy
    made by ``with_path_params`` sees the same bytes.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    path_params: dict[str, str]
    _receive: Receive = field(repr=False, compare=False)
    _body: list[bytes] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query=QueryParams(scope.get("query_string", b"")),
            path_params={},
            _receive=receive,
        )

    @property
    def wants_json(self) -> bool:
        """True for ``fetch``-style callers asking for data, not a page.

        Browsers list ``text/html``; the page client sends only
        ``application/json``.
        """
        accept = self.headers.get("accept") or ""
        return "application/json" in accept and "text/html" not in accept

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        return replace(self, path_params=path_params)

    async def body(self) -> bytes:
        if not self._body:
            chunks: list[bytes] = []
            more = True
            while more:
                message = await self._receive()
                chunks.append(message.get("body", b""))
                more = message.get("more_body", False)
            self._body.append(b"".join(chunks))
        return self._body[0]

    async def json(self) -> Any:
        """Decode the JSON body. An empty body decodes to ``None``."""
        raw = await self.body()
        return json_module.loads(raw) if raw else None

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")
