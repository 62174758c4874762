"""Call a page's named actions from Python.

The client mirrors what a page's own front-end code does: it sits at the
page's URL and calls ``<page path>/action/<name>``::

    async with httpx.AsyncClient(base_url="https://example.test") as http:
        client = PageClient("/mypage?tab=2", http=http, csrf=MetaTagCSRF.from_html(html))
        info = await client.get("more_info", {"q": "x"})
        comment = await client.post("create_comment", {"content": "hi"})

GET requests carry the page's current query string merged with the call's
params. POST requests send a JSON body with the CSRF token added when the
page exposes one. Any non-2xx answer updates the shared ``error_state`` and
raises ``RequestFailed``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

import httpx

from warbler.client.csrf import CSRFSource, no_csrf
from warbler.client.errors import RequestFailed
from warbler.client.state import ErrorState
from warbler.client.state import error_state as shared_error_state

logger = logging.getLogger("warbler.client")

_HEADERS = {"Accept": "application/json", "Cache-Control": "no-cache"}


class PageClient:
    """Action calls on behalf of the page at *location*.

    Args:
        location: The page URL (path and query, or an absolute URL).
        http: Client to send through. Its cookies go with every request.
            When omitted, the PageClient owns a fresh ``httpx.AsyncClient``.
        csrf: Callable returning ``(param, token)``.
        error_state: Where failures are recorded. Defaults to the shared
            process-wide ``error_state``.
        action_segment: Path segment between the page and the action name.
    """

    __slots__ = ("_owns_http", "action_segment", "csrf", "error_state", "http", "location")

    def __init__(
        self,
        location: str,
        *,
        http: httpx.AsyncClient | None = None,
        csrf: CSRFSource | None = None,
        error_state: ErrorState | None = None,
        action_segment: str = "action",
    ) -> None:
        self.location = location
        self._owns_http = http is None
        self.http: httpx.AsyncClient = http if http is not None else httpx.AsyncClient()
        self.csrf: CSRFSource = csrf or no_csrf
        if error_state is None:
            error_state = shared_error_state
        self.error_state: ErrorState = error_state
        self.action_segment = action_segment

    def __repr__(self) -> str:
        return f"<PageClient {self.location!r}>"

    async def __aenter__(self) -> PageClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this PageClient created it."""
        if self._owns_http:
            await self.http.aclose()

    # -- Actions --

    async def get(self, action: str, params: Mapping[str, Any] | None = None) -> Any:
        """Run the page's GET action *action* and return its decoded JSON.

        The page's current query is sent too; *params* win on conflicts.
        """
        overrides = [(key, str(value)) for key, value in (params or {}).items()]
        replaced = {key for key, _ in overrides}
        current = parse_qsl(urlsplit(self.location).query, keep_blank_values=True)
        query = [(key, value) for key, value in current if key not in replaced] + overrides
        response = await self.http.get(
            self.action_url(action),
            params=query,
            headers=_HEADERS,
        )
        return self._handle(response)

    async def post(self, action: str, params: Mapping[str, Any] | None = None) -> Any:
        """Run the page's POST action *action* with *params* as the JSON body.

        The CSRF token is added to a copy of *params* when both its
        parameter name and value are known.
        """
        body = dict(params or {})
        param, token = self.csrf()
        if param and token:
            body[param] = token
        else:
            logger.debug("No CSRF metadata for %s; posting without a token", self.location)

        response = await self.http.post(
            self.action_url(action),
            json=body,
            headers=_HEADERS,
        )
        return self._handle(response)

    def action_url(self, action: str) -> str:
        """``/mypage?tab=2`` + ``more_info`` -> ``/mypage/action/more_info``."""
        parts = urlsplit(self.location)
        path = f"{parts.path.rstrip('/')}/{self.action_segment}/{quote(action, safe='')}"
        return urlunsplit((parts.scheme, parts.netloc, path, "", ""))

    def _handle(self, response: httpx.Response) -> Any:
        if not response.is_success:
            error_code = self.error_state.record(response)
            logger.warning(
                "%s %s -> %d (%s)",
                response.request.method,
                response.request.url,
                response.status_code,
                error_code,
            )
            raise RequestFailed(error_code, response)
        if not response.content:
            return None
        return response.json()
