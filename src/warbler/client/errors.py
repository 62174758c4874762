"""Client library error hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

from warbler.errors import WarblerError

if TYPE_CHECKING:
    import httpx


class ClientError(WarblerError):
    """Base for all warbler.client errors."""


class RequestFailed(ClientError):
    """Raised when a page action answers with a non-2xx status.

    ``error_code`` is derived from the reason phrase
    (``403 Forbidden`` -> ``"error.forbidden"``).
    """

    def __init__(self, error_code: str, response: httpx.Response) -> None:
        self.error_code = error_code
        self.response = response
        super().__init__(f"{response.request.method} {response.request.url} failed: {error_code}")
