"""Python client for page actions.

Usage::

    from warbler.client import MetaTagCSRF, PageClient, RequestFailed, error_state

    client = PageClient("/mypage", http=http, csrf=MetaTagCSRF.from_html(html))
    try:
        await client.post("create_comment", {"content": "hi"})
    except RequestFailed as exc:
        print(exc.error_code)  # e.g. "error.forbidden"
"""

from warbler.client.actions import PageClient
from warbler.client.csrf import CSRFSource, MetaTagCSRF, StaticCSRF, no_csrf
from warbler.client.errors import ClientError, RequestFailed
from warbler.client.state import ErrorState, error_code_for, error_state

__all__ = [
    "CSRFSource",
    "ClientError",
    "ErrorState",
    "MetaTagCSRF",
    "PageClient",
    "RequestFailed",
    "StaticCSRF",
    "error_code_for",
    "error_state",
    "no_csrf",
]
