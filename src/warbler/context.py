"""Request-scoped context via ContextVar.

``request_var`` holds the current ``Request`` for this task. It is set by
the ASGI handler before dispatch and reset afterwards, so page callables
that were not handed the request directly can still reach it::

    from warbler.context import get_request

    @p.get("search")
    def search():
        return {"q": get_request().query.get("q")}

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading. No locks needed.
"""

from contextvars import ContextVar

from warbler.http.request import Request

request_var: ContextVar[Request] = ContextVar("warbler_request")
"""The current request. Set by the ASGI handler before dispatch."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()
