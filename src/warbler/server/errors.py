"""Exceptions leaving the page pipeline, turned into responses.

The dispatcher recovers nothing, so every failure lands here:

- ``HTTPError`` (``NotFound``, ``Unauthorized``, ``MethodNotAllowed``)
  keeps its status. Logged at debug level.
- ``ConfigurationError``, e.g. a page that declares no ``authorize``,
  is a bug in a page definition: logged at error level without a
  traceback, answered with 500.
- Anything else is logged with its traceback and answered with 500.

A handler registered with ``App.error(status_or_type)`` replaces the
default body. Without one, JSON callers get ``{"error": ..., "status": ...}``
and everyone else plain text.
"""

import inspect
import logging
import traceback
from collections.abc import Callable, Mapping
from typing import Any

from kida import Environment

from warbler.errors import ConfigurationError, HTTPError
from warbler.http.request import Request
from warbler.http.response import Response
from warbler.server.negotiation import json_response, negotiate

logger = logging.getLogger("warbler.server")

type ErrorHandlers = Mapping[int | type, Callable[..., Any]]


def default_error_response(request: Request, status: int, detail: str) -> Response:
    if request.wants_json:
        return json_response({"error": detail, "status": status}, status=status)
    return Response(detail, status=status, content_type="text/plain; charset=utf-8")


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: ErrorHandlers,
    kida_env: Environment | None,
) -> Response:
    logger.debug("%s %s -> %d %s", request.method, request.path, exc.status, exc.detail)
    response = await _custom_response(exc, exc.status, request, error_handlers, kida_env)
    if response is None:
        response = default_error_response(request, exc.status, exc.detail or str(exc.status))
    for name, value in exc.headers:
        if response.header(name) is None:
            response = response.with_header(name, value)
    return response


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: ErrorHandlers,
    kida_env: Environment | None,
    debug: bool,
) -> Response:
    if isinstance(exc, ConfigurationError):
        logger.error("Page configuration error on %s %s: %s", request.method, request.path, exc)
    else:
        logger.error("Unhandled error on %s %s", request.method, request.path, exc_info=exc)

    response = await _custom_response(exc, 500, request, error_handlers, kida_env)
    if response is not None:
        return response
    detail = "".join(traceback.format_exception(exc)) if debug else "Internal Server Error"
    return default_error_response(request, 500, detail)


async def _custom_response(
    exc: Exception,
    status: int,
    request: Request,
    error_handlers: ErrorHandlers,
    kida_env: Environment | None,
) -> Response | None:
    """Run the handler registered for *exc*'s type or *status*, if any.

    Handlers take ``()``, ``(request)`` or ``(request, exc)``, may be
    async, and return anything ``negotiate`` accepts. A plain 200 answer
    keeps the error's *status*.
    """
    handler = error_handlers.get(type(exc)) or error_handlers.get(status)
    if handler is None:
        return None

    args = (request, exc)[: len(inspect.signature(handler).parameters)]
    result = handler(*args)
    if inspect.isawaitable(result):
        result = await result

    response = negotiate(result, kida_env=kida_env, request=request)
    return response.with_status(status) if response.status == 200 else response
