"""The per-request path from an ASGI ``http`` scope to a sent response.

::

    scope -> Request -> router.match -> page handler (Dispatcher)
          -> negotiate -> send_response

Failures anywhere in between go through ``warbler.server.errors``. The
current request is published in ``request_var`` for the duration, so page
callables can call ``get_request()``.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from kida import Environment

from warbler._internal.asgi import Receive, Scope, Send
from warbler._internal.invoke import invoke
from warbler.context import request_var
from warbler.errors import HTTPError
from warbler.http.request import Request
from warbler.http.response import Response
from warbler.routing.router import Router
from warbler.server.errors import handle_http_error, handle_internal_error
from warbler.server.negotiation import negotiate
from warbler.server.sender import send_response


@dataclass(frozen=True, slots=True)
class RequestHandler:
    """Everything a request needs from the frozen app.

    Built once by ``App`` when it freezes.
    """

    router: Router
    error_handlers: dict[int | type, Callable[..., Any]] = field(default_factory=dict)
    kida_env: Environment | None = None
    debug: bool = False
    view_template: str = "page.html"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request.from_asgi(scope, receive)
        token = request_var.set(request)
        try:
            response = await self._respond(request)
        except HTTPError as exc:
            response = await handle_http_error(exc, request, self.error_handlers, self.kida_env)
        except Exception as exc:
            response = await handle_internal_error(
                exc, request, self.error_handlers, self.kida_env, self.debug
            )
        finally:
            request_var.reset(token)
        await send_response(response, send)

    async def _respond(self, request: Request) -> Response:
        match = self.router.match(request.method, request.path)
        routed = request.with_path_params(match.path_params)
        request_var.set(routed)
        result = await invoke(match.route.handler, routed)
        return negotiate(
            result, kida_env=self.kida_env, request=routed, view_template=self.view_template
        )
