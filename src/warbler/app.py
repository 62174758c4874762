"""The ASGI application serving file-defined pages.

Setup is mutable: mount pages, register error handlers. The first request
(or lifespan startup) freezes the route table and builds the kida
environment; from then on the app only reads.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any

from warbler._internal.asgi import Receive, Scope, Send
from warbler.config import AppConfig
from warbler.errors import ConfigurationError, NotFound
from warbler.http.request import Request
from warbler.pages.discovery import DefinitionSource
from warbler.pages.dispatch import Dispatcher, PageView
from warbler.pages.registry import PageRegistry
from warbler.pages.types import PageDefinition
from warbler.routing.route import Route
from warbler.routing.router import Router
from warbler.server.handler import RequestHandler
from warbler.templating.integration import create_environment

logger = logging.getLogger("warbler.pages")

type ErrorHandler = Callable[..., Any]
type Endpoint = Callable[[Request], Any]


class App:
    """Serves every page in a registry over ASGI::

        app = App(AppConfig(page_dirs=("app/pages",)))
        app.mount_pages()

    A page at ``/mypage`` gets three endpoints:

    - ``GET  /mypage``                      -> the page view
    - ``GET  /mypage/action/{action_name}`` -> a named GET action
    - ``POST /mypage/action/{action_name}`` -> a named POST action

    Thread safety:
        Mounting happens at import time on one thread. Freezing is guarded
        by a Lock with a double check, so concurrent first requests build
        the route table once.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_handler",
        "_mounted",
        "_routes",
        "config",
        "dispatcher",
        "registry",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        registry: PageRegistry | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        if registry is None:
            source = DefinitionSource(self.config.page_dirs, self.config.page_filename)
            registry = PageRegistry(source, interactive=self.config.interactive)
        self.registry: PageRegistry = registry
        self.dispatcher: Dispatcher = Dispatcher(registry)

        self._routes: list[Route] = []
        self._mounted: set[str] = set()
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._freeze_lock = threading.Lock()
        self._handler: RequestHandler | None = None

    # -- Mounting --

    def mount_pages(self, pages: Iterable[PageDefinition] | None = None) -> None:
        """Mount *pages*, or every page in the registry (loading it)."""
        for page in self.registry.all() if pages is None else pages:
            self.mount_page(page)

    def mount_page(self, page: PageDefinition) -> None:
        """Add the view route and both action routes for *page*.

        The endpoints look the page up by id on every request, so a
        reloaded definition is served without remounting.
        """
        self._check_not_frozen()
        if page.id in self._mounted:
            msg = f"Page {page.id!r} is already mounted"
            raise ConfigurationError(msg)
        self._mounted.add(page.id)

        page_id = page.id
        view, get_action, post_action = self._endpoints(
            lambda request: page_id,
            lambda request: request.path_params["action_name"],
        )
        action_path = f"{page.route.rstrip('/')}/{self.config.action_segment}/{{action_name}}"
        action_name = f"{page_id.replace('/', '_')}_action"
        self._add(page.route, "GET", view, page.route_name, page_id)
        self._add(action_path, "GET", get_action, action_name, page_id)
        self._add(action_path, "POST", post_action, action_name, page_id)
        logger.debug("Mounted page %r at %s", page_id, page.route)

    def mount_page_fallback(self, path: str = "/_page") -> None:
        """Mount endpoints that read the page id from the query string.

        ``GET <path>?page_id=...`` serves a view; ``GET``/``POST``
        ``<path>/action?page_id=...&action_name=...`` runs an action. For
        test and staging setups that don't mount pages one by one.
        """
        self._check_not_frozen()

        def from_query(name: str) -> Callable[[Request], str]:
            def read(request: Request) -> str:
                value = request.query.get(name)
                if not value:
                    raise NotFound(f"Missing query parameter {name!r}")
                return value

            return read

        view, get_action, post_action = self._endpoints(
            from_query(self.config.fallback_page_param),
            from_query(self.config.fallback_action_param),
        )
        action_path = f"{path.rstrip('/')}/{self.config.action_segment}"
        self._add(path, "GET", view, "page_fallback")
        self._add(action_path, "GET", get_action, "page_fallback_action")
        self._add(action_path, "POST", post_action, "page_fallback_action")

    def reload_pages(self) -> list[PageDefinition]:
        """Run every page script again. Interactive mode only.

        Changed definitions are served on the next request. Routes are
        fixed once the app is frozen, so a new page or a changed ``route``
        needs a restart. Not safe under concurrent traffic.

        Raises:
            DoubleLoadError: Outside interactive mode.
        """
        pages = list(self.registry.load().values())
        unmounted = [page.id for page in pages if page.id not in self._mounted]
        if self._handler is not None and unmounted:
            logger.warning("Reloaded pages are not mounted until restart: %s", unmounted)
        return pages

    def _endpoints(
        self,
        page_id_of: Callable[[Request], str],
        action_of: Callable[[Request], str],
    ) -> tuple[Endpoint, Endpoint, Endpoint]:
        dispatcher = self.dispatcher

        async def view(request: Request) -> PageView:
            return await dispatcher.view(page_id_of(request), request)

        async def get_action(request: Request) -> Any:
            return await dispatcher.get_action(page_id_of(request), action_of(request), request)

        async def post_action(request: Request) -> Any:
            return await dispatcher.post_action(page_id_of(request), action_of(request), request)

        return view, get_action, post_action

    def _add(
        self,
        path: str,
        method: str,
        endpoint: Endpoint,
        name: str,
        page_id: str | None = None,
    ) -> None:
        self._routes.append(Route(path, endpoint, frozenset({method}), name, page_id))

    # -- Routes --

    @property
    def routes(self) -> list[Route]:
        """Mounted routes in mount order. Freezes the app."""
        return self._freeze().router.routes

    def url_for(self, name: str, /, **params: object) -> str:
        """URL of a named route, e.g. ``url_for("nest_page2_page")``. Freezes the app."""
        return self._freeze().router.url_for(name, **params)

    # -- Error handlers --

    def error(
        self,
        status_or_type: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register a handler for an error status or exception type::

            @app.error(403)
            def forbidden(request):
                return {"error": "error.forbidden"}

        Handlers take ``()``, ``(request)`` or ``(request, exc)``.
        """

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[status_or_type] = func
            return func

        return decorator

    # -- Serving --

    def startup(self) -> None:
        """Freeze the app and load every page definition.

        Run by lifespan startup, so a broken page script fails the deploy
        rather than the first request.
        """
        self._freeze()
        self.registry.lazy_load()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
        elif scope["type"] == "http":
            await self._freeze()(scope, receive, send)

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self.startup()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    def _freeze(self) -> RequestHandler:
        """Build the request handler once; later calls return it."""
        handler = self._handler
        if handler is not None:
            return handler
        with self._freeze_lock:
            if self._handler is None:
                router = Router()
                for route in self._routes:
                    router.add(route)
                router.compile()
                self._handler = RequestHandler(
                    router=router,
                    error_handlers=dict(self._error_handlers),
                    kida_env=create_environment(self.config),
                    debug=self.config.debug,
                    view_template=self.config.view_template,
                )
            return self._handler

    def _check_not_frozen(self) -> None:
        if self._handler is not None:
            msg = "Cannot modify the app after it has started serving. Mount pages first."
            raise RuntimeError(msg)
