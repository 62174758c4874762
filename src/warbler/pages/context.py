"""Per-request execution context for page definitions.

A ``PageDefinition`` is shared by every request, so it holds no request
state. Instead, each request gets a brand-new ``ExecutionContext`` and the
page's script is replayed against it::

    @define("/mypage")
    def page(p):
        p.before(lambda: ...)
        p.authorize(lambda: p.request.query.get("token") == "ok")

        @p.data
        def data():
            return {"value": "hello"}

        @p.get("more_info")
        def more_info():
            return {"hello": "world"}

Anything a hook captures (request parameters, loaded records) lives on that
request's context and dies with it.

Thread safety:
    A context never escapes the request that built it. No locks needed.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, overload

from warbler._internal.invoke import invoke
from warbler.errors import ConfigurationError

if TYPE_CHECKING:
    from warbler.http.request import Request
    from warbler.pages.types import PageDefinition

type Hook = Callable[[], Any]
type Check = Callable[[], Any]
type ActionHandler = Callable[[], Any]


def _no_data() -> None:
    return None


class ExecutionContext:
    """Mutable hooks and handlers for one request to one page.

    The five registration methods (``before``, ``authorize``, ``data``,
    ``get``, ``post``) only record callables; none of them runs anything
    except the zero-argument ``data()`` getter.
    """

    __slots__ = (
        "authorize_checks",
        "before_hooks",
        "data_provider",
        "get_handlers",
        "page",
        "post_handlers",
        "request",
    )

    def __init__(self, page: PageDefinition | None = None, request: Request | None = None) -> None:
        self.page = page
        self.request = request
        self.before_hooks: list[Hook] = []
        self.authorize_checks: list[Check] = []
        self.data_provider: Callable[[], Any] = _no_data
        self.get_handlers: dict[str, ActionHandler] = {}
        self.post_handlers: dict[str, ActionHandler] = {}

    def __repr__(self) -> str:
        page_id = self.page.id if self.page is not None else None
        return (
            f"<ExecutionContext page={page_id!r} before={len(self.before_hooks)} "
            f"authorize={len(self.authorize_checks)} get={sorted(self.get_handlers)} "
            f"post={sorted(self.post_handlers)}>"
        )

    # -- Registration --

    def before(self, hook: Hook) -> Hook:
        """Register a hook that runs before authorization, in declaration order."""
        self.before_hooks.append(hook)
        return hook

    def authorize(self, check: Check) -> Check:
        """Register an authorization check. Every page needs at least one."""
        self.authorize_checks.append(check)
        return check

    @overload
    def data(self) -> Any: ...
    @overload
    def data(self, provider: Callable[[], Any]) -> Callable[[], Any]: ...

    def data(self, provider: Callable[[], Any] | None = None) -> Any:
        """Register the page's data provider, or evaluate it.

        With an argument, replaces the provider (the last one wins) and
        returns it. Without one, calls the current provider and returns
        its result as is, so an ``async def`` provider yields a coroutine.
        Use ``evaluate_data()`` from async code.
        """
        if provider is None:
            return self.data_provider()
        self.data_provider = provider
        return provider

    async def evaluate_data(self) -> Any:
        """Evaluate the data provider, awaiting it if it is async."""
        return await invoke(self.data_provider)

    def get(self, name: str, handler: ActionHandler | None = None) -> Any:
        """Register a named GET action. Without *handler*, returns a decorator."""
        return self._register(self.get_handlers, name, handler)

    def post(self, name: str, handler: ActionHandler | None = None) -> Any:
        """Register a named POST action. Without *handler*, returns a decorator."""
        return self._register(self.post_handlers, name, handler)

    @staticmethod
    def _register(
        table: dict[str, ActionHandler],
        name: str,
        handler: ActionHandler | None,
    ) -> Any:
        if handler is not None:
            table[name] = handler
            return handler

        def decorator(func: ActionHandler) -> ActionHandler:
            table[name] = func
            return func

        return decorator


def build_context(page: PageDefinition, request: Request | None = None) -> ExecutionContext:
    """Allocate a fresh context and replay *page*'s script against it."""
    context = ExecutionContext(page, request)
    result = page.script(context)
    if inspect.isawaitable(result):
        if inspect.iscoroutine(result):
            result.close()
        msg = f"Page {page.id!r}: the page script must be a plain function, not async"
        raise ConfigurationError(msg)
    return context
