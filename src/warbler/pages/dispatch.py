"""Request dispatch for page definitions.

Every request to a page runs the same pipeline::

    resolve page id          -> NotFound
    build a fresh context    (replay the page script)
    run before hooks         (declaration order)
    check authorization      -> MissingAuthorizationError | Unauthorized
    then one of:
      view        -> evaluate the data provider -> PageView
      get_action  -> run get_handlers[name]     -> handler's return value
      post_action -> run post_handlers[name]    -> handler's return value

Nothing is recovered here. Every failure propagates to the ASGI handler,
which maps it to a response.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from warbler._internal.invoke import invoke
from warbler.errors import MissingAuthorizationError, NotFound, Unauthorized
from warbler.pages.context import ExecutionContext, build_context

if TYPE_CHECKING:
    from warbler.http.request import Request
    from warbler.pages.registry import PageRegistry
    from warbler.pages.types import PageDefinition

logger = logging.getLogger("warbler.pages")


@dataclass(frozen=True, slots=True)
class PageView:
    """The result of a view request: the page and its evaluated data.

    Content negotiation turns this into JSON (the raw data) or the page's
    rendered template.
    """

    page: PageDefinition
    data: Any


class Dispatcher:
    """Runs the before/authorize/data/action pipeline against a registry.

    Usage::

        dispatcher = Dispatcher(registry)
        view = await dispatcher.view("nest/page2", request)
        result = await dispatcher.post_action("nest/page2", "create_comment", request)
    """

    __slots__ = ("registry",)

    def __init__(self, registry: PageRegistry) -> None:
        self.registry = registry

    def resolve(self, page_id: str) -> PageDefinition:
        """Look up *page_id*, raising ``NotFound`` if it isn't defined."""
        page = self.registry.find(page_id)
        if page is None:
            raise NotFound(f"No page {page_id!r}")
        return page

    async def prepare(self, page_id: str, request: Request | None = None) -> ExecutionContext:
        """Resolve, build, run before hooks, and authorize.

        Shared by all three entry points. Authorization checks run in
        declaration order and stop at the first falsy result.
        """
        page = self.resolve(page_id)
        context = build_context(page, request)

        for hook in context.before_hooks:
            await invoke(hook)

        if not context.authorize_checks:
            raise MissingAuthorizationError(page.id)

        for index, check in enumerate(context.authorize_checks):
            if not await invoke(check):
                logger.debug("Page %r: authorize check %d rejected the request", page.id, index)
                raise Unauthorized()

        return context

    async def view(self, page_id: str, request: Request | None = None) -> PageView:
        """Authorize, then evaluate the page's data provider once."""
        context = await self.prepare(page_id, request)
        data = await context.evaluate_data()
        return PageView(page=context.page, data=data)

    async def get_action(
        self,
        page_id: str,
        action_name: str,
        request: Request | None = None,
    ) -> Any:
        """Authorize, then run the named GET action."""
        context = await self.prepare(page_id, request)
        return await self._run_action(context, context.get_handlers, action_name, "GET")

    async def post_action(
        self,
        page_id: str,
        action_name: str,
        request: Request | None = None,
    ) -> Any:
        """Authorize, then run the named POST action."""
        context = await self.prepare(page_id, request)
        return await self._run_action(context, context.post_handlers, action_name, "POST")

    async def _run_action(
        self,
        context: ExecutionContext,
        handlers: dict[str, Any],
        action_name: str,
        method: str,
    ) -> Any:
        handler = handlers.get(action_name)
        page_id = context.page.id if context.page is not None else None
        if handler is None:
            raise NotFound(f"Page {page_id!r} has no {method} action {action_name!r}")
        logger.debug("Page %r: running %s action %r", page_id, method, action_name)
        return await invoke(handler)
