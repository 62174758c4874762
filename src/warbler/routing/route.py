"""Route table entries."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Segment:
    """One ``/``-separated piece of a route template.

    ``docs`` is literal; ``{doc_id}`` and ``{doc_id:int}`` capture one
    segment; ``{rest:path}`` captures everything that is left.
    """

    text: str
    param: str | None = None
    converter: str = "str"

    @property
    def is_tail(self) -> bool:
        return self.converter == "path"


@dataclass(frozen=True, slots=True)
class Route:
    """One method-bound endpoint of a mounted page.

    Attributes:
        path: Route template, e.g. ``/doc/{doc_id}/action/{action_name}``.
        handler: Async callable receiving the ``Request``.
        methods: HTTP methods served.
        name: Name used by ``Router.url_for``; shared by a page's GET and
            POST action routes.
        page_id: Id of the page behind the route, ``None`` for the
            fallback endpoints.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None
    page_id: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    route: Route
    path_params: dict[str, str]
