"""Segment trie over the routes of mounted pages.

Every page contributes a view path and an action path below it, so most
of the tree is shared prefixes::

    /nest/page2                        GET   nest_page2_page
    /nest/page2/action/{action_name}   GET   nest_page2_action
    /nest/page2/action/{action_name}   POST  nest_page2_action

Literal segments are tried before captures, and captures before a
trailing ``{name:path}``. The table is built while pages are mounted and
is read-only once the app freezes.
"""

import re
from urllib.parse import quote

from warbler.errors import ConfigurationError, MethodNotAllowed, NotFound
from warbler.routing.route import Route, RouteMatch, Segment

CONVERTERS: dict[str, re.Pattern[str]] = {
    "str": re.compile(r"[^/]+"),
    "int": re.compile(r"\d+"),
    "float": re.compile(r"\d+(?:\.\d+)?"),
    "path": re.compile(r".+"),
}

_CAPTURE_RE = re.compile(r"^\{(?P<name>\w+)(?::(?P<converter>\w+))?\}$")
_LOOKALIKE_RE = re.compile(r"^(<[^>]+>|:\w+)$")


def parse_template(path: str) -> tuple[Segment, ...]:
    """Split a route template into segments.

    ``/doc/{doc_id:int}`` -> ``(Segment("doc"), Segment("{doc_id:int}", "doc_id", "int"))``

    Raises:
        ConfigurationError: For ``<param>``/``:param`` placeholders, unknown
            converters, or a ``path`` capture that is not last.
    """
    parts = [part for part in path.split("/") if part]
    segments: list[Segment] = []
    for position, part in enumerate(parts, start=1):
        if _LOOKALIKE_RE.match(part):
            msg = f"Route {path!r}: write {part!r} as {{param}}, not <param> or :param"
            raise ConfigurationError(msg)
        captured = _CAPTURE_RE.match(part)
        if captured is None:
            segments.append(Segment(part))
            continue
        converter = captured["converter"] or "str"
        if converter not in CONVERTERS:
            msg = f"Route {path!r}: unknown converter {converter!r}"
            raise ConfigurationError(msg)
        if converter == "path" and position != len(parts):
            msg = f"Route {path!r}: a path capture must be the last segment"
            raise ConfigurationError(msg)
        segments.append(Segment(part, captured["name"], converter))
    return tuple(segments)


class _Node:
    __slots__ = ("capture", "endpoints", "literals", "tail")

    def __init__(self) -> None:
        self.literals: dict[str, _Node] = {}
        self.capture: tuple[Segment, _Node] | None = None
        self.tail: tuple[Segment, _Node] | None = None
        self.endpoints: dict[str, Route] = {}

    def branch(self, segment: Segment, path: str) -> _Node:
        if segment.param is None:
            return self.literals.setdefault(segment.text, _Node())

        slot = "tail" if segment.is_tail else "capture"
        existing = getattr(self, slot)
        if existing is None:
            existing = (segment, _Node())
            setattr(self, slot, existing)
        elif existing[0].text != segment.text:
            msg = (
                f"Route {path!r}: {segment.text} conflicts with {existing[0].text} "
                "at the same position"
            )
            raise ConfigurationError(msg)
        return existing[1]


class Router:
    """Routes of mounted pages, matched by path then method.

    Usage::

        router = Router()
        router.add(Route("/docs/{doc_id}", view, frozenset({"GET"}), name="docs_page"))
        router.compile()
        router.match("GET", "/docs/42").path_params  # {"doc_id": "42"}
        router.url_for("docs_page", doc_id=42)       # "/docs/42"
    """

    __slots__ = ("_by_name", "_compiled", "_root", "_routes")

    def __init__(self) -> None:
        self._root = _Node()
        self._routes: list[Route] = []
        self._by_name: dict[str, Route] = {}
        self._compiled = False

    @property
    def routes(self) -> list[Route]:
        """Every route, in the order pages were mounted."""
        return list(self._routes)

    def add(self, route: Route) -> None:
        if self._compiled:
            msg = f"Cannot add {route.path!r}: the router is compiled"
            raise RuntimeError(msg)

        if route.name is not None:
            named = self._by_name.setdefault(route.name, route)
            if named.path != route.path:
                msg = f"Route name {route.name!r} names both {named.path!r} and {route.path!r}"
                raise ConfigurationError(msg)

        node = self._root
        for segment in parse_template(route.path):
            node = node.branch(segment, route.path)
        for method in route.methods:
            node.endpoints[method] = route
        self._routes.append(route)

    def compile(self) -> None:
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Find the route serving *method* at *path*.

        Raises:
            NotFound: Nothing is mounted at *path*.
            MethodNotAllowed: Something is, but not for *method*.
        """
        found = _descend(self._root, [part for part in path.split("/") if part], {})
        if found is None:
            raise NotFound(f"No page route matches {path!r}")
        endpoints, params = found
        route = endpoints.get(method)
        if route is None:
            raise MethodNotAllowed(frozenset(endpoints))
        return RouteMatch(route=route, path_params=params)

    def url_for(self, name: str, /, **params: object) -> str:
        """Fill the template of the route called *name* with *params*.

        Raises ``KeyError`` for an unknown name and ``ValueError`` when a
        capture has no value.
        """
        route = self._by_name[name]
        parts: list[str] = []
        for segment in parse_template(route.path):
            if segment.param is None:
                parts.append(segment.text)
            elif segment.param in params:
                parts.append(quote(str(params[segment.param]), safe="/" if segment.is_tail else ""))
            else:
                msg = f"url_for({name!r}) is missing path parameter {segment.param!r}"
                raise ValueError(msg)
        return "/" + "/".join(parts)


def _descend(
    node: _Node,
    parts: list[str],
    params: dict[str, str],
) -> tuple[dict[str, Route], dict[str, str]] | None:
    if not parts:
        return (node.endpoints, params) if node.endpoints else None

    head, rest = parts[0], parts[1:]
    child = node.literals.get(head)
    if child is not None and (found := _descend(child, rest, params)) is not None:
        return found

    if node.capture is not None:
        segment, child = node.capture
        if CONVERTERS[segment.converter].fullmatch(head):
            found = _descend(child, rest, {**params, segment.param: head})
            if found is not None:
                return found

    if node.tail is not None:
        segment, child = node.tail
        if child.endpoints:
            return child.endpoints, {**params, segment.param: "/".join(parts)}
    return None
