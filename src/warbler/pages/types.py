"""Data models for page definitions.

Immutable frozen dataclasses built once when the registry loads. A
``PageDefinition`` is shared by every request for its page; the mutable,
per-request state lives in ``ExecutionContext`` instead.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from warbler.pages.context import ExecutionContext

# A page script receives a fresh ExecutionContext and registers hooks on it.
type PageScript = Callable[[ExecutionContext], None]


def _freeze_metadata(metadata: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(metadata or {}))


@dataclass(frozen=True, slots=True)
class Declaration:
    """What a single ``define(...)`` call recorded.

    Attributes:
        route: Route template passed to ``define``.
        script: The decorated page script.
        metadata: Keyword arguments passed to ``define``.
    """

    route: str
    script: PageScript
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True, eq=False)
class PageDefinition:
    """A routable page: id, route, metadata, and a replayable script.

    Built by ``PageRegistry.load()`` from a ``Declaration``. The script is
    never re-parsed; it is replayed against a new ``ExecutionContext`` for
    every request.

    Attributes:
        id: Unique key derived from the script location (e.g. ``"nest/page2"``).
        route: Route template, opaque to the registry (e.g. ``"/doc/{doc_id}"``).
        script: Function that registers hooks and handlers on a context.
        metadata: Read-only mapping of tags declared with ``define``.
    """

    id: str
    route: str
    script: PageScript
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", _freeze_metadata(self.metadata))

    @classmethod
    def from_declaration(cls, page_id: str, declaration: Declaration) -> PageDefinition:
        return cls(
            id=page_id,
            route=declaration.route,
            script=declaration.script,
            metadata=declaration.metadata,
        )

    @property
    def route_name(self) -> str:
        """Router name for the page's view route (``nest/page2`` -> ``nest_page2_page``)."""
        return f"{self.id.replace('/', '_')}_page"

    def matches(self, query: Mapping[str, Any]) -> bool:
        """True if every key in *query* equals the page's metadata value."""
        return all(
            key in self.metadata and self.metadata[key] == value
            for key, value in query.items()
        )

    def __repr__(self) -> str:
        return f"<PageDefinition:{self.id}>"
