"""Process-wide registry of page definitions.

Pages are not database records, but they can be queried like them::

    registry = PageRegistry(DefinitionSource(["pages"]))

    registry.find("nest/page2")
    registry.find_by(section="admin")
    registry.where(lambda page: page.id.startswith("admin/"), visible=True)
    registry[r"^admin/"]

Definitions are loaded exactly once. ``lazy_load()`` is the normal entry
point; ``load()`` is for explicit, administrative use and may only be
repeated in interactive (development) mode, where it hot-reloads every
definition.

Thread safety:
    The cache is written once and read many times. The first load is
    guarded by a Lock with double-checked access so concurrent first
    requests execute each script once. A reload is a single reference
    swap and is not safe under concurrent traffic.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Protocol

from warbler.errors import DoubleLoadError
from warbler.pages.types import Declaration, PageDefinition

logger = logging.getLogger("warbler.pages")


class Source(Protocol):
    """What the registry needs from a definition source."""

    def locations(self) -> list[Any]: ...
    def identify(self, location: Any) -> str: ...
    def execute(self, location: Any) -> Declaration: ...


class PageRegistry:
    """Loads page definitions once and answers queries against the cache.

    Args:
        source: Where page scripts come from.
        interactive: Allow ``load()`` to run more than once (hot reload).
            Outside interactive mode a second ``load()`` is always a bug.
    """

    __slots__ = ("_lock", "_pages", "interactive", "source")

    def __init__(self, source: Source, *, interactive: bool = False) -> None:
        self.source = source
        self.interactive = interactive
        self._pages: dict[str, PageDefinition] | None = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        state = f"{len(self._pages)} pages" if self._pages is not None else "not loaded"
        return f"<PageRegistry {state}>"

    # -- Loading --

    def load(self) -> dict[str, PageDefinition]:
        """Execute every page script and replace the cache.

        Returns:
            Page definitions keyed by id, in source enumeration order.

        Raises:
            DoubleLoadError: If pages are already loaded and the registry
                is not interactive.
            ScriptError: If a script raises.
            PageNotDefinedError: If a script never calls ``define``.
        """
        with self._lock:
            return self._load()

    def _load(self) -> dict[str, PageDefinition]:
        """Load under the lock. MUST only be called while holding _lock."""
        self._check_reload()

        pages: dict[str, PageDefinition] = {}
        for location in self.source.locations():
            page_id = self.source.identify(location)
            declaration = self.source.execute(location)
            if page_id in pages:
                logger.warning(
                    "Page %r defined twice; %s replaces the earlier one", page_id, location
                )
            pages[page_id] = PageDefinition.from_declaration(page_id, declaration)

        self._pages = pages
        logger.debug("Loaded %d page definitions", len(pages))
        return pages

    def lazy_load(self) -> dict[str, PageDefinition]:
        """Return the cache, loading it first if it has never been loaded."""
        pages = self._pages
        if pages is not None:
            return pages
        with self._lock:
            if self._pages is not None:
                return self._pages
            return self._load()

    @property
    def loaded(self) -> bool:
        return self._pages is not None

    def clear(self) -> None:
        """Forget the cache so the next access loads again. For tests."""
        self._pages = None

    def seed(self, pages: Iterable[PageDefinition]) -> None:
        """Install *pages* as the cache without consulting the source.

        Meant for tests and for apps that build definitions in code.
        Later ids replace earlier ones, as in ``load()``.
        """
        self._pages = {page.id: page for page in pages}

    def _check_reload(self) -> None:
        """Refuse to double-load outside interactive mode."""
        if self._pages is None or self.interactive:
            return
        raise DoubleLoadError()

    # -- Queries --

    def all(self) -> list[PageDefinition]:
        return list(self.lazy_load().values())

    def find(self, page_id: str) -> PageDefinition | None:
        return self.lazy_load().get(page_id)

    def find_by(self, **query: Any) -> PageDefinition | None:
        """Return the first page whose metadata matches every *query* item."""
        for page in self.all():
            if page.matches(query):
                return page
        return None

    def where(
        self,
        predicate: Callable[[PageDefinition], bool] | None = None,
        **query: Any,
    ) -> list[PageDefinition]:
        """Return every page passing *predicate* and matching *query*."""
        return [
            page
            for page in self.all()
            if (predicate is None or predicate(page)) and page.matches(query)
        ]

    def __getitem__(self, pattern: str | re.Pattern[str]) -> list[PageDefinition]:
        """Return every page whose id matches the regex *pattern*."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return [page for page in self.all() if regex.search(page.id)]

    def __iter__(self) -> Iterator[PageDefinition]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self.lazy_load())

    def __contains__(self, page_id: object) -> bool:
        return page_id in self.lazy_load()
