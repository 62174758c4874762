"""Filesystem discovery of page definition scripts.

Walks one or more base roots and finds every ``page.py``::

    app/pages/
      page1/page.py          -> id "page1"
      nest/page2/page.py     -> id "nest/page2"
    admin/pages/
      nest/page3/page.py     -> id "nest/page3"

A page's id is its directory relative to the base root. When several
roots contain a location (nested roots), the shortest relative id wins.
Directories whose names start with ``_`` or ``.`` are not walked.
"""

from __future__ import annotations

import importlib.util
import logging
from collections.abc import Iterable
from pathlib import Path

from warbler.errors import PageNotDefinedError, ScriptError
from warbler.pages.define import capture_declaration
from warbler.pages.types import Declaration

logger = logging.getLogger("warbler.pages")


class DefinitionSource:
    """Enumerates page scripts under a set of base roots and executes them.

    Usage::

        source = DefinitionSource(["app/pages", "drivers/admin/app/pages"])
        for location in source.locations():
            page_id = source.identify(location)
            declaration = source.execute(location)
    """

    __slots__ = ("filename", "roots")

    def __init__(self, roots: Iterable[str | Path], filename: str = "page.py") -> None:
        self.roots: tuple[Path, ...] = tuple(Path(root).resolve() for root in roots)
        self.filename = filename

    def __repr__(self) -> str:
        roots = ", ".join(str(root) for root in self.roots)
        return f"DefinitionSource([{roots}], filename={self.filename!r})"

    def locations(self) -> list[Path]:
        """Return every page script location, root by root.

        Missing roots are skipped. A script that sits directly in a root
        is kept only if another root gives it a non-empty id.
        """
        found: list[Path] = []
        seen: set[Path] = set()
        for root in self.roots:
            if not root.is_dir():
                logger.debug("Page root %s does not exist, skipping", root)
                continue
            for location in _walk(root, self.filename):
                if location in seen:
                    # Nested roots reach the same script twice
                    continue
                seen.add(location)
                if not self._candidates(location):
                    logger.warning("Ignoring %s: page scripts need their own directory", location)
                    continue
                found.append(location)
        return found

    def identify(self, location: str | Path) -> str:
        """Convert a script location into a page id.

        ``/srv/app/pages/nest/page2/page.py`` -> ``"nest/page2"``
        """
        path = Path(location).resolve()
        if not any(path.is_relative_to(root) for root in self.roots):
            msg = f"{path} is not inside any page root"
            raise ValueError(msg)
        candidates = self._candidates(path)
        if not candidates:
            msg = f"{path} sits directly in a page root and has no id"
            raise ValueError(msg)
        return min(candidates, key=len)

    def _candidates(self, path: Path) -> list[str]:
        ids = (
            path.parent.relative_to(root).as_posix()
            for root in self.roots
            if path.is_relative_to(root)
        )
        return [page_id for page_id in ids if page_id not in ("", ".")]

    def execute(self, location: str | Path) -> Declaration:
        """Execute a page script and return what its ``define`` call recorded.

        Raises:
            ScriptError: If the script raises while executing.
            PageNotDefinedError: If the script never calls ``define``.
        """
        path = Path(location)
        module_name = f"_warbler_page_{abs(hash(str(path)))}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ScriptError(str(path))

        module = importlib.util.module_from_spec(spec)
        with capture_declaration() as capture:
            try:
                spec.loader.exec_module(module)
            except Exception as exc:
                raise ScriptError(str(path)) from exc

        if capture.declaration is None:
            raise PageNotDefinedError(str(path))
        return capture.declaration


def _walk(directory: Path, filename: str) -> list[Path]:
    """Depth-first, name-sorted walk collecting *filename* occurrences."""
    found: list[Path] = []
    script = directory / filename
    if script.is_file():
        found.append(script)

    for item in sorted(directory.iterdir()):
        if not item.is_dir():
            continue
        if item.name.startswith("_") or item.name.startswith("."):
            continue
        found.extend(_walk(item, filename))
    return found
