"""The ``define`` call page scripts use to declare themselves.

A ``page.py`` file declares exactly one page::

    from warbler import define

    @define("/documents/{doc_id}", section="docs")
    def page(p):
        p.authorize(lambda: True)
        p.data(lambda: {"doc_id": p.request.path_params["doc_id"]})

While the registry executes a script it opens a capture slot; ``define``
records its ``Declaration`` there. Outside a load, ``define`` simply returns
the function, so a page module can also be imported normally (e.g. by tests).
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from warbler.pages.types import Declaration, PageScript


class _Capture:
    """Holds the most recent declaration made while a script runs."""

    __slots__ = ("declaration",)

    def __init__(self) -> None:
        self.declaration: Declaration | None = None


_capture_var: ContextVar[_Capture | None] = ContextVar("warbler_page_capture", default=None)


@contextmanager
def capture_declaration() -> Iterator[_Capture]:
    """Open a capture slot for the duration of one script execution."""
    capture = _Capture()
    token = _capture_var.set(capture)
    try:
        yield capture
    finally:
        _capture_var.reset(token)


def define(route: str, **metadata: Any) -> Callable[[PageScript], PageScript]:
    """Declare a page at *route* with optional metadata tags.

    Use as a decorator on the page script. If a script calls ``define``
    more than once, the last call wins.
    """

    def decorator(script: PageScript) -> PageScript:
        if not callable(script):
            msg = f"define({route!r}) must decorate a function, got {type(script).__name__}"
            raise TypeError(msg)
        capture = _capture_var.get()
        if capture is not None:
            capture.declaration = Declaration(route=route, script=script, metadata=metadata)
        return script

    return decorator
