"""Page definitions: discovery, registry, per-request context, dispatch.

Conventions::

    pages/
      page1/
        page.py          # id "page1", declares its route with define(...)
        page.html        # rendered for browser views
      nest/
        page2/
          page.py        # id "nest/page2"
      _shared/           # skipped: leading underscore

Every request replays the page script against a fresh
``ExecutionContext``; ``Dispatcher`` then runs before hooks,
authorization, and the data provider or the named action.
"""

from warbler.pages.context import ExecutionContext, build_context
from warbler.pages.define import define
from warbler.pages.discovery import DefinitionSource
from warbler.pages.dispatch import Dispatcher, PageView
from warbler.pages.registry import PageRegistry
from warbler.pages.types import Declaration, PageDefinition

__all__ = [
    "Declaration",
    "DefinitionSource",
    "Dispatcher",
    "ExecutionContext",
    "PageDefinition",
    "PageRegistry",
    "PageView",
    "build_context",
    "define",
]
