"""Kida environment for page views.

A page's view template sits next to its script, so every page root is
also a template root::

    pages/nest/page2/page.py
    pages/nest/page2/page.html   -> "nest/page2/page.html"

Shared layouts and partials live in ``config.template_dirs``, searched
after the page roots. The environment is built once, when the app freezes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader

from warbler.config import AppConfig


def create_environment(config: AppConfig) -> Environment:
    roots = (*config.page_dirs, *config.template_dirs)
    return Environment(
        loader=ChoiceLoader([FileSystemLoader(str(root)) for root in roots]),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )


def render_template(env: Environment, name: str, context: Mapping[str, Any]) -> str:
    return env.get_template(name).render(dict(context))
