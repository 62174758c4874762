"""Shared fixtures: page scripts written into a temporary pages directory."""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from warbler.client.state import ErrorState

type WritePage = Callable[..., Path]


@pytest.fixture
def pages_dir(tmp_path: Path) -> Path:
    root = tmp_path / "pages"
    root.mkdir()
    return root


@pytest.fixture
def write_page(pages_dir: Path) -> WritePage:
    """Write ``<pages_dir>/<page_id>/page.py`` (and optionally ``page.html``)."""

    def write(
        page_id: str,
        source: str,
        *,
        template: str | None = None,
        root: Path | None = None,
    ) -> Path:
        directory = (root or pages_dir) / page_id
        directory.mkdir(parents=True, exist_ok=True)
        script = directory / "page.py"
        script.write_text(textwrap.dedent(source), encoding="utf-8")
        if template is not None:
            (directory / "page.html").write_text(textwrap.dedent(template), encoding="utf-8")
        return script

    return write


@pytest.fixture
def error_state() -> ErrorState:
    """A private error state, so tests don't share the process-wide one."""
    return ErrorState()
