"""Tests for warbler.pages.discovery — filesystem page scripts."""

import logging
from pathlib import Path

import pytest

from warbler.errors import LoadError, PageNotDefinedError, ScriptError
from warbler.pages.discovery import DefinitionSource

SIMPLE_PAGE = """
from warbler import define

@define("/simple", section="docs")
def page(p):
    p.authorize(lambda: True)
"""


class TestLocations:
    def test_finds_nested_pages_sorted(self, pages_dir: Path, write_page) -> None:
        write_page("page1", SIMPLE_PAGE)
        write_page("nest/page2", SIMPLE_PAGE)
        source = DefinitionSource([pages_dir])
        ids = [source.identify(loc) for loc in source.locations()]
        assert ids == ["nest/page2", "page1"]

    def test_missing_root_is_skipped(self, tmp_path: Path) -> None:
        assert DefinitionSource([tmp_path / "nope"]).locations() == []

    def test_skips_private_and_hidden_dirs(self, pages_dir: Path, write_page) -> None:
        write_page("_shared", SIMPLE_PAGE)
        write_page(".cache/page", SIMPLE_PAGE)
        write_page("visible", SIMPLE_PAGE)
        source = DefinitionSource([pages_dir])
        assert [source.identify(loc) for loc in source.locations()] == ["visible"]

    def test_ignores_script_at_root(
        self, pages_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        (pages_dir / "page.py").write_text(SIMPLE_PAGE)
        with caplog.at_level(logging.WARNING, logger="warbler.pages"):
            assert DefinitionSource([pages_dir]).locations() == []
        assert "need their own directory" in caplog.text

    def test_custom_filename(self, pages_dir: Path) -> None:
        (pages_dir / "about").mkdir()
        (pages_dir / "about" / "definition.py").write_text(SIMPLE_PAGE)
        source = DefinitionSource([pages_dir], filename="definition.py")
        assert len(source.locations()) == 1

    def test_multiple_roots(self, tmp_path: Path, write_page) -> None:
        app_root = tmp_path / "app" / "pages"
        admin_root = tmp_path / "admin" / "pages"
        write_page("page1", SIMPLE_PAGE, root=app_root)
        write_page("nest/page3", SIMPLE_PAGE, root=admin_root)
        source = DefinitionSource([app_root, admin_root])
        assert [source.identify(loc) for loc in source.locations()] == ["page1", "nest/page3"]

    def test_nested_roots_yield_each_script_once(self, pages_dir: Path, write_page) -> None:
        write_page("nest/page2", SIMPLE_PAGE)
        source = DefinitionSource([pages_dir, pages_dir / "nest"])
        assert len(source.locations()) == 1

    def test_root_script_kept_when_outer_root_names_it(
        self, pages_dir: Path, write_page, caplog: pytest.LogCaptureFixture
    ) -> None:
        write_page("admin", SIMPLE_PAGE)
        source = DefinitionSource([pages_dir, pages_dir / "admin"])
        with caplog.at_level(logging.WARNING, logger="warbler.pages"):
            locations = source.locations()
        assert [source.identify(loc) for loc in locations] == ["admin"]
        assert "need their own directory" not in caplog.text


class TestIdentify:
    def test_relative_directory(self, pages_dir: Path) -> None:
        source = DefinitionSource([pages_dir])
        assert source.identify(pages_dir / "nest" / "page2" / "page.py") == "nest/page2"

    def test_shortest_candidate_wins(self, pages_dir: Path) -> None:
        source = DefinitionSource([pages_dir, pages_dir / "nest"])
        assert source.identify(pages_dir / "nest" / "page2" / "page.py") == "page2"

    def test_empty_candidates_are_skipped(self, pages_dir: Path) -> None:
        source = DefinitionSource([pages_dir, pages_dir / "admin"])
        assert source.identify(pages_dir / "admin" / "page.py") == "admin"

    def test_script_at_only_root_has_no_id(self, pages_dir: Path) -> None:
        with pytest.raises(ValueError, match="has no id"):
            DefinitionSource([pages_dir]).identify(pages_dir / "page.py")

    def test_outside_roots(self, tmp_path: Path, pages_dir: Path) -> None:
        with pytest.raises(ValueError, match="not inside any page root"):
            DefinitionSource([pages_dir]).identify(tmp_path / "elsewhere" / "page.py")


class TestExecute:
    def test_returns_declaration(self, pages_dir: Path, write_page) -> None:
        script = write_page("simple", SIMPLE_PAGE)
        decl = DefinitionSource([pages_dir]).execute(script)
        assert decl.route == "/simple"
        assert dict(decl.metadata) == {"section": "docs"}
        assert callable(decl.script)

    def test_script_error_chains_cause(self, pages_dir: Path, write_page) -> None:
        script = write_page("broken", "raise RuntimeError('boom')\n")
        with pytest.raises(ScriptError) as exc_info:
            DefinitionSource([pages_dir]).execute(script)
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert str(script) in str(exc_info.value)

    def test_syntax_error_is_script_error(self, pages_dir: Path, write_page) -> None:
        script = write_page("broken", "def page(:\n")
        with pytest.raises(ScriptError):
            DefinitionSource([pages_dir]).execute(script)

    def test_no_define(self, pages_dir: Path, write_page) -> None:
        script = write_page("empty", "VALUE = 1\n")
        with pytest.raises(PageNotDefinedError) as exc_info:
            DefinitionSource([pages_dir]).execute(script)
        assert isinstance(exc_info.value, LoadError)

    def test_each_execution_is_fresh(self, pages_dir: Path, write_page) -> None:
        script = write_page("simple", SIMPLE_PAGE)
        source = DefinitionSource([pages_dir])
        assert source.execute(script).script is not source.execute(script).script
