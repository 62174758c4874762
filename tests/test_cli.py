"""Tests for warbler.cli — entrypoint, pages and routes listings."""

import sys
import types
from pathlib import Path

import pytest

from warbler.app import App
from warbler.cli import main
from warbler.cli._resolve import resolve_app
from warbler.config import AppConfig

PAGE = """
from warbler import define

@define("/mypage", section="demo")
def page(p):
    p.authorize(lambda: True)
"""


@pytest.fixture
def app_module(monkeypatch: pytest.MonkeyPatch, pages_dir: Path, write_page) -> str:
    """Register a fake module holding a warbler App over a real pages dir."""
    write_page("mypage", PAGE)
    write_page("nest/page2", PAGE.replace("/mypage", "/nest/page2"))

    def create_app() -> App:
        app = App(AppConfig(page_dirs=(pages_dir,), log_level="warning"))
        app.mount_pages()
        return app

    mod = types.ModuleType("_fake_warbler_app")
    mod.app = create_app()  # type: ignore[attr-defined]
    mod.create_app = create_app  # type: ignore[attr-defined]
    mod.not_an_app = "just a string"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_warbler_app", mod)
    return "_fake_warbler_app"


class TestCLIHelp:
    @pytest.mark.parametrize("argv", [["--help"], ["pages", "--help"], ["routes", "--help"]])
    def test_help_exits_zero(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 0

    @pytest.mark.parametrize("command", ["pages", "routes"])
    def test_missing_app(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command])
        assert exc_info.value.code == 2

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestResolveApp:
    def test_explicit_attribute(self, app_module: str) -> None:
        assert isinstance(resolve_app(f"{app_module}:app"), App)

    def test_default_attribute(self, app_module: str) -> None:
        assert isinstance(resolve_app(app_module), App)

    def test_factory(self, app_module: str) -> None:
        assert isinstance(resolve_app(f"{app_module}:create_app"), App)

    def test_not_an_app(self, app_module: str) -> None:
        with pytest.raises(TypeError, match="not a warbler.App"):
            resolve_app(f"{app_module}:not_an_app")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("nonexistent_module_xyz:app")


class TestPagesCommand:
    def test_lists_pages(self, app_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["pages", app_module])
        out = capsys.readouterr().out
        assert out.splitlines()[0].split() == ["ID", "ROUTE", "METADATA"]
        assert "nest/page2" in out
        assert "/mypage" in out
        assert "section='demo'" in out

    def test_match_filter(self, app_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["pages", app_module, "--match", "^nest/"])
        out = capsys.readouterr().out
        assert "nest/page2" in out
        assert "/mypage " not in out

    def test_bad_import(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["pages", "nonexistent_module_xyz:app"])
        assert exc_info.value.code == 1
        assert "Error" in capsys.readouterr().err


class TestRoutesCommand:
    def test_lists_routes(self, app_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", app_module])
        out = capsys.readouterr().out
        assert out.splitlines()[0].split() == ["METHOD", "PATH", "NAME", "PAGE"]
        assert "/mypage/action/{action_name}" in out
        assert "mypage_page" in out
        assert "nest_page2_action" in out
