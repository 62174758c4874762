"""Tests for warbler.templating — kida environment over the page roots."""

from pathlib import Path

from warbler.config import AppConfig
from warbler.templating.integration import create_environment, render_template


class TestCreateEnvironment:
    def test_page_dirs_searched_before_template_dirs(self, tmp_path: Path) -> None:
        pages = tmp_path / "pages"
        shared = tmp_path / "shared"
        (pages / "mypage").mkdir(parents=True)
        (shared / "mypage").mkdir(parents=True)
        (pages / "mypage" / "page.html").write_text("from pages")
        (shared / "mypage" / "page.html").write_text("from shared")
        (shared / "footer.html").write_text("footer")

        env = create_environment(AppConfig(page_dirs=(pages,), template_dirs=(shared,)))
        assert "from pages" in render_template(env, "mypage/page.html", {})
        assert "footer" in render_template(env, "footer.html", {})

    def test_every_page_root_is_searched(self, tmp_path: Path) -> None:
        app_pages = tmp_path / "app"
        admin_pages = tmp_path / "admin"
        (admin_pages / "nest" / "page3").mkdir(parents=True)
        (admin_pages / "nest" / "page3" / "page.html").write_text("admin page")
        app_pages.mkdir()

        env = create_environment(AppConfig(page_dirs=(app_pages, admin_pages)))
        assert render_template(env, "nest/page3/page.html", {}) == "admin page"

    def test_autoescape(self, tmp_path: Path) -> None:
        (tmp_path / "x.html").write_text("{{ value }}")
        env = create_environment(AppConfig(page_dirs=(tmp_path,)))
        assert "&lt;b&gt;" in render_template(env, "x.html", {"value": "<b>"})
