"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, page_dirs=("app/pages", "admin/pages"))

    ``debug`` doubles as the interactive-development flag: it is the only
    mode in which page definitions may be loaded more than once.
    """

    # Interactive development: page reload, template auto-reload, tracebacks
    debug: bool = False

    # Page definitions
    page_dirs: tuple[str | Path, ...] = ("pages",)
    page_filename: str = "page.py"
    view_template: str = "page.html"

    # Routing
    action_segment: str = "action"
    fallback_page_param: str = "page_id"
    fallback_action_param: str = "action_name"

    # Templates
    template_dirs: tuple[str | Path, ...] = ()  # Searched after page_dirs
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Logging
    log_level: str = "info"

    @property
    def interactive(self) -> bool:
        """True when page definitions may be hot-reloaded."""
        return self.debug
