"""Where a client finds its anti-CSRF parameter name and token.

Server-rendered pages usually carry them as meta tags::

    <meta name="csrf-param" content="authenticity_token">
    <meta name="csrf-token" content="3f9a...">

A source is anything callable returning ``(param, token)``; either part may
be ``None`` when absent, in which case the client sends the body unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from html.parser import HTMLParser

type CSRFPair = tuple[str | None, str | None]
type CSRFSource = Callable[[], CSRFPair]


@dataclass(frozen=True, slots=True)
class StaticCSRF:
    """A fixed parameter name and token."""

    param: str | None
    token: str | None

    def __call__(self) -> CSRFPair:
        return self.param, self.token


class _MetaParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__()
        self.meta: dict[str, str] = {}

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag != "meta":
            return
        values = dict(attrs)
        name = values.get("name")
        content = values.get("content")
        if name and content is not None:
            self.meta.setdefault(name, content)


@dataclass(frozen=True, slots=True)
class MetaTagCSRF:
    """CSRF metadata read from ``<meta name="csrf-param|csrf-token">`` tags."""

    param: str | None
    token: str | None

    @classmethod
    def from_html(
        cls,
        html: str,
        *,
        param_name: str = "csrf-param",
        token_name: str = "csrf-token",
    ) -> MetaTagCSRF:
        parser = _MetaParser()
        parser.feed(html)
        parser.close()
        return cls(parser.meta.get(param_name), parser.meta.get(token_name))

    def __call__(self) -> CSRFPair:
        return self.param, self.token


def no_csrf() -> CSRFPair:
    return None, None
