"""Warbler exception hierarchy.

Shared across the registry, dispatcher, router, and ASGI handler so every
module raises and catches the same types.

Two families matter for pages:

- ``HTTPError`` subclasses (``NotFound``, ``Unauthorized``) are client-visible
  and terminal for a single request.
- ``ConfigurationError`` and ``LoadError`` subclasses are definition bugs.
  They are meant to fail loudly in development and tests, not to be handled
  at request time.
"""

from dataclasses import dataclass


class WarblerError(Exception):
    """Base for all warbler-specific errors."""


class ConfigurationError(WarblerError):
    """Raised when the app or a page definition is invalid."""


class LoadError(WarblerError):
    """Raised when page definitions cannot be loaded."""


class ScriptError(LoadError):
    """A page script raised while it was being executed.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, location: str) -> None:
        super().__init__(f"Failed to load page {location}")
        self.location = location


class PageNotDefinedError(LoadError, ConfigurationError):
    """A page script ran but never called ``define(...)``."""

    def __init__(self, location: str) -> None:
        super().__init__(f"Page at {location} did not define a page")
        self.location = location


class DoubleLoadError(LoadError, ConfigurationError):
    """``PageRegistry.load()`` was called again outside interactive mode."""

    def __init__(self) -> None:
        super().__init__(
            "PageRegistry.load() called multiple times!\n"
            "Maybe try lazy_load() instead."
        )


class MissingAuthorizationError(ConfigurationError):
    """A page declared no ``authorize`` checks.

    Distinct from ``Unauthorized``: this is a bug in the page definition,
    not a rejected client.
    """

    def __init__(self, page_id: str) -> None:
        super().__init__(f"Page missing authorization: {page_id}")
        self.page_id = page_id


@dataclass(frozen=True, slots=True)
class HTTPError(WarblerError):
    """An error that maps directly to an HTTP status code.

    Raised by the router and the page dispatcher. The ASGI handler catches
    these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — unknown route, page id, or action name."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class Unauthorized(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """403 — one of the page's authorize checks returned false."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status=403, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
