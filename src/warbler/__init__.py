"""Warbler — page definitions as plain Python scripts.

Each page lives in its own directory and declares a route, authorization
rules, a data provider, and named actions in a ``page.py`` file.

Basic usage::

    # pages/mypage/page.py
    from warbler import define

    @define("/mypage")
    def page(p):
        p.authorize(lambda: True)
        p.data(lambda: {"value": "hello"})

        @p.post("create_comment")
        async def create_comment():
            body = await p.request.json()
            return {"content": body["content"]}

    # app.py
    from warbler import App

    app = App()
    app.mount_pages()

Calling the page from Python (``warbler.client``)::

    from warbler.client import PageClient

    client = PageClient("/mypage", http=httpx.AsyncClient(base_url=...))
    await client.post("create_comment", {"content": "hi"})
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "DefinitionSource",
    "DoubleLoadError",
    "ExecutionContext",
    "HTTPError",
    "LoadError",
    "MethodNotAllowed",
    "MissingAuthorizationError",
    "NotFound",
    "PageDefinition",
    "PageNotDefinedError",
    "PageRegistry",
    "Request",
    "Response",
    "ScriptError",
    "Unauthorized",
    "WarblerError",
    "define",
    "get_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warbler`` fast, which matters because every page
    script imports ``define`` from here.
    """
    if name == "define":
        from warbler.pages.define import define

        return define

    if name == "App":
        from warbler.app import App

        return App

    if name == "AppConfig":
        from warbler.config import AppConfig

        return AppConfig

    if name == "Request":
        from warbler.http.request import Request

        return Request

    if name == "Response":
        from warbler.http.response import Response

        return Response

    if name in ("PageDefinition", "ExecutionContext", "PageRegistry", "DefinitionSource"):
        from warbler import pages as _pages

        return getattr(_pages, name)

    if name == "get_request":
        from warbler.context import get_request

        return get_request

    if name in (
        "ConfigurationError",
        "DoubleLoadError",
        "HTTPError",
        "LoadError",
        "MethodNotAllowed",
        "MissingAuthorizationError",
        "NotFound",
        "PageNotDefinedError",
        "ScriptError",
        "Unauthorized",
        "WarblerError",
    ):
        from warbler import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
