"""Invoke helpers — call sync or async page callables uniformly.

Before hooks, authorize checks, data providers, and action handlers can
all be ``def`` or ``async def``. Any code that calls one goes through
``invoke`` so the sync/async check lives in exactly one place.

Usage::

    from warbler._internal.invoke import invoke

    allowed = await invoke(check)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync — returns immediately
        p.authorize(lambda: True)

        # async — awaited automatically
        @p.authorize
        async def is_member():
            return await members.contains(p.request.query["user"])
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
