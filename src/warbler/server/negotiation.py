"""Turn what a page view or action returned into a Response.

View requests resolve to a ``PageView``: JSON callers (the page client)
get the data itself, browsers get the page's template rendered with it.
Action handlers return plain values:

=====================  ==========================================
``Response``           sent as is
``dict`` / ``list``    200, JSON
``str``                200, HTML
``None``               204, empty
``(value, status)``    ``value`` as above, with ``status``
=====================  ==========================================
"""

from __future__ import annotations

import json as json_module
from typing import TYPE_CHECKING, Any

from warbler.errors import ConfigurationError
from warbler.http.response import Response
from warbler.pages.dispatch import PageView
from warbler.templating.integration import render_template

if TYPE_CHECKING:
    from kida import Environment

    from warbler.http.request import Request

_JSON = "application/json; charset=utf-8"


def json_response(value: Any, status: int = 200) -> Response:
    return Response(json_module.dumps(value, default=str), status=status, content_type=_JSON)


def negotiate(
    value: Any,
    *,
    kida_env: Environment | None = None,
    request: Request | None = None,
    view_template: str = "page.html",
) -> Response:
    """Build the Response for *value*; see the module table.

    Raises:
        ConfigurationError: A page view must be rendered but there is no
            kida environment.
        TypeError: *value* has no response form.
    """
    match value:
        case Response():
            return value
        case PageView() if request is None or request.wants_json:
            return json_response(value.data)
        case PageView():
            if kida_env is None:
                msg = f"Page {value.page.id!r}: rendering its view needs a kida environment"
                raise ConfigurationError(msg)
            return Response(render_view(kida_env, value, view_template))
        case dict() | list():
            return json_response(value)
        case str():
            return Response(value)
        case None:
            return Response(status=204)
        case (inner, int() as status):
            return negotiate(
                inner, kida_env=kida_env, request=request, view_template=view_template
            ).with_status(status)
    msg = (
        f"Cannot convert {type(value).__name__} to a response; "
        "return a dict, list, str, None, Response or (value, status)"
    )
    raise TypeError(msg)


def render_view(env: Environment, view: PageView, template_name: str) -> str:
    """Render ``<page id>/<template_name>`` with the view's data.

    Dict data is spread into the context; the value itself is ``data``
    and the definition is ``page``.
    """
    context: dict[str, Any] = dict(view.data) if isinstance(view.data, dict) else {}
    context.update(data=view.data, page=view.page)
    return render_template(env, f"{view.page.id}/{template_name}", context)
