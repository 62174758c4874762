"""HTTP primitives: immutable Request, Response, Headers, QueryParams."""

from warbler.http.headers import Headers
from warbler.http.query import QueryParams
from warbler.http.request import Request
from warbler.http.response import Response

__all__ = ["Headers", "QueryParams", "Request", "Response"]
