"""Writes a Response to the ASGI ``send`` channel."""

from warbler._internal.asgi import Send
from warbler.http.response import Response

# 1xx, 204 and 304 carry no message body
_BODYLESS = frozenset({204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Emit ``http.response.start`` and a single ``http.response.body``."""
    bodyless = response.status < 200 or response.status in _BODYLESS
    body = b"" if bodyless else response.body_bytes
    headers = [(b"content-type", response.content_type.encode("latin-1"))]
    for name, value in response.headers:
        headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))
    headers.append((b"content-length", str(len(body)).encode("latin-1")))
    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": body})
