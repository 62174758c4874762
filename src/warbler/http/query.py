"""Query string parameters, the input of GET actions.

The page client forwards the page's own query with every GET action, so
a handler sees both the page's state and the call's arguments::

    @p.get("more_info")
    def more_info():
        return {"tab": p.request.query.get("tab"), "page": p.request.query.get_int("page", 1)}
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs


class QueryParams(Mapping[str, str]):
    """Read-only query parameters. Indexing returns the first value."""

    __slots__ = ("_values",)

    def __init__(self, query_string: bytes = b"") -> None:
        self._values: dict[str, list[str]] = parse_qs(
            query_string.decode("latin-1"), keep_blank_values=True
        )

    def __getitem__(self, key: str) -> str:
        return self._values[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"QueryParams({self._values!r})"

    def get_list(self, key: str) -> list[str]:
        return list(self._values.get(key, ()))

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """First value of *key* as an int; *default* if absent or not a number."""
        value = self.get(key)
        if value is None or not value.strip().lstrip("-").isdigit():
            return default
        return int(value)

    def to_dict(self) -> dict[str, str]:
        """First value per key, ready to return from an action as JSON."""
        return {key: values[0] for key, values in self._values.items()}
