"""
Token sources for reqparam.

Implements specific extraction strategies for the parts of a request-like
context a token can come from:
- Headers: case-insensitive header lookup
- Query: query string lookup
- Route: route segment lookup, or a fixed route default
- Callable: any function of the context

Multi-valued entries are joined with "," before being handed to a converter.
"""

from typing import Any, Callable, Mapping, Optional, Self
from reqparam.models.dataModel import RequestContext


def key_check(key: str) -> str:
    """Reject blank source keys.

    Raises:
        ValueError: If key is empty or whitespace
    """
    if not key or not key.strip():
        raise ValueError("Source key cannot be blank")
    return key


def token_flatten(value: str | list[str] | None) -> Optional[str]:
    """Collapse a possibly multi-valued entry into one token."""
    if value is None:
        return None
    if isinstance(value, list):
        if not value:
            return None
        return ",".join(value)
    return value


class HeaderSource:
    """Source reading a request header."""

    extracts_from: str = "headers"

    def __init__(self: Self, key: str) -> None:
        self.key: str = key_check(key)

    def extract(self: Self, context: RequestContext) -> Optional[str]:
        headers: Mapping[str, Any] = context.headers
        if self.key in headers:
            return token_flatten(headers[self.key])

        wanted: str = self.key.lower()
        for name, value in headers.items():
            if name.lower() == wanted:
                return token_flatten(value)
        return None

    def __repr__(self: Self) -> str:
        return f"HeaderSource({self.key!r})"


class QuerySource:
    """Source reading a query string value."""

    extracts_from: str = "query string"

    def __init__(self: Self, key: str) -> None:
        self.key: str = key_check(key)

    def extract(self: Self, context: RequestContext) -> Optional[str]:
        return token_flatten(context.query.get(self.key))

    def __repr__(self: Self) -> str:
        return f"QuerySource({self.key!r})"


class RouteSource:
    """Source reading a route value.

    When constructed with a fixed value the source always yields that value,
    which lets a route template supply a default that outranks later sources.
    """

    extracts_from: str = "route"

    def __init__(self: Self, key: str, value: Optional[str] = None) -> None:
        self.key: str = key_check(key)
        self.value: Optional[str] = value

    def extract(self: Self, context: RequestContext) -> Optional[str]:
        if self.value is not None:
            return self.value
        return context.route.get(self.key)

    def __repr__(self: Self) -> str:
        return f"RouteSource({self.key!r})"


class CallableSource:
    """Source delegating extraction to a function of the context."""

    def __init__(
        self: Self,
        extracts_from: str,
        key: str,
        extract: Callable[[Any], Optional[str]],
    ) -> None:
        if not extracts_from or not extracts_from.strip():
            raise ValueError("Source label cannot be blank")
        self.extracts_from: str = extracts_from
        self.key: str = key_check(key)
        self._extract: Callable[[Any], Optional[str]] = extract

    def extract(self: Self, context: Any) -> Optional[str]:
        return self._extract(context)

    def __repr__(self: Self) -> str:
        return f"CallableSource({self.extracts_from!r}, {self.key!r})"
