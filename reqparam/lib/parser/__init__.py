"""
Parser package for reqparam request parameter resolution.

Provides the per-parameter resolver, the session that aggregates it over a
parameter set, and the built-in token sources.
"""

from .base import ParameterResolver
from .session import RequestParser
from .sources import HeaderSource, QuerySource, RouteSource, CallableSource

__all__ = [
    "ParameterResolver",
    "RequestParser",
    "HeaderSource",
    "QuerySource",
    "RouteSource",
    "CallableSource",
]
