"""
reqparam: resolve declared request parameters from prioritized token sources.

Each declared parameter is read from one or more sources in priority order,
converted to a typed value, pre-validated per source, post-validated once the
whole set is resolved, and reported through a single ParseResult.

Example:
    from reqparam import ParserBuilder, ParameterBuilder, RequestContext

    parser = (
        ParserBuilder()
        .register(ParameterBuilder("page", int).from_query("page").default(1))
        .build()
    )
    result = parser.parse(RequestContext(query={"page": "3"}))
    result["page"]  # 3
"""

from typing import Final

from reqparam.config.settings import ParserSettings
from reqparam.models.dataModel import (
    ParameterDefinition,
    ParseResult,
    RequestContext,
    SourceBinding,
    TokenSource,
    ValidationError,
)
from reqparam.lib.parser import (
    CallableSource,
    HeaderSource,
    ParameterResolver,
    QuerySource,
    RequestParser,
    RouteSource,
)
from reqparam.lib.converters import converter_lookup, converter_register, converter_wrap
from reqparam.lib.builder import ParameterBuilder, ParserBuilder

__version__: Final[str] = "0.1.0"

__all__ = [
    "ParserSettings",
    "ParameterDefinition",
    "ParseResult",
    "RequestContext",
    "SourceBinding",
    "TokenSource",
    "ValidationError",
    "CallableSource",
    "HeaderSource",
    "ParameterResolver",
    "QuerySource",
    "RequestParser",
    "RouteSource",
    "converter_lookup",
    "converter_register",
    "converter_wrap",
    "ParameterBuilder",
    "ParserBuilder",
]
