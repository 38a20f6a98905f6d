"""
dataModel.py

This module defines the data models and schemas used throughout the reqparam
library. Value objects that cross the public boundary leverage Pydantic for
validation and immutability; definitions that carry callables are frozen
dataclasses.

Features:
- Validation error messages
- The request-like input context read by token sources
- The token source protocol
- Parameter definitions and their source bindings
- Per-parameter resolution outcomes
- Parse results

Usage:
Import these models to declare parameters and to inspect parse results.
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, Protocol, TypeVar
from typing import runtime_checkable, Self
from dataclasses import dataclass, field
from types import MappingProxyType

T = TypeVar("T")


class ValidationError(BaseModel):
    """A single validation failure message.

    Attributes:
        message: Human readable description of the failure. Never blank.

    Example:
        ValidationError("page must be positive")
    """

    model_config = ConfigDict(frozen=True)

    message: str

    def __init__(self: Self, message: str, **data: Any) -> None:
        super().__init__(message=message, **data)

    @field_validator("message")
    @classmethod
    def message_check(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Validation error message cannot be blank")
        return value

    def __str__(self: Self) -> str:
        return self.message


class RequestContext(BaseModel):
    """Request-like input consumed by the built-in token sources.

    Multi-valued entries (lists) are presented to converters as a single
    comma-joined token.

    Attributes:
        headers: Header name to value(s); looked up case-insensitively
        query: Query string key to value(s)
        route: Route segment key to value
    """

    headers: dict[str, str | list[str]] = Field(default_factory=dict)
    query: dict[str, str | list[str]] = Field(default_factory=dict)
    route: dict[str, str] = Field(default_factory=dict)


@runtime_checkable
class TokenSource(Protocol):
    """Protocol defining a named source of raw string tokens.

    Sources must never raise for missing data: returning None is the only
    way to signal that the context does not hold a token.

    Attributes:
        extracts_from: Where the token is read from (e.g. "query string")
        key: The key used to read the token
    """

    extracts_from: str
    key: str

    def extract(self, context: Any) -> Optional[str]:
        """Extract the raw token from the context.

        Args:
            context: Opaque input context

        Returns:
            The token, or None if the context does not contain it
        """
        ...


Converter = Callable[[str], tuple[Any, bool]]
Validator = Callable[[Any], ValidationError | Iterable[ValidationError] | None]
Callback = Callable[[Any], None]


@dataclass(frozen=True)
class SourceBinding:
    """A token source attached to a parameter, with its own pre-validators.

    Attributes:
        source: Where the token comes from
        pre_validators: Run in order against the converted value
    """

    source: TokenSource
    pre_validators: tuple[Validator, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "pre_validators", tuple(self.pre_validators))


@dataclass(frozen=True)
class ParameterDefinition(Generic[T]):
    """Static description of one declared parameter.

    Attributes:
        name: Unique, non-blank parameter name
        convert: Total function turning a token into (value, success)
        required: Whether a missing value fails the parse
        sources: Token sources in priority order (index 0 wins)
        post_validators: Run after every parameter has been resolved
        default: Value used when the parameter is absent and optional
        on_resolved: Callbacks invoked with the final value on overall success

    Raises:
        ValueError: If name is blank
        TypeError: If convert is not callable
    """

    name: str
    convert: Callable[[str], tuple[T, bool]]
    required: bool = False
    sources: tuple[SourceBinding, ...] = ()
    post_validators: tuple[Validator, ...] = ()
    default: Optional[T] = None
    on_resolved: tuple[Callable[[T], None], ...] = ()

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Parameter name cannot be blank")
        if not callable(self.convert):
            raise TypeError(f"Parameter ({self.name}) has no callable converter")
        object.__setattr__(self, "sources", tuple(self.sources))
        object.__setattr__(self, "post_validators", tuple(self.post_validators))
        object.__setattr__(self, "on_resolved", tuple(self.on_resolved))


@dataclass
class ParameterOutcome:
    """Result of resolving a single parameter within one parse run.

    Attributes:
        definition: The parameter that was resolved
        value: Resolved (or default) value; None on failure
        used_default: Whether the default value was used
        success: Whether the parameter resolved
        errors: Ordered failure messages
    """

    definition: ParameterDefinition
    value: Any = None
    used_default: bool = False
    success: bool = True
    errors: list[ValidationError] = field(default_factory=list)


class ParseResult(BaseModel):
    """Result of a request parse.

    Attributes:
        success: Whether every parameter resolved and validated
        error: Aggregated error message if the parse failed
        values: Read-only parameter name to value mapping if the parse
            succeeded

    Example:
        result = parser.parse(context)
        if result.success:
            page = result["page"]
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    error: str | None = None
    values: Mapping[str, Any] | None = None

    @field_validator("values")
    @classmethod
    def values_freeze(cls, value: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
        if value is None:
            return None
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def outcome_check(self) -> Self:
        if self.success:
            if self.values is None or self.error is not None:
                raise ValueError("A successful parse carries values and no error")
        elif self.values is not None or not self.error or not self.error.strip():
            raise ValueError("A failed parse carries an error message and no values")
        return self

    def _values_get(self: Self) -> Mapping[str, Any]:
        if not self.success or self.values is None:
            raise RuntimeError("Cannot retrieve a value for a failed parse")
        return self.values

    def __getitem__(self: Self, parameter: str) -> Any:
        return self._values_get()[parameter]

    def __contains__(self: Self, parameter: object) -> bool:
        return self.success and self.values is not None and parameter in self.values

    def as_dict(self: Self) -> dict[str, Any]:
        """Return a copy of the resolved name to value mapping.

        Raises:
            RuntimeError: If the parse failed
        """
        return dict(self._values_get())
