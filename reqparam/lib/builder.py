"""
Immutable builders for declaring request parameters.

Every builder call returns a new builder, so partially configured builders
can be shared and extended without affecting each other. A single explicit
`build()` produces the immutable definitions consumed by RequestParser.

Converters are resolved at build time: declaring a type that has neither a
registered nor a supplied converter fails immediately.

Example:
    parser = (
        ParserBuilder()
        .register(ParameterBuilder("id", int).from_route("id").required())
        .register(ParameterBuilder("verbose", bool).from_query("verbose").default(False))
        .build()
    )
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Optional, Self
from reqparam.models.dataModel import (
    Callback,
    Converter,
    ParameterDefinition,
    SourceBinding,
    TokenSource,
    Validator,
)
from reqparam.lib.converters import converter_lookup
from reqparam.lib.parser.sources import HeaderSource, QuerySource, RouteSource
from reqparam.lib.parser.session import RequestParser


@dataclass(frozen=True)
class ParameterBuilder:
    """Accumulates the configuration of one parameter.

    Attributes:
        name: Parameter name
        type_: Declared value type, used to look up a converter
        is_required: Whether the parameter must be supplied
        bindings: Token sources in priority order
        converter: Explicit converter; overrides the registry
        validators: Post-validators
        default_value: Value used when the parameter is absent; None unless
            set with default(), for every declared type
        callbacks: Completion callbacks
    """

    name: str
    type_: type = str
    is_required: bool = False
    bindings: tuple[SourceBinding, ...] = ()
    converter: Optional[Converter] = None
    validators: tuple[Validator, ...] = ()
    default_value: Any = None
    callbacks: tuple[Callback, ...] = ()

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Parameter name cannot be blank")

    def required(self: Self, flag: bool = True) -> Self:
        return replace(self, is_required=flag)

    def from_source(self: Self, source: TokenSource) -> Self:
        """Append a token source; earlier sources take priority."""
        return replace(self, bindings=(*self.bindings, SourceBinding(source)))

    def from_header(self: Self, key: str) -> Self:
        return self.from_source(HeaderSource(key))

    def from_query(self: Self, key: str) -> Self:
        return self.from_source(QuerySource(key))

    def from_route(self: Self, key: str, value: Optional[str] = None) -> Self:
        return self.from_source(RouteSource(key, value))

    def pre_validate(self: Self, validator: Validator) -> Self:
        """Attach a pre-validator to the most recently added source.

        Raises:
            ValueError: If no source has been added yet
        """
        if not self.bindings:
            raise ValueError(
                f"Parameter ({self.name}) needs a source before a pre-validator"
            )
        last: SourceBinding = self.bindings[-1]
        bound: SourceBinding = SourceBinding(
            last.source, (*last.pre_validators, validator)
        )
        return replace(self, bindings=(*self.bindings[:-1], bound))

    def convert_with(self: Self, converter: Converter) -> Self:
        if not callable(converter):
            raise TypeError(f"Parameter ({self.name}) converter must be callable")
        return replace(self, converter=converter)

    def post_validate(self: Self, validator: Validator) -> Self:
        return replace(self, validators=(*self.validators, validator))

    def default(self: Self, value: Any) -> Self:
        """Set the value used when no source supplies the parameter.

        Without a call to default() an absent optional parameter resolves to
        None, and its post-validators and callbacks receive None.
        """
        return replace(self, default_value=value)

    def on_resolved(self: Self, callback: Callable[[Any], None]) -> Self:
        return replace(self, callbacks=(*self.callbacks, callback))

    def build(self: Self) -> ParameterDefinition:
        """Produce the immutable parameter definition.

        Raises:
            TypeError: If no converter is available for the declared type
        """
        convert: Converter = self.converter or converter_lookup(self.type_)
        return ParameterDefinition(
            name=self.name,
            convert=convert,
            required=self.is_required,
            sources=self.bindings,
            post_validators=self.validators,
            default=self.default_value,
            on_resolved=self.callbacks,
        )


@dataclass(frozen=True)
class ParserBuilder:
    """Accumulates parameter builders and builds a RequestParser."""

    parameters: tuple[ParameterBuilder, ...] = ()

    def register(self: Self, parameter: ParameterBuilder) -> Self:
        """Add a parameter.

        Raises:
            ValueError: If a parameter with the same name is registered
        """
        if any(existing.name == parameter.name for existing in self.parameters):
            raise ValueError(f"Parameter ({parameter.name}) registered twice")
        return replace(self, parameters=(*self.parameters, parameter))

    def build(self: Self) -> RequestParser:
        return RequestParser(parameter.build() for parameter in self.parameters)
