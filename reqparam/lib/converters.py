"""
Converter registry for reqparam.

A converter turns a raw token into a typed value and reports whether it
succeeded: `convert(token) -> (value, success)`. Converters never raise for
bad input.

Converters are looked up by the declared parameter type when a parameter is
built, so a type without a converter is reported at configuration time rather
than on the first request.

Built-in types:
- str, UUID
- int, float, Decimal (plain ASCII digits; no "_" separators, no nan or
  infinity)
- bool ("true"/"false", case-insensitive)
- datetime, date (ISO 8601)
- any Enum subclass (by member name, case-insensitive)
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
import math
from enum import Enum
from typing import Any, Callable
from uuid import UUID
from reqparam.models.dataModel import Converter


def converter_wrap(
    func: Callable[[str], Any],
    errors: tuple[type[BaseException], ...] = (ValueError, TypeError),
) -> Converter:
    """Turn a raising parse function into a converter.

    Args:
        func: Callable that returns the parsed value or raises
        errors: Exception types that mean "token could not be parsed"

    Returns:
        A converter returning (value, True) or (None, False)
    """

    def convert(token: str) -> tuple[Any, bool]:
        try:
            return func(token), True
        except errors:
            return None, False

    return convert


def str_convert(token: str) -> tuple[str, bool]:
    return token, True


def bool_convert(token: str) -> tuple[bool | None, bool]:
    normalized: str = token.strip().lower()
    if normalized == "true":
        return True, True
    if normalized == "false":
        return False, True
    return None, False


def number_check(token: str) -> str:
    """Reject spellings only Python's numeric constructors accept.

    Raises:
        ValueError: If the token holds "_" separators or non-ASCII characters
    """
    if "_" in token or not token.isascii():
        raise ValueError(f"Unsupported numeric token: {token!r}")
    return token


def int_parse(token: str) -> int:
    return int(number_check(token))


def float_parse(token: str) -> float:
    value: float = float(number_check(token))
    if not math.isfinite(value):
        raise ValueError(f"Non-finite number: {token!r}")
    return value


def decimal_parse(token: str) -> Decimal:
    value: Decimal = Decimal(number_check(token))
    if not value.is_finite():
        raise ValueError(f"Non-finite number: {token!r}")
    return value


def enum_converter(enum_type: type[Enum]) -> Converter:
    """Build a converter resolving enum members by name."""
    members: dict[str, Enum] = {
        name.lower(): member for name, member in enum_type.__members__.items()
    }

    def convert(token: str) -> tuple[Any, bool]:
        member: Enum | None = members.get(token.strip().lower())
        return member, member is not None

    return convert


_registry: dict[type, Converter] = {
    str: str_convert,
    bool: bool_convert,
    int: converter_wrap(int_parse),
    float: converter_wrap(float_parse),
    Decimal: converter_wrap(decimal_parse, (InvalidOperation, ValueError, TypeError)),
    UUID: converter_wrap(UUID),
    datetime: converter_wrap(datetime.fromisoformat),
    date: converter_wrap(date.fromisoformat),
}


def converter_register(type_: type, convert: Converter) -> None:
    """Register (or replace) the converter used for a type.

    Raises:
        TypeError: If convert is not callable
    """
    if not callable(convert):
        raise TypeError(f"Converter for {type_.__name__} must be callable")
    _registry[type_] = convert


def converter_lookup(type_: type) -> Converter:
    """Find the converter for a declared parameter type.

    Raises:
        TypeError: If no converter is registered for the type
    """
    if type_ in _registry:
        return _registry[type_]
    if isinstance(type_, type) and issubclass(type_, Enum):
        return enum_converter(type_)
    name: str = getattr(type_, "__name__", repr(type_))
    raise TypeError(f"Cannot parse {name} because no converter is registered for it")
