"""
settings.py

This module provides configuration management for the reqparam library.

Features:
- Library-wide behaviour (logging verbosity) using Pydantic settings
- Resolution policies for the request parser, overridable from the
  environment so that a deployment can switch between lenient and strict
  parsing without code changes

Usage:
Import appsettings for library configuration values, and ParserSettings
to control a single parse run.
"""

from typing import Final, Self
from pydantic_settings import BaseSettings, SettingsConfigDict


class App(BaseSettings):
    """
    Library settings model.

    Settings can be overridden through environment variables with the
    REQPARAM_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
    """

    beQuiet: bool = True

    model_config = SettingsConfigDict(
        env_prefix="REQPARAM_",  # Environment variables with this prefix override settings
        case_sensitive=False,  # Allow case-insensitive environment variables
        extra="allow",  # Allow additional attributes not defined in the model
    )


class ParserSettings(BaseSettings):
    """
    Resolution policies applied by the request parser.

    Both policies default to enabled (lenient): a bad token from one source
    is skipped and the next source is consulted. Disabling a policy makes the
    parser fail the parameter on the first bad token instead.

    Attributes:
        skipFailedConversions: Skip tokens that could not be converted
        skipFailedPreValidations: Skip converted values that failed the
            source's pre-validators
    """

    skipFailedConversions: bool = True
    skipFailedPreValidations: bool = True

    model_config = SettingsConfigDict(
        env_prefix="REQPARAM_PARSER_",
        case_sensitive=False,
        frozen=True,
    )

    @classmethod
    def lenient(cls) -> Self:
        """Settings that skip every failed token."""
        return cls(skipFailedConversions=True, skipFailedPreValidations=True)

    @classmethod
    def strict(cls) -> Self:
        """Settings that fail a parameter on its first bad token."""
        return cls(skipFailedConversions=False, skipFailedPreValidations=False)


# Create the library settings instance
appsettings: Final[App] = App()
