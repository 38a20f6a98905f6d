r"""
Per-parameter resolution engine.

Provides the algorithm that turns one parameter definition and one input
context into a per-parameter outcome. Sources are consulted in declared
order and the first decisive source wins.

The resolver handles:
- Absent tokens (silently move on to the next source)
- Unparsable tokens (skip or fail, per settings)
- Source-scoped pre-validation (skip or fail, per settings)
- Exhaustion: invalid tokens seen, missing required value, or default

The resolver never fires completion callbacks; that belongs to the session
once the whole parameter set is known to be clean.

Example:
    resolver = ParameterResolver(ParserSettings())
    outcome = resolver.resolve(definition, context)
"""

from typing import Any, Iterable, Optional, Self
from reqparam.config.settings import ParserSettings
from reqparam.models.dataModel import (
    ParameterDefinition,
    ParameterOutcome,
    SourceBinding,
    ValidationError,
    Validator,
)
from reqparam.lib.log import LOG


def errors_collect(validators: Iterable[Validator], value: Any) -> list[ValidationError]:
    """Run every validator against a value and gather all errors.

    Validators may return None or an empty iterable to signal success, and
    may return a lone ValidationError instead of a one-item list.
    Every validator runs, even after an earlier one reported errors.

    Args:
        validators: Validators in the order they should run
        value: Converted parameter value

    Returns:
        All errors, in validator order
    """
    errors: list[ValidationError] = []
    for validator in validators:
        reported: ValidationError | Iterable[ValidationError] | None = validator(value)
        if reported is None:
            continue
        if isinstance(reported, ValidationError):
            reported = [reported]
        for error in reported:
            if not isinstance(error, ValidationError):
                raise TypeError(
                    f"Validator {validator!r} reported {type(error).__name__}, "
                    "expected ValidationError"
                )
            errors.append(error)
    return errors


def usage_describe(definition: ParameterDefinition) -> str:
    """Describe every place a parameter can be supplied from."""
    lines: list[str] = [
        f"\trequest {binding.source.extracts_from} with a key of {binding.source.key}"
        for binding in definition.sources
    ]
    return "\n".join(lines)


class ParameterResolver:
    """Resolves a single parameter against an input context.

    Stateless apart from its settings, so one instance can serve any number
    of concurrent parse runs.

    Attributes:
        settings: Skip policies for failed conversions and pre-validations
    """

    def __init__(self: Self, settings: ParserSettings) -> None:
        self.settings: ParserSettings = settings

    def resolve(
        self: Self, definition: ParameterDefinition, context: Any
    ) -> ParameterOutcome:
        """Resolve one parameter.

        Args:
            definition: The parameter to resolve
            context: Opaque input handed to every source

        Returns:
            ParameterOutcome with either the resolved value or the errors
        """
        token_found: bool = False

        for binding in definition.sources:
            token: Optional[str] = binding.source.extract(context)
            if token is None:
                continue

            value, converted = definition.convert(token)
            if not converted:
                token_found = True
                if self.settings.skipFailedConversions:
                    LOG(
                        f"Skipping unparsable token from {binding.source.extracts_from} "
                        f"for parameter ({definition.name})",
                        parameter=definition.name,
                    )
                    continue
                return self._failure(
                    definition,
                    [
                        ValidationError(
                            f"Value provided ({token}) for parameter ({definition.name}) "
                            "was invalid and could not be parsed"
                        )
                    ],
                )

            outcome: Optional[ParameterOutcome] = self._preValidation_run(
                definition, binding, value
            )
            if outcome is not None:
                return outcome

        return self._exhausted(definition, token_found)

    def _preValidation_run(
        self: Self, definition: ParameterDefinition, binding: SourceBinding, value: Any
    ) -> Optional[ParameterOutcome]:
        """Apply a source's pre-validators to a converted value.

        Returns:
            A decisive outcome, or None if the value was skipped and the
            next source should be consulted
        """
        errors: list[ValidationError] = errors_collect(binding.pre_validators, value)
        if not errors:
            return ParameterOutcome(definition=definition, value=value)

        if self.settings.skipFailedPreValidations:
            LOG(
                f"Skipping value from {binding.source.extracts_from} that failed "
                f"pre-validation for parameter ({definition.name})",
                parameter=definition.name,
            )
            return None

        header: ValidationError = ValidationError(
            f"Parameter ({definition.name}) failed pre-validation..."
        )
        return self._failure(definition, [header, *errors])

    def _exhausted(
        self: Self, definition: ParameterDefinition, token_found: bool
    ) -> ParameterOutcome:
        """Decide the outcome once every source has been consulted."""
        if token_found:
            return self._failure(
                definition,
                [
                    ValidationError(
                        f"Value(s) provided for parameter ({definition.name}) "
                        "were invalid and could not be parsed"
                    )
                ],
            )

        if definition.required:
            message: str = (
                f"Required parameter ({definition.name}) missing, "
                "it can be specified using:"
            )
            usage: str = usage_describe(definition)
            if usage:
                message = f"{message}\n{usage}"
            return self._failure(definition, [ValidationError(message)])

        LOG(
            f"Parameter ({definition.name}) not supplied, using default",
            parameter=definition.name,
        )
        return ParameterOutcome(
            definition=definition, value=definition.default, used_default=True
        )

    def _failure(
        self: Self, definition: ParameterDefinition, errors: list[ValidationError]
    ) -> ParameterOutcome:
        LOG(
            f"Parameter ({definition.name}) failed: {errors[0].message}",
            parameter=definition.name,
        )
        return ParameterOutcome(definition=definition, success=False, errors=errors)
