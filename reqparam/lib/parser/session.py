"""
Request parsing session for reqparam.

Orchestrates the per-parameter resolver over every declared parameter and
assembles a single ParseResult:

1. Resolve every parameter independently
2. Fail with every per-parameter error if any parameter failed
3. Run post-validators; fail with their errors if any reported
4. Fire completion callbacks, in declaration order
5. Build the name to value mapping

Callbacks only ever observe a request that parsed and validated cleanly.

Example:
    parser = RequestParser([page_definition, id_definition])
    result = parser.parse(RequestContext(query={"page": "2"}))
"""

from typing import Any, Iterable, Optional, Self
from reqparam.config.settings import ParserSettings
from reqparam.models.dataModel import (
    ParameterDefinition,
    ParameterOutcome,
    ParseResult,
    ValidationError,
)
from reqparam.lib.parser.base import ParameterResolver, errors_collect
from reqparam.lib.log import LOG


class RequestParser:
    """Parses request-like contexts against a fixed set of parameters.

    Immutable after construction and safe to share between concurrent
    parse runs.

    Attributes:
        definitions: Declared parameters, in declaration order
    """

    def __init__(self: Self, definitions: Iterable[ParameterDefinition]) -> None:
        """Initialize the parser with its parameter definitions.

        Args:
            definitions: Parameters to resolve on every parse

        Raises:
            ValueError: If two parameters share a name
        """
        self._definitions: tuple[ParameterDefinition, ...] = tuple(definitions)
        seen: set[str] = set()
        for definition in self._definitions:
            if definition.name in seen:
                raise ValueError(f"Parameter ({definition.name}) registered twice")
            seen.add(definition.name)

    @property
    def definitions(self: Self) -> tuple[ParameterDefinition, ...]:
        return self._definitions

    def parse(
        self: Self, context: Any, settings: Optional[ParserSettings] = None
    ) -> ParseResult:
        """Parse a context.

        Args:
            context: Opaque input handed to every token source
            settings: Skip policies; lenient defaults when omitted

        Returns:
            ParseResult with either every parameter value or one aggregated
            error message
        """
        resolver: ParameterResolver = ParameterResolver(settings or ParserSettings())
        outcomes: list[ParameterOutcome] = [
            resolver.resolve(definition, context) for definition in self._definitions
        ]

        failure: Optional[str] = self._failures_aggregate(outcomes)
        if failure is not None:
            LOG("Parse failed during resolution")
            return ParseResult(success=False, error=failure)

        failure = self._postValidation_run(outcomes)
        if failure is not None:
            LOG("Parse failed during post-validation")
            return ParseResult(success=False, error=failure)

        self._callbacks_fire(outcomes)

        values: dict[str, Any] = {
            outcome.definition.name: outcome.value for outcome in outcomes
        }
        return ParseResult(success=True, values=values)

    def _failures_aggregate(self: Self, outcomes: list[ParameterOutcome]) -> Optional[str]:
        """Join the errors of every failed parameter, in declaration order."""
        failed: list[ParameterOutcome] = [
            outcome for outcome in outcomes if not outcome.success
        ]
        if not failed:
            return None
        return "\n".join(error.message for outcome in failed for error in outcome.errors)

    def _postValidation_run(self: Self, outcomes: list[ParameterOutcome]) -> Optional[str]:
        """Run every parameter's post-validators.

        Parameters without post-validation errors contribute nothing to the
        message.
        """
        messages: list[str] = []
        for outcome in outcomes:
            errors: list[ValidationError] = errors_collect(
                outcome.definition.post_validators, outcome.value
            )
            if not errors:
                continue
            messages.append(f"Parameter ({outcome.definition.name}) failed validation...")
            messages.extend(error.message for error in errors)

        if not messages:
            return None
        return "\n".join(messages)

    def _callbacks_fire(self: Self, outcomes: list[ParameterOutcome]) -> None:
        for outcome in outcomes:
            for callback in outcome.definition.on_resolved:
                callback(outcome.value)
