"""Integration tests for reqparam request parsing."""

import pytest
from unittest.mock import Mock
from reqparam import (
    ParameterBuilder,
    ParserBuilder,
    ParserSettings,
    RequestContext,
    ValidationError,
)
from reqparam.lib.parser.base import ParameterResolver


def must_be_positive(value):
    return [] if value > 0 else [ValidationError(f"{value} is not positive")]


@pytest.fixture
def page_parser():
    return (
        ParserBuilder()
        .register(ParameterBuilder("page", int).from_query("page").default(1))
        .build()
    )


def test_page_absent_uses_default(page_parser):
    result = page_parser.parse(RequestContext())
    assert result.success
    assert result.as_dict() == {"page": 1}

    definition = page_parser.definitions[0]
    outcome = ParameterResolver(ParserSettings()).resolve(definition, RequestContext())
    assert outcome.used_default


def test_page_unparsable_fails_regardless_of_required(page_parser):
    result = page_parser.parse(RequestContext(query={"page": "abc"}))
    assert not result.success
    assert result.error == (
        "Value(s) provided for parameter (page) were invalid and could not be parsed"
    )


def test_route_id_and_optional_verbose():
    parser = (
        ParserBuilder()
        .register(ParameterBuilder("id", int).from_route("id").required())
        .register(ParameterBuilder("verbose", bool).from_query("verbose").default(False))
        .build()
    )
    result = parser.parse(RequestContext(route={"id": "42"}))
    assert result.success
    assert result.as_dict() == {"id": 42, "verbose": False}


def test_required_missing_names_every_source():
    parser = (
        ParserBuilder()
        .register(
            ParameterBuilder("token", str).from_header("X-Token").from_query("token").required()
        )
        .build()
    )
    result = parser.parse(RequestContext())
    assert not result.success
    assert "Required parameter (token) missing" in result.error
    assert "request headers with a key of X-Token" in result.error
    assert "request query string with a key of token" in result.error


@pytest.fixture
def size_builder():
    return (
        ParameterBuilder("size", int)
        .from_header("X-Size")
        .from_query("size")
    )


def test_lenient_bad_header_falls_back_to_query(size_builder):
    parser = ParserBuilder().register(size_builder).build()
    context = RequestContext(headers={"X-Size": "big"}, query={"size": "10"})
    result = parser.parse(context, ParserSettings(skipFailedConversions=True))
    assert result.success
    assert result["size"] == 10


def test_strict_bad_header_fails_immediately(size_builder):
    parser = ParserBuilder().register(size_builder).build()
    context = RequestContext(headers={"X-Size": "big"}, query={"size": "10"})
    result = parser.parse(context, ParserSettings(skipFailedConversions=False))
    assert not result.success
    assert result.error == (
        "Value provided (big) for parameter (size) was invalid and could not be parsed"
    )


def test_pre_validation_scoped_to_header():
    parser = (
        ParserBuilder()
        .register(
            ParameterBuilder("limit", int)
            .from_header("X-Limit")
            .pre_validate(lambda v: [] if v <= 100 else [ValidationError("limit too high")])
            .from_route("limit", "500")
            .default(20)
        )
        .build()
    )
    context = RequestContext(headers={"X-Limit": "1000"})

    lenient = parser.parse(context, ParserSettings(skipFailedPreValidations=True))
    assert lenient.success
    assert lenient["limit"] == 500

    strict = parser.parse(context, ParserSettings(skipFailedPreValidations=False))
    assert not strict.success
    assert strict.error.split("\n") == [
        "Parameter (limit) failed pre-validation...",
        "limit too high",
    ]


def test_missing_required_preempts_post_validation():
    callback = Mock()
    parser = (
        ParserBuilder()
        .register(ParameterBuilder("id", int).from_route("id").required())
        .register(
            ParameterBuilder("page", int)
            .from_query("page")
            .post_validate(must_be_positive)
            .on_resolved(callback)
        )
        .build()
    )
    result = parser.parse(RequestContext(query={"page": "-3"}))
    assert not result.success
    assert "Required parameter (id) missing" in result.error
    assert "not positive" not in result.error
    callback.assert_not_called()


def test_post_validation_failure_reported_and_callbacks_withheld():
    callback = Mock()
    parser = (
        ParserBuilder()
        .register(
            ParameterBuilder("page", int)
            .from_query("page")
            .post_validate(must_be_positive)
            .on_resolved(callback)
        )
        .build()
    )
    result = parser.parse(RequestContext(query={"page": "-3"}))
    assert not result.success
    assert result.error.split("\n") == [
        "Parameter (page) failed validation...",
        "-3 is not positive",
    ]
    callback.assert_not_called()


def test_callbacks_receive_values_on_success():
    captured = {}
    parser = (
        ParserBuilder()
        .register(
            ParameterBuilder("page", int)
            .from_query("page")
            .on_resolved(lambda value: captured.setdefault("page", value))
        )
        .register(
            ParameterBuilder("sort", str)
            .from_header("X-Sort")
            .default("asc")
            .on_resolved(lambda value: captured.setdefault("sort", value))
        )
        .build()
    )
    result = parser.parse(RequestContext(query={"page": "2"}))
    assert result.success
    assert captured == {"page": 2, "sort": "asc"}


@pytest.mark.parametrize("token", ["1_000", "nan", "inf"])
def test_python_only_number_spellings_unparsable(token):
    parser = (
        ParserBuilder()
        .register(ParameterBuilder("ratio", float).from_query("ratio").default(1.0))
        .build()
    )
    result = parser.parse(RequestContext(query={"ratio": token}))
    assert not result.success
    assert "Value(s) provided for parameter (ratio)" in result.error
