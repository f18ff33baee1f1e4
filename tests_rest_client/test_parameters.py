"""
Tests for parameters.py (default-parameter merge and helpers)
Logic testing: Decision/Branch, Boundary, Path coverage
"""
import pytest

from rest_client.config import ordinal, ordinal_ignore_case
from rest_client.parameters import (
    find_parameter,
    merge_default_parameters,
    remove_parameters,
    replace_parameter,
    validate_header_parameter,
)
from rest_client.types import Parameter, ParameterType

Q = ParameterType.QUERY_STRING
H = ParameterType.HTTP_HEADER
U = ParameterType.URL_SEGMENT


class TestMergeDefaultParameters:
    """Tests for merge_default_parameters."""

    # Decision: request value wins, header defaults skipped
    def test_request_overrides_default(self):
        request_params = [Parameter("A", 2, Q)]
        defaults = [Parameter("A", 1, Q), Parameter("B", "x", H)]

        merge_default_parameters(request_params, defaults)

        assert request_params == [Parameter("A", 2, Q)]

    # Path: un-overridden defaults go first, in declaration order
    def test_defaults_inserted_before_request_params(self):
        request_params = [Parameter("own", 1, Q)]
        defaults = [Parameter("d1", 1, Q), Parameter("d2", 2, U), Parameter("d3", 3, Q)]

        merge_default_parameters(request_params, defaults)

        assert [p.name for p in request_params] == ["d1", "d2", "d3", "own"]

    # Decision: same name, different kind is not equivalent
    def test_kind_is_part_of_identity(self):
        request_params = [Parameter("id", 5, Q)]
        defaults = [Parameter("id", 7, U)]

        merge_default_parameters(request_params, defaults)

        assert request_params == [Parameter("id", 7, U), Parameter("id", 5, Q)]

    # Decision: ordinal comparer is case-sensitive
    def test_ordinal_comparer(self):
        request_params = [Parameter("page", 2, Q)]
        merge_default_parameters(request_params, [Parameter("Page", 1, Q)], ordinal)

        assert len(request_params) == 2

    # Decision: case-insensitive comparer matches across case
    def test_ignore_case_comparer(self):
        request_params = [Parameter("page", 2, Q)]
        merge_default_parameters(request_params, [Parameter("Page", 1, Q)], ordinal_ignore_case)

        assert request_params == [Parameter("page", 2, Q)]

    # Boundary: no defaults
    def test_no_defaults(self):
        request_params = [Parameter("a", 1, Q)]
        assert merge_default_parameters(request_params, []) is request_params
        assert request_params == [Parameter("a", 1, Q)]

    # Boundary: duplicate defaults insert once
    def test_duplicate_defaults(self):
        request_params = []
        merge_default_parameters(request_params, [Parameter("a", 1, Q), Parameter("a", 2, Q)])

        assert request_params == [Parameter("a", 1, Q)]

    # Path: merging twice does not duplicate
    def test_merge_twice(self):
        request_params = [Parameter("own", 1, Q)]
        defaults = [Parameter("d", 1, Q)]
        merge_default_parameters(request_params, defaults)
        merge_default_parameters(request_params, defaults)

        assert [p.name for p in request_params] == ["d", "own"]

    # Path: header default never inserted even when absent from request
    def test_header_defaults_never_inserted(self):
        request_params = []
        merge_default_parameters(request_params, [Parameter("Accept", "a/b", H)])

        assert request_params == []


class TestParameterHelpers:
    """Tests for find/remove/replace helpers."""

    def test_find_header_ignores_case(self):
        params = [Parameter("Content-Type", "a/b", H)]
        assert find_parameter(params, "content-type") is params[0]

    def test_find_respects_kind(self):
        params = [Parameter("x", 1, Q), Parameter("x", 2, U)]
        assert find_parameter(params, "x", U).value == 2
        assert find_parameter(params, "y") is None

    def test_remove_all_matches(self):
        params = [Parameter("Accept", "a", H), Parameter("x", 1, Q), Parameter("ACCEPT", "b", H)]
        removed = remove_parameters(params, "accept", H)

        assert removed == 2
        assert params == [Parameter("x", 1, Q)]

    def test_remove_keeps_list_identity(self):
        params = [Parameter("x", 1, Q)]
        alias = params
        remove_parameters(params, "x")
        assert alias == []

    def test_replace_existing(self):
        params = [Parameter("Authorization", "old", H), Parameter("x", 1, Q)]
        replace_parameter(params, Parameter("authorization", "new", H))

        assert params == [Parameter("authorization", "new", H), Parameter("x", 1, Q)]

    def test_replace_drops_later_duplicates(self):
        params = [Parameter("a", 1, Q), Parameter("b", 1, Q), Parameter("a", 2, Q)]
        replace_parameter(params, Parameter("a", 3, Q))

        assert params == [Parameter("a", 3, Q), Parameter("b", 1, Q)]

    def test_replace_appends_when_missing(self):
        params = [Parameter("a", 1, Q)]
        replace_parameter(params, Parameter("b", 2, Q))

        assert params[-1] == Parameter("b", 2, Q)

    @pytest.mark.parametrize("name, value", [("X-Test", "a\r\nb"), ("X-\nBad", "v")])
    def test_validate_rejects_crlf(self, name, value):
        with pytest.raises(ValueError, match="CR/LF"):
            validate_header_parameter(Parameter(name, value, H))

    def test_validate_accepts_plain(self):
        validate_header_parameter(Parameter("X-Test", "value", H))

    def test_parameter_is_immutable(self):
        parameter = Parameter("a", 1, Q)
        with pytest.raises(AttributeError):
            parameter.value = 2
