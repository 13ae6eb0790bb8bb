"""
Tests for core.schema: the constraint tables and the generic validator.
"""

import dataclasses

import pytest

from core.models import NATIONALITIES, USER_FIELDS, Pagination, PasswordSpec, UserQuery
from core.schema import (
    USER_QUERY_SCHEMA,
    InvalidParameters,
    parse_user_query,
    validate_params,
)


def _issue_paths(exc_info) -> list[str]:
    return [issue.path for issue in exc_info.value.issues]


class TestConstraintTable:
    def test_covers_every_parameter(self):
        assert set(USER_QUERY_SCHEMA) == {
            "results", "gender", "password", "seed",
            "nationalities", "pagination", "inc", "exc",
        }

    def test_enumerations(self):
        assert len(NATIONALITIES) == 21
        assert len(USER_FIELDS) == 12
        assert USER_QUERY_SCHEMA["nationalities"].choices == NATIONALITIES
        assert USER_QUERY_SCHEMA["inc"].choices == USER_QUERY_SCHEMA["exc"].choices == USER_FIELDS


class TestParseUserQuery:
    def test_empty_params(self):
        assert parse_user_query({}) == UserQuery()
        assert parse_user_query(None) == UserQuery()

    def test_full_params(self):
        query = parse_user_query({
            "results": 2,
            "gender": "female",
            "seed": "foobar",
            "nationalities": ["US", "GB"],
            "password": {"charset": ["upper", "lower"], "min": 8, "max": 12},
            "pagination": {"page": 3, "results": 10, "seed": "abc"},
            "inc": ["name", "email"],
            "exc": ["id"],
        })
        assert query == UserQuery(
            results=2,
            gender="female",
            seed="foobar",
            nationalities=("US", "GB"),
            password=PasswordSpec(charset=("upper", "lower"), min=8, max=12),
            pagination=Pagination(page=3, results=10, seed="abc"),
            inc=("name", "email"),
            exc=("id",),
        )

    def test_query_is_frozen(self):
        query = parse_user_query({"results": 1})
        with pytest.raises(dataclasses.FrozenInstanceError):
            query.results = 2

    def test_none_means_absent(self):
        assert parse_user_query({"results": None, "password": None}) == UserQuery()

    def test_unknown_keys_are_dropped(self):
        query = parse_user_query({"results": 1, "format": "csv", "pagination": {"page": 1, "x": 1}})
        assert query == UserQuery(results=1, pagination=Pagination(page=1))

    def test_empty_charset_with_min_is_accepted(self):
        query = parse_user_query({"password": {"charset": [], "min": 8}})
        assert query.password == PasswordSpec(charset=(), min=8)


class TestRejections:
    def test_invalid_nationality(self):
        with pytest.raises(InvalidParameters) as exc_info:
            parse_user_query({"nationalities": ["US", "ZZ"]})
        assert _issue_paths(exc_info) == ["nationalities[1]"]
        assert "'ZZ'" in str(exc_info.value)

    def test_invalid_gender(self):
        with pytest.raises(InvalidParameters) as exc_info:
            parse_user_query({"gender": "other"})
        assert _issue_paths(exc_info) == ["gender"]

    @pytest.mark.parametrize("value", [0, -3, "5", 2.5, True])
    def test_results_must_be_positive_integer(self, value):
        with pytest.raises(InvalidParameters) as exc_info:
            parse_user_query({"results": value})
        assert _issue_paths(exc_info) == ["results"]

    def test_page_must_be_at_least_one(self):
        with pytest.raises(InvalidParameters) as exc_info:
            parse_user_query({"pagination": {"page": 0}})
        assert _issue_paths(exc_info) == ["pagination.page"]

    def test_password_requires_charset(self):
        with pytest.raises(InvalidParameters) as exc_info:
            parse_user_query({"password": {"min": 8}})
        assert _issue_paths(exc_info) == ["password.charset"]

    def test_invalid_charset_entry(self):
        with pytest.raises(InvalidParameters) as exc_info:
            parse_user_query({"password": {"charset": ["emoji"]}})
        assert _issue_paths(exc_info) == ["password.charset[0]"]

    def test_list_field_rejects_plain_string(self):
        with pytest.raises(InvalidParameters) as exc_info:
            parse_user_query({"inc": "name"})
        assert _issue_paths(exc_info) == ["inc"]

    def test_object_field_rejects_scalar(self):
        with pytest.raises(InvalidParameters) as exc_info:
            parse_user_query({"pagination": 2})
        assert _issue_paths(exc_info) == ["pagination"]

    def test_reports_every_issue(self):
        with pytest.raises(InvalidParameters) as exc_info:
            parse_user_query({
                "results": 0,
                "gender": "x",
                "exc": ["name", "age"],
                "pagination": {"seed": 42},
            })
        assert _issue_paths(exc_info) == ["results", "gender", "pagination.seed", "exc[1]"]

    def test_non_mapping_params(self):
        with pytest.raises(InvalidParameters):
            validate_params(["results", 1])

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_user_query({"gender": 1})
