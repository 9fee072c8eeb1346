"""
Tests for the attribute registry and the page request model.

Numeric input is repaired, never rejected: these tests pin down how
malformed and out-of-domain bounds fall back to the attribute's domain.
"""

import pytest

from query.attributes import (
    ATTRIBUTES,
    PROJECTION,
    SORT_FIELDS,
    WORD_LENGTH,
    get_attribute,
    get_sort_fields,
    range_param_names,
)
from query.model import DEFAULT_LIMIT, MAX_LIMIT, PageRequest, RangeFilter, parse_int


COMMONNESS = ATTRIBUTES["commonness"]
SENTIMENT = ATTRIBUTES["sentiment"]


class TestAttributeRegistry:

    def test_eight_tracked_attributes_in_declared_order(self):
        assert list(ATTRIBUTES.keys()) == [
            "commonness",
            "offensiveness",
            "sentiment",
            "formality",
            "culturalSensitivity",
            "figurativeness",
            "complexity",
            "political",
        ]

    def test_domains(self):
        assert (SENTIMENT.min, SENTIMENT.max) == (-5, 5)
        for name, attr in ATTRIBUTES.items():
            if name != "sentiment":
                assert (attr.min, attr.max) == (0, 5), name
        assert (WORD_LENGTH.min, WORD_LENGTH.max) == (0, 255)

    def test_projection_is_text_then_attributes(self):
        assert PROJECTION[0] == "text"
        assert PROJECTION[1:] == tuple(attr.column for attr in ATTRIBUTES.values())

    def test_cultural_sensitivity_column_and_field(self):
        attr = get_attribute("culturalSensitivity")
        assert attr.column == "culturalsensitivity"
        assert attr.field_name == "cultural_sensitivity"

    def test_sort_fields_are_text_length_and_attributes(self):
        assert get_sort_fields()[:2] == ["text", "length"]
        assert SORT_FIELDS["length"] == "LENGTH(text)"
        assert set(ATTRIBUTES) <= set(SORT_FIELDS)

    def test_range_param_names(self):
        assert range_param_names(COMMONNESS) == ("minCommonness", "maxCommonness")
        assert range_param_names(get_attribute("culturalSensitivity")) == (
            "minCulturalSensitivity",
            "maxCulturalSensitivity",
        )
        assert range_param_names(WORD_LENGTH) == ("minLength", "maxLength")

    def test_unknown_attribute(self):
        assert get_attribute("popularity") is None


class TestParseInt:

    @pytest.mark.parametrize("value,expected", [
        (3, 3),
        ("4", 4),
        (" -2 ", -2),
        (2.0, 2),
        (2.5, None),
        ("abc", None),
        ("", None),
        (None, None),
        (True, None),
        ([1], None),
    ])
    def test_parse_int(self, value, expected):
        assert parse_int(value) == expected


class TestRangeFilter:

    def test_in_domain_bounds_kept(self):
        assert RangeFilter.clamped(COMMONNESS, 2, 4) == RangeFilter(2, 4)

    def test_absent_bounds_are_full_domain(self):
        assert RangeFilter.clamped(COMMONNESS) == RangeFilter.full(COMMONNESS)

    def test_out_of_domain_min_falls_back_to_domain_min(self):
        assert RangeFilter.clamped(COMMONNESS, 9, 4) == RangeFilter(0, 4)
        assert RangeFilter.clamped(SENTIMENT, -6, 0) == RangeFilter(-5, 0)

    def test_out_of_domain_max_falls_back_to_domain_max(self):
        assert RangeFilter.clamped(COMMONNESS, 1, 42) == RangeFilter(1, 5)

    def test_unparsable_bounds_fall_back(self):
        assert RangeFilter.clamped(COMMONNESS, "lots", "x") == RangeFilter(0, 5)

    def test_min_greater_than_max_is_full_domain(self):
        assert RangeFilter.clamped(COMMONNESS, 4, 2) == RangeFilter.full(COMMONNESS)

    def test_clamped_never_inverted(self):
        values = [None, "junk", -10, -5, -1, 0, 1, 3, 5, 6, 300]
        for low in values:
            for high in values:
                for attr in (COMMONNESS, SENTIMENT, WORD_LENGTH):
                    rng = RangeFilter.clamped(attr, low, high)
                    assert attr.min <= rng.min <= rng.max <= attr.max

    def test_default_detection(self):
        assert RangeFilter(0, 5).is_default(COMMONNESS)
        rng = RangeFilter(2, 5)
        assert not rng.is_default(COMMONNESS)
        assert rng.has_min(COMMONNESS)
        assert not rng.has_max(COMMONNESS)


class TestPageRequest:

    def test_defaults(self):
        request = PageRequest.from_params({})

        assert request.ranges == {}
        assert request.word_length == RangeFilter.full(WORD_LENGTH)
        assert request.start_from == ""
        assert request.prefix is None
        assert request.random_count == 0
        assert request.random_seed is None
        assert request.sort_field == "text"
        assert request.sort_direction == "asc"
        assert request.limit == DEFAULT_LIMIT
        assert not request.is_sampling

    def test_none_params(self):
        assert PageRequest.from_params(None).limit == DEFAULT_LIMIT

    def test_query_string_values(self):
        request = PageRequest.from_params({
            "minCommonness": "2",
            "maxSentiment": "1",
            "minLength": "3",
            "startFrom": "cat",
            "prefix": "d",
            "orderBy": "commonness",
            "orderDir": "DESC",
            "limit": "10",
        })

        assert request.ranges == {
            "commonness": RangeFilter(2, 5),
            "sentiment": RangeFilter(-5, 1),
        }
        assert request.word_length == RangeFilter(3, 255)
        assert request.start_from == "cat"
        assert request.prefix == "d"
        assert request.sort_field == "commonness"
        assert request.sort_direction == "desc"
        assert request.limit == 10

    def test_default_range_not_recorded(self):
        request = PageRequest.from_params({"minCommonness": "0", "maxCommonness": "5"})
        assert request.ranges == {}

    def test_malformed_range_equals_default(self):
        request = PageRequest.from_params({"minCommonness": "high", "maxFormality": "9"})
        assert request.ranges == {}

    @pytest.mark.parametrize("limit", ["0", "-3", "many", None])
    def test_invalid_limit_uses_default(self, limit):
        assert PageRequest.from_params({"limit": limit}).limit == DEFAULT_LIMIT

    def test_limit_capped(self):
        assert PageRequest.from_params({"limit": "50000"}).limit == MAX_LIMIT
        assert PageRequest.from_params({"limit": 30}, max_limit=20).limit == 20

    def test_configured_default_limit(self):
        assert PageRequest.from_params({}, default_limit=25).limit == 25

    def test_negative_random_count_disables_sampling(self):
        request = PageRequest.from_params({"randomCount": "-4", "randomSeed": "x"})
        assert request.random_count == 0
        assert request.random_seed is None

    def test_random_count_capped(self):
        assert PageRequest.from_params({"randomCount": "99999999999999999999"}).random_count == MAX_LIMIT
        assert PageRequest.from_params({"randomCount": 30}, max_limit=20).random_count == 20

    def test_nul_characters_dropped(self):
        request = PageRequest.from_params(
            {"startFrom": "do\x00g", "prefix": "\x00", "randomCount": 1, "randomSeed": "a\x00b"}
        )
        assert request.start_from == "dog"
        assert request.prefix is None
        assert request.random_seed == "ab"

    @pytest.mark.parametrize("params, follows", [
        ({}, True),
        ({"orderBy": "text", "orderDir": "ASC"}, True),
        ({"orderDir": "desc"}, False),
        ({"orderBy": "commonness"}, False),
        ({"orderBy": "length", "orderDir": "asc"}, False),
    ])
    def test_follows_cursor_order(self, params, follows):
        assert PageRequest.from_params(params).follows_cursor_order is follows

    def test_sampling_keeps_explicit_seed(self):
        request = PageRequest.from_params({"randomCount": "5", "randomSeed": "pinned"})
        assert request.is_sampling
        assert request.random_seed == "pinned"

    def test_sampling_seed_defaults_to_arrival_time(self):
        request = PageRequest.from_params({"randomCount": 5}, now=1700000000.9)
        assert request.random_seed == "1700000000"

    def test_numeric_seed_kept_as_text(self):
        request = PageRequest.from_params({"randomCount": 1, "randomSeed": 42})
        assert request.random_seed == "42"

    def test_direct_construction_repairs(self):
        request = PageRequest(limit=0, random_count=-1, sort_direction="DESC")
        assert request.limit == DEFAULT_LIMIT
        assert request.random_count == 0
        assert request.sort_direction == "desc"

    def test_to_dict(self):
        request = PageRequest.from_params({"minCommonness": 3, "limit": 5})
        assert request.to_dict() == {
            "filters": {"commonness": {"min": 3, "max": 5}},
            "wordLength": {"min": 0, "max": 255},
            "startFrom": "",
            "prefix": None,
            "randomCount": 0,
            "randomSeed": None,
            "orderBy": "text",
            "orderDir": "asc",
            "limit": 5,
        }
