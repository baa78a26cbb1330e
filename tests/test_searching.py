"""
Tests for search query encoding.

Tests:
1. Operator tokens, inversion and the unknown operator
2. Encoding of every condition kind
3. Query assembly: ordering, limits, the null sentinel and empty input
"""

import itertools
from datetime import date, datetime, timedelta, timezone

import pytest

from mfws_client.exceptions import InvalidArgumentError, NotSupportedError
from mfws_client.searching import (
    BooleanPropertyValueSearchCondition,
    DatePropertyValueSearchCondition,
    IncludeDeletedObjectsSearchCondition,
    LookupPropertyValueSearchCondition,
    MultiSelectLookupPropertyValueSearchCondition,
    ObjectTypeSearchCondition,
    QuickSearchCondition,
    SearchConditionOperator,
    TextPropertyValueSearchCondition,
    TimestampPropertyValueSearchCondition,
    ValueListSearchCondition,
    build_search_query,
    encode_condition,
    encode_operator,
)

Op = SearchConditionOperator


# =============================================================================
# Operators
# =============================================================================


@pytest.mark.parametrize(
    "operator,token",
    [
        (Op.EQUALS, "="),
        (Op.LESS_THAN, "<<="),
        (Op.LESS_THAN_OR_EQUAL, "<="),
        (Op.GREATER_THAN, ">>="),
        (Op.GREATER_THAN_OR_EQUAL, ">="),
        (Op.MATCHES_WILDCARD, "**="),
        (Op.CONTAINS, "*="),
        (Op.STARTS_WITH, "^="),
    ],
)
def test_operator_tokens(operator, token):
    assert encode_operator(operator) == token
    assert encode_operator(operator, invert=True) == "!" + token


def test_every_known_operator_has_a_token():
    for operator in Op:
        if operator is Op.UNKNOWN:
            continue
        assert encode_operator(operator)


def test_unknown_operator_is_not_supported():
    with pytest.raises(NotSupportedError):
        encode_operator(Op.UNKNOWN)
    with pytest.raises(NotSupportedError):
        encode_operator(Op.UNKNOWN, invert=True)


def test_unknown_operator_fails_whole_query():
    conditions = [
        QuickSearchCondition("hello"),
        TextPropertyValueSearchCondition(123, "hello", operator=Op.UNKNOWN),
    ]
    with pytest.raises(NotSupportedError):
        build_search_query(conditions)


# =============================================================================
# Condition kinds
# =============================================================================


def test_quick_search():
    assert build_search_query([QuickSearchCondition("hello world")]) == "?q=hello+world"


def test_object_type_with_limit():
    assert build_search_query([ObjectTypeSearchCondition(123)], limit=2) == "?o=123&limit=2"


def test_include_deleted():
    assert build_search_query([IncludeDeletedObjectsSearchCondition()]) == "?d=include"


@pytest.mark.parametrize("value,expected", [(True, "?p123=true"), (False, "?p123=false")])
def test_boolean_property(value, expected):
    assert build_search_query([BooleanPropertyValueSearchCondition(123, value)]) == expected


def test_boolean_property_inverted():
    condition = BooleanPropertyValueSearchCondition(123, True, invert_operator=True)
    assert encode_condition(condition) == "p123!=true"


@pytest.mark.parametrize(
    "operator,expected",
    [
        (Op.EQUALS, "?p123=2017-01-01"),
        (Op.LESS_THAN, "?p123<<=2017-01-01"),
        (Op.LESS_THAN_OR_EQUAL, "?p123<=2017-01-01"),
        (Op.GREATER_THAN, "?p123>>=2017-01-01"),
        (Op.GREATER_THAN_OR_EQUAL, "?p123>=2017-01-01"),
    ],
)
def test_date_property(operator, expected):
    condition = DatePropertyValueSearchCondition(123, date(2017, 1, 1), operator)
    assert build_search_query([condition]) == expected


def test_date_property_ignores_time_of_day():
    condition = DatePropertyValueSearchCondition(123, datetime(2017, 1, 1, 23, 59))
    assert encode_condition(condition) == "p123=2017-01-01"


def test_timestamp_property_utc():
    value = datetime(2017, 1, 1, 11, 12, 3, tzinfo=timezone.utc)
    condition = TimestampPropertyValueSearchCondition(21, value)
    assert build_search_query([condition]) == "?p21=2017-01-01T11%3A12%3A03.0000000%2B00%3A00"


def test_timestamp_property_keeps_offset():
    value = datetime(2017, 1, 1, 11, 12, 3, tzinfo=timezone(timedelta(hours=2)))
    condition = TimestampPropertyValueSearchCondition(21, value)
    assert build_search_query([condition]) == "?p21=2017-01-01T11%3A12%3A03.0000000%2B02%3A00"


def test_timestamp_property_negative_offset_and_fraction():
    value = datetime(
        2017, 1, 1, 11, 12, 3, 123456, tzinfo=timezone(-timedelta(hours=5, minutes=30))
    )
    condition = TimestampPropertyValueSearchCondition(21, value)
    assert condition.encoded_value == "2017-01-01T11:12:03.1234560-05:30"


def test_timestamp_property_rejects_naive_value():
    with pytest.raises(InvalidArgumentError):
        TimestampPropertyValueSearchCondition(21, datetime(2017, 1, 1, 11, 12, 3))


def test_date_property_pads_early_years():
    assert build_search_query([DatePropertyValueSearchCondition(1, date(999, 1, 1))]) == "?p1=0999-01-01"
    assert encode_condition(DatePropertyValueSearchCondition(1, date(5, 3, 7))) == "p1=0005-03-07"


def test_timestamp_property_pads_early_years():
    condition = TimestampPropertyValueSearchCondition(1, datetime(5, 1, 1, tzinfo=timezone.utc))
    assert condition.encoded_value == "0005-01-01T00:00:00.0000000+00:00"

    condition = TimestampPropertyValueSearchCondition(
        1, datetime(999, 12, 31, 23, 59, 59, tzinfo=timezone(timedelta(hours=-3)))
    )
    assert condition.encoded_value == "0999-12-31T23:59:59.0000000-03:00"


@pytest.mark.parametrize("offset", [timedelta(seconds=-30), timedelta(hours=1, seconds=15)])
def test_timestamp_property_rejects_partial_minute_offsets(offset):
    with pytest.raises(InvalidArgumentError):
        TimestampPropertyValueSearchCondition(21, datetime(2017, 1, 1, tzinfo=timezone(offset)))


@pytest.mark.parametrize(
    "operator,value,expected",
    [
        (Op.EQUALS, "hello", "?p123=hello"),
        (Op.MATCHES_WILDCARD, "hello*", "?p123**=hello*"),
        (Op.CONTAINS, "hello", "?p123*=hello"),
        (Op.STARTS_WITH, "hello", "?p123^=hello"),
    ],
)
def test_text_property(operator, value, expected):
    condition = TextPropertyValueSearchCondition(123, value, operator)
    assert build_search_query([condition]) == expected


def test_text_property_inverted_contains():
    condition = TextPropertyValueSearchCondition(
        123, "hello world", Op.CONTAINS, invert_operator=True
    )
    assert encode_condition(condition) == "p123!*=hello+world"


def test_text_property_escapes_reserved_characters():
    condition = TextPropertyValueSearchCondition(123, "a&b=c%")
    assert encode_condition(condition) == "p123=a%26b%3Dc%25"


def test_null_value_uses_sentinel():
    condition = TextPropertyValueSearchCondition(123, None)
    assert build_search_query([condition]) == "?p123=%00"


def test_lookup_property_single():
    condition = LookupPropertyValueSearchCondition(123, 456)
    assert build_search_query([condition]) == "?p123=456"


def test_lookup_property_multiple():
    condition = LookupPropertyValueSearchCondition(123, [456, 789])
    assert build_search_query([condition]) == "?p123=456%2C789"


def test_multi_select_lookup_property():
    single = MultiSelectLookupPropertyValueSearchCondition(123, [456])
    multiple = MultiSelectLookupPropertyValueSearchCondition(123, [456, 789])
    assert build_search_query([single]) == "?p123=456"
    assert build_search_query([multiple]) == "?p123=456%2C789"


def test_lookup_ids_are_frozen():
    ids = [456, 789]
    condition = LookupPropertyValueSearchCondition(123, ids)
    ids.append(1)
    assert condition.lookup_ids == (456, 789)


def test_value_list_internal_id():
    assert build_search_query([ValueListSearchCondition(123, 123)]) == "?vl123=123"


def test_value_list_external_id():
    assert build_search_query([ValueListSearchCondition(123, "hello")]) == "?vl123=ehello"


def test_encoded_value_is_stable():
    conditions = [
        QuickSearchCondition("hello world"),
        DatePropertyValueSearchCondition(1, date(2020, 2, 29)),
        TimestampPropertyValueSearchCondition(
            2, datetime(2020, 2, 29, 1, 2, 3, tzinfo=timezone.utc)
        ),
        LookupPropertyValueSearchCondition(3, [1, 2, 3]),
        ValueListSearchCondition(4, "alias"),
    ]
    for condition in conditions:
        assert condition.encoded_value == condition.encoded_value
        assert encode_condition(condition) == encode_condition(condition)


# =============================================================================
# Query assembly
# =============================================================================


def test_conditions_keep_caller_order():
    conditions = [
        QuickSearchCondition("a"),
        ObjectTypeSearchCondition(0),
        BooleanPropertyValueSearchCondition(5, True),
    ]
    for permutation in itertools.permutations(conditions):
        expected = "?" + "&".join(encode_condition(c) for c in permutation)
        assert build_search_query(permutation) == expected


def test_duplicates_are_kept():
    condition = ObjectTypeSearchCondition(1)
    assert build_search_query([condition, condition]) == "?o=1&o=1"


def test_quick_search_and_object_type():
    conditions = [QuickSearchCondition("hello world"), ObjectTypeSearchCondition(0)]
    assert build_search_query(conditions) == "?q=hello+world&o=0"


@pytest.mark.parametrize(
    "limit,expected",
    [(-1, "?o=123"), (-5, "?o=123"), (0, "?o=123&limit=0"), (2, "?o=123&limit=2")],
)
def test_limit_boundaries(limit, expected):
    assert build_search_query([ObjectTypeSearchCondition(123)], limit) == expected


def test_empty_conditions_without_limit():
    assert build_search_query([]) == ""


def test_empty_conditions_with_limit():
    assert build_search_query([], limit=0) == "?limit=0"


def test_none_entries_are_skipped():
    assert build_search_query([None, QuickSearchCondition("x"), None]) == "?q=x"


def test_none_conditions_rejected():
    with pytest.raises(InvalidArgumentError):
        build_search_query(None)


def test_non_condition_rejected():
    with pytest.raises(InvalidArgumentError):
        build_search_query(["q=hello"])


def test_query_is_deterministic():
    conditions = [
        QuickSearchCondition("hello world"),
        LookupPropertyValueSearchCondition(100, [1, 2]),
        TextPropertyValueSearchCondition(0, "x", Op.STARTS_WITH),
    ]
    assert build_search_query(conditions, 10) == build_search_query(list(conditions), 10)
