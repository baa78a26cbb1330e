"""
Search conditions and query-string encoding for object searches.

Each condition renders as ``{key}{operator}{value}`` in the query string of
``/REST/objects``, e.g. ``p1020**=hello*`` or ``o=0``. See
http://www.m-files.com/mfws/syntax.html#sect:search-encoding.

Usage:
    from mfws_client.searching import (
        QuickSearchCondition,
        ObjectTypeSearchCondition,
        build_search_query,
    )

    build_search_query([QuickSearchCondition("hello world")])
    # '?q=hello+world'
    build_search_query([ObjectTypeSearchCondition(123)], limit=2)
    # '?o=123&limit=2'
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import IntEnum
from typing import ClassVar, Iterable, Optional, Sequence, Tuple, Union

from .exceptions import InvalidArgumentError, NotSupportedError
from .paths import url_encode

# -1 leaves the limit to the server (500 items); 0 means unlimited.
DEFAULT_SEARCH_LIMIT = -1

# Sent in place of the value when a condition searches for "no value".
NULL_VALUE = "%00"


class SearchConditionOperator(IntEnum):
    """Comparison operators for search conditions."""

    UNKNOWN = 0
    EQUALS = 1
    LESS_THAN = 2
    LESS_THAN_OR_EQUAL = 3
    GREATER_THAN = 4
    GREATER_THAN_OR_EQUAL = 5
    MATCHES_WILDCARD = 6
    CONTAINS = 7
    STARTS_WITH = 8


_OPERATOR_TOKENS = {
    SearchConditionOperator.EQUALS: "=",
    SearchConditionOperator.LESS_THAN: "<<=",
    SearchConditionOperator.LESS_THAN_OR_EQUAL: "<=",
    SearchConditionOperator.GREATER_THAN: ">>=",
    SearchConditionOperator.GREATER_THAN_OR_EQUAL: ">=",
    SearchConditionOperator.MATCHES_WILDCARD: "**=",
    SearchConditionOperator.CONTAINS: "*=",
    SearchConditionOperator.STARTS_WITH: "^=",
}


def encode_operator(operator: SearchConditionOperator, invert: bool = False) -> str:
    """
    Get the query-string token for an operator.

    Args:
        operator: The comparison operator
        invert: Whether to negate the comparison (prefixes ``!``)

    Raises:
        NotSupportedError: For UNKNOWN or any value outside the enum
    """
    token = _OPERATOR_TOKENS.get(operator)
    if token is None:
        raise NotSupportedError(f"The operator {operator!r} cannot be used.")
    return ("!" if invert else "") + token


def _format_date(value: date) -> str:
    # strftime's %Y does not pad years below 1000 on every platform.
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


# =============================================================================
# Conditions
# =============================================================================


@dataclass(frozen=True)
class QuickSearchCondition:
    """Full-text search across titles, properties and file contents."""

    value: str

    query_key: ClassVar[str] = "q"
    operator: ClassVar[SearchConditionOperator] = SearchConditionOperator.EQUALS
    invert_operator: ClassVar[bool] = False

    @property
    def encoded_value(self) -> Optional[str]:
        return self.value


@dataclass(frozen=True)
class ObjectTypeSearchCondition:
    """Restricts results to a single object type."""

    object_type_id: int

    query_key: ClassVar[str] = "o"
    operator: ClassVar[SearchConditionOperator] = SearchConditionOperator.EQUALS
    invert_operator: ClassVar[bool] = False

    @property
    def encoded_value(self) -> Optional[str]:
        return str(self.object_type_id)


@dataclass(frozen=True)
class IncludeDeletedObjectsSearchCondition:
    """Includes deleted objects in the results."""

    query_key: ClassVar[str] = "d"
    operator: ClassVar[SearchConditionOperator] = SearchConditionOperator.EQUALS
    invert_operator: ClassVar[bool] = False

    @property
    def encoded_value(self) -> Optional[str]:
        return "include"


@dataclass(frozen=True)
class PropertyValueSearchCondition:
    """Base for conditions on a property value; the key is ``p{property_def}``."""

    property_def: int

    @property
    def query_key(self) -> str:
        return f"p{self.property_def}"


@dataclass(frozen=True)
class BooleanPropertyValueSearchCondition(PropertyValueSearchCondition):
    value: bool
    invert_operator: bool = False

    operator: ClassVar[SearchConditionOperator] = SearchConditionOperator.EQUALS

    @property
    def encoded_value(self) -> Optional[str]:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class DatePropertyValueSearchCondition(PropertyValueSearchCondition):
    """Compares a date property; only the date part of ``value`` is used."""

    value: date
    operator: SearchConditionOperator = SearchConditionOperator.EQUALS
    invert_operator: bool = False

    @property
    def encoded_value(self) -> Optional[str]:
        return _format_date(self.value)


@dataclass(frozen=True)
class TimestampPropertyValueSearchCondition(PropertyValueSearchCondition):
    """
    Compares a timestamp property.

    The value is sent in round-trip form with seven fractional digits and its
    own UTC offset (not converted to UTC), e.g.
    ``2017-01-01T11:12:03.0000000+02:00``. Naive datetimes are rejected.
    """

    value: datetime
    operator: SearchConditionOperator = SearchConditionOperator.EQUALS
    invert_operator: bool = False

    def __post_init__(self):
        offset = self.value.utcoffset()
        if offset is None:
            raise InvalidArgumentError("Timestamp search values must be timezone-aware")
        if offset.total_seconds() % 60:
            raise InvalidArgumentError(
                f"Timestamp offsets must be whole minutes, got {offset}"
            )

    @property
    def encoded_value(self) -> Optional[str]:
        value = self.value
        total_minutes = int(value.utcoffset().total_seconds()) // 60
        sign = "-" if total_minutes < 0 else "+"
        hours, minutes = divmod(abs(total_minutes), 60)
        return (
            f"{_format_date(value)}T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
            f".{value.microsecond:06d}0"
            f"{sign}{hours:02d}:{minutes:02d}"
        )


@dataclass(frozen=True)
class TextPropertyValueSearchCondition(PropertyValueSearchCondition):
    """Compares a text property; a ``None`` value searches for empty values."""

    value: Optional[str]
    operator: SearchConditionOperator = SearchConditionOperator.EQUALS
    invert_operator: bool = False

    @property
    def encoded_value(self) -> Optional[str]:
        return self.value


@dataclass(frozen=True)
class LookupPropertyValueSearchCondition(PropertyValueSearchCondition):
    """Matches a lookup property against one or more item IDs."""

    lookup_ids: Union[int, Sequence[int]]
    invert_operator: bool = False

    operator: ClassVar[SearchConditionOperator] = SearchConditionOperator.EQUALS

    def __post_init__(self):
        ids = self.lookup_ids
        ids = (ids,) if isinstance(ids, int) else tuple(ids)
        object.__setattr__(self, "lookup_ids", ids)

    @property
    def encoded_value(self) -> Optional[str]:
        return ",".join(str(lookup_id) for lookup_id in self.lookup_ids)


@dataclass(frozen=True)
class MultiSelectLookupPropertyValueSearchCondition(LookupPropertyValueSearchCondition):
    """Matches a multi-select lookup property against one or more item IDs."""


@dataclass(frozen=True)
class ValueListSearchCondition:
    """
    Matches objects referring to a value list item.

    ``item`` is either the internal item ID or the item's external ID (alias),
    which is sent with an ``e`` prefix.
    """

    value_list_id: int
    item: Union[int, str]

    operator: ClassVar[SearchConditionOperator] = SearchConditionOperator.EQUALS
    invert_operator: ClassVar[bool] = False

    @property
    def query_key(self) -> str:
        return f"vl{self.value_list_id}"

    @property
    def encoded_value(self) -> Optional[str]:
        if isinstance(self.item, str):
            return f"e{self.item}"
        return str(self.item)


SearchCondition = Union[
    QuickSearchCondition,
    ObjectTypeSearchCondition,
    IncludeDeletedObjectsSearchCondition,
    BooleanPropertyValueSearchCondition,
    DatePropertyValueSearchCondition,
    TimestampPropertyValueSearchCondition,
    TextPropertyValueSearchCondition,
    LookupPropertyValueSearchCondition,
    MultiSelectLookupPropertyValueSearchCondition,
    ValueListSearchCondition,
]

SEARCH_CONDITION_TYPES: Tuple[type, ...] = (
    QuickSearchCondition,
    ObjectTypeSearchCondition,
    IncludeDeletedObjectsSearchCondition,
    BooleanPropertyValueSearchCondition,
    DatePropertyValueSearchCondition,
    TimestampPropertyValueSearchCondition,
    TextPropertyValueSearchCondition,
    LookupPropertyValueSearchCondition,
    MultiSelectLookupPropertyValueSearchCondition,
    ValueListSearchCondition,
)


# =============================================================================
# Query building
# =============================================================================


def encode_condition(condition: SearchCondition) -> str:
    """Render one condition as ``{key}{operator}{value}``."""
    if not isinstance(condition, SEARCH_CONDITION_TYPES):
        raise InvalidArgumentError(f"Not a search condition: {condition!r}")

    value = condition.encoded_value
    return (
        url_encode(condition.query_key)
        + encode_operator(condition.operator, condition.invert_operator)
        + (NULL_VALUE if value is None else url_encode(value))
    )


def build_search_query(
    conditions: Iterable[SearchCondition],
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> str:
    """
    Build the query string for an object search.

    Conditions are rendered in the order given; ``None`` entries are skipped.

    Args:
        conditions: The conditions to search by
        limit: Maximum number of results; -1 for the server default, 0 for unlimited

    Returns:
        The query string including the leading ``?``, or ``""`` when there is
        nothing to send

    Raises:
        InvalidArgumentError: If conditions is None or contains a non-condition
        NotSupportedError: If a condition uses the UNKNOWN operator
    """
    if conditions is None:
        raise InvalidArgumentError("Search conditions are required")

    parts = [encode_condition(c) for c in conditions if c is not None]
    if limit > DEFAULT_SEARCH_LIMIT:
        parts.append(f"limit={limit}")

    return "?" + "&".join(parts) if parts else ""
