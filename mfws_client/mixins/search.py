"""Search operations mixin."""

from typing import Iterable, List, Optional

from ..models import ObjectVersion
from ..searching import (
    DEFAULT_SEARCH_LIMIT,
    ObjectTypeSearchCondition,
    QuickSearchCondition,
    SearchCondition,
    build_search_query,
)


def _to_results(data) -> List[ObjectVersion]:
    items = (data or {}).get("Items") or []
    return [ObjectVersion.from_dict(item) for item in items]


class SearchMixin:
    """
    Mixin providing object searches.

    Requires on self:
        - _execute(method, resource, json=None, headers=None, parse=None)
    """

    def search_for_objects_by_conditions(
        self,
        conditions: Iterable[SearchCondition],
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> List[ObjectVersion]:
        """
        Search for objects matching all the given conditions.

        Args:
            conditions: Search conditions, combined with AND
            limit: Maximum number of results; negative leaves it to the server

        Returns:
            Matching object versions
        """
        query = build_search_query(conditions, limit)
        return self._execute("GET", "/REST/objects" + query, parse=_to_results)

    def search_for_objects_by_string(
        self,
        search_term: str,
        object_type_id: Optional[int] = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> List[ObjectVersion]:
        """Quick search, optionally restricted to one object type."""
        conditions = [QuickSearchCondition(search_term)]
        if object_type_id is not None:
            conditions.append(ObjectTypeSearchCondition(object_type_id))
        return self.search_for_objects_by_conditions(conditions, limit=limit)
