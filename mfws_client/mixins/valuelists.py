"""Value list item operations mixin."""

from typing import List

from ..exceptions import InvalidArgumentError
from ..models import ValueListItem
from ..paths import url_encode


class ValueListItemsMixin:
    """
    Mixin providing value list item operations.

    Requires on self:
        - _execute(method, resource, json=None, headers=None, parse=None)
    """

    def get_value_list_items(
        self, value_list_id: int, name_filter: str = None, limit: int = 0
    ) -> List[ValueListItem]:
        """
        Get the items in a value list.

        Args:
            value_list_id: The value list
            name_filter: Only return items whose name matches this filter
            limit: Maximum number of items; 0 or less leaves it to the server
        """
        query = []
        if name_filter and name_filter.strip():
            query.append("filter=" + url_encode(name_filter))
        if limit > 0:
            query.append(f"limit={limit}")

        resource = f"/REST/valuelists/{value_list_id}/items"
        if query:
            resource += "?" + "&".join(query)

        return self._execute(
            "GET",
            resource,
            parse=lambda data: [ValueListItem.from_dict(i) for i in (data or {}).get("Items") or []],
        )

    def add_value_list_item(self, value_list_id: int, name: str) -> ValueListItem:
        """Add an item to a value list."""
        if not name:
            raise InvalidArgumentError("A value list item name is required")
        item = ValueListItem(id=0, name=name, value_list_id=value_list_id)
        return self._execute(
            "POST",
            f"/REST/valuelists/{value_list_id}/items",
            json=item.to_dict(),
            parse=lambda data: ValueListItem.from_dict(data or {}),
        )
