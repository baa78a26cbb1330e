"""Vault structure operations mixin: classes, property definitions and aliases."""

from typing import Any, Dict, Iterable, List

from ..exceptions import InvalidArgumentError
from ..models import ClassGroup, PropertyDef


class StructureMixin:
    """
    Mixin providing metadata structure operations.

    Requires on self:
        - _execute(method, resource, json=None, headers=None, parse=None)
        - _completed(value)
    """

    # =========================================================================
    # Aliases
    # =========================================================================

    def _get_ids_by_aliases(self, resource: str, aliases: Iterable[str]) -> List[int]:
        """Resolve aliases to ids, in order; unknown aliases map to -1."""
        if aliases is None:
            raise InvalidArgumentError("Aliases are required")
        aliases = list(aliases)
        if not aliases:
            return self._completed([])

        def to_ids(data) -> List[int]:
            found = data or {}
            return [found.get(alias, -1) for alias in aliases]

        return self._execute("POST", resource, json=aliases, parse=to_ids)

    def _get_id_by_alias(self, resource: str, alias: str) -> int:
        if not alias:
            raise InvalidArgumentError("An alias is required")
        return self._execute(
            "POST",
            resource,
            json=[alias],
            parse=lambda data: (data or {}).get(alias, -1),
        )

    def get_metadata_structure_ids_by_aliases(
        self, aliases: Dict[str, List[str]]
    ) -> Dict[str, Any]:
        """
        Resolve aliases of several structure kinds at once.

        Args:
            aliases: Aliases keyed by kind, e.g.
                ``{"PropertyDefs": [...], "Classes": [...], "Workflows": [...]}``

        Returns:
            The server's response, keyed the same way
        """
        if aliases is None:
            raise InvalidArgumentError("Aliases are required")
        return self._execute(
            "POST",
            "/REST/structure/metadatastructure/itemidbyalias.aspx",
            json=aliases,
        )

    # =========================================================================
    # Classes and property definitions
    # =========================================================================

    def get_class_groups(self, object_type_id: int) -> List[ClassGroup]:
        """Get the classes of an object type, grouped by class group."""
        return self._execute(
            "GET",
            f"/REST/structure/classes.aspx?objtype={object_type_id}&bygroup=true",
            parse=lambda data: [ClassGroup.from_dict(g) for g in data or []],
        )

    def get_property_defs(self) -> List[PropertyDef]:
        return self._execute(
            "GET",
            "/REST/structure/properties",
            parse=lambda data: [PropertyDef.from_dict(p) for p in data or []],
        )

    def get_property_def(self, property_def_id: int) -> PropertyDef:
        return self._execute(
            "GET",
            f"/REST/structure/properties/{property_def_id}",
            parse=lambda data: PropertyDef.from_dict(data or {}),
        )

    def get_property_def_ids_by_aliases(self, aliases: Iterable[str]) -> List[int]:
        return self._get_ids_by_aliases("/REST/structure/properties/itemidbyalias.aspx", aliases)

    def get_property_def_id_by_alias(self, alias: str) -> int:
        return self._get_id_by_alias("/REST/structure/properties/itemidbyalias.aspx", alias)
