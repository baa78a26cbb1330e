"""Property and assignment operations mixin."""

from typing import Iterable, List, Optional

from ..exceptions import InvalidArgumentError
from ..models import (
    ExtendedObjectVersion,
    MFBuiltInObjectType,
    ObjectVersion,
    ObjectVersionUpdateInformation,
    ObjID,
    ObjVer,
    PropertyValue,
)
from ..paths import OBJECT_PATH, OBJECT_PROPERTIES_PATH, build_object_path, encode_object_segments


def _property_path(obj: ObjID, property_def: int, suffix: str = "") -> str:
    if property_def is None or property_def < 0:
        raise InvalidArgumentError("The property definition id cannot be less than zero")
    return build_object_path(obj, OBJECT_PATH) + f"/properties/{property_def}{suffix}"


def _require_assignment(obj: ObjID) -> List[str]:
    if obj is None:
        raise InvalidArgumentError("An assignment identifier is required")
    if obj.type != MFBuiltInObjectType.ASSIGNMENT:
        raise InvalidArgumentError(
            f"The object type must be {int(MFBuiltInObjectType.ASSIGNMENT)} (assignment)"
        )
    return encode_object_segments(obj)


def _to_property_values(data) -> List[PropertyValue]:
    return [PropertyValue.from_dict(p) for p in data or []]


class PropertiesMixin:
    """
    Mixin providing property, workflow-state and assignment operations.

    Requires on self:
        - _execute(method, resource, json=None, headers=None, parse=None)
        - _completed(value)
    """

    # =========================================================================
    # Reading properties
    # =========================================================================

    def get_property(self, obj: ObjID, property_def: int) -> PropertyValue:
        """Get one property value of an object version."""
        return self._execute(
            "GET",
            _property_path(obj, property_def),
            parse=lambda data: PropertyValue.from_dict(data or {}),
        )

    def get_properties(self, obj: ObjID) -> List[PropertyValue]:
        """Get all property values of an object version."""
        return self._execute(
            "GET",
            build_object_path(obj, OBJECT_PROPERTIES_PATH),
            parse=_to_property_values,
        )

    def get_properties_of_multiple_objects(
        self, obj_vers: Iterable[ObjVer]
    ) -> List[List[PropertyValue]]:
        """
        Get the property values of several object versions in one request.

        Every entry must name an explicit version (>= 1). The result holds one
        list of property values per requested version, in request order.
        """
        if obj_vers is None:
            raise InvalidArgumentError("Object versions are required")
        obj_vers = list(obj_vers)
        if not obj_vers:
            return self._completed([])

        for obj_ver in obj_vers:
            if not isinstance(obj_ver, ObjVer) or obj_ver.version < 1:
                raise InvalidArgumentError(
                    "Every object version must specify a version of one or more"
                )

        return self._execute(
            "POST",
            "/REST/objects/properties.aspx",
            json=[obj_ver.to_dict() for obj_ver in obj_vers],
            parse=lambda data: [_to_property_values(values) for values in data or []],
        )

    # =========================================================================
    # Writing properties
    # =========================================================================

    def set_property(self, obj: ObjID, property_value: PropertyValue) -> ExtendedObjectVersion:
        if property_value is None:
            raise InvalidArgumentError("A property value is required")
        return self._execute(
            "PUT",
            _property_path(obj, property_value.property_def),
            json=property_value.to_dict(),
            parse=lambda data: ExtendedObjectVersion.from_dict(data or {}),
        )

    def set_properties(
        self,
        obj: ObjID,
        property_values: Iterable[PropertyValue],
        replace_all_properties: bool = False,
    ) -> ExtendedObjectVersion:
        """
        Set several property values on an object version.

        Args:
            obj: The object version (must be checked out, or the server
                checks it out and in around the change)
            property_values: Values to set
            replace_all_properties: Replace every property (PUT) rather than
                merging with the existing ones (POST)
        """
        if property_values is None:
            raise InvalidArgumentError("Property values are required")
        return self._execute(
            "PUT" if replace_all_properties else "POST",
            build_object_path(obj, OBJECT_PATH) + "/properties",
            json=[p.to_dict() for p in property_values],
            parse=lambda data: ExtendedObjectVersion.from_dict(data or {}),
        )

    def set_properties_of_multiple_objects(
        self, updates: Iterable[ObjectVersionUpdateInformation]
    ) -> List[ExtendedObjectVersion]:
        if updates is None:
            raise InvalidArgumentError("Object updates are required")
        updates = list(updates)
        if not updates:
            return self._completed([])
        return self._execute(
            "PUT",
            "/REST/objects/setmultipleobjproperties",
            json={"MultipleObjectInfo": [u.to_dict() for u in updates]},
            parse=lambda data: [ExtendedObjectVersion.from_dict(v) for v in data or []],
        )

    def remove_property(self, obj: ObjID, property_def: int) -> ExtendedObjectVersion:
        return self._execute(
            "DELETE",
            _property_path(obj, property_def, ".aspx"),
            parse=lambda data: ExtendedObjectVersion.from_dict(data or {}),
        )

    def set_workflow_state(self, obj: ObjID, state_id: int) -> ObjectVersion:
        """Move an object version to another state in its workflow."""
        return self._execute(
            "PUT",
            build_object_path(obj, OBJECT_PATH) + "/workflowstate",
            json={"StateID": state_id},
            parse=lambda data: ObjectVersion.from_dict(data or {}),
        )

    # =========================================================================
    # Assignments
    # =========================================================================

    def can_complete_assignment(self, obj: ObjID) -> bool:
        """Whether the current user can approve or complete an assignment."""
        _, id_segment, version_segment = _require_assignment(obj)
        return self._execute(
            "GET",
            f"/REST/objects/{id_segment}/{version_segment}/canCompleteAssignment.aspx",
            parse=lambda data: bool((data or {}).get("Value", False)),
        )

    def approve_or_reject_assignment(
        self, obj: ObjID, approve: bool, comment: Optional[str] = None
    ) -> ObjectVersion:
        """
        Approve (complete) or reject an assignment.

        Args:
            obj: The assignment (object type 10)
            approve: True to approve/complete, False to reject
            comment: Optional comment recorded with the decision
        """
        object_type, id_segment, version_segment = _require_assignment(obj)
        action = "complete.aspx" if approve else "reject.aspx"
        headers = None if approve else {"X-Extensions": "mfwa"}
        return self._execute(
            "PUT",
            f"/REST/objects/{object_type}/{id_segment}/{version_segment}/{action}",
            json={"Comment": comment},
            headers=headers,
            parse=lambda data: ObjectVersion.from_dict(data or {}),
        )

    def approve_assignment(self, obj: ObjID, comment: Optional[str] = None) -> ObjectVersion:
        return self.approve_or_reject_assignment(obj, True, comment)

    def reject_assignment(self, obj: ObjID, comment: Optional[str] = None) -> ObjectVersion:
        return self.approve_or_reject_assignment(obj, False, comment)
