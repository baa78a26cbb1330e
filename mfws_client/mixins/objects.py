"""Object operations mixin."""

from typing import List

from ..exceptions import InvalidArgumentError
from ..models import (
    ExtendedObjectVersion,
    MFCheckOutStatus,
    ObjectCreationInfo,
    ObjectVersion,
    ObjID,
    ObjVer,
)
from ..paths import (
    FAVORITE_PATH,
    OBJECT_CHECKOUT_PATH,
    OBJECT_DELETED_PATH,
    OBJECT_HISTORY_PATH,
    OBJECT_LATEST_WITH_PROPERTIES_PATH,
    OBJECT_PATH,
    OBJECT_TITLE_PATH,
    build_object_path,
)


def _to_object_version(data) -> ObjectVersion:
    return ObjectVersion.from_dict(data or {})


def _to_extended_object_version(data) -> ExtendedObjectVersion:
    return ExtendedObjectVersion.from_dict(data or {})


class ObjectsMixin:
    """
    Mixin providing object lifecycle operations.

    Objects are addressed with ObjID (latest version) or ObjVer; an ObjVer
    with version <= 0 also means the latest version.

    Requires on self:
        - _execute(method, resource, json=None, headers=None, parse=None)
    """

    # =========================================================================
    # Creation and retrieval
    # =========================================================================

    def create_new_object(
        self, object_type: int, creation_info: ObjectCreationInfo
    ) -> ObjectVersion:
        """
        Create a new object.

        Args:
            object_type: Object type id (0 for documents)
            creation_info: Property values (and uploaded files) for the object

        Returns:
            The new object version
        """
        if object_type < 0:
            raise InvalidArgumentError("The object type id cannot be less than zero")
        if creation_info is None:
            raise InvalidArgumentError("Object creation info is required")
        return self._execute(
            "POST",
            f"/REST/objects/{object_type}",
            json=creation_info.to_dict(),
            parse=_to_object_version,
        )

    def get_latest_object_version_and_properties(self, obj: ObjID) -> ExtendedObjectVersion:
        """Get the latest version of an object, including its properties."""
        return self._execute(
            "GET",
            build_object_path(obj, OBJECT_LATEST_WITH_PROPERTIES_PATH),
            parse=_to_extended_object_version,
        )

    def get_history(self, obj: ObjID) -> List[ObjectVersion]:
        """Get every version of an object."""
        return self._execute(
            "GET",
            build_object_path(obj, OBJECT_HISTORY_PATH),
            parse=lambda data: [_to_object_version(v) for v in data or []],
        )

    def rename_object(self, obj: ObjID, new_name: str) -> ObjectVersion:
        """Change an object's title."""
        return self._execute(
            "PUT",
            build_object_path(obj, OBJECT_TITLE_PATH),
            json={"Value": new_name},
            parse=_to_object_version,
        )

    # =========================================================================
    # Check-out
    # =========================================================================

    def get_checkout_status(self, obj: ObjID) -> MFCheckOutStatus:
        return self._execute(
            "GET",
            build_object_path(obj, OBJECT_CHECKOUT_PATH),
            parse=lambda data: MFCheckOutStatus((data or {}).get("Value", 0)),
        )

    def set_checkout_status(self, obj: ObjID, status: MFCheckOutStatus) -> ObjectVersion:
        return self._execute(
            "PUT",
            build_object_path(obj, OBJECT_CHECKOUT_PATH),
            json={"Value": int(status)},
            parse=_to_object_version,
        )

    def check_out(self, obj: ObjID) -> ObjectVersion:
        return self.set_checkout_status(obj, MFCheckOutStatus.CHECKED_OUT_TO_ME)

    def check_in(self, obj: ObjID) -> ObjectVersion:
        return self.set_checkout_status(obj, MFCheckOutStatus.CHECKED_IN)

    def undo_checkout(self, obj: ObjID, force: bool = False) -> ObjectVersion:
        """
        Discard a check-out.

        Args:
            obj: The checked-out object version
            force: Undo a check-out held by another user (requires admin rights)
        """
        resource = build_object_path(obj, OBJECT_PATH) + ("?force=true" if force else "?force=false")
        return self._execute("DELETE", resource, parse=_to_object_version)

    def force_undo_checkout(self, obj: ObjID) -> ObjectVersion:
        return self.undo_checkout(obj, force=True)

    # =========================================================================
    # Deletion
    # =========================================================================

    def delete_object(self, obj: ObjID) -> ObjectVersion:
        """Mark an object as deleted (it can be undeleted later)."""
        return self._set_deleted(obj, True)

    def undelete_object(self, obj: ObjID) -> ObjectVersion:
        return self._set_deleted(obj, False)

    def _set_deleted(self, obj: ObjID, deleted: bool):
        return self._execute(
            "PUT",
            build_object_path(obj, OBJECT_DELETED_PATH),
            json={"Value": deleted},
            parse=_to_object_version,
        )

    def destroy_object(self, obj: ObjID, destroy_all_versions: bool = True) -> ObjectVersion:
        """
        Permanently destroy an object, or one version of it.

        Args:
            obj: The object. To destroy a single version pass an ObjVer with
                a version >= 1 and ``destroy_all_versions=False``.
            destroy_all_versions: Destroy the whole object rather than one version
        """
        if destroy_all_versions:
            target = obj.obj_id if isinstance(obj, ObjVer) else obj
            resource = build_object_path(target, OBJECT_PATH) + "?allVersions=true"
        else:
            if not isinstance(obj, ObjVer) or (obj.version < 1 and not obj.is_external):
                raise InvalidArgumentError(
                    "A specific object version is required to destroy a single version"
                )
            resource = build_object_path(obj, OBJECT_PATH) + "?allVersions=false"
        return self._execute("DELETE", resource, parse=_to_object_version)

    # =========================================================================
    # Favorites
    # =========================================================================

    def add_to_favorites(self, obj: ObjID) -> ExtendedObjectVersion:
        if obj is None:
            raise InvalidArgumentError("An object identifier is required")
        target = obj.obj_id if isinstance(obj, ObjVer) else obj
        return self._execute(
            "POST",
            "/REST/favorites",
            json=target.to_dict(),
            parse=_to_extended_object_version,
        )

    def remove_from_favorites(self, obj: ObjID) -> ExtendedObjectVersion:
        return self._execute(
            "DELETE",
            build_object_path(obj, FAVORITE_PATH),
            parse=_to_extended_object_version,
        )
