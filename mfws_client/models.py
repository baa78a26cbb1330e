"""Data models for M-Files Web Service objects."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, List, Optional


class MFBuiltInObjectType(IntEnum):
    """Built-in object type IDs in M-Files."""

    DOCUMENT = 0
    ASSIGNMENT = 10


class MFCheckOutStatus(IntEnum):
    """Check-out status values in M-Files."""

    CHECKED_IN = 0
    CHECKED_OUT = 1
    CHECKED_OUT_TO_ME = 2


class MFDataType(IntEnum):
    """Property value data types in M-Files."""

    UNINITIALIZED = 0
    TEXT = 1
    INTEGER = 2
    FLOATING = 3
    DATE = 5
    TIME = 6
    TIMESTAMP = 7
    BOOLEAN = 8
    LOOKUP = 9
    MULTI_SELECT_LOOKUP = 10
    INTEGER64 = 11
    FILETIME = 12
    MULTI_LINE_TEXT = 13
    ACL = 14


# =============================================================================
# Object identity
# =============================================================================


@dataclass(frozen=True)
class ObjID:
    """
    Identifies an object, independent of its version.

    Either ``id`` is set (a managed object) or both ``external_repository_name``
    and ``external_repository_object_id`` are set (an unmanaged object that is
    mastered in an external repository).
    """

    type: int
    id: int = 0
    external_repository_name: Optional[str] = None
    external_repository_object_id: Optional[str] = None

    @property
    def is_external(self) -> bool:
        return bool(self.external_repository_name or self.external_repository_object_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ObjID":
        return cls(
            type=data.get("Type", 0),
            id=data.get("ID", 0),
            external_repository_name=data.get("ExternalRepositoryName") or None,
            external_repository_object_id=data.get("ExternalRepositoryObjectID") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {"Type": self.type, "ID": self.id}
        if self.external_repository_name:
            data["ExternalRepositoryName"] = self.external_repository_name
        if self.external_repository_object_id:
            data["ExternalRepositoryObjectID"] = self.external_repository_object_id
        return data


@dataclass(frozen=True)
class ObjVer(ObjID):
    """Identifies a specific version of an object (version <= 0 means latest)."""

    version: int = 0
    external_repository_object_version_id: Optional[str] = None

    @property
    def obj_id(self) -> ObjID:
        return ObjID(
            type=self.type,
            id=self.id,
            external_repository_name=self.external_repository_name,
            external_repository_object_id=self.external_repository_object_id,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ObjVer":
        return cls(
            type=data.get("Type", 0),
            id=data.get("ID", 0),
            version=data.get("Version", 0),
            external_repository_name=data.get("ExternalRepositoryName") or None,
            external_repository_object_id=data.get("ExternalRepositoryObjectID") or None,
            external_repository_object_version_id=(
                data.get("ExternalRepositoryObjectVersionID") or None
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["Version"] = self.version
        if self.external_repository_object_version_id:
            data["ExternalRepositoryObjectVersionID"] = (
                self.external_repository_object_version_id
            )
        return data


# =============================================================================
# Property values
# =============================================================================


@dataclass
class Lookup:
    """A reference to a value list item or object."""

    item: int
    version: int = -1
    display_value: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Lookup":
        return cls(
            item=data.get("Item", 0),
            version=data.get("Version", -1),
            display_value=data.get("DisplayValue"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {"Item": self.item, "Version": self.version}
        if self.display_value is not None:
            data["DisplayValue"] = self.display_value
        return data


@dataclass
class TypedValue:
    """A property value together with its data type."""

    data_type: MFDataType
    value: Any = None
    lookup: Optional[Lookup] = None
    lookups: List[Lookup] = field(default_factory=list)
    display_value: Optional[str] = None

    @property
    def has_value(self) -> bool:
        return self.value is not None or self.lookup is not None or bool(self.lookups)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TypedValue":
        lookup = data.get("Lookup")
        return cls(
            data_type=MFDataType(data.get("DataType", 0)),
            value=data.get("Value"),
            lookup=Lookup.from_dict(lookup) if lookup else None,
            lookups=[Lookup.from_dict(item) for item in data.get("Lookups") or []],
            display_value=data.get("DisplayValue"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {"DataType": int(self.data_type), "HasValue": self.has_value}
        if self.value is not None:
            data["Value"] = self.value
        if self.lookup is not None:
            data["Lookup"] = self.lookup.to_dict()
        if self.lookups:
            data["Lookups"] = [item.to_dict() for item in self.lookups]
        return data


@dataclass
class PropertyValue:
    """The value of a single property on an object version."""

    property_def: int
    typed_value: TypedValue

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PropertyValue":
        return cls(
            property_def=data.get("PropertyDef", -1),
            typed_value=TypedValue.from_dict(data.get("TypedValue") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "PropertyDef": self.property_def,
            "TypedValue": self.typed_value.to_dict(),
        }


# =============================================================================
# Object versions
# =============================================================================


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass
class ObjectVersion:
    """A single version of an object, as returned by the server."""

    obj_ver: ObjVer
    title: str = ""
    display_id: str = ""
    class_id: int = -1
    checked_out_to: int = 0
    object_checked_out: bool = False
    deleted: bool = False
    last_modified: Optional[datetime] = None
    raw_data: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ObjectVersion":
        return cls(
            obj_ver=ObjVer.from_dict(data.get("ObjVer") or {}),
            title=data.get("Title", ""),
            display_id=data.get("DisplayID", ""),
            class_id=data.get("Class", -1),
            checked_out_to=data.get("CheckedOutTo", 0),
            object_checked_out=data.get("ObjectCheckedOut", False),
            deleted=data.get("Deleted", False),
            last_modified=_parse_timestamp(data.get("LastModifiedUtc")),
            raw_data=data,
        )


@dataclass
class ExtendedObjectVersion(ObjectVersion):
    """An object version that also carries its property values."""

    properties: List[PropertyValue] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtendedObjectVersion":
        base = ObjectVersion.from_dict(data)
        return cls(
            obj_ver=base.obj_ver,
            title=base.title,
            display_id=base.display_id,
            class_id=base.class_id,
            checked_out_to=base.checked_out_to,
            object_checked_out=base.object_checked_out,
            deleted=base.deleted,
            last_modified=base.last_modified,
            raw_data=data,
            properties=[PropertyValue.from_dict(p) for p in data.get("Properties") or []],
        )


@dataclass
class ObjectCreationInfo:
    """The properties (and uploaded files) used to create a new object."""

    property_values: List[PropertyValue] = field(default_factory=list)
    files: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "PropertyValues": [p.to_dict() for p in self.property_values],
            "Files": list(self.files),
        }


@dataclass
class ObjectVersionUpdateInformation:
    """Property updates for one object within a multi-object update."""

    obj_ver: ObjVer
    properties: List[PropertyValue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ObjVer": self.obj_ver.to_dict(),
            "Properties": [p.to_dict() for p in self.properties],
        }


# =============================================================================
# Vault structure
# =============================================================================


@dataclass
class WorkflowState:
    """A state within a workflow."""

    id: int
    name: str = ""
    selectable: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkflowState":
        return cls(
            id=data.get("ID", 0),
            name=data.get("Name") or "",
            selectable=data.get("Selectable", True),
        )


@dataclass
class ValueListItem:
    """An item within a value list."""

    id: int
    name: str
    value_list_id: int
    display_id: Optional[str] = None
    has_owner: bool = False
    owner_id: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValueListItem":
        return cls(
            id=data.get("ID", 0),
            name=data.get("Name", ""),
            value_list_id=data.get("ValueListID", 0),
            display_id=data.get("DisplayID"),
            has_owner=data.get("HasOwner", False),
            owner_id=data.get("OwnerID", 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"Name": self.name, "ValueListID": self.value_list_id}


@dataclass
class ObjectClass:
    """An object class."""

    id: int
    name: str
    object_type: int = 0
    workflow: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ObjectClass":
        return cls(
            id=data.get("ID", 0),
            name=data.get("Name", ""),
            object_type=data.get("ObjType", 0),
            workflow=data.get("Workflow", 0),
        )


@dataclass
class ClassGroup:
    """A named group of object classes."""

    id: int
    name: str
    classes: List[ObjectClass] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassGroup":
        return cls(
            id=data.get("ID", 0),
            name=data.get("Name", ""),
            classes=[ObjectClass.from_dict(c) for c in data.get("ObjectClasses") or []],
        )


@dataclass
class PropertyDef:
    """A property definition."""

    id: int
    name: str
    data_type: MFDataType = MFDataType.UNINITIALIZED
    object_type: int = 0
    value_list: int = 0
    all_object_types: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PropertyDef":
        return cls(
            id=data.get("ID", 0),
            name=data.get("Name", ""),
            data_type=MFDataType(data.get("DataType", 0)),
            object_type=data.get("ObjectType", 0),
            value_list=data.get("ValueList", 0),
            all_object_types=data.get("AllObjectTypes", False),
        )


# =============================================================================
# Server and authentication
# =============================================================================


@dataclass
class Vault:
    """A vault on the server."""

    guid: str
    name: str
    authentication: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Vault":
        return cls(
            guid=data.get("GUID", ""),
            name=data.get("Name", ""),
            authentication=data.get("Authentication"),
        )


@dataclass
class PluginInfoConfiguration:
    """An authentication plugin advertised by the server."""

    name: str
    protocol: str = ""
    is_default: bool = False
    vault_guid: Optional[str] = None
    configuration: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PluginInfoConfiguration":
        return cls(
            name=data.get("Name", ""),
            protocol=data.get("AssemblyName") or data.get("Protocol") or "",
            is_default=data.get("IsDefault", False),
            vault_guid=data.get("VaultGuid"),
            configuration=dict(data.get("Configuration") or {}),
        )


@dataclass
class Authentication:
    """Credentials posted to the server to obtain an authentication token."""

    username: str
    password: str
    vault_guid: Optional[str] = None
    expiration: Optional[datetime] = None
    session_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"Username": self.username, "Password": self.password}
        if self.vault_guid:
            data["VaultGuid"] = self.vault_guid
        if self.expiration is not None:
            data["Expiration"] = self.expiration.isoformat()
        if self.session_id:
            data["SessionID"] = self.session_id
        return data
