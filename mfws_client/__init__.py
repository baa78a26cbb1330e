"""
MFWS Client - Python client for the M-Files Web Service REST API.

Usage:
    from mfws_client import MFWSClient, ObjVer, TextPropertyValueSearchCondition

    client = MFWSClient("http://localhost")
    client.authenticate_using_credentials(vault_guid, "user", "password")

    # Search
    results = client.search_for_objects_by_conditions(
        [TextPropertyValueSearchCondition(0, "hello world")]
    )

    # Work with an object
    client.rename_object(ObjVer(type=0, id=123), "New title")

An AsyncMFWSClient with the same operations is available for asyncio code.
"""

from .client import AsyncMFWSClient, BaseMFWSClient, MFWSClient, RequestDefaults
from .config import MFWSSettings
from .models import (
    Authentication,
    ClassGroup,
    ExtendedObjectVersion,
    Lookup,
    MFBuiltInObjectType,
    MFCheckOutStatus,
    MFDataType,
    ObjectClass,
    ObjectCreationInfo,
    ObjectVersion,
    ObjectVersionUpdateInformation,
    ObjID,
    ObjVer,
    PluginInfoConfiguration,
    PropertyDef,
    PropertyValue,
    TypedValue,
    ValueListItem,
    Vault,
    WorkflowState,
)
from .oauth2 import OAuth2Configuration, OAuth2TokenResponse
from .paths import build_object_path, decode_object_segment, encode_object_segments, url_encode
from .searching import (
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
)
from .exceptions import (
    MFWSError,
    InvalidArgumentError,
    NotSupportedError,
    EncodingInvariantViolation,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
)

__version__ = "0.1.0"
__all__ = [
    "MFWSClient",
    "AsyncMFWSClient",
    "BaseMFWSClient",
    "RequestDefaults",
    "MFWSSettings",
    # Models
    "Authentication",
    "ClassGroup",
    "ExtendedObjectVersion",
    "Lookup",
    "MFBuiltInObjectType",
    "MFCheckOutStatus",
    "MFDataType",
    "ObjectClass",
    "ObjectCreationInfo",
    "ObjectVersion",
    "ObjectVersionUpdateInformation",
    "ObjID",
    "ObjVer",
    "PluginInfoConfiguration",
    "PropertyDef",
    "PropertyValue",
    "TypedValue",
    "ValueListItem",
    "Vault",
    "WorkflowState",
    # OAuth 2.0
    "OAuth2Configuration",
    "OAuth2TokenResponse",
    # Paths
    "build_object_path",
    "decode_object_segment",
    "encode_object_segments",
    "url_encode",
    # Searching
    "BooleanPropertyValueSearchCondition",
    "DatePropertyValueSearchCondition",
    "IncludeDeletedObjectsSearchCondition",
    "LookupPropertyValueSearchCondition",
    "MultiSelectLookupPropertyValueSearchCondition",
    "ObjectTypeSearchCondition",
    "QuickSearchCondition",
    "SearchConditionOperator",
    "TextPropertyValueSearchCondition",
    "TimestampPropertyValueSearchCondition",
    "ValueListSearchCondition",
    "build_search_query",
    "encode_condition",
    # Exceptions
    "MFWSError",
    "InvalidArgumentError",
    "NotSupportedError",
    "EncodingInvariantViolation",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
]
