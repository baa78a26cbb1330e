"""
Resource path construction for M-Files objects.

Objects are addressed as ``/REST/objects/{type}/{id}/{version}``. Managed
objects use their numeric ID and version; unmanaged (external) objects use a
``u``-prefixed segment built from the external repository name and object ID.

The external values are percent-encoded twice: once when the logical
``repository:object`` string is composed, and once more when that string is
placed in the path. The server expects exactly this form, e.g.::

    ObjID(type=0, external_repository_name="hello world",
          external_repository_object_id="123%123")
    -> "uhello%2Bworld%3A123%2525123"
"""

from typing import List, Tuple
from urllib.parse import quote_plus, unquote_plus

from .exceptions import EncodingInvariantViolation, InvalidArgumentError
from .models import ObjID, ObjVer

LATEST = "latest"
EXTERNAL_PREFIX = "u"

# Path templates; {t}, {id} and {v} are the encoded object segments.
OBJECT_PATH = "/REST/objects/{t}/{id}/{v}"
OBJECT_PROPERTIES_PATH = "/REST/objects/{t}/{id}/{v}/properties.aspx"
OBJECT_TITLE_PATH = "/REST/objects/{t}/{id}/{v}/title"
OBJECT_CHECKOUT_PATH = "/REST/objects/{t}/{id}/{v}/checkedout"
OBJECT_LATEST_WITH_PROPERTIES_PATH = "/REST/objects/{t}/{id}/latest.aspx?include=properties"
OBJECT_HISTORY_PATH = "/REST/objects/{t}/{id}/history"
OBJECT_DELETED_PATH = "/REST/objects/{t}/{id}/deleted"
FAVORITE_PATH = "/REST/favorites/{t}/{id}"


def url_encode(value: str) -> str:
    """
    Form-encode a value the way the M-Files Web Service expects.

    Spaces become ``+``; ASCII letters, digits and ``-_.!*()`` are left as-is;
    every other byte of the UTF-8 encoding becomes ``%XX``.
    """
    return quote_plus(value, safe="!*()").replace("~", "%7E")


def encode_object_segments(identifier: ObjID) -> List[str]:
    """
    Encode an object identifier into its three path segments.

    Args:
        identifier: An ObjID (always resolves to the latest version) or ObjVer

    Returns:
        ``[type, id_segment, version_segment]``

    Raises:
        InvalidArgumentError: If the identifier is missing or incomplete
    """
    if identifier is None:
        raise InvalidArgumentError("An object identifier is required")
    if identifier.type < 0:
        raise InvalidArgumentError("The object type id cannot be less than zero")

    if identifier.is_external:
        return [
            str(identifier.type),
            _encode_external_id(identifier),
            _encode_external_version(identifier),
        ]

    if identifier.id < 1:
        raise InvalidArgumentError("The object id cannot be less than or equal to zero")

    version = identifier.version if isinstance(identifier, ObjVer) else None
    return [
        str(identifier.type),
        str(identifier.id),
        str(version) if version and version > 0 else LATEST,
    ]


def _encode_external_id(identifier: ObjID) -> str:
    if not identifier.external_repository_name:
        raise InvalidArgumentError("An external object requires a repository name")
    if not identifier.external_repository_object_id:
        raise InvalidArgumentError("An external object requires an object id")

    logical = (
        url_encode(identifier.external_repository_name)
        + ":"
        + url_encode(identifier.external_repository_object_id)
    )
    return EXTERNAL_PREFIX + url_encode(logical)


def _encode_external_version(identifier: ObjID) -> str:
    version_id = None
    if isinstance(identifier, ObjVer):
        version_id = identifier.external_repository_object_version_id
    if not version_id:
        return LATEST
    return EXTERNAL_PREFIX + url_encode(url_encode(version_id))


def decode_object_segment(segment: str) -> Tuple[str, str]:
    """
    Decode an external object id segment back to (repository name, object id).

    Raises:
        EncodingInvariantViolation: If the segment is not a valid external id
    """
    if not segment or not segment.startswith(EXTERNAL_PREFIX):
        raise EncodingInvariantViolation(f"Not an external object segment: {segment!r}")

    logical = unquote_plus(segment[len(EXTERNAL_PREFIX):])
    repository, separator, object_id = logical.partition(":")
    if not separator or not repository or not object_id:
        raise EncodingInvariantViolation(
            f"External object segment has no repository separator: {segment!r}"
        )
    return unquote_plus(repository), unquote_plus(object_id)


def build_object_path(identifier: ObjID, template: str = OBJECT_PATH) -> str:
    """
    Render a resource path for an object.

    Args:
        identifier: The object (or object version) to address
        template: Path with ``{t}``, ``{id}`` and ``{v}`` placeholders

    Returns:
        The resource path, e.g. ``/REST/objects/0/123/latest/title``
    """
    object_type, id_segment, version_segment = encode_object_segments(identifier)
    try:
        return template.format(t=object_type, id=id_segment, v=version_segment)
    except (KeyError, IndexError) as e:
        raise InvalidArgumentError(f"Unsupported placeholder in path template: {template!r}") from e
