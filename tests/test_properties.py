"""
Tests for property, workflow-state and assignment operations.
"""

import pytest

from mfws_client.exceptions import InvalidArgumentError
from mfws_client.models import (
    ExtendedObjectVersion,
    Lookup,
    MFDataType,
    ObjectVersionUpdateInformation,
    ObjID,
    ObjVer,
    PropertyValue,
    TypedValue,
)

TITLE = PropertyValue(0, TypedValue(MFDataType.TEXT, "hello world"))


# =============================================================================
# Reading
# =============================================================================


def test_get_property(client, session):
    session.queue({"PropertyDef": 0, "TypedValue": {"DataType": 1, "Value": "hello"}})
    value = client.get_property(ObjVer(type=0, id=1, version=2), 0)

    assert session.last.method == "GET"
    assert session.last.resource == "/REST/objects/0/1/2/properties/0"
    assert value.typed_value.value == "hello"


def test_get_property_of_latest_version(client, session):
    client.get_property(ObjID(type=0, id=1), 1020)
    assert session.last.resource == "/REST/objects/0/1/latest/properties/1020"


@pytest.mark.parametrize(
    "obj,property_def",
    [
        (ObjVer(type=-1, id=1, version=1), 0),
        (ObjVer(type=0, id=0, version=1), 0),
        (ObjVer(type=0, id=1, version=1), -1),
    ],
)
def test_get_property_validation(client, session, obj, property_def):
    with pytest.raises(InvalidArgumentError):
        client.get_property(obj, property_def)
    assert session.calls == []


def test_get_properties(client, session):
    session.queue([{"PropertyDef": 0, "TypedValue": {"DataType": 1, "Value": "x"}}])
    values = client.get_properties(ObjVer(type=0, id=1, version=2))

    assert session.last.resource == "/REST/objects/0/1/2/properties.aspx"
    assert [v.property_def for v in values] == [0]


def test_get_properties_of_multiple_objects(client, session):
    session.queue(
        [
            [{"PropertyDef": 0, "TypedValue": {"DataType": 1, "Value": "a"}}],
            [{"PropertyDef": 0, "TypedValue": {"DataType": 1, "Value": "b"}}],
        ]
    )
    result = client.get_properties_of_multiple_objects(
        [ObjVer(type=0, id=1, version=2), ObjVer(type=0, id=3, version=4)]
    )

    assert session.last.method == "POST"
    assert session.last.resource == "/REST/objects/properties.aspx"
    assert session.last.json == [
        {"Type": 0, "ID": 1, "Version": 2},
        {"Type": 0, "ID": 3, "Version": 4},
    ]
    assert [values[0].typed_value.value for values in result] == ["a", "b"]


def test_get_properties_of_multiple_objects_requires_versions(client, session):
    with pytest.raises(InvalidArgumentError):
        client.get_properties_of_multiple_objects(
            [ObjVer(type=0, id=1, version=2), ObjVer(type=0, id=3, version=0)]
        )
    with pytest.raises(InvalidArgumentError):
        client.get_properties_of_multiple_objects([ObjID(type=0, id=1)])
    assert session.calls == []


def test_get_properties_of_no_objects(client, session):
    assert client.get_properties_of_multiple_objects([]) == []
    assert session.calls == []


# =============================================================================
# Writing
# =============================================================================


def test_set_property(client, session):
    session.queue({"ObjVer": {"Type": 0, "ID": 1, "Version": 3}, "Properties": []})
    result = client.set_property(ObjVer(type=0, id=1, version=2), TITLE)

    assert session.last.method == "PUT"
    assert session.last.resource == "/REST/objects/0/1/2/properties/0"
    assert session.last.json == TITLE.to_dict()
    assert isinstance(result, ExtendedObjectVersion)
    assert result.obj_ver.version == 3


@pytest.mark.parametrize("replace_all,method", [(False, "POST"), (True, "PUT")])
def test_set_properties(client, session, replace_all, method):
    client.set_properties(ObjVer(type=0, id=1, version=2), [TITLE], replace_all_properties=replace_all)

    assert session.last.method == method
    assert session.last.resource == "/REST/objects/0/1/2/properties"
    assert session.last.json == [TITLE.to_dict()]


def test_set_properties_of_multiple_objects(client, session):
    update = ObjectVersionUpdateInformation(ObjVer(type=0, id=1, version=2), [TITLE])
    client.set_properties_of_multiple_objects([update])

    assert session.last.method == "PUT"
    assert session.last.resource == "/REST/objects/setmultipleobjproperties"
    assert session.last.json == {"MultipleObjectInfo": [update.to_dict()]}


def test_set_properties_of_no_objects(client, session):
    assert client.set_properties_of_multiple_objects([]) == []
    assert session.calls == []


def test_remove_property(client, session):
    client.remove_property(ObjVer(type=0, id=1, version=2), 1020)
    assert session.last.method == "DELETE"
    assert session.last.resource == "/REST/objects/0/1/2/properties/1020.aspx"


def test_lookup_value_body():
    value = PropertyValue(100, TypedValue(MFDataType.LOOKUP, lookup=Lookup(item=5)))
    assert value.to_dict() == {
        "PropertyDef": 100,
        "TypedValue": {"DataType": 9, "HasValue": True, "Lookup": {"Item": 5, "Version": -1}},
    }


def test_set_workflow_state(client, session):
    client.set_workflow_state(ObjVer(type=0, id=1, version=2), 42)
    assert session.last.method == "PUT"
    assert session.last.resource == "/REST/objects/0/1/2/workflowstate"
    assert session.last.json == {"StateID": 42}


# =============================================================================
# Assignments
# =============================================================================


def test_can_complete_assignment(client, session):
    session.queue({"Value": True})
    assert client.can_complete_assignment(ObjID(type=10, id=123)) is True
    assert session.last.resource == "/REST/objects/123/latest/canCompleteAssignment.aspx"


def test_can_complete_assignment_version(client, session):
    session.queue({"Value": False})
    assert client.can_complete_assignment(ObjVer(type=10, id=987, version=3)) is False
    assert session.last.resource == "/REST/objects/987/3/canCompleteAssignment.aspx"


def test_assignment_must_be_assignment_type(client, session):
    with pytest.raises(InvalidArgumentError):
        client.can_complete_assignment(ObjID(type=0, id=123))
    with pytest.raises(InvalidArgumentError):
        client.approve_assignment(ObjVer(type=0, id=123, version=1))
    assert session.calls == []


def test_approve_assignment(client, session):
    client.approve_assignment(ObjVer(type=10, id=123, version=456), "looks good")

    assert session.last.method == "PUT"
    assert session.last.resource == "/REST/objects/10/123/456/complete.aspx"
    assert session.last.json == {"Comment": "looks good"}
    assert "X-Extensions" not in session.last.headers


def test_reject_assignment(client, session):
    client.reject_assignment(ObjID(type=10, id=123))

    assert session.last.resource == "/REST/objects/10/123/latest/reject.aspx"
    assert session.last.json == {"Comment": None}
    assert session.last.headers["X-Extensions"] == "mfwa"
