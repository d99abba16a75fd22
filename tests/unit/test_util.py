import collections
import datetime
import typing as t

import pytest

from tests import objects
from typedesc import annotations, util


@pytest.mark.suite(
    simple_name=dict(
        given_object=objects.StringEnumConverter,
        given_name="StringEnumConverter",
        given_style=util.NameStyle.NAME,
        expected_assignable=True,
    ),
    inherited_simple_name=dict(
        given_object=objects.LowercaseEnumConverter,
        given_name="StringEnumConverter",
        given_style=util.NameStyle.NAME,
        expected_assignable=True,
    ),
    instance=dict(
        given_object=objects.LowercaseEnumConverter(),
        given_name="StringEnumConverter",
        given_style=util.NameStyle.NAME,
        expected_assignable=True,
    ),
    full_name=dict(
        given_object=objects.StringEnumConverter,
        given_name="tests.objects.StringEnumConverter",
        given_style=util.NameStyle.FULL_NAME,
        expected_assignable=True,
    ),
    full_name_mismatch=dict(
        given_object=objects.JsonStringEnumConverter,
        given_name="typedesc.converters.JsonStringEnumConverter",
        given_style=util.NameStyle.FULL_NAME,
        expected_assignable=False,
    ),
    simple_name_as_full_name=dict(
        given_object=objects.StringEnumConverter,
        given_name="StringEnumConverter",
        given_style=util.NameStyle.FULL_NAME,
        expected_assignable=False,
    ),
    unrelated=dict(
        given_object=int,
        given_name="StringEnumConverter",
        given_style=util.NameStyle.NAME,
        expected_assignable=False,
    ),
)
def test_is_assignable_to_name(
    given_object, given_name, given_style, expected_assignable
):
    # When
    assignable = util.is_assignable_to_name(given_object, given_name, given_style)
    # Then
    assert assignable == expected_assignable


def test_first_assignable_to_name():
    # Given
    given_markers = (
        annotations.Required(),
        annotations.JsonPropertyName("first"),
        annotations.JsonPropertyName("second"),
    )
    # When
    marker = util.first_assignable_to_name(given_markers, "JsonPropertyName")
    # Then
    assert marker == annotations.JsonPropertyName("first")


def test_first_assignable_to_name_missing():
    # When
    marker = util.first_assignable_to_name((annotations.Required(),), "NotNull")
    # Then
    assert marker is None


@pytest.mark.suite(
    builtin=dict(given_type=int, expected_name="int"),
    stdlib=dict(
        given_type=collections.OrderedDict, expected_name="collections.OrderedDict"
    ),
    datetime=dict(given_type=datetime.datetime, expected_name="datetime.datetime"),
    local=dict(given_type=objects.Pet, expected_name="tests.objects.Pet"),
)
def test_get_full_name(given_type, expected_name):
    # When
    name = util.get_full_name(given_type)
    # Then
    assert name == expected_name


def test_type_map_get_by_parent():
    # Given
    given_map = util.TypeMap({datetime.date: "date", datetime.datetime: "date-time"})

    class Timestamp(datetime.datetime): ...

    # When
    value = given_map.get_by_parent(Timestamp)
    # Then
    assert value == "date-time"


def test_type_map_get_by_parent_names():
    # Given
    given_map = util.TypeMap({int: "int"})
    given_names = {"tests.objects.Registry": "registry"}

    class Child(objects.Registry): ...

    # When
    value = given_map.get_by_parent(Child, names=given_names)
    # Then
    assert value == "registry"


def test_type_map_get_by_parent_default():
    # Given
    given_map = util.TypeMap({int: "int"})
    # When
    value = given_map.get_by_parent(str, "missing")
    # Then
    assert value == "missing"


def test_get_annotations_evaluates_strings():
    # Given
    class Node:
        value: "int"
        children: "t.List[Node]"

    # When
    hints = util.get_annotations(Node)
    # Then
    assert hints == {"value": int, "children": t.List[Node]}


def test_get_annotations_warns_on_unresolved_reference():
    # Given
    class Broken:
        value: "DoesNotExist"  # noqa: F821

    # When
    with pytest.warns(UserWarning, match="Couldn't evaluate type"):
        hints = util.get_annotations(Broken)
    # Then
    assert isinstance(hints["value"], t.ForwardRef)


def test_get_annotations_evaluates_class_qualifiers():
    # Given
    class Counter:
        total: "t.ClassVar[int]"
        parent: "t.Optional[Counter]"

    # When
    hints = util.get_annotations(Counter)
    # Then
    assert hints == {"total": t.ClassVar[int], "parent": t.Optional[Counter]}


def test_get_annotations_warns_on_invalid_expression():
    # Given
    class Broken:
        value: "int ="  # noqa: F722

    # When
    with pytest.warns(UserWarning, match="Couldn't evaluate type"):
        hints = util.get_annotations(Broken)
    # Then
    assert hints["value"] is t.Any


def test_get_annotations_preserves_annotated():
    # Given
    class Marked:
        value: t.Annotated[int, annotations.Required()]

    # When
    hints = util.get_annotations(Marked)
    # Then
    assert hints["value"] == t.Annotated[int, annotations.Required()]
