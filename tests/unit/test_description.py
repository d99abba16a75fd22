import pytest

from typedesc.description import Format, JsonObjectType, TypeDescription


def test_dynamic_description_has_no_format():
    # When/Then
    with pytest.raises(ValueError, match="can't carry a format"):
        TypeDescription(JsonObjectType.NONE, format=Format.BINARY)


@pytest.mark.suite(
    object=dict(
        given_description=TypeDescription(JsonObjectType.OBJECT),
        expected_complex=True,
        expected_any=False,
    ),
    dictionary=dict(
        given_description=TypeDescription(JsonObjectType.OBJECT, is_dictionary=True),
        expected_complex=False,
        expected_any=False,
    ),
    array=dict(
        given_description=TypeDescription(JsonObjectType.ARRAY),
        expected_complex=False,
        expected_any=False,
    ),
    none=dict(
        given_description=TypeDescription(JsonObjectType.NONE, is_nullable=True),
        expected_complex=False,
        expected_any=True,
    ),
)
def test_description_flags(given_description, expected_complex, expected_any):
    # Then
    assert given_description.is_complex_type == expected_complex
    assert given_description.is_any == expected_any


@pytest.mark.suite(
    integer=dict(given_kind=JsonObjectType.INTEGER, expected_as_string=False),
    string=dict(given_kind=JsonObjectType.STRING, expected_as_string=True),
)
def test_create_for_enumeration(given_kind, expected_as_string):
    # When
    description = TypeDescription.create_for_enumeration(None, given_kind, False)
    # Then
    assert description.is_enum
    assert description.is_enum_as_string == expected_as_string
    assert description.format is None


def test_json_values():
    # Then
    assert str(JsonObjectType.OBJECT) == "object"
    assert str(Format.DTIME) == "date-time"
    assert Format.DTIME == "date-time"
