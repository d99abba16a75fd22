import dataclasses
import typing as t

import pytest

from tests import objects
from typedesc import annotations, assembly, properties
from typedesc.context import MetadataProvider
from typedesc.description import Format, JsonObjectType, TypeDescription
from typedesc.settings import GeneratorSettings, SchemaType


@pytest.fixture(scope="module")
def given_ctx():
    return MetadataProvider().contextualize(t.Optional[int], declared=True)


@pytest.mark.suite(
    json_schema=dict(
        given_schema_type=SchemaType.JSON_SCHEMA,
        expected_fragment={"type": ["integer", "null"], "format": "int64"},
    ),
    openapi3=dict(
        given_schema_type=SchemaType.OPENAPI3,
        expected_fragment={"type": "integer", "format": "int64", "nullable": True},
    ),
    swagger2=dict(
        given_schema_type=SchemaType.SWAGGER2,
        expected_fragment={"type": "integer", "format": "int64", "x-nullable": True},
    ),
)
def test_describe_nullable(given_ctx, given_schema_type, expected_fragment):
    # Given
    given_assembler = assembly.DictSchemaAssembler(
        GeneratorSettings(schema_type=given_schema_type)
    )
    given_description = TypeDescription.create(
        given_ctx, JsonObjectType.INTEGER, True, format=Format.INT64
    )
    # When
    fragment = given_assembler.describe(given_description)
    # Then
    assert fragment == expected_fragment


def test_describe_any_omits_type(given_ctx):
    # Given
    given_description = TypeDescription.create(given_ctx, JsonObjectType.NONE, True)
    # When
    fragment = assembly.DictSchemaAssembler().describe(given_description)
    # Then
    assert fragment == {}


def test_generate_properties():
    # Given
    given_schema = {"title": "Pet"}
    # When
    schema = assembly.generate_properties(objects.Pet, given_schema)
    # Then
    assert schema is given_schema
    assert schema == {
        "title": "Pet",
        "type": "object",
        "properties": {
            "id": {"type": "integer"},
            "nickname": {"type": ["string", "null"]},
        },
        "required": ["id"],
    }


def test_generate_properties_openapi3():
    # Given
    given_settings = GeneratorSettings(schema_type=SchemaType.OPENAPI3)
    # When
    schema = assembly.generate_properties(objects.Pet, {}, given_settings)
    # Then
    assert schema["properties"]["nickname"] == {"type": "string", "nullable": True}


def test_generate_properties_keeps_existing_required():
    # Given
    given_schema = {"required": ["id"]}
    # When
    schema = assembly.generate_properties(objects.Pet, given_schema)
    # Then
    assert schema["required"] == ["id"]


def test_generate_properties_duplicate_leaves_schema_untouched():
    # Given
    given_schema = {}
    # When
    with pytest.raises(properties.DuplicatePropertyError):
        assembly.generate_properties(objects.Derived, given_schema)
    # Then
    assert given_schema == {}


def test_generate_properties_custom_assembler():
    # Given
    class NameAssembler:
        def add_property(self, schema, decision):
            schema.setdefault("names", []).append(decision.name)

    # When
    schema = assembly.generate_properties(
        objects.Renamed, {}, assembler=NameAssembler()
    )
    # Then
    assert schema == {"names": ["foo_bar", "created_at"]}


def test_generate_properties_required_is_not_nullable():
    # Given
    @dataclasses.dataclass
    class Account:
        email: t.Annotated[t.Optional[str], annotations.Required()]

    # When
    schema = assembly.generate_properties(Account, {})
    # Then
    assert schema["properties"]["email"] == {"type": "string"}
    assert schema["required"] == ["email"]
