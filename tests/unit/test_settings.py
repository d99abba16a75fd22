import pytest

from tests import objects
from typedesc import settings
from typedesc.core import strings
from typedesc.settings import (
    GeneratorSettings,
    MemberSerialization,
    ReferenceTypeNullHandling,
    SchemaType,
)


def test_defaults():
    # When
    given_settings = GeneratorSettings()
    # Then
    assert given_settings.default_reference_type_null_handling is (
        ReferenceTypeNullHandling.NULL
    )
    assert given_settings.schema_type is SchemaType.JSON_SCHEMA
    assert given_settings.member_serialization is MemberSerialization.OPT_OUT
    assert not given_settings.flatten_inheritance_hierarchy
    assert not given_settings.ignore_obsolete_properties
    assert given_settings.get_naming_policy() is None
    assert given_settings.enum_converter is None


@pytest.mark.suite(
    null_handling=dict(
        given_environ={"TYPEDESC_DEFAULT_REFERENCE_TYPE_NULL_HANDLING": "not_null"},
        expected_field="default_reference_type_null_handling",
        expected_value=ReferenceTypeNullHandling.NOT_NULL,
    ),
    schema_type=dict(
        given_environ={"TYPEDESC_SCHEMA_TYPE": "swagger2"},
        expected_field="schema_type",
        expected_value=SchemaType.SWAGGER2,
    ),
    schema_type_by_name=dict(
        given_environ={"TYPEDESC_SCHEMA_TYPE": "OPENAPI3"},
        expected_field="schema_type",
        expected_value=SchemaType.OPENAPI3,
    ),
    lower_case_name=dict(
        given_environ={"typedesc_member_serialization": "opt_in"},
        expected_field="member_serialization",
        expected_value=MemberSerialization.OPT_IN,
    ),
    flatten=dict(
        given_environ={"TYPEDESC_FLATTEN_INHERITANCE_HIERARCHY": "yes"},
        expected_field="flatten_inheritance_hierarchy",
        expected_value=True,
    ),
    ignore_obsolete=dict(
        given_environ={"TYPEDESC_IGNORE_OBSOLETE_PROPERTIES": " True "},
        expected_field="ignore_obsolete_properties",
        expected_value=True,
    ),
    disabled=dict(
        given_environ={"TYPEDESC_IGNORE_OBSOLETE_PROPERTIES": "0"},
        expected_field="ignore_obsolete_properties",
        expected_value=False,
    ),
    naming_case=dict(
        given_environ={"TYPEDESC_NAMING_CASE": "kebab-case"},
        expected_field="naming_policy",
        expected_value=strings.Case.KEBAB,
    ),
)
def test_from_env(given_environ, expected_field, expected_value):
    # When
    loaded = GeneratorSettings.from_env(environ=given_environ)
    # Then
    assert getattr(loaded, expected_field) == expected_value


def test_from_env_ignores_other_variables():
    # Given
    given_environ = {"SCHEMA_TYPE": "swagger2", "OTHER_SCHEMA_TYPE": "openapi3"}
    # When
    loaded = GeneratorSettings.from_env(environ=given_environ)
    # Then
    assert loaded == GeneratorSettings()


def test_from_env_prefix():
    # Given
    given_environ = {"APP_SCHEMA_TYPE": "openapi3"}
    # When
    loaded = GeneratorSettings.from_env("APP_", environ=given_environ)
    # Then
    assert loaded.schema_type is SchemaType.OPENAPI3


def test_from_env_process_environment(monkeypatch):
    # Given
    monkeypatch.setenv("TYPEDESC_SCHEMA_TYPE", "swagger2")
    # When
    loaded = GeneratorSettings.from_env()
    # Then
    assert loaded.schema_type is SchemaType.SWAGGER2


@pytest.mark.suite(
    bad_enum=dict(given_environ={"TYPEDESC_SCHEMA_TYPE": "swagger3"}),
    bad_bool=dict(given_environ={"TYPEDESC_FLATTEN_INHERITANCE_HIERARCHY": "maybe"}),
    bad_case=dict(given_environ={"TYPEDESC_NAMING_CASE": "sPoNgEbOb"}),
)
def test_from_env_invalid(given_environ):
    # When/Then
    with pytest.raises(settings.SettingsValueError, match="Couldn't parse"):
        GeneratorSettings.from_env(environ=given_environ)


@pytest.mark.suite(
    protocol=dict(given_type=objects.Circle, given_flatten=False, expected=True),
    dataclass=dict(given_type=objects.Derived, given_flatten=False, expected=False),
    flattened=dict(given_type=objects.Derived, given_flatten=True, expected=True),
)
def test_get_actual_flatten_inheritance_hierarchy(given_type, given_flatten, expected):
    # Given
    given_settings = GeneratorSettings(flatten_inheritance_hierarchy=given_flatten)
    # When
    flatten = given_settings.get_actual_flatten_inheritance_hierarchy(given_type)
    # Then
    assert flatten == expected


@pytest.mark.suite(
    case=dict(given_policy=strings.Case.SNAKE, expected_name="created_at"),
    case_name=dict(given_policy="PascalCase", expected_name="CreatedAt"),
    callable=dict(given_policy=lambda n: f"x_{n}", expected_name="x_createdAt"),
)
def test_get_naming_policy(given_policy, expected_name):
    # Given
    given_settings = GeneratorSettings(naming_policy=given_policy)
    # When
    name = given_settings.get_naming_policy()("createdAt")
    # Then
    assert name == expected_name
