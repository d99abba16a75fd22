from __future__ import annotations

from typedesc.annotations import (
    CanBeNull,
    DataContract,
    DataMember,
    JsonConverter,
    JsonExtensionData,
    JsonIgnore,
    JsonIgnoreCondition,
    JsonPropertyName,
    JsonSchema,
    JsonSchemaType,
    NotNull,
    Obsolete,
    Required,
    annotate,
)
from typedesc.assembly import DictSchemaAssembler, SchemaAssembler
from typedesc.context import ContextualType, MetadataProvider, Nullability
from typedesc.converters import JsonStringEnumConverter, StringEnumConverter
from typedesc.core.strings import Case
from typedesc.description import Format, JsonObjectType, MemberDecision, TypeDescription
from typedesc.properties import DuplicatePropertyError, PropertyResolutionError
from typedesc.service import ReflectionService
from typedesc.settings import (
    GeneratorSettings,
    MemberSerialization,
    ReferenceTypeNullHandling,
    SchemaType,
    SettingsValueError,
)

__all__ = (
    "annotate",
    "CanBeNull",
    "Case",
    "ContextualType",
    "contextualize",
    "convert_enum_value",
    "DataContract",
    "DataMember",
    "describe",
    "DictSchemaAssembler",
    "DuplicatePropertyError",
    "Format",
    "generate_properties",
    "GeneratorSettings",
    "is_nullable",
    "is_string_enum",
    "JsonConverter",
    "JsonExtensionData",
    "JsonIgnore",
    "JsonIgnoreCondition",
    "JsonObjectType",
    "JsonPropertyName",
    "JsonSchema",
    "JsonSchemaType",
    "JsonStringEnumConverter",
    "MemberDecision",
    "MemberSerialization",
    "MetadataProvider",
    "NotNull",
    "Nullability",
    "Obsolete",
    "PropertyResolutionError",
    "ReferenceTypeNullHandling",
    "ReflectionService",
    "Required",
    "resolve_properties",
    "SchemaAssembler",
    "SchemaType",
    "service",
    "SettingsValueError",
    "StringEnumConverter",
    "TypeDescription",
)


service = ReflectionService(GeneratorSettings.from_env())
contextualize = service.contextualize
describe = service.describe
is_nullable = service.is_nullable
is_string_enum = service.is_string_enum
resolve_properties = service.resolve_properties
generate_properties = service.generate_properties
convert_enum_value = service.convert_enum_value
