"""Materialize resolved property decisions onto a schema.

Assembly only happens once every member of a type has been resolved, so a type
which fails resolution never leaves a half-populated schema behind.

Examples
--------
>>> import dataclasses
>>> from typing import Optional
>>> from typedesc import assembly, properties, settings
>>>
>>> @dataclasses.dataclass
... class Pet:
...     name: str
...     nickname: Optional[str] = None
...
>>> schema = {}
>>> assembly.generate_properties(
...     Pet, schema, settings.GeneratorSettings(), properties.PropertyResolver()
... )
{'type': 'object', 'properties': {'name': {'type': 'string'}, 'nickname': {'type': ['string', 'null']}}}
"""
from __future__ import annotations

from typing import Any, Dict, MutableMapping, Optional, Type

from typedesc.compat import Protocol
from typedesc.description import JsonObjectType, MemberDecision, TypeDescription
from typedesc.properties import PropertyResolver
from typedesc.settings import GeneratorSettings, SchemaType

__all__ = (
    "DictSchemaAssembler",
    "SchemaAssembler",
    "generate_properties",
)

SchemaT = MutableMapping[str, Any]


class SchemaAssembler(Protocol):
    """Anything which can add a resolved property to a schema object."""

    def add_property(self, schema: Any, decision: MemberDecision) -> None: ...


class DictSchemaAssembler:
    """Write property decisions as plain JSON Schema dictionaries."""

    __slots__ = ("settings",)

    def __init__(self, settings: Optional[GeneratorSettings] = None):
        self.settings = settings or GeneratorSettings()

    def __repr__(self):
        return f"{self.__class__.__name__}(settings={self.settings!r})"

    def describe(
        self, description: TypeDescription, is_nullable: Optional[bool] = None
    ) -> Dict[str, Any]:
        """Render a type description as a schema fragment for the current dialect."""
        if is_nullable is None:
            is_nullable = description.is_nullable
        fragment: Dict[str, Any] = {}
        kind = description.kind
        if kind is not JsonObjectType.NONE:
            fragment["type"] = kind.value
        if description.format is not None:
            fragment["format"] = str(description.format)
        if not is_nullable:
            return fragment
        dialect = self.settings.schema_type
        if dialect is SchemaType.OPENAPI3:
            fragment["nullable"] = True
        elif dialect is SchemaType.SWAGGER2:
            fragment["x-nullable"] = True
        elif "type" in fragment:
            fragment["type"] = [fragment["type"], "null"]
        return fragment

    def add_property(self, schema: SchemaT, decision: MemberDecision) -> None:
        schema.setdefault("type", JsonObjectType.OBJECT.value)
        schema.setdefault("properties", {})[decision.name] = self.describe(
            decision.type_description, decision.is_nullable
        )
        if decision.required:
            required = schema.setdefault("required", [])
            if decision.name not in required:
                required.append(decision.name)


def generate_properties(
    t: Type,
    schema: SchemaT,
    settings: Optional[GeneratorSettings] = None,
    resolver: Optional[PropertyResolver] = None,
    assembler: Optional[SchemaAssembler] = None,
) -> SchemaT:
    """Resolve the properties of `t` and add them to `schema`.

    Returns the given schema, for convenience.
    """
    settings = settings or GeneratorSettings()
    resolver = resolver or PropertyResolver()
    assembler = assembler or DictSchemaAssembler(settings)
    decisions = resolver.resolve(t, settings)
    for decision in decisions:
        assembler.add_property(schema, decision)
    return schema
