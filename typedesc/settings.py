from __future__ import annotations

import dataclasses
import enum
import os
from typing import Any, Mapping, Optional, Type

from typedesc import util
from typedesc.compat import Self, is_protocol
from typedesc.core import constants, strings

__all__ = (
    "GeneratorSettings",
    "MemberSerialization",
    "ReferenceTypeNullHandling",
    "SchemaType",
    "SettingsValueError",
)


class ReferenceTypeNullHandling(str, enum.Enum):
    """How a reference type is treated when nothing else says whether it's nullable."""

    NULL = "null"
    NOT_NULL = "not_null"


class SchemaType(str, enum.Enum):
    """The dialect of the schema being generated."""

    JSON_SCHEMA = "json_schema"
    SWAGGER2 = "swagger2"
    OPENAPI3 = "openapi3"


class MemberSerialization(str, enum.Enum):
    """Which fields of an object are serialized."""

    OPT_OUT = "opt_out"
    """All public fields, unless ignored."""
    OPT_IN = "opt_in"
    """Only fields marked with :py:class:`~typedesc.annotations.DataMember`."""


_BOOLEANS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


@dataclasses.dataclass(frozen=True, slots=True)
class GeneratorSettings:
    """The configuration of a single schema-generation run.

    Examples
    --------
    >>> from typedesc import settings
    >>> s = settings.GeneratorSettings(naming_policy="camelCase")
    >>> s.get_naming_policy()("created_at")
    'createdAt'
    >>> s.schema_type
    <SchemaType.JSON_SCHEMA: 'json_schema'>
    """

    default_reference_type_null_handling: ReferenceTypeNullHandling = (
        ReferenceTypeNullHandling.NULL
    )
    schema_type: SchemaType = SchemaType.JSON_SCHEMA
    flatten_inheritance_hierarchy: bool = False
    member_serialization: MemberSerialization = MemberSerialization.OPT_OUT
    ignore_obsolete_properties: bool = False
    naming_policy: Optional[strings.NamingPolicyT] = None
    """A :py:class:`~typedesc.core.strings.Case`, or any callable renaming a member."""
    enum_converter: Any = None
    """An object with a ``convert(value)`` method, used to serialize enum values."""

    def get_actual_flatten_inheritance_hierarchy(self, t: Type) -> bool:
        """Protocols have no real hierarchy, so theirs is always flattened."""
        return self.flatten_inheritance_hierarchy or is_protocol(util.origin(t))

    def get_naming_policy(self) -> Optional[strings.CaseTransformerT]:
        return strings.naming_policy(self.naming_policy)

    @classmethod
    def from_env(
        cls,
        prefix: str = constants.ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
    ) -> Self:
        """Load the settings from environment variables.

        Variable names are case-insensitive. Unset variables keep their default.

        Examples
        --------
        >>> from typedesc import settings
        >>> s = settings.GeneratorSettings.from_env(
        ...     environ={
        ...         "typedesc_schema_type": "openapi3",
        ...         "TYPEDESC_NAMING_CASE": "camelCase",
        ...     }
        ... )
        >>> s.schema_type
        <SchemaType.OPENAPI3: 'openapi3'>
        >>> s.naming_policy
        <Case.CAMEL: 'camelCase'>
        """
        environ = os.environ if environ is None else environ
        prefix = prefix.lower()
        values = {
            k.lower()[len(prefix) :]: v
            for k, v in environ.items()
            if k.lower().startswith(prefix)
        }
        kwargs: dict = {}
        for name, parse in _ENV_FIELDS.items():
            key = "naming_case" if name == "naming_policy" else name
            if key not in values:
                continue
            value = values[key]
            try:
                kwargs[name] = parse(value.strip())
            except (KeyError, ValueError) as err:
                raise SettingsValueError(
                    f"Couldn't parse <{prefix.upper()}{key.upper()}:{value}>: {err}."
                ) from None
        return cls(**kwargs)


def _parse_bool(value: str) -> bool:
    return _BOOLEANS[value.lower()]


def _parse_enum(enum_cls: Type[enum.Enum]):
    def _parse(value: str):
        lowered = value.lower()
        for member in enum_cls:
            if lowered in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"{value!r} is not a valid {enum_cls.__name__}")

    return _parse


_ENV_FIELDS = {
    "default_reference_type_null_handling": _parse_enum(ReferenceTypeNullHandling),
    "schema_type": _parse_enum(SchemaType),
    "flatten_inheritance_hierarchy": _parse_bool,
    "member_serialization": _parse_enum(MemberSerialization),
    "ignore_obsolete_properties": _parse_bool,
    "naming_policy": _parse_enum(strings.Case),
}


class SettingsValueError(ValueError):
    ...
