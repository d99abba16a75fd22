"""Converters which serialize enumeration members as JSON strings.

Attach a converter type to an enum with
:py:class:`~typedesc.annotations.JsonConverter` to have it described as a string.

Examples
--------
>>> import enum
>>> from typedesc import converters
>>>
>>> class Color(enum.Enum):
...     DARK_RED = 1
...
>>> converters.StringEnumConverter().convert(Color.DARK_RED)
'DARK_RED'
>>> converters.JsonStringEnumConverter("camelCase").convert(Color.DARK_RED)
'darkRed'
"""
from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Optional

from typedesc.core import strings

if TYPE_CHECKING:  # pragma: nocover
    from typedesc.settings import GeneratorSettings

__all__ = (
    "JsonStringEnumConverter",
    "StringEnumConverter",
    "convert_enum_value",
)


class StringEnumConverter:
    """Serialize an enum member as its name."""

    def convert(self, value: enum.Enum) -> str:
        return value.name


class JsonStringEnumConverter:
    """Serialize an enum member as its name, optionally renamed by a naming policy."""

    __slots__ = ("naming_policy",)

    def __init__(self, naming_policy: Optional[strings.NamingPolicyT] = None):
        self.naming_policy = naming_policy

    def __repr__(self):
        return f"{self.__class__.__name__}(naming_policy={self.naming_policy!r})"

    def convert(self, value: enum.Enum) -> str:
        policy = strings.naming_policy(self.naming_policy)
        name = value.name
        if policy is not None:
            # Member names are conventionally UPPER_SNAKE_CASE.
            return policy(name.lower())
        return name


_DEFAULT_CONVERTER = JsonStringEnumConverter()


def convert_enum_value(value: Any, settings: GeneratorSettings) -> str:
    """Get the JSON string for an enum member with the converter of the run.

    Values which aren't enum members are returned as their string form.
    """
    if not isinstance(value, enum.Enum):
        return str(value)
    converter = settings.enum_converter or _DEFAULT_CONVERTER
    return converter.convert(value)
