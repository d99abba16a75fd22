"""Marker objects which steer how a type or member is described.

Markers are attached at a member's point of use with :py:class:`typing.Annotated`,
or to a class definition with :py:func:`annotate`. They are recognized *by name*,
so an equivalent marker from another library (a ``NotNull`` from an annotations
package, a ``StringEnumConverter`` from a serializer...) is honored just the same.

Examples
--------
>>> import dataclasses
>>> from typing import Annotated, Optional
>>> from typedesc import annotations
>>>
>>> @dataclasses.dataclass
... class User:
...     id: Annotated[int, annotations.Required()]
...     display_name: Annotated[Optional[str], annotations.JsonPropertyName("name")]
...     password: Annotated[str, annotations.JsonIgnore()] = ""
...
"""
from __future__ import annotations

import dataclasses
import enum
from typing import Any, Callable, Optional, Type, TypeVar

from typedesc.core import constants

__all__ = (
    "CanBeNull",
    "DataContract",
    "DataMember",
    "JsonConverter",
    "JsonExtensionData",
    "JsonIgnore",
    "JsonIgnoreCondition",
    "JsonPropertyName",
    "JsonSchema",
    "JsonSchemaType",
    "NotNull",
    "Obsolete",
    "Required",
    "annotate",
)

_T = TypeVar("_T", bound=type)


def annotate(*markers: Any) -> Callable[[_T], _T]:
    """Attach markers to a class definition.

    Markers attached to a class apply everywhere the class is used and are inherited
    by its subclasses.

    Examples
    --------
    >>> import enum
    >>> from typedesc import annotations, converters
    >>>
    >>> @annotations.annotate(annotations.JsonConverter(converters.StringEnumConverter))
    ... class Color(enum.Enum):
    ...     RED = 1
    ...
    >>> Color.__schema_attributes__
    (JsonConverter(converter_type=<class 'typedesc.converters.StringEnumConverter'>),)
    """

    def _annotate(cls: _T) -> _T:
        current = cls.__dict__.get(constants.ATTRIBUTES_NAME, ())
        setattr(cls, constants.ATTRIBUTES_NAME, (*current, *markers))
        return cls

    return _annotate


class JsonIgnoreCondition(str, enum.Enum):
    """When a member marked with :py:class:`JsonIgnore` is left out."""

    ALWAYS = "Always"
    NEVER = "Never"
    WHEN_WRITING_DEFAULT = "WhenWritingDefault"
    WHEN_WRITING_NULL = "WhenWritingNull"


@dataclasses.dataclass(frozen=True, slots=True)
class NotNull:
    """The value may never be ``None``."""


@dataclasses.dataclass(frozen=True, slots=True)
class CanBeNull:
    """The value may be ``None``."""


@dataclasses.dataclass(frozen=True, slots=True)
class Required:
    """The member must always be present."""


@dataclasses.dataclass(frozen=True, slots=True)
class JsonIgnore:
    """Leave the member out of the schema.

    Only :py:attr:`JsonIgnoreCondition.ALWAYS` (the default) excludes the member
    from the schema; the other conditions are runtime concerns of the serializer.
    """

    condition: Optional[JsonIgnoreCondition] = None


@dataclasses.dataclass(frozen=True, slots=True)
class JsonExtensionData:
    """The member collects any undeclared properties; it is never a property itself."""


@dataclasses.dataclass(frozen=True, slots=True)
class JsonPropertyName:
    """Serialize the member under an explicit name, ignoring any naming policy."""

    name: str


@dataclasses.dataclass(frozen=True, slots=True)
class JsonConverter:
    """Serialize the value with the given converter type."""

    converter_type: Type


@dataclasses.dataclass(frozen=True, slots=True)
class JsonSchema:
    """Describe the value with an explicit JSON kind and/or format."""

    kind: Optional[str] = None
    format: Optional[str] = None


@dataclasses.dataclass(frozen=True, slots=True)
class JsonSchemaType:
    """Describe the value as if it were declared with another type."""

    type: Any
    is_nullable: Optional[bool] = None


@dataclasses.dataclass(frozen=True, slots=True)
class DataContract:
    """Only members marked with :py:class:`DataMember` are serialized."""


@dataclasses.dataclass(frozen=True, slots=True)
class DataMember:
    """Opt a member into a :py:class:`DataContract`."""

    is_required: bool = False


@dataclasses.dataclass(frozen=True, slots=True)
class Obsolete:
    """The member is deprecated."""

    message: str = ""
