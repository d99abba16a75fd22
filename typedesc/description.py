from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: nocover
    from typedesc.context import ContextualMember, ContextualType

__all__ = (
    "Format",
    "JsonObjectType",
    "MemberDecision",
    "TypeDescription",
)


class JsonObjectType(str, enum.Enum):
    """The JSON kinds a type may be described as.

    :py:attr:`NONE` is reserved for dynamic values: a consumer should treat it as
    "anything" and emit no ``type`` at all.

    See Also
    --------
    `JSON Schema Types <https://json-schema.org/understanding-json-schema/reference/type.html>`_
    """

    NONE = "none"
    OBJECT = "object"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    FILE = "file"

    def __str__(self) -> str:
        return self.value

    def __repr__(self):
        return self.value.__repr__()


class Format(str, enum.Enum):
    """The format tags a description may carry."""

    INT32 = "int32"
    INT64 = "int64"
    DOUBLE = "double"
    FLOAT = "float"
    DECIMAL = "decimal"
    BYTE = "byte"
    BINARY = "binary"
    GUID = "guid"
    DTIME = "date-time"
    DATE = "date"
    TIME = "time"
    DURATION = "duration"
    URI = "uri"
    IPV4 = "ipv4"
    IPV6 = "ipv6"

    def __str__(self) -> str:
        return self.value

    def __repr__(self):
        return self.value.__repr__()


@dataclasses.dataclass(slots=True)
class TypeDescription:
    """The normalized JSON Schema description of a type."""

    kind: JsonObjectType
    format: Optional[str] = None
    is_nullable: bool = False
    is_enum_as_string: bool = False
    is_enum: bool = False
    is_dictionary: bool = False
    contextual_type: Optional[ContextualType] = dataclasses.field(
        default=None, compare=False, repr=False
    )

    def __post_init__(self):
        if self.kind is JsonObjectType.NONE and self.format is not None:
            raise ValueError(
                f"A dynamic description can't carry a format, got {self.format!r}."
            )

    @property
    def is_any(self) -> bool:
        """Whether a consumer should accept any JSON value."""
        return self.kind is JsonObjectType.NONE

    @property
    def is_complex_type(self) -> bool:
        """Whether this describes an object with named properties of its own."""
        return self.kind is JsonObjectType.OBJECT and not self.is_dictionary

    @classmethod
    def create(
        cls,
        contextual_type: ContextualType,
        kind: JsonObjectType,
        is_nullable: bool,
        format: Optional[str] = None,
    ) -> TypeDescription:
        return cls(
            kind=kind,
            format=format,
            is_nullable=is_nullable,
            contextual_type=contextual_type,
        )

    @classmethod
    def create_for_enumeration(
        cls,
        contextual_type: ContextualType,
        kind: JsonObjectType,
        is_nullable: bool,
    ) -> TypeDescription:
        return cls(
            kind=kind,
            is_nullable=is_nullable,
            is_enum=True,
            is_enum_as_string=kind is JsonObjectType.STRING,
            contextual_type=contextual_type,
        )

    @classmethod
    def create_for_dictionary(
        cls,
        contextual_type: ContextualType,
        kind: JsonObjectType,
        is_nullable: bool,
    ) -> TypeDescription:
        return cls(
            kind=kind,
            is_nullable=is_nullable,
            is_dictionary=True,
            contextual_type=contextual_type,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class MemberDecision:
    """The outcome of resolving a single member into a schema property."""

    name: str
    required: bool
    is_nullable: bool
    type_description: TypeDescription
    member: Optional[ContextualMember] = dataclasses.field(
        default=None, compare=False, repr=False
    )
