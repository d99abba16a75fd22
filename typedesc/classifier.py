"""Classify a contextual type into a JSON Schema type description.

Examples
--------
>>> import datetime
>>> from typing import List, Optional
>>> from typedesc import classifier, context
>>> provider = context.MetadataProvider()
>>> describe = classifier.TypeClassifier(provider).describe
>>> describe(provider.contextualize(datetime.datetime))
TypeDescription(kind='string', format='date-time', is_nullable=False, is_enum_as_string=False, is_enum=False, is_dictionary=False)
>>> describe(provider.contextualize(Optional[int])).is_nullable
True
>>> describe(provider.contextualize(List[int])).kind
'array'
"""
from __future__ import annotations

import ctypes
import datetime
import decimal
import fractions
import inspect
import io
import ipaddress
import types
import typing
import urllib.parse
import uuid
from typing import Any, Mapping, NamedTuple, Optional, Tuple

from typedesc import checks, util
from typedesc.compat import NoneType, get_origin, lru_cache
from typedesc.context import ContextualType, MetadataProvider, Nullability
from typedesc.description import Format, JsonObjectType, TypeDescription
from typedesc.settings import (
    GeneratorSettings,
    ReferenceTypeNullHandling,
    SchemaType,
)

__all__ = (
    "BINARY_NAMES",
    "NAMED_PRIMITIVES",
    "PRIMITIVES",
    "Primitive",
    "TypeClassifier",
)


class Primitive(NamedTuple):
    kind: JsonObjectType
    format: Optional[Format] = None


_BOOLEAN = Primitive(JsonObjectType.BOOLEAN)
_INTEGER = Primitive(JsonObjectType.INTEGER)
_INT32 = Primitive(JsonObjectType.INTEGER, Format.INT32)
_INT64 = Primitive(JsonObjectType.INTEGER, Format.INT64)
_UINT8 = Primitive(JsonObjectType.INTEGER, Format.BYTE)
_DOUBLE = Primitive(JsonObjectType.NUMBER, Format.DOUBLE)
_FLOAT = Primitive(JsonObjectType.NUMBER, Format.FLOAT)
_DECIMAL = Primitive(JsonObjectType.NUMBER, Format.DECIMAL)
_STRING = Primitive(JsonObjectType.STRING)
_DATETIME = Primitive(JsonObjectType.STRING, Format.DTIME)
_DURATION = Primitive(JsonObjectType.STRING, Format.DURATION)
_URI = Primitive(JsonObjectType.STRING, Format.URI)


def _ctypes_integer(t: type) -> Primitive:
    size, unsigned = ctypes.sizeof(t), t.__name__.startswith("c_u")
    if size == 1:
        return _UINT8 if unsigned else _INTEGER
    if size == 4 and not unsigned:
        return _INT32
    if size == 8:
        return _INT64
    return _INTEGER


PRIMITIVES: util.TypeMap[Primitive] = util.TypeMap(
    {
        bool: _BOOLEAN,
        int: _INTEGER,
        float: _DOUBLE,
        decimal.Decimal: _DECIMAL,
        fractions.Fraction: _DECIMAL,
        str: _STRING,
        type: _STRING,
        uuid.UUID: Primitive(JsonObjectType.STRING, Format.GUID),
        # `datetime` is a `date`; the MRO walk resolves it first.
        datetime.datetime: _DATETIME,
        datetime.date: Primitive(JsonObjectType.STRING, Format.DATE),
        datetime.time: Primitive(JsonObjectType.STRING, Format.TIME),
        datetime.timedelta: _DURATION,
        urllib.parse.ParseResult: _URI,
        urllib.parse.SplitResult: _URI,
        ipaddress.IPv4Address: Primitive(JsonObjectType.STRING, Format.IPV4),
        ipaddress.IPv6Address: Primitive(JsonObjectType.STRING, Format.IPV6),
        bytes: Primitive(JsonObjectType.STRING, Format.BYTE),
        bytearray: Primitive(JsonObjectType.STRING, Format.BYTE),
        memoryview: Primitive(JsonObjectType.STRING, Format.BYTE),
        ctypes.c_bool: _BOOLEAN,
        ctypes.c_float: _FLOAT,
        ctypes.c_double: _DOUBLE,
        ctypes.c_char: _STRING,
        ctypes.c_wchar: _STRING,
        **{
            t: _ctypes_integer(t)
            for t in (
                ctypes.c_byte,
                ctypes.c_ubyte,
                ctypes.c_short,
                ctypes.c_ushort,
                ctypes.c_int,
                ctypes.c_uint,
                ctypes.c_long,
                ctypes.c_ulong,
                ctypes.c_longlong,
                ctypes.c_ulonglong,
            )
        },
    }
)
"""Well-known classes and their JSON kind and format."""

NAMED_PRIMITIVES: Mapping[str, Primitive] = {
    "numpy.bool": _BOOLEAN,
    "numpy.bool_": _BOOLEAN,
    "numpy.int8": _INTEGER,
    "numpy.int16": _INTEGER,
    "numpy.uint16": _INTEGER,
    "numpy.uint32": _INTEGER,
    "numpy.int32": _INT32,
    "numpy.int64": _INT64,
    "numpy.uint64": _INT64,
    "numpy.uint8": _UINT8,
    "numpy.float32": _FLOAT,
    "numpy.float64": _DOUBLE,
    "numpy.datetime64": _DATETIME,
    "numpy.timedelta64": _DURATION,
    "arrow.arrow.Arrow": _DATETIME,
    "yarl.URL": _URI,
    "yarl._url.URL": _URI,
    "httpx.URL": _URI,
    "httpx._urls.URL": _URI,
    "furl.furl.furl": _URI,
    "pydantic.networks.AnyUrl": _URI,
}
"""Third-party classes, matched by their fully-qualified name."""

BINARY_NAMES = frozenset(("UploadFile", "FileStorage", "UploadedFile"))
"""Uploaded-file classes of the common web frameworks."""

_BINARY_BASES = (io.BufferedIOBase, io.RawIOBase)
_DYNAMIC = (Any, object)
_STRING_ENUM_CONVERTER = "StringEnumConverter"
_JSON_STRING_ENUM_CONVERTER = "typedesc.converters.JsonStringEnumConverter"


@lru_cache(maxsize=None)
def _get_primitive(t: type) -> Optional[Primitive]:
    return PRIMITIVES.get_by_parent(t, names=NAMED_PRIMITIVES)


def _explicit_kind(kind: Any) -> JsonObjectType:
    # An empty, "none" or unrecognized kind describes an object.
    try:
        kind = JsonObjectType(kind)
    except ValueError:
        return JsonObjectType.OBJECT
    return JsonObjectType.OBJECT if kind == JsonObjectType.NONE else kind


class TypeClassifier:
    """Describe a contextual type as a JSON kind, format and nullability.

    Classification is an ordered series of steps, the first step to produce a
    description wins. Subclasses may override a single step or re-order
    :py:attr:`steps` entirely.
    """

    __slots__ = ("provider",)

    steps: Tuple[str, ...] = (
        "_from_enumeration",
        "_from_primitive",
        "_from_binary",
        "_from_dynamic",
        "_from_nullable_wrapper",
        "_from_dictionary",
        "_from_sequence",
    )

    def __init__(self, provider: Optional[MetadataProvider] = None):
        self.provider = provider or MetadataProvider()

    def __repr__(self):
        return f"{self.__class__.__name__}(provider={self.provider!r})"

    def describe(
        self,
        ctx: ContextualType,
        null_handling: Optional[ReferenceTypeNullHandling] = None,
        settings: Optional[GeneratorSettings] = None,
    ) -> TypeDescription:
        """Describe a contextual type.

        Parameters
        ----------
        ctx
            The type to describe, with the markers attached where it was used.
        null_handling
            How to treat a reference type with no nullability information. Defaults
            to the policy of `settings`.
        settings
            The configuration of the current run.
        """
        settings = settings or GeneratorSettings()
        if null_handling is None:
            null_handling = settings.default_reference_type_null_handling
        # Nullability is always computed on the type as declared.
        is_nullable = self.is_nullable(ctx, null_handling)
        attributes = self.provider.get_attributes(ctx)

        substitute = util.first_assignable_to_name(attributes, "JsonSchemaType")
        if util.get_option(substitute, "type") is not None:
            ctx = self.provider.contextualize(substitute.type)
            attributes = self.provider.get_attributes(ctx)
            forced = util.get_option(substitute, "is_nullable")
            if forced is not None:
                is_nullable = forced

        explicit = util.first_assignable_to_name(attributes, "JsonSchema")
        if explicit is not None:
            kind = _explicit_kind(util.get_option(explicit, "kind"))
            format = util.get_option(explicit, "format") or None
            return TypeDescription.create(ctx, kind, is_nullable, format=format)

        for step in self.steps:
            description = getattr(self, step)(
                ctx, is_nullable, null_handling, settings
            )
            if description is not None:
                return description
        return TypeDescription.create(ctx, JsonObjectType.OBJECT, is_nullable)

    def is_nullable(
        self, ctx: ContextualType, null_handling: ReferenceTypeNullHandling
    ) -> bool:
        """Decide whether a contextual type admits ``None``.

        Explicit ``NotNull``/``CanBeNull`` markers win, then the nullability of the
        declaration itself. Otherwise value types and :py:class:`str` are
        non-nullable, and any other type is nullable unless `null_handling` says
        otherwise.
        """
        attributes = self.provider.get_context_attributes(ctx)
        if util.first_assignable_to_name(attributes, "NotNull") is not None:
            return False
        if util.first_assignable_to_name(attributes, "CanBeNull") is not None:
            return True
        state = self.provider.get_nullability_state(ctx)
        if state is not Nullability.UNKNOWN:
            return state is Nullability.NULLABLE
        t = ctx.origin
        if checks.issubclass(t, str) or checks.isvaluetype(t):
            return False
        return null_handling is not ReferenceTypeNullHandling.NOT_NULL

    def is_string_enum(
        self, ctx: ContextualType, settings: Optional[GeneratorSettings] = None
    ) -> bool:
        """Whether an enum is serialized by the name of its members.

        This is the case when a ``JsonConverter`` marker names a converter which is,
        or inherits from, a ``StringEnumConverter`` (from any library) or
        :py:class:`typedesc.converters.JsonStringEnumConverter`.
        """
        if not checks.isenumtype(ctx.origin):
            return False
        converter = util.first_assignable_to_name(
            self.provider.get_attributes(ctx), "JsonConverter"
        )
        converter_type = util.get_option(converter, "converter_type")
        if converter_type is None:
            return False
        return util.is_assignable_to_name(
            converter_type, _STRING_ENUM_CONVERTER
        ) or util.is_assignable_to_name(
            converter_type, _JSON_STRING_ENUM_CONVERTER, util.NameStyle.FULL_NAME
        )

    def is_binary(self, ctx: ContextualType) -> bool:
        """Whether a type is an uploaded file or a stream of bytes."""
        t = ctx.type
        if t is typing.BinaryIO:
            return True
        if get_origin(t) is typing.IO:
            return util.get_args(t) == (bytes,)
        cls = ctx.origin
        if not inspect.isclass(cls):
            return False
        if checks.issubclass(cls, _BINARY_BASES):
            return True
        return any(util.is_assignable_to_name(cls, name) for name in BINARY_NAMES)

    def _from_enumeration(
        self,
        ctx: ContextualType,
        is_nullable: bool,
        null_handling: ReferenceTypeNullHandling,
        settings: GeneratorSettings,
    ) -> Optional[TypeDescription]:
        if not checks.isenumtype(ctx.origin):
            return None
        kind = (
            JsonObjectType.STRING
            if self.is_string_enum(ctx, settings)
            else JsonObjectType.INTEGER
        )
        return TypeDescription.create_for_enumeration(ctx, kind, is_nullable)

    def _from_primitive(
        self,
        ctx: ContextualType,
        is_nullable: bool,
        null_handling: ReferenceTypeNullHandling,
        settings: GeneratorSettings,
    ) -> Optional[TypeDescription]:
        if not inspect.isclass(ctx.origin):
            return None
        primitive = _get_primitive(ctx.origin)
        if primitive is None:
            return None
        return TypeDescription.create(
            ctx, primitive.kind, is_nullable, format=primitive.format
        )

    def _from_binary(
        self,
        ctx: ContextualType,
        is_nullable: bool,
        null_handling: ReferenceTypeNullHandling,
        settings: GeneratorSettings,
    ) -> Optional[TypeDescription]:
        if not self.is_binary(ctx):
            return None
        if settings.schema_type is SchemaType.SWAGGER2:
            return TypeDescription.create(ctx, JsonObjectType.FILE, is_nullable)
        return TypeDescription.create(
            ctx, JsonObjectType.STRING, is_nullable, format=Format.BINARY
        )

    def _from_dynamic(
        self,
        ctx: ContextualType,
        is_nullable: bool,
        null_handling: ReferenceTypeNullHandling,
        settings: GeneratorSettings,
    ) -> Optional[TypeDescription]:
        if ctx.type in _DYNAMIC or checks.issubclass(
            ctx.origin, types.SimpleNamespace
        ):
            return TypeDescription.create(ctx, JsonObjectType.NONE, is_nullable)
        return None

    def _from_nullable_wrapper(
        self,
        ctx: ContextualType,
        is_nullable: bool,
        null_handling: ReferenceTypeNullHandling,
        settings: GeneratorSettings,
    ) -> Optional[TypeDescription]:
        if not checks.isnullablewrapper(ctx.type):
            return None
        wrapped = next(
            a
            for a in self.provider.get_generic_arguments(ctx)
            if a.type is not NoneType
        )
        # Python flattens nested optionals, so this recurses exactly once.
        description = self.describe(wrapped, null_handling, settings)
        description.is_nullable = True
        return description

    def _from_dictionary(
        self,
        ctx: ContextualType,
        is_nullable: bool,
        null_handling: ReferenceTypeNullHandling,
        settings: GeneratorSettings,
    ) -> Optional[TypeDescription]:
        if not checks.isdictionarytype(ctx.type):
            return None
        return TypeDescription.create_for_dictionary(
            ctx, JsonObjectType.OBJECT, is_nullable
        )

    def _from_sequence(
        self,
        ctx: ContextualType,
        is_nullable: bool,
        null_handling: ReferenceTypeNullHandling,
        settings: GeneratorSettings,
    ) -> Optional[TypeDescription]:
        if not checks.issequencetype(ctx.type):
            return None
        return TypeDescription.create(ctx, JsonObjectType.ARRAY, is_nullable)
