import dataclasses
import enum
import functools
import typing

import typing_extensions

from typedesc import annotations, converters


class Color(enum.Enum):
    RED = 1
    GREEN = 2


class Priority(enum.IntEnum):
    LOW = 1
    HIGH = 2


@annotations.annotate(annotations.JsonConverter(converters.StringEnumConverter))
class Shade(enum.Enum):
    LIGHT_GRAY = "light"
    DARK_GRAY = "dark"


class StringEnumConverter:
    """A converter from some other serialization library."""


class LowercaseEnumConverter(StringEnumConverter):
    ...


class JsonStringEnumConverter:
    """Same simple name as ours, different fully-qualified name."""


class Registry(dict):
    ...


class Items(list):
    ...


class Stream:
    """Iterable without being a sequence of any builtin kind."""

    def __iter__(self):
        return iter(())


class AsyncStream:
    def __aiter__(self):
        return self

    async def __anext__(self):
        raise StopAsyncIteration


class UploadFile:
    ...


class ImageUpload(UploadFile):
    ...


@dataclasses.dataclass
class NotNull:
    """A nullability marker from another library. It isn't hashable."""


@dataclasses.dataclass
class Tagged:
    name: typing.Annotated[typing.Optional[str], NotNull()]
    tags: typing.List[typing.Annotated[str, NotNull()]]
    limit: typing.ClassVar[typing.Annotated[int, NotNull()]] = 10


@dataclasses.dataclass
class Pet:
    id: typing.Annotated[int, annotations.Required()]
    nickname: typing.Optional[str] = None


@dataclasses.dataclass
class Base:
    name: str


@dataclasses.dataclass
class Derived(Base):
    name: typing.Optional[str]
    age: int = 0


@dataclasses.dataclass
class Renamed:
    FooBar: typing.Annotated[str, annotations.JsonPropertyName("foo_bar")]
    created_at: str = ""


@dataclasses.dataclass
class Ignored:
    id: int
    secret: typing.Annotated[str, annotations.JsonIgnore()] = ""
    always: typing.Annotated[
        str, annotations.JsonIgnore(annotations.JsonIgnoreCondition.ALWAYS)
    ] = ""
    when_null: typing.Annotated[
        typing.Optional[str],
        annotations.JsonIgnore(annotations.JsonIgnoreCondition.WHEN_WRITING_NULL),
    ] = None
    extra: typing.Annotated[
        typing.Dict[str, typing.Any], annotations.JsonExtensionData()
    ] = dataclasses.field(default_factory=dict)


class Members:
    count: typing.ClassVar[int] = 0
    _cache: dict
    public: str
    limit: typing.Final[int] = 10

    def __init__(self):
        self._name = ""
        self._cache = {}
        self.public = ""

    @property
    def read_only(self) -> str:
        return self._name

    @property
    def read_write(self) -> typing.Optional[str]:
        return self._name

    @read_write.setter
    def read_write(self, value: typing.Optional[str]):
        self._name = value or ""

    @property
    def opted_in(self) -> typing.Annotated[str, annotations.DataMember()]:
        return self._name

    @functools.cached_property
    def computed(self) -> int:
        return 1

    @property
    def _hidden(self) -> str:
        return self._name

    @_hidden.setter
    def _hidden(self, value: str):
        self._name = value


@annotations.annotate(annotations.DataContract())
@dataclasses.dataclass
class Contract:
    id: typing.Annotated[int, annotations.DataMember(is_required=True)]
    name: typing.Annotated[str, annotations.DataMember()]
    internal: str = ""


@dataclasses.dataclass
class Loose:
    id: typing.Annotated[int, annotations.DataMember(is_required=True)]
    note: str = ""


class Legacy:
    @property
    @typing_extensions.deprecated("Use `name`.")
    def title(self) -> str:
        return ""

    @title.setter
    def title(self, value: str): ...

    @property
    def name(self) -> str:
        return ""

    @name.setter
    def name(self, value: str): ...

    @property
    def code(self) -> typing.Annotated[str, annotations.Obsolete()]:
        return ""

    @code.setter
    def code(self, value: str): ...


class Shape(typing.Protocol):
    name: str


class Circle(Shape, typing.Protocol):
    name: typing.Optional[str]
    radius: float
