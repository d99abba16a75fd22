from __future__ import annotations

import enum
import inspect
import sys
import typing
import warnings
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from typedesc.compat import (
    ForwardRef,
    eval_type,
    get_args as _get_args,
    get_origin,
    get_raw_annotations,
    lru_cache,
)

__all__ = (
    "NameStyle",
    "TypeMap",
    "first_assignable_to_name",
    "get_annotations",
    "get_args",
    "get_full_name",
    "get_name",
    "get_option",
    "get_qualname",
    "is_assignable_to_name",
    "normalize_typevar",
    "origin",
    "resolve_supertype",
)


class NameStyle(str, enum.Enum):
    """How a class name is compared in a name-based capability check."""

    NAME = "name"
    """The simple class name, i.e., ``StringEnumConverter``."""
    FULL_NAME = "full_name"
    """The module-qualified class name.

    i.e., ``typedesc.converters.JsonStringEnumConverter``.
    """


@lru_cache(maxsize=None)
def resolve_supertype(annotation: Type[Any]) -> Any:
    """Get the highest-order supertype for a NewType.

    Examples
    --------
    >>> from typedesc import util
    >>> from typing import NewType
    >>> UserID = NewType("UserID", int)
    >>> AdminID = NewType("AdminID", UserID)
    >>> util.resolve_supertype(AdminID)
    <class 'int'>
    """
    while hasattr(annotation, "__supertype__"):
        annotation = annotation.__supertype__
    return annotation


@lru_cache(maxsize=None)
def normalize_typevar(tvar: TypeVar) -> Any:
    """Reduce a TypeVar to a simple type."""
    if tvar.__bound__:
        return tvar.__bound__
    elif tvar.__constraints__:
        return Union[tvar.__constraints__]
    return Any


def origin(annotation: Any) -> Any:
    """Get the runtime class behind an annotation, if there is one.

    Examples
    --------
    >>> from typedesc import util
    >>> from typing import Dict, Mapping
    >>> util.origin(Dict[str, int])
    <class 'dict'>
    >>> util.origin(Mapping[str, int])
    <class 'collections.abc.Mapping'>
    >>> util.origin(int)
    <class 'int'>
    """
    return get_origin(annotation) or annotation


def get_args(annotation: Any) -> Tuple[Any, ...]:
    """Get the args supplied to an annotation, reducing any :py:class:`TypeVar`."""
    return (
        *(
            normalize_typevar(a) if type(a) is TypeVar else a
            for a in _get_args(annotation)
        ),
    )


@lru_cache(maxsize=2000, typed=True)
def get_name(obj: Union[Type, ForwardRef, Callable]) -> str:
    """Safely retrieve the name of either a standard object or a type annotation.

    Examples
    --------
    >>> from typedesc import util
    >>> from typing import Dict, Any
    >>> util.get_name(Dict)
    'Dict'
    >>> util.get_name(Dict[str, str])
    'Dict'
    >>> util.get_name(Any)
    'Any'
    >>> util.get_name(dict)
    'dict'
    """
    strobj = get_qualname(obj)
    return strobj.rsplit(".")[-1]


@lru_cache(maxsize=None)
def get_qualname(obj: Union[Type, ForwardRef, Callable]) -> str:
    """Safely retrieve the qualname of either a standard object or a type annotation.

    Examples
    --------
    >>> from typedesc import util
    >>> from typing import Dict, Any
    >>> util.get_qualname(Dict)
    'typing.Dict'
    >>> util.get_qualname(Dict[str, str])
    'typing.Dict'
    >>> util.get_qualname(Any)
    'typing.Any'
    >>> util.get_qualname(dict)
    'dict'
    """
    strobj = str(obj)
    if isinstance(obj, ForwardRef):
        strobj = str(obj.__forward_arg__)
    isgeneric = (
        strobj.startswith("typing.")
        or strobj.startswith("typing_extensions.")
        or "[" in strobj
    )
    # We got a typing thing.
    if isgeneric:
        # If this is a subscripted generic we should clean that up.
        return strobj.split("[")[0]
    # Easy-ish path, use name magix
    if hasattr(obj, "__qualname__") and obj.__qualname__:  # type: ignore
        qualname = obj.__qualname__  # type: ignore
        if "<locals>" in qualname:
            return qualname.rsplit(".")[-1]
        return qualname
    if hasattr(obj, "__name__") and obj.__name__:  # type: ignore
        return obj.__name__  # type: ignore
    return strobj


def get_full_name(t: Type) -> str:
    """Get the module-qualified name of a class.

    Examples
    --------
    >>> import collections
    >>> from typedesc import util
    >>> util.get_full_name(collections.OrderedDict)
    'collections.OrderedDict'
    >>> util.get_full_name(int)
    'int'
    """
    module = getattr(t, "__module__", None)
    qualname = get_qualname(t)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"


def _matches(t: Type, name: str, style: NameStyle) -> bool:
    if style is NameStyle.FULL_NAME:
        return get_full_name(t) == name
    return getattr(t, "__name__", None) == name


def is_assignable_to_name(
    t: Any, name: str, style: NameStyle = NameStyle.NAME
) -> bool:
    """Check whether a class, or any of its bases, carries the given name.

    Instances are checked through their class. This lets us recognize markers and
    converters from any library without importing it.

    Examples
    --------
    >>> from typedesc import util
    >>> class StringEnumConverter: ...
    ...
    >>> class Lowercase(StringEnumConverter): ...
    ...
    >>> util.is_assignable_to_name(Lowercase, "StringEnumConverter")
    True
    >>> util.is_assignable_to_name(Lowercase(), "StringEnumConverter")
    True
    >>> util.is_assignable_to_name(int, "StringEnumConverter")
    False
    """
    cls = t if inspect.isclass(t) else type(t)
    try:
        mro = inspect.getmro(cls)
    except (AttributeError, TypeError):
        return False
    return any(_matches(c, name, style) for c in mro)


def first_assignable_to_name(
    objects: Iterable[Any], name: str, style: NameStyle = NameStyle.NAME
) -> Optional[Any]:
    """Locate the first object assignable to the given class name, if any."""
    return next(
        (o for o in objects if is_assignable_to_name(o, name, style)),
        None,
    )


def get_option(marker: Any, name: str, default: Any = None) -> Any:
    """Get a named option of a marker, if the marker is an instance which has it.

    Markers may be attached as bare classes, in which case every option is left at
    the given default.

    Examples
    --------
    >>> from typedesc import annotations, util
    >>> util.get_option(annotations.JsonPropertyName("id"), "name")
    'id'
    >>> util.get_option(annotations.JsonPropertyName, "name") is None
    True
    """
    if marker is None or inspect.isclass(marker):
        return default
    return getattr(marker, name, default)


VT = TypeVar("VT")


class TypeMap(Dict[Type, VT]):
    """A mapping of Type -> value."""

    def get_by_parent(
        self,
        t: Type,
        default: VT = None,
        *,
        names: Optional[Mapping[str, VT]] = None,
    ) -> Optional[VT]:
        """Traverse the MRO of a class, return the value for the nearest parent.

        If `names` is given, each class in the MRO is also looked up by its
        fully-qualified name, so third-party classes may be mapped without importing
        them.
        """
        if t in self:
            return self[t]
        if names and get_full_name(t) in names:
            return names[get_full_name(t)]

        # Get the MRO - the first value is the given type so skip it
        try:
            mro = inspect.getmro(t)[1:]
        except (AttributeError, TypeError):
            return default
        for ptype in mro:
            if ptype in self:
                return self[ptype]
            if names and get_full_name(ptype) in names:
                return names[get_full_name(ptype)]

        return default


def _module_namespace(obj: Any) -> Dict[str, Any]:
    namespace: Dict[str, Any] = {"typing": typing}
    module = sys.modules.get(getattr(obj, "__module__", None) or "")
    if module is not None:
        namespace.update(module.__dict__)
    if inspect.isclass(obj):
        namespace.setdefault(obj.__name__, obj)
    return namespace


def get_annotations(obj: Union[Type, Callable]) -> Dict[str, Any]:
    """Get the evaluated annotations declared directly on a class or callable.

    Unlike :py:func:`typing.get_type_hints`, inherited annotations are not merged in
    and :py:class:`typing.Annotated` metadata is preserved.
    """
    try:
        return inspect.get_annotations(obj, eval_str=True)
    except (NameError, TypeError, SyntaxError):
        raw = get_raw_annotations(obj)
    namespace = _module_namespace(obj)
    is_class = inspect.isclass(obj)
    annotations = {}
    for name, value in raw.items():
        where = f"{get_qualname(obj)}.{name}"
        if isinstance(value, str):
            value = _eval_annotation(value, namespace, where, is_class)
        elif isinstance(value, ForwardRef):
            warnings.warn(
                f"Couldn't evaluate type {value!r} for {where}: unresolved reference."
            )
        annotations[name] = value
    return annotations


def _eval_annotation(
    value: str, namespace: Dict[str, Any], where: str, is_class: bool = False
) -> Any:
    try:
        ref = ForwardRef(value, is_argument=False, is_class=is_class)
        return eval_type(ref, namespace, None)
    except NameError:
        # We leave the unresolved reference in place.
        warnings.warn(
            f"Couldn't evaluate type {value!r} for {where}: unresolved reference."
        )
        return ref
    except (TypeError, SyntaxError) as e:
        warnings.warn(f"Couldn't evaluate type {value!r} for {where}: {e}")
        return Any
