from __future__ import annotations

import builtins
import collections
import collections.abc
import datetime
import decimal
import enum
import fractions
import inspect
import numbers
import uuid
from typing import Any, Optional, Tuple, Type, TypeVar, Union

from typedesc import util
from typedesc.compat import (
    ClassVar,
    Final,
    NoneType,
    TypeGuard,
    UnionType,
    get_origin,
    is_protocol,
    lru_cache,
)
from typedesc.core import constants

ObjectT = TypeVar("ObjectT")

__all__ = (
    "VALUE_TYPES",
    "ObjectT",
    "isasynciterabletype",
    "isclassvartype",
    "isdictionarytype",
    "isenumtype",
    "isfinal",
    "isinterface",
    "isiterabletype",
    "isnullablewrapper",
    "isoptionaltype",
    "isproperty",
    "issequencetype",
    "issubclass",
    "isuniontype",
    "isvaluetype",
    "get_concrete_base",
)


# Types which behave as immutable scalar values: they have no "unset" state.
VALUE_TYPES = frozenset(
    (
        bool,
        int,
        float,
        complex,
        decimal.Decimal,
        fractions.Fraction,
        numbers.Number,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        enum.Enum,
    )
)
VALUE_TYPES_TUPLE = tuple(VALUE_TYPES)

# Standard-library specializations of dict. Their base already implements Mapping,
#   so the most-derived rule below would otherwise reject them.
WELL_KNOWN_DICTIONARIES = frozenset(
    (collections.OrderedDict, collections.defaultdict, collections.Counter)
)


_issubclass = builtins.issubclass


def issubclass(o: Type[Any], t: Union[Type, Tuple[Type, ...]]) -> bool:
    """A safer subclass check...

    Validates that `t` and/or `o` are classes.

    Examples
    --------
    >>> from typedesc import checks
    >>> class MyStr(str): ...
    ...
    >>> checks.issubclass(MyStr, str)
    True
    >>> checks.issubclass(MyStr(), str)
    False
    >>> checks.issubclass(MyStr, str())
    False
    """
    if not inspect.isclass(o):
        return False
    if isinstance(t, tuple):
        if not all(inspect.isclass(x) for x in t):
            return False
    elif not inspect.isclass(t):
        return False
    try:
        return _issubclass(o, t)
    except TypeError:
        return False


@lru_cache(maxsize=None)
def isuniontype(obj: Type[ObjectT]) -> TypeGuard[Union]:
    """Test whether an annotation is a :py:class:`typing.Union` or a ``X | Y`` union."""
    return get_origin(obj) in (Union, UnionType)


@lru_cache(maxsize=None)
def isoptionaltype(obj: Type[ObjectT]) -> TypeGuard[Optional]:
    """Test whether an annotation is :py:class`typing.Optional`, or can be treated as.

    :py:class:`typing.Optional` is an alias for `typing.Union[<T>, None]`, so both are
    "optional". ``None`` on its own is optional as well.

    Examples
    --------
    >>> from typedesc import checks
    >>> from typing import Optional, Union, Dict
    >>> checks.isoptionaltype(Optional[str])
    True
    >>> checks.isoptionaltype(Union[str, int, None])
    True
    >>> checks.isoptionaltype(int | None)
    True
    >>> checks.isoptionaltype(Dict[str, None])
    False
    """
    if obj in constants.NULLABLES:
        return True
    return isuniontype(obj) and NoneType in util.get_args(obj)


@lru_cache(maxsize=None)
def isnullablewrapper(obj: Type[ObjectT]) -> bool:
    """Test whether an annotation wraps exactly one type with ``None``.

    Examples
    --------
    >>> from typedesc import checks
    >>> from typing import Optional, Union
    >>> checks.isnullablewrapper(Optional[int])
    True
    >>> checks.isnullablewrapper(str | None)
    True
    >>> checks.isnullablewrapper(Union[str, int, None])
    False
    >>> checks.isnullablewrapper(int)
    False
    """
    if not isuniontype(obj):
        return False
    args = util.get_args(obj)
    return len(args) == 2 and NoneType in args


@lru_cache(maxsize=None)
def isclassvartype(obj: Type[ObjectT]) -> TypeGuard[ClassVar]:
    """Test whether an annotation is a ClassVar annotation.

    Examples
    --------
    >>> from typedesc import checks
    >>> from typing import ClassVar
    >>> checks.isclassvartype(ClassVar[str])
    True
    >>> checks.isclassvartype(ClassVar)
    True
    >>> checks.isclassvartype(str)
    False
    """
    return obj is ClassVar or get_origin(obj) is ClassVar


@lru_cache(maxsize=None)
def isfinal(obj: Type[ObjectT]) -> bool:
    """Test whether an annotation is :py:class:`typing.Final`."""
    return obj is Final or get_origin(obj) is Final


@lru_cache(maxsize=None)
def isenumtype(obj: Type[ObjectT]) -> TypeGuard[Type[enum.Enum]]:
    """Test whether this annotation is a subclass of :py:class:`enum.Enum`

    Examples
    --------
    >>> from typedesc import checks
    >>> import enum
    >>>
    >>> class FooNum(enum.Enum): ...
    ...
    >>> checks.isenumtype(FooNum)
    True
    """
    return issubclass(obj, enum.Enum)


@lru_cache(maxsize=None)
def isvaluetype(obj: Type[ObjectT]) -> bool:
    """Test whether this annotation is a scalar value-type.

    Examples
    --------
    >>> import datetime
    >>> from typedesc import checks
    >>> checks.isvaluetype(int)
    True
    >>> checks.isvaluetype(datetime.date)
    True
    >>> checks.isvaluetype(str)
    False
    >>> checks.isvaluetype(list)
    False
    """
    return issubclass(util.origin(obj), VALUE_TYPES_TUPLE)


def isproperty(obj: Any) -> bool:
    return obj.__class__.__name__ in {"property", "cached_property"}


@lru_cache(maxsize=None)
def isinterface(obj: Type[ObjectT]) -> bool:
    """Test whether a class only declares a capability.

    ABCs from :py:mod:`collections.abc` and :py:mod:`typing`, protocols and
    :py:class:`object` itself describe *what* an object can do, not what it *is*.

    Examples
    --------
    >>> import collections.abc
    >>> from typedesc import checks
    >>> checks.isinterface(collections.abc.Mapping)
    True
    >>> checks.isinterface(dict)
    False
    """
    if obj is object:
        return True
    if getattr(obj, "__module__", None) in constants.INTERFACE_MODULES:
        return True
    return is_protocol(obj)


@lru_cache(maxsize=None)
def get_concrete_base(obj: Type[ObjectT]) -> Optional[Type]:
    """Get the nearest base class which is not an interface, if any.

    Examples
    --------
    >>> import collections
    >>> from typedesc import checks
    >>> checks.get_concrete_base(collections.OrderedDict)
    <class 'dict'>
    >>> checks.get_concrete_base(dict) is None
    True
    """
    try:
        mro = inspect.getmro(obj)
    except (AttributeError, TypeError):
        return None
    return next((b for b in mro[1:] if not isinterface(b)), None)


def _introduces(obj: Type[ObjectT], capability: Type) -> bool:
    # Only the most-derived class which introduces a capability counts.
    if not issubclass(obj, capability):
        return False
    base = get_concrete_base(obj)
    return base is None or not issubclass(base, capability)


@lru_cache(maxsize=None)
def isdictionarytype(obj: Type[ObjectT]) -> bool:
    """Test whether this annotation is a dictionary of keys to values.

    Examples
    --------
    >>> import collections
    >>> from typing import Dict, Mapping
    >>> from typedesc import checks
    >>> checks.isdictionarytype(Dict[str, int])
    True
    >>> checks.isdictionarytype(Mapping[str, int])
    True
    >>> checks.isdictionarytype(collections.OrderedDict)
    True
    >>> class Registry(dict): ...
    ...
    >>> checks.isdictionarytype(Registry)
    False
    """
    t = util.origin(obj)
    if t in WELL_KNOWN_DICTIONARIES:
        return True
    return _introduces(t, collections.abc.Mapping)


@lru_cache(maxsize=None)
def isiterabletype(obj: Type[ObjectT]) -> bool:
    """Test whether this annotation introduces :py:class:`collections.abc.Iterable`."""
    return _introduces(util.origin(obj), collections.abc.Iterable)


@lru_cache(maxsize=None)
def isasynciterabletype(obj: Type[ObjectT]) -> bool:
    """Test whether this annotation introduces an async iterable."""
    return _introduces(util.origin(obj), collections.abc.AsyncIterable)


@lru_cache(maxsize=None)
def issequencetype(obj: Type[ObjectT]) -> bool:
    """Test whether this annotation is a sequence of values.

    Dictionaries are never sequences, even though they are iterable.

    Examples
    --------
    >>> from typing import AsyncIterator, Dict, List
    >>> from typedesc import checks
    >>> checks.issequencetype(List[int])
    True
    >>> checks.issequencetype(AsyncIterator[int])
    True
    >>> checks.issequencetype(Dict[str, int])
    False
    >>> class Items(list): ...
    ...
    >>> checks.issequencetype(Items)
    False
    """
    if isdictionarytype(obj):
        return False
    return isiterabletype(obj) or isasynciterabletype(obj)

