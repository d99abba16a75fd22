# flake8: noqa
# pragma: nocover
from __future__ import annotations

import sys
import types
from typing import (
    TYPE_CHECKING,
    Annotated,
    Any,
    Callable,
    ClassVar,
    Final,
    ForwardRef,
    Literal,
    Optional,
    Protocol,
    TypeGuard,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

PYTHON_VERSION = sys.version_info

if PYTHON_VERSION >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self  # type: ignore[assignment]

# Backported from 3.13, handles protocols declared with either module.
from typing_extensions import is_protocol

if PYTHON_VERSION >= (3, 14):
    import annotationlib

    def get_raw_annotations(obj: Any) -> dict:
        # Unresolvable names become ForwardRefs instead of raising.
        return annotationlib.get_annotations(
            obj, format=annotationlib.Format.FORWARDREF
        )

else:
    import inspect

    def get_raw_annotations(obj: Any) -> dict:
        return inspect.get_annotations(obj)


if TYPE_CHECKING:
    F = TypeVar("F", bound=Callable)

    def lru_cache(
        maxsize: Optional[int] = 128, typed: bool = False
    ) -> Callable[[F], F]: ...

else:
    import functools

    def lru_cache(maxsize=128, typed=False):
        """A :py:func:`functools.lru_cache` which tolerates unhashable arguments.

        Annotations may carry unhashable metadata (`Annotated[str, Marker()]`).
        Those calls skip the cache.
        """

        def decorator(func):
            cached = functools.lru_cache(maxsize=maxsize, typed=typed)(func)

            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                try:
                    return cached(*args, **kwargs)
                except TypeError:
                    return func(*args, **kwargs)

            wrapper.cache_info = cached.cache_info
            wrapper.cache_clear = cached.cache_clear
            return wrapper

        return decorator


if PYTHON_VERSION >= (3, 13):
    from typing import _eval_type

    def eval_type(t: Any, globalns: Any, localns: Any) -> Any:
        return _eval_type(t, globalns, localns, type_params=())

else:
    from typing import _eval_type as eval_type


UnionType = types.UnionType
NoneType = type(None)

__all__ = (
    "Annotated",
    "ClassVar",
    "Final",
    "ForwardRef",
    "Literal",
    "NoneType",
    "Protocol",
    "PYTHON_VERSION",
    "Self",
    "TypeGuard",
    "UnionType",
    "eval_type",
    "get_args",
    "get_origin",
    "get_raw_annotations",
    "is_protocol",
    "lru_cache",
)
