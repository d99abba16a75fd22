"""Contextual views of annotations and the members which declare them.

A :py:class:`ContextualType` pairs a resolved type with the markers attached at its
point of use, so the same class may be described differently as a member of two
different objects.

Examples
--------
>>> from typing import Annotated, Optional
>>> from typedesc import annotations, context
>>> provider = context.MetadataProvider()
>>> ctx = provider.contextualize(
...     Annotated[Optional[int], annotations.Required()], declared=True
... )
>>> ctx.type == Optional[int]
True
>>> ctx.context_attributes
(Required(),)
>>> ctx.nullability
<Nullability.NULLABLE: 'nullable'>
>>> ctx.generic_arguments[0].nullability
<Nullability.NOT_NULLABLE: 'not_nullable'>
"""
from __future__ import annotations

import dataclasses
import enum
import inspect
from typing import Any, Iterable, Iterator, Optional, Sequence, Tuple, Type, TypeVar

from typedesc import checks, util
from typedesc.compat import Annotated, Literal, get_origin
from typedesc.core import constants

__all__ = (
    "ContextualMember",
    "ContextualType",
    "MemberKind",
    "MetadataProvider",
    "Nullability",
)


class Nullability(str, enum.Enum):
    """What the declaration itself says about ``None``."""

    UNKNOWN = "unknown"
    NULLABLE = "nullable"
    NOT_NULLABLE = "not_nullable"


class MemberKind(str, enum.Enum):
    FIELD = "field"
    PROPERTY = "property"


@dataclasses.dataclass(frozen=True, slots=True)
class ContextualType:
    """A type as seen from the place it was used."""

    original_type: Any
    """The annotation exactly as it was declared."""
    type: Any
    """The annotation with :py:class:`typing.Annotated` and NewTypes stripped."""
    context_attributes: Tuple[Any, ...] = ()
    """The markers attached where the type was used."""
    nullability: Nullability = Nullability.UNKNOWN
    generic_arguments: Tuple[ContextualType, ...] = ()

    @property
    def origin(self) -> Any:
        return util.origin(self.type)

    @property
    def name(self) -> str:
        return util.get_name(self.type)


@dataclasses.dataclass(frozen=True, slots=True)
class ContextualMember:
    """A field or property declared on a class."""

    name: str
    declaring_type: Type
    kind: MemberKind
    contextual_type: ContextualType
    is_static: bool = False
    is_private: bool = False
    can_read: bool = True
    can_write: bool = True
    getter: Any = dataclasses.field(default=None, compare=False, repr=False)

    @property
    def is_field(self) -> bool:
        return self.kind is MemberKind.FIELD

    @property
    def is_property(self) -> bool:
        return self.kind is MemberKind.PROPERTY

    @property
    def attributes(self) -> Tuple[Any, ...]:
        return self.contextual_type.context_attributes

    @property
    def is_deprecated(self) -> bool:
        """Whether the getter was marked with ``typing_extensions.deprecated``."""
        return getattr(self.getter, constants.DEPRECATED_NAME, None) is not None


class MetadataProvider:
    """Build contextual types and members from Python's typing introspection.

    Parameters
    ----------
    strict_optional
        Whether an explicitly declared annotation which doesn't admit ``None`` is
        known to be non-nullable. This mirrors mypy's ``strict_optional`` and is the
        default. When disabled, only ``Optional`` annotations carry a nullability
        state; everything else is left to the reference-type policy.
    """

    __slots__ = ("strict_optional",)

    def __init__(self, *, strict_optional: bool = True):
        self.strict_optional = strict_optional

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(strict_optional={self.strict_optional!r})"
        )

    def contextualize(
        self,
        annotation: Any,
        attributes: Iterable[Any] = (),
        *,
        declared: bool = False,
    ) -> ContextualType:
        """Resolve an annotation into a :py:class:`ContextualType`.

        Parameters
        ----------
        annotation
            Any type annotation.
        attributes
            Markers attached where the annotation is used, before any found in
            :py:class:`typing.Annotated` metadata.
        declared
            Whether the annotation was explicitly written by the user (a member's
            hint, or an argument of one).
        """
        t, context = self._unwrap(annotation)
        context = (*attributes, *context)
        nullability = self._nullability(t, declared=declared)
        # The arguments of Optional[X] are X itself, so they see the same markers.
        inherited = context if checks.isnullablewrapper(t) else ()
        args = (
            *(
                self.contextualize(a, inherited, declared=declared)
                for a in self._arguments(t)
            ),
        )
        return ContextualType(
            original_type=annotation,
            type=t,
            context_attributes=context,
            nullability=nullability,
            generic_arguments=args,
        )

    @staticmethod
    def _unwrap(annotation: Any) -> Tuple[Any, Tuple[Any, ...]]:
        t = annotation
        context: Tuple[Any, ...] = ()
        while True:
            if get_origin(t) is Annotated:
                context = (*context, *t.__metadata__)
                t = t.__origin__
                continue
            if type(t) is TypeVar:
                t = util.normalize_typevar(t)
                continue
            if hasattr(t, "__supertype__"):
                t = util.resolve_supertype(t)
                continue
            return t, context

    def _nullability(self, t: Any, *, declared: bool) -> Nullability:
        if checks.isoptionaltype(t):
            return Nullability.NULLABLE
        # Any and object both admit None.
        if t is Any or t is object:
            return Nullability.UNKNOWN
        if declared and self.strict_optional:
            return Nullability.NOT_NULLABLE
        return Nullability.UNKNOWN

    @staticmethod
    def _arguments(t: Any) -> Iterator[Any]:
        if get_origin(t) is Literal:
            return
        for arg in util.get_args(t):
            # The parameter list of a Callable, or an unpacked ellipsis.
            if isinstance(arg, (list, tuple)) or arg is ...:
                continue
            yield arg

    def get_context_attributes(self, ctx: ContextualType) -> Tuple[Any, ...]:
        return ctx.context_attributes

    def get_type_attributes(self, t: Any) -> Tuple[Any, ...]:
        """Collect the markers attached to a class and its bases, most-derived first.

        Examples
        --------
        >>> from typedesc import annotations, context
        >>> @annotations.annotate(annotations.DataContract())
        ... class Base: ...
        ...
        >>> class Child(Base): ...
        ...
        >>> context.MetadataProvider().get_type_attributes(Child)
        (DataContract(),)
        """
        cls = util.origin(t)
        if not inspect.isclass(cls):
            return ()
        return (
            *(
                marker
                for c in inspect.getmro(cls)
                for marker in c.__dict__.get(constants.ATTRIBUTES_NAME, ())
            ),
        )

    def get_attributes(self, ctx: ContextualType) -> Tuple[Any, ...]:
        """The markers at the point of use, followed by those on the type itself."""
        return (
            *self.get_context_attributes(ctx),
            *self.get_type_attributes(ctx.type),
        )

    def get_nullability_state(self, ctx: ContextualType) -> Nullability:
        return ctx.nullability

    def get_generic_arguments(self, ctx: ContextualType) -> Tuple[ContextualType, ...]:
        return ctx.generic_arguments

    def get_members(self, t: Any) -> Tuple[ContextualMember, ...]:
        """Collect the fields and properties of a class, base classes first.

        Each class in the MRO contributes the members it declares itself, in
        declaration order. :py:class:`object` and the abstract classes of
        :py:mod:`typing` and :py:mod:`collections.abc` declare no members.

        Fields come from a class's own annotations; properties from its ``property``
        and ``functools.cached_property`` descriptors. A member re-declared by a
        subclass is reported once for each declaring class.

        Examples
        --------
        >>> import dataclasses
        >>> from typedesc import context
        >>>
        >>> @dataclasses.dataclass
        ... class Pet:
        ...     name: str
        ...
        ...     @property
        ...     def label(self) -> str:
        ...         return self.name.title()
        ...
        >>> [m.name for m in context.MetadataProvider().get_members(Pet)]
        ['name', 'label']
        """
        cls = util.origin(t)
        if not inspect.isclass(cls):
            return ()
        mro: Sequence[Type] = inspect.getmro(cls)
        return (
            *(
                member
                for c in reversed(mro)
                if c.__module__ not in constants.INTERFACE_MODULES
                and c is not object
                for member in self._declared_members(c)
            ),
        )

    def _declared_members(self, cls: Type) -> Iterator[ContextualMember]:
        properties = {
            name: value
            for name, value in cls.__dict__.items()
            if checks.isproperty(value)
        }
        for name, hint in util.get_annotations(cls).items():
            # A property of the same name shadows the annotation.
            if name in properties or isinstance(hint, dataclasses.InitVar):
                continue
            yield self._field(cls, name, hint)
        for name, descriptor in properties.items():
            yield self._property(cls, name, descriptor)

    def _field(self, cls: Type, name: str, hint: Any) -> ContextualMember:
        bare = hint.__origin__ if get_origin(hint) is Annotated else hint
        is_static = checks.isclassvartype(bare)
        is_final = checks.isfinal(bare)
        if is_static or is_final:
            args = util.get_args(bare)
            inner = args[0] if args else Any
            # Metadata attached outside the qualifier still applies to the field.
            hint = inner if bare is hint else Annotated[(inner, *hint.__metadata__)]
        is_private = name.startswith(constants.PRIVATE_PREFIX)
        return ContextualMember(
            name=name,
            declaring_type=cls,
            kind=MemberKind.FIELD,
            contextual_type=self.contextualize(hint, declared=True),
            is_static=is_static,
            is_private=is_private,
            can_read=not is_private,
            can_write=not (is_private or is_final),
        )

    def _property(self, cls: Type, name: str, descriptor: Any) -> ContextualMember:
        # cached_property stores its getter as `func` and is always writable.
        getter: Optional[Any] = getattr(descriptor, "fget", None) or getattr(
            descriptor, "func", None
        )
        has_setter = (
            not hasattr(descriptor, "fget") or getattr(descriptor, "fset") is not None
        )
        hints = util.get_annotations(getter) if getter is not None else {}
        declared = constants.RETURN_KEY in hints
        hint = hints.get(constants.RETURN_KEY, Any)
        is_private = name.startswith(constants.PRIVATE_PREFIX)
        return ContextualMember(
            name=name,
            declaring_type=cls,
            kind=MemberKind.PROPERTY,
            contextual_type=self.contextualize(hint, declared=declared),
            is_private=is_private,
            can_read=getter is not None and not is_private,
            can_write=has_setter and not is_private,
            getter=getter,
        )
