from __future__ import annotations

from typing import Any, Optional, Tuple, Type, Union

from typedesc import converters
from typedesc.assembly import DictSchemaAssembler, SchemaAssembler, SchemaT
from typedesc.assembly import generate_properties as _generate_properties
from typedesc.classifier import TypeClassifier
from typedesc.context import ContextualType, MetadataProvider
from typedesc.description import MemberDecision, TypeDescription
from typedesc.properties import PropertyResolver
from typedesc.settings import GeneratorSettings, ReferenceTypeNullHandling

__all__ = ("ReflectionService",)


class ReflectionService:
    """The single entry point for describing types and their properties.

    Every method accepts either a :py:class:`~typedesc.context.ContextualType` or a
    plain annotation, which is contextualized as a declared annotation.

    Examples
    --------
    >>> import uuid
    >>> from typing import Optional
    >>> from typedesc.service import ReflectionService
    >>> service = ReflectionService()
    >>> description = service.describe(Optional[uuid.UUID])
    >>> description.kind, description.format, description.is_nullable
    ('string', 'guid', True)
    """

    __slots__ = ("provider", "classifier", "resolver", "settings")

    def __init__(
        self,
        settings: Optional[GeneratorSettings] = None,
        *,
        provider: Optional[MetadataProvider] = None,
    ):
        self.settings = settings or GeneratorSettings()
        self.provider = provider or MetadataProvider()
        self.classifier = TypeClassifier(self.provider)
        self.resolver = PropertyResolver(self.classifier)

    def __repr__(self):
        return (
            f"{self.__class__.__name__}"
            f"(settings={self.settings!r}, provider={self.provider!r})"
        )

    def contextualize(self, annotation: Any) -> ContextualType:
        if isinstance(annotation, ContextualType):
            return annotation
        return self.provider.contextualize(annotation, declared=True)

    def describe(
        self,
        annotation: Union[ContextualType, Any],
        null_handling: Optional[ReferenceTypeNullHandling] = None,
        settings: Optional[GeneratorSettings] = None,
    ) -> TypeDescription:
        """Describe an annotation as a JSON kind, format and nullability."""
        settings = settings or self.settings
        return self.classifier.describe(
            self.contextualize(annotation), null_handling, settings
        )

    def is_nullable(
        self,
        annotation: Union[ContextualType, Any],
        null_handling: Optional[ReferenceTypeNullHandling] = None,
    ) -> bool:
        if null_handling is None:
            null_handling = self.settings.default_reference_type_null_handling
        return self.classifier.is_nullable(
            self.contextualize(annotation), null_handling
        )

    def is_string_enum(
        self,
        annotation: Union[ContextualType, Any],
        settings: Optional[GeneratorSettings] = None,
    ) -> bool:
        return self.classifier.is_string_enum(
            self.contextualize(annotation), settings or self.settings
        )

    def resolve_properties(
        self, t: Type, settings: Optional[GeneratorSettings] = None
    ) -> Tuple[MemberDecision, ...]:
        """Resolve the members of `t` into ordered property decisions."""
        return self.resolver.resolve(t, settings or self.settings)

    def generate_properties(
        self,
        t: Type,
        schema: Optional[SchemaT] = None,
        settings: Optional[GeneratorSettings] = None,
        assembler: Optional[SchemaAssembler] = None,
    ) -> SchemaT:
        """Resolve the members of `t`, then add them to `schema` as properties."""
        settings = settings or self.settings
        return _generate_properties(
            t,
            {} if schema is None else schema,
            settings,
            self.resolver,
            assembler or DictSchemaAssembler(settings),
        )

    def convert_enum_value(
        self, value: Any, settings: Optional[GeneratorSettings] = None
    ) -> str:
        return converters.convert_enum_value(value, settings or self.settings)
