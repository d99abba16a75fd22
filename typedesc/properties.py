from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Type

from typedesc import util
from typedesc.classifier import TypeClassifier
from typedesc.context import ContextualMember, MetadataProvider
from typedesc.description import MemberDecision
from typedesc.settings import GeneratorSettings, MemberSerialization

__all__ = (
    "DuplicatePropertyError",
    "PropertyResolutionError",
    "PropertyResolver",
)


_ALWAYS = "Always"


class PropertyResolver:
    """Decide which members of an object type become schema properties.

    Examples
    --------
    >>> import dataclasses
    >>> from typing import Annotated, Optional
    >>> from typedesc import annotations, properties
    >>>
    >>> @dataclasses.dataclass
    ... class Pet:
    ...     id: Annotated[int, annotations.Required()]
    ...     nickname: Optional[str] = None
    ...
    >>> for decision in properties.PropertyResolver().resolve(Pet):
    ...     print(decision.name, decision.required, decision.is_nullable)
    ...
    id True False
    nickname False True
    """

    __slots__ = ("classifier", "provider")

    def __init__(self, classifier: Optional[TypeClassifier] = None):
        self.classifier = classifier or TypeClassifier()
        self.provider: MetadataProvider = self.classifier.provider

    def __repr__(self):
        return f"{self.__class__.__name__}(classifier={self.classifier!r})"

    def resolve(
        self, t: Type, settings: Optional[GeneratorSettings] = None
    ) -> Tuple[MemberDecision, ...]:
        """Resolve the members of `t` into property decisions, in declaration order.

        Raises
        ------
        DuplicatePropertyError
            If two members resolve to the same name and the inheritance hierarchy of
            `t` isn't flattened.
        """
        settings = settings or GeneratorSettings()
        type_attributes = self.provider.get_type_attributes(t)
        data_contract = util.first_assignable_to_name(type_attributes, "DataContract")
        opt_in = (
            settings.member_serialization is MemberSerialization.OPT_IN
            or data_contract is not None
        )
        flatten = settings.get_actual_flatten_inheritance_hierarchy(t)
        decisions: Dict[str, MemberDecision] = {}
        for member in self.provider.get_members(t):
            if not self.is_included(member, opt_in=opt_in):
                continue
            if self.is_ignored(member, settings):
                continue
            description = self.classifier.describe(
                member.contextual_type,
                settings.default_reference_type_null_handling,
                settings,
            )
            name = self.get_property_name(member, settings)
            if name in decisions:
                if not flatten:
                    raise DuplicatePropertyError(
                        f"The JSON property {name!r} is defined multiple times "
                        f"on type {util.get_full_name(t)!r}.",
                        type=t,
                        property_name=name,
                    )
                # The derived member replaces the base member, at the end.
                decisions.pop(name)
            required = self.is_required(
                member, data_contract=data_contract is not None
            )
            decisions[name] = MemberDecision(
                name=name,
                required=required,
                is_nullable=description.is_nullable and not required,
                type_description=description,
                member=member,
            )
        return (*decisions.values(),)

    @staticmethod
    def is_included(member: ContextualMember, *, opt_in: bool = False) -> bool:
        """Whether a member may be serialized at all."""
        if member.is_static:
            return False
        data_member = util.first_assignable_to_name(member.attributes, "DataMember")
        if member.is_field:
            if member.is_private:
                return False
            return not opt_in or data_member is not None
        return member.can_read and (member.can_write or data_member is not None)

    @staticmethod
    def is_ignored(member: ContextualMember, settings: GeneratorSettings) -> bool:
        """Whether a member was explicitly left out of the schema."""
        attributes = member.attributes
        ignore = util.first_assignable_to_name(attributes, "JsonIgnore")
        if ignore is not None:
            condition = util.get_option(ignore, "condition")
            if condition is None or getattr(condition, "value", condition) == _ALWAYS:
                return True
        if util.first_assignable_to_name(attributes, "JsonExtensionData") is not None:
            return True
        if settings.ignore_obsolete_properties:
            obsolete = util.first_assignable_to_name(attributes, "Obsolete")
            return obsolete is not None or member.is_deprecated
        return False

    @staticmethod
    def get_property_name(member: ContextualMember, settings: GeneratorSettings) -> str:
        """An explicit name wins over the naming policy."""
        marker = util.first_assignable_to_name(member.attributes, "JsonPropertyName")
        name = util.get_option(marker, "name")
        if name:
            return name
        policy = settings.get_naming_policy()
        if policy is not None:
            return policy(member.name)
        return member.name

    @staticmethod
    def is_required(member: ContextualMember, *, data_contract: bool = False) -> bool:
        if util.first_assignable_to_name(member.attributes, "Required") is not None:
            return True
        if not data_contract:
            return False
        data_member = util.first_assignable_to_name(member.attributes, "DataMember")
        return bool(util.get_option(data_member, "is_required", False))


class PropertyResolutionError(LookupError):
    ...


class DuplicatePropertyError(PropertyResolutionError, ValueError):
    """Two members of one type resolved to the same property name."""

    def __init__(self, *args: Any, type: Type, property_name: str):
        super().__init__(*args)
        self.type = type
        self.property_name = property_name
