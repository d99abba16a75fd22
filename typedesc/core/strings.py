from __future__ import annotations

import enum
import functools
from typing import Callable, Mapping, Union

import inflection

__all__ = ("Case", "NamingPolicyT", "naming_policy", "transformer", "transform")


def transformer(*, case: Case) -> CaseTransformerT:
    return _TRANSFORMERS[case]


def transform(string: str, *, case: Case) -> str:
    return transformer(case=case)(string)


def naming_policy(policy: NamingPolicyT | None) -> CaseTransformerT | None:
    """Normalize a naming policy into a plain callable.

    Examples
    --------
    >>> from typedesc.core import strings
    >>> strings.naming_policy(strings.Case.CAMEL)("foo_bar")
    'fooBar'
    >>> strings.naming_policy("kebab-case")("foo_bar")
    'foo-bar'
    >>> strings.naming_policy(str.upper)("foo_bar")
    'FOO_BAR'
    >>> strings.naming_policy(None) is None
    True
    """
    if policy is None:
        return None
    if isinstance(policy, str):
        return Case(policy).transformer
    return policy


class Case(str, enum.Enum):
    """An enumeration of the supported case-styles for property names."""

    CAMEL = "camelCase"
    SNAKE = "snake_case"
    PASCAL = "PascalCase"
    KEBAB = "kebab-case"
    DOT = "dot.case"
    UPPER_KEBAB = "UPPER-KEBAB-CASE"
    UPPER_DOT = "UPPER.DOT.CASE"

    @property
    def transformer(self) -> CaseTransformerT:
        return transformer(case=self)


def kebab_case(s: str) -> str:
    return inflection.dasherize(inflection.underscore(s))


def upper_kebab_case(s: str) -> str:
    return kebab_case(s).upper()


def dot_case(s: str) -> str:
    return inflection.underscore(s).replace("_", ".")


def upper_dot_case(s: str) -> str:
    return dot_case(s).upper()


CaseTransformerT = Callable[[str], str]
"""A callable which transforms a string from one case-style to another."""

NamingPolicyT = Union[Case, str, CaseTransformerT]
"""A case-style, the name of one, or any callable mapping a raw name to a new one."""


_TRANSFORMERS: Mapping[Case, CaseTransformerT] = {
    Case.CAMEL: functools.partial(inflection.camelize, uppercase_first_letter=False),
    Case.SNAKE: inflection.underscore,
    Case.PASCAL: inflection.camelize,
    Case.KEBAB: kebab_case,
    Case.DOT: dot_case,
    Case.UPPER_KEBAB: upper_kebab_case,
    Case.UPPER_DOT: upper_dot_case,
}
