import pytest

from typedesc.core import strings


@pytest.mark.suite(
    camel=dict(given_case=strings.Case.CAMEL, expected_string="fooBarBaz"),
    snake=dict(given_case=strings.Case.SNAKE, expected_string="foo_bar_baz"),
    pascal=dict(given_case=strings.Case.PASCAL, expected_string="FooBarBaz"),
    kebab=dict(given_case=strings.Case.KEBAB, expected_string="foo-bar-baz"),
    dot=dict(given_case=strings.Case.DOT, expected_string="foo.bar.baz"),
    upper_kebab=dict(
        given_case=strings.Case.UPPER_KEBAB, expected_string="FOO-BAR-BAZ"
    ),
    upper_dot=dict(given_case=strings.Case.UPPER_DOT, expected_string="FOO.BAR.BAZ"),
)
def test_transform(given_case, expected_string):
    # When
    transformed = strings.transform("foo_bar_baz", case=given_case)
    # Then
    assert transformed == expected_string
    assert given_case.transformer("foo_bar_baz") == expected_string


@pytest.mark.suite(
    case=dict(given_policy=strings.Case.KEBAB, expected_string="foo-bar"),
    case_value=dict(given_policy="PascalCase", expected_string="FooBar"),
    callable=dict(given_policy=str.upper, expected_string="FOO_BAR"),
)
def test_naming_policy(given_policy, expected_string):
    # When
    policy = strings.naming_policy(given_policy)
    # Then
    assert policy("foo_bar") == expected_string


def test_naming_policy_none():
    # When
    policy = strings.naming_policy(None)
    # Then
    assert policy is None


def test_naming_policy_unknown_case():
    # When/Then
    with pytest.raises(ValueError):
        strings.naming_policy("sPoNgEbOb")
