import pytest

from beanpath import (
    ClassPropertyView,
    InvalidPathError,
    PropertyNotFoundError,
    TypeMetadataCache,
    class_view_of,
    find_property,
    getter_names,
    getter_type,
    has_default_constructor,
    has_getter,
    has_setter,
    setter_names,
    setter_type,
)
from tests.beans import (
    Account,
    Address,
    AmbiguousValue,
    Holder,
    IntBox,
    Limits,
    Person,
    Required,
)


def test_find_property() -> None:
    assert find_property(Person, 'NAME') == 'name'
    assert find_property(Person, 'Address.City') == 'address.city'
    assert find_property(Person, 'FRIENDS[0].ADDRESS') == 'friends[0].address'


def test_find_property_with_camel_case_mapping() -> None:
    assert (
        find_property(Account, 'USER_NAME', use_camel_case_mapping=True)
        == 'userName'
    )
    assert find_property(Account, 'USER_NAME') is None


def test_find_property_never_raises() -> None:
    assert find_property(Person, 'missing') is None
    assert find_property(Person, 'address.missing') is None
    assert find_property(Person, 'a..b') is None
    assert find_property(Person, 'name.length') is None


def test_getter_type() -> None:
    assert getter_type(Person, 'name') is str
    assert getter_type(Person, 'address') is Address
    assert getter_type(Person, 'address.city') is str
    assert getter_type(Person, 'friends') is list


def test_indexed_getter_type() -> None:
    assert getter_type(Person, 'tags[0]') is str
    assert getter_type(Person, 'friends[0]') is Person
    assert getter_type(Person, 'friends[0].address.zip_code') is str
    assert getter_type(Person, 'scores[math]') is int
    assert getter_type(Holder, 'records[home].city') is str
    assert getter_type(IntBox, 'items[0]') is int


def test_setter_type() -> None:
    assert setter_type(Account, 'balance') is int
    assert setter_type(Person, 'friends[0].name') is str


def test_type_of_missing_property() -> None:
    with pytest.raises(PropertyNotFoundError):
        getter_type(Person, 'missing')
    with pytest.raises(PropertyNotFoundError):
        setter_type(Account, 'identifier')


def test_type_of_invalid_path() -> None:
    with pytest.raises(InvalidPathError):
        getter_type(Person, 'name[')


def test_has_getter() -> None:
    assert has_getter(Person, 'address.city')
    assert has_getter(Person, 'friends[0].name')
    assert has_getter(Account, 'identifier')
    assert has_getter(AmbiguousValue, 'value')
    assert not has_getter(Person, 'address.missing')
    assert not has_getter(Person, 'missing.city')
    assert not has_getter(Person, 'a]')


def test_has_setter() -> None:
    assert has_setter(Person, 'address.city')
    assert has_setter(Limits, 'minimum')
    assert not has_setter(Account, 'identifier')
    assert not has_setter(Limits, 'MAXIMUM')
    assert not has_setter(Person, 'address.missing')


def test_names() -> None:
    assert getter_names(Address) == ('city', 'zip_code')
    assert setter_names(Address) == ('city', 'zip_code')
    assert 'identifier' in getter_names(Account)
    assert 'identifier' not in setter_names(Account)


def test_default_constructor() -> None:
    assert has_default_constructor(Person)
    assert not has_default_constructor(Required)


def test_view() -> None:
    cache = TypeMetadataCache()
    view = class_view_of(Person, cache=cache)

    assert isinstance(view, ClassPropertyView)
    assert view.cls is Person
    assert view.cache is cache
    assert view.for_property('address').cls is Address
    assert view.getter('name').get(Person(name='Ada')) == 'Ada'
    assert Person in cache
