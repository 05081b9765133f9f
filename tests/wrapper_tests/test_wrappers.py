from types import MappingProxyType
from typing import Any

import pytest

from beanpath import (
    BeanWrapper,
    InstanceView,
    MapWrapper,
    ObjectWrapper,
    SequenceWrapper,
    UnsupportedOperationError,
    WrapperKind,
    WrapperSelector,
    get_value,
    has_getter,
    set_value,
    view_of,
)
from tests.beans import Address, Person, Registry


class RegistrySelector(WrapperSelector):
    def has_wrapper_for(self, value: Any, /) -> bool:
        return isinstance(value, Registry)

    def wrapper_for(self, view: InstanceView, value: Any, /) -> ObjectWrapper:
        return MapWrapper(view, value.entries)


def _wrapper_of(value: Any) -> ObjectWrapper:
    view = view_of(value)
    assert isinstance(view, InstanceView)
    return view.wrapper


@pytest.mark.parametrize(
    'value, kind, wrapper_cls',
    [
        (Person(), WrapperKind.BEAN, BeanWrapper),
        ('text', WrapperKind.BEAN, BeanWrapper),
        ({'key': 'value'}, WrapperKind.MAP, MapWrapper),
        ([1, 2], WrapperKind.SEQUENCE, SequenceWrapper),
        ((1, 2), WrapperKind.SEQUENCE, SequenceWrapper),
        ({1, 2}, WrapperKind.SEQUENCE, SequenceWrapper),
    ],
)
def test_selection(
    value: Any, kind: WrapperKind, wrapper_cls: type[ObjectWrapper]
) -> None:
    wrapper = _wrapper_of(value)

    assert isinstance(wrapper, wrapper_cls)
    assert wrapper.kind is kind
    assert wrapper.wrapped is value


def test_existing_wrapper_is_reused() -> None:
    wrapper = _wrapper_of({'key': 'value'})

    view = view_of(wrapper)

    assert isinstance(view, InstanceView)
    assert view.wrapper is wrapper


def test_custom_selector() -> None:
    registry = Registry()
    selector = RegistrySelector()

    set_value(registry, 'alpha', 1, wrapper_selector=selector)

    assert registry.entries == {'alpha': 1}
    assert get_value(registry, 'alpha', wrapper_selector=selector) == 1
    assert (
        view_of(registry, wrapper_selector=selector).wrapper.kind
        is WrapperKind.MAP
    )


def test_custom_selector_is_inherited_by_nested_views() -> None:
    registry = Registry()
    registry.entries['beta'] = 2
    root = {'registry': registry}

    assert (
        get_value(root, 'registry.beta', wrapper_selector=RegistrySelector())
        == 2
    )


def test_bean_wrapper() -> None:
    wrapper = _wrapper_of(Address(city='Oslo'))

    assert wrapper.getter_names() == ('city', 'zip_code')
    assert wrapper.setter_names() == ('city', 'zip_code')
    assert wrapper.getter_type('city') is str
    assert wrapper.find_property('CITY') == 'city'
    assert wrapper.has_getter('city')
    assert not wrapper.is_sequence_like()
    with pytest.raises(UnsupportedOperationError):
        wrapper.append('value')
    with pytest.raises(UnsupportedOperationError):
        wrapper.append_all(['value'])


def test_map_wrapper() -> None:
    wrapper = _wrapper_of({'count': 1})

    assert wrapper.getter_names() == ('count',)
    assert wrapper.setter_names() == ('count',)
    assert wrapper.getter_type('count') is int
    assert wrapper.setter_type('missing') is object
    assert wrapper.find_property('anything') == 'anything'
    assert wrapper.has_setter('anything')
    assert not wrapper.is_sequence_like()
    with pytest.raises(UnsupportedOperationError):
        wrapper.append('value')


def test_immutable_mapping() -> None:
    with pytest.raises(UnsupportedOperationError):
        set_value(MappingProxyType({'key': 1}), 'key', 2)


def test_sequence_wrapper() -> None:
    wrapper = _wrapper_of([1])

    assert wrapper.is_sequence_like()
    assert wrapper.find_property('any') is None
    assert not wrapper.has_getter('[0]')
    assert not wrapper.has_setter('[0]')
    with pytest.raises(UnsupportedOperationError):
        wrapper.getter_names()
    with pytest.raises(UnsupportedOperationError):
        wrapper.setter_names()
    with pytest.raises(UnsupportedOperationError):
        wrapper.getter_type('[0]')
    with pytest.raises(UnsupportedOperationError):
        wrapper.setter_type('[0]')


def test_sequence_requires_index() -> None:
    with pytest.raises(UnsupportedOperationError):
        get_value([1], 'name')


def test_sequence_append() -> None:
    values = [1]
    unique_values = {1}

    view_of(values).append(2)
    view_of(values).append_all([3, 4])
    view_of(unique_values).append(2)
    view_of(unique_values).append_all([3])

    assert values == [1, 2, 3, 4]
    assert unique_values == {1, 2, 3}


def test_immutable_sequence() -> None:
    with pytest.raises(UnsupportedOperationError):
        view_of((1, 2)).append(3)
    with pytest.raises(UnsupportedOperationError):
        set_value((1, 2), '[0]', 3)
    assert get_value((1, 2), '[1]') == 2


def test_map_wrapper_has_getter_through_non_collection_key() -> None:
    root = {'a[0]': {'b': 1}}

    assert not has_getter(root, 'a[0].b')
    assert not _wrapper_of(root).has_getter('a[0].b')
