from typing import Any

import pytest

from beanpath import (
    NULL_VIEW,
    AmbiguousAccessorError,
    ConstructionError,
    ConstructionPolicy,
    DefaultConstructionPolicy,
    IndexOutOfRangeError,
    InstanceView,
    InvalidIndexError,
    NoDefaultConstructorError,
    NullView,
    PropertyNotFoundError,
    TypeMetadataCache,
    UnsupportedOperationError,
    get_value,
    getter_type,
    has_getter,
    has_setter,
    set_value,
    setter_type,
    view_of,
)
from tests.beans import (
    Account,
    Address,
    AmbiguousTarget,
    AmbiguousValue,
    Broken,
    Holder,
    Limits,
    Person,
    Required,
    Settings,
)


def test_bean_round_trip() -> None:
    person = Person()

    set_value(person, 'name', 'Ada')

    assert get_value(person, 'name') == 'Ada'
    assert person.name == 'Ada'


def test_method_accessors_round_trip() -> None:
    account = Account()

    set_value(account, 'active', True)
    set_value(account, 'userName', 'ada')
    set_value(account, 'balance', 10)

    assert get_value(account, 'active') is True
    assert get_value(account, 'userName') == 'ada'
    assert get_value(account, 'balance') == 10


def test_setter_matching_getter_type() -> None:
    settings = Settings()

    set_value(settings, 'level', 3)

    assert get_value(settings, 'level') == 3


def test_nested_round_trip() -> None:
    person = Person(address=Address())

    set_value(person, 'address.city', 'Oslo')

    assert get_value(person, 'address.city') == 'Oslo'


def test_absent_intermediate_reads_as_none() -> None:
    assert get_value(Person(), 'address.city') is None


def test_setting_none_through_absent_intermediate() -> None:
    person = Person()

    set_value(person, 'address.city', None)

    assert person.address is None


def test_absent_intermediate_is_instantiated() -> None:
    person = Person()

    set_value(person, 'address.city', 'Oslo')

    assert person.address == Address(city='Oslo')


def test_absent_indexed_intermediate_is_instantiated() -> None:
    holder = Holder()
    holder.records = {}

    set_value(holder, 'records[home].city', 'Oslo')

    assert holder.records == {'home': Address(city='Oslo')}


def test_intermediate_without_default_constructor() -> None:
    with pytest.raises(ConstructionError) as error_info:
        set_value(Holder(), 'required.value', 1)

    assert error_info.value.cls is Required
    assert error_info.value.property_name == 'required'
    assert isinstance(error_info.value.__cause__, NoDefaultConstructorError)


def test_custom_construction_policy() -> None:
    class RecordingPolicy(ConstructionPolicy):
        def __init__(self) -> None:
            self.created: list[type[Any]] = []

        def create(self, cls: type[Any], /) -> Any:
            self.created.append(cls)
            return DefaultConstructionPolicy().create(cls)

    policy = RecordingPolicy()
    person = Person()

    set_value(person, 'address.city', 'Oslo', construction_policy=policy)

    assert policy.created == [Address]
    assert person.address == Address(city='Oslo')


def test_sequence_indices() -> None:
    person = Person(tags=['first', 'second', 'last'])

    assert get_value(person, 'tags[0]') == 'first'
    assert get_value(person, 'tags[2]') == 'last'
    with pytest.raises(IndexOutOfRangeError):
        get_value(person, 'tags[3]')
    with pytest.raises(InvalidIndexError):
        get_value(person, 'tags[-1]')
    with pytest.raises(InvalidIndexError):
        get_value(person, 'tags[first]')


def test_indexed_set() -> None:
    person = Person(tags=['first'], scores={'math': 1})

    set_value(person, 'tags[0]', 'changed')
    set_value(person, 'scores[physics]', 2)

    assert person.tags == ['changed']
    assert person.scores == {'math': 1, 'physics': 2}


def test_mapping_missing_key() -> None:
    person = Person(scores={'math': 5})

    assert get_value(person, 'scores[math]') == 5
    assert get_value(person, 'scores[missingKey]') is None
    assert person.scores == {'math': 5}


def test_indexed_nested_access() -> None:
    person = Person(friends=[Person(name='Grace')])

    set_value(person, 'friends[0].address.city', 'Arlington')

    assert get_value(person, 'friends[0].name') == 'Grace'
    assert get_value(person, 'friends[0].address.city') == 'Arlington'


def test_indexing_non_collection() -> None:
    with pytest.raises(InvalidIndexError):
        get_value(Person(name='Ada'), 'name[0]')
    with pytest.raises(InvalidIndexError):
        get_value(Holder(), 'records[home]')


def test_ambiguous_accessors() -> None:
    assert has_getter(AmbiguousValue(), 'value')
    assert has_setter(AmbiguousTarget(), 'target')
    with pytest.raises(AmbiguousAccessorError):
        get_value(AmbiguousValue(), 'value')
    with pytest.raises(AmbiguousAccessorError):
        set_value(AmbiguousTarget(), 'target', 1)


def test_missing_property() -> None:
    with pytest.raises(PropertyNotFoundError):
        get_value(Person(), 'missing')
    with pytest.raises(PropertyNotFoundError):
        set_value(Account(), 'identifier', 'changed')


def test_constant() -> None:
    assert get_value(Limits(), 'MAXIMUM') == 10
    with pytest.raises(PropertyNotFoundError):
        set_value(Limits(), 'MAXIMUM', 1)


def test_getter_errors_propagate() -> None:
    with pytest.raises(RuntimeError):
        get_value(Broken(), 'failure')


def test_mapping_root() -> None:
    root: dict[str, Any] = {'user': {'name': 'Ada'}}

    set_value(root, 'user.age', 36)
    set_value(root, 'settings.theme', 'dark')

    assert get_value(root, 'user.name') == 'Ada'
    assert get_value(root, 'user.age') == 36
    assert get_value(root, 'missing') is None
    assert get_value(root, 'missing.nested') is None
    assert root['settings'] == {'theme': 'dark'}


def test_sequence_root() -> None:
    root = [Address(city='Oslo'), Address(city='Bergen')]

    set_value(root, '[1].zip_code', '5003')

    assert get_value(root, '[0].city') == 'Oslo'
    assert root[1].zip_code == '5003'


def test_live_nested_types() -> None:
    person = Person(address=Address())

    assert getter_type(person, 'address.city') is str
    assert setter_type(person, 'address.city') is str
    assert getter_type(Person(), 'address.city') is str
    assert has_getter(person, 'address.city')
    assert not has_getter(person, 'address.missing')
    assert has_setter(Person(), 'address.city')


def test_mapping_types() -> None:
    root = {'count': 1, 'nested': {'flag': True}}

    assert getter_type(root, 'count') is int
    assert getter_type(root, 'nested.flag') is bool
    assert getter_type(root, 'missing') is object
    assert has_getter(root, 'nested.flag')
    assert not has_getter(root, 'missing')
    assert has_setter(root, 'missing')


def test_null_view() -> None:
    view = view_of(None)

    assert view is NULL_VIEW
    assert view.get('any.path') is None
    assert view.for_property('any') is NULL_VIEW
    assert view.find_property('any') is None
    assert view.getter_names() == ()
    assert not view.has_getter('any')
    assert not view.has_setter('any')
    assert not view.is_sequence_like()
    assert view.set('any', 1) is None
    assert get_value(None, 'name') is None


def test_view() -> None:
    cache = TypeMetadataCache(enabled=False)
    person = Person(address=Address(city='Oslo'))
    view = view_of(person, cache=cache)

    assert isinstance(view, InstanceView)
    assert view.wrapped is person
    assert view.cache is cache
    assert view.find_property('ADDRESS.CITY') == 'address.city'
    assert view.for_property('address').wrapped is person.address
    assert isinstance(view.for_property('name'), InstanceView)
    assert isinstance(view_of(Person()).for_property('address'), NullView)
    assert not view.is_sequence_like()


def test_append() -> None:
    person = Person()
    view = view_of(person).for_property('tags')

    view.append('first')
    view.append_all(['second', 'third'])

    assert person.tags == ['first', 'second', 'third']
    with pytest.raises(UnsupportedOperationError):
        view_of(person).append('value')
