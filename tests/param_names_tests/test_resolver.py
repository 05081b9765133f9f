from __future__ import annotations

from typing import Annotated, Any

import pytest

from beanpath import (
    Param,
    ParameterNotFoundError,
    ParamMap,
    ParamNameResolver,
    get_value,
    wrap_to_mapping_if_collection,
)


class RowBounds:
    pass


class UserMapper:
    def select_all(self) -> list[Any]:
        return []

    def select_by_id(self, user_id: int) -> Any:
        return None

    def select_by_ids(self, user_ids: list[int]) -> list[Any]:
        return []

    def select_by_name(
        self, user_id: int, name: Annotated[str, Param('user_name')]
    ) -> Any:
        return None

    def select_page(
        self, bounds: RowBounds, name: str, *args: Any, **kwargs: Any
    ) -> list[Any]:
        return []

    def swap(
        self, first: Annotated[int, Param('param2')], second: int
    ) -> Any:
        return None


def test_names() -> None:
    assert ParamNameResolver(UserMapper.select_by_name).names == (
        'user_id',
        'user_name',
    )
    assert ParamNameResolver(UserMapper.select_all).names == ()


def test_bound_method() -> None:
    resolver = ParamNameResolver(UserMapper().select_by_name)

    assert resolver.names == ('user_id', 'user_name')
    assert resolver.has_param_annotation


def test_no_parameters() -> None:
    assert ParamNameResolver(UserMapper.select_all).named_params() is None


def test_single_parameter() -> None:
    resolver = ParamNameResolver(UserMapper.select_by_id)

    assert not resolver.has_param_annotation
    assert resolver.named_params(5) == 5


def test_single_collection_parameter() -> None:
    result = ParamNameResolver(UserMapper.select_by_ids).named_params([1, 2])

    assert isinstance(result, ParamMap)
    assert result == {
        'collection': [1, 2],
        'list': [1, 2],
        'user_ids': [1, 2],
    }


def test_several_parameters() -> None:
    result = ParamNameResolver(UserMapper.select_by_name).named_params(
        1, name='ada'
    )

    assert result == {
        'user_id': 1,
        'user_name': 'ada',
        'param1': 1,
        'param2': 'ada',
    }
    assert get_value(result, 'user_name') == 'ada'


def test_generic_names_do_not_override_explicit_ones() -> None:
    result = ParamNameResolver(UserMapper.swap).named_params(1, 2)

    assert result == {'param2': 1, 'param1': 1, 'second': 2}


def test_ordinal_names() -> None:
    resolver = ParamNameResolver(
        UserMapper.select_by_name, use_actual_param_name=False
    )

    assert resolver.names == ('0', 'user_name')
    assert resolver.named_params(1, 'ada') == {
        '0': 1,
        'user_name': 'ada',
        'param1': 1,
        'param2': 'ada',
    }


def test_special_parameter_types() -> None:
    resolver = ParamNameResolver(
        UserMapper.select_page, special_parameter_types=[RowBounds]
    )

    assert resolver.names == ('name',)
    assert resolver.named_params(RowBounds(), 'ada') == 'ada'


def test_missing_parameter() -> None:
    result = ParamNameResolver(UserMapper.select_by_name).named_params(
        1, 'ada'
    )

    with pytest.raises(ParameterNotFoundError) as error_info:
        result['missing']

    assert isinstance(error_info.value, KeyError)
    assert 'user_name' in str(error_info.value)


def test_wrap_to_mapping_if_collection() -> None:
    assert wrap_to_mapping_if_collection(1) == 1
    assert wrap_to_mapping_if_collection('text') == 'text'
    assert wrap_to_mapping_if_collection({'key': 1}) == {'key': 1}
    assert wrap_to_mapping_if_collection({1}, 'ids') == {
        'collection': {1},
        'ids': {1},
    }
    assert wrap_to_mapping_if_collection((1,)) == {
        'collection': (1,),
        'list': (1,),
    }
