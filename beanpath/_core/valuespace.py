from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, ClassVar, Generic, TypeVar, get_args, get_origin

from .typing_resolution import resolve_class_hints

_T = TypeVar('_T')


class BaseValuespace(ABC, Generic[_T]):
    @classmethod
    @abstractmethod
    def value_cls(cls, /) -> type[_T]:
        raise NotImplementedError

    @classmethod
    def values(cls, /) -> Iterable[_T]:
        yield from cls.__values_map.values()

    __values_map: ClassVar[Mapping[str, Any]]

    def __init_subclass__(cls, /) -> None:
        super().__init_subclass__()
        value_cls = cls.value_cls()
        annotations = resolve_class_hints(cls)
        errors = [
            error
            for field_name, field_value in vars(cls).items()
            if isinstance(field_value, value_cls)
            for error in _to_field_errors(
                field_name, field_value, annotations.get(field_name)
            )
        ]
        if len(errors) > 0:
            raise ValueError(
                f'Invalid {cls.__qualname__!r}: {"; ".join(errors)}.'
            )
        cls.__values_map = {
            field_name: field_value
            for base_cls in reversed(cls.__mro__)
            for field_name, field_value in vars(base_cls).items()
            if isinstance(field_value, value_cls)
        }


def _to_field_errors(
    field_name: str, field_value: Any, annotation: Any, /
) -> Iterator[str]:
    if not field_name.isupper():
        yield (
            f'field name should be `{field_name.upper()}`, '
            f'but got `{field_name}`'
        )
    if annotation is ClassVar:
        return
    if get_origin(annotation) is ClassVar:
        arguments = get_args(annotation)
        if len(arguments) == 1 and isinstance(field_value, arguments[0]):
            return
    yield (
        f'annotation for `{field_name}` should be '
        f'either `{ClassVar[type(field_value)]}` or `{ClassVar}`, '
        f'but got `{annotation}`'
    )
