from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class ReflectionError(Exception):
    pass


class PropertyNotFoundError(ReflectionError, AttributeError):
    def __init__(
        self, cls: type[Any], property_name: str, kind: str, /
    ) -> None:
        super().__init__(
            f'There is no {kind} for property named {property_name!r} '
            f'in {cls.__qualname__!r}.'
        )
        self.cls, self.property_name = cls, property_name


class AmbiguousAccessorError(ReflectionError, TypeError):
    pass


class NoDefaultConstructorError(ReflectionError, TypeError):
    def __init__(self, cls: type[Any], /) -> None:
        super().__init__(
            f'There is no default constructor for {cls.__qualname__!r}.'
        )
        self.cls = cls


class InvalidIndexError(ReflectionError, ValueError):
    pass


class IndexOutOfRangeError(ReflectionError, IndexError):
    pass


class InvalidPathError(ReflectionError, ValueError):
    pass


class UnsupportedOperationError(ReflectionError, TypeError):
    pass


class ConstructionError(ReflectionError):
    def __init__(
        self, property_name: str, cls: type[Any], cause: BaseException, /
    ) -> None:
        super().__init__(
            f'Cannot set value of property {property_name!r} '
            f'because {property_name!r} is absent '
            f'and cannot be instantiated as {cls.__qualname__!r}: '
            f'{cause!r}.'
        )
        self.cls, self.property_name = cls, property_name


class ParameterNotFoundError(ReflectionError, KeyError):
    def __init__(self, name: str, available_names: Iterable[str], /) -> None:
        super().__init__(
            f'Parameter {name!r} not found. '
            f'Available parameters are: '
            f'{", ".join(map(repr, available_names))}.'
        )
        self.name = name

    def __str__(self, /) -> str:
        return str(self.args[0])
