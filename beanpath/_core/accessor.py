from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from typing_extensions import Self, override

from .enums import AccessorKind
from .errors import AmbiguousAccessorError, UnsupportedOperationError
from .typing_resolution import to_raw_class


class Accessor(ABC):
    @property
    def declared_type(self, /) -> Any:
        return self._declared_type

    @property
    @abstractmethod
    def kind(self, /) -> AccessorKind:
        raise NotImplementedError

    @property
    def name(self, /) -> str:
        return self._name

    @property
    def value_cls(self, /) -> type[Any]:
        return to_raw_class(self._declared_type)

    @abstractmethod
    def get(self, target: Any, /) -> Any:
        raise NotImplementedError

    @abstractmethod
    def set(self, target: Any, value: Any, /) -> None:
        raise NotImplementedError

    _declared_type: Any
    _name: str

    __slots__ = '_declared_type', '_name'

    def __eq__(self, other: Any, /) -> Any:
        return (
            (
                self.kind is other.kind
                and self._name == other._name
                and self._declared_type == other._declared_type
            )
            if isinstance(other, Accessor)
            else NotImplemented
        )

    def __hash__(self, /) -> int:
        return hash((self.kind, self._name))

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            f'({self._name!r}, {self._declared_type!r})'
        )


class MethodAccessor(Accessor):
    @property
    def arity(self, /) -> int:
        return self._arity

    @property
    @override
    def kind(self, /) -> AccessorKind:
        return AccessorKind.METHOD

    @override
    def get(self, target: Any, /) -> Any:
        if self._arity != 0:
            raise UnsupportedOperationError(
                f'{self._name!r} is a setter method.'
            )
        return getattr(target, self._name)()

    @override
    def set(self, target: Any, value: Any, /) -> None:
        if self._arity != 1:
            raise UnsupportedOperationError(
                f'{self._name!r} is a getter method.'
            )
        getattr(target, self._name)(value)

    _arity: int

    __slots__ = ('_arity',)

    def __new__(cls, name: str, declared_type: Any, arity: int, /) -> Self:
        assert isinstance(name, str), name
        assert arity in (0, 1), arity
        self = super().__new__(cls)
        self._arity, self._declared_type, self._name = (
            arity,
            declared_type,
            name,
        )
        return self


class PropertyAccessor(Accessor):
    @property
    @override
    def kind(self, /) -> AccessorKind:
        return AccessorKind.PROPERTY

    @override
    def get(self, target: Any, /) -> Any:
        return getattr(target, self._name)

    @override
    def set(self, target: Any, value: Any, /) -> None:
        setattr(target, self._name, value)

    __slots__ = ()

    def __new__(cls, name: str, declared_type: Any, /) -> Self:
        self = super().__new__(cls)
        self._declared_type, self._name = declared_type, name
        return self


class FieldAccessor(Accessor):
    @property
    @override
    def kind(self, /) -> AccessorKind:
        return AccessorKind.FIELD

    @property
    def read_only(self, /) -> bool:
        return self._read_only

    @override
    def get(self, target: Any, /) -> Any:
        # unset fields read as absent
        return getattr(target, self._name, None)

    @override
    def set(self, target: Any, value: Any, /) -> None:
        if self._read_only:
            raise UnsupportedOperationError(
                f'Field {self._name!r} is a constant.'
            )
        setattr(target, self._name, value)

    _read_only: bool

    __slots__ = ('_read_only',)

    def __new__(
        cls, name: str, declared_type: Any, /, *, read_only: bool
    ) -> Self:
        self = super().__new__(cls)
        self._declared_type, self._name, self._read_only = (
            declared_type,
            name,
            read_only,
        )
        return self


class AmbiguousAccessor(Accessor):
    @property
    def message(self, /) -> str:
        return self._message

    @property
    @override
    def kind(self, /) -> AccessorKind:
        return AccessorKind.AMBIGUOUS

    @override
    def get(self, target: Any, /) -> Any:
        raise AmbiguousAccessorError(self._message)

    @override
    def set(self, target: Any, value: Any, /) -> None:
        raise AmbiguousAccessorError(self._message)

    _message: str

    __slots__ = ('_message',)

    def __new__(cls, name: str, declared_type: Any, message: str, /) -> Self:
        self = super().__new__(cls)
        self._declared_type, self._message, self._name = (
            declared_type,
            message,
            name,
        )
        return self
