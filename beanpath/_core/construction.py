from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import (
    Collection,
    Iterable,
    Mapping,
    MutableMapping,
    MutableSequence,
    MutableSet,
    Sequence,
    Set,
)
from typing import Any, Final, TypeVar

from typing_extensions import Self, override

from .errors import NoDefaultConstructorError
from .metadata_cache import DEFAULT_CACHE, TypeMetadataCache

_T = TypeVar('_T')


class ConstructionPolicy(ABC):
    @abstractmethod
    def create(self, cls: type[_T], /) -> _T:
        raise NotImplementedError

    __slots__ = ()


class DefaultConstructionPolicy(ConstructionPolicy):
    @property
    def cache(self, /) -> TypeMetadataCache:
        return self._cache

    @override
    def create(self, cls: type[_T], /) -> _T:
        try:
            collection_cls = _COLLECTION_IMPLEMENTATIONS[cls]
        except KeyError:
            pass
        else:
            return collection_cls()
        if not self._cache.resolve(cls).has_default_constructor:
            raise NoDefaultConstructorError(cls)
        return cls()

    _cache: TypeMetadataCache

    __slots__ = ('_cache',)

    def __new__(cls, /, *, cache: TypeMetadataCache = DEFAULT_CACHE) -> Self:
        self = super().__new__(cls)
        self._cache = cache
        return self

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}(cache={self._cache!r})'


_COLLECTION_IMPLEMENTATIONS: Final[
    Mapping[type[Any], type[Any]]
] = {
    Collection: list,
    Iterable: list,
    Mapping: dict,
    MutableMapping: dict,
    MutableSequence: list,
    MutableSet: set,
    Sequence: list,
    Set: set,
    dict: dict,
    list: list,
    set: set,
}

DEFAULT_CONSTRUCTION_POLICY: Final[ConstructionPolicy] = (
    DefaultConstructionPolicy()
)
