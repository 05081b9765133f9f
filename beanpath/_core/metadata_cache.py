from __future__ import annotations

from typing import Any, Final

from typing_extensions import Self

from .metadata import TypeMetadata


class TypeMetadataCache:
    @property
    def enabled(self, /) -> bool:
        return self._enabled

    def resolve(self, cls: type[Any], /) -> TypeMetadata:
        if not self._enabled:
            return TypeMetadata.from_class(cls)
        try:
            return self._metadata[cls]
        except KeyError:
            pass
        # racing resolvers may build duplicates, only the first one is stored
        return self._metadata.setdefault(cls, TypeMetadata.from_class(cls))

    _enabled: bool
    _metadata: dict[type[Any], TypeMetadata]

    __slots__ = '_enabled', '_metadata'

    def __new__(cls, /, *, enabled: bool = True) -> Self:
        self = super().__new__(cls)
        self._enabled, self._metadata = enabled, {}
        return self

    def __contains__(self, cls: Any, /) -> bool:
        return cls in self._metadata

    def __len__(self, /) -> int:
        return len(self._metadata)

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}(enabled={self._enabled!r})'


DEFAULT_CACHE: Final[TypeMetadataCache] = TypeMetadataCache()
