from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from typing_extensions import Self

from .accessor import Accessor
from .errors import InvalidPathError
from .metadata import TypeMetadata
from .metadata_cache import DEFAULT_CACHE, TypeMetadataCache
from .property_path import PropertyPath
from .typing_resolution import element_annotation, to_raw_class


class ClassPropertyView:
    @classmethod
    def for_class(
        cls, type_: type[Any], /, *, cache: TypeMetadataCache = DEFAULT_CACHE
    ) -> Self:
        return cls(cache.resolve(type_), cache)

    @property
    def cache(self, /) -> TypeMetadataCache:
        return self._cache

    @property
    def cls(self, /) -> type[Any]:
        return self._metadata.cls

    @property
    def metadata(self, /) -> TypeMetadata:
        return self._metadata

    def find_property(
        self, path: str, /, *, use_camel_case_mapping: bool = False
    ) -> str | None:
        try:
            segment: PropertyPath | None = PropertyPath.parse(path)
        except InvalidPathError:
            return None
        components: list[str] = []
        view = self
        while segment is not None:
            name = view._metadata.find_property_name(
                segment.name, ignore_underscores=use_camel_case_mapping
            )
            if name is None:
                return None
            components.append(
                name
                if segment.index is None
                else f'{name}{PropertyPath.INDEX_OPEN}{segment.index}'
                f'{PropertyPath.INDEX_CLOSE}'
            )
            if not segment.has_remainder():
                break
            if not view._metadata.has_getter(name):
                return None
            view = view._for_indexed_property(name, segment.index)
            segment = segment.remainder
        return PropertyPath.SEGMENT_SEPARATOR.join(components)

    def for_property(self, name: str, /) -> Self:
        return type(self).for_class(
            self._metadata.getter_type(name), cache=self._cache
        )

    def getter(self, name: str, /) -> Accessor:
        return self._metadata.getter(name)

    def getter_names(self, /) -> Sequence[str]:
        return self._metadata.readable_names

    def getter_type(self, path: str, /) -> type[Any]:
        segment = PropertyPath.parse(path)
        view = self
        while segment.children is not None:
            view = view._for_indexed_property(segment.name, segment.index)
            segment = PropertyPath.parse(segment.children)
        return _refine_indexed_type(
            view._metadata.getter_annotation(segment.name), segment.index
        )

    def has_default_constructor(self, /) -> bool:
        return self._metadata.has_default_constructor

    def has_getter(self, path: str, /) -> bool:
        try:
            segment = PropertyPath.parse(path)
        except InvalidPathError:
            return False
        view = self
        while view._metadata.has_getter(segment.name):
            if segment.children is None:
                return True
            view = view._for_indexed_property(segment.name, segment.index)
            segment = PropertyPath.parse(segment.children)
        return False

    def has_setter(self, path: str, /) -> bool:
        try:
            segment = PropertyPath.parse(path)
        except InvalidPathError:
            return False
        view = self
        while view._metadata.has_setter(segment.name):
            if segment.children is None:
                return True
            if not view._metadata.has_getter(segment.name):
                return False
            view = view._for_indexed_property(segment.name, segment.index)
            segment = PropertyPath.parse(segment.children)
        return False

    def setter(self, name: str, /) -> Accessor:
        return self._metadata.setter(name)

    def setter_names(self, /) -> Sequence[str]:
        return self._metadata.writable_names

    def setter_type(self, path: str, /) -> type[Any]:
        segment = PropertyPath.parse(path)
        view = self
        while segment.children is not None:
            view = view._for_indexed_property(segment.name, segment.index)
            segment = PropertyPath.parse(segment.children)
        return _refine_indexed_type(
            view._metadata.setter_annotation(segment.name), segment.index
        )

    def _for_indexed_property(self, name: str, index: str | None, /) -> Self:
        return type(self).for_class(
            _refine_indexed_type(
                self._metadata.getter_annotation(name), index
            ),
            cache=self._cache,
        )

    _cache: TypeMetadataCache
    _metadata: TypeMetadata

    __slots__ = '_cache', '_metadata'

    def __new__(
        cls, metadata: TypeMetadata, cache: TypeMetadataCache, /
    ) -> Self:
        self = super().__new__(cls)
        self._cache, self._metadata = cache, metadata
        return self

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._metadata.cls.__qualname__})'


def _refine_indexed_type(annotation: Any, index: str | None, /) -> type[Any]:
    if index is not None:
        element = element_annotation(annotation)
        if element is not None:
            return to_raw_class(element)
    return to_raw_class(annotation)
