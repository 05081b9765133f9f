from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Final, TypeAlias

from typing_extensions import Self

from .construction import DEFAULT_CONSTRUCTION_POLICY, ConstructionPolicy
from .metadata_cache import DEFAULT_CACHE, TypeMetadataCache
from .property_path import PropertyPath
from .wrappers import (
    DEFAULT_WRAPPER_SELECTOR,
    ObjectWrapper,
    WrapperSelector,
    select_wrapper,
)


class NullView:
    @property
    def wrapped(self, /) -> None:
        return None

    def append(self, value: Any, /) -> None:
        return None

    def append_all(self, values: Iterable[Any], /) -> None:
        return None

    def derive(self, value: Any, /) -> View:
        return self

    def find_property(
        self, name: str, /, *, use_camel_case_mapping: bool = False
    ) -> None:
        return None

    def for_property(self, name: str, /) -> View:
        return self

    def get(self, path: str, /) -> None:
        return None

    def getter_names(self, /) -> Sequence[str]:
        return ()

    def getter_type(self, path: str, /) -> None:
        return None

    def has_getter(self, path: str, /) -> bool:
        return False

    def has_setter(self, path: str, /) -> bool:
        return False

    def is_sequence_like(self, /) -> bool:
        return False

    def set(self, path: str, value: Any, /) -> None:
        return None

    def setter_names(self, /) -> Sequence[str]:
        return ()

    def setter_type(self, path: str, /) -> None:
        return None

    __slots__ = ()

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}()'


NULL_VIEW: Final[NullView] = NullView()


class InstanceView:
    @classmethod
    def for_value(
        cls,
        value: Any,
        /,
        *,
        cache: TypeMetadataCache = DEFAULT_CACHE,
        construction_policy: ConstructionPolicy = DEFAULT_CONSTRUCTION_POLICY,
        wrapper_selector: WrapperSelector = DEFAULT_WRAPPER_SELECTOR,
    ) -> View:
        if value is None:
            return NULL_VIEW
        return cls(value, cache, construction_policy, wrapper_selector)

    @property
    def cache(self, /) -> TypeMetadataCache:
        return self._cache

    @property
    def construction_policy(self, /) -> ConstructionPolicy:
        return self._construction_policy

    @property
    def wrapped(self, /) -> Any:
        return self._wrapper.wrapped

    @property
    def wrapper(self, /) -> ObjectWrapper:
        return self._wrapper

    @property
    def wrapper_selector(self, /) -> WrapperSelector:
        return self._wrapper_selector

    def append(self, value: Any, /) -> None:
        self._wrapper.append(value)

    def append_all(self, values: Iterable[Any], /) -> None:
        self._wrapper.append_all(values)

    def derive(self, value: Any, /) -> View:
        return type(self).for_value(
            value,
            cache=self._cache,
            construction_policy=self._construction_policy,
            wrapper_selector=self._wrapper_selector,
        )

    def find_property(
        self, name: str, /, *, use_camel_case_mapping: bool = False
    ) -> str | None:
        return self._wrapper.find_property(
            name, use_camel_case_mapping=use_camel_case_mapping
        )

    def for_property(self, name: str, /) -> View:
        return self.derive(self.get(name))

    def get(self, path: str, /) -> Any:
        segment = PropertyPath.parse(path)
        if segment.children is None:
            return self._wrapper.get(segment)
        child_view = self.for_property(segment.indexed_name)
        if isinstance(child_view, NullView):
            return None
        return child_view.get(segment.children)

    def getter_names(self, /) -> Sequence[str]:
        return self._wrapper.getter_names()

    def getter_type(self, path: str, /) -> type[Any]:
        return self._wrapper.getter_type(path)

    def has_getter(self, path: str, /) -> bool:
        return self._wrapper.has_getter(path)

    def has_setter(self, path: str, /) -> bool:
        return self._wrapper.has_setter(path)

    def is_sequence_like(self, /) -> bool:
        return self._wrapper.is_sequence_like()

    def set(self, path: str, value: Any, /) -> None:
        segment = PropertyPath.parse(path)
        if segment.children is None:
            self._wrapper.set(segment, value)
            return
        child_view = self.for_property(segment.indexed_name)
        if isinstance(child_view, NullView):
            if value is None:
                # absent intermediates are never created to store `None`
                return
            child_view = self._wrapper.instantiate_property_value(
                segment, self._construction_policy
            )
        child_view.set(segment.children, value)

    def setter_names(self, /) -> Sequence[str]:
        return self._wrapper.setter_names()

    def setter_type(self, path: str, /) -> type[Any]:
        return self._wrapper.setter_type(path)

    _cache: TypeMetadataCache
    _construction_policy: ConstructionPolicy
    _wrapper: ObjectWrapper
    _wrapper_selector: WrapperSelector

    __slots__ = (
        '_cache',
        '_construction_policy',
        '_wrapper',
        '_wrapper_selector',
    )

    def __new__(
        cls,
        value: Any,
        cache: TypeMetadataCache,
        construction_policy: ConstructionPolicy,
        wrapper_selector: WrapperSelector,
        /,
    ) -> Self:
        assert value is not None
        self = super().__new__(cls)
        (
            self._cache,
            self._construction_policy,
            self._wrapper_selector,
        ) = cache, construction_policy, wrapper_selector
        self._wrapper = select_wrapper(self, value, wrapper_selector)
        return self

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._wrapper!r})'


View: TypeAlias = InstanceView | NullView
