from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .class_view import ClassPropertyView
from .construction import DEFAULT_CONSTRUCTION_POLICY, ConstructionPolicy
from .instance_view import InstanceView, View
from .metadata_cache import DEFAULT_CACHE, TypeMetadataCache
from .wrappers import DEFAULT_WRAPPER_SELECTOR, WrapperSelector


def class_view_of(
    cls: type[Any], /, *, cache: TypeMetadataCache = DEFAULT_CACHE
) -> ClassPropertyView:
    return ClassPropertyView.for_class(cls, cache=cache)


def view_of(
    root: Any,
    /,
    *,
    cache: TypeMetadataCache = DEFAULT_CACHE,
    construction_policy: ConstructionPolicy = DEFAULT_CONSTRUCTION_POLICY,
    wrapper_selector: WrapperSelector = DEFAULT_WRAPPER_SELECTOR,
) -> View:
    return InstanceView.for_value(
        root,
        cache=cache,
        construction_policy=construction_policy,
        wrapper_selector=wrapper_selector,
    )


def get_value(
    root: Any,
    path: str,
    /,
    *,
    cache: TypeMetadataCache = DEFAULT_CACHE,
    construction_policy: ConstructionPolicy = DEFAULT_CONSTRUCTION_POLICY,
    wrapper_selector: WrapperSelector = DEFAULT_WRAPPER_SELECTOR,
) -> Any:
    return view_of(
        root,
        cache=cache,
        construction_policy=construction_policy,
        wrapper_selector=wrapper_selector,
    ).get(path)


def set_value(
    root: Any,
    path: str,
    value: Any,
    /,
    *,
    cache: TypeMetadataCache = DEFAULT_CACHE,
    construction_policy: ConstructionPolicy = DEFAULT_CONSTRUCTION_POLICY,
    wrapper_selector: WrapperSelector = DEFAULT_WRAPPER_SELECTOR,
) -> None:
    view_of(
        root,
        cache=cache,
        construction_policy=construction_policy,
        wrapper_selector=wrapper_selector,
    ).set(path, value)


def find_property(
    cls: type[Any],
    path: str,
    /,
    *,
    cache: TypeMetadataCache = DEFAULT_CACHE,
    use_camel_case_mapping: bool = False,
) -> str | None:
    return class_view_of(cls, cache=cache).find_property(
        path, use_camel_case_mapping=use_camel_case_mapping
    )


def getter_type(
    cls_or_root: Any,
    path: str,
    /,
    *,
    cache: TypeMetadataCache = DEFAULT_CACHE,
    wrapper_selector: WrapperSelector = DEFAULT_WRAPPER_SELECTOR,
) -> type[Any] | None:
    if isinstance(cls_or_root, type):
        return class_view_of(cls_or_root, cache=cache).getter_type(path)
    return view_of(
        cls_or_root, cache=cache, wrapper_selector=wrapper_selector
    ).getter_type(path)


def setter_type(
    cls_or_root: Any,
    path: str,
    /,
    *,
    cache: TypeMetadataCache = DEFAULT_CACHE,
    wrapper_selector: WrapperSelector = DEFAULT_WRAPPER_SELECTOR,
) -> type[Any] | None:
    if isinstance(cls_or_root, type):
        return class_view_of(cls_or_root, cache=cache).setter_type(path)
    return view_of(
        cls_or_root, cache=cache, wrapper_selector=wrapper_selector
    ).setter_type(path)


def has_getter(
    cls_or_root: Any,
    path: str,
    /,
    *,
    cache: TypeMetadataCache = DEFAULT_CACHE,
    wrapper_selector: WrapperSelector = DEFAULT_WRAPPER_SELECTOR,
) -> bool:
    if isinstance(cls_or_root, type):
        return class_view_of(cls_or_root, cache=cache).has_getter(path)
    return view_of(
        cls_or_root, cache=cache, wrapper_selector=wrapper_selector
    ).has_getter(path)


def has_setter(
    cls_or_root: Any,
    path: str,
    /,
    *,
    cache: TypeMetadataCache = DEFAULT_CACHE,
    wrapper_selector: WrapperSelector = DEFAULT_WRAPPER_SELECTOR,
) -> bool:
    if isinstance(cls_or_root, type):
        return class_view_of(cls_or_root, cache=cache).has_setter(path)
    return view_of(
        cls_or_root, cache=cache, wrapper_selector=wrapper_selector
    ).has_setter(path)


def getter_names(
    cls: type[Any], /, *, cache: TypeMetadataCache = DEFAULT_CACHE
) -> Sequence[str]:
    return class_view_of(cls, cache=cache).getter_names()


def setter_names(
    cls: type[Any], /, *, cache: TypeMetadataCache = DEFAULT_CACHE
) -> Sequence[str]:
    return class_view_of(cls, cache=cache).setter_names()


def has_default_constructor(
    cls: type[Any], /, *, cache: TypeMetadataCache = DEFAULT_CACHE
) -> bool:
    return class_view_of(cls, cache=cache).has_default_constructor()
