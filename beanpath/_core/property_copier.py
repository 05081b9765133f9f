from __future__ import annotations

from typing import Any

from .metadata_cache import DEFAULT_CACHE, TypeMetadataCache


def copy_properties(
    cls: type[Any],
    source: Any,
    destination: Any,
    /,
    *,
    cache: TypeMetadataCache = DEFAULT_CACHE,
) -> None:
    for field in cache.resolve(cls).fields.values():
        if field.read_only or not hasattr(source, field.name):
            continue
        field.set(destination, field.get(source))
