from __future__ import annotations

from typing import Final

GETTER_PREFIXES: Final[tuple[str, ...]] = ('get', 'is')
SETTER_PREFIX: Final = 'set'
BOOLEAN_GETTER_PREFIX: Final = 'is'


def is_synthetic_name(name: str, /) -> bool:
    # e.g.: `__secret` declared in `Hidden` is stored as `_Hidden__secret`
    return name.startswith('__') or (
        name.startswith('_') and '__' in name.strip('_')
    )


def is_getter_name(name: str, /) -> bool:
    return any(
        _has_accessor_prefix(name, prefix) for prefix in GETTER_PREFIXES
    )


def is_setter_name(name: str, /) -> bool:
    return _has_accessor_prefix(name, SETTER_PREFIX)


def split_accessor_name(name: str, /) -> tuple[str, str]:
    for prefix in (BOOLEAN_GETTER_PREFIX, 'get', SETTER_PREFIX):
        if _has_accessor_prefix(name, prefix):
            break
    else:
        raise ValueError(
            f'Error parsing property name {name!r}: '
            f'it does not start with either of '
            f'{", ".join(map(repr, (*GETTER_PREFIXES, SETTER_PREFIX)))}.'
        )
    rest = name[len(prefix) :]
    if rest.startswith('_'):
        return prefix, rest[1:]
    return prefix, _decapitalize(rest)


def _decapitalize(name: str, /) -> str:
    if len(name) > 1 and name[1].isupper():
        # e.g.: `getURL` keeps `URL`
        return name
    return name[:1].lower() + name[1:]


def _has_accessor_prefix(name: str, prefix: str, /) -> bool:
    rest = name[len(prefix) :]
    return (
        name.startswith(prefix)
        and len(rest) > 0
        and (
            (
                rest[0] == '_'
                and len(rest) > 1
                and rest[1:].isidentifier()
                and rest[1] != '_'
            )
            or rest[0].isupper()
        )
    )
