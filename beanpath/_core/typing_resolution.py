from __future__ import annotations

import inspect
import types
import typing
from collections.abc import Callable, Collection, Mapping
from typing import (
    Any,
    Final,
    TypeAlias,
    TypeVar,
    get_args,
    get_origin,
    get_type_hints,
)

TypeArguments: TypeAlias = Mapping[TypeVar, Any]

_STRING_LIKE_CLASSES: Final[tuple[type[Any], ...]] = (str, bytes, bytearray)


def collect_type_arguments(
    cls: type[Any], /
) -> dict[type[Any], dict[TypeVar, Any]]:
    result: dict[type[Any], dict[TypeVar, Any]] = {cls: {}}
    # subclasses precede their bases in the MRO
    for base_cls in cls.__mro__:
        type_arguments = result.setdefault(base_cls, {})
        original_bases = vars(base_cls).get(
            '__orig_bases__', base_cls.__bases__
        )
        for original_base in original_bases:
            origin = get_origin(original_base)
            if origin is None:
                if isinstance(original_base, type):
                    result.setdefault(original_base, {})
                continue
            if origin is typing.Generic or not isinstance(origin, type):
                continue
            result.setdefault(
                origin,
                {
                    parameter: resolve_annotation(argument, type_arguments)
                    for parameter, argument in zip(
                        getattr(origin, '__parameters__', ()),
                        get_args(original_base),
                    )
                    if argument is not parameter
                },
            )
    return result


def resolve_annotation(
    annotation: Any, type_arguments: TypeArguments, /
) -> Any:
    return _resolve_annotation(annotation, type_arguments, frozenset())


def resolve_function_hints(
    function: Callable[..., Any], /, *, include_extras: bool = False
) -> dict[str, Any]:
    try:
        return get_type_hints(function, include_extras=include_extras)
    except (NameError, TypeError):
        return {
            name: (Any if isinstance(annotation, str) else annotation)
            for name, annotation in getattr(
                function, '__annotations__', {}
            ).items()
        }


def resolve_class_hints(cls: type[Any], /) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError):
        result: dict[str, Any] = {}
        for base_cls in reversed(cls.__mro__):
            for name, annotation in own_annotations(base_cls).items():
                result[name] = (
                    Any if isinstance(annotation, str) else annotation
                )
        return result


def to_raw_class(annotation: Any, /) -> type[Any]:
    if annotation is Any:
        return object
    if annotation is None or annotation is type(None):
        return type(None)
    origin = get_origin(annotation)
    if origin is None:
        return annotation if isinstance(annotation, type) else object
    if origin is typing.Union or origin is types.UnionType:
        candidates = [
            argument
            for argument in get_args(annotation)
            if argument is not type(None)
        ]
        return to_raw_class(candidates[0]) if len(candidates) == 1 else object
    if origin is typing.ClassVar or origin is typing.Final:
        (argument,) = get_args(annotation) or (Any,)
        return to_raw_class(argument)
    return origin if isinstance(origin, type) else object


def element_annotation(annotation: Any, /) -> Any | None:
    origin = get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        candidates = [
            argument
            for argument in get_args(annotation)
            if argument is not type(None)
        ]
        if len(candidates) != 1:
            return None
        return element_annotation(candidates[0])
    raw_cls = to_raw_class(annotation)
    arguments = get_args(annotation)
    if is_mapping_class(raw_cls):
        return arguments[1] if len(arguments) == 2 else None
    if not is_sequence_like_class(raw_cls):
        return None
    if len(arguments) == 1:
        return arguments[0]
    if len(arguments) == 2 and arguments[1] is Ellipsis:
        # e.g.: `tuple[int, ...]`
        return arguments[0]
    return None


def is_mapping_class(cls: type[Any], /) -> bool:
    return issubclass(cls, Mapping)


def is_sequence_like_class(cls: type[Any], /) -> bool:
    return (
        issubclass(cls, Collection)
        and not issubclass(cls, Mapping)
        and not issubclass(cls, _STRING_LIKE_CLASSES)
    )


def is_subclass(cls: type[Any], other_cls: type[Any], /) -> bool:
    try:
        return issubclass(cls, other_cls)
    except TypeError:
        return False


def _resolve_annotation(
    annotation: Any,
    type_arguments: TypeArguments,
    resolving: frozenset[TypeVar],
    /,
) -> Any:
    if isinstance(annotation, TypeVar):
        if annotation in resolving or annotation not in type_arguments:
            return _type_variable_fallback(annotation)
        return _resolve_annotation(
            type_arguments[annotation],
            type_arguments,
            resolving | {annotation},
        )
    if get_origin(annotation) is None:
        return annotation
    parameters = getattr(annotation, '__parameters__', ())
    if len(parameters) == 0:
        return annotation
    try:
        return annotation[
            tuple(
                _resolve_annotation(parameter, type_arguments, resolving)
                for parameter in parameters
            )
        ]
    except TypeError:
        return annotation


def _type_variable_fallback(type_variable: TypeVar, /) -> Any:
    if type_variable.__bound__ is not None:
        return type_variable.__bound__
    return Any


def own_annotations(cls: type[Any], /) -> Mapping[str, Any]:
    try:
        return inspect.get_annotations(cls)
    except NameError:
        return {}
