from __future__ import annotations

import inspect
import logging
import types
import typing
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Final, TypeVar, get_args, get_origin

from typing_extensions import Self

from .accessor import (
    Accessor,
    AmbiguousAccessor,
    FieldAccessor,
    MethodAccessor,
    PropertyAccessor,
)
from .errors import PropertyNotFoundError
from .naming import (
    BOOLEAN_GETTER_PREFIX,
    is_getter_name,
    is_setter_name,
    is_synthetic_name,
    split_accessor_name,
)
from .typing_resolution import (
    collect_type_arguments,
    is_subclass,
    own_annotations,
    resolve_annotation,
    resolve_class_hints,
    resolve_function_hints,
    to_raw_class,
)

_logger = logging.getLogger(__name__)


class TypeMetadata:
    @classmethod
    def from_class(cls, type_: type[Any], /) -> Self:
        assert isinstance(type_, type), type_
        type_arguments = collect_type_arguments(type_)
        methods = _collect_methods(type_, type_arguments)
        properties = _collect_properties(type_, type_arguments)
        getters = _resolve_getters(type_, methods, properties)
        setters = _resolve_setters(type_, methods, properties, getters)
        fields = _collect_fields(type_, type_arguments)
        for field_name, field in fields.items():
            if field_name not in setters and not field.read_only:
                setters[field_name] = field
            if field_name not in getters:
                getters[field_name] = field
        result = cls(
            type_,
            getters,
            setters,
            fields,
            has_default_constructor=_has_default_constructor(type_),
        )
        _logger.debug(
            'Resolved metadata of %r: '
            '%d readable and %d writable properties.',
            type_,
            len(getters),
            len(setters),
        )
        return result

    @property
    def cls(self, /) -> type[Any]:
        return self._cls

    @property
    def fields(self, /) -> Mapping[str, FieldAccessor]:
        return types.MappingProxyType(self._fields)

    @property
    def has_default_constructor(self, /) -> bool:
        return self._has_default_constructor

    @property
    def readable_names(self, /) -> Sequence[str]:
        return tuple(self._getters)

    @property
    def writable_names(self, /) -> Sequence[str]:
        return tuple(self._setters)

    def find_property_name(
        self, name: str, /, *, ignore_underscores: bool = False
    ) -> str | None:
        if ignore_underscores:
            return self._underscore_insensitive_names.get(
                _to_underscore_insensitive_key(name)
            )
        return self._case_insensitive_names.get(name.upper())

    def getter(self, name: str, /) -> Accessor:
        try:
            return self._getters[name]
        except KeyError:
            raise PropertyNotFoundError(self._cls, name, 'getter') from None

    def getter_annotation(self, name: str, /) -> Any:
        return self.getter(name).declared_type

    def getter_type(self, name: str, /) -> type[Any]:
        return self.getter(name).value_cls

    def has_getter(self, name: str, /) -> bool:
        return name in self._getters

    def has_setter(self, name: str, /) -> bool:
        return name in self._setters

    def setter(self, name: str, /) -> Accessor:
        try:
            return self._setters[name]
        except KeyError:
            raise PropertyNotFoundError(self._cls, name, 'setter') from None

    def setter_annotation(self, name: str, /) -> Any:
        return self.setter(name).declared_type

    def setter_type(self, name: str, /) -> type[Any]:
        return self.setter(name).value_cls

    _case_insensitive_names: dict[str, str]
    _cls: type[Any]
    _fields: dict[str, FieldAccessor]
    _getters: dict[str, Accessor]
    _has_default_constructor: bool
    _setters: dict[str, Accessor]
    _underscore_insensitive_names: dict[str, str]

    __slots__ = (
        '_case_insensitive_names',
        '_cls',
        '_fields',
        '_getters',
        '_has_default_constructor',
        '_setters',
        '_underscore_insensitive_names',
    )

    def __new__(
        cls,
        type_: type[Any],
        getters: dict[str, Accessor],
        setters: dict[str, Accessor],
        fields: dict[str, FieldAccessor],
        /,
        *,
        has_default_constructor: bool,
    ) -> Self:
        self = super().__new__(cls)
        (
            self._cls,
            self._fields,
            self._getters,
            self._has_default_constructor,
            self._setters,
        ) = type_, fields, getters, has_default_constructor, setters
        self._case_insensitive_names, self._underscore_insensitive_names = (
            {},
            {},
        )
        for name in (*getters, *setters):
            self._case_insensitive_names[name.upper()] = name
            self._underscore_insensitive_names[
                _to_underscore_insensitive_key(name)
            ] = name
        return self

    def __eq__(self, other: Any, /) -> Any:
        return (
            (
                self._cls is other._cls
                and self._getters == other._getters
                and self._setters == other._setters
                and self._has_default_constructor
                is other._has_default_constructor
            )
            if isinstance(other, type(self))
            else NotImplemented
        )

    def __hash__(self, /) -> int:
        return hash(self._cls)

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}('
            f'{self._cls.__qualname__}, '
            f'readable={list(self._getters)!r}, '
            f'writable={list(self._setters)!r}'
            ')'
        )


class _Candidate:
    @property
    def annotation(self, /) -> Any:
        return self._annotation

    @property
    def arity(self, /) -> int:
        return self._arity

    @property
    def name(self, /) -> str:
        return self._name

    @property
    def prefix(self, /) -> str:
        return self._prefix

    @property
    def property_name(self, /) -> str:
        return self._property_name

    @property
    def value_cls(self, /) -> type[Any]:
        return to_raw_class(self._annotation)

    def to_accessor(self, /) -> Accessor:
        if self._prefix:
            return MethodAccessor(self._name, self._annotation, self._arity)
        return PropertyAccessor(self._name, self._annotation)

    _annotation: Any
    _arity: int
    _name: str
    _prefix: str
    _property_name: str

    __slots__ = '_annotation', '_arity', '_name', '_prefix', '_property_name'

    def __new__(
        cls,
        name: str,
        annotation: Any,
        /,
        *,
        arity: int,
        prefix: str,
        property_name: str,
    ) -> Self:
        self = super().__new__(cls)
        (
            self._annotation,
            self._arity,
            self._name,
            self._prefix,
            self._property_name,
        ) = annotation, arity, name, prefix, property_name
        return self

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            f'({self._name!r}, {self._annotation!r})'
        )


def _collect_methods(
    cls: type[Any],
    type_arguments: Mapping[type[Any], Mapping[TypeVar, Any]],
    /,
) -> list[_Candidate]:
    unique_methods: dict[str, _Candidate | None] = {}
    for base_cls in _iter_hierarchy(cls):
        for name, attribute in vars(base_cls).items():
            if name in unique_methods or not (
                is_getter_name(name) or is_setter_name(name)
            ):
                continue
            # the most derived declaration of a name shadows the others
            unique_methods[name] = (
                _to_method_candidate(
                    name, attribute, type_arguments[base_cls]
                )
                if isinstance(attribute, types.FunctionType)
                else None
            )
    return [
        candidate
        for candidate in unique_methods.values()
        if candidate is not None
    ]


def _to_method_candidate(
    name: str,
    function: types.FunctionType,
    type_arguments: Mapping[TypeVar, Any],
    /,
) -> _Candidate | None:
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return None
    parameters = list(signature.parameters.values())[1:]
    if any(
        parameter.kind is inspect.Parameter.KEYWORD_ONLY
        and parameter.default is inspect.Parameter.empty
        for parameter in parameters
    ):
        return None
    required_parameters = [
        parameter
        for parameter in parameters
        if (
            parameter.kind
            in (
                inspect.Parameter.POSITIONAL_ONLY,
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
            )
            and parameter.default is inspect.Parameter.empty
        )
    ]
    hints = resolve_function_hints(function)
    prefix, property_name = split_accessor_name(name)
    if is_synthetic_name(property_name):
        return None
    if is_setter_name(name):
        if len(required_parameters) != 1:
            return None
        annotation = hints.get(required_parameters[0].name, Any)
        arity = 1
    else:
        if len(required_parameters) != 0:
            return None
        annotation = hints.get('return', Any)
        arity = 0
    return _Candidate(
        name,
        resolve_annotation(annotation, type_arguments),
        arity=arity,
        prefix=prefix,
        property_name=property_name,
    )


def _collect_properties(
    cls: type[Any],
    type_arguments: Mapping[type[Any], Mapping[TypeVar, Any]],
    /,
) -> dict[str, tuple[_Candidate, _Candidate | None]]:
    result: dict[str, tuple[_Candidate, _Candidate | None]] = {}
    for base_cls in _iter_hierarchy(cls):
        for name, attribute in vars(base_cls).items():
            if (
                not isinstance(attribute, property)
                or attribute.fget is None
                or is_synthetic_name(name)
                or name in result
            ):
                continue
            getter_annotation = resolve_annotation(
                resolve_function_hints(attribute.fget).get('return', Any),
                type_arguments[base_cls],
            )
            setter_candidate = None
            if attribute.fset is not None:
                setter_hints = resolve_function_hints(attribute.fset)
                setter_hints.pop('return', None)
                setter_annotation = (
                    resolve_annotation(
                        next(iter(setter_hints.values())),
                        type_arguments[base_cls],
                    )
                    if len(setter_hints) == 1
                    else getter_annotation
                )
                setter_candidate = _Candidate(
                    name,
                    setter_annotation,
                    arity=1,
                    prefix='',
                    property_name=name,
                )
            result[name] = (
                _Candidate(
                    name,
                    getter_annotation,
                    arity=0,
                    prefix='',
                    property_name=name,
                ),
                setter_candidate,
            )
    return result


def _resolve_getters(
    cls: type[Any],
    methods: Iterable[_Candidate],
    properties: Mapping[str, tuple[_Candidate, _Candidate | None]],
    /,
) -> dict[str, Accessor]:
    conflicting_getters: dict[str, list[_Candidate]] = {}
    for candidate in methods:
        if candidate.arity == 0:
            conflicting_getters.setdefault(
                candidate.property_name, []
            ).append(candidate)
    for property_name, (getter_candidate, _) in properties.items():
        conflicting_getters.setdefault(property_name, []).append(
            getter_candidate
        )
    result: dict[str, Accessor] = {}
    for property_name, candidates in conflicting_getters.items():
        winner, is_ambiguous = candidates[0], False
        for candidate in candidates[1:]:
            winner_cls, candidate_cls = winner.value_cls, candidate.value_cls
            if candidate_cls is winner_cls:
                if candidate_cls is not bool:
                    is_ambiguous = True
                    break
                if candidate.prefix == BOOLEAN_GETTER_PREFIX:
                    winner = candidate
            elif is_subclass(winner_cls, candidate_cls):
                # winner already has the more specific type
                continue
            elif is_subclass(candidate_cls, winner_cls):
                winner = candidate
            else:
                is_ambiguous = True
                break
        if is_ambiguous:
            candidates_names = ', '.join(
                repr(candidate.name) for candidate in candidates
            )
            message = (
                f'Illegal overloaded getter for property {property_name!r} '
                f'in {cls.__qualname__!r} with ambiguous types: '
                f'{candidates_names}.'
            )
            _logger.warning(message)
            result[property_name] = AmbiguousAccessor(
                winner.name, winner.annotation, message
            )
        else:
            result[property_name] = winner.to_accessor()
    return result


def _resolve_setters(
    cls: type[Any],
    methods: Iterable[_Candidate],
    properties: Mapping[str, tuple[_Candidate, _Candidate | None]],
    getters: Mapping[str, Accessor],
    /,
) -> dict[str, Accessor]:
    conflicting_setters: dict[str, list[_Candidate]] = {}
    for candidate in methods:
        if candidate.arity == 1:
            conflicting_setters.setdefault(
                candidate.property_name, []
            ).append(candidate)
    for property_name, (_, setter_candidate) in properties.items():
        if setter_candidate is not None:
            conflicting_setters.setdefault(property_name, []).append(
                setter_candidate
            )
    result: dict[str, Accessor] = {}
    for property_name, candidates in conflicting_setters.items():
        getter = getters.get(property_name)
        is_getter_ambiguous = isinstance(getter, AmbiguousAccessor)
        is_setter_ambiguous = False
        match: _Candidate | None = None
        for candidate in candidates:
            if (
                getter is not None
                and not is_getter_ambiguous
                and candidate.value_cls is getter.value_cls
            ):
                match = candidate
                break
            if not is_setter_ambiguous:
                if match is None:
                    match = candidate
                    continue
                better = _pick_better_setter(match, candidate)
                if better is None:
                    message = (
                        f'Ambiguous setters defined for property '
                        f'{property_name!r} in {cls.__qualname__!r} '
                        f'with types {match.value_cls.__qualname__!r} '
                        f'and {candidate.value_cls.__qualname__!r}.'
                    )
                    _logger.warning(message)
                    result[property_name] = AmbiguousAccessor(
                        match.name, match.annotation, message
                    )
                    is_setter_ambiguous = True
                match = better
        if match is not None:
            result[property_name] = match.to_accessor()
    return result


def _pick_better_setter(
    first: _Candidate, second: _Candidate, /
) -> _Candidate | None:
    first_cls, second_cls = first.value_cls, second.value_cls
    if is_subclass(second_cls, first_cls):
        return second
    if is_subclass(first_cls, second_cls):
        return first
    return None


def _collect_fields(
    cls: type[Any],
    type_arguments: Mapping[type[Any], Mapping[TypeVar, Any]],
    /,
) -> dict[str, FieldAccessor]:
    hints = resolve_class_hints(cls)
    result: dict[str, FieldAccessor] = {}
    for base_cls in _iter_hierarchy(cls):
        for name in (*own_annotations(base_cls), *_to_slot_names(base_cls)):
            if is_synthetic_name(name) or name in result:
                continue
            annotation = hints.get(name, Any)
            qualifier = get_origin(annotation) or annotation
            read_only = (
                qualifier is typing.ClassVar or qualifier is typing.Final
            )
            if read_only:
                (annotation,) = get_args(annotation) or (Any,)
            result[name] = FieldAccessor(
                name,
                resolve_annotation(annotation, type_arguments[base_cls]),
                read_only=read_only,
            )
    return result


def _has_default_constructor(cls: type[Any], /) -> bool:
    if inspect.isabstract(cls):
        return False
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return cls.__init__ is object.__init__
    return all(
        parameter.default is not inspect.Parameter.empty
        or parameter.kind
        in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for parameter in signature.parameters.values()
    )


def _iter_hierarchy(cls: type[Any], /) -> Iterable[type[Any]]:
    for base_cls in cls.__mro__:
        if base_cls is not object and base_cls is not typing.Generic:
            yield base_cls


def _to_slot_names(cls: type[Any], /) -> Sequence[str]:
    slots = vars(cls).get('__slots__', ())
    if isinstance(slots, str):
        return (slots,)
    return tuple(
        name for name in slots if name not in _SLOT_SPECIAL_NAMES
    )


def _to_underscore_insensitive_key(name: str, /) -> str:
    return name.replace('_', '').upper()


_SLOT_SPECIAL_NAMES: Final[frozenset[str]] = frozenset(
    ('__dict__', '__weakref__')
)
