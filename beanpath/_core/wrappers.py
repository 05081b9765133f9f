from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from collections.abc import (
    Iterable,
    Mapping,
    MutableMapping,
    MutableSequence,
    MutableSet,
    Sequence,
    Set,
)
from typing import TYPE_CHECKING, Any, Final

from typing_extensions import Self, override

from .class_view import ClassPropertyView
from .construction import ConstructionPolicy
from .enums import WrapperKind
from .errors import (
    ConstructionError,
    IndexOutOfRangeError,
    InvalidIndexError,
    InvalidPathError,
    ReflectionError,
    UnsupportedOperationError,
)
from .property_path import PropertyPath

if TYPE_CHECKING:
    from .instance_view import InstanceView, View


class ObjectWrapper(ABC):
    @property
    def kind(self, /) -> WrapperKind:
        return WrapperKind.CUSTOM

    @property
    @abstractmethod
    def wrapped(self, /) -> Any:
        raise NotImplementedError

    @abstractmethod
    def append(self, value: Any, /) -> None:
        raise NotImplementedError

    @abstractmethod
    def append_all(self, values: Iterable[Any], /) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_property(
        self, name: str, /, *, use_camel_case_mapping: bool = False
    ) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get(self, segment: PropertyPath, /) -> Any:
        raise NotImplementedError

    @abstractmethod
    def getter_names(self, /) -> Sequence[str]:
        raise NotImplementedError

    @abstractmethod
    def getter_type(self, name: str, /) -> type[Any]:
        raise NotImplementedError

    @abstractmethod
    def has_getter(self, name: str, /) -> bool:
        raise NotImplementedError

    @abstractmethod
    def has_setter(self, name: str, /) -> bool:
        raise NotImplementedError

    @abstractmethod
    def instantiate_property_value(
        self,
        segment: PropertyPath,
        construction_policy: ConstructionPolicy,
        /,
    ) -> View:
        raise NotImplementedError

    @abstractmethod
    def is_sequence_like(self, /) -> bool:
        raise NotImplementedError

    @abstractmethod
    def set(self, segment: PropertyPath, value: Any, /) -> None:
        raise NotImplementedError

    @abstractmethod
    def setter_names(self, /) -> Sequence[str]:
        raise NotImplementedError

    @abstractmethod
    def setter_type(self, name: str, /) -> type[Any]:
        raise NotImplementedError

    __slots__ = ()


class BaseWrapper(ObjectWrapper):
    @property
    def view(self, /) -> InstanceView:
        return self._view

    def _resolve_collection(self, segment: PropertyPath, /) -> Any:
        if len(segment.name) == 0:
            return self.wrapped
        return self._view.get(segment.name)

    def _get_collection_value(
        self, segment: PropertyPath, collection: Any, /
    ) -> Any:
        assert segment.index is not None, segment
        if isinstance(collection, Mapping):
            return collection.get(segment.index)
        if is_sequence_like_value(collection) and isinstance(
            collection, Sequence
        ):
            return collection[_to_ordinal(segment, len(collection))]
        raise InvalidIndexError(
            f'The {segment.name!r} property of {self._describe()} '
            f'is neither a sequence nor a mapping, but {collection!r}.'
        )

    def _set_collection_value(
        self, segment: PropertyPath, collection: Any, value: Any, /
    ) -> None:
        assert segment.index is not None, segment
        if isinstance(collection, MutableMapping):
            collection[segment.index] = value
        elif isinstance(collection, MutableSequence):
            collection[_to_ordinal(segment, len(collection))] = value
        elif isinstance(collection, (Mapping, Sequence)):
            raise UnsupportedOperationError(
                f'The {segment.name!r} property of {self._describe()} '
                f'is immutable.'
            )
        else:
            raise InvalidIndexError(
                f'The {segment.name!r} property of {self._describe()} '
                f'is neither a sequence nor a mapping, but {collection!r}.'
            )

    def _describe(self, /) -> str:
        return repr(type(self.wrapped).__qualname__)

    _view: InstanceView

    __slots__ = ('_view',)


class BeanWrapper(BaseWrapper):
    @property
    def class_view(self, /) -> ClassPropertyView:
        return self._class_view

    @property
    @override
    def kind(self, /) -> WrapperKind:
        return WrapperKind.BEAN

    @property
    @override
    def wrapped(self, /) -> Any:
        return self._object

    @override
    def append(self, value: Any, /) -> None:
        raise UnsupportedOperationError(
            f'Cannot append to a bean of type {self._describe()}.'
        )

    @override
    def append_all(self, values: Iterable[Any], /) -> None:
        raise UnsupportedOperationError(
            f'Cannot append to a bean of type {self._describe()}.'
        )

    @override
    def find_property(
        self, name: str, /, *, use_camel_case_mapping: bool = False
    ) -> str | None:
        return self._class_view.find_property(
            name, use_camel_case_mapping=use_camel_case_mapping
        )

    @override
    def get(self, segment: PropertyPath, /) -> Any:
        if segment.index is not None:
            return self._get_collection_value(
                segment, self._resolve_collection(segment)
            )
        return self._class_view.getter(segment.name).get(self._object)

    @override
    def getter_names(self, /) -> Sequence[str]:
        return self._class_view.getter_names()

    @override
    def getter_type(self, name: str, /) -> type[Any]:
        segment = PropertyPath.parse(name)
        if segment.children is not None:
            from .instance_view import NullView

            child_view = self._view.for_property(segment.indexed_name)
            if not isinstance(child_view, NullView):
                return child_view.getter_type(segment.children)
        return self._class_view.getter_type(name)

    @override
    def has_getter(self, name: str, /) -> bool:
        try:
            segment = PropertyPath.parse(name)
        except InvalidPathError:
            return False
        if segment.children is None:
            return self._class_view.has_getter(name)
        if not self._class_view.has_getter(segment.indexed_name):
            return False
        from .instance_view import NullView

        try:
            child_view = self._view.for_property(segment.indexed_name)
        except ReflectionError:
            return self._class_view.has_getter(name)
        if isinstance(child_view, NullView):
            return self._class_view.has_getter(name)
        return child_view.has_getter(segment.children)

    @override
    def has_setter(self, name: str, /) -> bool:
        try:
            segment = PropertyPath.parse(name)
        except InvalidPathError:
            return False
        if segment.children is None:
            return self._class_view.has_setter(name)
        if not self._class_view.has_setter(segment.indexed_name):
            return False
        from .instance_view import NullView

        try:
            child_view = self._view.for_property(segment.indexed_name)
        except ReflectionError:
            return self._class_view.has_setter(name)
        if isinstance(child_view, NullView):
            return self._class_view.has_setter(name)
        return child_view.has_setter(segment.children)

    @override
    def instantiate_property_value(
        self,
        segment: PropertyPath,
        construction_policy: ConstructionPolicy,
        /,
    ) -> View:
        cls = self._class_view.setter_type(segment.indexed_name)
        try:
            value = construction_policy.create(cls)
        except Exception as error:
            raise ConstructionError(
                segment.indexed_name, cls, error
            ) from error
        self.set(segment, value)
        return self._view.derive(value)

    @override
    def is_sequence_like(self, /) -> bool:
        return False

    @override
    def set(self, segment: PropertyPath, value: Any, /) -> None:
        if segment.index is not None:
            self._set_collection_value(
                segment, self._resolve_collection(segment), value
            )
        else:
            self._class_view.setter(segment.name).set(self._object, value)

    @override
    def setter_names(self, /) -> Sequence[str]:
        return self._class_view.setter_names()

    @override
    def setter_type(self, name: str, /) -> type[Any]:
        segment = PropertyPath.parse(name)
        if segment.children is not None:
            from .instance_view import NullView

            child_view = self._view.for_property(segment.indexed_name)
            if not isinstance(child_view, NullView):
                return child_view.setter_type(segment.children)
        return self._class_view.setter_type(name)

    _class_view: ClassPropertyView
    _object: Any

    __slots__ = '_class_view', '_object'

    def __new__(cls, view: InstanceView, object_: Any, /) -> Self:
        self = super().__new__(cls)
        self._class_view = ClassPropertyView.for_class(
            type(object_), cache=view.cache
        )
        self._object, self._view = object_, view
        return self

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._object!r})'


class MapWrapper(BaseWrapper):
    @property
    @override
    def kind(self, /) -> WrapperKind:
        return WrapperKind.MAP

    @property
    @override
    def wrapped(self, /) -> Mapping[Any, Any]:
        return self._mapping

    @override
    def append(self, value: Any, /) -> None:
        raise UnsupportedOperationError('Cannot append to a mapping.')

    @override
    def append_all(self, values: Iterable[Any], /) -> None:
        raise UnsupportedOperationError('Cannot append to a mapping.')

    @override
    def find_property(
        self, name: str, /, *, use_camel_case_mapping: bool = False
    ) -> str | None:
        return name

    @override
    def get(self, segment: PropertyPath, /) -> Any:
        if segment.index is not None:
            return self._get_collection_value(
                segment, self._resolve_collection(segment)
            )
        return self._mapping.get(segment.name)

    @override
    def getter_names(self, /) -> Sequence[str]:
        return tuple(map(str, self._mapping))

    @override
    def getter_type(self, name: str, /) -> type[Any]:
        segment = PropertyPath.parse(name)
        if segment.children is not None:
            from .instance_view import NullView

            child_view = self._view.for_property(segment.indexed_name)
            if isinstance(child_view, NullView):
                return object
            return child_view.getter_type(segment.children)
        value = self.get(segment)
        return object if value is None else type(value)

    @override
    def has_getter(self, name: str, /) -> bool:
        try:
            segment = PropertyPath.parse(name)
        except InvalidPathError:
            return False
        if segment.children is None:
            return segment.name in self._mapping
        if segment.indexed_name not in self._mapping:
            return False
        from .instance_view import NullView

        try:
            child_view = self._view.for_property(segment.indexed_name)
        except ReflectionError:
            return False
        if isinstance(child_view, NullView):
            return True
        return child_view.has_getter(segment.children)

    @override
    def has_setter(self, name: str, /) -> bool:
        return True

    @override
    def instantiate_property_value(
        self,
        segment: PropertyPath,
        construction_policy: ConstructionPolicy,
        /,
    ) -> View:
        try:
            value = construction_policy.create(dict)
        except Exception as error:
            raise ConstructionError(
                segment.indexed_name, dict, error
            ) from error
        self.set(segment, value)
        return self._view.derive(value)

    @override
    def is_sequence_like(self, /) -> bool:
        return False

    @override
    def set(self, segment: PropertyPath, value: Any, /) -> None:
        if segment.index is not None:
            self._set_collection_value(
                segment, self._resolve_collection(segment), value
            )
        elif isinstance(self._mapping, MutableMapping):
            self._mapping[segment.name] = value
        else:
            raise UnsupportedOperationError(
                f'Cannot set {segment.name!r} of immutable {self._describe()}.'
            )

    @override
    def setter_names(self, /) -> Sequence[str]:
        return tuple(map(str, self._mapping))

    @override
    def setter_type(self, name: str, /) -> type[Any]:
        return self.getter_type(name)

    _mapping: Mapping[Any, Any]

    __slots__ = ('_mapping',)

    def __new__(
        cls, view: InstanceView, mapping: Mapping[Any, Any], /
    ) -> Self:
        self = super().__new__(cls)
        self._mapping, self._view = mapping, view
        return self

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._mapping!r})'


class SequenceWrapper(BaseWrapper):
    @property
    @override
    def kind(self, /) -> WrapperKind:
        return WrapperKind.SEQUENCE

    @property
    @override
    def wrapped(self, /) -> Sequence[Any] | Set[Any]:
        return self._sequence

    @override
    def append(self, value: Any, /) -> None:
        if isinstance(self._sequence, MutableSequence):
            self._sequence.append(value)
        elif isinstance(self._sequence, MutableSet):
            self._sequence.add(value)
        else:
            raise UnsupportedOperationError(
                f'Cannot append to immutable {self._describe()}.'
            )

    @override
    def append_all(self, values: Iterable[Any], /) -> None:
        if isinstance(self._sequence, MutableSequence):
            self._sequence.extend(values)
        elif isinstance(self._sequence, MutableSet):
            self._sequence |= set(values)
        else:
            raise UnsupportedOperationError(
                f'Cannot append to immutable {self._describe()}.'
            )

    @override
    def find_property(
        self, name: str, /, *, use_camel_case_mapping: bool = False
    ) -> str | None:
        return None

    @override
    def get(self, segment: PropertyPath, /) -> Any:
        self._validate_segment(segment)
        return self._get_collection_value(segment, self._sequence)

    @override
    def getter_names(self, /) -> Sequence[str]:
        raise self._to_unsupported_error()

    @override
    def getter_type(self, name: str, /) -> type[Any]:
        raise self._to_unsupported_error()

    @override
    def has_getter(self, name: str, /) -> bool:
        return False

    @override
    def has_setter(self, name: str, /) -> bool:
        return False

    @override
    def instantiate_property_value(
        self,
        segment: PropertyPath,
        construction_policy: ConstructionPolicy,
        /,
    ) -> View:
        raise UnsupportedOperationError(
            f'Cannot instantiate absent element {segment.indexed_name!r} '
            f'of {self._describe()}.'
        )

    @override
    def is_sequence_like(self, /) -> bool:
        return True

    @override
    def set(self, segment: PropertyPath, value: Any, /) -> None:
        self._validate_segment(segment)
        self._set_collection_value(segment, self._sequence, value)

    @override
    def setter_names(self, /) -> Sequence[str]:
        raise self._to_unsupported_error()

    @override
    def setter_type(self, name: str, /) -> type[Any]:
        raise self._to_unsupported_error()

    def _to_unsupported_error(self, /) -> UnsupportedOperationError:
        return UnsupportedOperationError(
            f'{self._describe()} has no named properties.'
        )

    def _validate_segment(self, segment: PropertyPath, /) -> None:
        if len(segment.name) > 0:
            raise UnsupportedOperationError(
                f'{self._describe()} has no property named '
                f'{segment.name!r}.'
            )
        if segment.index is None:
            raise InvalidIndexError(
                f'Segment {segment.indexed_name!r} has no index.'
            )

    _sequence: Sequence[Any] | Set[Any]

    __slots__ = ('_sequence',)

    def __new__(
        cls, view: InstanceView, sequence: Sequence[Any] | Set[Any], /
    ) -> Self:
        self = super().__new__(cls)
        self._sequence, self._view = sequence, view
        return self

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._sequence!r})'


class WrapperSelector(ABC):
    @abstractmethod
    def has_wrapper_for(self, value: Any, /) -> bool:
        raise NotImplementedError

    @abstractmethod
    def wrapper_for(self, view: InstanceView, value: Any, /) -> ObjectWrapper:
        raise NotImplementedError

    __slots__ = ()


class DefaultWrapperSelector(WrapperSelector):
    @override
    def has_wrapper_for(self, value: Any, /) -> bool:
        return False

    @override
    def wrapper_for(self, view: InstanceView, value: Any, /) -> ObjectWrapper:
        raise UnsupportedOperationError(
            f'{type(self).__qualname__} provides no custom wrappers.'
        )

    __slots__ = ()

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}()'


DEFAULT_WRAPPER_SELECTOR: Final[WrapperSelector] = DefaultWrapperSelector()


def is_sequence_like_value(value: Any, /) -> bool:
    return isinstance(value, (Sequence, Set)) and not isinstance(
        value, (str, bytes, bytearray)
    )


def select_wrapper(
    view: InstanceView, value: Any, selector: WrapperSelector, /
) -> ObjectWrapper:
    if isinstance(value, ObjectWrapper):
        return value
    if selector.has_wrapper_for(value):
        return selector.wrapper_for(view, value)
    return _to_builtin_wrapper(value, view)


@functools.singledispatch
def _to_builtin_wrapper(value: Any, view: InstanceView, /) -> ObjectWrapper:
    return BeanWrapper(view, value)


@_to_builtin_wrapper.register(Mapping)
def _(value: Mapping[Any, Any], view: InstanceView, /) -> ObjectWrapper:
    return MapWrapper(view, value)


@_to_builtin_wrapper.register(Sequence)
@_to_builtin_wrapper.register(Set)
def _(value: Sequence[Any] | Set[Any], view: InstanceView, /) -> ObjectWrapper:
    return SequenceWrapper(view, value)


@_to_builtin_wrapper.register(bytearray)
@_to_builtin_wrapper.register(bytes)
@_to_builtin_wrapper.register(str)
def _(value: Any, view: InstanceView, /) -> ObjectWrapper:
    return BeanWrapper(view, value)


def _to_ordinal(segment: PropertyPath, size: int, /) -> int:
    index = segment.index
    assert index is not None, segment
    if not (index.isascii() and index.isdecimal()):
        raise InvalidIndexError(
            f'Index {index!r} of {segment.indexed_name!r} '
            f'is not a non-negative integer.'
        )
    ordinal = int(index)
    if ordinal >= size:
        raise IndexOutOfRangeError(
            f'Index {ordinal} of {segment.indexed_name!r} '
            f'is out of range for size {size}.'
        )
    return ordinal
