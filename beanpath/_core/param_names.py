from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Sequence
from typing import Annotated, Any, ClassVar, Final, get_args, get_origin

from typing_extensions import Self

from .errors import ParameterNotFoundError
from .typing_resolution import (
    is_subclass,
    resolve_function_hints,
    to_raw_class,
)
from .wrappers import is_sequence_like_value


class Param:
    @property
    def value(self, /) -> str:
        return self._value

    _value: str

    __slots__ = ('_value',)

    def __new__(cls, value: str, /) -> Self:
        assert isinstance(value, str) and len(value) > 0, value
        self = super().__new__(cls)
        self._value = value
        return self

    def __eq__(self, other: Any, /) -> Any:
        return (
            self._value == other._value
            if isinstance(other, type(self))
            else NotImplemented
        )

    def __hash__(self, /) -> int:
        return hash(self._value)

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._value!r})'


class ParamMap(dict[str, Any]):
    def __missing__(self, key: str, /) -> Any:
        raise ParameterNotFoundError(key, self.keys())

    __slots__ = ()


class ParamNameResolver:
    GENERIC_NAME_PREFIX: ClassVar = 'param'

    @property
    def has_param_annotation(self, /) -> bool:
        return self._has_param_annotation

    @property
    def names(self, /) -> Sequence[str]:
        return tuple(self._names.values())

    def named_params(self, /, *args: Any, **kwargs: Any) -> Any:
        if len(self._names) == 0:
            return None
        arguments = self._signature.bind(*args, **kwargs)
        arguments.apply_defaults()
        values = arguments.arguments
        if not self._has_param_annotation and len(self._names) == 1:
            ((parameter_name, name),) = self._names.items()
            return wrap_to_mapping_if_collection(
                values[parameter_name],
                name if self._use_actual_param_name else None,
            )
        result = ParamMap()
        names = set(self._names.values())
        for ordinal, (parameter_name, name) in enumerate(
            self._names.items(), start=1
        ):
            value = values[parameter_name]
            result[name] = value
            generic_name = f'{self.GENERIC_NAME_PREFIX}{ordinal}'
            # explicit names take precedence over generic aliases
            if generic_name not in names:
                result[generic_name] = value
        return result

    _has_param_annotation: bool
    _names: dict[str, str]
    _signature: inspect.Signature
    _use_actual_param_name: bool

    __slots__ = (
        '_has_param_annotation',
        '_names',
        '_signature',
        '_use_actual_param_name',
    )

    def __new__(
        cls,
        function: Callable[..., Any],
        /,
        *,
        use_actual_param_name: bool = True,
        special_parameter_types: Iterable[type[Any]] = (),
    ) -> Self:
        signature = inspect.signature(function)
        parameters = list(signature.parameters.values())
        if (
            len(parameters) > 0
            and parameters[0].name in _IMPLICIT_FIRST_PARAMETERS_NAMES
            and parameters[0].kind
            in (
                inspect.Parameter.POSITIONAL_ONLY,
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
            )
        ):
            parameters = parameters[1:]
            signature = signature.replace(parameters=parameters)
        special_parameter_types = tuple(special_parameter_types)
        hints = resolve_function_hints(function, include_extras=True)
        has_param_annotation, names = False, dict[str, str]()
        for parameter in parameters:
            if parameter.kind in (
                inspect.Parameter.VAR_POSITIONAL,
                inspect.Parameter.VAR_KEYWORD,
            ):
                continue
            annotation = hints.get(parameter.name, Any)
            param = _to_param(annotation)
            parameter_cls = to_raw_class(_strip_annotated(annotation))
            if any(
                is_subclass(parameter_cls, special_cls)
                for special_cls in special_parameter_types
            ):
                continue
            if param is not None:
                has_param_annotation = True
                name = param.value
            elif use_actual_param_name:
                name = parameter.name
            else:
                name = str(len(names))
            names[parameter.name] = name
        self = super().__new__(cls)
        (
            self._has_param_annotation,
            self._names,
            self._signature,
            self._use_actual_param_name,
        ) = has_param_annotation, names, signature, use_actual_param_name
        return self

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._signature})'


def wrap_to_mapping_if_collection(
    value: Any, actual_name: str | None = None, /
) -> Any:
    if not is_sequence_like_value(value):
        return value
    result = ParamMap(collection=value)
    if isinstance(value, Sequence):
        result['list'] = value
    if actual_name is not None:
        result[actual_name] = value
    return result


def _strip_annotated(annotation: Any, /) -> Any:
    if get_origin(annotation) is Annotated:
        return get_args(annotation)[0]
    return annotation


def _to_param(annotation: Any, /) -> Param | None:
    if get_origin(annotation) is not Annotated:
        return None
    return next(
        (
            metadata
            for metadata in annotation.__metadata__
            if isinstance(metadata, Param)
        ),
        None,
    )


_IMPLICIT_FIRST_PARAMETERS_NAMES: Final[frozenset[str]] = frozenset(
    ('cls', 'self')
)
