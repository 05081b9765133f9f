import argparse
import importlib
import sys
import traceback
from abc import ABC, abstractmethod
from collections.abc import Callable
from functools import reduce
from pathlib import Path
from typing import Any, ClassVar, Final

from typing_extensions import Self, override

from beanpath._core.valuespace import BaseValuespace

if sys.version_info < (3, 11):
    from exceptiongroup import ExceptionGroup

import beanpath


class Parameter(ABC):
    @property
    @abstractmethod
    def attribute_name(self, /) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def name(self, /) -> str:
        raise NotImplementedError


class Argument(Parameter):
    @property
    @override
    def attribute_name(self, /) -> str:
        return self._value

    @property
    @override
    def name(self, /) -> str:
        return self._value

    _value: str
    __slots__ = ('_value',)

    def __new__(cls, value: str, /) -> Self:
        assert isinstance(value, str), value
        assert value.isidentifier(), value
        self = super().__new__(cls)
        self._value = value
        return self


class Option(Parameter):
    @property
    @override
    def attribute_name(self, /) -> str:
        return self._value

    @property
    @override
    def name(self, /) -> str:
        return '--' + self._value.replace('_', '-')

    _value: str
    __slots__ = ('_value',)

    def __new__(cls, value: str, /) -> Self:
        assert isinstance(value, str), value
        assert value.isidentifier(), value
        self = super().__new__(cls)
        self._value = value
        return self


class ArgumentValuespace(BaseValuespace[Argument]):
    @classmethod
    @override
    def value_cls(cls, /) -> type[Argument]:
        return Argument

    PROPERTY_PATHS: ClassVar = Argument('property_paths')
    TARGET: ClassVar = Argument('target')


class OptionValuespace(BaseValuespace[Option]):
    @classmethod
    @override
    def value_cls(cls, /) -> type[Option]:
        return Option

    CAMEL_CASE: ClassVar = Option('camel_case')
    ROOT_PATH: ClassVar = Option('root_path')
    VERSION: ClassVar = Option('version')


def main() -> None:
    parser = argparse.ArgumentParser(beanpath.__name__)
    parser.add_argument(
        OptionValuespace.VERSION.name,
        action='version',
        version=beanpath.__version__,
    )
    parser.add_argument(
        OptionValuespace.ROOT_PATH.name,
        default='.',
        help='directory to import the target module from.',
    )
    parser.add_argument(
        OptionValuespace.CAMEL_CASE.name,
        action='store_true',
        help='ignore underscores when looking up property names.',
    )
    parser.add_argument(
        ArgumentValuespace.TARGET.name,
        help='class to inspect in `module:QualifiedName` form.',
    )
    parser.add_argument(
        ArgumentValuespace.PROPERTY_PATHS.name,
        help='property path to resolve against the target class.',
        metavar='PROPERTY_PATH',
        nargs=argparse.ZERO_OR_MORE,
    )
    args = parser.parse_args()
    root_path = Path(
        getattr(args, OptionValuespace.ROOT_PATH.attribute_name)
    ).resolve(strict=True)
    sys.path.insert(0, root_path.as_posix())
    cls = _load_class(getattr(args, ArgumentValuespace.TARGET.attribute_name))
    use_camel_case_mapping = getattr(
        args, OptionValuespace.CAMEL_CASE.attribute_name
    )
    path_strings = getattr(
        args, ArgumentValuespace.PROPERTY_PATHS.attribute_name
    )
    stderr, stdout = sys.stderr, sys.stdout
    if len(path_strings) == 0:
        for line in _to_property_table(cls):
            stdout.write(line)
            stdout.write('\n')
        stdout.flush()
        return
    unchecked_paths = dict.fromkeys(path_strings).keys()
    canonical_paths = {
        path_string: beanpath.find_property(
            cls, path_string, use_camel_case_mapping=use_camel_case_mapping
        )
        for path_string in unchecked_paths
    }
    if (
        len(
            path_validation_errors := [
                beanpath.InvalidPathError(
                    f'{path_string!r} does not resolve '
                    f'to a property of {cls.__qualname__!r}.'
                )
                for path_string, canonical_path in canonical_paths.items()
                if canonical_path is None
            ]
        )
        > 0
    ):
        if len(path_validation_errors) == 1:
            raise path_validation_errors[0]
        raise ExceptionGroup(
            (
                f'{len(path_validation_errors)} '
                f'out of {len(unchecked_paths)} are invalid.'
            ),
            path_validation_errors,
        )
    has_failures = False
    for canonical_path in canonical_paths.values():
        assert canonical_path is not None
        try:
            value_cls = beanpath.getter_type(cls, canonical_path)
        except Exception as error:
            stderr.write(f'Failed resolving {canonical_path!r}:\n')
            stderr.writelines(
                traceback.format_exception(
                    type(error), error, error.__traceback__
                )
            )
            stderr.flush()
            has_failures = True
            continue
        stdout.write(f'{canonical_path}: {_to_class_name(value_cls)}')
        stdout.write('\n')
        stdout.flush()
    if has_failures:
        raise SystemExit(1)


_MISSING_TYPE_PLACEHOLDER: Final = '-'
_TARGET_SEPARATOR: Final = ':'


def _load_class(target: str, /) -> type[Any]:
    module_name, separator, qualified_name = target.partition(
        _TARGET_SEPARATOR
    )
    if not separator or len(qualified_name) == 0:
        raise ValueError(
            f'Target should be in `module:QualifiedName` form, '
            f'but got {target!r}.'
        )
    result = reduce(
        getattr,
        qualified_name.split('.'),
        importlib.import_module(module_name),
    )
    if not isinstance(result, type):
        raise TypeError(f'{target!r} is not a class, but {result!r}.')
    return result


def _to_class_name(cls: type[Any] | None, /) -> str:
    if cls is None:
        return _MISSING_TYPE_PLACEHOLDER
    return cls.__qualname__


def _to_property_table(cls: type[Any], /) -> list[str]:
    view = beanpath.class_view_of(cls)
    return [
        (
            f'{name}: '
            f'{_to_class_name(_to_optional_type(view.getter, name))} '
            f'-> {_to_class_name(_to_optional_type(view.setter, name))}'
        )
        for name in dict.fromkeys(
            (*view.getter_names(), *view.setter_names())
        )
    ]


def _to_optional_type(
    lookup: Callable[[str], beanpath.Accessor], name: str, /
) -> type[Any] | None:
    try:
        accessor = lookup(name)
    except beanpath.PropertyNotFoundError:
        return None
    return accessor.value_cls


main()
