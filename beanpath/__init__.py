from __future__ import annotations

from ._core.accessor import (
    Accessor,
    AmbiguousAccessor,
    FieldAccessor,
    MethodAccessor,
    PropertyAccessor,
)
from ._core.api import (
    class_view_of,
    find_property,
    get_value,
    getter_names,
    getter_type,
    has_default_constructor,
    has_getter,
    has_setter,
    set_value,
    setter_names,
    setter_type,
    view_of,
)
from ._core.class_view import ClassPropertyView
from ._core.construction import (
    DEFAULT_CONSTRUCTION_POLICY,
    ConstructionPolicy,
    DefaultConstructionPolicy,
)
from ._core.enums import AccessorKind, WrapperKind
from ._core.errors import (
    AmbiguousAccessorError,
    ConstructionError,
    IndexOutOfRangeError,
    InvalidIndexError,
    InvalidPathError,
    NoDefaultConstructorError,
    ParameterNotFoundError,
    PropertyNotFoundError,
    ReflectionError,
    UnsupportedOperationError,
)
from ._core.instance_view import NULL_VIEW, InstanceView, NullView
from ._core.metadata import TypeMetadata
from ._core.metadata_cache import DEFAULT_CACHE, TypeMetadataCache
from ._core.param_names import (
    Param,
    ParamMap,
    ParamNameResolver,
    wrap_to_mapping_if_collection,
)
from ._core.property_copier import copy_properties
from ._core.property_path import PropertyPath
from ._core.wrappers import (
    DEFAULT_WRAPPER_SELECTOR,
    BaseWrapper,
    BeanWrapper,
    DefaultWrapperSelector,
    MapWrapper,
    ObjectWrapper,
    SequenceWrapper,
    WrapperSelector,
)

__version__ = '0.1.0'
