from __future__ import annotations

from enum import Enum


class AccessorKind(str, Enum):
    AMBIGUOUS = 'AMBIGUOUS'
    FIELD = 'FIELD'
    METHOD = 'METHOD'
    PROPERTY = 'PROPERTY'

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}.{self.name}'


class WrapperKind(str, Enum):
    BEAN = 'BEAN'
    CUSTOM = 'CUSTOM'
    MAP = 'MAP'
    SEQUENCE = 'SEQUENCE'

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}.{self.name}'
