from __future__ import annotations

from collections.abc import Iterator
from typing import Any, ClassVar

from typing_extensions import Self

from .errors import InvalidPathError


class PropertyPath:
    INDEX_CLOSE: ClassVar = ']'
    INDEX_OPEN: ClassVar = '['
    SEGMENT_SEPARATOR: ClassVar = '.'

    @classmethod
    def parse(cls, path: str, /) -> Self:
        if not isinstance(path, str):
            raise InvalidPathError(
                f'Property path should be a string, but got {path!r}.'
            )
        heads = path.split(cls.SEGMENT_SEPARATOR)
        # malformed remainders are rejected before anything is walked
        components = [cls._split_head(head, path) for head in heads]
        result: Self | None = None
        children: str | None = None
        for head, (name, index) in zip(reversed(heads), reversed(components)):
            result = cls(name, index, head, children, result)
            children = (
                head
                if children is None
                else cls.SEGMENT_SEPARATOR.join((head, children))
            )
        assert result is not None, path
        return result

    @property
    def children(self, /) -> str | None:
        return self._children

    @property
    def index(self, /) -> str | None:
        return self._index

    @property
    def indexed_name(self, /) -> str:
        return self._indexed_name

    @property
    def name(self, /) -> str:
        return self._name

    @property
    def remainder(self, /) -> Self | None:
        return self._remainder

    def has_remainder(self, /) -> bool:
        return self._children is not None

    def segments(self, /) -> Iterator[Self]:
        segment: Self | None = self
        while segment is not None:
            yield segment
            segment = segment.remainder

    @classmethod
    def _split_head(cls, head: str, path: str, /) -> tuple[str, str | None]:
        open_position = head.find(cls.INDEX_OPEN)
        if open_position < 0:
            if cls.INDEX_CLOSE in head or len(head) == 0:
                raise InvalidPathError(
                    f'Invalid segment {head!r} of property path {path!r}.'
                )
            return head, None
        name, index = head[:open_position], head[open_position + 1 : -1]
        if (
            not head.endswith(cls.INDEX_CLOSE)
            or len(index) == 0
            or cls.INDEX_OPEN in index
            or cls.INDEX_CLOSE in index
        ):
            raise InvalidPathError(
                f'Invalid indexed segment {head!r} '
                f'of property path {path!r}.'
            )
        return name, index

    _children: str | None
    _index: str | None
    _indexed_name: str
    _name: str
    _remainder: Self | None

    __slots__ = '_children', '_index', '_indexed_name', '_name', '_remainder'

    def __new__(
        cls,
        name: str,
        index: str | None,
        indexed_name: str,
        children: str | None,
        remainder: Self | None = None,
        /,
    ) -> Self:
        assert len(name) > 0 or index is not None, (name, index)
        self = super().__new__(cls)
        self._children, self._index, self._indexed_name, self._name = (
            children,
            index,
            indexed_name,
            name,
        )
        self._remainder = (
            remainder
            if remainder is not None or children is None
            else type(self).parse(children)
        )
        return self

    def __eq__(self, other: Any, /) -> Any:
        return (
            (
                self._name == other._name
                and self._index == other._index
                and self._children == other._children
            )
            if isinstance(other, type(self))
            else NotImplemented
        )

    def __hash__(self, /) -> int:
        return hash((self._name, self._index, self._children))

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            f'({self._name!r}, {self._index!r}, '
            f'{self._indexed_name!r}, {self._children!r})'
        )

    def __str__(self, /) -> str:
        if self._children is None:
            return self._indexed_name
        return self.SEGMENT_SEPARATOR.join(
            (self._indexed_name, self._children)
        )
