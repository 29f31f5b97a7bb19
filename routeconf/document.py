"""In-memory TOML document: tables and arrays of raw values.

Scalars are kept as the raw text they had in the document. The typed
accessors (``string``, ``bool``, ``int``, ``float``, ``timestamp``) interpret
that text on demand.
"""

from __future__ import annotations

from typing import Callable, TypeVar, Union

from .text import TomlError, to_string
from .values import Timestamp, to_bool, to_float, to_int, to_timestamp, value_type

_T = TypeVar("_T")

Item = Union[str, "Array", "Table"]


def _key_exists(lineno: int | None) -> TomlError:
    return TomlError("key exists", lineno)


class Array:
    """An ordered list of raw values, arrays or tables.

    ``kind`` is ``'v'`` (values), ``'a'`` (arrays), ``'t'`` (tables),
    ``'m'`` (mixed) or ``''`` while nothing decided it yet.
    """

    def __init__(self, key: str | None = None, kind: str = "") -> None:
        self.key = key
        self.kind = kind
        self._type = ""
        self._items: list[Item] = []

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Array(key={self.key!r}, kind={self.kind!r}, items={len(self._items)})"

    @property
    def type(self) -> str:
        """Type of the values for a value array, ``''`` otherwise.

        One of ``i``, ``d``, ``b``, ``s``, ``t``, ``D``, ``T``, ``u`` or ``m``.
        """
        if self.kind != "v" or not self._items:
            return ""
        return self._type

    def _item(self, index: int) -> Item:
        if not 0 <= index < len(self._items):
            raise IndexError(f"array index {index} out of range")
        return self._items[index]

    def raw(self, index: int) -> str | None:
        """Raw text of the value at ``index``, or ``None`` if it is not a value."""
        item = self._item(index)
        return item if isinstance(item, str) else None

    def array(self, index: int) -> Array | None:
        """The nested array at ``index``, or ``None`` if it is not an array."""
        item = self._item(index)
        return item if isinstance(item, Array) else None

    def table(self, index: int) -> Table | None:
        """The table at ``index``, or ``None`` if it is not a table."""
        item = self._item(index)
        return item if isinstance(item, Table) else None

    def _convert(self, index: int, convert: Callable[[str | None], _T]) -> _T:
        return convert(self.raw(index))

    def string(self, index: int) -> str:
        return self._convert(index, to_string)

    def bool(self, index: int) -> bool:
        return self._convert(index, to_bool)

    def int(self, index: int) -> int:
        return self._convert(index, to_int)

    def float(self, index: int) -> float:
        return self._convert(index, to_float)

    def timestamp(self, index: int) -> Timestamp:
        return self._convert(index, to_timestamp)

    # Building, used while parsing.

    def _note_kind(self, kind: str) -> None:
        if not self.kind:
            self.kind = kind
        elif self.kind != kind:
            self.kind = "m"

    def _append_value(self, raw: str) -> None:
        self._note_kind("v")
        self._items.append(raw)
        vtype = value_type(raw)
        if len(self._items) == 1:
            self._type = vtype
        elif self._type != vtype:
            self._type = "m"

    def _append_array(self) -> Array:
        self._note_kind("a")
        sub = Array()
        self._items.append(sub)
        return sub

    def _append_table(self, key: str | None = None) -> Table:
        self._note_kind("t")
        sub = Table(key)
        self._items.append(sub)
        return sub


class Table:
    """A TOML table holding raw values, arrays and sub-tables by key."""

    def __init__(self, key: str | None = None, implicit: bool = False) -> None:
        self.key = key
        self.implicit = implicit
        self.readonly = False
        self._values: dict[str, str] = {}
        self._arrays: dict[str, Array] = {}
        self._tables: dict[str, Table] = {}

    def __repr__(self) -> str:
        return f"Table(key={self.key!r}, keys={self.keys()!r})"

    def keys(self) -> list[str]:
        """All keys: values first, then arrays, then tables, each in insertion order."""
        return [*self._values, *self._arrays, *self._tables]

    def __contains__(self, key: object) -> bool:
        return key in self._values or key in self._arrays or key in self._tables

    def raw(self, key: str) -> str | None:
        """Raw text of the value under ``key``, or ``None``."""
        return self._values.get(key)

    def table(self, key: str) -> Table | None:
        return self._tables.get(key)

    def array(self, key: str) -> Array | None:
        return self._arrays.get(key)

    def _convert(self, key: str, convert: Callable[[str | None], _T]) -> _T:
        try:
            raw = self._values[key]
        except KeyError:
            raise KeyError(key) from None
        return convert(raw)

    def string(self, key: str) -> str:
        return self._convert(key, to_string)

    def bool(self, key: str) -> bool:
        return self._convert(key, to_bool)

    def int(self, key: str) -> int:
        return self._convert(key, to_int)

    def float(self, key: str) -> float:
        return self._convert(key, to_float)

    def timestamp(self, key: str) -> Timestamp:
        return self._convert(key, to_timestamp)

    # Building, used while parsing.

    def _kind(self, key: str) -> str | None:
        """``'v'``, ``'a'`` or ``'t'`` for what ``key`` holds, ``None`` if absent."""
        if key in self._values:
            return "v"
        if key in self._arrays:
            return "a"
        if key in self._tables:
            return "t"
        return None

    def _add_value(self, key: str, raw: str, lineno: int | None = None) -> None:
        if key in self:
            raise _key_exists(lineno)
        self._values[key] = raw

    def _add_array(self, key: str, kind: str = "", lineno: int | None = None) -> Array:
        if key in self:
            raise _key_exists(lineno)
        arr = Array(key, kind)
        self._arrays[key] = arr
        return arr

    def _add_table(
        self, key: str, lineno: int | None = None, implicit: bool = False
    ) -> Table:
        """Create a sub-table.

        An existing implicitly created table under the same key is made
        explicit and returned instead of raising.
        """
        if key in self:
            existing = self._tables.get(key)
            if existing is not None and existing.implicit and not implicit:
                existing.implicit = False
                return existing
            raise _key_exists(lineno)
        tab = Table(key, implicit=implicit)
        self._tables[key] = tab
        return tab