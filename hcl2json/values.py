# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Value model shared by every hcl2json stage.

The parser output is converted once, eagerly, into the closed set of
variants defined here. Merge, extraction and serialization operate only
on these types and never on raw parser dicts.

Variants:

- Null
- Bool(value)
- Number(value): int or float, kept as typed so 3306 stays 3306 and
    8.0 stays 8.0
- String(value)
- Sequence(items): ordered tuple of values
- Mapping(entries): ordered tuple of (key, value) pairs with unique keys

All variants are frozen dataclasses. Mapping keeps source order so "last
wins" merging is computable, while equality ignores key order.

Example:
    Converting parser output:
        ```python
        from hcl2json.values import Mapping, String, from_native

        doc = from_native({"region": "us-west-2", "tags": {"Team": "backend"}})
        assert isinstance(doc, Mapping)
        assert doc["region"] == String("us-west-2")
        ```

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
import math
from typing import Any, ClassVar, Union

__all__ = [
    "Null",
    "Bool",
    "Number",
    "String",
    "Sequence",
    "Mapping",
    "Value",
    "NULL",
    "from_native",
    "to_native",
]


@dataclass(frozen=True)
class Null:
    """The null value."""

    kind: ClassVar[str] = "null"


@dataclass(frozen=True)
class Bool:
    """A boolean value."""

    kind: ClassVar[str] = "bool"

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"Bool requires a bool, got {type(self.value).__name__}")


@dataclass(frozen=True)
class Number:
    """A numeric value stored as the parser typed it.

    Attributes:
        value: An int for integral literals, a float otherwise. Non-finite
            floats are rejected since they have no text form.

    """

    kind: ClassVar[str] = "number"

    value: int | float

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(
                f"Number requires an int or float, got {type(self.value).__name__}"
            )
        if isinstance(self.value, float) and not math.isfinite(self.value):
            raise ValueError(f"Number must be finite, got {self.value!r}")

    @property
    def is_integer(self) -> bool:
        """True when the number was typed as an integer."""
        return isinstance(self.value, int)


@dataclass(frozen=True)
class String:
    """A text value."""

    kind: ClassVar[str] = "string"

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"String requires a str, got {type(self.value).__name__}")


@dataclass(frozen=True)
class Sequence:
    """An ordered list of values. Element order is significant."""

    kind: ClassVar[str] = "sequence"

    items: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable, store a tuple
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]


@dataclass(frozen=True, eq=False)
class Mapping:
    """An ordered association of string keys to values.

    Keys are unique. Entries stay in the order they were inserted; equality
    and hashing ignore that order.

    Attributes:
        entries: Tuple of (key, value) pairs in source order.

    """

    kind: ClassVar[str] = "mapping"

    entries: tuple[tuple[str, Value], ...] = ()
    _index: dict[str, Value] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        entries = tuple(tuple(pair) for pair in self.entries)
        index: dict[str, Value] = {}
        for key, value in entries:
            if not isinstance(key, str):
                raise TypeError(f"Mapping keys must be str, got {type(key).__name__}")
            if key in index:
                raise ValueError(f"Duplicate key in mapping: {key!r}")
            index[key] = value
        object.__setattr__(self, "entries", entries)
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Value]]) -> Mapping:
        """Build a mapping from (key, value) pairs, keeping their order."""
        return cls(tuple(pairs))

    def keys(self) -> list[str]:
        """Keys in insertion order."""
        return [key for key, _ in self.entries]

    def items(self) -> tuple[tuple[str, Value], ...]:
        return self.entries

    def get(self, key: str, default: Value | None = None) -> Value | None:
        return self._index.get(key, default)

    def __getitem__(self, key: str) -> Value:
        return self._index[key]

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self._index == other._index

    def __hash__(self) -> int:
        return hash(frozenset(self.entries))


Value = Union[Null, Bool, Number, String, Sequence, Mapping]

NULL = Null()


def from_native(obj: Any) -> Value:
    """Convert plain Python data into the value model.

    Args:
        obj: Parser output built from dict, list, tuple, str, int, float,
            bool and None.

    Returns:
        The equivalent value tree. Dict insertion order is preserved.

    Raises:
        TypeError: If obj (or anything nested in it) has an unsupported type
            or a non-string dict key.
        ValueError: If a float is NaN or infinite.

    """
    if obj is None:
        return NULL
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, (int, float)):
        return Number(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, dict):
        return Mapping.from_pairs((key, from_native(val)) for key, val in obj.items())
    if isinstance(obj, (list, tuple)):
        return Sequence(tuple(from_native(item) for item in obj))
    raise TypeError(f"Unsupported value type: {type(obj).__name__}")


def to_native(value: Value) -> Any:
    """Convert a value tree back into plain Python data.

    Mappings become dicts in insertion order, sequences become lists.
    """
    if isinstance(value, Null):
        return None
    if isinstance(value, (Bool, Number, String)):
        return value.value
    if isinstance(value, Sequence):
        return [to_native(item) for item in value.items]
    if isinstance(value, Mapping):
        return {key: to_native(val) for key, val in value.entries}
    raise TypeError(f"Not a value: {type(value).__name__}")
