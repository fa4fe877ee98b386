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

"""Deterministic JSON text output for value trees.

Output Rules
------------
- Object keys are sorted by code point at every level, whatever the source
  or merge order was. The same tree always produces the same bytes.
- Compact mode: no whitespace at all, ``{"k":v}`` and ``[v,w]``.
- Pretty mode: one member per line, ``indent`` spaces per nesting level,
  ``": "`` after keys. Empty objects and lists stay inline as ``{}``/``[]``.
- No trailing newline in either mode.

Quoting
-------
The quote style picks the delimiter for strings and keys (``"`` or ``'``).
The active delimiter and backslash are always escaped with a backslash;
the other quote character is written as-is. Control characters use the
JSON escapes (``\\n``, ``\\t``, ``\\u001b``...). Non-ASCII text is written
unescaped.

Numbers
-------
Numbers keep their parsed type: ints print without a decimal point
(``3306``), floats print the shortest digits that round-trip (``8.0``,
``0.1``). Floats whose decimal exponent lies in [-7, 20] are written in
plain notation (``10000000000000000.0``, ``0.0000001``); outside that
range they use an exponent (``1e+21``, ``1e-08``).

Example:
    ```python
    from hcl2json.serializer import SerializeOptions, serialize
    from hcl2json.values import from_native

    value = from_native({"b": [1, 2], "a": "x"})
    serialize(value)                                   # '{"a":"x","b":[1,2]}'
    serialize(value, SerializeOptions(quote_style="single"))
    # "{'a':'x','b':[1,2]}"
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from hcl2json.values import Bool, Mapping, Null, Number, Sequence, String, Value

__all__ = ["QuoteStyle", "QUOTE_STYLES", "SerializeOptions", "serialize", "quote_string"]

QuoteStyle = Literal["double", "single"]

QUOTE_STYLES: dict[str, str] = {"double": '"', "single": "'"}

# Decimal exponents written without scientific notation
_PLAIN_EXPONENTS = range(-7, 21)

_CONTROL_ESCAPES: dict[str, str] = {
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


@dataclass(frozen=True)
class SerializeOptions:
    """Formatting options for serialize().

    Attributes:
        pretty: Multi-line output when True, compact otherwise.
        indent: Spaces per nesting level; only used when pretty.
        quote_style: "double" (default) or "single".

    """

    pretty: bool = False
    indent: int = 2
    quote_style: QuoteStyle = "double"

    def __post_init__(self) -> None:
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise ValueError(f"indent must be an integer, got {self.indent!r}")
        if self.indent < 1:
            raise ValueError(f"indent must be a positive integer, got {self.indent}")
        if self.quote_style not in QUOTE_STYLES:
            raise ValueError(
                f"Unknown quote style: {self.quote_style!r} "
                f"(expected one of: {', '.join(QUOTE_STYLES)})"
            )

    @property
    def delimiter(self) -> str:
        return QUOTE_STYLES[self.quote_style]


def quote_string(text: str, delimiter: str = '"') -> str:
    """Wrap text in delimiter, escaping what the delimiter requires."""
    out = [delimiter]
    for ch in text:
        if ch == delimiter or ch == "\\":
            out.append("\\" + ch)
        elif ch in _CONTROL_ESCAPES:
            out.append(_CONTROL_ESCAPES[ch])
        elif ord(ch) < 0x20:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    out.append(delimiter)
    return "".join(out)


def _format_float(value: float) -> str:
    digits = Decimal(repr(value))
    if digits.adjusted() not in _PLAIN_EXPONENTS:
        return repr(value)
    text = format(digits, "f")
    return text if "." in text else text + ".0"


def _format_number(number: Number) -> str:
    if number.is_integer:
        return str(number.value)
    return _format_float(number.value)


def _emit(value: Value, options: SerializeOptions, depth: int, out: list[str]) -> None:
    if isinstance(value, Null):
        out.append("null")
    elif isinstance(value, Bool):
        out.append("true" if value.value else "false")
    elif isinstance(value, Number):
        out.append(_format_number(value))
    elif isinstance(value, String):
        out.append(quote_string(value.value, options.delimiter))
    elif isinstance(value, Sequence):
        if not value.items:
            out.append("[]")
            return
        out.append("[")
        for position, item in enumerate(value.items):
            if position:
                out.append(",")
            _newline(options, depth + 1, out)
            _emit(item, options, depth + 1, out)
        _newline(options, depth, out)
        out.append("]")
    elif isinstance(value, Mapping):
        if not value.entries:
            out.append("{}")
            return
        separator = ": " if options.pretty else ":"
        out.append("{")
        for position, key in enumerate(sorted(value.keys())):
            if position:
                out.append(",")
            _newline(options, depth + 1, out)
            out.append(quote_string(key, options.delimiter))
            out.append(separator)
            _emit(value[key], options, depth + 1, out)
        _newline(options, depth, out)
        out.append("}")
    else:
        raise TypeError(f"Cannot serialize {type(value).__name__}")


def _newline(options: SerializeOptions, depth: int, out: list[str]) -> None:
    if options.pretty:
        out.append("\n" + " " * (options.indent * depth))


def serialize(value: Value, options: SerializeOptions | None = None) -> str:
    """Serialize a value tree to JSON text.

    Args:
        value: Any value tree, full document or extracted sub-value.
        options: Formatting options. Defaults to compact, double quotes.

    Returns:
        The encoded text without a trailing newline.

    Raises:
        TypeError: If the tree contains something that is not a Value.

    """
    if options is None:
        options = SerializeOptions()
    out: list[str] = []
    _emit(value, options, 0, out)
    return "".join(out)
