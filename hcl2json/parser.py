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

"""HCL parsing adapter.

Wraps python-hcl2 and converts its output into the value model right away,
so nothing downstream ever sees parser dicts.

python-hcl2's stock transformer is adjusted in two places:

- Quoted string literals have their escape sequences decoded
  (``\\n``, ``\\r``, ``\\t``, ``\\"``, ``\\\\``, ``\\uNNNN``, ``\\UNNNNNNNN``).
  Heredocs are left as written, since HCL does not process backslash
  escapes in them.
- Blocks become objects instead of lists of objects. Labels nest as object
  keys, so ``resource "aws_instance" "web" { ... }`` ends up at
  ``resource.aws_instance.web``. A block written more than once under the
  same type and labels becomes a list of bodies in source order.

Other expressions come back as python-hcl2 renders them, as ``"${...}"``
strings.
"""

from __future__ import annotations

from collections import namedtuple
from pathlib import Path
import re
from typing import Any

import hcl2
from hcl2.transformer import Attribute, DictTransformer
from lark import Token
from lark.visitors import v_args

from hcl2json.exceptions import InputError, ParseError
from hcl2json.logging import get_global_logger
from hcl2json.values import Mapping, from_native

__all__ = ["STDIN_SOURCE", "decode_escapes", "parse_document", "read_document"]

STDIN_SOURCE = "<stdin>"

_ESCAPE_PATTERN = re.compile(
    r"\\(?:u([0-9a-fA-F]{4})|U([0-9a-fA-F]{8})|(.))", re.DOTALL
)

_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", '"': '"', "\\": "\\"}

_Block = namedtuple("_Block", ("keys", "body"))


def _replace_escape(match: re.Match) -> str:
    short, long, char = match.groups()
    code = short or long
    if code is not None:
        return chr(int(code, 16))
    # Unknown escapes are kept verbatim
    return _SIMPLE_ESCAPES.get(char, match.group(0))


def decode_escapes(text: str) -> str:
    """Decode the backslash escapes of an HCL quoted string.

    Example:
        ```python
        decode_escapes(r'say \\"hi\\"\\n')  # 'say "hi"\\n' with a real newline
        ```
    """
    return _ESCAPE_PATTERN.sub(_replace_escape, text)


def _string_literal(value: Any) -> str | None:
    if isinstance(value, Token) and value.type == "STRING_LIT":
        return decode_escapes(value[1:-1])
    return None


class _DocumentTransformer(DictTransformer):
    """DictTransformer that decodes string escapes and folds blocks."""

    def to_string_dollar(self, value: Any) -> Any:
        text = _string_literal(value)
        return super().to_string_dollar(value) if text is None else text

    def strip_quotes(self, value: Any) -> Any:
        text = _string_literal(value)
        return super().strip_quotes(value) if text is None else text

    @v_args(meta=True)
    def block(self, meta: Any, args: list) -> _Block:
        *labels, body = args
        return _Block(tuple(str(self.strip_quotes(label)) for label in labels), body)

    def body(self, args: list) -> dict[str, Any]:
        result: dict[str, Any] = {}
        attributes: set[str] = set()
        label_nodes: set[int] = set()
        for arg in self.strip_new_line_tokens(args):
            if isinstance(arg, Attribute):
                if arg.key in result:
                    raise RuntimeError(f"{arg.key} already defined")
                result[arg.key] = arg.value
                attributes.add(arg.key)
            else:
                if arg.keys[0] in attributes:
                    raise RuntimeError(f"{arg.keys[0]} already defined")
                _insert_block(result, arg, label_nodes)
        return result


def _insert_block(target: dict[str, Any], block: _Block, label_nodes: set[int]) -> None:
    *path, last = block.keys
    node = target
    for key in path:
        if key not in node:
            node[key] = {}
            label_nodes.add(id(node[key]))
        elif id(node[key]) not in label_nodes:
            raise RuntimeError(f"Block {' '.join(block.keys)!r} conflicts with {key!r}")
        node = node[key]

    if last not in node:
        node[last] = block.body
    elif id(node[last]) in label_nodes:
        raise RuntimeError(f"Block {' '.join(block.keys)!r} conflicts with {last!r}")
    elif isinstance(node[last], list):
        node[last].append(block.body)
    else:
        node[last] = [node[last], block.body]


def parse_document(text: str, source: str = STDIN_SOURCE) -> Mapping:
    """Parse HCL text into a Mapping.

    Args:
        text: HCL document text.
        source: Label for error messages (file path or "<stdin>").

    Returns:
        The document as a Mapping, in source key order.

    Raises:
        ParseError: If the parser rejects the text. The parser exception is
            chained as __cause__.

    """
    logger = get_global_logger()
    logger.debug("PARSE", f"Parsing {source} ({len(text)} characters)")

    if not text.endswith("\n"):
        text += "\n"
    try:
        native = _DocumentTransformer().transform(hcl2.parses(text))
    except Exception as err:
        raise ParseError(source, str(err).strip() or type(err).__name__) from err

    document = from_native(native)
    if not isinstance(document, Mapping):
        raise ParseError(source, f"expected a document body, got {document.kind}")
    return document


def read_document(path: Path) -> Mapping:
    """Read and parse one HCL file.

    Raises:
        InputError: If the file cannot be read or is not UTF-8.
        ParseError: If the file is not valid HCL.
    """
    get_global_logger().verbose("INPUT", f"Reading: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise InputError(f"Failed to read file: {path}: {err}") from err
    return parse_document(text, str(path))
