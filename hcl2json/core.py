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

"""Core orchestration for hcl2json.

This module wires the conversion pipeline together:

    expand patterns -> read + parse each file -> merge -> extract -> serialize

Design Principles:

- Each stage is a pure function over immutable value trees
- Parsing happens file by file; merging is a left-to-right fold
- Errors are typed exceptions; the CLI layer formats them for display
- Nothing here writes output; the caller decides where it goes

Example:
    Programmatic usage:
        ```python
        from hcl2json.core import ConvertOptions, convert
        from hcl2json.serializer import SerializeOptions

        options = ConvertOptions(
            merge_mode="deep",
            property="tags",
            format=SerializeOptions(pretty=True),
        )
        result = convert(["base.tfvars", "env/prod.tfvars"], options)
        print(result.output)
        ```

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from hcl2json.exceptions import InputError
from hcl2json.extract import extract_property
from hcl2json.inputs import expand_patterns
from hcl2json.logging import get_global_logger
from hcl2json.merge import MERGE_MODES, MergeMode, merge_documents
from hcl2json.parser import STDIN_SOURCE, parse_document, read_document
from hcl2json.results import ConversionResult
from hcl2json.serializer import SerializeOptions, serialize
from hcl2json.values import Mapping, Value


@dataclass(frozen=True)
class ConvertOptions:
    """Options for a conversion run.

    Attributes:
        merge_mode: "shallow" (default) or "deep".
        property: Dotted path to extract after merging. None or "" means the
            whole document.
        format: Serializer options.
    """

    merge_mode: MergeMode = "shallow"
    property: str | None = None
    format: SerializeOptions = field(default_factory=SerializeOptions)

    def __post_init__(self) -> None:
        if self.merge_mode not in MERGE_MODES:
            raise ValueError(f"Unknown merge mode: {self.merge_mode!r}")


def load_documents(
    patterns: Sequence[str], stdin_text: str | None = None
) -> tuple[list[Mapping], list[str]]:
    """Parse every input into a document.

    Args:
        patterns: File paths or glob patterns. When empty, stdin_text is used.
        stdin_text: Document text read from stdin.

    Returns:
        Tuple (documents, sources) in merge order.

    Raises:
        InputError: If nothing was provided, or a pattern matches nothing.
        ParseError: If any document is not valid HCL. Nothing is returned
            for the other documents in that case.

    """
    if patterns:
        paths = expand_patterns(patterns)
        return [read_document(path) for path in paths], [str(path) for path in paths]

    if stdin_text is None or not stdin_text.strip():
        raise InputError("No input provided")
    return [parse_document(stdin_text, STDIN_SOURCE)], [STDIN_SOURCE]


def convert(
    patterns: Sequence[str],
    options: ConvertOptions | None = None,
    stdin_text: str | None = None,
) -> ConversionResult:
    """Convert HCL inputs to JSON text.

    Steps
      1) Expand patterns and parse each file (or the stdin text).
      2) Merge the documents in order (shallow or deep).
      3) Extract options.property if set.
      4) Serialize with options.format.

    Raises:
        InputError: Missing input or unmatched pattern.
        ParseError: Invalid HCL in any input.
        TypeMismatchError: A document root is not an object.
        PropertyNotFoundError: options.property does not resolve.

    """
    if options is None:
        options = ConvertOptions()
    logger = get_global_logger()

    documents, sources = load_documents(patterns, stdin_text)
    logger.verbose("INPUT", f"Loaded {len(documents)} document(s)")

    merged = merge_documents(documents, options.merge_mode, sources)

    result: Value = merged
    if options.property:
        result = extract_property(merged, options.property)

    fmt = options.format
    logger.verbose(
        "FORMAT",
        f"Serializing ({'pretty, indent ' + str(fmt.indent) if fmt.pretty else 'compact'}, "
        f"{fmt.quote_style} quotes)",
    )
    output = serialize(result, fmt)

    return ConversionResult(
        output=output,
        sources=sources,
        merge_mode=options.merge_mode,
        property=options.property or None,
    )
