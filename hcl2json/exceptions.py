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

"""Exception hierarchy for hcl2json.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors. All exceptions inherit
from HCL2JSONError, allowing users to catch all hcl2json errors with a
single except clause if needed.

Every exception carries structured attributes in addition to its message,
so callers can render their own reports instead of parsing strings.

Example:
    Catching specific error types:
        ```python
        from hcl2json.core import convert
        from hcl2json.exceptions import ParseError, PropertyNotFoundError

        try:
            result = convert(["main.tfvars"], options)
        except ParseError as e:
            print(f"{e.source} is not valid HCL: {e.detail}")
        except PropertyNotFoundError as e:
            print(f"Try one of: {', '.join(e.available)}")
        ```

    Catching all hcl2json errors:
        ```python
        from hcl2json.exceptions import HCL2JSONError

        try:
            result = convert(["*.tfvars"], options)
        except HCL2JSONError as e:
            print(f"Error: {e}")
        ```
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "HCL2JSONError",
    "ParseError",
    "TypeMismatchError",
    "PropertyNotFoundError",
    "InputError",
    "ConfigError",
]


class HCL2JSONError(Exception):
    """Base exception for all hcl2json errors.

    All hcl2json-specific exceptions inherit from this class, allowing users
    to catch all hcl2json errors with a single except clause if needed.
    """

    pass


class ParseError(HCL2JSONError):
    """Raised when the HCL parser rejects a document.

    The parser's own exception is chained as ``__cause__``; its message is
    kept verbatim in ``detail``.

    Attributes:
        source: Path of the offending file, or "<stdin>".
        detail: Message reported by the parser.
    """

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        self.detail = detail
        super().__init__(f"Failed to parse HCL content in {source}: {detail}")


class TypeMismatchError(HCL2JSONError):
    """Raised when a document root is not a mapping and cannot be merged.

    Attributes:
        index: Zero-based position of the document in merge order.
        source: Path of the document when known, else None.
        actual: Kind of the offending root value (e.g., "sequence").
    """

    def __init__(self, index: int, actual: str, source: str | None = None) -> None:
        self.index = index
        self.actual = actual
        self.source = source
        where = f"document {index}" if source is None else f"document {index} ({source})"
        super().__init__(
            f"Cannot merge {where}: root must be an object, got {actual}"
        )


class PropertyNotFoundError(HCL2JSONError):
    """Raised when a dotted property path does not resolve.

    Attributes:
        path: The full requested path (e.g., "database.engine").
        segment: The segment that failed to resolve.
        parent: Dotted prefix that resolved before the failure ("" at root).
        available: Sorted sibling keys at the failure point. Empty when the
            value at ``parent`` is not an object.
        found_kind: Kind of the value at ``parent`` when it is not an
            object, else None.
    """

    def __init__(
        self,
        path: str,
        segment: str,
        parent: str,
        available: Iterable[str] = (),
        found_kind: str | None = None,
    ) -> None:
        self.path = path
        self.segment = segment
        self.parent = parent
        self.available = tuple(sorted(available))
        self.found_kind = found_kind
        if found_kind is not None:
            message = (
                f"Cannot access property '{segment}' on non-object at path "
                f"'{parent}' (found {found_kind})"
            )
        else:
            at = f"{parent}.{segment}" if parent else segment
            message = (
                f"Property '{path}' not found at '{at}' "
                f"(available properties: {', '.join(self.available)})"
            )
        super().__init__(message)


class InputError(HCL2JSONError):
    """Raised for input problems outside the parser.

    This covers:

    - Glob patterns that match no files
    - Files that cannot be read (permissions, encoding)
    - Missing input when neither files nor stdin content were given
    """

    pass


class ConfigError(HCL2JSONError):
    """Raised for settings file problems.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure)
    - Unknown settings keys
    - Invalid setting values (e.g., a non-positive indent)
    - A --config file that does not exist
    """

    pass
