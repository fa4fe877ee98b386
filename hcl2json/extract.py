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

"""Dotted-path property extraction.

A path such as ``database.engine`` is split on ``.`` and each segment is
looked up as an object key. List indexing is not supported. The returned
value is the sub-tree itself, not a copy; value trees are immutable.
"""

from __future__ import annotations

from hcl2json.exceptions import PropertyNotFoundError
from hcl2json.logging import get_global_logger
from hcl2json.values import Mapping, Value

__all__ = ["extract_property", "split_path"]


def split_path(path: str) -> list[str]:
    """Split a dotted path into its key segments."""
    return path.split(".")


def extract_property(root: Value, path: str) -> Value:
    """Return the value found at a dotted path.

    Args:
        root: The (usually merged) document.
        path: Non-empty dotted path, e.g. "database.engine".

    Returns:
        The value at the path.

    Raises:
        ValueError: If path is empty. Callers skip extraction instead.
        PropertyNotFoundError: If a segment is missing, or a value along the
            path is not an object. Carries the sorted keys available at the
            point of failure.

    """
    if not path:
        raise ValueError("Property path must not be empty")

    logger = get_global_logger()
    logger.verbose("EXTRACT", f"Extracting property: {path}")

    segments = split_path(path)
    current = root
    for depth, segment in enumerate(segments):
        parent = ".".join(segments[:depth])
        if not isinstance(current, Mapping):
            raise PropertyNotFoundError(path, segment, parent, found_kind=current.kind)
        if segment not in current:
            raise PropertyNotFoundError(path, segment, parent, available=current.keys())
        current = current[segment]
        logger.debug("EXTRACT", f"Resolved '{segment}' -> {current.kind}")

    return current
