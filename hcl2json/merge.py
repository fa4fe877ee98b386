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

"""Multi-document merging for hcl2json.

Documents are folded left to right in the order they were given (command
line order, then glob expansion order), with "last wins" semantics.

Merge Modes
-----------
- **shallow**: top-level keys only. A later document's value replaces the
  earlier one for the same key, verbatim.
- **deep**: object + object -> recursive merge; anything else -> the later
  value replaces the earlier one.

In both modes lists are replaced as a whole, never concatenated or merged
element by element. Keys present in only one document pass through.

Inputs are never mutated; a new Mapping is returned.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from hcl2json.exceptions import TypeMismatchError
from hcl2json.logging import get_global_logger
from hcl2json.values import Mapping, Value

__all__ = ["MergeMode", "MERGE_MODES", "merge_documents", "merge_mappings"]

MergeMode = Literal["shallow", "deep"]

MERGE_MODES: tuple[str, ...] = ("shallow", "deep")


def _check_mode(mode: str) -> None:
    if mode not in MERGE_MODES:
        raise ValueError(
            f"Unknown merge mode: {mode!r} (expected one of: {', '.join(MERGE_MODES)})"
        )


def _deep_merge(base: Mapping, overlay: Mapping) -> Mapping:
    """Deep-merge two mappings with "overlay wins".

    Rules:
      - mapping + mapping -> deep merge
      - everything else -> overlay replaces base (lists included)
    """
    result: dict[str, Value] = dict(base.items())
    for key, value in overlay.items():
        existing = result.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(existing, value)
        else:
            result[key] = value
    return Mapping.from_pairs(result.items())


def merge_mappings(base: Mapping, overlay: Mapping, mode: MergeMode = "shallow") -> Mapping:
    """Merge one mapping on top of another.

    Args:
        base: The accumulated mapping.
        overlay: The mapping that takes precedence.
        mode: "shallow" or "deep".

    Returns:
        A new mapping. Existing keys keep their position, new keys are
        appended in overlay order.

    Raises:
        ValueError: If mode is not a known merge mode.

    """
    _check_mode(mode)
    if mode == "deep":
        return _deep_merge(base, overlay)
    result: dict[str, Value] = dict(base.items())
    result.update(overlay.items())
    return Mapping.from_pairs(result.items())


def merge_documents(
    documents: Iterable[Value],
    mode: MergeMode = "shallow",
    sources: Iterable[str] | None = None,
) -> Mapping:
    """Merge parsed documents into a single mapping.

    Args:
        documents: Document roots in merge order. Each must be a Mapping.
        mode: "shallow" (default) or "deep".
        sources: Optional labels (usually file paths) aligned with
            documents, used only for error reporting.

    Returns:
        The merged mapping. An empty input yields an empty Mapping.

    Raises:
        TypeMismatchError: If any document root is not a Mapping. All
            roots are checked before merging starts.
        ValueError: If mode is not a known merge mode.

    Example:
        Shallow vs deep:
            ```python
            a = from_native({"tags": {"Team": "backend"}})
            b = from_native({"tags": {"Environment": "prod"}})

            merge_documents([a, b])          # {"tags": {"Environment": "prod"}}
            merge_documents([a, b], "deep")  # both tags kept
            ```

    """
    _check_mode(mode)
    docs = list(documents)
    labels = list(sources) if sources is not None else []

    for index, doc in enumerate(docs):
        if not isinstance(doc, Mapping):
            source = labels[index] if index < len(labels) else None
            raise TypeMismatchError(index, getattr(doc, "kind", type(doc).__name__), source)

    logger = get_global_logger()
    logger.verbose("MERGE", f"Merging {len(docs)} document(s) ({mode} mode)")

    merged = Mapping()
    for index, doc in enumerate(docs):
        if index < len(labels):
            logger.debug("MERGE", f"Applying {labels[index]} ({len(doc)} top-level keys)")
        merged = merge_mappings(merged, doc, mode)

    logger.verbose("MERGE", f"Merged result has {len(merged)} top-level key(s)")
    return merged
