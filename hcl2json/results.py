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

"""Public API return types for hcl2json.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Note:
    Only public API return types belong in this module. Domain types (like
    the value model) and option structs (like SerializeOptions) stay
    co-located with their related logic.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ConversionResult:
    """Result from converting (and merging) HCL documents.

    Attributes:
        output: The serialized document, without trailing newline.
        sources: Inputs in merge order ("<stdin>" when read from stdin).
        merge_mode: Merge mode used ("shallow" or "deep").
        property: Extracted property path, or None for the whole document.
    """

    output: str
    sources: list[str]
    merge_mode: str
    property: str | None


@dataclass(frozen=True)
class ValidationResult:
    """Result from validating one HCL document.

    Attributes:
        source: Path of the validated file, or "stdin".
        status: "valid" or "invalid".
        error: Parser error message when invalid, else None.
    """

    source: str
    status: str
    error: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.status == "valid"

    def report_line(self) -> str:
        """One-line report, e.g. "VALID: main.tfvars"."""
        if self.is_valid:
            return f"VALID: {self.source}"
        return f"INVALID: {self.source}: {self.error}"
