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

"""HCL syntax validation.

Validation only asks the parser whether each document is accepted. No
merging, extraction or serialization happens. Every file is checked on
its own: one invalid file does not stop the others from being reported.

Example:
    ```python
    from hcl2json.validation import validate_inputs

    for result in validate_inputs(["*.tfvars"]):
        print(result.report_line())
    # VALID: dev.tfvars
    # INVALID: prod.tfvars: Unexpected token ...
    ```

"""

from __future__ import annotations

from collections.abc import Sequence

from hcl2json.exceptions import InputError, ParseError
from hcl2json.inputs import expand_patterns
from hcl2json.logging import get_global_logger
from hcl2json.parser import parse_document, read_document
from hcl2json.results import ValidationResult

__all__ = ["validate_inputs"]


def validate_inputs(
    patterns: Sequence[str], stdin_text: str | None = None
) -> list[ValidationResult]:
    """Validate HCL syntax for each input.

    Args:
        patterns: File paths or glob patterns. When empty, stdin_text is
            validated instead and reported as "stdin".
        stdin_text: Document text read from stdin.

    Returns:
        One ValidationResult per file, in expansion order.

    Raises:
        InputError: If nothing was provided or a pattern matches nothing.

    """
    logger = get_global_logger()

    if not patterns:
        if stdin_text is None:
            raise InputError("No files or input provided for validation")
        try:
            parse_document(stdin_text)
        except ParseError as err:
            return [ValidationResult(source="stdin", status="invalid", error=err.detail)]
        return [ValidationResult(source="stdin", status="valid")]

    results: list[ValidationResult] = []
    for path in expand_patterns(patterns):
        try:
            read_document(path)
        except ParseError as err:
            logger.verbose("VALIDATE", f"[X] {path}")
            results.append(
                ValidationResult(source=str(path), status="invalid", error=err.detail)
            )
            continue
        except InputError as err:
            logger.verbose("VALIDATE", f"[X] {path}")
            results.append(ValidationResult(source=str(path), status="invalid", error=str(err)))
            continue
        logger.verbose("VALIDATE", f"[OK] {path}")
        results.append(ValidationResult(source=str(path), status="valid"))

    return results
