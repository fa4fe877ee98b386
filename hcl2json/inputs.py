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

"""Input file pattern expansion.

Patterns are expanded in the order given. Matches of a single pattern are
sorted so merge order does not depend on directory listing order. A path
matched by more than one pattern is used once, at its first position.
"""

from __future__ import annotations

from collections.abc import Iterable
import glob
from pathlib import Path

from hcl2json.exceptions import InputError
from hcl2json.logging import get_global_logger

__all__ = ["expand_patterns"]


def expand_patterns(patterns: Iterable[str]) -> list[Path]:
    """Expand file patterns into an ordered list of files.

    Args:
        patterns: Literal paths or glob patterns (``*``, ``?``, ``[...]``,
            and recursive ``**``).

    Returns:
        Matched file paths. Directories matched by a pattern are skipped.

    Raises:
        InputError: If a pattern matches no files.

    Example:
        ```python
        expand_patterns(["base.tfvars", "env/*.tfvars"])
        # [Path('base.tfvars'), Path('env/dev.tfvars'), Path('env/prod.tfvars')]
        ```

    """
    logger = get_global_logger()
    seen: set[Path] = set()
    paths: list[Path] = []

    for pattern in patterns:
        matches = sorted(
            Path(match)
            for match in glob.glob(pattern, recursive=True)
            if Path(match).is_file()
        )
        if not matches:
            raise InputError(f"No files matched: {pattern}")
        logger.debug("INPUT", f"Pattern {pattern!r} matched {len(matches)} file(s)")
        for path in matches:
            if path not in seen:
                seen.add(path)
                paths.append(path)

    return paths
