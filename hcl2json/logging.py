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

"""Diagnostic output for the conversion pipeline.

Each stage reports through one process-wide logger, looked up with
get_global_logger(). Library callers get a SilentLogger unless they
install something else. The CLI installs a DefaultLogger built from
``--verbose`` and ``--debug``.

Messages are tagged with the stage that emitted them:

- INPUT: pattern expansion and file reads
- PARSE: parser calls
- MERGE: document folding
- EXTRACT: property path resolution
- FORMAT: serializer options
- CONFIG: settings files
- VALIDATE: per-file validation results

``verbose`` lines describe what the pipeline is doing (which files, which
merge mode). ``debug`` lines add per-step detail such as resolved path
segments and the effective settings.

Lines are written to stderr as ``[TAG] message``. stdout only ever carries
the converted document, so ``hcl2json -f a.tfvars -v > out.json`` gives a
clean file.

Example:
    ```python
    import io

    from hcl2json.core import convert
    from hcl2json.logging import DefaultLogger, set_global_logger

    trace = io.StringIO()
    set_global_logger(DefaultLogger(verbose=True, stream=trace))
    convert(["a.tfvars", "b.tfvars"])
    print(trace.getvalue())
    # [INPUT] Reading: a.tfvars
    # ...
    # [MERGE] Merging 2 document(s) (shallow mode)
    ```

"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class Logger(Protocol):
    """What pipeline stages need from a logger."""

    def verbose(self, prefix: str, message: str) -> None:
        """Report a pipeline-level event, tagged with its stage."""
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Report fine-grained detail, tagged with its stage."""
        ...


class DefaultLogger:
    """Writes tagged lines to a text stream (stderr unless told otherwise).

    ``debug=True`` turns on verbose lines too.
    """

    def __init__(
        self, verbose: bool = False, debug: bool = False, stream: TextIO | None = None
    ) -> None:
        self._verbose = verbose or debug
        self._debug = debug
        # None: look up sys.stderr at write time
        self._stream = stream

    def _write(self, prefix: str, message: str) -> None:
        print(f"[{prefix}] {message}", file=sys.stderr if self._stream is None else self._stream)

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            self._write(prefix, message)

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            self._write(prefix, message)


class SilentLogger:
    """Discards everything. The default for library use."""

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Build the logger the CLI installs for ``-v`` / ``-d``."""
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Return the logger pipeline stages should report to."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Install the logger every pipeline stage reports to.

    Tests swap in a SilentLogger or a DefaultLogger over an
    ``io.StringIO`` to inspect what a stage reported.
    """
    global _global_logger
    _global_logger = logger
