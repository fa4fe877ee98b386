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

"""Command-line interface for hcl2json.

This module provides the CLI entry point for the hcl2json tool. It reads
HCL from files (glob patterns allowed) or stdin, and writes JSON to stdout
or a file.

Example:
    Convert a file:
        ```bash
        $ hcl2json -f terraform.tfvars
        ```

    Merge files (deep) and extract a nested property:
        ```bash
        $ hcl2json -f base.tfvars -f "env/*.tfvars" --deep-merge -p database.engine
        ```

    Pretty output with 4-space indent, written to a file:
        ```bash
        $ hcl2json -f terraform.tfvars --pretty --indent 4 -o out.json
        ```

    Read from stdin:
        ```bash
        $ cat terraform.tfvars | hcl2json
        ```

    Validate syntax only:
        ```bash
        $ hcl2json --validate -f "*.tfvars"
        ```

Exit Codes:

- 0: Success
- 1: Error (input, parse, merge, extraction or settings failure), or at
    least one file failed validation

Note:
    Flags override settings files (.hcl2json.yaml, user config).
    Diagnostics and errors go to stderr; stdout only carries the result.
    Verbose mode shows full tracebacks on errors for debugging.

"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from hcl2json import __version__
from hcl2json.config import load_settings, settings_to_options
from hcl2json.core import ConvertOptions, convert
from hcl2json.exceptions import (
    ConfigError,
    HCL2JSONError,
    InputError,
    ParseError,
    PropertyNotFoundError,
    TypeMismatchError,
)
from hcl2json.logging import get_logger, set_global_logger
from hcl2json.serializer import SerializeOptions
from hcl2json.validation import validate_inputs


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return value


def _read_stdin() -> str:
    return sys.stdin.read()


def _report_error(err: Exception, args: argparse.Namespace) -> int:
    print(f"Error: {err}", file=sys.stderr)
    if args.verbose or args.debug:
        import traceback

        traceback.print_exc()
    return 1


def build_options(args: argparse.Namespace) -> ConvertOptions:
    """Combine settings files and command-line flags into ConvertOptions.

    Flags that were not given (None) fall back to the settings value.

    Raises:
        ConfigError: If a settings file is invalid.
    """
    settings = load_settings(config_path=args.config)
    base = settings_to_options(settings, property=args.property or None)

    fmt = base.format
    return ConvertOptions(
        merge_mode="deep" if args.deep_merge else base.merge_mode,
        property=base.property,
        format=SerializeOptions(
            pretty=fmt.pretty if args.pretty is None else args.pretty,
            indent=fmt.indent if args.indent is None else args.indent,
            quote_style="single" if args.single_quotes else fmt.quote_style,
        ),
    )


def cmd_validate(args: argparse.Namespace) -> int:
    """Handler for '--validate'.

    Validates each input independently and prints one line per file.

    Returns:
        Exit code (0 when every input is valid, 1 otherwise).

    """
    stdin_text = None if args.file else _read_stdin()

    try:
        results = validate_inputs(args.file, stdin_text)
    except HCL2JSONError as err:
        return _report_error(err, args)

    report = "\n".join(result.report_line() for result in results)
    _write_output(report, args.output)

    return 0 if all(result.is_valid for result in results) else 1


def cmd_convert(args: argparse.Namespace) -> int:
    """Handler for the default conversion mode.

    Merges the inputs, optionally extracts a property, and writes JSON.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    try:
        options = build_options(args)
        stdin_text = None if args.file else _read_stdin()
        result = convert(args.file, options, stdin_text)
    except (
        ConfigError,
        InputError,
        ParseError,
        PropertyNotFoundError,
        TypeMismatchError,
    ) as err:
        return _report_error(err, args)
    except HCL2JSONError as err:
        # Catch any other hcl2json errors we might have missed
        return _report_error(err, args)

    try:
        _write_output(result.output, args.output)
    except OSError as err:
        return _report_error(err, args)
    return 0


def _write_output(text: str, output: Path | None) -> None:
    """Write to the output file as-is, or print to stdout with a newline."""
    if output is not None:
        output.write_text(text, encoding="utf-8")
    else:
        print(text)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the hcl2json command."""
    parser = argparse.ArgumentParser(
        prog="hcl2json",
        description="Convert HCL files to JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"hcl2json {__version__}",
    )
    parser.add_argument(
        "-f",
        "--file",
        action="append",
        default=[],
        metavar="FILE",
        help="HCL file(s) to convert (supports glob patterns, reads from stdin if not provided)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        default=None,
        help="Pretty format JSON with newlines and indentation",
    )
    parser.add_argument(
        "--indent",
        type=_positive_int,
        default=None,
        help="Number of spaces for indentation (default: 2)",
    )
    parser.add_argument(
        "--single-quotes",
        action="store_true",
        help="Use single quotes instead of double quotes",
    )
    parser.add_argument(
        "--deep-merge",
        action="store_true",
        help="Use deep merge instead of shallow merge when multiple files provided",
    )
    parser.add_argument(
        "-p",
        "--property",
        default=None,
        help="Property within HCL to extract, as a dotted path (e.g. database.engine)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file (stdout if not specified)",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate HCL syntax without conversion",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: nearest .hcl2json.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates on stderr",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the hcl2json CLI.

    This function is registered as the 'hcl2json' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure global logger
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    handler = cmd_validate if args.validate else cmd_convert
    exit_code = handler(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
