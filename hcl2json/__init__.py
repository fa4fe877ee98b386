"""
hcl2json - HCL to JSON converter

A command-line tool and library that converts HCL configuration files
(Terraform .tf/.tfvars and friends) into normalized, deterministic JSON.

hcl2json provides:
  - Conversion of one or many HCL documents to JSON
  - Shallow (top-level) or deep (recursive) merging, last file wins
  - Extraction of a nested value by dotted path (e.g. database.engine)
  - Compact or pretty output, configurable indent, double or single quotes
  - Sorted keys at every level for diff-friendly output
  - Syntax validation of individual files

Quick Start
-----------
Convert a file:

    $ hcl2json -f terraform.tfvars

Merge several files and extract a property:

    $ hcl2json -f base.tfvars -f "env/*.tfvars" --deep-merge -p tags --pretty

Validate syntax only:

    $ hcl2json --validate -f "*.tfvars"

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    Pipeline orchestration (convert).
values : module
    The value model shared by all stages.
merge : module
    Shallow and deep multi-document merging.
extract : module
    Dotted-path property extraction.
serializer : module
    Deterministic JSON text output.
parser : module
    python-hcl2 adapter.
config : package
    YAML settings files.

Public API
----------
    from hcl2json.core import ConvertOptions, convert
    from hcl2json.merge import merge_documents
    from hcl2json.extract import extract_property
    from hcl2json.serializer import SerializeOptions, serialize
    from hcl2json.validation import validate_inputs

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Convert HCL files to JSON"

# Re-export commonly used functions for convenience
from hcl2json.core import ConvertOptions, convert
from hcl2json.exceptions import (
    ConfigError,
    HCL2JSONError,
    InputError,
    ParseError,
    PropertyNotFoundError,
    TypeMismatchError,
)
from hcl2json.extract import extract_property
from hcl2json.merge import merge_documents
from hcl2json.parser import parse_document
from hcl2json.results import ConversionResult, ValidationResult
from hcl2json.serializer import SerializeOptions, serialize
from hcl2json.validation import validate_inputs
from hcl2json.values import from_native, to_native

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "ConvertOptions",
    "ConversionResult",
    "ValidationResult",
    "SerializeOptions",
    "convert",
    "validate_inputs",
    "merge_documents",
    "extract_property",
    "serialize",
    "parse_document",
    "from_native",
    "to_native",
    "HCL2JSONError",
    "ParseError",
    "TypeMismatchError",
    "PropertyNotFoundError",
    "InputError",
    "ConfigError",
]
