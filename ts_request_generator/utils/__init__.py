"""
Utilities Module for TypeScript Request Generation

This module provides file operations and the string case conversions used
to build TypeScript identifiers and type names.
"""

from .file_utils import write_files_to_disk
from .string_case import (
    camelcase,
    capitalcase,
    is_valid_ts_identifier,
    pascalcase,
    snakecase,
    ts_identifier,
    ts_type_name,
)

__all__ = [
    "camelcase",
    "capitalcase",
    "is_valid_ts_identifier",
    "pascalcase",
    "snakecase",
    "ts_identifier",
    "ts_type_name",
    "write_files_to_disk",
]
