"""Utility functions and helpers for nlgit."""

from .logging import logger
from .helpers import (
    get_current_timestamp,
    check_dependencies,
    get_current_context,
    format_template_string,
    safe_file_write,
    atomic_write_json,
)

__all__ = [
    "logger",
    "get_current_timestamp",
    "check_dependencies",
    "get_current_context",
    "format_template_string",
    "safe_file_write",
    "atomic_write_json",
]
