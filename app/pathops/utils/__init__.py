"""Utility modules for pathops.

This module exports commonly used utility functions.
"""

from pathops.utils.formatting import (
    console,
    err_console,
    print_error,
    print_failure,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "err_console",
    "print_error",
    "print_failure",
    "print_info",
    "print_success",
    "print_warning",
]
