"""
CLI helper functions and utilities.
"""

from .display import (
    ProgressPrinter,
    print_error,
    print_header,
    print_pattern_detail,
    print_pattern_list,
    print_prerequisites,
    print_summary,
)
from .errors import handle_errors

__all__ = [
    'ProgressPrinter',
    'print_error',
    'print_header',
    'print_pattern_detail',
    'print_pattern_list',
    'print_prerequisites',
    'print_summary',
    'handle_errors',
]
