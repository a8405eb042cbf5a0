"""
Utility package for byte text conversion and function search.
"""

from .hex_utils import (
    to_hex_string,
    from_hex_string,
    is_valid_hex_string,
    format_offset
)
from .search import FunctionSearch, SearchResult, fuzzy_score

__all__ = [
    'to_hex_string',
    'from_hex_string',
    'is_valid_hex_string',
    'format_offset',
    'FunctionSearch',
    'SearchResult',
    'fuzzy_score'
]
