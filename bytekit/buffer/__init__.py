"""
Buffer primitives for bytekit.

This module provides pure operations over byte buffers:
- Concatenation and fixed-size splitting
- Separator splitting
- First-occurrence search
- Hex rendering
"""

from .ops import concat, split, split_on
from .search import find_first, NOT_FOUND
from .utils import to_hex_string, parse_hex

__all__ = [
    'concat',
    'split',
    'split_on',
    'find_first',
    'NOT_FOUND',
    'to_hex_string',
    'parse_hex',
]
