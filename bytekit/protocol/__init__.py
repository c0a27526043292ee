"""
Protocol layer components for bytekit.

This module provides escape-delimited frame extraction over byte streams.
"""

from .framing import (
    packetize,
    is_terminated,
    FrameExtractor,
    Frame,
    ESCAPE_BYTE,
    TERMINATOR_BYTE,
    TERMINATOR,
)

__all__ = [
    'packetize',
    'is_terminated',
    'FrameExtractor',
    'Frame',
    'ESCAPE_BYTE',
    'TERMINATOR_BYTE',
    'TERMINATOR',
]
