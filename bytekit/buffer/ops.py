"""
Buffer concatenation and splitting.

All functions accept any bytes-like object and never modify their inputs.
Results may alias an input (see concat), so callers must not mutate them
in place.
"""

from typing import Iterator, Optional, Union

from ..errors import InvalidArgumentError
from .search import find_first, NOT_FOUND


def concat(a: Optional[bytes], b: Optional[bytes]) -> Optional[bytes]:
    """
    Concatenate two buffers.

    If either buffer is empty or None the other one is returned unchanged,
    without copying.

    Args:
        a: Leading buffer
        b: Trailing buffer

    Returns:
        a's bytes followed by b's bytes
    """
    if not a:
        return b
    if not b:
        return a
    return b"".join((a, b))


def split(buffer: Optional[bytes], block_size: int) -> Iterator[bytes]:
    """
    Split a buffer into blocks of block_size bytes.

    The last block holds the remainder and may be shorter. A buffer no longer
    than block_size is yielded as a single block. A None buffer yields nothing.

    Args:
        buffer: Buffer to split
        block_size: Size of each block, at least 1

    Returns:
        One-shot iterator over the blocks

    Raises:
        InvalidArgumentError: If block_size is less than 1
    """
    if block_size < 1:
        raise InvalidArgumentError(f"block_size must be at least 1, got {block_size}")
    return _iter_blocks(buffer, block_size)


def _iter_blocks(buffer: Optional[bytes], block_size: int) -> Iterator[bytes]:
    if buffer is None:
        return
    if len(buffer) <= block_size:
        yield buffer
        return

    pos = 0
    while pos < len(buffer):
        yield buffer[pos:pos + block_size]
        pos += block_size


def split_on(buffer: Optional[bytes], separator: Union[int, bytes],
             include_separator: bool = False) -> Iterator[bytes]:
    """
    Split a buffer at every occurrence of a separator.

    Chunks between adjacent separators are yielded as empty buffers. Trailing
    bytes after the last separator are yielded only if there are any.

    Args:
        buffer: Buffer to split
        separator: Single byte value or byte sequence to split on
        include_separator: Keep the separator at the end of each chunk it closes

    Returns:
        One-shot iterator over the chunks

    Raises:
        InvalidArgumentError: If the separator is empty or not a byte value
    """
    if isinstance(separator, int):
        if not 0 <= separator <= 0xFF:
            raise InvalidArgumentError(f"Separator byte out of range: {separator}")
        separator = bytes((separator,))
    if separator is None or len(separator) == 0:
        raise InvalidArgumentError("Separator must not be empty")
    return _iter_separated(buffer, bytes(separator), include_separator)


def _iter_separated(buffer: Optional[bytes], separator: bytes,
                    include_separator: bool) -> Iterator[bytes]:
    if buffer is None:
        return

    rest = bytes(buffer)
    while rest:
        index = find_first(rest, separator)
        if index == NOT_FOUND:
            yield rest
            return
        end = index + len(separator)
        yield rest[:end] if include_separator else rest[:index]
        rest = rest[end:]
