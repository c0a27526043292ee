"""
Escape-delimited frame extraction.

A frame ends with the two-byte pair ESC (0x10) TERM (0x03), unless the ESC
byte is itself preceded by another ESC:

    ... 0x41 0x10 0x03 | 0x42 ...      boundary after 0x03
    ... 0x10 0x10 0x03 ...             no boundary (escaped escape)

Boundaries are only checked from the third byte of a frame onwards, so a
terminator pair at the very start of a fresh frame never closes it. Bytes left
over when the input ends are emitted as a final, unterminated frame.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator


# Protocol constants
ESCAPE_BYTE = 0x10
TERMINATOR_BYTE = 0x03
TERMINATOR = bytes((ESCAPE_BYTE, TERMINATOR_BYTE))


@dataclass(frozen=True)
class Frame:
    """
    A frame cut from a byte stream.

    Fields:
        data: Frame bytes, terminator included when present
        terminated: False for the trailing frame of a stream that ended
            without a terminator
    """
    data: bytes
    terminated: bool

    def __len__(self) -> int:
        return len(self.data)


def _is_boundary(buffer: bytearray) -> bool:
    index = len(buffer) - 1
    if index < 2 or buffer[index] != TERMINATOR_BYTE:
        return False
    return buffer[index - 1] == ESCAPE_BYTE and buffer[index - 2] != ESCAPE_BYTE


def packetize(stream: Iterable[int]) -> Iterator[bytes]:
    """
    Cut a byte stream into frames.

    Each input byte is consumed exactly once and frames come out in input
    order. The returned generator is single-pass.

    Args:
        stream: Bytes, bytearray or any iterable of byte values

    Returns:
        Iterator over frames as bytes
    """
    buffer = bytearray()
    for b in stream:
        buffer.append(b)
        if _is_boundary(buffer):
            yield bytes(buffer)
            buffer.clear()

    if buffer:
        yield bytes(buffer)


def is_terminated(frame: bytes) -> bool:
    """Check whether a frame ends with the escape/terminator pair."""
    return len(frame) >= 3 and _is_boundary(bytearray(frame[-3:]))


class FrameExtractor:
    """
    Frame iterator over a byte source.

    Every traversal starts a fresh accumulator and re-reads the source. That
    only replays the frames if the source itself can be iterated again
    (bytes, bytearray, list). A generator source is exhausted by the first
    traversal, so later traversals yield nothing.
    """

    def __init__(self, stream: Iterable[int]):
        """
        Initialize frame extractor.

        Args:
            stream: Bytes, bytearray or any iterable of byte values
        """
        self._stream = stream

    def __iter__(self) -> Iterator[bytes]:
        return packetize(self._stream)

    def frames(self) -> Iterator[Frame]:
        """
        Iterate over frames with their termination state.

        Returns:
            Iterator over Frame objects
        """
        for data in packetize(self._stream):
            yield Frame(data=data, terminated=is_terminated(data))
