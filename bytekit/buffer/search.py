"""
Substring search over raw buffers.

Plain scan without skip tables. Intended for short delimiters in small
buffers, where the setup cost of smarter algorithms does not pay off.
"""

from ..errors import InvalidArgumentError


NOT_FOUND = -1


def find_first(haystack: bytes, needle: bytes) -> int:
    """
    Find the first occurrence of needle in haystack.

    Args:
        haystack: Buffer to search in
        needle: Buffer to search for

    Returns:
        Index of the first match, or NOT_FOUND

    Raises:
        InvalidArgumentError: If either buffer is None
    """
    if haystack is None:
        raise InvalidArgumentError("haystack must not be None")
    if needle is None:
        raise InvalidArgumentError("needle must not be None")

    # Empty needle matches immediately by definition
    if len(needle) == 0:
        return 0

    first = needle[0]
    end = len(haystack) - len(needle)
    for start in range(end + 1):
        if haystack[start] != first:
            continue
        i = 1
        while i < len(needle) and haystack[start + i] == needle[i]:
            i += 1
        if i == len(needle):
            return start
    return NOT_FOUND
