"""
Hex rendering helpers for logging and diagnostics.
"""


def to_hex_string(data: bytes, separator: str = " ") -> str:
    """
    Format bytes as uppercase hexadecimal pairs.

    Args:
        data: Bytes to format
        separator: Separator between hex bytes

    Returns:
        Formatted hex string, e.g. "0A FF"
    """
    return separator.join(f"{b:02X}" for b in data)


def parse_hex(hex_string: str) -> bytes:
    """
    Parse hexadecimal string to bytes.

    Args:
        hex_string: Hex string (with or without separators)

    Returns:
        Parsed bytes
    """
    cleaned = hex_string.replace(" ", "").replace(":", "").replace("-", "")
    return bytes.fromhex(cleaned)
