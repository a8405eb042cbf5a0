"""
Utility functions for converting between raw bytes and byte text.
"""

from typing import Final, Iterable

HEX_DIGITS: Final[str] = '0123456789ABCDEFabcdef'


def to_hex_string(data: Iterable[int]) -> str:
    """
    Encode bytes as canonical byte text.

    Args:
        data (Iterable[int]): Bytes to encode

    Returns:
        str: Lowercase two-digit groups joined by single spaces (e.g. "48 89 e5")
    """

    return ' '.join(f"{b:02x}" for b in data)


def from_hex_string(hex_str: str) -> bytes:
    """
    Decode byte text leniently.

    All whitespace is removed and the remaining characters are read two at a
    time. A pair that is not valid hex decodes as 0x00. A trailing single
    digit is read on its own.

    Args:
        hex_str (str): Byte text (e.g. "55 48  89\\te5")

    Returns:
        bytes: Decoded bytes, never raises
    """

    clean_str = ''.join(hex_str.split())
    result = bytearray()

    for i in range(0, len(clean_str), 2):
        pair = clean_str[i:i + 2]
        if all(c in HEX_DIGITS for c in pair):
            result.append(int(pair, 16))
            continue

        result.append(0)

    return bytes(result)


def is_valid_hex_string(hex_str: str) -> bool:
    """
    Check whether byte text decodes without falling back to 0x00.

    Args:
        hex_str (str): Byte text to check

    Returns:
        bool: True if every character is a hex digit and the count is even
    """

    clean_str = ''.join(hex_str.split())
    if len(clean_str) % 2:
        return False

    return all(c in HEX_DIGITS for c in clean_str)


def format_offset(offset: int, width: int = 8) -> str:
    """
    Format a file offset as a hex string.

    Args:
        offset (int): Byte offset to format
        width (int): Number of hex digits to use

    Returns:
        str: Formatted hex string
    """

    return f"{offset:0{width}X}"
