"""
Utility functions for reading mangled text at an offset.

None of these functions keep state: every call takes the full mangled string and
the offset to read from, and reports how much it would consume.
"""

from typing import Optional


def bytes_left(src: str, offset: int = 0) -> int:
    """
    Retrieve the number of characters left in `src` starting at `offset`.
    """
    return max(len(src) - offset, 0)


def peek(src: str, offset: int = 0, n: int = 1) -> str:
    """
    Read up to `n` characters from `src` starting at `offset`.
    Returns "" past the end of the string.
    """
    return src[offset : offset + n]


def read_exact(src: str, offset: int, size: int) -> Optional[str]:
    """
    Read exactly `size` characters from `src` starting at `offset`.
    If there are not enough characters left, return `None`.
    """
    if size < 0 or bytes_left(src, offset) < size:
        return None
    return src[offset : offset + size]


def startswith_at(src: str, offset: int, prefix: str) -> bool:
    """
    Determine if `src` contains `prefix` starting at `offset`.
    """
    return src.startswith(prefix, offset)


def is_ascii_digit(char: str) -> bool:
    """
    Determine if `char` is a single ASCII decimal digit.

    `str.isdecimal()` accepts other Unicode digits, which are never part of a
    length prefix.
    """
    return len(char) == 1 and "0" <= char <= "9"


def read_decimal(src: str, offset: int = 0) -> Optional[tuple[int, int]]:
    """
    Read subsequent decimal digits from `src` and return them as a non-negative
    base-10 integer.

    The first element of the tuple contains the number.
    The second element of the tuple contains the count of digits read, which
    includes any leading zeroes (`"000001"` reads as `(1, 6)`).

    If no digit is found at `offset`, `None` will be returned.

    A number with more significant digits than `len(src)` itself can never be a
    valid length within `src`, and is returned as `len(src) + 1` instead of
    being converted.
    """
    end = offset
    while is_ascii_digit(peek(src, end)):
        end += 1

    if end == offset:
        return None

    significant = src[offset:end].lstrip("0")
    if len(significant) > len(str(len(src))):
        return (len(src) + 1, end - offset)
    return (int(significant or "0"), end - offset)
