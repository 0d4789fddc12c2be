"""Character classification and C-style string and number parsing helpers.

Strings are treated the way C treats them: the first NUL character, or the
end of the string, terminates the text.
"""

from __future__ import annotations

import math
import re
import struct
from itertools import islice

__all__ = [
    "is_digit",
    "is_space",
    "atoi",
    "strtof",
    "atof",
    "strcmp",
    "strncmp",
    "strstr",
]

# Any exponent beyond this already under- or overflows a single-precision float.
MAX_EXPONENT = 38

_MANTISSA = re.compile(r"[0-9]*(?:\.[0-9]*)?")
_EXPONENT_DIGITS = re.compile(r"[0-9]*")
_MAX_MANTISSA_DIGITS = 18
_HALF_DIGITS = 9


def _f32(value: float) -> float:
    """Round a double to the nearest single-precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


# Binary powers of ten: entry i is 10 ** (2 ** i), held as single precision.
_POWERS_OF_10 = tuple(_f32(p) for p in (1e1, 1e2, 1e4, 1e8, 1e16, 1e32))


def _c_string(s: str) -> str:
    """Return the text of ``s`` up to its first NUL character."""
    return s.split("\0", 1)[0]


def is_digit(c: str) -> bool:
    """Return True if ``c`` is one of the characters '0' to '9'."""
    return len(c) == 1 and "0" <= c <= "9"


def is_space(c: str) -> bool:
    """Return True for space, tab, newline, vertical tab, form feed or CR."""
    return len(c) == 1 and (c == " " or "\t" <= c <= "\r")


def atoi(s: str) -> int:
    """Parse a leading, optionally signed decimal integer; 0 if there is none."""
    text = _c_string(s)
    pos = 0
    while pos < len(text) and is_space(text[pos]):
        pos += 1
    negative = False
    if text.startswith("-", pos):
        negative = True
        pos += 1
    elif text.startswith("+", pos):
        pos += 1
    digits = _EXPONENT_DIGITS.match(text, pos).group()
    value = int(digits) if digits else 0
    return -value if negative else value


def strtof(s: str) -> tuple[float, int]:
    """Parse a leading decimal floating-point number in single precision.

    The accepted form is optional white space, an optional sign, a mantissa
    of digits with at most one decimal point, and an optional exponent
    introduced by 'e' or 'E'. NaN and infinity are not recognised.

    Returns the value and the index just past the text that was used; the
    index is 0 when no mantissa digits were found.
    """
    text = _c_string(s)
    pos = 0
    while pos < len(text) and is_space(text[pos]):
        pos += 1

    negative = False
    if text.startswith("-", pos):
        negative = True
        pos += 1
    elif text.startswith("+", pos):
        pos += 1

    mantissa_match = _MANTISSA.match(text, pos)
    mantissa = mantissa_match.group()
    digits = mantissa.replace(".", "")
    point = mantissa.find(".")
    decimal_point = point if point >= 0 else len(digits)

    if not digits:
        return (-0.0 if negative else 0.0), 0

    if len(digits) > _MAX_MANTISSA_DIGITS:
        fraction_exponent = decimal_point - _MAX_MANTISSA_DIGITS
        digits = digits[:_MAX_MANTISSA_DIGITS]
    else:
        fraction_exponent = decimal_point - len(digits)

    high = int(digits[:-_HALF_DIGITS] or "0")
    low = int(digits[-_HALF_DIGITS:])
    fraction = _f32(_f32(_f32(1e9) * _f32(high)) + _f32(low))

    pos = mantissa_match.end()
    exponent = 0
    exponent_negative = False
    if pos < len(text) and text[pos] in "eE":
        pos += 1
        if text.startswith("-", pos):
            exponent_negative = True
            pos += 1
        elif text.startswith("+", pos):
            pos += 1
        exponent_match = _EXPONENT_DIGITS.match(text, pos)
        if exponent_match.group():
            exponent = int(exponent_match.group())
        pos = exponent_match.end()

    if exponent_negative:
        exponent = fraction_exponent - exponent
    else:
        exponent = fraction_exponent + exponent

    divide = exponent < 0
    exponent = min(abs(exponent), MAX_EXPONENT)

    scale = 1.0
    for power in _POWERS_OF_10:
        if not exponent:
            break
        if exponent & 1:
            scale = _f32(scale * power)
        exponent >>= 1

    fraction = _f32(fraction / scale) if divide else _f32(fraction * scale)
    return (-fraction if negative else fraction), pos


def atof(s: str) -> float:
    """Parse a leading floating-point number; see :func:`strtof`."""
    return strtof(s)[0]


def _compare(s1: str, s2: str, limit: int | None) -> int:
    pairs = zip(_c_string(s1) + "\0", _c_string(s2) + "\0")
    if limit is not None:
        pairs = islice(pairs, limit)
    for a, b in pairs:
        difference = ord(a) - ord(b)
        if difference or a == "\0":
            return difference
    return 0


def strcmp(s1: str, s2: str) -> int:
    """Compare two strings; the sign of the result orders them, 0 if equal."""
    return _compare(s1, s2, None)


def strncmp(s1: str, s2: str, n: int) -> int:
    """Compare at most ``n`` characters of two strings, like :func:`strcmp`."""
    if n < 0:
        raise ValueError("n must not be negative")
    return _compare(s1, s2, n)


def strstr(haystack: str, needle: str) -> int | None:
    """Locate ``needle`` in ``haystack`` and return its index, or None.

    The scan advances through the needle each time the next haystack
    character matches and never steps back on a mismatch, so the needle's
    characters are matched in order; the result is the index ``len(needle)``
    characters before the end of that match. An empty needle is never found.
    """
    text = _c_string(haystack)
    target = _c_string(needle)
    if not target:
        return None
    matched = 0
    for index, char in enumerate(text, start=1):
        if char == target[matched]:
            matched += 1
            if matched == len(target):
                return index - len(target)
    return None