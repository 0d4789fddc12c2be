"""Number-to-text conversions used by the printf-style formatter.

Each function renders one value the way a compact embedded printf does and
returns the resulting text. Converted digits are held in a fixed 32-character
work area, so very long conversions are cut short exactly as that
implementation cuts them.
"""

from __future__ import annotations

import math
import struct
from enum import IntFlag

__all__ = [
    "Flags",
    "format_integer",
    "format_fixed",
    "format_exponential",
]

# Size of the work area for one converted number, padding zeros included.
BUFFER_SIZE = 32
DEFAULT_FLOAT_PRECISION = 6
# Largest magnitude printed in fixed notation; larger values switch to %e.
MAX_FLOAT = 1e9

_POW10 = (1, 10, 100, 1000, 10000, 100000, 1000000, 10000000, 100000000, 1000000000)
_UINT32 = 1 << 32
_UINT64_MASK = (1 << 64) - 1


class Flags(IntFlag):
    """Conversion flags parsed from a format specification."""

    NONE = 0
    ZEROPAD = 1 << 0
    LEFT = 1 << 1
    PLUS = 1 << 2
    SPACE = 1 << 3
    HASH = 1 << 4
    UPPERCASE = 1 << 5
    CHAR = 1 << 6
    SHORT = 1 << 7
    LONG = 1 << 8
    LONG_LONG = 1 << 9
    PRECISION = 1 << 10
    ADAPT_EXP = 1 << 11


def _pad(reversed_chars: list[str], width: int, flags: Flags) -> str:
    """Turn reversed digits into text, padding with spaces up to ``width``."""
    text = "".join(reversed(reversed_chars))
    if not flags & Flags.LEFT and not flags & Flags.ZEROPAD:
        text = text.rjust(width)
    if flags & Flags.LEFT:
        text = text.ljust(width)
    return text


def _sign_char(negative: bool, flags: Flags) -> str | None:
    if negative:
        return "-"
    if flags & Flags.PLUS:
        return "+"
    if flags & Flags.SPACE:
        return " "
    return None


def _finish_integer(
    buf: list[str],
    negative: bool,
    base: int,
    precision: int,
    width: int,
    flags: Flags,
) -> str:
    if not flags & Flags.LEFT:
        if width and flags & Flags.ZEROPAD and (negative or flags & (Flags.PLUS | Flags.SPACE)):
            width -= 1
        while len(buf) < precision and len(buf) < BUFFER_SIZE:
            buf.append("0")
        while flags & Flags.ZEROPAD and len(buf) < width and len(buf) < BUFFER_SIZE:
            buf.append("0")

    if flags & Flags.HASH:
        if not flags & Flags.PRECISION and buf and (len(buf) == precision or len(buf) == width):
            buf.pop()
            if buf and base == 16:
                buf.pop()
        if len(buf) < BUFFER_SIZE:
            if base == 16:
                buf.append("X" if flags & Flags.UPPERCASE else "x")
            elif base == 2:
                buf.append("b")
        if len(buf) < BUFFER_SIZE:
            buf.append("0")

    if len(buf) < BUFFER_SIZE:
        sign = _sign_char(negative, flags)
        if sign:
            buf.append(sign)

    return _pad(buf, width, flags)


def format_integer(
    value: int,
    negative: bool,
    base: int,
    precision: int,
    width: int,
    flags: Flags | int,
) -> str:
    """Render the magnitude ``value`` in ``base``, with a minus sign if ``negative``.

    ``precision`` is the minimum number of digits and ``width`` the minimum
    field width; ``flags`` selects padding, sign, prefix and letter case.
    """
    if value < 0:
        raise ValueError("value must be a non-negative magnitude")
    if not 2 <= base <= 36:
        raise ValueError("base must be between 2 and 36")
    flags = Flags(flags)

    if not value:
        flags &= ~Flags.HASH

    letter = "A" if flags & Flags.UPPERCASE else "a"
    buf: list[str] = []
    if not flags & Flags.PRECISION or value:
        while True:
            value, digit = divmod(value, base)
            buf.append(chr(ord("0") + digit) if digit < 10 else chr(ord(letter) + digit - 10))
            if not value or len(buf) >= BUFFER_SIZE:
                break

    return _finish_integer(buf, negative, base, precision, width, flags)


def _special(value: float, width: int, flags: Flags) -> str | None:
    if math.isnan(value):
        return _pad(list("nan"), width, flags)
    if value == -math.inf:
        return _pad(list("fni-"), width, flags)
    if value == math.inf:
        return _pad(list("fni+" if flags & Flags.PLUS else "fni"), width, flags)
    return None


def format_fixed(value: float, precision: int, width: int, flags: Flags | int) -> str:
    """Render ``value`` in fixed-point notation, like ``%f``.

    Without :attr:`Flags.PRECISION` six decimals are used. Magnitudes above
    1e9 are rendered in exponential notation instead.
    """
    flags = Flags(flags)
    value = float(value)

    special = _special(value, width, flags)
    if special is not None:
        return special

    if value > MAX_FLOAT or value < -MAX_FLOAT:
        return format_exponential(value, precision, width, flags)

    negative = value < 0
    if negative:
        value = 0 - value

    if not flags & Flags.PRECISION:
        precision = DEFAULT_FLOAT_PRECISION

    buf: list[str] = []
    # Precision above nine would overflow the fraction; emit the extra zeros now.
    while len(buf) < BUFFER_SIZE and precision > 9:
        buf.append("0")
        precision -= 1

    whole = int(value)
    scaled = (value - whole) * _POW10[precision]
    frac = int(scaled)
    diff = scaled - frac

    if diff > 0.5:
        frac += 1
        if frac >= _POW10[precision]:
            frac = 0
            whole += 1
    elif diff < 0.5:
        pass
    elif frac == 0 or frac & 1:
        frac += 1

    if precision == 0:
        diff = value - float(whole)
        if (not diff < 0.5 or diff > 0.5) and whole & 1:
            whole += 1
    else:
        count = precision
        while len(buf) < BUFFER_SIZE:
            count -= 1
            frac, digit = divmod(frac, 10)
            buf.append(chr(48 + digit))
            if not frac:
                break
        remaining = count % _UINT32
        while len(buf) < BUFFER_SIZE and remaining > 0:
            buf.append("0")
            remaining -= 1
        if len(buf) < BUFFER_SIZE:
            buf.append(".")

    while len(buf) < BUFFER_SIZE:
        whole, digit = divmod(whole, 10)
        buf.append(chr(48 + digit))
        if not whole:
            break

    if not flags & Flags.LEFT and flags & Flags.ZEROPAD:
        if width and (negative or flags & (Flags.PLUS | Flags.SPACE)):
            width -= 1
        while len(buf) < width and len(buf) < BUFFER_SIZE:
            buf.append("0")

    if len(buf) < BUFFER_SIZE:
        sign = _sign_char(negative, flags)
        if sign:
            buf.append(sign)

    return _pad(buf, width, flags)


def _bits_of(value: float) -> int:
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def _float_of(bits: int) -> float:
    return struct.unpack("<d", struct.pack("<Q", bits & _UINT64_MASK))[0]


def format_exponential(value: float, precision: int, width: int, flags: Flags | int) -> str:
    """Render ``value`` in exponential notation, like ``%e``.

    With :attr:`Flags.ADAPT_EXP` it behaves like ``%g``: values from 1e-4 up
    to 1e6 are rendered in fixed notation with ``precision`` significant
    figures.
    """
    flags = Flags(flags)
    value = float(value)

    if math.isnan(value) or math.isinf(value):
        return format_fixed(value, precision, width, flags)

    negative = value < 0
    if negative:
        value = -value

    if not flags & Flags.PRECISION:
        precision = DEFAULT_FLOAT_PRECISION

    # Estimate the decimal exponent from the binary one.
    bits = _bits_of(value)
    exp2 = ((bits >> 52) & 0x7FF) - 1023
    mantissa = _float_of((bits & ((1 << 52) - 1)) | (1023 << 52))
    expval = int(0.1760912590558 + exp2 * 0.301029995663981 + (mantissa - 1.5) * 0.289529654602168)
    exp2 = int(expval * 3.321928094887362 + 0.5)
    z = expval * 2.302585092994046 - exp2 * 0.6931471805599453
    z2 = z * z
    scale = _float_of((exp2 + 1023) << 52)
    scale *= 1 + 2 * z / (2 - z + (z2 / (6 + (z2 / (10 + z2 / 14)))))
    if value < scale:
        expval -= 1
        scale /= 10

    minwidth = 4 if -100 < expval < 100 else 5

    if flags & Flags.ADAPT_EXP:
        if 1e-4 <= value < 1e6:
            precision = precision - expval - 1 if precision > expval else 0
            flags |= Flags.PRECISION
            minwidth = 0
            expval = 0
        elif precision > 0 and flags & Flags.PRECISION:
            precision -= 1

    fwidth = width - minwidth if width > minwidth else 0
    if flags & Flags.LEFT and minwidth:
        fwidth = 0

    if expval:
        value /= scale

    text = format_fixed(-value if negative else value, precision, fwidth, flags & ~Flags.ADAPT_EXP)

    if minwidth:
        text += "E" if flags & Flags.UPPERCASE else "e"
        text += format_integer(
            abs(expval), expval < 0, 10, 0, minwidth - 1, Flags.ZEROPAD | Flags.PLUS
        )
        if flags & Flags.LEFT:
            text = text.ljust(width)
    return text