"""A printf-style formatter with the conventions of a compact embedded printf.

The format language is ``%[flags][width][.precision][length]specifier`` with
the flags ``0 - + space #``, ``*`` for width or precision taken from the
arguments, the length modifiers ``hh h l ll t j z`` and the specifiers
``d i u x X o b f F e E g G c s p %``. Integers are wrapped to the width of
the C type the length modifier names, so ``%x`` of -1 shows 32 bits.
"""

from __future__ import annotations

import operator
import re
import sys
from collections.abc import Callable, Iterable, Iterator
from numbers import Real

from tinyrt.numfmt import Flags, format_exponential, format_fixed, format_integer

__all__ = ["vformat", "sprintf", "snprintf", "printf", "fctprintf"]

_SPEC = re.compile(
    r"[^%]+"
    r"|%(?P<flags>[-+ #0]*)"
    r"(?P<width>[0-9]+|\*)?"
    r"(?P<dot>\.(?P<precision>[0-9]+|\*)?)?"
    r"(?P<length>ll|l|hh|h|t|j|z)?"
    r"(?P<conv>.?)",
    re.DOTALL,
)

_FLAG_CHARS = {
    "0": Flags.ZEROPAD,
    "-": Flags.LEFT,
    "+": Flags.PLUS,
    " ": Flags.SPACE,
    "#": Flags.HASH,
}

# ptrdiff_t, intmax_t and size_t all have the width of long.
_LENGTHS = {
    "l": Flags.LONG,
    "ll": Flags.LONG | Flags.LONG_LONG,
    "h": Flags.SHORT,
    "hh": Flags.SHORT | Flags.CHAR,
    "t": Flags.LONG,
    "j": Flags.LONG,
    "z": Flags.LONG,
}

_BASES = {"x": 16, "X": 16, "o": 8, "b": 2, "d": 10, "i": 10, "u": 10}
_POINTER_DIGITS = 16


def _wrap(value: int, bits: int, signed: bool) -> int:
    """Reduce ``value`` to a C integer of ``bits`` bits."""
    value &= (1 << bits) - 1
    if signed and value >> (bits - 1):
        value -= 1 << bits
    return value


def _integer_bits(flags: Flags) -> int:
    if flags & (Flags.LONG | Flags.LONG_LONG):
        return 64
    if flags & Flags.CHAR:
        return 8
    if flags & Flags.SHORT:
        return 16
    return 32


def _c_string(text: str) -> str:
    return text.split("\0", 1)[0]


class _Arguments:
    """Hands out the format arguments one at a time, checking their types."""

    def __init__(self, args: Iterable[object]) -> None:
        self._args: Iterator[object] = iter(args)

    def _next(self) -> object:
        try:
            return next(self._args)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    def integer(self) -> int:
        arg = self._next()
        try:
            return operator.index(arg)
        except TypeError:
            raise TypeError(f"an integer is required, not {type(arg).__name__}") from None

    def real(self) -> float:
        arg = self._next()
        if not isinstance(arg, Real):
            raise TypeError(f"a real number is required, not {type(arg).__name__}")
        return float(arg)

    def char(self) -> str:
        arg = self._next()
        if isinstance(arg, str):
            if len(arg) != 1:
                raise TypeError("%c requires a single character")
            return arg
        try:
            code = operator.index(arg)
        except TypeError:
            raise TypeError(
                f"%c requires an integer or a character, not {type(arg).__name__}"
            ) from None
        return chr(_wrap(code, 8, False))

    def string(self) -> str:
        arg = self._next()
        if not isinstance(arg, str):
            raise TypeError(f"%s requires a string, not {type(arg).__name__}")
        return _c_string(arg)


def _convert_integer(conv: str, args: _Arguments, precision: int, width: int, flags: Flags) -> str:
    base = _BASES[conv]
    if base == 10:
        flags &= ~Flags.HASH
    if conv == "X":
        flags |= Flags.UPPERCASE
    if conv not in "di":
        flags &= ~(Flags.PLUS | Flags.SPACE)
    if flags & Flags.PRECISION:
        flags &= ~Flags.ZEROPAD

    bits = _integer_bits(flags)
    if conv in "di":
        value = _wrap(args.integer(), bits, True)
        return format_integer(abs(value), value < 0, base, precision, width, flags)
    value = _wrap(args.integer(), bits, False)
    return format_integer(value, False, base, precision, width, flags)


def _convert(match: re.Match[str], args: _Arguments) -> str | None:
    """Render one conversion; None when the format ends inside it."""
    flags = Flags.NONE
    for char in match.group("flags"):
        flags |= _FLAG_CHARS[char]

    width = 0
    width_text = match.group("width")
    if width_text == "*":
        requested = _wrap(args.integer(), 32, True)
        if requested < 0:
            flags |= Flags.LEFT
            width = -requested
        else:
            width = requested
    elif width_text:
        width = int(width_text)

    precision = 0
    if match.group("dot"):
        flags |= Flags.PRECISION
        precision_text = match.group("precision")
        if precision_text == "*":
            precision = max(_wrap(args.integer(), 32, True), 0)
        elif precision_text:
            precision = int(precision_text)

    length = match.group("length")
    if length:
        flags |= _LENGTHS[length]

    conv = match.group("conv")
    if not conv:
        return None

    if conv in _BASES:
        return _convert_integer(conv, args, precision, width, flags)
    if conv in "fF":
        if conv == "F":
            flags |= Flags.UPPERCASE
        return format_fixed(args.real(), precision, width, flags)
    if conv in "eEgG":
        if conv in "gG":
            flags |= Flags.ADAPT_EXP
        if conv in "EG":
            flags |= Flags.UPPERCASE
        return format_exponential(args.real(), precision, width, flags)
    if conv == "c":
        char = args.char()
        padding = " " * max(width - 1, 0)
        return char + padding if flags & Flags.LEFT else padding + char
    if conv == "s":
        text = args.string()
        if flags & Flags.PRECISION:
            text = text[:precision]
        return text.ljust(width) if flags & Flags.LEFT else text.rjust(width)
    if conv == "p":
        pointer = args.integer() & ((1 << 64) - 1)
        flags |= Flags.ZEROPAD | Flags.UPPERCASE
        return format_integer(pointer, False, 16, precision, _POINTER_DIGITS, flags)
    # '%%' and any unknown specifier print the character itself.
    return conv


def vformat(fmt: str, args: Iterable[object]) -> str:
    """Format the arguments in ``args`` according to ``fmt`` and return the text.

    The format ends at its first NUL character. A ``%c`` of 0 puts a NUL
    character into the result. Raises :class:`TypeError` when an argument is
    missing or of the wrong kind; surplus arguments are ignored.
    """
    arguments = _Arguments(args)
    pieces: list[str] = []
    for match in _SPEC.finditer(_c_string(fmt)):
        chunk = match.group(0)
        if not chunk.startswith("%"):
            pieces.append(chunk)
            continue
        converted = _convert(match, arguments)
        if converted is None:
            break
        pieces.append(converted)
    return "".join(pieces)


def sprintf(fmt: str, *args: object) -> str:
    """Return the formatted text; see :func:`vformat`."""
    return vformat(fmt, args)


def snprintf(count: int, fmt: str, *args: object) -> tuple[str, int]:
    """Format into a buffer of ``count`` characters, terminator included.

    Returns the text that fits, at most ``count - 1`` characters, and the
    length the whole text would have had. A length of ``count`` or more
    means the text was cut short.
    """
    if count < 0:
        raise ValueError("count must not be negative")
    text = vformat(fmt, args)
    return text[: max(count - 1, 0)], len(text)


def printf(fmt: str, *args: object) -> int:
    """Write the formatted text to standard output and return its length.

    NUL characters are counted but not written.
    """
    text = vformat(fmt, args)
    sys.stdout.write(text.replace("\0", ""))
    return len(text)


def fctprintf(out: Callable[[str], object], fmt: str, *args: object) -> int:
    """Pass each formatted character to ``out`` and return the text's length.

    NUL characters are counted but not passed on.
    """
    text = vformat(fmt, args)
    for char in text:
        if char != "\0":
            out(char)
    return len(text)