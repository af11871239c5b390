"""Formatted output with a small, self-contained printf-style formatter.

The formatter understands ``%[flags][width][.precision][length]specifier``
with the flags ``0 - + space #``, ``*`` for width and precision, the length
modifiers ``hh h l ll t j z`` and the specifiers ``d i u x X o b f F e E g G
c s p %``.  Integer arguments are wrapped to the size their length modifier
selects (``int`` is 32 bits, ``long`` and pointers are 64 bits), so ``%x`` of
``-1`` prints ``ffffffff``.  An unknown specifier prints itself.
"""

from __future__ import annotations

import operator
import re
from typing import Any, Callable, Iterator

from .numfmt import Flags, format_exponential, format_fixed, format_integer

__all__ = ["sprintf", "snprintf", "fctprintf"]

_INT_BITS = 32
_LONG_BITS = 64
_POINTER_DIGITS = 16

_SPEC = re.compile(
    r"%(?P<flags>[-+ #0]*)"
    r"(?P<width>\d+|\*)?"
    r"(?P<dot>\.(?P<prec>\d+|\*)?)?"
    r"(?P<length>hh|h|ll|l|t|j|z)?"
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

_LENGTH_FLAGS = {
    "hh": Flags.SHORT | Flags.CHAR,
    "h": Flags.SHORT,
    "ll": Flags.LONG | Flags.LONG_LONG,
    "l": Flags.LONG,
    "t": Flags.LONG,
    "j": Flags.LONG,
    "z": Flags.LONG,
}

_INTEGER_BASES = {"d": 10, "i": 10, "u": 10, "x": 16, "X": 16, "o": 8, "b": 2}


def _next_arg(pending: Iterator[Any]) -> Any:
    try:
        return next(pending)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def _int_arg(pending: Iterator[Any]) -> int:
    return operator.index(_next_arg(pending))


def _wrap_signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _integer_bits(flags: Flags) -> int:
    if flags & (Flags.LONG_LONG | Flags.LONG):
        return _LONG_BITS
    if flags & Flags.CHAR:
        return 8
    if flags & Flags.SHORT:
        return 16
    return _INT_BITS


def _pad(text: str, length: int, width: int, flags: Flags) -> str:
    padding = " " * max(width - length, 0)
    return text + padding if flags & Flags.LEFT else padding + text


def _convert_integer(conv: str, pending: Iterator[Any], prec: int, width: int,
                     flags: Flags) -> str:
    base = _INTEGER_BASES[conv]
    if base == 10 and conv != "u":
        pass
    if conv in "diu":
        flags &= ~Flags.HASH
    if conv == "X":
        flags |= Flags.UPPERCASE
    if conv not in "di":
        flags &= ~(Flags.PLUS | Flags.SPACE)
    if flags & Flags.PRECISION:
        flags &= ~Flags.ZEROPAD

    bits = _integer_bits(flags)
    raw = _int_arg(pending)
    if conv in "di":
        value = _wrap_signed(raw, bits)
        return format_integer(abs(value), value < 0, base, prec, width, flags)
    value = raw & ((1 << bits) - 1)
    return format_integer(value, False, base, prec, width, flags)


def _convert_char(pending: Iterator[Any], width: int, flags: Flags) -> str:
    arg = _next_arg(pending)
    if isinstance(arg, str):
        char = arg[0] if arg else "\0"
    else:
        char = chr(operator.index(arg) & 0xFF)
    return _pad(char, 1, width, flags)


def _convert_string(pending: Iterator[Any], prec: int, width: int, flags: Flags) -> str:
    arg = _next_arg(pending)
    if isinstance(arg, (bytes, bytearray)):
        arg = bytes(arg).decode("latin-1")
    if not isinstance(arg, str):
        raise TypeError(f"%s requires a string, not {type(arg).__name__}")
    text = arg.split("\0", 1)[0]
    if flags & Flags.PRECISION:
        text = text[:prec]
    return _pad(text, len(text), width, flags)


def _convert_pointer(pending: Iterator[Any], prec: int, flags: Flags) -> str:
    arg = _next_arg(pending)
    address = 0 if arg is None else operator.index(arg)
    flags |= Flags.ZEROPAD | Flags.UPPERCASE
    return format_integer(address & ((1 << _LONG_BITS) - 1), False, 16, prec,
                          _POINTER_DIGITS, flags)


def _convert(match: re.Match, pending: Iterator[Any]) -> str:
    flags = Flags(0)
    for char in match.group("flags"):
        flags |= _FLAG_CHARS[char]

    width = 0
    width_text = match.group("width")
    if width_text == "*":
        requested = _int_arg(pending)
        if requested < 0:
            flags |= Flags.LEFT
            width = -requested
        else:
            width = requested
    elif width_text:
        width = int(width_text)

    prec = 0
    if match.group("dot"):
        flags |= Flags.PRECISION
        prec_text = match.group("prec")
        if prec_text == "*":
            prec = max(_int_arg(pending), 0)
        elif prec_text:
            prec = int(prec_text)

    length = match.group("length")
    if length:
        flags |= _LENGTH_FLAGS[length]

    conv = match.group("conv")
    if not conv:
        return ""
    if conv in _INTEGER_BASES:
        return _convert_integer(conv, pending, prec, width, flags)
    if conv in "fF":
        if conv == "F":
            flags |= Flags.UPPERCASE
        return format_fixed(float(_next_arg(pending)), prec, width, flags)
    if conv in "eEgG":
        if conv in "gG":
            flags |= Flags.ADAPT_EXP
        if conv in "EG":
            flags |= Flags.UPPERCASE
        return format_exponential(float(_next_arg(pending)), prec, width, flags)
    if conv == "c":
        return _convert_char(pending, width, flags)
    if conv == "s":
        return _convert_string(pending, prec, width, flags)
    if conv == "p":
        return _convert_pointer(pending, prec, flags)
    return conv


def _render(fmt: str, args: tuple[Any, ...]) -> str:
    pending = iter(args)
    pieces: list[str] = []
    pos = 0
    for match in _SPEC.finditer(fmt):
        pieces.append(fmt[pos:match.start()])
        pieces.append(_convert(match, pending))
        pos = match.end()
    pieces.append(fmt[pos:])
    return "".join(pieces)


def sprintf(fmt: str, *args: Any) -> str:
    """Return ``fmt`` with its specifiers replaced by the formatted ``args``."""
    return _render(fmt, args)


def snprintf(count: int, fmt: str, *args: Any) -> tuple[str, int]:
    """Format into a buffer of ``count`` characters including the terminator.

    Returns the text that fits (at most ``count - 1`` characters) and the
    length the complete output would have had; a length of ``count`` or more
    means the text was truncated.
    """
    count = operator.index(count)
    if count < 0:
        raise ValueError("count must not be negative")
    full = _render(fmt, args)
    text = full[:count - 1] if count > 0 else ""
    return text, len(full)


def fctprintf(out: Callable[[str], Any], fmt: str, *args: Any) -> int:
    """Send each formatted character to ``out``; return the number produced.

    NUL characters are counted but not passed to ``out``.
    """
    text = _render(fmt, args)
    for char in text:
        if char != "\0":
            out(char)
    return len(text)