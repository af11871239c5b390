"""Number-to-text conversions used by the formatted-output routines.

Each conversion produces the text for a single numeric argument of a
format specification: an integer in some base, a fixed-point float or an
exponential float, with field width, precision and flag handling.
"""

from __future__ import annotations

import enum
import struct
import sys

__all__ = ["Flags", "format_integer", "format_fixed", "format_exponential"]

NTOA_BUFFER_SIZE = 32
FTOA_BUFFER_SIZE = 32
DEFAULT_FLOAT_PRECISION = 6
MAX_FLOAT = 1e9

_DBL_MAX = sys.float_info.max
_POW10 = (1, 10, 100, 1000, 10000, 100000, 1000000, 10000000, 100000000, 1000000000)
_U64_MASK = (1 << 64) - 1


class Flags(enum.IntFlag):
    """Conversion flags of a format specification."""

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


_ZEROPAD = int(Flags.ZEROPAD)
_LEFT = int(Flags.LEFT)
_PLUS = int(Flags.PLUS)
_SPACE = int(Flags.SPACE)
_HASH = int(Flags.HASH)
_UPPERCASE = int(Flags.UPPERCASE)
_PRECISION = int(Flags.PRECISION)
_ADAPT_EXP = int(Flags.ADAPT_EXP)


def _emit_reversed(buf: list[str], width: int, flags: int) -> str:
    """Render digits collected least-significant first, applying space padding."""
    text = "".join(reversed(buf))
    if not flags & _LEFT and not flags & _ZEROPAD and len(buf) < width:
        text = " " * (width - len(buf)) + text
    if flags & _LEFT:
        text = text.ljust(width)
    return text


def _finish_integer(buf: list[str], negative: bool, base: int, prec: int,
                    width: int, flags: int) -> str:
    if not flags & _LEFT:
        if width and flags & _ZEROPAD and (negative or flags & (_PLUS | _SPACE)):
            width -= 1
        while len(buf) < prec and len(buf) < NTOA_BUFFER_SIZE:
            buf.append("0")
        while flags & _ZEROPAD and len(buf) < width and len(buf) < NTOA_BUFFER_SIZE:
            buf.append("0")

    if flags & _HASH:
        if not flags & _PRECISION and buf and (len(buf) == prec or len(buf) == width):
            buf.pop()
            if buf and base == 16:
                buf.pop()
        if base == 16 and len(buf) < NTOA_BUFFER_SIZE:
            buf.append("X" if flags & _UPPERCASE else "x")
        elif base == 2 and len(buf) < NTOA_BUFFER_SIZE:
            buf.append("b")
        if len(buf) < NTOA_BUFFER_SIZE:
            buf.append("0")

    if len(buf) < NTOA_BUFFER_SIZE:
        if negative:
            buf.append("-")
        elif flags & _PLUS:
            buf.append("+")
        elif flags & _SPACE:
            buf.append(" ")

    return _emit_reversed(buf, width, flags)


def format_integer(value: int, negative: bool = False, base: int = 10, prec: int = 0,
                   width: int = 0, flags: int = 0) -> str:
    """Format the magnitude ``value`` in ``base``; ``negative`` adds a minus sign."""
    value = int(value)
    base = int(base)
    flags = int(flags)
    if value < 0:
        raise ValueError("value must be a non-negative magnitude")
    if base < 2:
        raise ValueError("base must be at least 2")

    if not value:
        flags &= ~_HASH

    buf: list[str] = []
    if not flags & _PRECISION or value:
        letter = ord("A" if flags & _UPPERCASE else "a")
        while True:
            digit = value % base
            buf.append(chr(ord("0") + digit) if digit < 10 else chr(letter + digit - 10))
            value //= base
            if not value or len(buf) >= NTOA_BUFFER_SIZE:
                break

    return _finish_integer(buf, bool(negative), base, int(prec), int(width), flags)


def format_fixed(value: float, prec: int = 0, width: int = 0, flags: int = 0) -> str:
    """Format ``value`` in fixed-point notation."""
    value = float(value)
    prec = int(prec)
    width = int(width)
    flags = int(flags)

    if value != value:
        return _emit_reversed(list("nan"), width, flags)
    if value < -_DBL_MAX:
        return _emit_reversed(list("fni-"), width, flags)
    if value > _DBL_MAX:
        return _emit_reversed(list("fni+" if flags & _PLUS else "fni"), width, flags)

    if value > MAX_FLOAT or value < -MAX_FLOAT:
        return format_exponential(value, prec, width, flags)

    negative = value < 0
    if negative:
        value = 0 - value

    if not flags & _PRECISION:
        prec = DEFAULT_FLOAT_PRECISION

    buf: list[str] = []
    while len(buf) < FTOA_BUFFER_SIZE and prec > 9:
        buf.append("0")
        prec -= 1

    whole = int(value)
    tmp = (value - whole) * _POW10[prec]
    frac = int(tmp)
    diff = tmp - frac

    if diff > 0.5:
        frac += 1
        if frac >= _POW10[prec]:
            frac = 0
            whole += 1
    elif diff < 0.5:
        pass
    elif frac == 0 or frac & 1:
        frac += 1

    if prec == 0:
        diff = value - whole
        if diff >= 0.5 and whole & 1:
            whole += 1
    else:
        count = prec
        while len(buf) < FTOA_BUFFER_SIZE:
            count -= 1
            buf.append(chr(48 + frac % 10))
            frac //= 10
            if not frac:
                break
        # A count that ran below zero behaves like a huge unsigned counter.
        while len(buf) < FTOA_BUFFER_SIZE and count != 0:
            count -= 1
            buf.append("0")
        if len(buf) < FTOA_BUFFER_SIZE:
            buf.append(".")

    while len(buf) < FTOA_BUFFER_SIZE:
        buf.append(chr(48 + whole % 10))
        whole //= 10
        if not whole:
            break

    if not flags & _LEFT and flags & _ZEROPAD:
        if width and (negative or flags & (_PLUS | _SPACE)):
            width -= 1
        while len(buf) < width and len(buf) < FTOA_BUFFER_SIZE:
            buf.append("0")

    if len(buf) < FTOA_BUFFER_SIZE:
        if negative:
            buf.append("-")
        elif flags & _PLUS:
            buf.append("+")
        elif flags & _SPACE:
            buf.append(" ")

    return _emit_reversed(buf, width, flags)


def _bits_of(value: float) -> int:
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def _float_of(bits: int) -> float:
    return struct.unpack("<d", struct.pack("<Q", bits & _U64_MASK))[0]


def format_exponential(value: float, prec: int = 0, width: int = 0, flags: int = 0) -> str:
    """Format ``value`` in exponential notation, or adaptively with ``ADAPT_EXP``."""
    value = float(value)
    prec = int(prec)
    width = int(width)
    flags = int(flags)

    if value != value or value > _DBL_MAX or value < -_DBL_MAX:
        return format_fixed(value, prec, width, flags)

    negative = value < 0
    if negative:
        value = -value

    if not flags & _PRECISION:
        prec = DEFAULT_FLOAT_PRECISION

    bits = _bits_of(value)
    exp2 = ((bits >> 52) & 0x07FF) - 1023
    mantissa = _float_of((bits & ((1 << 52) - 1)) | (1023 << 52))
    expval = int(0.1760912590558 + exp2 * 0.301029995663981
                 + (mantissa - 1.5) * 0.289529654602168)
    exp2 = int(expval * 3.321928094887362 + 0.5)
    z = expval * 2.302585092994046 - exp2 * 0.6931471805599453
    z2 = z * z
    scale = _float_of((exp2 + 1023) << 52)
    scale *= 1 + 2 * z / (2 - z + (z2 / (6 + (z2 / (10 + z2 / 14)))))
    if value < scale:
        expval -= 1
        scale /= 10

    minwidth = 4 if -100 < expval < 100 else 5

    if flags & _ADAPT_EXP:
        if 1e-4 <= value < 1e6:
            prec = prec - expval - 1 if prec > expval else 0
            flags |= _PRECISION
            minwidth = 0
            expval = 0
        elif prec > 0 and flags & _PRECISION:
            prec -= 1

    fwidth = width - minwidth if width > minwidth else 0
    if flags & _LEFT and minwidth:
        fwidth = 0

    if expval:
        value /= scale

    text = format_fixed(-value if negative else value, prec, fwidth, flags & ~_ADAPT_EXP)

    if minwidth:
        text += "E" if flags & _UPPERCASE else "e"
        text += format_integer(abs(expval), expval < 0, 10, 0, minwidth - 1,
                               _ZEROPAD | _PLUS)
        if flags & _LEFT:
            text = text.ljust(width)
    return text