"""Small text helpers: C-style prefix comparison and a minimal printf."""

from __future__ import annotations

import sys
from itertools import zip_longest
from typing import Any, Iterator, TextIO

DECIMAL = "0123456789"
HEX_LOWER = "0123456789abcdef"
HEX_UPPER = "0123456789ABCDEF"

_NULL_STRING = "(null)"
_NULL_POINTER = "(nil)"


def _as_bytes(value: str | bytes) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


def strncmp(s1: str | bytes, s2: str | bytes, n: int) -> int:
    """Compare at most ``n`` characters; a NUL or the end of a string stops it.

    Returns the difference of the first differing byte values, or 0.
    """
    first = _as_bytes(s1)[:n]
    second = _as_bytes(s2)[:n]
    for a, b in zip_longest(first, second, fillvalue=0):
        if a != b:
            return a - b
        if a == 0:
            return 0
    return 0


def to_base(n: int, digits: str) -> str:
    """Write integer ``n`` using ``digits`` as the symbols of the base."""
    base = len(digits)
    if base < 2:
        raise ValueError("a base needs at least two digits")
    sign = "-" if n < 0 else ""
    n = abs(n)
    out = []
    while True:
        n, remainder = divmod(n, base)
        out.append(digits[remainder])
        if n == 0:
            break
    return sign + "".join(reversed(out))


def format_pointer(address: int | None) -> str:
    """Render an address as ``0x...`` in lower-case hex, or ``(nil)`` for null."""
    if not address:
        return _NULL_POINTER
    return "0x" + to_base(address & 0xFFFFFFFFFFFFFFFF, HEX_LOWER)


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _uint32(value: int) -> int:
    return value & 0xFFFFFFFF


def _char(value: Any) -> str:
    if isinstance(value, str):
        return value[:1]
    return chr(value & 0xFF)


def _string(value: Any) -> str:
    return _NULL_STRING if value is None else str(value)


_CONVERSIONS = {
    "s": _string,
    "c": _char,
    "d": lambda v: to_base(_int32(v), DECIMAL),
    "i": lambda v: to_base(_int32(v), DECIMAL),
    "u": lambda v: to_base(_uint32(v), DECIMAL),
    "x": lambda v: to_base(_uint32(v), HEX_LOWER),
    "X": lambda v: to_base(_uint32(v), HEX_UPPER),
    "p": format_pointer,
}


def _convert(spec: str, values: Iterator[Any]) -> str:
    if spec == "%":
        return "%"
    conversion = _CONVERSIONS.get(spec)
    if conversion is None:
        return ""
    try:
        value = next(values)
    except StopIteration:
        raise TypeError(f"not enough arguments for '%{spec}'") from None
    return conversion(value)


def cformat(fmt: str, *args: Any) -> str:
    """Format ``fmt`` with the conversions %s %c %d %i %u %x %X %p and %%.

    Any other conversion character is dropped without consuming an argument.
    """
    values = iter(args)
    chars = iter(fmt)
    out = []
    for char in chars:
        if char != "%":
            out.append(char)
            continue
        out.append(_convert(next(chars, ""), values))
    return "".join(out)


def printf(fmt: str, *args: Any) -> int:
    """Write the formatted text to standard output and return its length."""
    text = cformat(fmt, *args)
    sys.stdout.write(text)
    return len(text)


def putstr_fd(text: str | None, stream: TextIO) -> None:
    """Write ``text`` to ``stream``; ``None`` writes nothing."""
    if text:
        stream.write(text)