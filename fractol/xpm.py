"""Reading XPM pixmaps, from source text or from an array of strings."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from fractol.colors import lookup_color
from fractol.image import Image

TRANSPARENT = 0xFF000000

_WORD_SEPARATORS = re.compile(r"[ \t]+")
_INTEGER = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_HEX = re.compile(r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")
_NAME_BUFFER = 63


class XpmError(ValueError):
    """Raised when XPM data is malformed or incomplete."""


def find(haystack: str, needle: str, limit: int) -> int:
    """Return the position of ``needle`` in ``haystack``, or -1.

    A needle longer than ``limit`` is never found.
    """
    if not needle:
        raise ValueError("needle must not be empty")
    if len(needle) > limit:
        return -1
    return haystack.find(needle)


def find_unquoted(haystack: str, needle: str, limit: int) -> int:
    """Like :func:`find`, but skip matches that lie inside double quotes."""
    if not needle:
        raise ValueError("needle must not be empty")
    if len(needle) > limit:
        return -1
    quoted = False
    for pos in range(len(haystack) - len(needle) + 1):
        if haystack[pos] == '"':
            quoted = not quoted
        if not quoted and haystack.startswith(needle, pos):
            return pos
    return -1


def split_words(text: str) -> list[str]:
    """Split on runs of spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _blank(text: str, start: int, count: int) -> str:
    count = max(0, min(count, len(text) - start))
    return text[:start] + " " * count + text[start + count:]


def strip_comments(text: str) -> str:
    """Replace ``/* */`` and ``//`` comments outside quotes with spaces.

    The result has the same length as the input.
    """
    while (begin := find_unquoted(text, "/*", len(text))) != -1:
        end = find(text[begin + 2:], "*/", len(text) - begin - 2)
        text = _blank(text, begin, end + 4)
    while (begin := find_unquoted(text, "//", len(text))) != -1:
        end = find(text[begin + 2:], "\n", len(text) - begin - 2)
        text = _blank(text, begin, end + 3)
    return text


def xpm_lines(text: str) -> Iterator[str]:
    """Yield the contents of each double-quoted string in ``text`` in order."""
    pos = 0
    while True:
        opening = text.find('"', pos)
        if opening == -1:
            return
        closing = text.find('"', opening + 1)
        if closing == -1:
            return
        yield text[opening + 1:closing]
        pos = closing + 1


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _atoi(word: str) -> int:
    match = _INTEGER.match(word)
    return int(match.group(1)) if match else 0


def text_color(name: str, suffix: Optional[str] = None) -> int:
    """Resolve an XPM colour: ``#RRGGBB`` or a colour name, else 0.

    ``suffix`` is the word that followed the name; it is joined to the name
    with a space so that two-word names such as ``light blue`` resolve.
    """
    if name.startswith("#"):
        match = _HEX.match(name[1:])
        digits = match.group(2) if match else ""
        if not digits:
            return 0
        value = int(digits, 16)
        if match.group(1) == "-":
            value = -value
        return _int32(value)
    if suffix is not None:
        name = f"{name} {suffix}"[:_NAME_BUFFER]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before the {what}") from None


def _header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"XPM header needs four values: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if any(value <= 0 for value in values):
        raise XpmError(f"XPM header values must be positive: {line!r}")
    return values  # type: ignore[return-value]


def _color_entry(line: str, cpp: int) -> int:
    words = split_words(line[cpp:])
    try:
        index = words.index("c")
    except ValueError:
        raise XpmError(f"colour line has no 'c' entry: {line!r}") from None
    if index + 1 >= len(words):
        raise XpmError(f"colour line has no colour after 'c': {line!r}")
    suffix = words[index + 2] if index + 2 < len(words) else None
    return text_color(words[index + 1], suffix)


def parse_xpm(
    lines: Iterable[str],
    bits_per_pixel: int = 32,
    big_endian: bool = False,
) -> Image:
    """Build an :class:`Image` from XPM strings: header, colours, then rows.

    Transparent pixels (colour ``None``) are stored as 0xFF000000; pixel
    codes without a colour definition become 0.
    """
    source = iter(lines)
    width, height, ncolors, cpp = _header(_next_line(source, "header"))
    # Short codes are looked up directly, so later definitions replace
    # earlier ones; long codes are searched and the first definition wins.
    direct = cpp <= 2
    colors: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(source, "colour table")
        code = line[:cpp]
        value = _color_entry(line, cpp)
        if direct:
            colors[code] = value
        else:
            colors.setdefault(code, value)

    image = Image(width, height, bits_per_pixel, big_endian)
    for y in range(height):
        row = _next_line(source, "pixel rows")
        for x in range(width):
            color = colors.get(row[x * cpp:(x + 1) * cpp], 0)
            if color == -1:
                color = TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def read_xpm_file(path: Union[str, Path]) -> Image:
    """Read an XPM file, ignoring comments, into a 32-bit little-endian image."""
    text = Path(path).read_bytes().decode("latin-1")
    return parse_xpm(xpm_lines(strip_comments(text)))


def images_compatible(a: Image, b: Image) -> bool:
    """Whether two images share size and pixel layout, so data can be copied."""
    return (
        a.width == b.width
        and a.height == b.height
        and a.bits_per_pixel == b.bits_per_pixel
        and a.big_endian == b.big_endian
        and a.line_length == b.line_length
    )