"""Strict parsing of the real and imaginary parts given for a Julia set."""

from __future__ import annotations

LOWER_LIMIT = -2.0
UPPER_LIMIT = 2.0

_LEADING_SPACE = frozenset(" \t\n\v\f\r")
_MESSAGE = "Introduce un numero real válido entre -2 y 2"


class ParameterError(ValueError):
    """Raised when a parameter is not a plain decimal number in [-2, 2]."""

    def __init__(self, text: str) -> None:
        super().__init__(f"{_MESSAGE}: {text!r}")
        self.text = text


def parse_parameter(text: str) -> float:
    """Parse a decimal number such as ``" -1.25"`` and check it lies in [-2, 2].

    Leading whitespace and any run of ``+``/``-`` signs are accepted (each
    ``-`` flips the sign). After that only digits and a single ``.`` are
    allowed; exponents, trailing blanks and empty digit runs are rejected.
    """
    rest = text.lstrip("".join(_LEADING_SPACE))
    sign = 1
    while rest[:1] in ("+", "-") and rest:
        if rest[0] == "-":
            sign = -sign
        rest = rest[1:]

    integer_part = 0
    fractional_part = 0.0
    scale = 1.0
    seen_point = False
    seen_digit = False
    for char in rest:
        if char == ".":
            if seen_point:
                raise ParameterError(text)
            seen_point = True
        elif "0" <= char <= "9":
            seen_digit = True
            digit = ord(char) - ord("0")
            if seen_point:
                scale /= 10
                fractional_part += digit * scale
            else:
                integer_part = integer_part * 10 + digit
        else:
            raise ParameterError(text)

    if not seen_digit:
        raise ParameterError(text)
    value = (integer_part + fractional_part) * sign
    if value < LOWER_LIMIT or value > UPPER_LIMIT:
        raise ParameterError(text)
    return value