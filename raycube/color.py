"""Parsing of the R,G,B colour values used for floor and ceiling."""

from __future__ import annotations

from .config import CubError

_BLANKS = " \t\n"
_ATOI_SPACE = " \t\n\v\f\r"


def is_num(text: str | None) -> bool:
    """True if ``text`` is an optionally signed integer, padded by blanks."""
    if text is None:
        return False
    body = text.lstrip(_BLANKS)
    if not body:
        return False
    if body[0] in "+-" and len(body) > 1 and body[1].isascii() and body[1].isdigit():
        body = body[1:]
    digits = len(body) - len(body.lstrip("0123456789"))
    return body[digits:].strip(_BLANKS) == ""


def _atoi(text: str) -> int:
    body = text.lstrip(_ATOI_SPACE)
    sign = 1
    if body[:1] == "-":
        sign = -1
        body = body[1:]
    elif body[:1] == "+":
        body = body[1:]
    if body[:1] in ("-", "+"):
        return 0
    digits = body[: len(body) - len(body.lstrip("0123456789"))]
    return sign * int(digits) if digits else 0


def parse_color(text: str) -> int:
    """Turn ``"R,G,B"`` into a packed 0xRRGGBB integer.

    Empty fields between commas are skipped; exactly three values must
    remain, each a number from 0 to 255.
    """
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3:
        raise CubError("invalid colour code: expected three values")
    values = []
    for part in parts:
        value = _atoi(part)
        if value > 255 or value < 0:
            raise CubError(f"invalid colour code: {part!r} is out of range")
        if not is_num(part):
            raise CubError(f"invalid colour code: {part!r} is not a number")
        values.append(value)
    red, green, blue = values
    return ((red & 0xFF) << 16) + ((green & 0xFF) << 8) + (blue & 0xFF)