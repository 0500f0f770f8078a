"""Literal formatters: Python values → JavaScript source text.

All functions here are pure and operate on plain Python values, not on
nodes, so they can be reused by any front-end that needs JS literal text.
"""
from __future__ import annotations

import math
import re
from decimal import Decimal

# JS prints numbers in positional notation between 1e-6 and 1e21.
_POSITIONAL_LOWER = 1e-6
_POSITIONAL_UPPER = 1e21

_EXPONENT_RE = re.compile(r"e([+-])0*(\d)")

_STRING_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
    "\x00": "\\x00",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

_TEMPLATE_ESCAPES: dict[str, str] = {
    **{k: v for k, v in _STRING_ESCAPES.items() if k != '"'},
    "`": "\\`",
}


def format_boolean(value: bool) -> str:
    return "true" if value else "false"


def format_number(value: int | float) -> str:
    """Render a number as the shortest JS numeric text.

    Integral floats lose their ``.0``; non-finite values render as
    ``NaN``/``Infinity``/``-Infinity`` and negative zero as ``-0``.

    Examples
    --------
    >>> format_number(10.0)
    '10'
    >>> format_number(1e-5)
    '0.00001'
    >>> format_number(float("-inf"))
    '-Infinity'
    """
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    magnitude = abs(value)
    if value.is_integer() and magnitude < _POSITIONAL_UPPER:
        return str(int(value))
    text = repr(value)
    if "e" in text and _POSITIONAL_LOWER <= magnitude < _POSITIONAL_UPPER:
        return format(Decimal(text), "f")
    return _EXPONENT_RE.sub(r"e\1\2", text)


def format_bigint(value: int) -> str:
    return f"{value}n"


def _escape(value: str, table: dict[str, str]) -> str:
    out: list[str] = []
    for char in value:
        escaped = table.get(char)
        if escaped is not None:
            out.append(escaped)
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            out.append(f"\\x{ord(char):02x}")
        elif 0xD800 <= ord(char) <= 0xDFFF:
            # Lone surrogates cannot be encoded as UTF-8 output.
            out.append(f"\\u{ord(char):04x}")
        else:
            out.append(char)
    return "".join(out)


def format_string(value: str) -> str:
    """Render ``value`` as a double-quoted JS string literal."""
    return f'"{_escape(value, _STRING_ESCAPES)}"'


def escape_template_part(value: str) -> str:
    """Escape the raw text between substitutions of a template literal."""
    return _escape(value, _TEMPLATE_ESCAPES).replace("${", "\\${")


def format_regex(pattern: str, flags: str = "") -> str:
    """Render a regular expression literal.

    Unescaped ``/`` characters in ``pattern`` are escaped, and an empty
    pattern is written ``(?:)`` so the result is not a line comment.
    """
    if not pattern:
        return f"/(?:)/{flags}"
    out: list[str] = []
    escaped = False
    for char in pattern:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == "/":
            out.append("\\")
        out.append(char)
    return f"/{''.join(out)}/{flags}"


def is_identifier_name(value: str) -> bool:
    """Return True if ``value`` can be written as a bare property name."""
    return bool(value) and value.replace("$", "_").isidentifier()


def format_property_key_text(value: str | int | float) -> str:
    """Render an object key in its minimal form.

    Identifier names stay bare and other strings are quoted.  Non-negative
    finite numbers are written as numeric text; any other number is quoted.
    """
    if isinstance(value, str):
        return value if is_identifier_name(value) else format_string(value)
    if value == 0:
        return "0"
    if math.isfinite(value) and value > 0:
        return format_number(value)
    return format_string(format_number(value))


def format_doc_comment(value: str) -> str:
    """Render a leading documentation comment (``/** value */``)."""
    return "/** " + value.replace("*/", "*\\/") + " */"
