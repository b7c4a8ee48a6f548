"""Depth-counted scanning and parsing of JS object literals.

Container files are generated JavaScript, but only a small subset is ever
needed: object literals whose values are strings (any quote style), numbers,
booleans, nested objects / arrays and bare identifier references. Braces
inside strings and comments never count toward nesting depth.
"""

from __future__ import annotations

import re
from typing import Any


class MalformedContainerError(ValueError):
    """Existing container content is structurally broken (unbalanced, unterminated)."""


class Reference(str):
    """A bare identifier used as a value, e.g. ``home`` in ``{ 'home': home }``."""


_QUOTES = "'\"`"
_IDENT_RE = re.compile(r"[A-Za-z_$][\w$]*")
_NUMBER_RE = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_KEYWORDS: dict[str, Any] = {"true": True, "false": False, "null": None}


def skip_string(text: str, index: int) -> int:
    """Index just past the string literal opening at ``index``."""
    quote = text[index]
    i = index + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    raise MalformedContainerError(f"Unterminated string starting at offset {index}")


def skip_comment(text: str, index: int) -> int | None:
    """Index just past a comment starting at ``index``, or None if there is none."""
    if text.startswith("//", index):
        end = text.find("\n", index)
        return len(text) if end < 0 else end + 1
    if text.startswith("/*", index):
        end = text.find("*/", index + 2)
        if end < 0:
            raise MalformedContainerError(f"Unterminated comment at offset {index}")
        return end + 2
    return None


def find_matching_brace(text: str, open_index: int) -> int:
    """Index of the ``}`` closing the ``{`` at ``open_index``."""
    depth = 0
    i = open_index
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _QUOTES:
            i = skip_string(text, i)
            continue
        if ch == "/":
            after = skip_comment(text, i)
            if after is not None:
                i = after
                continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    raise MalformedContainerError(f"Unbalanced braces for block opening at offset {open_index}")


def skip_trivia(text: str, index: int) -> int:
    """Skip whitespace and comments."""
    n = len(text)
    while index < n:
        if text[index].isspace():
            index += 1
            continue
        after = skip_comment(text, index) if text[index] == "/" else None
        if after is None:
            return index
        index = after
    return index


# ---------------------------------------------------------------------------
# String escaping
# ---------------------------------------------------------------------------

def unescape(raw: str) -> str:
    def repl(m: re.Match[str]) -> str:
        code = m.group(1)
        if code.startswith("u") and len(code) == 5:
            return chr(int(code[1:], 16))
        return _SIMPLE_ESCAPES.get(code, code)

    return _ESCAPE_RE.sub(repl, raw)


def escape_single_quoted(text: str) -> str:
    return text.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")


def escape_template(text: str) -> str:
    """Escape text for a backtick template literal without interpolation."""
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


# ---------------------------------------------------------------------------
# Object literal parser
# ---------------------------------------------------------------------------

def parse_value(text: str, index: int) -> tuple[Any, int]:
    """Parse one value at ``index``; returns (value, index after it)."""
    index = skip_trivia(text, index)
    if index >= len(text):
        raise MalformedContainerError("Unexpected end of input while reading a value")

    ch = text[index]
    if ch == "{":
        return parse_object(text, index)
    if ch == "[":
        return _parse_array(text, index)
    if ch in _QUOTES:
        end = skip_string(text, index)
        return unescape(text[index + 1:end - 1]), end

    m = _NUMBER_RE.match(text, index)
    if m:
        literal = m.group(0)
        number = float(literal)
        return (int(number) if number.is_integer() and "." not in literal else number), m.end()

    m = _IDENT_RE.match(text, index)
    if m:
        word = m.group(0)
        if word in _KEYWORDS:
            return _KEYWORDS[word], m.end()
        return Reference(word), m.end()

    raise MalformedContainerError(f"Unsupported value syntax at offset {index}: {text[index:index + 20]!r}")


def _parse_key(text: str, index: int) -> tuple[str, int]:
    ch = text[index]
    if ch in "'\"":
        end = skip_string(text, index)
        return unescape(text[index + 1:end - 1]), end
    m = _IDENT_RE.match(text, index) or _NUMBER_RE.match(text, index)
    if not m:
        raise MalformedContainerError(f"Expected a property key at offset {index}")
    return m.group(0), m.end()


def parse_object(text: str, index: int) -> tuple[dict[str, Any], int]:
    """Parse the object literal whose ``{`` is at ``index``.

    Shorthand properties (``{ home }``) map the key to a :class:`Reference`
    of the same name.
    """
    result: dict[str, Any] = {}
    i = skip_trivia(text, index + 1)
    while True:
        if i >= len(text):
            raise MalformedContainerError(f"Unterminated object starting at offset {index}")
        if text[i] == "}":
            return result, i + 1

        key, i = _parse_key(text, i)
        i = skip_trivia(text, i)
        if i < len(text) and text[i] == ":":
            value, i = parse_value(text, i + 1)
        else:
            value = Reference(key)
        result[key] = value

        i = skip_trivia(text, i)
        if i < len(text) and text[i] == ",":
            i = skip_trivia(text, i + 1)
        elif i < len(text) and text[i] != "}":
            raise MalformedContainerError(f"Expected ',' or '}}' at offset {i}")


def _parse_array(text: str, index: int) -> tuple[list[Any], int]:
    items: list[Any] = []
    i = skip_trivia(text, index + 1)
    while True:
        if i >= len(text):
            raise MalformedContainerError(f"Unterminated array starting at offset {index}")
        if text[i] == "]":
            return items, i + 1
        value, i = parse_value(text, i)
        items.append(value)
        i = skip_trivia(text, i)
        if i < len(text) and text[i] == ",":
            i = skip_trivia(text, i + 1)
        elif i < len(text) and text[i] != "]":
            raise MalformedContainerError(f"Expected ',' or ']' at offset {i}")


def parse_object_literal(text: str) -> dict[str, Any]:
    """Parse a standalone ``{ ... }`` literal."""
    start = skip_trivia(text, 0)
    if start >= len(text) or text[start] != "{":
        raise MalformedContainerError("Expected an object literal")
    value, _ = parse_object(text, start)
    return value
