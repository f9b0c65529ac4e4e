"""Constrained reader and writer for JavaScript object literals.

The reader accepts the data subset a Tailwind config is normally written
in: strings, numbers, booleans, null, arrays and nested objects with
identifier, quoted or numeric keys and optional trailing commas. Anything
else (function calls, spreads, arrow functions, template interpolation)
raises ConfigSyntaxError, and callers fall back to lenient extraction.
"""

import json
import re
from typing import Any

from ..exceptions import CleanerError
from .text_utils import find_exported_object, find_matching, strip_comments

CONFIG_HEADER = "/** @type {import('tailwindcss').Config} */"

_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][\w$]*")
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_BARE_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_LITERALS = {"true": True, "false": False, "null": None, "undefined": None}


class ConfigSyntaxError(CleanerError):
    """Raised when text falls outside the supported object-literal subset."""

    def __init__(self, message: str, position: int | None = None):
        self.position = position
        if position is not None:
            message = f"{message} at offset {position}"
        super().__init__(message)


class _ObjectReader:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _peek(self) -> str:
        self._skip_whitespace()
        if self.pos >= len(self.text):
            raise ConfigSyntaxError("Unexpected end of input", self.pos)
        return self.text[self.pos]

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            raise ConfigSyntaxError(f"Expected {char!r}", self.pos)
        self.pos += 1

    def read_document(self) -> Any:
        value = self.read_value()
        self._skip_whitespace()
        if self.pos != len(self.text):
            raise ConfigSyntaxError("Unexpected trailing content", self.pos)
        return value

    def read_value(self) -> Any:
        char = self._peek()
        if char == "{":
            return self._read_object()
        if char == "[":
            return self._read_array()
        if char in ("'", '"', "`"):
            return self._read_string()

        number = _NUMBER_RE.match(self.text, self.pos)
        if number:
            self.pos = number.end()
            raw = number.group(0)
            return float(raw) if any(c in raw for c in ".eE") else int(raw)

        word = _IDENTIFIER_RE.match(self.text, self.pos)
        if word and word.group(0) in _LITERALS:
            self.pos = word.end()
            return _LITERALS[word.group(0)]
        raise ConfigSyntaxError("Unsupported expression", self.pos)

    def _read_string(self) -> str:
        quote = self.text[self.pos]
        self.pos += 1
        chars: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(chars)
            if quote == "`" and self.text.startswith("${", self.pos):
                raise ConfigSyntaxError("Template interpolation", self.pos)
            if char == "\\":
                self.pos += 1
                if self.pos >= len(self.text):
                    break
                escaped = self.text[self.pos]
                if escaped == "u":
                    digits = self.text[self.pos + 1 : self.pos + 5]
                    try:
                        chars.append(chr(int(digits, 16)))
                    except ValueError as e:
                        raise ConfigSyntaxError("Bad unicode escape", self.pos) from e
                    self.pos += 5
                    continue
                if escaped == "\n":
                    self.pos += 1
                    continue
                chars.append(_ESCAPES.get(escaped, escaped))
                self.pos += 1
                continue
            chars.append(char)
            self.pos += 1
        raise ConfigSyntaxError("Unterminated string", self.pos)

    def _read_key(self) -> str:
        char = self._peek()
        if char in ("'", '"'):
            return self._read_string()
        match = _IDENTIFIER_RE.match(self.text, self.pos) or _NUMBER_RE.match(
            self.text, self.pos
        )
        if not match:
            raise ConfigSyntaxError("Unsupported property key", self.pos)
        self.pos = match.end()
        return match.group(0)

    def _read_object(self) -> dict[str, Any]:
        self._expect("{")
        result: dict[str, Any] = {}
        while True:
            if self._peek() == "}":
                self.pos += 1
                return result
            key = self._read_key()
            self._expect(":")
            result[key] = self.read_value()
            if self._peek() == ",":
                self.pos += 1
            elif self._peek() != "}":
                raise ConfigSyntaxError("Expected ',' or '}'", self.pos)

    def _read_array(self) -> list[Any]:
        self._expect("[")
        result: list[Any] = []
        while True:
            if self._peek() == "]":
                self.pos += 1
                return result
            result.append(self.read_value())
            if self._peek() == ",":
                self.pos += 1
            elif self._peek() != "]":
                raise ConfigSyntaxError("Expected ',' or ']'", self.pos)


def parse_js_object(text: str) -> Any:
    """Parse a comment-free object literal (or other supported value).

    Raises:
        ConfigSyntaxError: If the text uses unsupported syntax.
    """
    return _ObjectReader(text).read_document()


def parse_exported_object(source: str) -> dict[str, Any]:
    """Parse the object a config module exports.

    Args:
        source: Full text of the config module, comments included.

    Returns:
        The exported object as plain Python data.

    Raises:
        ConfigSyntaxError: If no exported object is found or it uses
            unsupported syntax.
    """
    stripped = strip_comments(source)
    start = find_exported_object(stripped)
    if start is None:
        raise ConfigSyntaxError("No exported config object found")
    end = find_matching(stripped, start)
    if end is None:
        raise ConfigSyntaxError("Unbalanced braces in exported object", start)
    data = parse_js_object(stripped[start : end + 1])
    if not isinstance(data, dict):
        raise ConfigSyntaxError("Exported value is not an object", start)
    return data


def format_key(key: str) -> str:
    """Render an object key, quoting it unless it is a plain identifier."""
    if _BARE_KEY_RE.match(key):
        return key
    return _quote(key)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


def format_js_value(value: Any, indent: str = "  ", level: int = 0) -> str:
    """Render Python data as JavaScript source.

    Strings are single-quoted, arrays put one item per line and objects
    put one property per line with bare identifier keys.
    """
    inner = indent * (level + 1)
    outer = indent * level

    if isinstance(value, dict):
        if not value:
            return "{}"
        entries = [
            f"{inner}{format_key(str(key))}: {format_js_value(item, indent, level + 1)}"
            for key, item in value.items()
        ]
        return "{\n" + ",\n".join(entries) + f"\n{outer}}}"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        items = [f"{inner}{format_js_value(item, indent, level + 1)}" for item in value]
        return "[\n" + ",\n".join(items) + f"\n{outer}]"
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return json.dumps(value)


def render_config_module(data: dict[str, Any], esm: bool = False) -> str:
    """Render a complete tailwind.config.js module for ``data``."""
    export = "export default" if esm else "module.exports ="
    return f"{CONFIG_HEADER}\n{export} {format_js_value(data)}\n"
