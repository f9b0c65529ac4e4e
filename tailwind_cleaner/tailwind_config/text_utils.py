"""Text scanning helpers for JavaScript config files.

These helpers locate objects and properties by offset without evaluating
anything. ``strip_comments`` blanks comments out instead of deleting
them, so every offset found in the stripped text is valid in the
original text as well; merge strategies search the stripped copy and
splice into the original.
"""

import re
from dataclasses import dataclass

_QUOTES = ("'", '"', "`")
_CLOSERS = {"{": "}", "[": "]", "(": ")"}
_KEY_RE = re.compile(r"[A-Za-z_$][\w$]*|\d+(?:\.\d+)?")

_EXPORT_RE = re.compile(r"\bmodule\.exports\s*=\s*|\bexport\s+default\s+")


@dataclass
class Property:
    """A top-level property of an object literal, located by offsets.

    ``start`` is the first character of the key, ``value_start`` and
    ``value_end`` delimit the value (``value_end`` exclusive, trailing
    whitespace excluded) and ``end`` is just past the separating comma
    when there is one.
    """

    key: str | None
    start: int
    value_start: int | None
    value_end: int
    end: int

    def value_is_object(self, text: str) -> bool:
        """Whether the property value is an object literal."""
        return self.value_start is not None and text[self.value_start] == "{"


def _skip_string(text: str, index: int) -> int:
    """Return the offset just past the string literal opening at ``index``."""
    quote = text[index]
    i = index + 1
    while i < len(text):
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return i + 1
        i += 1
    return len(text)


def strip_comments(text: str) -> str:
    """Blank out ``//`` and ``/* */`` comments, keeping offsets and newlines.

    Comment markers inside string literals (``"https://..."``) are left
    alone.
    """
    chars = list(text)
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char in _QUOTES:
            i = _skip_string(text, i)
            continue
        if text.startswith("//", i):
            end = text.find("\n", i)
            end = length if end == -1 else end
            for j in range(i, end):
                chars[j] = " "
            i = end
            continue
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            end = length if end == -1 else end + 2
            for j in range(i, end):
                if chars[j] != "\n":
                    chars[j] = " "
            i = end
            continue
        i += 1
    return "".join(chars)


def find_matching(text: str, open_index: int) -> int | None:
    """Find the bracket closing the one at ``open_index``.

    Handles nested ``{}``, ``[]`` and ``()`` and skips string literals.
    The text is expected to be comment-stripped.

    Returns:
        Offset of the matching closer, or None if unbalanced.
    """
    if open_index >= len(text) or text[open_index] not in _CLOSERS:
        return None

    stack = [_CLOSERS[text[open_index]]]
    i = open_index + 1
    while i < len(text):
        char = text[i]
        if char in _QUOTES:
            i = _skip_string(text, i)
            continue
        if char in _CLOSERS:
            stack.append(_CLOSERS[char])
        elif char in ("}", "]", ")"):
            if char != stack[-1]:
                return None
            stack.pop()
            if not stack:
                return i
        i += 1
    return None


def _skip_whitespace(text: str, index: int, limit: int) -> int:
    while index < limit and text[index].isspace():
        index += 1
    return index


def _scan_value_end(text: str, index: int, limit: int) -> int:
    """Offset of the ``,`` or closing brace ending the value at ``index``."""
    i = index
    while i < limit:
        char = text[i]
        if char in _QUOTES:
            i = _skip_string(text, i)
            continue
        if char in _CLOSERS:
            close = find_matching(text, i)
            if close is None:
                return limit
            i = close + 1
            continue
        if char == ",":
            return i
        i += 1
    return limit


def iter_properties(text: str, open_index: int) -> list[Property]:
    """List the top-level properties of the object literal at ``open_index``.

    Keys may be identifiers, numbers or quoted strings. Computed keys and
    spreads are reported with ``key=None``. The text is expected to be
    comment-stripped.
    """
    close = find_matching(text, open_index)
    if close is None or text[open_index] != "{":
        return []

    properties: list[Property] = []
    i = open_index + 1
    while i < close:
        i = _skip_whitespace(text, i, close)
        if i >= close:
            break
        if text[i] == ",":
            i += 1
            continue

        start = i
        key: str | None = None
        if text[i] in _QUOTES:
            key_end = _skip_string(text, i)
            key = text[i + 1 : key_end - 1]
            i = key_end
        elif text[i] == "[":
            bracket_close = find_matching(text, i)
            i = close if bracket_close is None else bracket_close + 1
        else:
            match = _KEY_RE.match(text, i)
            if match:
                key = match.group(0)
                i = match.end()

        i = _skip_whitespace(text, i, close)
        value_start: int | None = None
        if i < close and text[i] == ":":
            value_start = _skip_whitespace(text, i + 1, close)
            raw_end = _scan_value_end(text, value_start, close)
        else:
            # Shorthand, spread or method: consume up to the next separator
            key = key if i >= close or text[i] == "," else None
            raw_end = _scan_value_end(text, i, close)

        value_end = raw_end
        while value_end > start and text[value_end - 1].isspace():
            value_end -= 1
        end = raw_end + 1 if raw_end < close and text[raw_end] == "," else raw_end
        properties.append(
            Property(
                key=key,
                start=start,
                value_start=value_start,
                value_end=value_end,
                end=end,
            )
        )
        i = end
    return properties


def find_property(text: str, open_index: int, key: str) -> Property | None:
    """Find a top-level property by key in the object at ``open_index``."""
    for prop in iter_properties(text, open_index):
        if prop.key == key:
            return prop
    return None


def find_object_property(text: str, open_index: int, key: str) -> Property | None:
    """Find a top-level property whose value is an object literal."""
    prop = find_property(text, open_index, key)
    if prop is not None and prop.value_is_object(text):
        return prop
    return None


def find_exported_object(text: str) -> int | None:
    """Locate the ``{`` of the object exported by a config module.

    Recognizes ``module.exports = {...}``, ``export default {...}``,
    ``export default defineConfig({...})`` and an exported identifier
    bound earlier with ``const name = {...}``. The text is expected to be
    comment-stripped.

    Returns:
        Offset of the opening brace, or None if no exported object exists.
    """
    for match in _EXPORT_RE.finditer(text):
        i = match.end()
        if i >= len(text):
            continue
        if text[i] == "{":
            return i

        ident = re.match(r"[A-Za-z_$][\w$]*", text[i:])
        if not ident:
            continue
        after = _skip_whitespace(text, i + ident.end(), len(text))
        if after < len(text) and text[after] == "(":
            inner = _skip_whitespace(text, after + 1, len(text))
            if inner < len(text) and text[inner] == "{":
                return inner
            continue

        binding = re.search(
            rf"\b(?:const|let|var)\s+{re.escape(ident.group(0))}\b[^=]*=\s*",
            text,
        )
        if binding:
            j = binding.end()
            if j < len(text) and text[j] == "{":
                return j
    return None


def line_indent(text: str, index: int) -> str:
    """Leading whitespace of the line containing ``index``."""
    line_start = text.rfind("\n", 0, index) + 1
    indent_end = line_start
    while indent_end < len(text) and text[indent_end] in " \t":
        indent_end += 1
    return text[line_start:indent_end]
