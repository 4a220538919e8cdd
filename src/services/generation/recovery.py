"""Text repair helpers used by the recovery strategies.

Generators asked for "JSON only" still wrap the object in markdown fences,
add a sentence of prose before it, emit raw line breaks inside string values,
or stop mid-object when they hit the token cap. Each helper here repairs one
of those defects and nothing else; `parser.py` decides the order in which
they are combined.
"""

from __future__ import annotations

import re


class RecoveryMiss(ValueError):
    """A repair step could not find anything to work with."""


# Opening or closing fence, with an optional language tag and the whitespace
# that follows it (```json\n, ```\n, a bare trailing ```).
FENCE_PATTERN = re.compile(r"```[A-Za-z0-9_+-]*\s*")
NEWLINE_PATTERN = re.compile(r"\r\n|\r|\n")

# A complete JSON string literal; escapes are consumed pairwise so an escaped
# quote never terminates the match.
STRING_LITERAL = r'"((?:[^"\\]|\\.)*)"'
_ARRAY_ENTRY = re.compile(r"\s*,?\s*" + STRING_LITERAL, re.DOTALL)
_UNESCAPES = {"n": "\n", '"': '"', "\\": "\\"}
_ESCAPE_SEQUENCE = re.compile(r'\\(["\\n])')

QUOTE_INDEX_KEYS = ("quote_index", "quoteIndex")


def strip_fences(text: str) -> str:
    """Remove markdown code-fence markers and surrounding whitespace."""
    return FENCE_PATTERN.sub("", text).strip()


def slice_object(text: str) -> str:
    """Return the span from the first ``{`` to the last ``}`` inclusive."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise RecoveryMiss("no object delimiters found")
    return text[start : end + 1]


def extract_object(text: str) -> str:
    return slice_object(strip_fences(text))


def escape_all_newlines(text: str) -> str:
    """Replace every raw line break with the two characters ``\\n``."""
    return NEWLINE_PATTERN.sub(r"\\n", text)


def escape_newlines_in_strings(text: str) -> str:
    """Escape raw line breaks, but only inside string literals.

    A CRLF pair inside a string becomes a single ``\\n``. Backslash escapes
    are copied through as a unit so ``\\"`` does not end the string.
    """
    out: list[str] = []
    in_string = False
    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        if in_string:
            if ch == "\\" and i + 1 < length:
                out.append(text[i : i + 2])
                i += 2
                continue
            if ch == "\r" or ch == "\n":
                out.append("\\n")
                i += 2 if text.startswith("\r\n", i) else 1
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        out.append(ch)
        i += 1
    return "".join(out)


def unescape_literal(value: str) -> str:
    """Undo the escapes a generator uses inside copy text."""
    return _ESCAPE_SEQUENCE.sub(lambda m: _UNESCAPES[m.group(1)], value)


def read_array_entries(text: str, field: str) -> list[str]:
    """Read the complete string entries of ``"field": [ ... ]`` from raw text.

    Reading stops at the first token that is not a complete string literal:
    the closing bracket, a non-string entry, or a literal cut off by
    truncation. Only fully closed entries are returned.
    """
    opening = re.compile(r'"%s"\s*:\s*\[' % re.escape(field))
    match = opening.search(text)
    if match is None:
        return []

    entries: list[str] = []
    pos = match.end()
    while (entry := _ARRAY_ENTRY.match(text, pos)) is not None:
        entries.append(unescape_literal(entry.group(1)))
        pos = entry.end()
    return entries


def find_int_field(text: str, names: tuple[str, ...]) -> int | None:
    """Return the integer written after ``"name":`` for any of ``names``.

    Anything else in that position (null, a quoted number, a float, a value
    cut off mid-token) counts as absent.
    """
    alternatives = "|".join(re.escape(name) for name in names)
    match = re.search(r'"(?:%s)"\s*:\s*(-?\d+)(?![\d.eE])' % alternatives, text)
    return int(match.group(1)) if match else None
