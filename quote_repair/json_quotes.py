"""
JSON quote repair.

A single forward scan keeps a stack of open containers and an "expecting
value" flag. Property names run to their next unescaped quote untouched;
string values go through the boundary locator, which decides which of the
following quotes really ends the value.

Strings opened with `'` (pasted pseudo-JSON) are located the same way and
re-emitted double-quoted.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .escaping import escape_double_quotes, escape_json_value
from .rules import JSON_BOUNDARY_CHARS, JSON_VALUE_START_CHARS

_QUOTES = "\"'"
_LITERAL_START = re.compile(r"[0-9tfn-]")
_LITERAL_END = re.compile(r"[,}\]\s]")

_NEXT_PROPERTY = re.compile(r"""\s*["']""")
_NEXT_ELEMENT = re.compile(r"\s*[" + re.escape(JSON_VALUE_START_CHARS) + r"]")


def _skip_whitespace(content: str, index: int) -> int:
    n = len(content)
    while index < n and content[index].isspace():
        index += 1
    return index


def _is_escaped(content: str, index: int, floor: int) -> bool:
    backslashes = 0
    j = index - 1
    while j >= floor and content[j] == "\\":
        backslashes += 1
        j -= 1
    return backslashes % 2 == 1


def is_boundary_candidate(content: str, index: int) -> bool:
    """A quote at `index` could close a string if structure follows it."""
    nxt = _skip_whitespace(content, index + 1)
    return nxt >= len(content) or content[nxt] in JSON_BOUNDARY_CHARS


def boundary_signal(content: str, index: int) -> Optional[str]:
    """
    Classify what follows a boundary candidate.

    Returns "property" (`,` then a quoted name), "element" (`,` then a value
    start), "end" (only whitespace remains), "close" (`}`/`]` followed by
    nothing or more structure), or None when the candidate is unconvincing,
    e.g. the `]` in `"arr[0]"`.
    """
    after = index + 1
    if content.startswith(",", after):
        if _NEXT_PROPERTY.match(content, after + 1):
            return "property"
        if _NEXT_ELEMENT.match(content, after + 1):
            return "element"
    if _skip_whitespace(content, after) >= len(content):
        return "end"
    if after < len(content) and content[after] in "}]":
        rest = _skip_whitespace(content, after + 1)
        if rest >= len(content) or content[rest] in ",}]":
            return "close"
    return None


def find_closing_quote(content: str, start: int, quote: str = '"') -> int:
    """
    Offset of the true closing quote for a string value whose content
    begins at `start`; `len(content)` when the string never closes.
    """
    last_quote = None
    last_boundary = None
    i = content.find(quote, start)
    while i != -1:
        if not _is_escaped(content, i, start):
            last_quote = i
            if is_boundary_candidate(content, i):
                # Cheap path: nothing quote-like before the first candidate.
                if last_boundary is None and quote not in content[start:i]:
                    return i
                if boundary_signal(content, i) is not None:
                    return i
                last_boundary = i
        i = content.find(quote, i + 1)

    if last_boundary is not None:
        return last_boundary
    if last_quote is not None:
        return last_quote
    return len(content)


def _find_name_end(content: str, start: int, quote: str) -> int:
    j = start
    while j < len(content):
        if content[j] == quote and content[j - 1] != "\\":
            return j
        j += 1
    return len(content)


def preprocess_json(content: str) -> Tuple[str, List[str]]:
    """
    Repair string values in JSON text.

    Returns the repaired text and the list of changes made.
    """
    changes: List[str] = []
    out: List[str] = []
    stack: List[str] = []
    expecting_value = False
    i = 0
    n = len(content)

    while i < n:
        ch = content[i]

        if ch.isspace():
            out.append(ch)
            i += 1
            continue

        if ch in "{[":
            stack.append("object" if ch == "{" else "array")
            expecting_value = ch == "["
            out.append(ch)
            i += 1
            continue

        if ch in "}]":
            if stack:
                stack.pop()
            expecting_value = False
            out.append(ch)
            i += 1
            continue

        if ch == ":":
            expecting_value = True
            out.append(ch)
            i += 1
            continue

        if ch == ",":
            expecting_value = not stack or stack[-1] != "object"
            out.append(ch)
            i += 1
            continue

        if ch in _QUOTES:
            if expecting_value:
                close = find_closing_quote(content, i + 1, ch)
                raw = content[i + 1:close]
                emitted = '"' + escape_json_value(raw) + '"'
                what = "value"
                expecting_value = False
            else:
                close = _find_name_end(content, i + 1, ch)
                raw = content[i + 1:close]
                emitted = '"' + (escape_double_quotes(raw) if ch == "'" else raw) + '"'
                what = "property name"

            original_end = min(close + 1, n)
            if emitted != content[i:original_end]:
                if close >= n:
                    changes.append(f"Position {i}: Closed unterminated {what}")
                elif ch == "'":
                    changes.append(f"Position {i}: Converted single-quoted {what} to double quotes")
                else:
                    changes.append(f"Position {i}: Escaped quotes in {what}")
            out.append(emitted)
            i = original_end
            continue

        if _LITERAL_START.match(ch):
            j = i
            while j < n and not _LITERAL_END.match(content[j]):
                j += 1
            out.append(content[i:j])
            expecting_value = False
            i = j
            continue

        out.append(ch)
        i += 1

    return "".join(out), changes
