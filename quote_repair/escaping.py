"""
Backslash literalization and the per-format quote escapers.

Rules:
- Pasted text is always literal: every backslash is doubled for YAML
  double-quoted values and JSON, with no special-casing of escape-like
  sequences. Literalization runs once, before quote escaping.
- YAML double-quote / JSON: `"` -> `\\"` unless already preceded by a backslash.
- YAML single-quote: `'` -> `''` unless already part of a `''` pair.
- CSV (RFC 4180): `"` -> `""` unless already part of a `""` pair.
"""

from __future__ import annotations

import re
from typing import List, Union

from .models import Format

_UNESCAPED_DOUBLE_QUOTE = re.compile(r'(?<!\\)"')
_LONE_SINGLE_QUOTE = re.compile(r"(?<!')'(?!')")
_ONLY_QUOTES = re.compile(r'^"+$')


def literalize_backslashes(content: str) -> str:
    return content.replace("\\", "\\\\")


def escape_all_backslashes(content: str, fmt: Union[Format, str]) -> str:
    """
    Format-aware literalization.

    CSV has no backslash escape mechanism, so CSV content is returned as-is.
    """
    if Format(fmt) is Format.CSV:
        return content
    return literalize_backslashes(content)


def escape_double_quotes(content: str) -> str:
    return _UNESCAPED_DOUBLE_QUOTE.sub(r'\\"', content)


def escape_single_quotes(content: str) -> str:
    return _LONE_SINGLE_QUOTE.sub("''", content)


def escape_yaml_value(content: str, quote: str) -> str:
    if quote == '"':
        return escape_double_quotes(literalize_backslashes(content))
    return escape_single_quotes(content)


def escape_json_value(content: str) -> str:
    return escape_double_quotes(literalize_backslashes(content))


def escape_csv_cell(content: str) -> str:
    """
    Escape a CSV cell's inner content.

    A cell made only of quote characters has every quote doubled so the
    count is always even.
    """
    if _ONLY_QUOTES.match(content):
        return content.replace('"', '""')

    out: List[str] = []
    i = 0
    n = len(content)
    while i < n:
        ch = content[i]
        if ch != '"':
            out.append(ch)
            i += 1
        elif i + 1 < n and content[i + 1] == '"':
            out.append('""')
            i += 2
        else:
            out.append('""')
            i += 1
    return "".join(out)


def find_unescaped_quotes(content: str, quote: str) -> List[int]:
    """
    Offsets of quote characters that are not already escaped.

    For `"` an escape is a preceding backslash. For `'` it is YAML's `''`
    pair, consumed left to right, so in `'''` the third quote is the lone one.
    """
    positions: List[int] = []
    i = 0
    n = len(content)
    while i < n:
        if content[i] == quote:
            if quote == '"':
                if i > 0 and content[i - 1] == "\\":
                    i += 1
                    continue
            elif i + 1 < n and content[i + 1] == "'":
                i += 2
                continue
            positions.append(i)
        i += 1
    return positions
