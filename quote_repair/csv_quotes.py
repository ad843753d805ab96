"""
CSV quote repair (RFC 4180).

A cell is quoted when `"` opens it right after a comma, a line break, or at
the start of input; otherwise it runs to the next comma or line break.
Quoted cells go through the closing-quote locator and have their inner
quotes doubled. Unquoted cells that contain a quote are wrapped in quotes.

Known limitation: a quoted cell whose content itself looks like several
adjacent cells (`"a","b"` typed inside one value) cannot be told apart from
real cells and is left as the locator reads it.
"""

from __future__ import annotations

from typing import List, Tuple

from .escaping import escape_csv_cell


def reads_as_new_row(line: str) -> bool:
    """
    Does the line after a quote + line break look like the next record?

    A leading quote is ambiguous (new quoted cell or more of this one), so
    only an unquoted start with comma structure counts.
    """
    return not line.startswith('"') and "," in line


def is_definite_boundary(text: str, index: int) -> bool:
    """Could the quote at `index` close a cell, judging by what follows it?"""
    after = index + 1
    if after >= len(text) or text[after] == ",":
        return True
    if text[after] != "\n":
        return False

    line_start = after + 1
    if line_start >= len(text):
        return True
    line_end = text.find("\n", line_start)
    if line_end == -1:
        line_end = len(text)
    return reads_as_new_row(text[line_start:line_end])


def find_closing_quote(text: str, start: int, prefer_first: bool) -> int:
    """
    Offset of the true closing quote for a quoted cell whose content begins
    at `start`; `len(text)` when no quote follows.

    `prefer_first` trusts a row whose comma count already matches the header.
    """
    first_boundary = None
    last_boundary = None
    last_quote = None

    i = text.find('"', start)
    while i != -1:
        last_quote = i
        if is_definite_boundary(text, i):
            if first_boundary is None:
                first_boundary = i
                if prefer_first or '"' not in text[start:i]:
                    return i
            last_boundary = i
        i = text.find('"', i + 1)

    if last_boundary is not None:
        # Unescaped quotes before the first boundary: absorb them into the value.
        return last_boundary
    if last_quote is not None:
        return last_quote
    return len(text)


def _comma_count(line: str) -> int:
    return line.count(",")


def preprocess_csv(text: str) -> Tuple[str, List[str]]:
    """
    Repair quoted cells in LF-normalized CSV text.

    Returns the repaired text and the list of changes made.
    """
    header_end = text.find("\n")
    header = text if header_end == -1 else text[:header_end]
    expected_commas = _comma_count(header)

    changes: List[str] = []
    out: List[str] = []
    row_start = 0
    row_commas = None
    line_no = 1
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if ch == "\n":
            out.append(ch)
            i += 1
            row_start = i
            row_commas = None
            line_no += 1
            continue

        at_cell_start = i == 0 or text[i - 1] in ",\n"
        if ch == "," or not at_cell_start:
            out.append(ch)
            i += 1
            continue

        if ch == '"':
            if row_commas is None:
                row_end = text.find("\n", row_start)
                row_commas = _comma_count(text[row_start:] if row_end == -1 else text[row_start:row_end])
            exact = expected_commas > 0 and row_commas == expected_commas
            close = find_closing_quote(text, i + 1, exact)

            raw = text[i + 1:close]
            escaped = escape_csv_cell(raw)
            if escaped != raw:
                changes.append(f"Line {line_no}: Escaped quotes in cell")
            elif close >= n:
                changes.append(f"Line {line_no}: Closed unterminated cell")
            out.append('"' + escaped + '"')
            line_no += raw.count("\n")
            i = close + 1
            continue

        cell_end = i
        while cell_end < n and text[cell_end] not in ",\n":
            cell_end += 1
        cell = text[i:cell_end]
        if '"' in cell:
            out.append('"' + cell.replace('"', '""') + '"')
            changes.append(f"Line {line_no}: Wrapped and escaped unquoted cell with quotes")
        else:
            out.append(cell)
        i = cell_end

    return "".join(out), changes
