"""
YAML quote repair.

Each line is scanned for the opening of a quoted value (`key: "`, `key: '`,
`- "`, `- '`, `- key: "`). A value that closes on its own line is escaped in
place; one that does not is buffered line by line until its true closing
quote is found, then escaped as a whole.

Closing-quote heuristics:
- Same line: the last unescaped quote closes the value when only whitespace
  or a comment follows it AND (end of input, OR an odd quote count, OR the
  next line reads as a new key).
- Continuation lines: parity alone decides. Odd means the last quote is the
  unpaired delimiter; even means every quote is an internal pair.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

from .escaping import escape_yaml_value, find_unescaped_quotes
from .rules import MAX_KEY_LENGTH, MAX_KEY_WORDS

_QUOTED_VALUE_OPEN = re.compile(r"""^(\s*-\s+\w[\w\s-]*:\s*|\s*\w[\w\s-]*:\s*|\s*-\s*)(["'])""")
_BLOCK_SCALAR_HEADER = re.compile(r"^(\s*(?:-\s+)?)\w[\w\s-]*:\s*[|>][-+0-9]*\s*(?:#.*)?$")

_MARKDOWN_HEADING = re.compile(r"^\s*#+\s")
_ARRAY_ITEM_QUOTED = re.compile(r"""^\s+-\s+["']""")
_ARRAY_ITEM_KEY = re.compile(r"^\s+-\s+\w[\w\s-]*:")
_CONTENT_MARKER = re.compile(r"^\s*[*`>|]")
_LIST_ITEM_PUNCT = re.compile(r"""^\s*-\s+[^"'\w]""")
_LIST_ITEM_WORD = re.compile(r"^\s*-\s+\w")
_LIST_ITEM_KEY = re.compile(r"^\s*-\s+\w[\w\s-]*:")
_KEY = re.compile(r"^\s*(\w[\w\s-]*):\s*")


class CloseInfo(NamedTuple):
    closed: bool
    content: str
    remainder: str = ""


@dataclass
class YamlScanState:
    in_multiline_value: bool = False
    quote_type: Optional[str] = None
    start_line: int = -1
    content_buffer: List[str] = field(default_factory=list)
    key_prefix: str = ""
    # Column of the key owning a block scalar while its body is being copied.
    block_indent: Optional[int] = None


def is_key_line(line: Optional[str]) -> bool:
    """
    Does this line independently read as a new YAML key?

    Markdown headings, bullets, quotes and code fences are content, and so are
    "keys" that look like prose (too long, too many words) or timestamps
    (leading digit).
    """
    if line is None or not line.strip():
        return False
    if line.strip() == "---":
        return True
    if _MARKDOWN_HEADING.match(line):
        return False
    if _ARRAY_ITEM_QUOTED.match(line) or _ARRAY_ITEM_KEY.match(line):
        return True
    if _CONTENT_MARKER.match(line) or _LIST_ITEM_PUNCT.match(line):
        return False
    if _LIST_ITEM_WORD.match(line) and not _LIST_ITEM_KEY.match(line):
        return False

    match = _KEY.match(line)
    if match is None:
        return False
    key = match.group(1)
    if len(key) > MAX_KEY_LENGTH:
        return False
    if len(key.split()) > MAX_KEY_WORDS:
        return False
    if key[0].isdigit():
        return False
    return True


def _nothing_after(text: str) -> bool:
    trimmed = text.strip()
    return trimmed == "" or trimmed.startswith("#")


def find_closing_quote(content: str, quote: str, next_line: Optional[str]) -> CloseInfo:
    """Locate the closing quote of a value that opened on this line."""
    positions = find_unescaped_quotes(content, quote)
    if not positions:
        return CloseInfo(False, content)

    last = positions[-1]
    after = content[last + 1:]
    if not _nothing_after(after):
        return CloseInfo(False, content)

    is_eof = next_line is None
    is_odd = len(positions) % 2 == 1
    if is_eof or is_odd or is_key_line(next_line):
        return CloseInfo(True, content[:last], after)
    return CloseInfo(False, content)


def find_closing_quote_multiline(line: str, quote: str) -> CloseInfo:
    """Locate the closing quote on a continuation line of a buffered value."""
    positions = find_unescaped_quotes(line, quote)
    if not positions:
        return CloseInfo(False, line)

    last = positions[-1]
    after = line[last + 1:]
    if _nothing_after(after) and len(positions) % 2 == 1:
        return CloseInfo(True, line[:last], after)
    return CloseInfo(False, line)


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def _scan_line(
    state: YamlScanState,
    line: str,
    next_line: Optional[str],
    index: int,
    output: List[str],
    changes: List[str],
) -> YamlScanState:
    if state.block_indent is not None:
        if not line.strip() or _indent(line) > state.block_indent:
            output.append(line)
            return state
        state = YamlScanState()

    header = _BLOCK_SCALAR_HEADER.match(line)
    if header:
        output.append(line)
        return YamlScanState(block_indent=len(header.group(1)))

    match = _QUOTED_VALUE_OPEN.match(line)
    if match is None:
        output.append(line)
        return state

    key_prefix, quote = match.group(1), match.group(2)
    after_quote = line[len(key_prefix) + 1:]
    close = find_closing_quote(after_quote, quote, next_line)

    if close.closed:
        fixed = key_prefix + quote + escape_yaml_value(close.content, quote) + quote + close.remainder
        if fixed != line:
            changes.append(f'Line {index + 1}: Escaped quotes in "{key_prefix.strip()}"')
        output.append(fixed)
        return state

    return YamlScanState(
        in_multiline_value=True,
        quote_type=quote,
        start_line=index,
        content_buffer=[after_quote],
        key_prefix=key_prefix,
    )


def _continue_value(
    state: YamlScanState,
    line: str,
    index: int,
    output: List[str],
    changes: List[str],
) -> YamlScanState:
    quote = state.quote_type
    close = find_closing_quote_multiline(line, quote)
    if not close.closed:
        state.content_buffer.append(line)
        return state

    state.content_buffer.append(close.content)
    full = "\n".join(state.content_buffer)
    escaped = escape_yaml_value(full, quote)
    if escaped != full:
        changes.append(f"Lines {state.start_line + 1}-{index + 1}: Escaped quotes in multiline value")
    output.append(state.key_prefix + quote + escaped + quote + close.remainder)
    return YamlScanState()


def preprocess_yaml(text: str) -> Tuple[str, List[str]]:
    """
    Repair quoted values in LF-normalized YAML text.

    Returns the repaired text and the list of changes made.
    """
    lines = text.split("\n")
    output: List[str] = []
    changes: List[str] = []
    state = YamlScanState()

    for index, line in enumerate(lines):
        next_line = lines[index + 1] if index + 1 < len(lines) else None
        if state.in_multiline_value:
            state = _continue_value(state, line, index, output, changes)
        else:
            state = _scan_line(state, line, next_line, index, output, changes)

    # Input ended inside a value: close it with what was buffered.
    if state.in_multiline_value:
        full = "\n".join(state.content_buffer)
        quote = state.quote_type
        output.append(state.key_prefix + quote + escape_yaml_value(full, quote) + quote)
        changes.append(f"Lines {state.start_line + 1}-end: Closed unclosed quote")

    return "\n".join(output), changes
