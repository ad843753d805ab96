"""
Line-ending detection and the normalize/restore round trip.

Scanners only ever see LF. The detected style is re-applied to the whole
output at the end, which also covers breaks buffered inside multi-line values.
"""

from __future__ import annotations

from .models import LineEndingStyle


def detect_line_ending(content: str) -> LineEndingStyle:
    """
    Pick the dominant line-ending style.

    CRLF is checked first so it is never misread as a lone CR; mixed input
    resolves CRLF > CR > LF.
    """
    if "\r\n" in content:
        return LineEndingStyle.CRLF
    if "\r" in content:
        return LineEndingStyle.CR
    return LineEndingStyle.LF


def normalize_line_endings(content: str) -> str:
    # CRLF must go first, otherwise it would become two breaks.
    return content.replace("\r\n", "\n").replace("\r", "\n")


def restore_line_endings(content: str, style: LineEndingStyle) -> str:
    if style is LineEndingStyle.LF:
        return content
    return content.replace("\n", style.value)
