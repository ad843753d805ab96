"""
Quote preprocessing entry points.

Responsibilities:
- route by declared format (yaml / json / csv)
- normalize line endings for scanning and restore the detected style
- never fail the caller: any internal fault returns the input unchanged

The structural parser for the format runs next, on the returned text.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Tuple, Union

from .csv_quotes import preprocess_csv
from .json_quotes import preprocess_json
from .line_endings import detect_line_ending, normalize_line_endings, restore_line_endings
from .models import Format, PreprocessResult
from .yaml_quotes import preprocess_yaml

logger = logging.getLogger("quote_repair.preprocess")

Engine = Callable[[str], Tuple[str, List[str]]]

ENGINES: Dict[Format, Engine] = {
    Format.YAML: preprocess_yaml,
    Format.JSON: preprocess_json,
    Format.CSV: preprocess_csv,
}


def _result(content: str, output: str, changes: List[str]) -> PreprocessResult:
    if output == content:
        return PreprocessResult(output=content)
    return PreprocessResult(output=output, modified=True, changes=changes)


def _preprocess(content: str, fmt: Union[Format, str]) -> PreprocessResult:
    engine = ENGINES[Format(fmt)]
    if not content.strip():
        return PreprocessResult(output=content)

    style = detect_line_ending(content)
    normalized = normalize_line_endings(content)
    output, changes = engine(normalized)
    output = restore_line_endings(output, style)

    if restore_line_endings(normalized, style) != content:
        changes.insert(0, f"Unified mixed line endings to {style.name}")

    return _result(content, output, changes)


def preprocess_with_details(content: str, fmt: Union[Format, str]) -> PreprocessResult:
    """
    Repair unescaped quotes and report what changed.

    Degrades to `PreprocessResult(output=content)` (unmodified, no changes)
    on any internal failure.
    """
    try:
        result = _preprocess(content, fmt)
    except Exception:
        logger.warning("Quote preprocessing failed for %r input; returning it unchanged", fmt, exc_info=True)
        return PreprocessResult(output=content)

    if result.modified:
        logger.debug("Input required quote preprocessing for %s format (%d changes)", Format(fmt).value, len(result.changes))
    return result


def preprocess(content: str, fmt: Union[Format, str]) -> str:
    """
    Repair unescaped quotes in `content` so a strict parser for `fmt` can read it.

    Always returns a string: valid input comes back unchanged, and so does
    anything the repair cannot handle.
    """
    return preprocess_with_details(content, fmt).output
