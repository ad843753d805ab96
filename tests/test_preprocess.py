import logging

import pytest

from quote_repair.models import Format
from quote_repair.preprocess import ENGINES, preprocess, preprocess_with_details

FORMATS = ["yaml", "json", "csv"]


@pytest.mark.parametrize("fmt", FORMATS)
@pytest.mark.parametrize("content", ["", "   \n\t ", "\x00\x01\x02", '"' * 100, "'" * 7, "{[\"'"])
def test_always_returns_a_string(fmt, content):
    result = preprocess_with_details(content, fmt)
    assert isinstance(result.output, str)
    assert result.modified == (result.output != content)
    if not result.modified:
        assert result.changes == []

@pytest.mark.parametrize("fmt", FORMATS)
def test_empty_and_blank_input_untouched(fmt):
    for content in ("", "  \n  "):
        result = preprocess_with_details(content, fmt)
        assert result.output == content
        assert result.modified is False
        assert result.changes == []

def test_unknown_format_returns_input():
    assert preprocess('a: "b "c""', "xml") == 'a: "b "c""'

def test_accepts_format_enum():
    assert preprocess('{"a": "b "c""}', Format.JSON) == r'{"a": "b \"c\""}'

def test_modified_result_lists_changes():
    result = preprocess_with_details('summary: "a "b" c"', "yaml")
    assert result.modified is True
    assert result.changes == ['Line 1: Escaped quotes in "summary:"']


def test_crlf_restored():
    out = preprocess('a: "x "y""\r\nb: c\r\n', "yaml")
    assert out == 'a: "x \\"y\\""\r\nb: c\r\n'

def test_cr_restored():
    out = preprocess('a: "x "y""\rb: c', "yaml")
    assert out == 'a: "x \\"y\\""\rb: c'

def test_mixed_line_endings_unified():
    content = 'summary: "a"\r\nnext: b\nlast: c'
    result = preprocess_with_details(content, "yaml")
    assert result.output == 'summary: "a"\r\nnext: b\r\nlast: c'
    assert result.modified is True
    assert result.changes == ["Unified mixed line endings to CRLF"]


def test_second_pass_is_a_no_op_for_single_quoted_yaml_and_csv():
    for content, fmt in (
        ("description: 'it's broken'", "yaml"),
        ('ENG,"Say "hello" world"', "csv"),
        ('Name,Note\nENG,"say "a","b" now"', "csv"),
    ):
        once = preprocess(content, fmt)
        assert once != content
        assert preprocess(once, fmt) == once


def test_internal_fault_returns_input(monkeypatch, caplog):
    def broken(text):
        raise RuntimeError("boom")

    monkeypatch.setitem(ENGINES, Format.YAML, broken)
    content = 'summary: "a "b" c"'
    with caplog.at_level(logging.WARNING, logger="quote_repair.preprocess"):
        result = preprocess_with_details(content, "yaml")

    assert result.output == content
    assert result.modified is False
    assert result.changes == []
    assert "returning it unchanged" in caplog.text

def test_modification_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="quote_repair.preprocess"):
        preprocess('summary: "a "b" c"', "yaml")
    assert "yaml format (1 changes)" in caplog.text
