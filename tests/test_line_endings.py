from quote_repair.line_endings import detect_line_ending, normalize_line_endings, restore_line_endings
from quote_repair.models import LineEndingStyle


def test_detect_line_ending():
    assert detect_line_ending("a\nb") is LineEndingStyle.LF
    assert detect_line_ending("a\r\nb") is LineEndingStyle.CRLF
    assert detect_line_ending("a\rb") is LineEndingStyle.CR
    assert detect_line_ending("single line") is LineEndingStyle.LF

def test_detect_mixed_prefers_crlf_then_cr():
    assert detect_line_ending("a\rb\r\nc\nd") is LineEndingStyle.CRLF
    assert detect_line_ending("a\rb\nc") is LineEndingStyle.CR

def test_normalize_line_endings():
    assert normalize_line_endings("a\r\nb\rc\nd") == "a\nb\nc\nd"
    assert normalize_line_endings("a\r\n\r\nb") == "a\n\nb"

def test_restore_line_endings():
    assert restore_line_endings("a\nb\n", LineEndingStyle.CRLF) == "a\r\nb\r\n"
    assert restore_line_endings("a\nb", LineEndingStyle.CR) == "a\rb"
    assert restore_line_endings("a\nb", LineEndingStyle.LF) == "a\nb"
