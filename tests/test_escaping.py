from quote_repair.escaping import (
    escape_all_backslashes,
    escape_csv_cell,
    escape_double_quotes,
    escape_json_value,
    escape_single_quotes,
    escape_yaml_value,
    find_unescaped_quotes,
    literalize_backslashes,
)
from quote_repair.models import Format


def test_literalize_doubles_every_backslash():
    assert literalize_backslashes(r"C:\Users\name") == r"C:\\Users\\name"
    assert literalize_backslashes(r"line\n already \\ doubled") == r"line\\n already \\\\ doubled"
    assert literalize_backslashes("no backslashes") == "no backslashes"

def test_escape_all_backslashes_by_format():
    content = r"C:\temp\new"
    assert escape_all_backslashes(content, "yaml") == r"C:\\temp\\new"
    assert escape_all_backslashes(content, Format.JSON) == r"C:\\temp\\new"
    assert escape_all_backslashes(content, "csv") == content

def test_escape_double_quotes_skips_escaped():
    assert escape_double_quotes('say "hi"') == r'say \"hi\"'
    assert escape_double_quotes(r'say \"hi\"') == r'say \"hi\"'

def test_escape_single_quotes_keeps_pairs():
    assert escape_single_quotes("it's") == "it''s"
    assert escape_single_quotes("it''s") == "it''s"

def test_escape_yaml_value():
    assert escape_yaml_value(r'a\b "c"', '"') == r'a\\b \"c\"'
    assert escape_yaml_value(r"a\b 'c'", "'") == r"a\b ''c''"

def test_escape_json_value():
    assert escape_json_value(r'C:\dir "x"') == r'C:\\dir \"x\"'

def test_escape_csv_cell():
    assert escape_csv_cell('say "hi"') == 'say ""hi""'
    assert escape_csv_cell('say ""hi""') == 'say ""hi""'
    assert escape_csv_cell('a"""b') == 'a""""b'
    assert escape_csv_cell("plain") == "plain"

def test_escape_csv_cell_only_quotes():
    assert escape_csv_cell('"') == '""'
    assert escape_csv_cell('""') == '""""'
    assert escape_csv_cell('"""') == '""""""'

def test_find_unescaped_quotes():
    assert find_unescaped_quotes(r'a "b" \"c', '"') == [2, 4]
    assert find_unescaped_quotes("it''s 'x'", "'") == [6, 8]
    assert find_unescaped_quotes("ends with quote'''", "'") == [17]
    assert find_unescaped_quotes("none", '"') == []
