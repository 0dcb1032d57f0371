import pytest

from dotenvk.document import (
    BlankLine,
    CommentLine,
    EntryLine,
    UnparsedLine,
    is_valid_key,
    parse_line,
    quote_value,
)
from dotenvk.document.parser import parse_lines, split_lines


def test_split_lines_keeps_each_terminator() -> None:
    assert list(split_lines("A=1\r\nB=2\nC=3")) == [("A=1", "\r\n"), ("B=2", "\n"), ("C=3", "")]
    assert list(split_lines("")) == []
    assert list(split_lines("\n\n")) == [("", "\n"), ("", "\n")]


def test_parse_line_classifies_blank_and_comment() -> None:
    assert parse_line("   \t") == BlankLine(text="   \t")
    assert parse_line("  # Indented comment") == CommentLine(text="  # Indented comment")
    assert parse_line("#KEY=value") == CommentLine(text="#KEY=value")


def test_parse_line_plain_entry() -> None:
    line = parse_line("KEY=value", "\n")

    assert isinstance(line, EntryLine)
    assert line.key == "KEY"
    assert line.value == "value"
    assert line.raw_value == "value"
    assert line.inline_comment is None
    assert line.terminator == "\n"
    assert line.modified is False


def test_parse_line_value_keeps_equals_signs() -> None:
    line = parse_line("KEY_WITH_EQUALS=value=with=equals")

    assert isinstance(line, EntryLine)
    assert line.value == "value=with=equals"


def test_parse_line_unquoted_inline_comment() -> None:
    line = parse_line("PORT=3000   # http port")

    assert isinstance(line, EntryLine)
    assert line.value == "3000"
    assert line.inline_comment == "# http port"


def test_parse_line_hash_without_space_is_part_of_value() -> None:
    line = parse_line("COLOR=#ff0000")

    assert isinstance(line, EntryLine)
    assert line.value == "#ff0000"
    assert line.inline_comment is None


def test_parse_line_empty_value_with_comment() -> None:
    line = parse_line("EMPTY= # nothing yet")

    assert isinstance(line, EntryLine)
    assert line.value == ""
    assert line.inline_comment == "# nothing yet"


def test_parse_line_double_quoted_unescapes() -> None:
    line = parse_line(r'MSG="say \"hi\" \\ bye \n" # note')

    assert isinstance(line, EntryLine)
    assert line.value == 'say "hi" \\ bye \\n'
    assert line.raw_value == r'"say \"hi\" \\ bye \n"'
    assert line.inline_comment == "# note"


def test_parse_line_single_quoted_is_literal() -> None:
    line = parse_line(r"PATTERN='a\"b # not a comment'")

    assert isinstance(line, EntryLine)
    assert line.value == r"a\"b # not a comment"
    assert line.inline_comment is None


def test_parse_line_spaces_around_equals_and_export_prefix() -> None:
    line = parse_line("  export NAME = demo")

    assert isinstance(line, EntryLine)
    assert line.key == "NAME"
    assert line.value == "demo"
    assert line.prefix == "  export "


@pytest.mark.parametrize(
    "text",
    [
        "not an assignment",
        "1KEY=value",
        "KEY-NAME=value",
        'OPEN="never closed',
        "OPEN='never closed",
        'TRAILING="quoted"junk',
    ],
)
def test_parse_line_degrades_to_unparsed(text: str) -> None:
    assert parse_line(text) == UnparsedLine(text=text)


def test_parse_lines_mixed_document() -> None:
    lines = parse_lines("KEY=value\n# Comment\n\nANOTHER_KEY=another_value")

    assert [type(line) for line in lines] == [EntryLine, CommentLine, BlankLine, EntryLine]
    assert lines[-1].terminator == ""


def test_is_valid_key() -> None:
    assert is_valid_key("_PRIVATE")
    assert is_valid_key("key2")
    assert not is_valid_key("2key")
    assert not is_valid_key("")
    assert not is_valid_key("A B")


def test_quote_value() -> None:
    assert quote_value("simple") == "simple"
    assert quote_value("") == ""
    assert quote_value("hello world") == '"hello world"'
    assert quote_value("a#b") == '"a#b"'
    assert quote_value("it's") == '"it\'s"'
    assert quote_value('say "hi"') == r'"say \"hi\""'
    assert quote_value("C:\\dir name") == r'"C:\\dir name"'
    assert quote_value("C:\\dir") == "C:\\dir"
