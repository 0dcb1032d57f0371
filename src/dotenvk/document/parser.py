"""Line grammar for env files.

Parsing is total: a line that is not blank, a comment or a well-formed
``KEY=VALUE`` entry becomes an ``UnparsedLine`` and is written back as-is.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Tuple

from .lines import BlankLine, CommentLine, EntryLine, Line, UnparsedLine

KEY_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*"

_KEY_RE = re.compile(rf"^{KEY_PATTERN}$")
_ENTRY_RE = re.compile(
    rf"""
    ^(?P<prefix>[ \t]*(?:export[ \t]+)?)   # indentation, optional export keyword
    (?P<key>{KEY_PATTERN})
    [ \t]*=(?P<gap>[ \t]*)
    (?P<rest>.*)$
    """,
    re.VERBOSE | re.DOTALL,
)
_TERMINATED_RE = re.compile(r"([^\r\n]*)(\r\n|\r|\n)")
_NEEDS_QUOTES_RE = re.compile(r"[\s#\"']")

_ParsedValue = Tuple[str, str, Optional[str]]

BOM = "\ufeff"


def is_valid_key(key: str) -> bool:
    return _KEY_RE.match(key) is not None


def split_bom(text: str) -> Tuple[str, str]:
    """Split a leading UTF-8 byte order mark off ``text``: ``(bom, rest)``."""
    if text.startswith(BOM):
        return BOM, text[len(BOM):]
    return "", text


def split_lines(text: str) -> Iterator[Tuple[str, str]]:
    """Yield ``(content, terminator)`` pairs covering ``text`` exactly.

    The terminator is ``""`` only for a final line without one.
    """
    end = 0
    for match in _TERMINATED_RE.finditer(text):
        end = match.end()
        yield match.group(1), match.group(2)
    if end < len(text):
        yield text[end:], ""


def _closing_double_quote(rest: str) -> Optional[int]:
    i = 1
    while i < len(rest):
        ch = rest[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i
        i += 1
    return None


def _unescape_double(inner: str) -> str:
    out: List[str] = []
    i = 0
    while i < len(inner):
        ch = inner[i]
        if ch == "\\" and i + 1 < len(inner) and inner[i + 1] in {'"', "\\"}:
            out.append(inner[i + 1])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _parse_quoted(rest: str) -> Optional[_ParsedValue]:
    quote = rest[0]
    if quote == '"':
        end = _closing_double_quote(rest)
    else:
        found = rest.find("'", 1)
        end = found if found != -1 else None
    if end is None:
        return None

    inner = rest[1:end]
    value = _unescape_double(inner) if quote == '"' else inner
    raw_value = rest[: end + 1]

    tail = rest[end + 1:].lstrip(" \t")
    if not tail:
        return value, raw_value, None
    if tail.startswith("#"):
        return value, raw_value, tail
    # Trailing text after the closing quote is not part of the grammar.
    return None


def _parse_unquoted(rest: str, spaced: bool) -> _ParsedValue:
    for i, ch in enumerate(rest):
        if ch != "#":
            continue
        preceded_by_space = rest[i - 1] in " \t" if i else spaced
        if preceded_by_space:
            value = rest[:i].rstrip(" \t")
            return value, value, rest[i:]
    value = rest.rstrip(" \t")
    return value, value, None


def parse_value(rest: str, spaced: bool = False) -> Optional[_ParsedValue]:
    """Parse the text after ``=`` into ``(value, raw_value, inline_comment)``.

    ``spaced`` says whether whitespace separated ``=`` from ``rest``; it
    decides whether a leading ``#`` starts a comment. Returns None when a
    quoted value is unterminated or followed by stray text.
    """
    if rest[:1] in {'"', "'"}:
        return _parse_quoted(rest)
    return _parse_unquoted(rest, spaced)


def parse_line(text: str, terminator: str = "") -> Line:
    """Classify one physical line."""
    stripped = text.lstrip()
    if not stripped:
        return BlankLine(text=text, terminator=terminator)
    if stripped.startswith("#"):
        return CommentLine(text=text, terminator=terminator)

    match = _ENTRY_RE.match(text)
    if match is None:
        return UnparsedLine(text=text, terminator=terminator)

    parsed = parse_value(match.group("rest"), spaced=bool(match.group("gap")))
    if parsed is None:
        return UnparsedLine(text=text, terminator=terminator)

    value, raw_value, inline_comment = parsed
    return EntryLine(
        key=match.group("key"),
        value=value,
        raw_value=raw_value,
        inline_comment=inline_comment,
        prefix=match.group("prefix"),
        raw=text,
        terminator=terminator,
    )


def parse_lines(text: str) -> List[Line]:
    return [parse_line(content, terminator) for content, terminator in split_lines(text)]


def quote_value(value: str) -> str:
    """Textual form of ``value``: double-quoted only when it has to be."""
    if _NEEDS_QUOTES_RE.search(value) is None:
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
