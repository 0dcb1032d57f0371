"""Line records for a parsed env file.

A document is a flat list of these records. Each one knows the exact
terminator it was read with, so unmodified lines serialize byte for byte.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class BlankLine:
    """Whitespace-only line."""

    text: str
    terminator: str = ""


@dataclass(frozen=True)
class CommentLine:
    """Line whose first non-whitespace character is ``#``."""

    text: str
    terminator: str = ""


@dataclass(frozen=True)
class EntryLine:
    """``KEY=VALUE`` assignment.

    ``value`` is the unquoted, unescaped value. ``raw_value`` is its textual
    form in the file (quotes included). ``raw`` holds the original line and
    is ``None`` once the entry has been changed or when it was newly added,
    in which case the line is rendered from its parts.
    """

    key: str
    value: str
    raw_value: str
    inline_comment: Optional[str] = None
    prefix: str = ""
    raw: Optional[str] = None
    terminator: str = ""

    @property
    def modified(self) -> bool:
        return self.raw is None


@dataclass(frozen=True)
class UnparsedLine:
    """Anything that is not blank, a comment or a valid entry."""

    text: str
    terminator: str = ""


Line = Union[BlankLine, CommentLine, EntryLine, UnparsedLine]


def render_line(line: Line) -> str:
    """Render a line without its terminator."""
    if isinstance(line, EntryLine):
        if line.raw is not None:
            return line.raw
        text = f"{line.prefix}{line.key}={line.raw_value}"
        if line.inline_comment:
            text += f" {line.inline_comment}"
        return text
    return line.text
