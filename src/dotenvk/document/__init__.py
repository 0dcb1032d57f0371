"""Structure-preserving env file model."""

from .lines import BlankLine, CommentLine, EntryLine, Line, UnparsedLine, render_line
from .parser import is_valid_key, parse_line, parse_value, quote_value
from .document import EnvDocument
from .io import read_document, save_document

__all__ = [
    "BlankLine",
    "CommentLine",
    "EntryLine",
    "Line",
    "UnparsedLine",
    "render_line",
    "is_valid_key",
    "parse_line",
    "parse_value",
    "quote_value",
    "EnvDocument",
    "read_document",
    "save_document",
]
