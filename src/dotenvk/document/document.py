"""Structure-preserving env file document."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .lines import EntryLine, Line, render_line
from .parser import is_valid_key, parse_lines, quote_value, split_bom
from ..util.error import InvalidKeyError, InvalidValueError
from ..util.log import Log

log = Log.create({"service": "document"})

DEFAULT_NEWLINE = "\n"


class EnvDocument:
    """Ordered line records plus an index from key to its entry line.

    When a key appears more than once the first entry wins: ``get`` and
    ``set`` address it, later duplicates stay in the file untouched until
    ``unset`` removes every entry for the key.

    A leading byte order mark is kept in ``bom`` rather than in the first
    line, so that line still parses and the mark survives edits.
    """

    def __init__(self, lines: Optional[Iterable[Line]] = None, bom: str = "") -> None:
        self._lines: List[Line] = list(lines or [])
        self.bom = bom
        self._index: Dict[str, int] = {}
        self._reindex()

    @classmethod
    def parse(cls, text: str) -> "EnvDocument":
        """Parse file text. Never fails."""
        bom, body = split_bom(text)
        document = cls(parse_lines(body), bom=bom)
        if len(document._index) != sum(isinstance(line, EntryLine) for line in document._lines):
            log.warn("duplicate keys in document, first entry wins")
        return document

    @property
    def lines(self) -> Tuple[Line, ...]:
        return tuple(self._lines)

    @property
    def newline(self) -> str:
        """Terminator used for appended lines: the first one in the file."""
        for line in self._lines:
            if line.terminator:
                return line.terminator
        return DEFAULT_NEWLINE

    def _reindex(self) -> None:
        self._index = {}
        for position, line in enumerate(self._lines):
            if isinstance(line, EntryLine) and line.key not in self._index:
                self._index[line.key] = position

    def _entry(self, key: str) -> Optional[EntryLine]:
        position = self._index.get(key)
        if position is None:
            return None
        line = self._lines[position]
        return line if isinstance(line, EntryLine) else None

    # -- Reads --

    def get(self, key: str) -> Optional[str]:
        entry = self._entry(key)
        return entry.value if entry is not None else None

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __len__(self) -> int:
        return len(self._index)

    def keys(self) -> List[str]:
        """Keys in document order, each once."""
        return list(self._index)

    def items(self) -> Iterator[Tuple[str, str]]:
        for key in self._index:
            entry = self._entry(key)
            if entry is not None:
                yield key, entry.value

    def as_dict(self) -> Dict[str, str]:
        return dict(self.items())

    # -- Mutations --

    def set(self, key: str, value: str) -> None:
        """Update ``key`` in place, or append it when absent."""
        if not is_valid_key(key):
            raise InvalidKeyError(key)
        if "\n" in value or "\r" in value:
            raise InvalidValueError(key)

        raw_value = quote_value(value)
        position = self._index.get(key)
        if position is not None:
            entry = self._lines[position]
            self._lines[position] = replace(entry, value=value, raw_value=raw_value, raw=None)
            log.debug("updated key", {"key": key, "line": position + 1})
            return

        newline = self.newline
        if self._lines and not self._lines[-1].terminator:
            self._lines[-1] = replace(self._lines[-1], terminator=newline)
        self._lines.append(EntryLine(key=key, value=value, raw_value=raw_value, terminator=newline))
        self._index[key] = len(self._lines) - 1
        log.debug("appended key", {"key": key, "line": len(self._lines)})

    def unset(self, key: str) -> bool:
        """Remove every entry line for ``key``. Returns whether any was removed."""
        if key not in self._index:
            return False
        before = len(self._lines)
        self._lines = [
            line for line in self._lines
            if not (isinstance(line, EntryLine) and line.key == key)
        ]
        self._reindex()
        log.debug("removed key", {"key": key, "lines": before - len(self._lines)})
        return True

    # -- Output --

    def serialize(self) -> str:
        return self.bom + "".join(render_line(line) + line.terminator for line in self._lines)
