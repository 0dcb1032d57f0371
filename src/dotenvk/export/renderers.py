"""Render an ordered key/value mapping as shell exports or JSON."""

from __future__ import annotations

import json
from typing import Callable, Dict, Mapping

from ..util.error import UnsupportedFormatError

# Characters that keep a special meaning inside double quotes.
_BASH_ESCAPES = str.maketrans({
    "\\": "\\\\",
    '"': '\\"',
    "$": "\\$",
    "`": "\\`",
})


def shell_escape(value: str) -> str:
    """Double-quote ``value`` so bash reads it back literally."""
    return '"' + value.translate(_BASH_ESCAPES) + '"'


def render_bash(values: Mapping[str, str]) -> str:
    return "".join(f"export {key}={shell_escape(value)}\n" for key, value in values.items())


def render_json(values: Mapping[str, str]) -> str:
    return json.dumps(dict(values), indent=2, ensure_ascii=False) + "\n"


RENDERERS: Dict[str, Callable[[Mapping[str, str]], str]] = {
    "bash": render_bash,
    "json": render_json,
}


def render(values: Mapping[str, str], format: str) -> str:
    """Render ``values`` in ``format`` (case-insensitive)."""
    renderer = RENDERERS.get(format.strip().lower())
    if renderer is None:
        raise UnsupportedFormatError(format)
    return renderer(values)
