"""Read-only commands: keys, get, export."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ...document import read_document
from ...export import render


def keys_command(path: Path) -> List[str]:
    return read_document(path).keys()


def get_command(path: Path, key: str) -> Optional[str]:
    return read_document(path).get(key)


def export_command(path: Path, format: str) -> str:
    """Render the file's ordered mapping as ``bash`` or ``json``."""
    document = read_document(path)
    return render(document.as_dict(), format)
