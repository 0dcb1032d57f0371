"""Commands that modify the env file: set, unset, randomize."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ...document import read_document, save_document
from ...secret import SecretGenerator
from ...util.error import InvalidPairError
from ...util.log import Log

log = Log.create({"service": "cli.edit"})


def parse_pair(pair: str) -> Tuple[str, str]:
    """Split ``KEY=VALUE`` on the first ``=``."""
    key, sep, value = pair.partition("=")
    if not sep:
        raise InvalidPairError(pair)
    return key.strip(), value


def set_command(path: Path, pairs: Sequence[str]) -> None:
    """Set each pair; nothing is written unless every pair is valid."""
    parsed = [parse_pair(pair) for pair in pairs]
    document = read_document(path)
    for key, value in parsed:
        document.set(key, value)
    save_document(path, document)
    log.info("set keys", {"path": str(path), "keys": [key for key, _ in parsed]})


def unset_command(path: Path, keys: Sequence[str]) -> List[str]:
    """Remove ``keys`` and return the ones that were present."""
    document = read_document(path)
    removed = [key for key in keys if document.unset(key)]
    missing = [key for key in keys if key not in removed]
    if missing:
        log.warn("keys not found", {"path": str(path), "keys": missing})
    if removed:
        save_document(path, document)
    return removed


def randomize_command(
    path: Path,
    keys: Sequence[str],
    *,
    length: int,
    numeric: bool = False,
    symbol: bool = False,
    xkcd: bool = False,
    xkcd_command: Optional[Sequence[str]] = None,
) -> None:
    """Give each key a fresh random value.

    All values are generated before the file is touched, so a failing
    passphrase tool leaves the file as it was.
    """
    document = read_document(path)
    values = []
    for key in keys:
        if xkcd:
            value = SecretGenerator.passphrase(xkcd_command)
        else:
            value = SecretGenerator.generate(length, use_numeric=numeric, use_symbol=symbol)
        values.append((key, value))

    for key, value in values:
        document.set(key, value)
    save_document(path, document)
    log.info("randomized keys", {"path": str(path), "keys": list(keys), "xkcd": xkcd})
