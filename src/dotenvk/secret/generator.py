"""Random secret generation.

Characters come from ``secrets`` (the operating system CSPRNG), never from
``random``. Word-based passphrases are delegated to an external tool,
``xkcdpass`` by default.
"""

from __future__ import annotations

import secrets
import shutil
import string
import subprocess
from typing import Optional, Sequence

from ..core.config_schema import DEFAULT_SECRET_LENGTH, DEFAULT_XKCD_COMMAND
from ..util.error import ExternalToolFailedError, ExternalToolMissingError, InvalidLengthError
from ..util.log import Log

log = Log.create({"service": "secret"})

LETTERS = string.ascii_letters
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"


def character_pool(use_numeric: bool = False, use_symbol: bool = False) -> str:
    """Characters a secret may be drawn from. Letters are always included."""
    pool = LETTERS
    if use_numeric:
        pool += DIGITS
    if use_symbol:
        pool += SYMBOLS
    return pool


def generate(
    length: int = DEFAULT_SECRET_LENGTH,
    use_numeric: bool = False,
    use_symbol: bool = False,
) -> str:
    """Generate a random string of ``length`` characters.

    Each character is chosen independently and uniformly from
    ``character_pool(use_numeric, use_symbol)``.

    Raises:
        InvalidLengthError: ``length`` is not a positive integer.
    """
    if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
        raise InvalidLengthError(length)

    pool = character_pool(use_numeric, use_symbol)
    value = "".join(secrets.choice(pool) for _ in range(length))
    log.debug("generated secret", {"length": length, "pool": len(pool)})
    return value


def passphrase(command: Optional[Sequence[str]] = None) -> str:
    """Run the external passphrase tool and return its output.

    Raises:
        ExternalToolMissingError: the tool is not on ``PATH`` or cannot be run.
        ExternalToolFailedError: the tool exited non-zero or printed nothing.
    """
    argv = list(command or DEFAULT_XKCD_COMMAND)
    tool = argv[0]
    executable = shutil.which(tool)
    if executable is None:
        raise ExternalToolMissingError(tool)

    try:
        proc = subprocess.run(
            [executable, *argv[1:]],
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        log.error("failed to spawn passphrase tool", {"cmd": argv, "error": str(e)})
        raise ExternalToolMissingError(tool) from e

    if proc.returncode != 0:
        raise ExternalToolFailedError(tool, proc.returncode, proc.stderr or "")

    value = proc.stdout.strip()
    if not value:
        raise ExternalToolFailedError(tool, proc.returncode, "no output")
    log.debug("generated passphrase", {"tool": tool, "length": len(value)})
    return value


class SecretGenerator:
    """Namespace class for secret generation functions."""

    character_pool = staticmethod(character_pool)
    generate = staticmethod(generate)
    passphrase = staticmethod(passphrase)
