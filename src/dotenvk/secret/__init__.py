"""Secret value generation."""

from .generator import (
    DIGITS,
    LETTERS,
    SYMBOLS,
    SecretGenerator,
    character_pool,
    generate,
    passphrase,
)

__all__ = [
    "DIGITS",
    "LETTERS",
    "SYMBOLS",
    "SecretGenerator",
    "character_pool",
    "generate",
    "passphrase",
]
