"""dotenvk - edit .env files without losing their structure.

Parses env files into typed line records, updates only the lines a command
targets, and generates secure random values for secrets.
"""

__version__ = "0.1.0"

# Lazy imports keep `dotenvk --version` fast
def __getattr__(name: str):
    """Lazy import module components."""
    if name in ("EnvDocument", "read_document", "save_document"):
        from . import document
        return getattr(document, name)
    if name == "SecretGenerator":
        from . import secret
        return secret.SecretGenerator
    if name in ("DotenvkError",):
        from .util import error
        return getattr(error, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "EnvDocument",
    "read_document",
    "save_document",
    "SecretGenerator",
    "DotenvkError",
]
