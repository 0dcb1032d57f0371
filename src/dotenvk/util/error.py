"""Error types and formatting utilities.

Every failure the application reports to a user derives from
``DotenvkError``. ``format_error`` turns them into one-line messages
for the CLI.
"""

from typing import Any


class DotenvkError(Exception):
    """Base class for all reportable dotenvk errors."""


class InvalidKeyError(DotenvkError):
    """Raised when a key does not match ``[A-Za-z_][A-Za-z0-9_]*``."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Invalid key: {key!r}")


class InvalidValueError(DotenvkError):
    """Raised when a value cannot be stored on a single line."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Invalid value for {key}: values cannot span multiple lines")


class InvalidPairError(DotenvkError):
    """Raised when a ``KEY=VALUE`` argument has no ``=``."""

    def __init__(self, pair: str):
        self.pair = pair
        super().__init__(f"Invalid key=value pair: {pair}")


class InvalidLengthError(DotenvkError):
    """Raised when a secret length is not a positive integer."""

    def __init__(self, length: Any):
        self.length = length
        super().__init__(f"Invalid length: {length!r} (must be a positive integer)")


class ExternalToolMissingError(DotenvkError):
    """Raised when the passphrase backend is not installed."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"External tool not found: {tool}")


class ExternalToolFailedError(DotenvkError):
    """Raised when the passphrase backend exits non-zero or prints nothing."""

    def __init__(self, tool: str, returncode: int, stderr: str = ""):
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(f"{tool} failed with exit code {returncode}{detail}")


class EnvFileReadError(DotenvkError):
    """Raised when an existing env file cannot be read or decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read file: {path} ({reason})")


class EnvFileWriteError(DotenvkError):
    """Raised when the env file cannot be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write file: {path} ({reason})")


class UnsupportedFormatError(DotenvkError):
    """Raised for an unknown export format."""

    def __init__(self, format: str):
        self.format = format
        super().__init__(f"Unsupported format: {format}. Use 'bash' or 'json'")


def format_error(error: DotenvkError) -> str:
    """User-facing message for an application error."""
    if isinstance(error, ExternalToolMissingError):
        return (
            f"{error.tool} is not installed or not on PATH. "
            f"Install it (e.g. `pip install {error.tool}`) or drop --xkcd."
        )
    return str(error)
