from dotenvk.core.config import ConfigError
from dotenvk.util.error import (
    DotenvkError,
    ExternalToolFailedError,
    ExternalToolMissingError,
    InvalidKeyError,
    format_error,
)


def test_format_error_known_errors() -> None:
    assert format_error(InvalidKeyError("1A")) == "Invalid key: '1A'"
    assert format_error(ExternalToolFailedError("xkcdpass", 2, "bad wordfile\n")) == (
        "xkcdpass failed with exit code 2: bad wordfile"
    )
    assert "pip install xkcdpass" in format_error(ExternalToolMissingError("xkcdpass"))


def test_format_error_uses_message_of_other_errors() -> None:
    error = ConfigError("dotenvk.json", "bad value")

    assert format_error(error) == "Config error in dotenvk.json: bad value"


def test_errors_share_base_class() -> None:
    assert isinstance(InvalidKeyError("x"), DotenvkError)
    assert isinstance(ExternalToolMissingError("x"), DotenvkError)
    assert isinstance(ConfigError("x", "y"), DotenvkError)
