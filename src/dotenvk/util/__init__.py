"""Utility modules."""

from .log import Log
from .error import DotenvkError, format_error

__all__ = ["Log", "DotenvkError", "format_error"]
