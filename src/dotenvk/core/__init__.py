"""Core infrastructure modules."""

from .global_paths import GlobalPath

__all__ = ["GlobalPath"]

# Config is exported separately to avoid circular imports with util.log
# To use: from dotenvk.core.config import ConfigManager
