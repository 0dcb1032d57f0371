"""Configuration management.

Loads and merges configuration from multiple sources with proper precedence.
"""

import json
import os
from contextvars import ContextVar, Token
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .config_loader import deep_merge, load_json_file
from .config_schema import (
    Config,
    ExportConfig,
    LoggingConfig,
    RandomizeConfig,
)
from .global_paths import GlobalPath
from ..util.error import DotenvkError
from ..util.log import Log

log = Log.create({"service": "config"})

__all__ = [
    "Config",
    "ConfigError",
    "ConfigManager",
    "ExportConfig",
    "LoggingConfig",
    "RandomizeConfig",
]

CONFIG_FILENAMES = ("dotenvk.json", "dotenvk.jsonc")
CONFIG_CONTENT_ENV = "DOTENVK_CONFIG_CONTENT"


class ConfigError(DotenvkError):
    """Configuration error."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Config error in {path}: {message}")


_config_var: ContextVar["ConfigManager"] = ContextVar("_config_var")


class ConfigManager:
    """Configuration management.

    Instance-based with ContextVar for scoping. Class methods delegate
    to the current instance.

    Loads configuration from multiple sources, lowest priority first:
    1. Global config (``<user config dir>/dotenvk.json``)
    2. Project configs (``dotenvk.json`` from the filesystem root down to
       the working directory)
    3. Inline JSON from ``DOTENVK_CONFIG_CONTENT``
    """

    def __init__(self) -> None:
        self._cache: Optional[Config] = None
        self._sources: List[str] = []

    # -- ContextVar plumbing --

    @classmethod
    def current(cls) -> "ConfigManager":
        try:
            return _config_var.get()
        except LookupError:
            instance = cls()
            _config_var.set(instance)
            return instance

    @classmethod
    def provide(cls, instance: "ConfigManager") -> Token["ConfigManager"]:
        return _config_var.set(instance)

    @classmethod
    def restore(cls, token: Token["ConfigManager"]) -> None:
        _config_var.reset(token)

    # -- Public API (class methods delegate to current instance) --

    @classmethod
    def reset(cls) -> None:
        """Reset cached configuration."""
        inst = cls.current()
        inst._cache = None
        inst._sources = []

    @classmethod
    def load(cls, directory: str = ".") -> Config:
        return cls.current()._load(directory)

    @classmethod
    def get(cls) -> Config:
        inst = cls.current()
        if inst._cache is None:
            return inst._load()
        return inst._cache

    @classmethod
    def sources(cls) -> List[str]:
        """Config files (and env variables) that contributed to the cache."""
        return cls.current()._sources.copy()

    # -- Instance methods --

    def _load(self, directory: str = ".") -> Config:
        if self._cache is not None:
            return self._cache

        result: Dict[str, Any] = {}
        sources: List[str] = []

        def merge(filepath: str, label: str) -> None:
            nonlocal result
            data = load_json_file(filepath)
            if data:
                result = deep_merge(result, data)
                sources.append(filepath)
                log.info(f"loaded {label} config", {"path": filepath})

        # 1. Global config
        global_config_dir = GlobalPath.config()
        for filename in ("config.json", *CONFIG_FILENAMES):
            merge(os.path.join(global_config_dir, filename), "global")

        # 2. Project config (search up from directory)
        current = Path(directory).resolve()
        project_configs: List[str] = []
        while True:
            for filename in CONFIG_FILENAMES:
                filepath = current / filename
                if filepath.is_file():
                    project_configs.append(str(filepath))
            if current == current.parent:
                break
            current = current.parent

        # Apply in reverse order (root first, then more specific)
        for filepath in reversed(project_configs):
            merge(filepath, "project")

        # 3. Environment variable config
        env_config = os.environ.get(CONFIG_CONTENT_ENV)
        if env_config:
            try:
                data = json.loads(env_config)
            except json.JSONDecodeError as e:
                raise ConfigError(CONFIG_CONTENT_ENV, f"invalid JSON: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(CONFIG_CONTENT_ENV, "expected a JSON object")
            result = deep_merge(result, data)
            sources.append(CONFIG_CONTENT_ENV)
            log.info(f"loaded config from {CONFIG_CONTENT_ENV}")

        try:
            config = Config.model_validate(result)
        except ValidationError as e:
            where = sources[-1] if sources else "defaults"
            raise ConfigError(where, str(e)) from e

        self._cache = config
        self._sources = sources
        return config
