"""Per-user application directories for dotenvk.

Paths follow the platform conventions exposed by ``platformdirs``.
Directories are created on demand rather than at import time.
"""

from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

APP_NAME = "dotenvk"


class GlobalPath:
    """Global path management for dotenvk directories."""

    @classmethod
    def data(cls) -> str:
        """Application data directory."""
        return user_data_dir(APP_NAME)

    @classmethod
    def log(cls) -> str:
        """Log file directory."""
        return str(Path(cls.data()) / "log")

    @classmethod
    def config(cls) -> str:
        """Configuration directory."""
        return user_config_dir(APP_NAME)

    @classmethod
    def ensure(cls, path: str) -> Path:
        """Create ``path`` (and parents) if missing and return it."""
        target = Path(path)
        target.mkdir(parents=True, exist_ok=True)
        return target
