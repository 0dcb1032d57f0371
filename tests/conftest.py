from collections.abc import Iterator
from pathlib import Path

import pytest

from dotenvk.core.config import ConfigManager
from dotenvk.core.global_paths import GlobalPath
from dotenvk.util.log import Log, LogFormat, LogLevel


@pytest.fixture(autouse=True)
def isolated_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    """Point config and data dirs at a temp dir and run from a clean cwd."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    work.mkdir(parents=True)
    monkeypatch.setattr(GlobalPath, "config", classmethod(lambda cls: str(home / "config")))
    monkeypatch.setattr(GlobalPath, "data", classmethod(lambda cls: str(home / "data")))
    monkeypatch.delenv("DOTENVK_CONFIG_CONTENT", raising=False)
    monkeypatch.chdir(work)
    yield work


@pytest.fixture(autouse=True)
def config_context() -> Iterator[None]:
    token = ConfigManager.provide(ConfigManager())
    try:
        yield
    finally:
        ConfigManager.restore(token)


@pytest.fixture(autouse=True)
def _log_teardown() -> Iterator[None]:
    yield
    Log.configure(level=LogLevel.WARN, format=LogFormat.KV, console=False, file=False)
