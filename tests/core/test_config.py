import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from dotenvk.core.config import Config, ConfigError, ConfigManager
from dotenvk.core.config_loader import deep_merge, load_json_file, substitute_env_vars
from dotenvk.core.global_paths import GlobalPath


def test_config_defaults_are_typed_models() -> None:
    config = Config.model_validate({})

    assert config.file == ".env"
    assert config.logging is None
    assert config.randomize.length == 32
    assert config.randomize.numeric is False
    assert config.randomize.symbol is False
    assert config.randomize.xkcd is False
    assert config.randomize.xkcd_command == ["xkcdpass", "-d-"]
    assert config.export.format == "bash"


def test_config_forbids_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        Config.model_validate({"unknown": 1})

    with pytest.raises(ValidationError):
        Config.model_validate({"randomize": {"unknown": True}})


def test_config_rejects_non_positive_length() -> None:
    with pytest.raises(ValidationError):
        Config.model_validate({"randomize": {"length": 0}})


def test_config_accepts_aliases() -> None:
    config = Config.model_validate(
        {"randomize": {"xkcdCommand": ["xkcdpass", "-n", "5"]}, "logging": {"devFile": True}}
    )

    assert config.randomize.xkcd_command == ["xkcdpass", "-n", "5"]
    assert config.logging is not None
    assert config.logging.dev_file is True


def test_deep_merge_nested() -> None:
    merged = deep_merge(
        {"randomize": {"length": 16, "numeric": True}, "file": "a.env"},
        {"randomize": {"length": 64}},
    )

    assert merged == {"randomize": {"length": 64, "numeric": True}, "file": "a.env"}


def test_substitute_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV_FILE", "prod.env")

    assert substitute_env_vars('{"file": "{env:APP_ENV_FILE}"}') == '{"file": "prod.env"}'
    assert substitute_env_vars("{env:DOTENVK_UNSET_VAR}") == ""


def test_load_json_file_supports_comments(tmp_path: Path) -> None:
    target = tmp_path / "dotenvk.jsonc"
    target.write_text('{\n  // default file\n  "file": "dev.env"\n}\n', encoding="utf-8")

    assert load_json_file(str(target)) == {"file": "dev.env"}


def test_load_json_file_ignores_broken_files(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{@@@", encoding="utf-8")
    truncated = tmp_path / "truncated.json"
    truncated.write_text('{"file": ".env",', encoding="utf-8")
    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]", encoding="utf-8")

    assert load_json_file(str(broken)) == {}
    assert load_json_file(str(truncated)) == {}
    assert load_json_file(str(listing)) == {}
    assert load_json_file(str(tmp_path / "missing.json")) == {}


def test_config_manager_precedence(
    monkeypatch: pytest.MonkeyPatch,
    isolated_paths: Path,
) -> None:
    global_dir = Path(GlobalPath.config())
    global_dir.mkdir(parents=True)
    (global_dir / "dotenvk.json").write_text(
        json.dumps({"file": "global.env", "randomize": {"length": 10, "symbol": True}}),
        encoding="utf-8",
    )
    project = isolated_paths / "project"
    project.mkdir()
    (isolated_paths / "dotenvk.json").write_text(
        json.dumps({"randomize": {"length": 20}}), encoding="utf-8"
    )
    (project / "dotenvk.jsonc").write_text('{"file": "project.env"}', encoding="utf-8")
    monkeypatch.setenv("DOTENVK_CONFIG_CONTENT", json.dumps({"export": {"format": "json"}}))

    config = ConfigManager.load(str(project))

    assert config.file == "project.env"
    assert config.randomize.length == 20
    assert config.randomize.symbol is True
    assert config.export.format == "json"
    assert ConfigManager.sources()[0] == str(global_dir / "dotenvk.json")
    assert ConfigManager.sources()[-1] == "DOTENVK_CONFIG_CONTENT"


def test_config_manager_caches_until_reset(isolated_paths: Path) -> None:
    target = isolated_paths / "dotenvk.json"
    target.write_text('{"file": "one.env"}', encoding="utf-8")
    assert ConfigManager.get().file == "one.env"

    target.write_text('{"file": "two.env"}', encoding="utf-8")
    assert ConfigManager.get().file == "one.env"

    ConfigManager.reset()
    assert ConfigManager.get().file == "two.env"


def test_config_manager_invalid_env_content(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOTENVK_CONFIG_CONTENT", "{oops")

    with pytest.raises(ConfigError) as excinfo:
        ConfigManager.get()

    assert excinfo.value.path == "DOTENVK_CONFIG_CONTENT"


def test_config_manager_invalid_schema(isolated_paths: Path) -> None:
    target = isolated_paths / "dotenvk.json"
    target.write_text('{"export": {"format": "yaml"}}', encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        ConfigManager.get()

    assert Path(excinfo.value.path) == target.resolve()
