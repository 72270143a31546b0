from __future__ import annotations

from pathlib import Path

import pytest

from userapi.config import Settings, load_settings, load_settings_file, resolve_config_path


def test_defaults_without_config_file(tmp_path: Path) -> None:
    settings = load_settings({"USERAPI_CONFIG": str(tmp_path / "missing.yaml")})

    assert settings.host == "127.0.0.1"
    assert settings.port == 8787
    assert settings.log_level == "info"
    assert settings.database_path.name == "users.sqlite3"


def test_yaml_file_resolves_relative_database_path(tmp_path: Path) -> None:
    config_path = tmp_path / "userapi.yaml"
    config_path.write_text(
        "database_path: data/app.sqlite3\nhost: 0.0.0.0\nport: 9000\nlog_level: DEBUG\n",
        encoding="utf-8",
    )

    settings = load_settings_file(config_path)

    assert settings.database_path == (tmp_path / "data" / "app.sqlite3").resolve()
    assert settings.host == "0.0.0.0"
    assert settings.port == 9000
    assert settings.log_level == "debug"


def test_environment_overrides_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "userapi.yaml"
    config_path.write_text("port: 9000\nhost: 0.0.0.0\n", encoding="utf-8")
    db_path = tmp_path / "env.sqlite3"

    settings = load_settings(
        {
            "USERAPI_CONFIG": str(config_path),
            "USERAPI_DB_PATH": str(db_path),
            "USERAPI_PORT": "8123",
        }
    )

    assert settings.port == 8123
    assert settings.host == "0.0.0.0"
    assert settings.database_path == db_path.resolve()


def test_empty_yaml_file_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "userapi.yaml"
    config_path.write_text("", encoding="utf-8")

    settings = load_settings_file(config_path)

    assert settings == Settings(database_path=settings.database_path)


def test_non_mapping_yaml_is_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "userapi.yaml"
    config_path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_settings_file(config_path)


def test_resolve_config_path_prefers_override(tmp_path: Path) -> None:
    override = tmp_path / "custom.yaml"

    assert resolve_config_path(str(override)) == override.resolve()
    assert resolve_config_path(None).name == "userapi.yaml"
