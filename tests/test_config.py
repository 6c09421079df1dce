"""Configuration tests."""

from __future__ import annotations

import pytest

from keel import config as keel_config
from keel.config import BaseConfig, _env_bool


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("true", True), (" YES ", True), ("on", True), ("0", False), ("nope", False)],
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("KEEL_FLAG", raw)

    assert _env_bool("KEEL_FLAG") is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("KEEL_FLAG", raising=False)

    assert _env_bool("KEEL_FLAG", default=True) is True


def test_defaults_build_sqlite_url_in_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("KEEL_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("KEEL_DATABASE_URL", raising=False)
    monkeypatch.delenv("KEEL_DEV_MODE", raising=False)

    config = BaseConfig()

    assert config.DATA_DIR.is_dir()
    assert config.DATA_DIR == (tmp_path / "data").resolve()
    assert config.DATABASE_URL == f"sqlite:///{config.DATA_DIR / 'keel.db'}"
    assert config.DEV_MODE is True
    assert config.sqlalchemy_engine_options() == {"connect_args": {"check_same_thread": False}}


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("KEEL_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("KEEL_DATABASE_URL", "postgresql://keel@localhost/keel")
    monkeypatch.setenv("KEEL_DEV_MODE", "false")
    monkeypatch.setenv("KEEL_LOG_LEVEL", "debug")

    config = BaseConfig()

    assert config.DATABASE_URL == "postgresql://keel@localhost/keel"
    assert config.DEV_MODE is False
    assert config.LOG_LEVEL == "DEBUG"
    assert config.sqlalchemy_engine_options() == {}


def test_testing_config_uses_memory_database(tmp_path, monkeypatch):
    monkeypatch.setenv("KEEL_DATA_DIR", str(tmp_path))

    assert keel_config.TestingConfig().DATABASE_URL == "sqlite://"
