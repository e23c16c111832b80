"""Unit tests for config.py"""

import pytest

from logpub.config import load_config


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """No stray config.yaml or LOGPUB_ env vars leak into a test."""
    monkeypatch.chdir(tmp_path)
    for name in ("DB_URL", "STRICT", "WORDS_PER_MINUTE", "OUTPUT_FORMAT", "LOG_LEVEL"):
        monkeypatch.delenv(f"LOGPUB_{name}", raising=False)


def test_load_config_defaults():
    settings = load_config()
    assert settings.db_url == "sqlite:///logpub.db"
    assert settings.strict is False
    assert settings.words_per_minute == 200
    assert settings.output_format == "mdx"


def test_load_config_uses_env_db_url(monkeypatch):
    """LOGPUB_DB_URL env var is picked up by load_config."""
    monkeypatch.setenv("LOGPUB_DB_URL", "sqlite:///env.db")
    assert load_config().db_url == "sqlite:///env.db"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("db_url: 'sqlite:///project.db'\nwords_per_minute: 250\n")
    monkeypatch.setenv("LOGPUB_DB_URL", "sqlite:///override.db")
    settings = load_config()
    assert settings.db_url == "sqlite:///override.db"
    assert settings.words_per_minute == 250


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("LOGPUB_STRICT", "false")
    settings = load_config(overrides={"strict": True, "output_format": None})
    assert settings.strict is True
    assert settings.output_format == "mdx"


def test_load_config_env_coerces_types(monkeypatch):
    monkeypatch.setenv("LOGPUB_WORDS_PER_MINUTE", "180")
    monkeypatch.setenv("LOGPUB_STRICT", "true")
    settings = load_config()
    assert settings.words_per_minute == 180
    assert settings.strict is True


def test_load_config_invalid_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


@pytest.mark.parametrize("name,value", [
    ("LOGPUB_OUTPUT_FORMAT", "html"),
    ("LOGPUB_WORDS_PER_MINUTE", "0"),
    ("LOGPUB_LOG_LEVEL", "LOUD"),
])
def test_load_config_rejects_bad_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        load_config()
