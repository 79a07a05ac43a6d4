"""Tests for ConfigManager defaults, YAML loading and validation."""

import pytest

from litsearch.config import ConfigManager


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("NCBI_API_KEY", raising=False)
    monkeypatch.delenv("LITSEARCH_CONFIG", raising=False)


def test_defaults_without_file():
    config = ConfigManager()

    assert config.base_url == "https://eutils.ncbi.nlm.nih.gov/entrez/eutils/"
    assert config.pubmed_api_key is None
    assert config.min_interval == 0.34
    assert config.timeout == 30
    assert config.batch_size == 200
    assert config.storage_enabled is False
    assert config.log_level == "INFO"


def test_yaml_values_override_defaults(tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text(
        "pubmed:\n"
        "  email: researcher@example.org\n"
        "  api_key: abc123\n"
        "logging:\n"
        "  level: debug\n"
    )

    config = ConfigManager(settings)

    assert config.pubmed_email == "researcher@example.org"
    assert config.pubmed_api_key == "abc123"
    assert config.min_interval == 0.1
    assert config.batch_size == 200
    assert config.log_level == "DEBUG"


def test_environment_api_key(monkeypatch):
    monkeypatch.setenv("NCBI_API_KEY", "from-env")

    config = ConfigManager()

    assert config.pubmed_api_key == "from-env"
    assert config.min_interval == 0.1


def test_config_path_from_environment(tmp_path, monkeypatch):
    settings = tmp_path / "custom.yaml"
    settings.write_text("pubmed:\n  batch_size: 25\n")
    monkeypatch.setenv("LITSEARCH_CONFIG", str(settings))

    assert ConfigManager().batch_size == 25


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigManager(tmp_path / "missing.yaml")


def test_empty_file_raises(tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("")

    with pytest.raises(ValueError, match="empty"):
        ConfigManager(settings)


@pytest.mark.parametrize("key, value", [
    ("batch_size", 0),
    ("timeout", -1),
    ("min_interval", "fast"),
])
def test_invalid_numbers_are_rejected(tmp_path, key, value):
    settings = tmp_path / "settings.yaml"
    settings.write_text(f"pubmed:\n  {key}: {value}\n")

    with pytest.raises(ValueError, match=key):
        ConfigManager(settings)


def test_get_and_set_dotted_keys():
    config = ConfigManager()

    config.set("storage.enabled", True)
    config.set("extra.nested.value", 3)

    assert config.storage_enabled is True
    assert config.get("extra.nested.value") == 3
    assert config.get("extra.missing", "fallback") == "fallback"
