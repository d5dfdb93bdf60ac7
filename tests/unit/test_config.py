"""Unit tests for Settings and the layered YAML config loader."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from memory_vector_store.config.loader import load_config, load_options, setup_logging
from memory_vector_store.config.settings import Settings
from memory_vector_store.utils.errors import ConfigurationError

_YAML = """\
vector_store:
  storage_path: ./data/products.json
  max_file_size_mb: 50
  debug: true
logging:
  log_level: WARNING
"""


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(_YAML, encoding="utf-8")
    return path


# ======================================================================
# Settings
# ======================================================================


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("VECTOR_STORE_PATH", "KV_STORE_KEY", "KV_STORE_MAX_FILE_SIZE_MB"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.vector_store_path == "./data/memory_vector_store.json"
        assert settings.kv_store_key == "memory-vector-store"
        assert settings.kv_store_max_file_size_mb == 3

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VECTOR_STORE_MAX_FILE_SIZE_MB", "25")
        monkeypatch.setenv("VECTOR_STORE_DEBUG", "true")
        settings = Settings(_env_file=None)
        assert settings.vector_store_max_file_size_mb == 25
        assert settings.vector_store_debug is True

    def test_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("KV_STORE_KEY", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("KV_STORE_KEY=products\nUNRELATED=ignored\n", encoding="utf-8")
        settings = Settings(_env_file=env_file)
        assert settings.kv_store_key == "products"


# ======================================================================
# load_config / load_options
# ======================================================================


class TestLoadConfig:
    def test_reads_yaml(self, config_file: Path) -> None:
        config = load_config(str(config_file), settings=Settings.model_construct())
        assert config["vector_store"]["storage_path"] == "./data/products.json"
        assert config["vector_store"]["max_file_size_mb"] == 50
        assert config["logging"]["log_level"] == "WARNING"

    def test_missing_file_yields_empty_sections(self, tmp_path: Path) -> None:
        config = load_config(str(tmp_path / "absent.yaml"), settings=Settings.model_construct())
        assert config == {"vector_store": {}, "logging": {}}

    def test_explicit_settings_override_yaml(self, config_file: Path) -> None:
        settings = Settings.model_construct(vector_store_max_file_size_mb=10, log_level="DEBUG")
        config = load_config(str(config_file), settings=settings)
        assert config["vector_store"]["max_file_size_mb"] == 10
        assert config["vector_store"]["debug"] is True
        assert config["logging"]["log_level"] == "DEBUG"

    def test_defaults_do_not_shadow_yaml(self, config_file: Path) -> None:
        config = load_config(str(config_file), settings=Settings.model_construct())
        assert config["vector_store"]["debug"] is True

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("vector_store: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(str(path), settings=Settings.model_construct())

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(str(path), settings=Settings.model_construct())


class TestLoadOptions:
    def test_builds_options(self, config_file: Path) -> None:
        options = load_options(str(config_file), settings=Settings.model_construct())
        assert options.storage_path == "./data/products.json"
        assert options.max_file_size_mb == 50
        assert options.debug is True
        assert options.auto_save is True

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        options = load_options(str(tmp_path / "absent.yaml"), settings=Settings.model_construct())
        assert options.max_file_size_mb == 500
        assert options.storage_path is None

    def test_invalid_values_raise(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("vector_store:\n  max_file_size_mb: -1\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_options(str(path), settings=Settings.model_construct())


class TestSetupLogging:
    def test_uses_logging_section(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  log_level: WARNING\n  app_env: production\n", encoding="utf-8")

        with patch("memory_vector_store.config.loader.configure_logging") as configure:
            setup_logging(str(path), settings=Settings.model_construct())

        configure.assert_called_once_with(log_level="WARNING", json_output=True)

    def test_falls_back_to_settings(self, tmp_path: Path) -> None:
        settings = Settings.model_construct(log_level="DEBUG", app_env="development")

        with patch("memory_vector_store.config.loader.configure_logging") as configure:
            setup_logging(str(tmp_path / "absent.yaml"), settings=settings)

        configure.assert_called_once_with(log_level="DEBUG", json_output=False)
