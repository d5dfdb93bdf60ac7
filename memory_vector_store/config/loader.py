"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  - static defaults checked into the project
#   2. .env file           - local developer overrides (not committed)
#   3. Environment vars    - set at deploy time
#
# Only settings that are actually present in .env or the environment
# override YAML; pydantic defaults never shadow a YAML value.
#
# Example config.yaml:
#
#   vector_store:
#     storage_path: ./data/products.json
#     max_file_size_mb: 50
#     debug: true
#   logging:
#     log_level: WARNING
#     app_env: production      # JSON log lines (see setup_logging)
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from memory_vector_store.config.settings import Settings
from memory_vector_store.models.options import VectorStoreOptions
from memory_vector_store.utils.errors import ConfigurationError
from memory_vector_store.utils.logging import configure_logging

# Settings field -> key inside the ``vector_store`` YAML section.
_VECTOR_STORE_FIELDS = {
    "vector_store_path": "storage_path",
    "vector_store_auto_save": "auto_save",
    "vector_store_debug": "debug",
    "vector_store_max_file_size_mb": "max_file_size_mb",
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge explicitly-set environment values on top.

    Args:
        path: Path to the YAML configuration file (optional on disk).
        settings: Pre-built settings; read from the environment when omitted.

    Returns:
        Fully resolved configuration dictionary.

    Raises:
        ConfigurationError: If the YAML file is malformed.
    """
    config_path = Path(path)
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping at top level")
    else:
        yaml_config = {}

    settings = settings if settings is not None else Settings()
    explicit = settings.model_fields_set

    env_overrides: dict = {
        "vector_store": {
            yaml_key: getattr(settings, field_name)
            for field_name, yaml_key in _VECTOR_STORE_FIELDS.items()
            if field_name in explicit
        },
        "logging": {
            key: getattr(settings, key)
            for key in ("log_level", "app_env")
            if key in explicit
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def load_options(path: str = "config/config.yaml", settings: Settings | None = None) -> VectorStoreOptions:
    """Resolve the ``vector_store`` section of the layered config into options."""
    section = load_config(path, settings=settings).get("vector_store") or {}
    try:
        return VectorStoreOptions(**section)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid vector_store configuration: {exc}") from exc


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def setup_logging(path: str = "config/config.yaml", settings: Settings | None = None) -> None:
    """Configure logging from the ``logging`` section of the layered config.

    ``log_level`` and ``app_env`` fall back to the settings defaults when the
    section omits them; ``app_env: production`` switches to JSON output.
    """
    settings = settings if settings is not None else Settings()
    section = load_config(path, settings=settings).get("logging") or {}
    app_env = section.get("app_env", settings.app_env)
    configure_logging(
        log_level=section.get("log_level", settings.log_level),
        json_output=(app_env == "production"),
    )
