"""Configuration module - exports Settings and the layered config loaders."""

from memory_vector_store.config.loader import load_config, load_options, setup_logging
from memory_vector_store.config.settings import Settings

__all__ = ["Settings", "load_config", "load_options", "setup_logging"]
