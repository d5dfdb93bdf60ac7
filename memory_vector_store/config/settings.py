"""Library settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# Values are read from TWO sources (in priority order):
#
#   1. Environment variables - e.g. VECTOR_STORE_PATH=./data/vectors.json
#   2. .env file - key=value lines in the working directory
#
# Field ``vector_store_path`` maps to env var ``VECTOR_STORE_PATH``
# (pydantic-settings matches case-insensitively).  Defaults apply when
# neither source sets a value.
#
# The factories in main.py use these values as defaults; keyword
# arguments passed to a factory always win.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """memory-vector-store settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === File-backed store (create_vector_store) ===
    vector_store_path: str = "./data/memory_vector_store.json"
    vector_store_auto_save: bool = True
    vector_store_debug: bool = False
    vector_store_max_file_size_mb: float = 500

    # === SQLite key-value store (create_kv_vector_store) ===
    kv_store_db_path: str = "./data/memory_vector_store.db"
    kv_store_key: str = "memory-vector-store"
    kv_store_max_file_size_mb: float = 3

    # === Embedding providers ===
    openai_api_key: str = ""
    openai_base_url: str = ""  # OpenAI-compatible endpoint (TogetherAI, etc.)
    openai_embedding_model: str = ""  # empty = text-embedding-3-small
    ollama_base_url: str = "http://localhost:11434"

    # === Logging ===
    app_env: str = "development"
    log_level: str = "INFO"
