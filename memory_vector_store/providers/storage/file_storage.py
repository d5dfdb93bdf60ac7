"""Filesystem storage provider.

Each snapshot is a UTF-8 JSON array in its own file.  Writes go to a
temporary file in the target directory first and are moved into place with
``os.replace``, so a crash mid-write leaves the previous snapshot intact.
Parent directories are created on demand.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

import structlog

from memory_vector_store.interfaces.storage_provider import IStorageProvider
from memory_vector_store.models.document import SerializedRecord
from memory_vector_store.utils.errors import StorageError

logger = structlog.get_logger(logger_name=__name__)


class FileStorageProvider(IStorageProvider):
    """Snapshot storage backed by one JSON file per key (the key is the path)."""

    def save(self, key: str, records: list[SerializedRecord]) -> None:
        path = Path(key)
        try:
            payload = json.dumps(records, ensure_ascii=False, separators=(",", ":"))
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(
                message=f"Failed to write snapshot {key}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.debug("file_snapshot_written", path=str(path), records=len(records))

    def load(self, key: str) -> list[SerializedRecord]:
        path = Path(key)
        if not path.exists():
            return []
        try:
            data = path.read_text(encoding="utf-8")
            records = json.loads(data or "[]")
        except (OSError, ValueError) as exc:
            raise StorageError(
                message=f"Failed to read snapshot {key}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(records, list):
            raise StorageError(
                message=f"Snapshot {key} is not a JSON array",
                provider_name=self.get_provider_name(),
            )
        return records

    def exists(self, key: str) -> bool:
        return Path(key).exists()

    def get_provider_name(self) -> str:
        return "file_storage"
