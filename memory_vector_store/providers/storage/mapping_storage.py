"""Storage provider over any dict-like mapping.

Stores each snapshot as a JSON string under its key, the way a browser's
``localStorage`` would.  Pass a plain ``{}`` for a process-local store (tests,
ephemeral sessions) or any other ``MutableMapping[str, str]``.
"""

from __future__ import annotations

import json
from collections.abc import MutableMapping

from memory_vector_store.interfaces.storage_provider import IStorageProvider
from memory_vector_store.models.document import SerializedRecord
from memory_vector_store.utils.errors import StorageError


class MappingStorageProvider(IStorageProvider):
    """Snapshot storage backed by a ``MutableMapping[str, str]``."""

    def __init__(self, mapping: MutableMapping[str, str] | None = None) -> None:
        self._mapping: MutableMapping[str, str] = mapping if mapping is not None else {}

    @property
    def mapping(self) -> MutableMapping[str, str]:
        return self._mapping

    def save(self, key: str, records: list[SerializedRecord]) -> None:
        try:
            self._mapping[key] = json.dumps(records, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise StorageError(
                message=f"Failed to encode snapshot {key}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def load(self, key: str) -> list[SerializedRecord]:
        data = self._mapping.get(key)
        if not data:
            return []
        try:
            records = json.loads(data)
        except ValueError as exc:
            raise StorageError(
                message=f"Failed to decode snapshot {key}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        if not isinstance(records, list):
            raise StorageError(
                message=f"Snapshot {key} is not a JSON array",
                provider_name=self.get_provider_name(),
            )
        return records

    def exists(self, key: str) -> bool:
        return key in self._mapping

    def get_provider_name(self) -> str:
        return "mapping_storage"
