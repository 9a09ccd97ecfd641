"""Tenant-namespaced JSON key/value store"""
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from config import logger
from src.core import StorageError

class JsonStore:
    """
    Keyed JSON records scoped to one company/tenant

    Each key lives in its own file ``{key}_{tenant_id}.json`` under
    ``base_dir``. Reads never fail: a missing, unreadable or corrupt file
    yields the caller's default. Writes replace the file atomically, so a
    concurrent reader sees either the old or the new record. Last writer
    wins when several processes share the directory.

    Attributes:
        base_dir: Directory holding the record files
        tenant_id: Namespace appended to every key
    """

    def __init__(self, base_dir: str | Path, tenant_id: str = "default") -> None:
        if not tenant_id:
            raise StorageError(message="A tenant id is required to scope stored records")
        self.base_dir = Path(base_dir)
        self.tenant_id = tenant_id

    def path_for(self, key: str) -> Path:
        return self.base_dir / f"{key}_{self.tenant_id}.json"

    def load(self, key: str, default: Any) -> Any:
        """
        Read a record, falling back to ``default``

        Args:
            key: Record name (e.g. 'emotion_feedback_data')
            default: Value returned when the record is missing or unreadable

        Returns:
            Decoded JSON value or ``default``
        """
        path = self.path_for(key)
        if not path.exists():
            return default

        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {path}, using default: {e!r}")
            return default

    def save(self, key: str, data: Any) -> None:
        """
        Write a record atomically

        Args:
            key: Record name
            data: JSON-serializable value

        Raises:
            StorageError: If the record cannot be serialized or written
        """
        path = self.path_for(key)
        tmp_name = None
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.base_dir, prefix=f".{key}_", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_name, path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(f"Failed to write {path}: {e!r}")
            raise StorageError(
                message=f"Could not save record '{key}'",
                key=key,
            ) from e
