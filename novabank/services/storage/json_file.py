"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON object on disk stands in for browser
local storage. It is:
1. Human-readable, so the ledger can be inspected by hand
2. Written through a temporary file and an atomic rename, so a crash
   mid-write leaves the previous state intact

TRADEOFFS:
- The whole file is rewritten on every change (fine for two keys)
- No locking between processes; one dashboard process per file
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional, Union

import structlog

from novabank.services.storage.interface import (
    KeyValueStorageInterface,
    StorageWriteError,
)


logger = structlog.get_logger(__name__)


class JsonFileKeyValueStorage(KeyValueStorageInterface):
    """
    Key-value storage backed by one JSON file.

    A missing file is an empty store. A file that is not a JSON object of
    strings is logged and treated as empty; it is only overwritten on
    the next write.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning("storage_read_failed", path=str(self._path), error=str(e))
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("storage_file_corrupt", path=str(self._path), error=str(e))
            return {}

        if not isinstance(data, dict):
            logger.warning("storage_file_corrupt", path=str(self._path), error="not an object")
            return {}

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, indent=2, sort_keys=True)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageWriteError(f"Failed to write {self._path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def set_items(self, items: Mapping[str, str]) -> None:
        """All values go into the file in a single replace."""
        data = self._read_all()
        data.update(items)
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)

    def clear(self) -> None:
        self._write_all({})
