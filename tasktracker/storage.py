"""JSON file storage for the task collection.

The whole collection lives in a single JSON array. Every write replaces the
file in one step, so a reader never sees a half-written document. There is
no locking: two processes writing the same file concurrently will lose
updates (last writer wins).
"""

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol

from tasktracker.errors import StorageError

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class Storage(Protocol):
    """Raw persistence used by the task store."""

    def read(self) -> list[Record]:
        """Load every stored record."""
        ...

    def write(self, records: list[Record]) -> None:
        """Replace the stored collection."""
        ...

    def read_file(self, path: str | Path) -> Any:
        """Parse the JSON document at ``path``."""
        ...

    def write_file(self, path: str | Path, data: Any) -> None:
        """Write ``data`` as JSON to ``path``."""
        ...

    def file_exists(self, path: str | Path) -> bool:
        """Return True if ``path`` exists."""
        ...


class JsonFileStorage:
    """Stores the task collection as a pretty-printed JSON array."""

    def __init__(self, data_file: str | Path) -> None:
        """Bind to ``data_file``, creating it as an empty array if missing."""
        self._data_file = Path(data_file)
        if not self._data_file.exists():
            self.write([])
            logger.info("Initialized empty task file %s", self._data_file)

    def read(self) -> list[Record]:
        """Load the collection, which must be a JSON array."""
        data = self.read_file(self._data_file)
        if not isinstance(data, list):
            raise StorageError(
                f"Failed to read data: {self._data_file} does not contain a JSON array"
            )
        return data

    def write(self, records: list[Record]) -> None:
        """Atomically replace the collection on disk."""
        self.write_file(self._data_file, records)

    def read_file(self, path: str | Path) -> Any:
        """Parse the JSON document at ``path``."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
            data = json.loads(text)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Failed to read file {path}: {exc}") from exc
        logger.debug("Read %s (%d bytes)", path, len(text))
        return data

    def write_file(self, path: str | Path, data: Any) -> None:
        """Write ``data`` to ``path`` as indented JSON via a temp file."""
        path = Path(path)
        try:
            payload = json.dumps(data, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Failed to serialize data for {path}: {exc}") from exc

        tmp_path = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload + "\n", encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to write file {path}: {exc}") from exc
        logger.debug("Wrote %s (%d bytes)", path, len(payload))

    def file_exists(self, path: str | Path) -> bool:
        """Return True if ``path`` exists."""
        return Path(path).exists()
