"""
Local file storage for persisted app state.
"""
import os
import json
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from herflow.services.exceptions import StorageError
from herflow.utils.logging import logger

DEFAULT_DATA_FILE = Path.home() / ".herflow" / "data.json"

def get_data_path() -> Path:
    """
    Resolve the storage file location.

    Uses the HERFLOW_DATA_FILE environment variable when set, otherwise
    ``~/.herflow/data.json``.

    Returns:
        Path of the JSON document holding all persisted keys
    """
    configured = os.environ.get('HERFLOW_DATA_FILE')
    if configured:
        return Path(configured).expanduser()
    return DEFAULT_DATA_FILE

class LocalStorage:
    """
    Key/value storage backed by a single JSON document on disk.

    Every write rewrites the whole document through a temporary file that
    is fsynced and atomically renamed over the original, so a reader never
    sees a half-written file.

    Example:
        storage = LocalStorage(Path("data.json"))
        storage.put_item("theme", "retro")
        storage.get_item("theme")  # "retro"
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._items: Optional[Dict[str, Any]] = None

    def _load(self) -> Dict[str, Any]:
        if self._items is not None:
            return self._items
        if not self.path.exists():
            self._items = {}
            return self._items
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                items = json.load(handle)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read storage file {self.path}: {str(e)}")
        if not isinstance(items, dict):
            raise StorageError(f"Storage file {self.path} does not hold a JSON object")
        self._items = items
        logger.debug("Loaded storage file", extra={
            "path": str(self.path),
            "keys": sorted(items)
        })
        return self._items

    def _write(self, items: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".herflow-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(items, handle, indent=2, ensure_ascii=False)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write storage file {self.path}: {str(e)}")

    def get_item(self, key: str) -> Optional[Any]:
        """
        Get a single value.

        Args:
            key: Persisted key name

        Returns:
            Stored value if present, None otherwise
        """
        return self._load().get(key)

    def put_item(self, key: str, value: Any) -> None:
        """
        Store a value and durably write the document.

        Args:
            key: Persisted key name
            value: JSON-compatible value
        """
        items = dict(self._load())
        items[key] = value
        self._write(items)
        self._items = items

    def delete_item(self, key: str) -> None:
        """
        Remove a value and durably write the document.

        Args:
            key: Persisted key name
        """
        items = dict(self._load())
        if key not in items:
            return
        del items[key]
        self._write(items)
        self._items = items
