"""
Durable client-side storage.

A small key-value store kept as one JSON file. Every write replaces the file
atomically (temp file + rename), so readers see either the previous contents
or the new ones, never a partial write.
An unreadable file is copied aside before it is rewritten.

The confirmed placement lives under PLACEMENT_KEY and is read back by the
career screen.
"""

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from .errors import PlacementPersistenceError

logger = logging.getLogger(__name__)

PLACEMENT_KEY = "valorantCareer"


class PlacementStore:
    """JSON-file backed key-value storage."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    @property
    def backup_path(self) -> Path:
        return self.path.with_name(f"{self.path.name}.corrupt")

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Unreadable storage file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _load_for_update(self) -> dict[str, Any]:
        """
        Load the current contents before rewriting them.

        A file that exists but does not hold a JSON object is copied to
        backup_path first, since the rewrite drops whatever it contained.
        """
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            data = None
            reason = str(e)
        else:
            reason = f"expected a JSON object, found {type(data).__name__}"

        if isinstance(data, dict):
            return data

        logger.warning(
            f"Storage file {self.path} is unreadable ({reason}); "
            f"previous contents saved to {self.backup_path}"
        )
        try:
            shutil.copyfile(self.path, self.backup_path)
        except OSError as e:
            raise PlacementPersistenceError(
                f"Could not back up unreadable {self.path}: {e}"
            ) from e
        return {}

    def _replace(self, data: dict[str, Any]) -> None:
        """Atomically replace the storage file with `data`."""
        try:
            payload = json.dumps(data, indent=2)
        except (TypeError, ValueError) as e:
            raise PlacementPersistenceError(f"Storage contents are not serializable: {e}") from e

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(f"Failed to write storage file {self.path}: {e}")
            raise PlacementPersistenceError(f"Could not write {self.path}: {e}") from e

    def read(self, key: str = PLACEMENT_KEY) -> Any | None:
        """Return the value stored under `key`, or None."""
        return self._load().get(key)

    def write(self, value: Any, key: str = PLACEMENT_KEY) -> None:
        """
        Store `value` under `key`, overwriting any previous value.

        Raises PlacementPersistenceError if the value cannot be serialized or
        the file cannot be written.
        """
        data = self._load_for_update()
        data[key] = value
        self._replace(data)
        logger.debug(f"Stored {key!r} in {self.path}")

    def remove(self, key: str = PLACEMENT_KEY) -> None:
        data = self._load_for_update()
        if key in data:
            del data[key]
            self._replace(data)
            logger.debug(f"Removed {key!r} from {self.path}")
