"""Cart persistence adapters"""

import json
import logging
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from .exceptions import CorruptCartData

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class CartStorage(ABC):
    """
    Key-value storage for serialized cart state.

    Stands in for the browser's local storage: one JSON document per
    session or user key, same-device only.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[dict]:
        """Return the stored document or None if the key is unknown"""

    @abstractmethod
    def save(self, key: str, data: dict) -> None:
        """Store a document under key, replacing any previous one"""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove a key. Returns True if something was removed"""


def _decode(key: str, raw: str) -> dict:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptCartData(f"Cart {key} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise CorruptCartData(f"Cart {key} is not a JSON object")
    return data


class MemoryCartStorage(CartStorage):
    """In-process storage that still round-trips through JSON text"""

    def __init__(self):
        self._documents: dict[str, str] = {}

    def load(self, key: str) -> Optional[dict]:
        raw = self._documents.get(key)
        if raw is None:
            return None
        return _decode(key, raw)

    def save(self, key: str, data: dict) -> None:
        self._documents[key] = json.dumps(data)

    def delete(self, key: str) -> bool:
        return self._documents.pop(key, None) is not None

    def keys(self) -> list[str]:
        return list(self._documents)


class FileCartStorage(CartStorage):
    """One JSON file per key inside a directory"""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def load(self, key: str) -> Optional[dict]:
        path = self._path(key)
        if not path.exists():
            return None
        return _decode(key, path.read_text(encoding="utf-8"))

    def save(self, key: str, data: dict) -> None:
        path = self._path(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, path)
        except OSError:
            logger.error(f"Failed to write cart {key} to {path}")
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if path.exists():
            path.unlink()
            return True
        return False
