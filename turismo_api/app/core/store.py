"""
JSON file persistence for tourism flow records.

Two files back the API:

* the primary store, a JSON array holding every record, and
* the grouped index, a JSON object mapping a community name to the
  list of records that belong to it.  Another process builds this file;
  the API only reads it.

There is no caching or indexing.  Every operation reads the whole file
and every mutation writes the whole collection back.  Saves go through
a temporary file in the same directory and ``os.replace`` so a crash
mid-write never leaves a truncated store behind.

Reading the two files fails differently.  ``load_all`` logs any read or
parse problem and returns an empty collection, whereas
``load_grouped_index`` lets the error reach the caller.
"""

import json
import logging
import os
import shutil
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Tuple

from pydantic import ValidationError

from .config import settings
from ..schemas.turismo import Turismo

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent.parent.parent  # turismo_api/


def resolve_path(path: str) -> str:
    """Return ``path`` as absolute, resolving relative paths against the package."""
    if os.path.isabs(path):
        return path
    return str((PACKAGE_DIR / path).resolve())


class RecordStore:
    """Whole-file access to the primary store and the grouped index."""

    def __init__(self, data_path: str, grouped_path: str) -> None:
        self.data_path = data_path
        self.grouped_path = grouped_path
        self._lock = threading.Lock()

    @contextmanager
    def locked(self) -> Iterator["RecordStore"]:
        """Hold the store lock for a load, mutate and save sequence."""
        with self._lock:
            yield self

    def load_all(self) -> List[Turismo]:
        """Read every record from the primary store.

        Any failure (missing file, invalid JSON, unexpected structure) is
        logged and reported as an empty collection.
        """
        try:
            with open(self.data_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            if raw is None:
                return []
            if not isinstance(raw, list):
                raise ValueError(f"expected a JSON array, got {type(raw).__name__}")
            return [Turismo.model_validate(item) for item in raw]
        except (OSError, ValueError, ValidationError) as exc:
            # json.JSONDecodeError is a ValueError subclass
            logger.error("Error reading records file %s: %s", self.data_path, exc)
            return []

    def save_all(self, records: List[Turismo]) -> None:
        """Overwrite the primary store with ``records``.

        Raises ``OSError`` when the file cannot be written; the previous
        contents are left untouched in that case.  An existing store keeps
        its permission bits across the replace.
        """
        payload = [record.to_json() for record in records]
        directory = os.path.dirname(self.data_path) or "."
        fd, tmp_path = tempfile.mkstemp(prefix=".turismo-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False)
            if os.path.exists(self.data_path):
                shutil.copymode(self.data_path, tmp_path)
            os.replace(tmp_path, self.data_path)
        except Exception:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        logger.debug("Saved %d records to %s", len(records), self.data_path)

    def load_grouped_index(self) -> Dict[str, List[Turismo]]:
        """Read the community grouped index.

        Read and parse errors propagate: ``OSError`` for file problems,
        ``ValueError`` (including ``json.JSONDecodeError`` and pydantic's
        ``ValidationError``) for malformed content.
        """
        with open(self.grouped_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError(f"grouped index must be a JSON object, got {type(raw).__name__}")
        return {
            community: [Turismo.model_validate(item) for item in (items or [])]
            for community, items in raw.items()
        }


_stores: Dict[Tuple[str, str], RecordStore] = {}
_stores_lock = threading.Lock()


def get_store() -> RecordStore:
    """Return the store for the currently configured file paths.

    One instance (and therefore one lock) exists per pair of paths, so
    every request touching the same files is serialized on the same lock.
    """
    key = (resolve_path(settings.data_file), resolve_path(settings.grouped_file))
    with _stores_lock:
        store = _stores.get(key)
        if store is None:
            store = RecordStore(*key)
            _stores[key] = store
        return store
