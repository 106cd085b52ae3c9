"""
Local key-value persistence for session state (selected branch, user).

Backed by a JSON file. When the file cannot be read or written the store
logs a warning and keeps working in memory for the rest of the session.
"""

import json
import logging
import os

from .exceptions import StorageError

logger = logging.getLogger(__name__)


class LocalStore:

    def __init__(self, path=None):
        self.path = path
        self.degraded = path is None
        self._data = {}
        if path is not None:
            self._safely(self._load)

    def _load(self):
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, encoding='utf-8') as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        if isinstance(data, dict):
            self._data = data

    def _flush(self):
        try:
            with open(self.path, 'w', encoding='utf-8') as fh:
                json.dump(self._data, fh)
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

    def _safely(self, operation):
        try:
            operation()
        except StorageError as e:
            self.degraded = True
            logger.warning('%s; continuing with in-memory session state', e)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value
        if not self.degraded:
            self._safely(self._flush)

    def remove(self, key):
        self._data.pop(key, None)
        if not self.degraded:
            self._safely(self._flush)
