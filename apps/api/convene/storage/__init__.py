from __future__ import annotations

from convene.storage.base import RecordStorage
from convene.storage.factory import create_storage
from convene.storage.local import LocalFileStorage
from convene.storage.persistence import Diagnostic, LoadReport, PersistenceEngine, SaveResult

__all__ = [
    "RecordStorage",
    "LocalFileStorage",
    "create_storage",
    "PersistenceEngine",
    "LoadReport",
    "SaveResult",
    "Diagnostic",
]
