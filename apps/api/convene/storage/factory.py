from __future__ import annotations

from pathlib import Path

from convene.core.config import settings
from convene.storage.base import RecordStorage
from convene.storage.local import LocalFileStorage


def create_storage(
    backend: str | None = None,
    path: str | Path | None = None,
) -> RecordStorage:
    selected_backend = (backend or settings.storage_backend).strip().lower()
    if selected_backend == "local":
        return LocalFileStorage(Path(path or settings.data_path))
    raise ValueError(f"unsupported storage backend: {selected_backend}")
