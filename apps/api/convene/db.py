from __future__ import annotations

from pathlib import Path

import structlog
from fastapi import Request

from convene.core.config import settings
from convene.storage.factory import create_storage
from convene.storage.persistence import LoadReport, PersistenceEngine, SaveResult
from convene.store.event_store import EventStore

logger = structlog.get_logger()


class StoreSession:
    """The process-wide event store paired with the engine that persists it."""

    def __init__(
        self,
        store: EventStore,
        persistence: PersistenceEngine,
        autosave: bool = True,
    ) -> None:
        self.store = store
        self.persistence = persistence
        self.autosave = autosave
        self.last_save: SaveResult | None = None

    def load(self) -> LoadReport:
        return self.persistence.load(self.store)

    def save(self) -> SaveResult:
        self.last_save = self.persistence.save(self.store)
        return self.last_save

    def commit(self) -> SaveResult | None:
        """Persist after a successful mutation when autosave is on."""
        if not self.autosave:
            return None
        return self.save()


def open_session(
    path: str | Path | None = None,
    backend: str | None = None,
    autosave: bool | None = None,
) -> StoreSession:
    storage = create_storage(backend=backend, path=path)
    return StoreSession(
        EventStore(),
        PersistenceEngine(storage),
        autosave=settings.autosave if autosave is None else autosave,
    )


def get_db(request: Request) -> StoreSession:
    return request.app.state.db
