from __future__ import annotations

import structlog

from convene.db import StoreSession
from convene.models.event import EventView
from convene.services.results import CancelEventStatus, CreateResult, UpdateStatus

logger = structlog.get_logger()


def create_event(
    db: StoreSession,
    event_id: int,
    name: str,
    date: str,
    time: str,
    location: str,
    capacity: int,
) -> CreateResult:
    result = db.store.create_event(event_id, name, date, time, location, capacity)
    if result.ok:
        logger.info("event_created", event_id=event_id, capacity=capacity)
        db.commit()
    else:
        logger.info("event_create_rejected", event_id=event_id, status=result.status.value)
    return result


def cancel_event(db: StoreSession, event_id: int) -> CancelEventStatus:
    status = db.store.cancel_event(event_id)
    if status is CancelEventStatus.OK:
        logger.info("event_cancelled", event_id=event_id)
        db.commit()
    return status


def update_event(db: StoreSession, event_id: int, changes: dict[str, str]) -> UpdateStatus:
    status = db.store.update_event(event_id, changes)
    if status is UpdateStatus.UPDATED:
        logger.info("event_updated", event_id=event_id, fields=sorted(changes))
        db.commit()
    return status


def list_events(db: StoreSession, view: str = "active", sort: str | None = None) -> list[EventView]:
    if sort == "name":
        return db.store.sorted_by_name()
    if sort == "date":
        return db.store.sorted_by_date()
    if view == "all":
        return db.store.list_all()
    return db.store.list_active()


def search_events(
    db: StoreSession,
    name: str | None = None,
    date: str | None = None,
) -> list[EventView]:
    if name is not None:
        return db.store.search_by_name(name)
    if date is not None:
        return db.store.search_by_date(date)
    return []
