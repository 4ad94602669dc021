from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query

from convene.api.errors import raise_for_code
from convene.api.v1.schemas.events import (
    EventCancelOut,
    EventCreate,
    EventListOut,
    EventOut,
    EventStatsOut,
    EventUpdate,
    ParticipantStatusOut,
    RegistrationIn,
    RegistrationOut,
    RegistrationState,
    WithdrawalOut,
    WithdrawalState,
    ensure_date,
)
from convene.db import StoreSession, get_db
from convene.services import events_service, rsvp_service
from convene.services.error_codes import ErrorCode

router = APIRouter(prefix="/events", tags=["events"])

DBSession = Annotated[StoreSession, Depends(get_db)]


def _list_out(views) -> EventListOut:
    return EventListOut(items=[EventOut.model_validate(view) for view in views], total=len(views))


@router.post("", response_model=EventOut, status_code=201)
def create_event(payload: EventCreate, db: DBSession):
    result = events_service.create_event(
        db,
        payload.id,
        payload.name,
        payload.date,
        payload.time,
        payload.location,
        payload.capacity,
    )
    raise_for_code(result.status.error_code, f"event {payload.id} could not be created")
    return EventOut.model_validate(result.event)


@router.get("", response_model=EventListOut)
def list_events(
    db: DBSession,
    view: Literal["active", "all"] = "active",
    sort: Literal["name", "date"] | None = None,
):
    return _list_out(events_service.list_events(db, view=view, sort=sort))


@router.get("/search", response_model=EventListOut)
def search_events(
    db: DBSession,
    name: Annotated[str | None, Query(min_length=1)] = None,
    date: str | None = None,
):
    if (name is None) == (date is None):
        raise_for_code(ErrorCode.INVALID_EVENT, "provide exactly one of name or date")
    if date is not None:
        try:
            date = ensure_date(date)
        except ValueError as exc:
            raise_for_code(ErrorCode.INVALID_EVENT, str(exc))
    return _list_out(events_service.search_events(db, name=name, date=date))


@router.get("/stats", response_model=EventStatsOut)
def event_stats(db: DBSession):
    return EventStatsOut(active=db.store.count_active(), total=db.store.count_total())


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: int, db: DBSession):
    view = db.store.get_event(event_id)
    if view is None:
        raise_for_code(ErrorCode.EVENT_NOT_FOUND, "event not found")
    return EventOut.model_validate(view)


@router.patch("/{event_id}", response_model=EventOut)
def update_event(event_id: int, patch: EventUpdate, db: DBSession):
    status = events_service.update_event(db, event_id, patch.model_dump(exclude_none=True))
    raise_for_code(status.error_code, f"event {event_id} could not be updated")
    return EventOut.model_validate(db.store.get_event(event_id))


@router.post("/{event_id}/cancel", response_model=EventCancelOut)
def cancel_event(event_id: int, db: DBSession):
    status = events_service.cancel_event(db, event_id)
    raise_for_code(status.error_code, f"event {event_id} could not be cancelled")
    return EventCancelOut(event_id=event_id, cancelled=True)


@router.post("/{event_id}/registrations", response_model=RegistrationOut, status_code=201)
def register(event_id: int, payload: RegistrationIn, db: DBSession):
    result = rsvp_service.register(db, event_id, payload.participant_id)
    raise_for_code(result.status.error_code, f"registration for event {event_id} rejected")
    return RegistrationOut(
        status=RegistrationState(result.status.value),
        event_id=event_id,
        participant_id=payload.participant_id,
        position=result.position,
    )


@router.get("/{event_id}/registrations/{participant_id}", response_model=ParticipantStatusOut)
def registration_status(event_id: int, participant_id: str, db: DBSession):
    status = db.store.participant_status(event_id, participant_id)
    if status is None:
        raise_for_code(ErrorCode.EVENT_NOT_FOUND, "event not found")
    return ParticipantStatusOut(
        event_id=event_id,
        participant_id=participant_id,
        state=status.state,
        position=status.position,
    )


@router.delete("/{event_id}/registrations/{participant_id}", response_model=WithdrawalOut)
def cancel_registration(event_id: int, participant_id: str, db: DBSession):
    result = rsvp_service.cancel_registration(db, event_id, participant_id)
    raise_for_code(result.status.error_code, f"no registration to cancel for event {event_id}")
    return WithdrawalOut(
        status=WithdrawalState(result.status.value),
        event_id=event_id,
        participant_id=participant_id,
        promoted=result.promoted,
    )
