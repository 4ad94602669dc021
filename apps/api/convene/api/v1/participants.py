from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from convene.api.v1.schemas.events import EventOut, ParticipantEventOut, ParticipantEventsOut
from convene.db import StoreSession, get_db
from convene.models.event import ParticipantState

router = APIRouter(prefix="/participants", tags=["participants"])

DBSession = Annotated[StoreSession, Depends(get_db)]


@router.get("/{participant_id}/events", response_model=ParticipantEventsOut)
def participant_events(participant_id: str, db: DBSession):
    items: list[ParticipantEventOut] = []
    registered = 0
    waitlisted = 0
    for view in db.store.get_events_for_participant(participant_id):
        state = view.state_of(participant_id)
        position = None
        if state is ParticipantState.REGISTERED:
            registered += 1
        else:
            waitlisted += 1
            position = view.waitlist.index(participant_id) + 1
        items.append(
            ParticipantEventOut(
                event=EventOut.model_validate(view),
                state=state,
                position=position,
            )
        )

    return ParticipantEventsOut(
        participant_id=participant_id,
        items=items,
        registered=registered,
        waitlisted=waitlisted,
    )
