from convene.api.v1.schemas.events import (
    EventCancelOut,
    EventCreate,
    EventListOut,
    EventOut,
    EventStatsOut,
    EventUpdate,
    ParticipantEventOut,
    ParticipantEventsOut,
    ParticipantStatusOut,
    RegistrationIn,
    RegistrationOut,
    RegistrationState,
    WithdrawalOut,
    WithdrawalState,
)

__all__ = [
    "EventCreate",
    "EventUpdate",
    "EventOut",
    "EventListOut",
    "EventStatsOut",
    "EventCancelOut",
    "RegistrationIn",
    "RegistrationOut",
    "RegistrationState",
    "WithdrawalOut",
    "WithdrawalState",
    "ParticipantStatusOut",
    "ParticipantEventOut",
    "ParticipantEventsOut",
]
