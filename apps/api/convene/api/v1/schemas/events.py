from __future__ import annotations

import calendar
import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from convene.models.event import ParticipantState

DATE_RE = re.compile(r"(\d{2})/(\d{2})/(\d{4})")
TIME_RE = re.compile(r"(\d{2}):(\d{2})")
CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def _ensure_text(value: str | None) -> str | None:
    if value is None:
        return value
    stripped = value.strip()
    if not stripped:
        raise ValueError("must not be blank")
    if CONTROL_CHARS_RE.search(stripped):
        raise ValueError("must not contain line breaks or control characters")
    return stripped


def ensure_date(value: str | None) -> str | None:
    if value is None:
        return value
    match = DATE_RE.fullmatch(value.strip())
    if not match:
        raise ValueError("date must be dd/mm/yyyy")
    day, month, year = (int(part) for part in match.groups())
    if year < 1 or not 1 <= month <= 12:
        raise ValueError("date is not a valid calendar date")
    if not 1 <= day <= calendar.monthrange(year, month)[1]:
        raise ValueError("date is not a valid calendar date")
    return match.group(0)


def _ensure_time(value: str | None) -> str | None:
    if value is None:
        return value
    match = TIME_RE.fullmatch(value.strip())
    if not match:
        raise ValueError("time must be HH:mm")
    hours, minutes = (int(part) for part in match.groups())
    if hours > 23 or minutes > 59:
        raise ValueError("time is out of range")
    return match.group(0)


class SchemaBase(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore")


class EventFieldsMixin(BaseModel):
    @field_validator("name", "location", mode="after", check_fields=False)
    @classmethod
    def _validate_text(cls, value: str | None) -> str | None:
        return _ensure_text(value)

    @field_validator("date", mode="after", check_fields=False)
    @classmethod
    def _validate_date(cls, value: str | None) -> str | None:
        return ensure_date(value)

    @field_validator("time", mode="after", check_fields=False)
    @classmethod
    def _validate_time(cls, value: str | None) -> str | None:
        return _ensure_time(value)


class EventCreate(EventFieldsMixin, SchemaBase):
    id: int = Field(ge=1)
    name: str
    date: str = Field(description="dd/mm/yyyy")
    time: str = Field(description="HH:mm")
    location: str
    capacity: int = Field(ge=1)


class EventUpdate(EventFieldsMixin, SchemaBase):
    name: str | None = None
    date: str | None = None
    time: str | None = None
    location: str | None = None

    @model_validator(mode="after")
    def _require_change(self):
        if not self.model_dump(exclude_none=True):
            raise ValueError("at least one field must be provided")
        return self


class EventOut(SchemaBase):
    id: int
    name: str
    date: str
    time: str
    location: str
    capacity: int
    registered: list[str]
    waitlist: list[str]
    registered_count: int
    waitlist_count: int
    available_seats: int
    cancelled: bool


class EventListOut(SchemaBase):
    items: list[EventOut]
    total: int = Field(ge=0)


class EventStatsOut(SchemaBase):
    active: int = Field(ge=0)
    total: int = Field(ge=0)


class EventCancelOut(SchemaBase):
    event_id: int
    cancelled: bool


class RegistrationIn(SchemaBase):
    participant_id: str

    @field_validator("participant_id", mode="after")
    @classmethod
    def _validate_participant(cls, value: str) -> str:
        return _ensure_text(value)


class RegistrationState(str, Enum):
    REGISTERED = "registered"
    WAITLISTED = "waitlisted"


class RegistrationOut(SchemaBase):
    status: RegistrationState
    event_id: int
    participant_id: str
    position: int | None = None


class WithdrawalState(str, Enum):
    CANCELLED_REGISTRATION = "cancelled_registration"
    CANCELLED_WAITLIST = "cancelled_waitlist"


class WithdrawalOut(SchemaBase):
    status: WithdrawalState
    event_id: int
    participant_id: str
    promoted: str | None = None


class ParticipantStatusOut(SchemaBase):
    event_id: int
    participant_id: str
    state: ParticipantState
    position: int | None = None


class ParticipantEventOut(SchemaBase):
    event: EventOut
    state: ParticipantState
    position: int | None = None


class ParticipantEventsOut(SchemaBase):
    participant_id: str
    items: list[ParticipantEventOut]
    registered: int = Field(ge=0)
    waitlisted: int = Field(ge=0)
