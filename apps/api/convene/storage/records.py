"""Line-oriented record grammar for the event data file.

::

    EVENT|id|name|date|time|location|capacity|cancelled
    REG|eventId|participantId
    WAIT|eventId|participantId

Fields are separated by ``|``; a literal ``|`` inside a field is written as
``\\|``. Any other backslash is kept as-is.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from convene.models.event import EventView

SEPARATOR = "|"
ESCAPED_SEPARATOR = "\\|"
INTEGER_RE = re.compile(r"-?[0-9]+")


class RecordKind(str, Enum):
    EVENT = "EVENT"
    REG = "REG"
    WAIT = "WAIT"


FIELD_COUNTS = {
    RecordKind.EVENT: 8,
    RecordKind.REG: 3,
    RecordKind.WAIT: 3,
}


class MalformedRecord(ValueError):
    pass


class UnknownRecordKind(ValueError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"unknown record kind {kind!r}")
        self.kind = kind


@dataclass(frozen=True)
class EventRecord:
    id: int
    name: str
    date: str
    time: str
    location: str
    capacity: int
    cancelled: bool


@dataclass(frozen=True)
class MembershipRecord:
    kind: RecordKind
    event_id: int
    participant_id: str


def escape_field(value: str) -> str:
    return value.replace(SEPARATOR, ESCAPED_SEPARATOR)


def split_fields(line: str) -> list[str]:
    """Split on unescaped separators, unescaping ``\\|`` in each field."""
    fields: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\" and line.startswith(SEPARATOR, i + 1):
            current.append(SEPARATOR)
            i += 2
            continue
        if char == SEPARATOR:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1
    fields.append("".join(current))
    return fields


def join_fields(*fields: str) -> str:
    return SEPARATOR.join(escape_field(field) for field in fields)


def encode_event(view: EventView) -> list[str]:
    """Encode one event as its EVENT line followed by REG then WAIT lines."""
    lines = [
        join_fields(
            RecordKind.EVENT.value,
            str(view.id),
            view.name,
            view.date,
            view.time,
            view.location,
            str(view.capacity),
            "true" if view.cancelled else "false",
        )
    ]
    lines.extend(
        join_fields(RecordKind.REG.value, str(view.id), participant)
        for participant in view.registered
    )
    lines.extend(
        join_fields(RecordKind.WAIT.value, str(view.id), participant)
        for participant in view.waitlist
    )
    return lines


def _parse_int(raw: str, label: str) -> int:
    if not INTEGER_RE.fullmatch(raw):
        raise MalformedRecord(f"invalid {label} {raw!r}")
    return int(raw)


def _parse_bool(raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise MalformedRecord(f"invalid cancelled flag {raw!r}")


def parse_line(line: str) -> EventRecord | MembershipRecord:
    fields = split_fields(line)
    try:
        kind = RecordKind(fields[0])
    except ValueError:
        raise UnknownRecordKind(fields[0]) from None

    expected = FIELD_COUNTS[kind]
    if len(fields) != expected:
        raise MalformedRecord(
            f"{kind.value} record has {len(fields)} fields, expected {expected}"
        )

    if kind is RecordKind.EVENT:
        _, raw_id, name, date, time, location, raw_capacity, raw_cancelled = fields
        event_id = _parse_int(raw_id, "event id")
        capacity = _parse_int(raw_capacity, "capacity")
        if event_id <= 0 or capacity <= 0:
            raise MalformedRecord("event id and capacity must be positive")
        return EventRecord(
            id=event_id,
            name=name,
            date=date,
            time=time,
            location=location,
            capacity=capacity,
            cancelled=_parse_bool(raw_cancelled),
        )

    _, raw_id, participant_id = fields
    if not participant_id:
        raise MalformedRecord("empty participant id")
    return MembershipRecord(
        kind=kind,
        event_id=_parse_int(raw_id, "event id"),
        participant_id=participant_id,
    )
