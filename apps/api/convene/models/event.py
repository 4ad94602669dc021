from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from enum import Enum


class ParticipantState(str, Enum):
    UNREGISTERED = "UNREGISTERED"
    REGISTERED = "REGISTERED"
    WAITLISTED = "WAITLISTED"


@dataclass(frozen=True)
class EventView:
    """Read-only copy of an event taken under its lock."""

    id: int
    name: str
    date: str
    time: str
    location: str
    capacity: int
    registered: tuple[str, ...]
    waitlist: tuple[str, ...]
    cancelled: bool

    @property
    def registered_count(self) -> int:
        return len(self.registered)

    @property
    def waitlist_count(self) -> int:
        return len(self.waitlist)

    @property
    def available_seats(self) -> int:
        return self.capacity - len(self.registered)

    @property
    def has_space(self) -> bool:
        return len(self.registered) < self.capacity

    def state_of(self, participant_id: str) -> ParticipantState:
        if participant_id in self.registered:
            return ParticipantState.REGISTERED
        if participant_id in self.waitlist:
            return ParticipantState.WAITLISTED
        return ParticipantState.UNREGISTERED


@dataclass(eq=False)
class Event:
    """A single event with bounded capacity and a FIFO waitlist.

    The entity itself does not lock; EventStore holds ``lock`` around every
    read and write of the mutable fields.
    """

    id: int
    name: str
    date: str
    time: str
    location: str
    capacity: int
    cancelled: bool = False
    registered: list[str] = field(default_factory=list)
    waitlist: deque[str] = field(default_factory=deque)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def has_space(self) -> bool:
        return len(self.registered) < self.capacity

    def is_registered(self, participant_id: str) -> bool:
        return participant_id in self.registered

    def is_waitlisted(self, participant_id: str) -> bool:
        return participant_id in self.waitlist

    def is_member(self, participant_id: str) -> bool:
        return self.is_registered(participant_id) or self.is_waitlisted(participant_id)

    def add_participant(self, participant_id: str) -> bool:
        if self.is_member(participant_id) or not self.has_space:
            return False
        self.registered.append(participant_id)
        return True

    def add_to_waitlist(self, participant_id: str) -> bool:
        if self.is_member(participant_id):
            return False
        self.waitlist.append(participant_id)
        return True

    def remove_participant(self, participant_id: str) -> bool:
        try:
            self.registered.remove(participant_id)
        except ValueError:
            return False
        return True

    def remove_from_waitlist(self, participant_id: str) -> bool:
        try:
            self.waitlist.remove(participant_id)
        except ValueError:
            return False
        return True

    def promote_next(self) -> str | None:
        """Move the head of the waitlist into the registered list."""
        if not self.waitlist or not self.has_space:
            return None
        promoted = self.waitlist.popleft()
        self.registered.append(promoted)
        return promoted

    def waitlist_position(self, participant_id: str) -> int | None:
        for position, waiting in enumerate(self.waitlist, start=1):
            if waiting == participant_id:
                return position
        return None

    def snapshot(self) -> EventView:
        return EventView(
            id=self.id,
            name=self.name,
            date=self.date,
            time=self.time,
            location=self.location,
            capacity=self.capacity,
            registered=tuple(self.registered),
            waitlist=tuple(self.waitlist),
            cancelled=self.cancelled,
        )
