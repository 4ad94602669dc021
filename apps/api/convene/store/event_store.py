"""In-process registry of events and the registration state machine.

Each ``Event`` carries its own lock. The registry lock only guards the id
mapping itself, so operations on different events never wait on each other
once the lookup is done.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager

from convene.models.event import Event, EventView, ParticipantState
from convene.services.results import (
    CancelEventStatus,
    CreateResult,
    CreateStatus,
    ParticipantStatus,
    RegistrationResult,
    RegistrationStatus,
    UpdateStatus,
    WithdrawalResult,
    WithdrawalStatus,
)


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_text(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip()) and not _has_control_chars(value)


def _has_control_chars(value: str) -> bool:
    # One record per line, so a CR or LF inside a field would split it on disk.
    return any(ord(char) < 0x20 or ord(char) == 0x7F for char in value)


def _name_key(view: EventView) -> tuple[str, int]:
    return view.name.casefold(), view.id


def _date_key(view: EventView) -> tuple[str, str, str, int]:
    parts = view.date.split("/")
    if len(parts) != 3:
        return view.date, "", "", view.id
    day, month, year = parts
    return year, month, day, view.id


UPDATABLE_FIELDS = ("name", "date", "time", "location")


class EventStore:
    def __init__(self) -> None:
        self._events: dict[int, Event] = {}
        self._registry_lock = threading.Lock()

    # ---- registry helpers ----

    def _lookup(self, event_id: int) -> Event | None:
        with self._registry_lock:
            return self._events.get(event_id)

    def _entries(self) -> list[Event]:
        with self._registry_lock:
            return list(self._events.values())

    @contextmanager
    def _locked(self, event_id: int) -> Iterator[Event | None]:
        event = self._lookup(event_id)
        if event is None:
            yield None
            return
        with event.lock:
            yield event

    def _views(self, predicate: Callable[[EventView], bool] | None = None) -> list[EventView]:
        views = []
        for event in self._entries():
            with event.lock:
                view = event.snapshot()
            if predicate is None or predicate(view):
                views.append(view)
        return views

    # ---- lifecycle ----

    def create_event(
        self,
        event_id: int,
        name: str,
        date: str,
        time: str,
        location: str,
        capacity: int,
    ) -> CreateResult:
        if not (_is_positive_int(event_id) and _is_positive_int(capacity)):
            return CreateResult(CreateStatus.INVALID)
        if not all(_is_text(value) for value in (name, date, time, location)):
            return CreateResult(CreateStatus.INVALID)

        event = Event(
            id=event_id,
            name=name,
            date=date,
            time=time,
            location=location,
            capacity=capacity,
        )
        view = event.snapshot()
        with self._registry_lock:
            if event_id in self._events:
                return CreateResult(CreateStatus.DUPLICATE_ID)
            self._events[event_id] = event
        return CreateResult(CreateStatus.CREATED, view)

    def restore(self, event: Event) -> bool:
        """Insert a fully built event, e.g. one read back from disk."""
        with self._registry_lock:
            if event.id in self._events:
                return False
            self._events[event.id] = event
        return True

    def get_event(self, event_id: int) -> EventView | None:
        with self._locked(event_id) as event:
            return event.snapshot() if event is not None else None

    def event_exists(self, event_id: int) -> bool:
        return self._lookup(event_id) is not None

    def cancel_event(self, event_id: int) -> CancelEventStatus:
        with self._locked(event_id) as event:
            if event is None:
                return CancelEventStatus.NOT_FOUND
            if event.cancelled:
                return CancelEventStatus.ALREADY_CANCELLED
            event.cancelled = True
            return CancelEventStatus.OK

    def update_event(self, event_id: int, changes: Mapping[str, str]) -> UpdateStatus:
        """Apply all field changes under one hold of the event lock, or none."""
        if not changes or set(changes) - set(UPDATABLE_FIELDS):
            return UpdateStatus.INVALID
        if not all(_is_text(value) for value in changes.values()):
            return UpdateStatus.INVALID
        with self._locked(event_id) as event:
            if event is None:
                return UpdateStatus.NOT_FOUND
            if event.cancelled:
                return UpdateStatus.CANCELLED
            for attr in UPDATABLE_FIELDS:
                if attr in changes:
                    setattr(event, attr, changes[attr])
            return UpdateStatus.UPDATED

    def update_event_name(self, event_id: int, name: str) -> UpdateStatus:
        return self.update_event(event_id, {"name": name})

    def update_event_date(self, event_id: int, date: str) -> UpdateStatus:
        return self.update_event(event_id, {"date": date})

    def update_event_time(self, event_id: int, time: str) -> UpdateStatus:
        return self.update_event(event_id, {"time": time})

    def update_event_location(self, event_id: int, location: str) -> UpdateStatus:
        return self.update_event(event_id, {"location": location})

    # ---- listing, sorting, searching ----

    def list_active(self) -> list[EventView]:
        return self._views(lambda view: not view.cancelled)

    def list_all(self) -> list[EventView]:
        return self._views()

    def sorted_by_name(self) -> list[EventView]:
        return sorted(self.list_active(), key=_name_key)

    def sorted_by_date(self) -> list[EventView]:
        return sorted(self.list_active(), key=_date_key)

    def search_by_name(self, query: str) -> list[EventView]:
        needle = query.casefold()
        return self._views(lambda view: needle in view.name.casefold())

    def search_by_date(self, date: str) -> list[EventView]:
        return self._views(lambda view: view.date == date)

    def count_active(self) -> int:
        return len(self.list_active())

    def count_total(self) -> int:
        with self._registry_lock:
            return len(self._events)

    # ---- registration engine ----

    def register(self, event_id: int, participant_id: str) -> RegistrationResult:
        with self._locked(event_id) as event:
            if event is None:
                return RegistrationResult(RegistrationStatus.NOT_FOUND)
            if event.cancelled:
                return RegistrationResult(RegistrationStatus.CANCELLED)
            if not _is_text(participant_id):
                return RegistrationResult(RegistrationStatus.INVALID)
            if event.is_member(participant_id):
                return RegistrationResult(RegistrationStatus.DUPLICATE)
            if event.add_participant(participant_id):
                return RegistrationResult(RegistrationStatus.REGISTERED)
            event.add_to_waitlist(participant_id)
            return RegistrationResult(
                RegistrationStatus.WAITLISTED,
                position=len(event.waitlist),
            )

    def cancel_registration(self, event_id: int, participant_id: str) -> WithdrawalResult:
        with self._locked(event_id) as event:
            if event is None:
                return WithdrawalResult(WithdrawalStatus.NOT_FOUND)
            if event.cancelled:
                return WithdrawalResult(WithdrawalStatus.EVENT_CANCELLED)
            if event.remove_participant(participant_id):
                # The freed seat goes to the head of the waitlist before the lock drops.
                promoted = event.promote_next()
                return WithdrawalResult(WithdrawalStatus.CANCELLED_REGISTRATION, promoted)
            if event.remove_from_waitlist(participant_id):
                return WithdrawalResult(WithdrawalStatus.CANCELLED_WAITLIST)
            return WithdrawalResult(WithdrawalStatus.NOT_REGISTERED)

    def participant_status(self, event_id: int, participant_id: str) -> ParticipantStatus | None:
        with self._locked(event_id) as event:
            if event is None:
                return None
            if event.is_registered(participant_id):
                return ParticipantStatus(ParticipantState.REGISTERED)
            position = event.waitlist_position(participant_id)
            if position is not None:
                return ParticipantStatus(ParticipantState.WAITLISTED, position)
            return ParticipantStatus(ParticipantState.UNREGISTERED)

    def get_events_for_participant(self, participant_id: str) -> list[EventView]:
        return self._views(
            lambda view: view.state_of(participant_id) is not ParticipantState.UNREGISTERED
        )
