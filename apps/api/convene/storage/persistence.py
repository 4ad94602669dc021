"""Save and rehydrate an EventStore through a RecordStorage.

A save rewrites the whole record file. A load applies the file line by line;
a bad line is reported as a ``Diagnostic`` and skipped, it never stops the
load.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

import structlog

from convene.models.event import Event
from convene.storage.base import RecordStorage
from convene.storage.records import (
    EventRecord,
    MalformedRecord,
    MembershipRecord,
    RecordKind,
    UnknownRecordKind,
    encode_event,
    parse_line,
)
from convene.store.event_store import EventStore

logger = structlog.get_logger()


@dataclass(frozen=True)
class Diagnostic:
    line_number: int
    kind: str
    reason: str


@dataclass
class LoadReport:
    ok: bool = True
    events: int = 0
    registrations: int = 0
    waitlisted: int = 0
    diagnostics: list[Diagnostic] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class SaveResult:
    ok: bool
    events: int = 0
    error: str | None = None


class PersistenceEngine:
    def __init__(self, storage: RecordStorage) -> None:
        self._storage = storage
        self._save_lock = threading.Lock()

    @property
    def storage(self) -> RecordStorage:
        return self._storage

    def save(self, store: EventStore) -> SaveResult:
        # Saves are serialized so the file always ends up with the newest snapshot.
        with self._save_lock:
            views = store.list_all()
            lines = [line for view in views for line in encode_event(view)]
            try:
                self._storage.replace_lines(lines)
            except OSError as exc:
                logger.error(
                    "store_save_failed",
                    uri=self._storage.resolve_uri(),
                    error=str(exc),
                )
                return SaveResult(ok=False, error=str(exc))

        logger.info("store_saved", uri=self._storage.resolve_uri(), events=len(views))
        return SaveResult(ok=True, events=len(views))

    def load(self, store: EventStore) -> LoadReport:
        report = LoadReport()
        uri = self._storage.resolve_uri()
        if not self._storage.exists():
            logger.info("store_load_skipped", uri=uri, reason="no data file")
            return report

        loaded: dict[int, Event] = {}
        try:
            for line_number, line in enumerate(self._storage.read_lines(), start=1):
                if not line.strip():
                    continue
                self._apply(line_number, line, store, loaded, report)
        except (OSError, UnicodeDecodeError) as exc:
            report.ok = False
            report.error = str(exc)
            logger.error("store_load_failed", uri=uri, error=str(exc), events=report.events)
            return report

        logger.info(
            "store_loaded",
            uri=uri,
            events=report.events,
            registrations=report.registrations,
            waitlisted=report.waitlisted,
            diagnostics=len(report.diagnostics),
        )
        return report

    def _apply(
        self,
        line_number: int,
        line: str,
        store: EventStore,
        loaded: dict[int, Event],
        report: LoadReport,
    ) -> None:
        try:
            record = parse_line(line)
        except UnknownRecordKind as exc:
            self._diagnose(report, line_number, "unknown_record_kind", str(exc))
            return
        except MalformedRecord as exc:
            self._diagnose(report, line_number, "malformed_record", str(exc))
            return

        if isinstance(record, EventRecord):
            self._apply_event(line_number, record, store, loaded, report)
        else:
            self._apply_membership(line_number, record, loaded, report)

    def _apply_event(
        self,
        line_number: int,
        record: EventRecord,
        store: EventStore,
        loaded: dict[int, Event],
        report: LoadReport,
    ) -> None:
        event = Event(
            id=record.id,
            name=record.name,
            date=record.date,
            time=record.time,
            location=record.location,
            capacity=record.capacity,
            cancelled=record.cancelled,
        )
        if not store.restore(event):
            self._diagnose(
                report, line_number, "duplicate_event", f"event {record.id} already loaded"
            )
            return
        loaded[record.id] = event
        report.events += 1

    def _apply_membership(
        self,
        line_number: int,
        record: MembershipRecord,
        loaded: dict[int, Event],
        report: LoadReport,
    ) -> None:
        event = loaded.get(record.event_id)
        if event is None:
            self._diagnose(
                report,
                line_number,
                "dangling_record",
                f"{record.kind.value} references unknown event {record.event_id}",
            )
            return

        with event.lock:
            if event.is_member(record.participant_id):
                reason = f"participant {record.participant_id!r} already in event {event.id}"
            elif record.kind is RecordKind.REG and not event.has_space:
                reason = f"event {event.id} is already at capacity"
            else:
                reason = None
                if record.kind is RecordKind.REG:
                    event.add_participant(record.participant_id)
                else:
                    event.add_to_waitlist(record.participant_id)

        if reason is not None:
            self._diagnose(report, line_number, "rejected_membership", reason)
        elif record.kind is RecordKind.REG:
            report.registrations += 1
        else:
            report.waitlisted += 1

    def _diagnose(self, report: LoadReport, line_number: int, kind: str, reason: str) -> None:
        report.diagnostics.append(Diagnostic(line_number, kind, reason))
        logger.warning(kind, line=line_number, reason=reason, uri=self._storage.resolve_uri())
