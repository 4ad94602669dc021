"""Closed result types returned by store operations.

Every operation answers with one of its own statuses instead of raising.
Failure statuses expose the ``ErrorCode`` used on the wire; successful ones
return ``None`` from ``error_code``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from convene.models.event import EventView, ParticipantState
from convene.services.error_codes import ErrorCode


class CreateStatus(str, Enum):
    CREATED = "created"
    DUPLICATE_ID = "duplicate_id"
    INVALID = "invalid"

    @property
    def error_code(self) -> ErrorCode | None:
        return {
            CreateStatus.DUPLICATE_ID: ErrorCode.DUPLICATE_EVENT_ID,
            CreateStatus.INVALID: ErrorCode.INVALID_EVENT,
        }.get(self)


class CancelEventStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    ALREADY_CANCELLED = "already_cancelled"

    @property
    def error_code(self) -> ErrorCode | None:
        return {
            CancelEventStatus.NOT_FOUND: ErrorCode.EVENT_NOT_FOUND,
            CancelEventStatus.ALREADY_CANCELLED: ErrorCode.EVENT_ALREADY_CANCELLED,
        }.get(self)


class UpdateStatus(str, Enum):
    UPDATED = "updated"
    NOT_FOUND = "not_found"
    CANCELLED = "cancelled"
    INVALID = "invalid"

    @property
    def error_code(self) -> ErrorCode | None:
        return {
            UpdateStatus.NOT_FOUND: ErrorCode.EVENT_NOT_FOUND,
            UpdateStatus.CANCELLED: ErrorCode.EVENT_CANCELLED,
            UpdateStatus.INVALID: ErrorCode.INVALID_EVENT,
        }.get(self)


class RegistrationStatus(str, Enum):
    REGISTERED = "registered"
    WAITLISTED = "waitlisted"
    NOT_FOUND = "not_found"
    CANCELLED = "cancelled"
    DUPLICATE = "duplicate"
    INVALID = "invalid"

    @property
    def error_code(self) -> ErrorCode | None:
        return {
            RegistrationStatus.NOT_FOUND: ErrorCode.EVENT_NOT_FOUND,
            RegistrationStatus.CANCELLED: ErrorCode.EVENT_CANCELLED,
            RegistrationStatus.DUPLICATE: ErrorCode.ALREADY_REGISTERED,
            RegistrationStatus.INVALID: ErrorCode.INVALID_PARTICIPANT,
        }.get(self)


class WithdrawalStatus(str, Enum):
    CANCELLED_REGISTRATION = "cancelled_registration"
    CANCELLED_WAITLIST = "cancelled_waitlist"
    NOT_FOUND = "not_found"
    EVENT_CANCELLED = "event_cancelled"
    NOT_REGISTERED = "not_registered"

    @property
    def error_code(self) -> ErrorCode | None:
        return {
            WithdrawalStatus.NOT_FOUND: ErrorCode.EVENT_NOT_FOUND,
            WithdrawalStatus.EVENT_CANCELLED: ErrorCode.EVENT_CANCELLED,
            WithdrawalStatus.NOT_REGISTERED: ErrorCode.NOT_REGISTERED,
        }.get(self)


@dataclass(frozen=True)
class CreateResult:
    status: CreateStatus
    event: EventView | None = None

    @property
    def ok(self) -> bool:
        return self.status is CreateStatus.CREATED


@dataclass(frozen=True)
class RegistrationResult:
    status: RegistrationStatus
    # 1-based, set only for WAITLISTED
    position: int | None = None

    @property
    def ok(self) -> bool:
        return self.status in {RegistrationStatus.REGISTERED, RegistrationStatus.WAITLISTED}


@dataclass(frozen=True)
class WithdrawalResult:
    status: WithdrawalStatus
    promoted: str | None = None

    @property
    def ok(self) -> bool:
        return self.status in {
            WithdrawalStatus.CANCELLED_REGISTRATION,
            WithdrawalStatus.CANCELLED_WAITLIST,
        }


@dataclass(frozen=True)
class ParticipantStatus:
    state: ParticipantState
    position: int | None = None
