from enum import Enum


class ErrorCode(str, Enum):
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    DUPLICATE_EVENT_ID = "DUPLICATE_EVENT_ID"
    INVALID_EVENT = "INVALID_EVENT"
    EVENT_CANCELLED = "EVENT_CANCELLED"
    EVENT_ALREADY_CANCELLED = "EVENT_ALREADY_CANCELLED"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    NOT_REGISTERED = "NOT_REGISTERED"
    INVALID_PARTICIPANT = "INVALID_PARTICIPANT"
