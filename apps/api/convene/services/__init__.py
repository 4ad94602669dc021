from convene.services.error_codes import ErrorCode
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

__all__ = [
    "ErrorCode",
    "CreateStatus",
    "CreateResult",
    "CancelEventStatus",
    "UpdateStatus",
    "RegistrationStatus",
    "RegistrationResult",
    "WithdrawalStatus",
    "WithdrawalResult",
    "ParticipantStatus",
]
