from __future__ import annotations

import structlog

from convene.db import StoreSession
from convene.services.results import (
    RegistrationResult,
    RegistrationStatus,
    WithdrawalResult,
)

logger = structlog.get_logger()


def register(db: StoreSession, event_id: int, participant_id: str) -> RegistrationResult:
    result = db.store.register(event_id, participant_id)
    if result.status is RegistrationStatus.REGISTERED:
        logger.info("participant_registered", event_id=event_id, participant_id=participant_id)
    elif result.status is RegistrationStatus.WAITLISTED:
        logger.info(
            "participant_waitlisted",
            event_id=event_id,
            participant_id=participant_id,
            position=result.position,
        )
    else:
        logger.info(
            "registration_rejected",
            event_id=event_id,
            participant_id=participant_id,
            status=result.status.value,
        )

    if result.ok:
        db.commit()
    return result


def cancel_registration(db: StoreSession, event_id: int, participant_id: str) -> WithdrawalResult:
    result = db.store.cancel_registration(event_id, participant_id)
    if not result.ok:
        logger.info(
            "withdrawal_rejected",
            event_id=event_id,
            participant_id=participant_id,
            status=result.status.value,
        )
        return result

    logger.info(
        "registration_cancelled",
        event_id=event_id,
        participant_id=participant_id,
        status=result.status.value,
    )
    if result.promoted is not None:
        logger.info("participant_promoted", event_id=event_id, participant_id=result.promoted)
    db.commit()
    return result
