from fastapi import APIRouter

from convene.api.v1.events import router as events_router
from convene.api.v1.participants import router as participants_router

router = APIRouter()
router.include_router(events_router)
router.include_router(participants_router)
