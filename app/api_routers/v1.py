from fastapi import APIRouter

from app.features.auth.routes.verify_email import router as verify_email_router
from app.features.health.routes.health import router as health_router
from app.features.waitlist.routes.waitlist import router as waitlist_router

api_router = APIRouter()

api_router.include_router(waitlist_router)
api_router.include_router(verify_email_router)
api_router.include_router(health_router)
