from fastapi import APIRouter, Depends, status
from starlette.concurrency import run_in_threadpool

from app.features.waitlist.schemas.waitlist import WaitlistIn, WaitlistOut
from app.features.waitlist.services.waitlist import LeadSheetService
from app.platform.config import Settings, get_settings
from app.platform.exceptions import AppError, InternalError
from app.platform.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Waitlist"])


@router.post("/submit-waitlist", response_model=WaitlistOut, status_code=status.HTTP_200_OK)
async def submit_waitlist(waitlist_in: WaitlistIn, settings: Settings = Depends(get_settings)):
    # gspread is blocking, keep it off the event loop
    try:
        await run_in_threadpool(LeadSheetService(settings).submit, waitlist_in)
    except AppError:
        raise
    except Exception as e:
        logger.exception(f"Lead submission failed: {e}")
        raise InternalError.from_exception(e) from e

    return WaitlistOut()
