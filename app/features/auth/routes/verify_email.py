from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse

from app.features.auth.services.verify_email import EmailVerificationService
from app.platform.config import Settings, get_settings

router = APIRouter(tags=["Authentication"])


@router.get("/verify-email")
@router.get("/auth/verify", include_in_schema=False)
async def verify_email(
    token: Optional[str] = Query(default=None, description="Signed email verification token"),
    tenant: Optional[str] = Query(default=None, description="Tenant path segment"),
    settings: Settings = Depends(get_settings),
):
    """
    Verify an emailed login link and hand the user over to the external app.

    Always answers with a redirect. On success the response also sets the
    session cookie, shared across the parent domain.
    """
    result = await EmailVerificationService(settings).verify(token, tenant)

    response = RedirectResponse(url=result.redirect_url)
    if result.succeeded:
        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=result.session_token,
            max_age=settings.session_max_age,
            path="/",
            domain=settings.SESSION_COOKIE_DOMAIN,
            secure=True,
            httponly=True,
            samesite="none",
        )
    return response
