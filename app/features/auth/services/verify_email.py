from dataclasses import dataclass
from enum import Enum
from typing import Optional

from app.features.auth.services.user_service import TenantUserService
from app.features.auth.utils.security import create_session_token, decode_email_token
from app.platform.config import Settings
from app.platform.db.session import TenantDatabases, tenant_databases
from app.platform.logger import get_logger

logger = get_logger(__name__)


class VerificationErrorCode(str, Enum):
    INVALID_TOKEN = "invalid-token"
    INVALID_TENANT = "invalid-tenant"
    DATABASE_ERROR = "database-error"
    USER_ERROR = "user-error"
    SESSION_ERROR = "session-error"
    SERVER_ERROR = "server-error"


@dataclass
class VerificationResult:
    redirect_url: str
    session_token: Optional[str] = None
    error: Optional[VerificationErrorCode] = None

    @property
    def succeeded(self) -> bool:
        return self.session_token is not None


class VerificationFailed(Exception):
    def __init__(self, code: VerificationErrorCode, redirect_url: str):
        super().__init__(code.value)
        self.code = code
        self.redirect_url = redirect_url


def error_url(base: str, code: VerificationErrorCode) -> str:
    return f"{base}/?error={code.value}"


class EmailVerificationService:
    """
    Turns a signed email link into a session for the external app.

    Every stage either advances or ends the request with a redirect to an
    error page. Up to tenant resolution the error page is on the marketing
    site; after that it is the tenant's own page on the external app.
    """

    def __init__(self, settings: Settings, databases: TenantDatabases = tenant_databases):
        self.settings = settings
        self.databases = databases

    def tenant_url(self, tenant: str) -> str:
        return f"{self.settings.EXTERNAL_APP_URL}/{tenant}/{self.settings.TENANT_LANDING_PATH}"

    def _fail_on_site(self, code: VerificationErrorCode) -> VerificationFailed:
        return VerificationFailed(code, error_url(self.settings.APP_URL, code))

    def _fail_on_tenant(self, tenant: str, code: VerificationErrorCode) -> VerificationFailed:
        return VerificationFailed(code, error_url(self.tenant_url(tenant), code))

    async def verify(self, token: Optional[str], tenant: Optional[str]) -> VerificationResult:
        try:
            return await self._verify(token, tenant)
        except VerificationFailed as e:
            return VerificationResult(redirect_url=e.redirect_url, error=e.code)
        except Exception as e:
            logger.exception(f"Verification error: {e}")
            code = VerificationErrorCode.SERVER_ERROR
            return VerificationResult(
                redirect_url=error_url(self.settings.APP_URL, code), error=code
            )

    async def _verify(self, token: Optional[str], tenant: Optional[str]) -> VerificationResult:
        if not token:
            logger.error("No token provided")
            raise self._fail_on_site(VerificationErrorCode.INVALID_TOKEN)

        try:
            decoded = decode_email_token(token, self.settings)
        except ValueError as e:
            logger.error(f"Token verification failed: {e}")
            raise self._fail_on_site(VerificationErrorCode.INVALID_TOKEN)

        email = decoded.get("email")
        if not email:
            logger.error("Token carries no email")
            raise self._fail_on_site(VerificationErrorCode.INVALID_TOKEN)

        token_tenant = decoded.get("tenant")
        if not tenant and token_tenant:
            tenant = token_tenant
            logger.info(f"Retrieved tenant from token: {tenant}")

        if not tenant:
            logger.error("No tenant provided")
            raise self._fail_on_site(VerificationErrorCode.INVALID_TENANT)

        if tenant != token_tenant:
            logger.error(f"Tenant mismatch: url_tenant={tenant} token_tenant={token_tenant}")
            raise self._fail_on_site(VerificationErrorCode.INVALID_TENANT)

        try:
            session_factory = await self.databases.connect(
                self.settings.TENANT_DATABASE_URL, tenant
            )
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            raise self._fail_on_tenant(tenant, VerificationErrorCode.DATABASE_ERROR)

        try:
            async with session_factory() as db:
                user = await TenantUserService(db).record_login(email, tenant)
        except Exception as e:
            logger.error(f"User operations failed: {e}")
            raise self._fail_on_tenant(tenant, VerificationErrorCode.USER_ERROR)

        logger.info(
            f"User login: user_id={user.id} email={user.email} "
            f"tenant_path={user.tenant_path} role={user.role} token={token[:10]}..."
        )

        try:
            session_token = create_session_token(
                email=email,
                user_id=str(user.id),
                tenant_path=user.tenant_path,
                role=user.role,
                settings=self.settings,
            )
        except Exception as e:
            logger.error(f"Session creation failed: {e}")
            raise self._fail_on_tenant(tenant, VerificationErrorCode.SESSION_ERROR)

        redirect_url = self.tenant_url(tenant)
        logger.info(f"Redirecting to: {redirect_url}")
        return VerificationResult(redirect_url=redirect_url, session_token=session_token)
