from app.features.auth.services.user_service import TenantUserService, initial_role
from app.features.auth.services.verify_email import (
    EmailVerificationService,
    VerificationErrorCode,
    VerificationResult,
)

__all__ = [
    "TenantUserService",
    "initial_role",
    "EmailVerificationService",
    "VerificationErrorCode",
    "VerificationResult",
]
