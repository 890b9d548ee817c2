from app.features.auth.models.user import MEMBER_ROLE, OWNER_ROLE, TenantUser

__all__ = ["TenantUser", "OWNER_ROLE", "MEMBER_ROLE"]
