from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.auth.models.user import MEMBER_ROLE, OWNER_ROLE, TenantUser
from app.platform.logger import get_logger

logger = get_logger(__name__)


def initial_role(existing_users: int) -> str:
    """The first user of a tenant owns it; everyone after is a member."""
    return OWNER_ROLE if existing_users == 0 else MEMBER_ROLE


class TenantUserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> Optional[TenantUser]:
        result = await self.db.execute(select(TenantUser).where(TenantUser.email == email))
        return result.scalar_one_or_none()

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(TenantUser))
        return result.scalar_one()

    async def create(self, email: str, tenant_path: str) -> TenantUser:
        role = initial_role(await self.count())
        now = datetime.now(timezone.utc)
        user = TenantUser(
            email=email,
            tenant_path=tenant_path,
            role=role,
            created_at=now,
            last_login_at=now,
        )
        self.db.add(user)
        await self.save(user)
        logger.info(f"Created {role} {email} in tenant {tenant_path}")
        return user

    async def save(self, user: TenantUser) -> TenantUser:
        self.db.add(user)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return user

    async def record_login(self, email: str, tenant: str) -> TenantUser:
        """
        Find or create the user for a verified email and stamp the login.

        An existing user without a tenant path gets the current tenant.
        A missing user is created, with its role decided by ``initial_role``.
        """
        user = await self.find_by_email(email)

        if user and not user.tenant_path:
            user.tenant_path = tenant
            await self.save(user)
        elif not user:
            user = await self.create(email, tenant)

        user.last_login_at = datetime.now(timezone.utc)
        await self.save(user)
        return user
