from sqlalchemy import Column, DateTime, String

from app.platform.db.base import BaseModel

OWNER_ROLE = "owner"
MEMBER_ROLE = "member"


class TenantUser(BaseModel):
    """A user inside one tenant's database."""

    __tablename__ = "users"
    email = Column(String(255), unique=True, nullable=False, index=True)
    tenant_path = Column(String(100), nullable=True)
    role = Column(String(20), nullable=False, default=MEMBER_ROLE)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<TenantUser(id={self.id}, email={self.email}, tenant_path={self.tenant_path})>"
