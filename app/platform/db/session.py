import asyncio
import re

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from app.platform.db.base import Base
from app.platform.logger import get_logger

logger = get_logger(__name__)

TENANT_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class TenantDatabases:
    """
    One async engine per tenant database, created on first use and reused.

    The URL template holds a ``{tenant}`` placeholder, so each tenant lives in
    its own database (or SQLite file). Connection pooling is left to
    SQLAlchemy.
    """

    def __init__(self):
        self._engines: dict[str, AsyncEngine] = {}
        self._factories: dict[str, async_sessionmaker] = {}
        # Keyed by database URL; tenants never wait on each other
        self._locks: dict[str, asyncio.Lock] = {}

    @staticmethod
    def tenant_url(url_template: str, tenant: str) -> str:
        if not TENANT_PATTERN.match(tenant):
            raise ValueError(f"Invalid tenant identifier: {tenant!r}")
        return url_template.replace("{tenant}", tenant)

    async def connect(self, url_template: str, tenant: str) -> async_sessionmaker:
        url = self.tenant_url(url_template, tenant)

        factory = self._factories.get(url)
        if factory is not None:
            return factory

        async with self._locks.setdefault(url, asyncio.Lock()):
            factory = self._factories.get(url)
            if factory is not None:
                return factory

            engine = _create_engine(url)
            # Importing registers the tenant tables on Base.metadata
            from app.features.auth.models.user import TenantUser  # noqa: F401

            try:
                async with engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
            except Exception:
                await engine.dispose()
                raise

            factory = async_sessionmaker(
                engine, expire_on_commit=False, autoflush=False, autocommit=False
            )
            self._engines[url] = engine
            self._factories[url] = factory
            logger.info(f"Connected tenant database for {tenant}")
            return factory

    async def dispose_all(self) -> None:
        for engine in self._engines.values():
            await engine.dispose()
        self._engines.clear()
        self._factories.clear()
        self._locks.clear()


def _create_engine(url: str) -> AsyncEngine:
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=False, future=True)
    return create_async_engine(
        url,
        echo=False,
        future=True,
        pool_pre_ping=True,
        pool_recycle=1800,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
    )


tenant_databases = TenantDatabases()
