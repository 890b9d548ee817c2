import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api_routers.v1 import api_router
from app.features.health.routes.health import router as health_router
from app.platform.config import get_settings
from app.platform.db.session import tenant_databases
from app.platform.exceptions import add_exception_handlers

# Configure logging to show INFO level messages
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await tenant_databases.dispose_all()


def create_app() -> FastAPI:
    settings = get_settings()
    # Production never serves the interactive docs or debug tracebacks
    production = settings.ENVIRONMENT == "production"
    docs_url = None if production else "/docs"

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Waitlist capture and email login hand-off for the LivePlus site",
        version=API_VERSION,
        debug=settings.DEBUG and not production,
        docs_url=docs_url,
        redoc_url=None if production else "/redoc",
        openapi_url=None if production else "/openapi.json",
        lifespan=lifespan,
    )

    @app.get("/", tags=["Info"])
    def root():
        return {
            "app_name": f"{settings.APP_NAME} API",
            "version": API_VERSION,
            "docs_url": docs_url,
            "api_base": "/api",
        }

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.APP_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
