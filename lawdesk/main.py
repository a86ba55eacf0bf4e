import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lawdesk.config import settings
from lawdesk.core.errors import register_exception_handlers
from lawdesk.core.logging import configure_logging
from lawdesk.database import AsyncSessionLocal
from lawdesk.portal.sweeper import TokenSweeper

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    sweeper = TokenSweeper(AsyncSessionLocal, settings.TOKEN_SWEEP_INTERVAL_SECONDS)
    if settings.ENABLE_TOKEN_SWEEP:
        sweeper.start()
    app.state.token_sweeper = sweeper
    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started ({settings.ENVIRONMENT})")
    yield
    await sweeper.stop()
    logger.info(f"{settings.PROJECT_NAME} shutting down")


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs",
        redoc_url=f"{settings.API_PREFIX}/redoc",
        lifespan=lifespan,
    )

    # Routers
    from lawdesk.routes.api import api_router

    app.include_router(api_router, prefix=settings.API_PREFIX)

    register_exception_handlers(app)

    # Set all CORS enabled origins
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Health Check
    @app.get("/health")
    def health_check():
        return {"status": "ok", "version": settings.VERSION}

    return app

app = create_app()
