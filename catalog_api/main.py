from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_api.api.error_handlers import register_error_handlers
from catalog_api.api.v1.routes import router as v1_router
from catalog_api.core.config import settings
from catalog_api.core.db import Base, get_engine
from catalog_api.core.logging import configure_logging, get_logger
from catalog_api.middlewares.request_id import REQUEST_ID_HEADER, RequestIdMiddleware

configure_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.db_auto_create:
        from catalog_api import models  # noqa: F401

        Base.metadata.create_all(bind=get_engine())
        logger.info("Database tables ensured")

    logger.info(
        "%s %s started (env=%s, auth=%s)",
        settings.app_name,
        settings.app_version,
        settings.environment,
        "on" if settings.auth_enabled else "off",
    )
    yield


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept", REQUEST_ID_HEADER],
    expose_headers=[REQUEST_ID_HEADER],
)

register_error_handlers(app)


@app.get("/health")
def health():
    return {
        "status": "ok",
        "service": settings.app_name,
        "env": settings.environment,
        "version": settings.app_version,
    }


app.include_router(v1_router)
