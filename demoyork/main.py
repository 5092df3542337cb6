"""FastAPI main application entry point."""

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from demoyork.core.config import settings
from demoyork.core.middleware import setup_middleware
from demoyork.core.exceptions import DemoYorkError
from demoyork.core.security import build_session_codec
from demoyork.db.base import Base
from demoyork.db.seeds.seed_roles import seed_roles
from demoyork.db import session as db_session
from demoyork import models  # noqa: F401  registers tables on Base.metadata

from demoyork.api.users import router as users_router
from demoyork.api.categories import router as categories_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("demoyork")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting %s API", settings.APP_NAME)
    app.state.session_codec = build_session_codec(settings)

    db = db_session.SessionLocal()
    try:
        Base.metadata.create_all(bind=db.get_bind())
        seed_roles(db)
    finally:
        db.close()

    yield

    logger.info("Shutting down %s API", settings.APP_NAME)


app = FastAPI(
    title="DemoYork API",
    description="Users and categories with session-cookie auth and role levels",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Middleware
setup_middleware(app)


@app.exception_handler(DemoYorkError)
async def demoyork_exception_handler(request: Request, exc: DemoYorkError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    try:
        phrase = HTTPStatus(exc.status_code).phrase
    except ValueError:
        phrase = "Client Closed Request"
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status_code": exc.status_code,
            "status_message": phrase,
            "detail": exc.message,
        },
    )


# Register routers
app.include_router(users_router)
app.include_router(categories_router)


@app.get("/")
async def root():
    return {
        "status_code": 200,
        "status_message": "OK",
        "body_message": f"Welcome to {settings.APP_NAME} application.",
    }


@app.get("/health")
async def health():
    """Quick health check endpoint."""
    return {"status": "ok"}
