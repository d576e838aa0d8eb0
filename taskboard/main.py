import os
import sys
import logging
import logging.config
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from contextlib import asynccontextmanager

from taskboard.core.config import ENV, ALLOWED_ORIGINS, DEV_ORIGINS
from taskboard.core.errors import AuthenticationError, TaskBoardError
from taskboard.core.security import get_current_user
from taskboard.db.base import Base
from taskboard.db import models  # noqa: F401  (registers tables on Base.metadata)
from taskboard.db.session import engine, get_db
from taskboard.api.routes import auth, cards, system
from taskboard.api.routes.cards import CARDS_PREFIX

# Load logging config if present
if os.path.exists("logging.conf"):
    logging.config.fileConfig("logging.conf", disable_existing_loggers=False)
else:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
logger = logging.getLogger("root")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup logic
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")

    yield  # App runs here

    await engine.dispose()
    logger.info("Shutting down...")


# Create FastAPI app with lifespan
app = FastAPI(
    title="Task Board API",
    version="1.0",
    lifespan=lifespan,
)


# Registered before CORS so CORS stays the outermost layer
@app.middleware("http")
async def require_bearer_for_cards(request: Request, call_next):
    """Reject unauthenticated card requests before the body is even read."""
    path = request.url.path
    if request.method != "OPTIONS" and (path == CARDS_PREFIX or path.startswith(CARDS_PREFIX + "/")):
        try:
            request.state.user = get_current_user(request)
        except AuthenticationError as e:
            return JSONResponse(content={"message": e.message}, status_code=e.status_code)
    return await call_next(request)


if ENV == "development":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=DEV_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("CORS allowed for development environment")
else:
    logger.info("Running in production environment - CORS restricted")
    if ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )


@app.exception_handler(TaskBoardError)
async def taskboard_error_handler(request: Request, exc: TaskBoardError):
    return JSONResponse(content={"message": exc.message}, status_code=exc.status_code)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Unhandled database error on {request.url.path}", exc_info=exc)
    return JSONResponse(content={"message": str(exc)}, status_code=500)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse(
        content={"message": "; ".join(parts) or "Invalid request"},
        status_code=400,
    )


# API routes
app.include_router(auth.router)
app.include_router(cards.router)
app.include_router(system.router)


@app.api_route("/api/health", methods=["GET", "HEAD"])
async def health(db: AsyncSession = Depends(get_db)):
    status = {
        "api": "ok",
        "database": None,
    }

    http_status = 200

    # --- Database check ---
    try:
        await db.execute(text("SELECT 1"))
        status["database"] = "connected"
    except Exception as e:
        status["database"] = f"error: {e}"
        http_status = 503

    return JSONResponse(content=status, status_code=http_status)
