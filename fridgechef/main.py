"""FastAPI application entrypoint."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fridgechef.config import settings
from fridgechef.database import async_session, init_db
from fridgechef.errors import ConfigurationError, FridgeChefError
from fridgechef.routers import ai_config, users
from fridgechef.services.credential_service import migrate_all_legacy_credentials
from fridgechef.utils.crypto import MasterSecret

# ── Logging setup ────────────────────────────────────────────────────
_log_level = os.environ.get("FRIDGECHEF_LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong on our side. Please try again later."


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup — refuse to run without a master secret rather than store keys unencrypted
    if not MasterSecret.from_settings().is_set:
        raise ConfigurationError("FRIDGECHEF_ENCRYPTION_SECRET is not set")

    await init_db()

    if settings.migrate_legacy_on_startup:
        async with async_session() as session:
            count = await migrate_all_legacy_credentials(session)
        logger.info("Legacy key migration finished: %d user(s) updated", count)

    yield


app = FastAPI(
    title="FridgeChef",
    description="Recipe suggestions from what's in your fridge",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FridgeChefError)
async def fridgechef_error_handler(request: Request, exc: FridgeChefError):
    if exc.user_facing:
        logger.info("%s %s -> %s", request.method, request.url.path, exc.code)
        content = {"detail": exc.message, "code": exc.code}
        if exc.details:
            content["data"] = exc.details
        return JSONResponse(status_code=exc.status_code, content=content)

    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": GENERIC_ERROR_MESSAGE, "code": "INTERNAL_ERROR"},
    )


# Mount routers
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(ai_config.router, prefix="/api/profile", tags=["profile"])


@app.get("/health")
async def health():
    return {"status": "ok", "service": "fridgechef"}
