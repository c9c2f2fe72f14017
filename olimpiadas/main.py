# olimpiadas/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI
from starlette.types import Receive, Scope, Send

from olimpiadas.core.config import get_settings
from olimpiadas.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from olimpiadas.models import user as _user_models  # noqa: F401
from olimpiadas.models import event as _event_models  # noqa: F401
from olimpiadas.models import profile as _profile_models  # noqa: F401
from olimpiadas.models import registration as _registration_models  # noqa: F401
from olimpiadas.models import payment as _payment_models  # noqa: F401

# Routers
from olimpiadas.routers.auth import router as auth_router
from olimpiadas.routers.users import router as users_router
from olimpiadas.routers.events import router as events_router
from olimpiadas.routers.registrations import router as registrations_router
from olimpiadas.routers.payments import router as payments_router
from olimpiadas.routers.admin_users import router as admin_users_router
from olimpiadas.routers.functions import router as functions_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup; fail fast if the database is unreachable."""
    logger.info("Startup: creating tables for %s", settings.PROJECT_NAME)
    try:
        create_db_and_tables()
    except Exception:
        logger.exception("Startup: database unavailable")
        raise
    logger.info("Startup: database ready")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


class ApiCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that leaves the /functions endpoints alone."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].startswith(
            functions_router.prefix + "/"
        ):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


# --- CORS configuration ---
# Resource API: only the known frontends. The /functions endpoints answer
# any origin with their own "*" headers, preflight included.
app.add_middleware(
    ApiCORSMiddleware,
    allow_origins=settings.cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(auth_router, prefix=settings.API_V1_STR)
app.include_router(users_router, prefix=settings.API_V1_STR)
app.include_router(events_router, prefix=settings.API_V1_STR)
app.include_router(registrations_router, prefix=settings.API_V1_STR)
app.include_router(payments_router, prefix=settings.API_V1_STR)
app.include_router(admin_users_router, prefix=settings.API_V1_STR)

app.include_router(functions_router)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "olimpiadas-backend"}
