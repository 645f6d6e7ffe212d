import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import AUTO_CREATE_SCHEMA, CORS_ORIGINS, ENV
from app.core.database import Base, engine
from app.core.errors import register_error_handlers
from app.core.logging_setup import configure_logging
from app.core.startup_checks import ensure_migrations_applied, validate_database_environment
from app.middleware.observability import ObservabilityMiddleware
from app.middleware.user_session import UserSessionMiddleware
import app.models  # garante que os models são importados antes do create_all

from app.routers.admin import router as admin_router
from app.routers.assets import router as assets_router
from app.routers.auth import router as auth_router
from app.routers.companies import router as companies_router
from app.routers.contracts import router as contracts_router
from app.routers.dashboard import router as dashboard_router
from app.routers.internal_metrics import router as internal_metrics_router
from app.routers.licenses import router as licenses_router
from app.routers.maintenance import router as maintenance_router
from app.routers.notifications import router as notifications_router
from app.routers.technicians import router as technicians_router

configure_logging()

logger = logging.getLogger(__name__)
STARTUP_PREFIX = "[STARTUP]"
REPO_ROOT = Path(__file__).resolve().parents[1]
ALEMBIC_CONFIG_PATH = Path(
    os.getenv("ALEMBIC_CONFIG", str(REPO_ROOT / "alembic.ini"))
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    yield


app = FastAPI(
    title="IT Asset Management API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(UserSessionMiddleware)
app.add_middleware(ObservabilityMiddleware)
register_error_handlers(app)


def _startup_tasks() -> None:
    try:
        validate_database_environment()
        if AUTO_CREATE_SCHEMA:
            # Somente dev/test. Em produção, use migrations.
            Base.metadata.create_all(bind=engine)
        ensure_migrations_applied(engine=engine, alembic_config_path=ALEMBIC_CONFIG_PATH)
        logger.info("%s ready env=%s", STARTUP_PREFIX, ENV)
    except Exception:
        logger.exception("%s ERROR startup failed", STARTUP_PREFIX)
        raise


# Routers
app.include_router(auth_router)
app.include_router(companies_router)
app.include_router(dashboard_router)
app.include_router(assets_router)
app.include_router(contracts_router)
app.include_router(licenses_router)
app.include_router(maintenance_router)
app.include_router(technicians_router)
app.include_router(notifications_router)
app.include_router(admin_router)
app.include_router(internal_metrics_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
