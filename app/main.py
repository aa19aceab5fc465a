import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _seed_defaults() -> None:
    """Provision the default role, department and company."""
    from app.database import SessionLocal
    from app.services.seed_service import seed_defaults

    db = SessionLocal()
    try:
        seed_defaults(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    from app import models  # noqa: F401  registers every table on Base.metadata
    from app.database import Base, engine
    from app.utils.security import get_jwt_secret

    # Fails here, not on the first login, when production has no secret
    get_jwt_secret()

    Base.metadata.create_all(bind=engine)

    if settings.SEED_ON_STARTUP:
        _seed_defaults()
    else:
        logger.info("SEED_ON_STARTUP disabled; skipping default records.")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

from app.middleware.auth_gate import AuthGateMiddleware  # noqa: E402
from app.middleware.error_guard import ErrorGuardMiddleware  # noqa: E402

# Added first so it sits innermost; its 500s still get CORS headers
app.add_middleware(ErrorGuardMiddleware)
app.add_middleware(AuthGateMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

from app.error_handlers import register_exception_handlers  # noqa: E402

register_exception_handlers(app)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "app": settings.APP_NAME}


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

from app.routers import auth  # noqa: E402

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])

# Master data: departments, program categories/types, users, roles
from app.routers import master_data  # noqa: E402

app.include_router(
    master_data.router,
    prefix="/api/master",
    tags=["Master Data"],
)

# Stakeholders and their categories
from app.routers import stakeholders  # noqa: E402

app.include_router(
    stakeholders.router,
    prefix="/api/stakeholders",
    tags=["Stakeholders"],
)

# Programs, sub-programs, activities and budgets
from app.routers import activities, budgets, programs, sub_programs  # noqa: E402

app.include_router(programs.router, prefix="/api/programs", tags=["Programs"])
app.include_router(sub_programs.router, prefix="/api/sub-programs", tags=["Sub Programs"])
app.include_router(activities.router, prefix="/api/activities", tags=["Activities"])
app.include_router(budgets.router, prefix="/api/budgets", tags=["Budgets"])

# Roles and permissions
from app.routers import management  # noqa: E402

app.include_router(
    management.router,
    prefix="/api/management",
    tags=["Management"],
)

# Company settings
from app.routers import settings as settings_router  # noqa: E402

app.include_router(
    settings_router.router,
    prefix="/api/settings",
    tags=["Settings"],
)

# Profile of the signed-in user
from app.routers import profile  # noqa: E402

app.include_router(
    profile.router,
    prefix="/api/profile",
    tags=["Profile"],
)

# Server-rendered pages guarded by AuthGateMiddleware
from app.routers import pages  # noqa: E402

app.include_router(pages.router)
