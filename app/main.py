"""Onboarding Portal Web Application."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from app.core.config import settings
from app.core.database import create_db_and_tables
from app.routes import (
    admin_analytics,
    admin_content,
    admin_templates,
    admin_users,
    auth,
    checklist,
    directory,
    notifications,
    public,
    search,
)
from app.routes import settings as settings_routes

# Configure logging
log_dir = Path(settings.log_dir).expanduser()
log_dir.mkdir(parents=True, exist_ok=True)
log_file = log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    logger.info("Starting Onboarding Portal")
    create_db_and_tables()
    yield
    logger.info("Onboarding Portal shut down")


app = FastAPI(
    title=settings.app_name,
    description="Employee onboarding portal with role-based checklists",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url=None,
    lifespan=lifespan,
)

# Configure CORS for external access
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(checklist.router)
app.include_router(directory.router)
app.include_router(settings_routes.router)
app.include_router(notifications.router)
app.include_router(search.router)
app.include_router(public.router)
app.include_router(admin_users.router)
app.include_router(admin_templates.router)
app.include_router(admin_content.router)
app.include_router(admin_analytics.router)


@app.get("/")
async def root(request: Request):
    """Redirect root to the personal checklist."""
    rp = request.scope.get("root_path", "")
    return RedirectResponse(f"{rp}/app/checklist")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}
