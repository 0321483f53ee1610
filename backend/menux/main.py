"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from menux.config import settings
from menux.database import Base, engine
from menux.errors import register_exception_handlers

# Import routers
from menux.routers import auth, admin_requests, user_roles, menu_items

# Import all models so Base.metadata knows about them
from menux.models.user import User                  # noqa: F401
from menux.models.admin_request import AdminRequest  # noqa: F401
from menux.models.user_role import UserRole          # noqa: F401
from menux.models.role_mutation import RoleMutation  # noqa: F401
from menux.models.menu_item import MenuItem          # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="MenuX",
    description="Restaurant menu publishing — admin access control and catalog API",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Register routers
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(admin_requests.router, prefix="/api/admin-requests", tags=["AdminRequests"])
app.include_router(user_roles.router, prefix="/api/user-roles", tags=["UserRoles"])
app.include_router(menu_items.router, prefix="/api/menu-items", tags=["MenuItems"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
