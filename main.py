from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import models  # noqa: F401  registers every table on Base.metadata
from app.core.config import Base, engine, settings
from app.core.exceptions import register_exception_handlers
from app.core.logging_config import setup_logging
from app.api.routers import activities, daily, groups, journal, media, timer, users

logger = setup_logging()

# =====================================================================
# CREATE APP
# =====================================================================

app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    description="Habit, activity and journal tracking API",
    version="1.0.0",
)

# =====================================================================
# CORS MIDDLEWARE - MUST BE FIRST!
# =====================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

logger.info(f"CORS allowed origins: {settings.CORS_ORIGINS}")

# =====================================================================
# DATABASE INITIALIZATION
# =====================================================================

Base.metadata.create_all(bind=engine)

# =====================================================================
# ERROR HANDLERS
# =====================================================================

register_exception_handlers(app)

# =====================================================================
# HEALTH CHECK (before routers)
# =====================================================================


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# =====================================================================
# ROUTES
# =====================================================================

app.include_router(users.router)
app.include_router(groups.router)
app.include_router(activities.router)
app.include_router(daily.router)
app.include_router(timer.router)
app.include_router(journal.router)
app.include_router(media.router)

logger.info("All routers included")

# =====================================================================
# ROOT ENDPOINT
# =====================================================================


@app.get("/")
def root():
    """API root endpoint."""
    return {
        "message": "Welcome to OKHabit API",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "users": "/users",
            "groups": "/groups",
            "activities": "/activities",
            "daily": "/daily",
            "timer": "/timer",
            "journal": "/journal",
            "media": "/media",
        },
    }
