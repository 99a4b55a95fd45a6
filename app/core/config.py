import logging
from typing import Generator, List
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


# =====================================================================
# SETTINGS
# =====================================================================


class Settings(BaseSettings):
    # App
    APP_NAME: str = "OKHabit API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./okhabit.db"

    # Identity provider tokens (HS256, `sub` = user id)
    JWT_SECRET: str = "okhabit-dev-secret"
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Blob storage
    MEDIA_ROOT: str = "./media"
    SIGNED_URL_TTL_SECONDS: int = 3600
    MAX_PHOTO_BYTES: int = 5 * 1024 * 1024
    MAX_VIDEO_BYTES: int = 50 * 1024 * 1024
    MAX_PHOTOS_PER_ENTRY: int = 10

    # Journal
    JOURNAL_EDIT_WINDOW_DAYS: int = 7

    # Whether "never" (avoid) activities count toward the daily completion rate
    COUNT_AVOID_IN_COMPLETION: bool = False

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()


# =====================================================================
# DATABASE
# =====================================================================

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=(
        {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}
    ),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_rollback(db: Session, action: str) -> None:
    """Commit the unit of work; on failure roll it back as a whole."""
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Failed to {action}", exc_info=exc)
        raise DatabaseError(f"Failed to {action}") from exc
