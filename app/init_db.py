"""Create the tables and seed the admin account.

Usage:
    python -m app.init_db
"""

import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

import app.models  # noqa: F401  registers every model on Base.metadata
from app.config import Settings, get_settings
from app.crud import crud_user
from app.database import Base, SessionLocal, engine
from app.models.user import User, UserRole
from app.schemas.user import UserCreate

logger = logging.getLogger(__name__)


def init_db(bind: Engine = engine) -> None:
    Base.metadata.create_all(bind=bind)


def seed_admin(db: Session, settings: Settings) -> Optional[User]:
    """Create the admin from ADMIN_* settings unless that account already exists."""
    if not (settings.ADMIN_EMAIL and settings.ADMIN_USERNAME and settings.ADMIN_PASSWORD):
        logger.info("ADMIN_* not configured, skipping admin seed")
        return None

    if crud_user.exists_with(db, username=settings.ADMIN_USERNAME, email=settings.ADMIN_EMAIL.lower()):
        logger.info(f"Admin {settings.ADMIN_USERNAME} already exists")
        return None

    user_in = UserCreate(
        username=settings.ADMIN_USERNAME,
        email=settings.ADMIN_EMAIL,
        password=settings.ADMIN_PASSWORD,
    )
    admin = crud_user.create_user(db, user_in=user_in, role=UserRole.ADMIN)
    logger.info(f"Admin created: id={admin.id}, username={admin.username}")
    return admin


def main():
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    init_db()
    with SessionLocal() as db:
        seed_admin(db, settings)
    print("✅ Tables created successfully")


if __name__ == "__main__":
    main()
