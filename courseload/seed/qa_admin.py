"""Seed a QA admin account so a fresh deployment can be administered."""

import structlog
from sqlalchemy.orm import sessionmaker

from courseload.application.services.auth_service import hash_password, normalize_email
from courseload.config import Settings
from courseload.domain.enums import Role
from courseload.domain.models.user import User
from courseload.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def seed_qa_admin(session_factory: sessionmaker, settings: Settings, logger=None) -> bool:
    """Create the configured QA admin if missing. Returns True when created.

    Failures are logged and swallowed so a bad seed never blocks startup.
    """
    logger = logger or structlog.get_logger(__name__)

    if not settings.QAADMIN_EMAIL or not settings.QAADMIN_PASSWORD:
        logger.info("QA admin seed skipped: QAADMIN_EMAIL/QAADMIN_PASSWORD not set")
        return False

    email = normalize_email(settings.QAADMIN_EMAIL)
    logger.info("Seeding QA admin", email=email)
    if not settings.is_production:
        # Development-only diagnostic; never emitted in production.
        logger.info("Seeding QA admin with plaintext password", password=settings.QAADMIN_PASSWORD)

    db = session_factory()
    try:
        users = SQLAlchemyUserRepository(db, User)
        if users.get_by_email(email) is not None:
            logger.info("QA admin already exists", email=email)
            return False

        users.create({
            "name": settings.QAADMIN_NAME.strip(),
            "email": email,
            "password_hash": hash_password(settings.QAADMIN_PASSWORD.strip()),
            "role": Role.QA,
            "bank_name": settings.QAADMIN_BANK_NAME.strip(),
            "bank_account_number": settings.QAADMIN_BANK_ACCOUNT.strip(),
            "bank_bban": settings.QAADMIN_BANK_BBAN.strip(),
            "school": settings.QAADMIN_SCHOOL.strip(),
        })
        logger.info("QA admin seeded successfully", email=email)
        return True
    except Exception as exc:
        logger.error("Error seeding QA admin", error=str(exc))
        return False
    finally:
        db.close()
