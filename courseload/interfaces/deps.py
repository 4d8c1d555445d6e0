"""
API Dependencies.
Collaborators are built at startup and read from ``app.state``.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from courseload.application.services.course_service import CourseService
from courseload.application.services.notification_service import NotificationDispatcher
from courseload.application.services.token_service import TokenService
from courseload.config import Settings
from courseload.domain.models.course import Course
from courseload.domain.models.user import User
from courseload.domain.repositories.course_repository import CourseRepository
from courseload.domain.repositories.user_repository import UserRepository
from courseload.infrastructure.database import get_db
from courseload.infrastructure.mailer import Mailer
from courseload.infrastructure.repositories.course_repository import SQLAlchemyCourseRepository
from courseload.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_course_repository(db: Session = Depends(get_db)) -> CourseRepository:
    """Get course repository instance."""
    return SQLAlchemyCourseRepository(db, Course)


def get_course_service(repo: CourseRepository = Depends(get_course_repository)) -> CourseService:
    return CourseService(repo)


def get_notification_dispatcher(
    users: UserRepository = Depends(get_user_repository),
    mailer: Mailer = Depends(get_mailer),
) -> NotificationDispatcher:
    return NotificationDispatcher(users, mailer)
