"""
SQLAlchemy Implementation of Course Repository.
"""

from courseload.domain.models.course import Course
from courseload.domain.repositories.course_repository import CourseRepository
from courseload.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyCourseRepository(SQLAlchemyRepository[Course], CourseRepository):
    """Course repository implementation using SQLAlchemy."""
