"""
Course Repository Interface.
"""

from courseload.domain.models.course import Course
from courseload.domain.repositories.base import BaseRepository


class CourseRepository(BaseRepository[Course]):
    """Interface for Course persistence; courses are never deleted."""
