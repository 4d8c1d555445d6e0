"""Pydantic schemas for the Course domain."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from courseload.domain.enums import OverloadType, PaymentStatus, Semester
from courseload.domain.schemas.common import CamelModel


class CourseFields(CamelModel):
    title: Optional[str] = None
    semester: Optional[Semester] = None
    enrolled: Optional[int] = Field(default=None, ge=0)
    capacity: Optional[int] = Field(default=None, ge=1)
    is_oversize: Optional[bool] = None
    oversize_student_count: Optional[int] = Field(default=None, ge=0)
    is_overload: Optional[bool] = None
    overload_type: Optional[OverloadType] = None
    payment_status: Optional[PaymentStatus] = None

    def provided(self) -> dict:
        """Fields the caller actually sent; JSON nulls count as absent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class CourseCreate(CourseFields):
    pass


class CourseUpdate(CourseFields):
    pass


class LecturerSummary(CamelModel):
    id: int
    name: str
    school: str


class CourseRead(CamelModel):
    id: int
    title: str
    semester: Semester
    enrolled: int
    capacity: int
    is_oversize: bool
    oversize_student_count: int
    is_overload: bool
    overload_type: Optional[OverloadType] = None
    payment_status: PaymentStatus
    created_at: Optional[datetime] = None
    lecturer: LecturerSummary


class CourseEnvelope(CamelModel):
    message: Optional[str] = None
    course: CourseRead


class CourseList(CamelModel):
    courses: list[CourseRead]
