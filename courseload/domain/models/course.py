"""Course domain model — maps to the 'courses' table."""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from courseload.domain.enums import OverloadType, PaymentStatus, Semester, enum_values
from courseload.infrastructure.database import Base


class Course(Base):
    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint("enrolled >= 0", name="ck_courses_enrolled_non_negative"),
        CheckConstraint("capacity >= 1", name="ck_courses_capacity_positive"),
        CheckConstraint("oversize_student_count >= 0", name="ck_courses_oversize_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    semester = Column(Enum(Semester, native_enum=False, length=20, values_callable=enum_values), nullable=False)
    enrolled = Column(Integer, nullable=False, default=0)
    capacity = Column(Integer, nullable=False, default=30)
    is_oversize = Column(Boolean, nullable=False, default=False)
    oversize_student_count = Column(Integer, nullable=False, default=0)
    is_overload = Column(Boolean, nullable=False, default=False)
    overload_type = Column(
        Enum(OverloadType, native_enum=False, length=20, values_callable=enum_values),
        nullable=True,
    )
    payment_status = Column(
        Enum(PaymentStatus, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Owner; never reassigned after creation
    lecturer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    lecturer = relationship("User", lazy="joined")

    def __repr__(self):
        return f"<Course {self.title} ({self.semester.value if self.semester else '?'})>"
