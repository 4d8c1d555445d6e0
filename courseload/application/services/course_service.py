"""Course service — the single place course role and ownership rules live.

Every operation takes the acting identity. Reads are open to any
authenticated actor; writes are gated as follows:

* create: Lecturer or QA; the actor becomes the owner.
* edit: the owner or any QA. ``payment_status`` only changes when a QA
  actor sends it; from anyone else it is dropped without an error.
* approve: QA only; toggles Approved <-> Pending.
"""

from typing import List

import structlog

from courseload.core.exceptions import EntityNotFoundException, ForbiddenException, ValidationError
from courseload.domain.actor import Actor
from courseload.domain.enums import PaymentStatus, Role
from courseload.domain.models.course import Course
from courseload.domain.repositories.course_repository import CourseRepository
from courseload.domain.schemas.course import CourseCreate, CourseUpdate

logger = structlog.get_logger(__name__)

CREATOR_ROLES = frozenset({Role.LECTURER, Role.QA})
REQUIRED_ON_CREATE = ("title", "semester", "enrolled", "capacity")

# Applied as sent by the owner or a QA actor
PLAIN_FIELDS = ("title", "semester", "capacity", "enrolled", "is_oversize", "oversize_student_count")


class CourseService:
    def __init__(self, repository: CourseRepository):
        self.repository = repository

    def list(self, actor: Actor) -> List[Course]:
        return self.repository.list()

    def get(self, actor: Actor, course_id: int) -> Course:
        course = self.repository.get_by_id(course_id)
        if course is None:
            raise EntityNotFoundException("Course not found.")
        return course

    def create(self, actor: Actor, fields: CourseCreate) -> Course:
        if actor.role not in CREATOR_ROLES:
            raise ForbiddenException("Access denied.")

        data = fields.provided()
        if isinstance(data.get("title"), str):
            data["title"] = data["title"].strip()
        if any(data.get(name) in (None, "") for name in REQUIRED_ON_CREATE):
            raise ValidationError("Title, semester, enrolled, and capacity fields are required.")

        is_overload = data.get("is_overload", False)
        overload_type = data.get("overload_type") if is_overload else None
        if is_overload and overload_type is None:
            raise ValidationError("Overload type is required for overload courses.")

        course = self.repository.create({
            "title": data["title"],
            "semester": data["semester"],
            "enrolled": data["enrolled"],
            "capacity": data["capacity"],
            "is_oversize": data.get("is_oversize", False),
            "oversize_student_count": data.get("oversize_student_count", 0),
            "is_overload": is_overload,
            "overload_type": overload_type,
            # Accepted from any creator, unlike edit
            "payment_status": data.get("payment_status", PaymentStatus.PENDING),
            "lecturer_id": actor.id,
        })
        logger.info("Course created", course_id=course.id, title=course.title, by=actor.email)
        return course

    def edit(self, actor: Actor, course_id: int, changes: CourseUpdate) -> Course:
        course = self.get(actor, course_id)
        if course.lecturer_id != actor.id and not actor.is_qa:
            logger.warning("Course edit denied", course_id=course_id, by=actor.email)
            raise ForbiddenException("Access denied. You can only edit your own courses.")

        data = changes.provided()
        updates = {name: data[name] for name in PLAIN_FIELDS if name in data}
        if "title" in updates:
            updates["title"] = updates["title"].strip()
            if not updates["title"]:
                raise ValidationError("Title cannot be empty.")

        if "is_overload" in data:
            updates["is_overload"] = data["is_overload"]
            if not data["is_overload"]:
                updates["overload_type"] = None
            elif "overload_type" in data:
                updates["overload_type"] = data["overload_type"]

        if "payment_status" in data:
            if actor.is_qa:
                updates["payment_status"] = data["payment_status"]
            else:
                logger.info("Ignoring payment status change from non-QA actor", course_id=course_id, by=actor.email)

        overloaded = updates.get("is_overload", course.is_overload)
        overload_type = updates.get("overload_type", course.overload_type)
        if overloaded and overload_type is None:
            raise ValidationError("Overload type is required for overload courses.")

        course = self.repository.update(course, updates)
        logger.info("Course updated", course_id=course.id, fields=sorted(updates), by=actor.email)
        return course

    def approve(self, actor: Actor, course_id: int) -> Course:
        if not actor.is_qa:
            raise ForbiddenException("Access denied. Only QA can approve courses.")

        course = self.get(actor, course_id)
        if course.payment_status == PaymentStatus.APPROVED:
            new_status = PaymentStatus.PENDING
        else:
            new_status = PaymentStatus.APPROVED

        course = self.repository.update(course, {"payment_status": new_status})
        logger.info("Course payment status toggled", course_id=course.id, status=new_status.value, by=actor.email)
        return course
