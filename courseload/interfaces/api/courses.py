"""Courses API routes — list, read, create, edit, approve."""

from fastapi import APIRouter, Depends, status

from courseload.application.services.course_service import CourseService
from courseload.domain.actor import Actor
from courseload.domain.schemas.course import CourseCreate, CourseEnvelope, CourseList, CourseRead, CourseUpdate
from courseload.interfaces.api.deps import get_current_user, require_course_author, require_qa
from courseload.interfaces.deps import get_course_service

router = APIRouter(prefix="/api/courses", tags=["Courses"])


@router.get("", response_model=CourseList)
def list_courses(
    actor: Actor = Depends(get_current_user),
    service: CourseService = Depends(get_course_service),
):
    return CourseList(courses=[CourseRead.model_validate(c) for c in service.list(actor)])


@router.post("", response_model=CourseEnvelope, status_code=status.HTTP_201_CREATED)
def create_course(
    body: CourseCreate,
    actor: Actor = Depends(require_course_author),
    service: CourseService = Depends(get_course_service),
):
    course = service.create(actor, body)
    return CourseEnvelope(message="Course created successfully.", course=CourseRead.model_validate(course))


@router.get("/{course_id}", response_model=CourseEnvelope)
def get_course(
    course_id: int,
    actor: Actor = Depends(get_current_user),
    service: CourseService = Depends(get_course_service),
):
    return CourseEnvelope(course=CourseRead.model_validate(service.get(actor, course_id)))


@router.put("/{course_id}", response_model=CourseEnvelope)
def edit_course(
    course_id: int,
    body: CourseUpdate,
    actor: Actor = Depends(require_course_author),
    service: CourseService = Depends(get_course_service),
):
    course = service.edit(actor, course_id, body)
    return CourseEnvelope(message="Course updated successfully.", course=CourseRead.model_validate(course))


@router.patch("/{course_id}/approve", response_model=CourseEnvelope)
def approve_course(
    course_id: int,
    actor: Actor = Depends(require_qa),
    service: CourseService = Depends(get_course_service),
):
    course = service.approve(actor, course_id)
    return CourseEnvelope(
        message=f"Course status updated to {course.payment_status.value}.",
        course=CourseRead.model_validate(course),
    )
