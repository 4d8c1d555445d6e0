"""Admin API routes — QA-only user management and broadcasts."""

import structlog
from fastapi import APIRouter, Depends, status

from courseload.application.services.auth_service import assign_role, create_qa_user, list_users
from courseload.application.services.notification_service import NotificationDispatcher
from courseload.application.services.token_service import TokenService
from courseload.config import Settings
from courseload.domain.actor import Actor
from courseload.domain.repositories.user_repository import UserRepository
from courseload.domain.schemas.auth import (
    AssignRoleRequest,
    AuthResponse,
    CreateQARequest,
    UserDetail,
    UserEnvelope,
    UserList,
    UserRead,
)
from courseload.domain.schemas.notification import NotificationRequest, NotificationResponse
from courseload.interfaces.api.deps import require_qa
from courseload.interfaces.api.notifications import to_response
from courseload.interfaces.deps import (
    get_app_settings,
    get_notification_dispatcher,
    get_token_service,
    get_user_repository,
)

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.post("/create-qa", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def create_qa(
    body: CreateQARequest,
    actor: Actor = Depends(require_qa),
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_app_settings),
):
    user = create_qa_user(users, body, settings.INSTITUTION_EMAIL_DOMAIN)
    logger.info("QA user created by admin", created=user.email, by=actor.email)
    return AuthResponse(
        message="QA user created successfully.",
        token=tokens.issue(user.id),
        user=UserRead.model_validate(user),
    )


@router.post("/assign-role", response_model=UserEnvelope)
async def assign_user_role(
    body: AssignRoleRequest,
    actor: Actor = Depends(require_qa),
    users: UserRepository = Depends(get_user_repository),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    user = assign_role(users, body.user_id, body.role)
    # Best effort; a failed email never undoes the role change
    await dispatcher.notify_role_change(user, user.role)
    return UserEnvelope(
        message=f"User role updated to '{user.role.value}'.",
        user=UserRead.model_validate(user),
    )


@router.get("/users", response_model=UserList)
def get_users(
    actor: Actor = Depends(require_qa),
    users: UserRepository = Depends(get_user_repository),
):
    return UserList(users=[UserDetail.model_validate(u) for u in list_users(users)])


@router.post("/send-notification", response_model=NotificationResponse)
async def send_notification(
    body: NotificationRequest,
    actor: Actor = Depends(require_qa),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    report = await dispatcher.send_to_all_lecturers(body.message)
    return to_response(report)
