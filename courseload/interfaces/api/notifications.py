"""Notifications API routes — QA broadcast to every lecturer."""

from fastapi import APIRouter, Depends

from courseload.application.services.notification_service import NotificationDispatcher, NotificationReport
from courseload.domain.actor import Actor
from courseload.domain.schemas.notification import NotificationRequest, NotificationResponse
from courseload.interfaces.api.deps import require_qa
from courseload.interfaces.deps import get_notification_dispatcher

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


def to_response(report: NotificationReport) -> NotificationResponse:
    if report.recipients == 0:
        message = "No users to send notifications to."
    else:
        message = "Notifications sent successfully."
    return NotificationResponse(
        message=message,
        recipients=report.recipients,
        delivered=report.delivered,
        failed=report.failed,
    )


@router.post("", response_model=NotificationResponse)
async def send_notification(
    body: NotificationRequest,
    actor: Actor = Depends(require_qa),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Email every lecturer; individual delivery failures do not fail the request."""
    report = await dispatcher.send_to_all_lecturers(body.message)
    return to_response(report)
