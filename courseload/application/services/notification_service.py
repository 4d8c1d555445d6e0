"""Notification service — best-effort email broadcasts from QA.

Deliveries are independent: each recipient gets one attempt, failures are
logged and counted, and nothing is rolled back or retried.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

import structlog

from courseload.core.exceptions import ValidationError
from courseload.domain.enums import Role
from courseload.domain.models.user import User
from courseload.domain.repositories.user_repository import UserRepository
from courseload.infrastructure.mailer import Mailer

BROADCAST_SUBJECT = "Notification from QA"
ROLE_CHANGE_SUBJECT = "Role Assignment Notification"


def format_broadcast(name: str, message: str) -> str:
    return f"Hello {name},\n\n{message}\n\nBest regards,\nQA Team"


def format_role_change(name: str, role: Role) -> str:
    return (
        f"Hello {name},\n\n"
        f"Your role has been updated to '{role.value}'.\n\n"
        "Best regards,\nQA Team"
    )


@dataclass
class NotificationReport:
    recipients: int = 0
    delivered: int = 0
    failed: int = 0


class NotificationDispatcher:
    def __init__(self, users: UserRepository, mailer: Mailer, logger=None):
        self.users = users
        self.mailer = mailer
        self.logger = logger or structlog.get_logger(__name__)

    async def _deliver(self, user: User, subject: str, text: str) -> bool:
        try:
            await self.mailer.send(user.email, subject, text)
        except Exception as exc:
            self.logger.error("Failed to send email", to=user.email, subject=subject, error=str(exc))
            return False
        return True

    async def send_to_all_lecturers(self, message: Optional[str]) -> NotificationReport:
        if not message or not message.strip():
            raise ValidationError("Notification message is required.")

        lecturers = self.users.list_by_role(Role.LECTURER)
        report = NotificationReport(recipients=len(lecturers))
        if not lecturers:
            self.logger.info("No lecturers to notify")
            return report

        results = await asyncio.gather(
            *(self._deliver(user, BROADCAST_SUBJECT, format_broadcast(user.name, message)) for user in lecturers)
        )
        report.delivered = sum(1 for ok in results if ok)
        report.failed = report.recipients - report.delivered
        self.logger.info(
            "Broadcast finished",
            recipients=report.recipients,
            delivered=report.delivered,
            failed=report.failed,
        )
        return report

    async def notify_role_change(self, user: User, role: Role) -> bool:
        return await self._deliver(user, ROLE_CHANGE_SUBJECT, format_role_change(user.name, role))
