"""Pydantic schemas for QA broadcast notifications."""

from typing import Optional

from courseload.domain.schemas.common import CamelModel


class NotificationRequest(CamelModel):
    message: Optional[str] = None


class NotificationResponse(CamelModel):
    message: str
    recipients: int = 0
    delivered: int = 0
    failed: int = 0
