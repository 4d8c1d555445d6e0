"""Outbound email transports.

The mailer is built once at startup, handed to whoever needs it through
``app.state`` and closed on shutdown.
"""

import asyncio
from typing import Protocol

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from courseload.config import Settings

logger = structlog.get_logger(__name__)


class MailDeliveryError(Exception):
    """A single message could not be handed to the transport."""


class Mailer(Protocol):
    async def send(self, to: str, subject: str, text: str) -> None:
        ...

    def verify(self) -> bool:
        ...

    def close(self) -> None:
        ...


class ConsoleMailer:
    """Development transport: logs the message instead of sending it."""

    def __init__(self, sender: str):
        self.sender = sender

    async def send(self, to: str, subject: str, text: str) -> None:
        logger.info("Email not configured - would send", sender=self.sender, to=to, subject=subject, body=text)

    def verify(self) -> bool:
        return True

    def close(self) -> None:
        pass


class SESMailer:
    """Send plain-text emails via AWS SES."""

    def __init__(self, sender: str, region: str, access_key_id: str = "", secret_access_key: str = ""):
        self.sender = sender
        credentials = {}
        if access_key_id and secret_access_key:
            credentials = {
                "aws_access_key_id": access_key_id,
                "aws_secret_access_key": secret_access_key,
            }
        self._client = boto3.client("ses", region_name=region, **credentials)

    def _send_blocking(self, to: str, subject: str, text: str) -> str:
        response = self._client.send_email(
            Source=self.sender,
            Destination={"ToAddresses": [to]},
            Message={
                "Subject": {"Data": subject, "Charset": "UTF-8"},
                "Body": {"Text": {"Data": text, "Charset": "UTF-8"}},
            },
        )
        return response["MessageId"]

    async def send(self, to: str, subject: str, text: str) -> None:
        try:
            message_id = await asyncio.to_thread(self._send_blocking, to, subject, text)
        except (BotoCoreError, ClientError) as exc:
            raise MailDeliveryError(f"Failed to send email to {to}: {exc}") from exc
        logger.info("Email sent", to=to, subject=subject, message_id=message_id)

    def verify(self) -> bool:
        try:
            self._client.get_send_quota()
        except (BotoCoreError, ClientError) as exc:
            logger.error("Mail transporter verification failed", error=str(exc))
            return False
        return True

    def close(self) -> None:
        self._client.close()


def build_mailer(settings: Settings) -> Mailer:
    backend = settings.MAIL_BACKEND.lower()
    if backend == "ses":
        return SESMailer(
            sender=settings.MAIL_FROM,
            region=settings.AWS_REGION,
            access_key_id=settings.AWS_ACCESS_KEY_ID,
            secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        )
    if backend == "console":
        return ConsoleMailer(sender=settings.MAIL_FROM)
    raise ValueError(f"Unknown MAIL_BACKEND: {settings.MAIL_BACKEND}")
