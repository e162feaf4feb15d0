"""Notification composition and dispatch for resolved interest requests.

This module only composes messages and hands them to a channel. Email goes
through SMTP; when SMTP is not configured messages are logged instead.
"""
from __future__ import annotations

import logging
import smtplib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from email.mime.text import MIMEText

from search_fallback.config import Settings
from search_fallback.errors import DispatchError
from search_fallback.models.interest import InterestRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NotificationMessage:
    to_address: str
    subject: str
    body: str
    deep_link: str
    channel: str = "email"  # "email" or "sms"


def build_deep_link(base_url: str, item_type: str, item_id: str) -> str:
    return f"{base_url.rstrip('/')}/{item_type.strip('/')}/{item_id}"


def compose_interest_notification(
    request: InterestRequest,
    item_title: str,
    item_type: str,
    item_id: str,
    base_url: str = "",
) -> NotificationMessage:
    """Compose the "we found it" message for one interest request.

    Email is preferred; a phone-only request yields an sms-channel message.
    """
    deep_link = build_deep_link(base_url, item_type, item_id)
    subject = f'Good news! We found "{request.search_query}"'
    body = (
        f'You asked us to let you know when "{request.search_query}" '
        f"became available.\n\n"
        f'The item "{item_title}" just got added! Check it out here: {deep_link}'
    )
    if request.email:
        return NotificationMessage(request.email, subject, body, deep_link, "email")
    return NotificationMessage(request.phone or "", subject, body, deep_link, "sms")


class NotificationDispatcher(ABC):
    """Delivery channel. ``send`` returns on success and raises DispatchError otherwise."""

    kind = "none"

    @abstractmethod
    def send(self, message: NotificationMessage) -> None: ...


class LogDispatcher(NotificationDispatcher):
    """Development channel: logs the message and reports success."""

    kind = "log"

    def send(self, message: NotificationMessage) -> None:
        logger.info(
            "[%s -> %s] %s | %s",
            message.channel,
            message.to_address,
            message.subject,
            message.deep_link,
        )


class SmtpDispatcher(NotificationDispatcher):
    kind = "smtp"

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def send(self, message: NotificationMessage) -> None:
        if message.channel != "email":
            raise DispatchError(
                f"SMTP cannot deliver {message.channel} notifications to {message.to_address}"
            )

        settings = self._settings
        sender = settings.smtp_from or settings.smtp_user
        msg = MIMEText(message.body)
        msg["Subject"] = message.subject
        msg["From"] = sender
        msg["To"] = message.to_address

        try:
            with smtplib.SMTP(
                settings.smtp_host,
                settings.smtp_port,
                timeout=settings.smtp_timeout_seconds,
            ) as server:
                server.starttls()
                if settings.smtp_user:
                    server.login(settings.smtp_user, settings.smtp_password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise DispatchError(f"Failed to send email to {message.to_address}: {exc}") from exc

        logger.info("Notification email sent to %s: %s", message.to_address, message.subject)


def build_dispatcher(settings: Settings) -> NotificationDispatcher:
    if not settings.smtp_host:
        logger.warning("SMTP not configured, interest notifications will only be logged")
        return LogDispatcher()
    return SmtpDispatcher(settings)
