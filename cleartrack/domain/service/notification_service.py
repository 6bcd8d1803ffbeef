"""Outbound notification domain service."""

import logfire

from .base import Service


class SmsSender:
    """SMS channel interface, implemented by adapters."""

    async def send_sms(self, to: str, body: str) -> None:
        """Send a text message.

        Args:
            to: Recipient mobile number
            body: Message text

        Raises:
            Exception: Any delivery failure
        """
        raise NotImplementedError


class EmailSender:
    """Email channel interface, implemented by adapters."""

    async def send_email(
        self, to: str, subject: str, html_body: str, text_body: str
    ) -> None:
        """Send an email.

        Args:
            to: Recipient address
            subject: Subject line
            html_body: HTML body
            text_body: Plain-text body

        Raises:
            Exception: Any delivery failure
        """
        raise NotImplementedError


class NotificationService(Service):
    """Best-effort delivery over the SMS and email channels.

    Sends are awaited inline. A failed send is logged and reported as False;
    it never fails the operation that triggered it and is not retried.
    """

    def __init__(self, sms_sender: SmsSender, email_sender: EmailSender) -> None:
        """Initialize notification service.

        Args:
            sms_sender: SMS channel
            email_sender: Email channel
        """
        self.sms_sender = sms_sender
        self.email_sender = email_sender

    async def send_sms(self, to: str, body: str) -> bool:
        """Send an SMS, returning whether it was accepted by the channel."""
        with logfire.span("notification_service.send_sms"):
            try:
                await self.sms_sender.send_sms(to, body)
            except Exception as e:
                logfire.warn("SMS not sent", error=str(e))
                return False
            logfire.info("SMS sent")
            return True

    async def send_email(
        self, to: str, subject: str, html_body: str, text_body: str
    ) -> bool:
        """Send an email, returning whether it was accepted by the channel."""
        with logfire.span("notification_service.send_email", subject=subject):
            try:
                await self.email_sender.send_email(to, subject, html_body, text_body)
            except Exception as e:
                logfire.error("Email not sent", subject=subject, error=str(e))
                return False
            logfire.info("Email sent", subject=subject)
            return True
