"""Notification infrastructure providers."""

from dishka import Scope, provide
import logfire

from cleartrack.adapter.email import HttpEmailSender
from cleartrack.adapter.twilio import TwilioSmsSender
from cleartrack.config import NotificationSettings
from cleartrack.domain.service import EmailSender, SmsSender
from cleartrack.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification component base (SMS and email senders)."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider (Twilio, SendGrid/Mailgun)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_sms_sender(self, settings: NotificationSettings) -> SmsSender:
        """Provide Twilio SMS sender.

        Missing Twilio credentials do not stop the app from starting; each
        send fails instead and is logged by the notification service.
        """
        sender = TwilioSmsSender(
            account_sid=settings.twilio_account_sid,
            auth_token=settings.twilio_auth_token,
            from_number=settings.twilio_phone_number,
            timeout=settings.timeout_seconds,
        )
        if not sender.configured:
            logfire.warn("Twilio not configured, SMS sending disabled")
        return sender

    @provide(scope=Scope.APP)
    def get_email_sender(self, settings: NotificationSettings) -> EmailSender:
        """Provide HTTP email sender."""
        return HttpEmailSender(
            from_email=settings.from_email,
            sendgrid_api_key=settings.sendgrid_api_key,
            mailgun_api_key=settings.mailgun_api_key,
            mailgun_domain=settings.mailgun_domain,
            timeout=settings.timeout_seconds,
        )
