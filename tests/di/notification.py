"""Mock notification providers for testing."""

from dishka import Scope, provide

from cleartrack.adapter.email import MockEmailSender
from cleartrack.adapter.twilio import MockSmsSender
from cleartrack.domain.service import EmailSender, SmsSender
from cleartrack.util.di.infrastructure.notification import NotificationProvider


class MockNotificationProvider(NotificationProvider):
    """Mock notification provider recording messages instead of sending."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_sms_sender(self) -> SmsSender:
        """Provide recording SMS sender."""
        return MockSmsSender()

    @provide(scope=Scope.APP)
    def get_email_sender(self) -> EmailSender:
        """Provide recording email sender."""
        return MockEmailSender()
