"""Transactional email sender.

Tries SendGrid first, then Mailgun. With neither configured the message
is logged and treated as sent, which keeps local development working
without provider accounts.
"""

from dataclasses import dataclass

import httpx
import logfire

from cleartrack.adapter.error import ProviderError
from cleartrack.domain.service.notification_service import EmailSender

SENDGRID_API_URL = "https://api.sendgrid.com/v3/mail/send"
MAILGUN_API_URL = "https://api.mailgun.net/v3"


class HttpEmailSender(EmailSender):
    """Email sender over the SendGrid and Mailgun HTTP APIs."""

    def __init__(
        self,
        from_email: str,
        sendgrid_api_key: str | None = None,
        mailgun_api_key: str | None = None,
        mailgun_domain: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize email sender.

        Args:
            from_email: Sender address
            sendgrid_api_key: SendGrid API key
            mailgun_api_key: Mailgun API key
            mailgun_domain: Mailgun sending domain
            timeout: Request timeout in seconds
        """
        self.from_email = from_email
        self.sendgrid_api_key = sendgrid_api_key
        self.mailgun_api_key = mailgun_api_key
        self.mailgun_domain = mailgun_domain
        self.timeout = timeout

    async def send_email(
        self, to: str, subject: str, html_body: str, text_body: str
    ) -> None:
        """Send an email through the first provider that accepts it.

        Raises:
            ProviderError: If every configured provider failed
        """
        errors: list[str] = []

        if self.sendgrid_api_key:
            try:
                await self._send_sendgrid(to, subject, html_body, text_body)
                logfire.info("Email sent", provider="sendgrid", subject=subject)
                return
            except httpx.HTTPError as e:
                logfire.warn("SendGrid send failed", error=str(e))
                errors.append(f"sendgrid: {e}")

        if self.mailgun_api_key and self.mailgun_domain:
            try:
                await self._send_mailgun(to, subject, html_body, text_body)
                logfire.info("Email sent", provider="mailgun", subject=subject)
                return
            except httpx.HTTPError as e:
                logfire.warn("Mailgun send failed", error=str(e))
                errors.append(f"mailgun: {e}")

        if errors:
            raise ProviderError("email", "; ".join(errors))

        logfire.warn(
            "No email provider configured, email not sent",
            subject=subject,
            preview=(text_body or html_body)[:100],
        )

    async def _send_sendgrid(
        self, to: str, subject: str, html_body: str, text_body: str
    ) -> None:
        payload = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self.from_email},
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": text_body},
                {"type": "text/html", "value": html_body},
            ],
        }
        async with httpx.AsyncClient() as client:
            response = await client.post(
                SENDGRID_API_URL,
                json=payload,
                headers={"Authorization": f"Bearer {self.sendgrid_api_key}"},
                timeout=self.timeout,
            )
            response.raise_for_status()

    async def _send_mailgun(
        self, to: str, subject: str, html_body: str, text_body: str
    ) -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                f"{MAILGUN_API_URL}/{self.mailgun_domain}/messages",
                data={
                    "from": self.from_email,
                    "to": to,
                    "subject": subject,
                    "text": text_body,
                    "html": html_body,
                },
                auth=("api", self.mailgun_api_key),
                timeout=self.timeout,
            )
            response.raise_for_status()


@dataclass
class SentEmail:
    to: str
    subject: str
    html_body: str
    text_body: str


class MockEmailSender(EmailSender):
    """Mock email sender for testing.

    Records every email; set ``fail`` to make sends raise.
    """

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[SentEmail] = []

    async def send_email(
        self, to: str, subject: str, html_body: str, text_body: str
    ) -> None:
        if self.fail:
            raise ProviderError("email", "mock failure")
        self.sent.append(
            SentEmail(to=to, subject=subject, html_body=html_body, text_body=text_body)
        )
