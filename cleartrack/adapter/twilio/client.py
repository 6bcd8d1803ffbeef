"""Twilio SMS sender.

Sends messages through Twilio's REST API over httpx.
"""

from dataclasses import dataclass

import httpx
import logfire

from cleartrack.adapter.error import ProviderError, ProviderNotConfiguredError
from cleartrack.domain.service.notification_service import SmsSender

TWILIO_API_URL = "https://api.twilio.com/2010-04-01"


class TwilioSmsSender(SmsSender):
    """SMS sender backed by Twilio's Messages resource."""

    def __init__(
        self,
        account_sid: str | None,
        auth_token: str | None,
        from_number: str | None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize Twilio sender.

        Args:
            account_sid: Twilio account SID
            auth_token: Twilio auth token
            from_number: Sending phone number in E.164 format
            timeout: Request timeout in seconds
        """
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)

    async def send_sms(self, to: str, body: str) -> None:
        """Send a text message.

        Raises:
            ProviderNotConfiguredError: If Twilio credentials are missing
            ProviderError: If Twilio rejects the message
        """
        if not self.configured:
            raise ProviderNotConfiguredError("twilio")

        url = f"{TWILIO_API_URL}/Accounts/{self.account_sid}/Messages.json"
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    url,
                    data={"To": to, "From": self.from_number, "Body": body},
                    auth=(self.account_sid, self.auth_token),
                    timeout=self.timeout,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                "twilio", e.response.text, status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError("twilio", f"request failed: {e}") from e

        logfire.info("Twilio message queued", sid=response.json().get("sid"))


@dataclass
class SentSms:
    to: str
    body: str


class MockSmsSender(SmsSender):
    """Mock SMS sender for testing.

    Records every message; set ``fail`` to make sends raise.
    """

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[SentSms] = []

    async def send_sms(self, to: str, body: str) -> None:
        if self.fail:
            raise ProviderError("twilio", "mock failure")
        self.sent.append(SentSms(to=to, body=body))
