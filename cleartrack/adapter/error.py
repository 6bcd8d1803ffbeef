"""Errors raised by outbound messaging adapters."""


class AdapterError(Exception):
    """Base infrastructure error."""


class ProviderError(AdapterError):
    """A messaging provider (Twilio, SendGrid, Mailgun) failed to send.

    Attributes:
        provider: Provider name, as used in log attributes
        status_code: HTTP status returned by the provider, if it answered
    """

    def __init__(
        self, provider: str, message: str, status_code: int | None = None
    ) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status_code = status_code


class ProviderNotConfiguredError(ProviderError):
    """Raised when a channel is used without credentials."""

    def __init__(self, provider: str) -> None:
        super().__init__(provider, "credentials are not configured")
