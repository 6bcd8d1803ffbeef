"""Email adapter (SendGrid with Mailgun fallback)."""

from .client import HttpEmailSender, MockEmailSender, SentEmail

__all__ = ["HttpEmailSender", "MockEmailSender", "SentEmail"]
