"""Twilio SMS adapter."""

from .client import MockSmsSender, TwilioSmsSender

__all__ = ["MockSmsSender", "TwilioSmsSender"]
