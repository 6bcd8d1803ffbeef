"""Notification texts sent by the use cases."""

import html
from dataclasses import dataclass

from cleartrack.domain.model import PractitionerApplication


def _h(value: object) -> str:
    """Escape a value for an HTML body or attribute."""
    return html.escape(str(value), quote=True)


@dataclass(frozen=True)
class EmailMessage:
    subject: str
    html_body: str
    text_body: str


def client_invite_link(app_url: str, invite_id: str, code: str) -> str:
    return f"{app_url}/connect?inviteId={invite_id}&code={code}"


def register_link(app_url: str, token: str, code: str) -> str:
    return f"{app_url}/practitioner-register.html?token={token}&code={code}"


def client_invite_sms(code: str, link: str) -> str:
    return f"ClearTrack: Your verification code is {code}. Link: {link}"


def new_application_email(
    application: PractitionerApplication, app_url: str
) -> EmailMessage:
    """Email telling the administrators an application arrived."""
    name = f"{application.first_name} {application.last_name}"
    experience = f"{application.years_experience:g} years"
    text = (
        "A new practitioner application has been submitted.\n\n"
        f"Name: {name}\n"
        f"Email: {application.email}\n"
        f"Practice: {application.practice_name}\n"
        f"Experience: {experience}\n\n"
        "Please review the application in the admin dashboard."
    )
    html = (
        "<h2>New Practitioner Application</h2>"
        "<p>A new practitioner application has been submitted.</p>"
        "<ul>"
        f"<li><strong>Name:</strong> {_h(name)}</li>"
        f"<li><strong>Email:</strong> {_h(application.email)}</li>"
        f"<li><strong>Practice:</strong> {_h(application.practice_name)}</li>"
        f"<li><strong>Experience:</strong> {experience}</li>"
        "</ul>"
        f'<p><a href="{_h(app_url)}/admin-dashboard.html">Review Application</a></p>'
    )
    return EmailMessage(
        subject="New Practitioner Application - ClearTrack",
        html_body=html,
        text_body=text,
    )


def registration_email(
    first_name: str, link: str, code: str, ttl_days: int
) -> EmailMessage:
    """Email carrying the registration link and code."""
    text = (
        f"Dear {first_name},\n\n"
        "Your application to become a ClearTrack practitioner has been approved!\n\n"
        f"Please complete your registration by clicking the link below:\n{link}\n\n"
        f"Your registration code is: {code}\n\n"
        f"This link will expire in {ttl_days} days.\n\n"
        "Welcome to ClearTrack!\n\n"
        "Best regards,\nClearTrack Team"
    )
    html = (
        "<h2>Welcome to ClearTrack!</h2>"
        f"<p>Dear {_h(first_name)},</p>"
        "<p>Your application to become a ClearTrack practitioner has been approved!</p>"
        "<p>Please complete your registration by clicking the link below:</p>"
        f'<p><a href="{_h(link)}">Complete Registration</a></p>'
        f"<p>Your registration code is: <strong>{_h(code)}</strong></p>"
        f"<p><small>This link will expire in {ttl_days} days.</small></p>"
        "<p>Best regards,<br>ClearTrack Team</p>"
    )
    return EmailMessage(
        subject="Welcome to ClearTrack - Complete Your Practitioner Registration",
        html_body=html,
        text_body=text,
    )


def approval_welcome_email(application: PractitionerApplication) -> EmailMessage:
    """One-off welcome email sent when an application is approved."""
    text = (
        f"Dear {application.first_name},\n\n"
        "Congratulations, your ClearTrack practitioner application for "
        f"{application.practice_name} has been approved.\n\n"
        "A separate email contains your registration link and code.\n\n"
        "Best regards,\nClearTrack Team"
    )
    html = (
        "<h2>Your application has been approved</h2>"
        f"<p>Dear {_h(application.first_name)},</p>"
        "<p>Congratulations, your ClearTrack practitioner application for "
        f"<strong>{_h(application.practice_name)}</strong> has been approved.</p>"
        "<p>A separate email contains your registration link and code.</p>"
        "<p>Best regards,<br>ClearTrack Team</p>"
    )
    return EmailMessage(
        subject="Your ClearTrack application has been approved",
        html_body=html,
        text_body=text,
    )
