from html import escape
from datetime import datetime
from typing import Optional

from lawdesk.config import settings
from lawdesk.notifications.email import EmailMessage

FIRM_NAME = "Mason Martin Law"
OFFICE_PHONE = "(808) 555-0123"
OFFICE_EMAIL = "info@masonmartinlaw.com"
WEBSITE = "www.masonmartinlaw.com"

_HEADER = (
    '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; color: #333;">'
    '<div style="background-color: #1e3a8a; color: white; padding: 20px; text-align: center;">'
    f'<h1 style="margin: 0; font-size: 24px;">{FIRM_NAME}</h1>'
    '<p style="margin: 5px 0 0 0; font-size: 14px;">Licensed Attorney in Hawaii</p>'
    "</div>"
    '<div style="background-color: #f8fafc; padding: 30px; border: 1px solid #e2e8f0;">'
)
_FOOTER = (
    '<div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #e2e8f0;">'
    f"<p><strong>{FIRM_NAME}</strong></p>"
    f"<p>Office: {OFFICE_PHONE}</p><p>Email: {OFFICE_EMAIL}</p><p>Website: {WEBSITE}</p>"
    "</div></div></div>"
)
_TEXT_SIGNATURE = f"""Best regards,
{FIRM_NAME}
Licensed Attorney in Hawaii

Office: {OFFICE_PHONE}
Email: {OFFICE_EMAIL}
Website: {WEBSITE}
"""


def format_schedule(when: datetime) -> str:
    return when.strftime("%A, %B %d, %Y at %I:%M %p")


def consultation_confirmation(
    to: str,
    client_name: str,
    consultation_type: str,
    scheduled_at: datetime,
    case_type: Optional[str] = None,
) -> EmailMessage:
    scheduled = format_schedule(scheduled_at)
    case_line = f"- Case Type: {case_type}\n" if case_type else ""
    case_item = f"<li><strong>Case Type:</strong> {escape(case_type)}</li>" if case_type else ""

    text = (
        f"Dear {client_name},\n\n"
        f"Thank you for scheduling a consultation with {FIRM_NAME}. We have received your request "
        "and will contact you within 24 hours to confirm the details.\n\n"
        "Consultation Details:\n"
        f"- Type: {consultation_type}\n"
        f"- Preferred Date/Time: {scheduled}\n"
        f"{case_line}\n"
        f"If you have any questions in the meantime, please contact our office at {OFFICE_PHONE}.\n\n"
        f"{_TEXT_SIGNATURE}"
    )
    html = (
        f"{_HEADER}"
        '<h2 style="color: #1e3a8a; margin-top: 0;">Consultation Confirmation</h2>'
        f"<p>Dear {escape(client_name)},</p>"
        f"<p>Thank you for scheduling a consultation with {FIRM_NAME}. We have received your request "
        "and will contact you within 24 hours to confirm the details.</p>"
        "<h3>Consultation Details:</h3><ul>"
        f"<li><strong>Type:</strong> {escape(consultation_type)}</li>"
        f"<li><strong>Preferred Date/Time:</strong> {scheduled}</li>"
        f"{case_item}</ul>"
        f"<p>If you have any questions in the meantime, please contact our office at <strong>{OFFICE_PHONE}</strong>.</p>"
        f"{_FOOTER}"
    )
    return EmailMessage(to=to, subject=f"Consultation Confirmation - {FIRM_NAME}", text=text, html=html)


def portal_access(to: str, client_name: str, access_token: str, expires_at: datetime) -> EmailMessage:
    portal_url = f"{settings.FRONTEND_URL.rstrip('/')}/client-portal/{access_token}"
    expiry = expires_at.strftime("%B %d, %Y at %I:%M %p UTC")

    text = (
        f"Dear {client_name},\n\n"
        "Your secure client portal access has been generated. Use the link below to view your "
        "case information, consultations, and invoices.\n\n"
        f"Access Link: {portal_url}\n\n"
        f"This link will expire on {expiry}.\n\n"
        "For security reasons, this link is unique to you and should not be shared with others.\n\n"
        f"{_TEXT_SIGNATURE}"
    )
    html = (
        f"{_HEADER}"
        '<h2 style="color: #1e3a8a; margin-top: 0;">Secure Client Portal Access</h2>'
        f"<p>Dear {escape(client_name)},</p>"
        "<p>Your secure client portal access has been generated.</p>"
        '<div style="text-align: center; margin: 30px 0;">'
        f'<a href="{escape(portal_url)}" style="background-color: #d4a574; color: white; padding: 15px 30px; '
        'text-decoration: none; border-radius: 6px; font-weight: bold;">Access Client Portal</a></div>'
        f"<p><strong>Security Notice:</strong> This link will expire on {expiry}.</p>"
        '<p style="font-size: 14px; color: #666;">This link is unique to you and should not be shared with others.</p>'
        f"{_FOOTER}"
    )
    return EmailMessage(to=to, subject=f"Secure Client Portal Access - {FIRM_NAME}", text=text, html=html)
