import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx

from lawdesk.config import settings

logger = logging.getLogger(__name__)


class DeliveryOutcome(str, Enum):
    DELIVERED = "delivered"
    FAILED_NON_FATAL = "failed_non_fatal"
    FAILED_FATAL = "failed_fatal"


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    text: str
    html: str


@dataclass(frozen=True)
class DeliveryResult:
    outcome: DeliveryOutcome
    provider: str
    error: Optional[str] = None

    @property
    def delivered(self) -> bool:
        return self.outcome is DeliveryOutcome.DELIVERED

    @property
    def fatal(self) -> bool:
        return self.outcome is DeliveryOutcome.FAILED_FATAL


class EmailSender:
    """Outbound mail through the SendGrid v3 API.

    ``send`` never raises. Callers mark a message ``critical`` when a failed
    delivery must fail their own request; everything else degrades to a
    logged, non-fatal failure. Without an API key, non-critical mail is only
    logged (recipient and subject) and critical mail is refused, since its
    content must not reach anywhere but the recipient's inbox.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        from_email: str = settings.FROM_EMAIL,
        from_name: str = settings.FROM_NAME,
        api_url: str = settings.SENDGRID_API_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _failure(self, critical: bool, error: str) -> DeliveryResult:
        outcome = DeliveryOutcome.FAILED_FATAL if critical else DeliveryOutcome.FAILED_NON_FATAL
        return DeliveryResult(outcome=outcome, provider="sendgrid" if self.configured else "console", error=error)

    def _payload(self, message: EmailMessage) -> dict:
        return {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": {"email": self.from_email, "name": self.from_name},
            "subject": message.subject,
            "content": [
                {"type": "text/plain", "value": message.text},
                {"type": "text/html", "value": message.html},
            ],
        }

    async def send(self, message: EmailMessage, critical: bool = False) -> DeliveryResult:
        if not self.configured:
            if critical:
                logger.error(f"Email provider not configured; refusing to send '{message.subject}' to {message.to}")
                return self._failure(critical, "email provider not configured")
            logger.info(f"SendGrid not configured - email would be sent to {message.to}: '{message.subject}'")
            return DeliveryResult(outcome=DeliveryOutcome.DELIVERED, provider="console")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    json=self._payload(message),
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"SendGrid email error for {message.to}: {e}")
            return self._failure(critical, str(e))

        logger.info(f"Email sent successfully to {message.to}")
        return DeliveryResult(outcome=DeliveryOutcome.DELIVERED, provider="sendgrid")


_sender: Optional[EmailSender] = None


def get_email_sender() -> EmailSender:
    """Dependency returning the process-wide sender built from settings."""
    global _sender
    if _sender is None:
        _sender = EmailSender(api_key=settings.SENDGRID_API_KEY)
    return _sender
