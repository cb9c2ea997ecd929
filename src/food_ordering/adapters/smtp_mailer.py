"""SMTP mail transport."""

import asyncio
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Protocol

from food_ordering.domain.errors import DeliveryError


class Mailer(Protocol):
    """Interface for sending HTML email."""

    async def send(self, address: str, subject: str, html_body: str) -> None:
        """Send an email or raise DeliveryError."""


@dataclass
class SmtpMailer(Mailer):
    """Mailer that delivers over implicit-TLS SMTP."""

    host: str
    port: int
    username: str
    password: str
    sender_name: str
    timeout_seconds: float = 10.0

    async def send(self, address: str, subject: str, html_body: str) -> None:
        """Send the message on a worker thread."""
        message = EmailMessage()
        message["From"] = f'"{self.sender_name}" <{self.username}>'
        message["To"] = address
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable mail client.")
        message.add_alternative(html_body, subtype="html")
        try:
            await asyncio.to_thread(self._deliver, message)
        except (OSError, smtplib.SMTPException) as exc:
            raise DeliveryError(f"Error sending email to {address}: {exc}") from exc

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP_SSL(
            self.host, self.port, timeout=self.timeout_seconds
        ) as server:
            if self.username:
                server.login(self.username, self.password)
            server.send_message(message)
