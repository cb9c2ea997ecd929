"""Notification domain models."""

from dataclasses import dataclass

DISPATCH_SENT = "sent"
DISPATCH_QUEUED = "queued"


@dataclass(frozen=True)
class OutboundEmail:
    """Rendered email ready for delivery."""

    address: str
    subject: str
    html_body: str


@dataclass(frozen=True)
class FlushResult:
    """Outcome of re-sending queued emails."""

    sent: int
    remaining: int
