"""Append-only file queue for undelivered emails."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from food_ordering.domain.notifications import OutboundEmail


class NotificationQueue(Protocol):
    """Durable log of emails waiting for delivery."""

    def append(self, message: OutboundEmail) -> None:
        """Append a message to the queue."""

    def pending(self) -> list[OutboundEmail]:
        """Return every queued message, leaving the queue intact."""

    def settle(self, consumed: int, undelivered: list[OutboundEmail]) -> None:
        """Replace the first ``consumed`` messages with ``undelivered``.

        Messages appended after ``pending`` was read are kept behind them.
        """

    def size(self) -> int:
        """Return the number of queued messages."""


@dataclass
class JsonLinesNotificationQueue(NotificationQueue):
    """Queue stored as one JSON object per line."""

    path: Path

    def append(self, message: OutboundEmail) -> None:
        """Append a message as a single JSON line."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(_encode(message) + "\n")

    def pending(self) -> list[OutboundEmail]:
        return [_decode(line) for line in self._lines()]

    def settle(self, consumed: int, undelivered: list[OutboundEmail]) -> None:
        """Rewrite the file without the consumed head."""
        later = self._lines()[consumed:]
        lines = [_encode(message) for message in undelivered] + later
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        tmp_path.replace(self.path)

    def size(self) -> int:
        """Count queued messages without consuming them."""
        return len(self._lines())

    def _lines(self) -> list[str]:
        if not self.path.exists():
            return []
        lines = self.path.read_text(encoding="utf-8").splitlines()
        return [line for line in lines if line.strip()]


def _encode(message: OutboundEmail) -> str:
    return json.dumps(
        {
            "address": message.address,
            "subject": message.subject,
            "html_body": message.html_body,
        }
    )


def _decode(line: str) -> OutboundEmail:
    row = json.loads(line)
    return OutboundEmail(
        address=row["address"], subject=row["subject"], html_body=row["html_body"]
    )
