"""Tests for notification dispatch, queue flushing and rendering."""

import asyncio
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from food_ordering.adapters.file_notification_queue import JsonLinesNotificationQueue
from food_ordering.domain.models import OrderItem, OrderRecord, UserRecord
from food_ordering.domain.notifications import OutboundEmail
from food_ordering.services.notifications import (
    NotificationService,
    render_out_for_delivery,
    render_payment_confirmation,
)
from tests.conftest import FakeMailer, FakeProbe

MESSAGE = OutboundEmail("asha@example.com", "Hello", "<p>Hi</p>")


def _order() -> OrderRecord:
    return OrderRecord(
        id=uuid4(),
        user_id=uuid4(),
        chef_id=uuid4(),
        items=[OrderItem(food_id=uuid4(), name="Dosa & Chutney", price=100, quantity=2)],
        total=7000,
        delivery_fee=6800,
        status="pending",
        payment_status="completed",
        user_location="Madurai",
        created_at=datetime.now(tz=UTC),
    )


def _user() -> UserRecord:
    return UserRecord(
        id=uuid4(), name="Asha <A>", email="asha@example.com", credential_hash="x"
    )


def test_dispatch_sends_when_online(notification_service, probe, mailer, queue) -> None:
    probe.online = True

    outcome = asyncio.run(notification_service.dispatch(MESSAGE))

    assert outcome == "sent"
    assert mailer.sent == [MESSAGE]
    assert queue.messages == []


def test_dispatch_queues_when_offline(notification_service, mailer, queue) -> None:
    outcome = asyncio.run(notification_service.dispatch(MESSAGE))

    assert outcome == "queued"
    assert mailer.sent == []
    assert queue.messages == [MESSAGE]


def test_dispatch_queues_on_delivery_failure(
    notification_service, probe, mailer, queue
) -> None:
    probe.online = True
    mailer.fail = True

    outcome = asyncio.run(notification_service.dispatch(MESSAGE))

    assert outcome == "queued"
    assert queue.messages == [MESSAGE]


def test_flush_queue_offline_keeps_messages(notification_service, queue) -> None:
    queue.append(MESSAGE)

    result = asyncio.run(notification_service.flush_queue())

    assert (result.sent, result.remaining) == (0, 1)
    assert queue.messages == [MESSAGE]


def test_flush_queue_resends_and_requeues_failures(
    notification_service, probe, mailer, queue
) -> None:
    probe.online = True
    queue.append(MESSAGE)
    queue.append(OutboundEmail("bala@example.com", "Hello", "<p>Hi</p>"))

    result = asyncio.run(notification_service.flush_queue())

    assert (result.sent, result.remaining) == (2, 0)
    assert queue.messages == []

    mailer.fail = True
    queue.append(MESSAGE)
    result = asyncio.run(notification_service.flush_queue())

    assert (result.sent, result.remaining) == (0, 1)
    assert queue.messages == [MESSAGE]


def test_payment_confirmation_render() -> None:
    order = _order()

    email = render_payment_confirmation(_user(), order, food_total=200)

    assert email.address == "asha@example.com"
    assert email.subject == f"Spoke: Payment Confirmation for Order #{order.id}"
    assert "Asha &lt;A&gt;" in email.html_body
    assert "Dosa &amp; Chutney" in email.html_body
    assert "₹200.00" in email.html_body
    assert "₹6800.00" in email.html_body
    assert "₹7000.00" in email.html_body
    assert "Madurai" in email.html_body


def test_out_for_delivery_render() -> None:
    order = _order()

    email = render_out_for_delivery(_user(), order)

    assert email.subject == f"Spoke: Order #{order.id} Out for Delivery"
    assert "out for" in email.html_body
    assert "₹7000.00" in email.html_body


def test_json_lines_queue_roundtrip(tmp_path) -> None:
    queue = JsonLinesNotificationQueue(tmp_path / "data" / "queued_emails.jsonl")

    assert queue.size() == 0
    assert queue.pending() == []
    queue.append(MESSAGE)
    queue.append(OutboundEmail("bala@example.com", "Order ₹", "<p>✓</p>"))

    pending = queue.pending()
    assert pending[0] == MESSAGE
    assert pending[1].subject == "Order ₹"
    assert queue.size() == 2

    queue.settle(2, [])
    assert queue.size() == 0


def test_interrupted_flush_keeps_unsent_messages_on_disk(tmp_path) -> None:
    queue = JsonLinesNotificationQueue(tmp_path / "queued_emails.jsonl")
    second = OutboundEmail("bala@example.com", "Second", "<p>2</p>")
    third = OutboundEmail("chitra@example.com", "Third", "<p>3</p>")
    for message in (MESSAGE, second, third):
        queue.append(message)
    mailer = FakeMailer(interrupt_after=1)
    service = NotificationService(mailer=mailer, queue=queue, probe=FakeProbe(online=True))

    with pytest.raises(asyncio.CancelledError):
        asyncio.run(service.flush_queue())

    assert mailer.sent == [MESSAGE]
    assert queue.size() == 2
    assert queue.pending() == [second, third]


def test_settle_keeps_messages_appended_during_flush(tmp_path) -> None:
    queue = JsonLinesNotificationQueue(tmp_path / "queued_emails.jsonl")
    late = OutboundEmail("bala@example.com", "Late", "<p>late</p>")
    queue.append(MESSAGE)
    queue.append(MESSAGE)

    consumed = len(queue.pending())
    queue.append(late)
    queue.settle(consumed, [MESSAGE])

    assert queue.pending() == [MESSAGE, late]
