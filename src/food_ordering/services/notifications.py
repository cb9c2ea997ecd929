"""Order notifications with an offline queue fallback."""

import logging
from dataclasses import dataclass
from html import escape

from food_ordering.adapters.file_notification_queue import NotificationQueue
from food_ordering.adapters.reachability import ReachabilityProbe
from food_ordering.adapters.smtp_mailer import Mailer
from food_ordering.domain.errors import DeliveryError
from food_ordering.domain.models import OrderItem, OrderRecord, UserRecord
from food_ordering.domain.notifications import (
    DISPATCH_QUEUED,
    DISPATCH_SENT,
    FlushResult,
    OutboundEmail,
)

_logger = logging.getLogger(__name__)

_CURRENCY = "₹"


@dataclass
class NotificationService:
    """Sends order emails when online and queues them otherwise."""

    mailer: Mailer
    queue: NotificationQueue
    probe: ReachabilityProbe

    async def dispatch(self, message: OutboundEmail) -> str:
        """Send a message, or queue it for later delivery."""
        if await self.probe.is_online():
            try:
                await self.mailer.send(
                    message.address, message.subject, message.html_body
                )
            except DeliveryError:
                _logger.exception("Email delivery failed, queueing for later")
            else:
                _logger.info("Email sent to %s", message.address)
                return DISPATCH_SENT
        self.queue.append(message)
        _logger.info("Email queued for %s", message.address)
        return DISPATCH_QUEUED

    async def flush_queue(self) -> FlushResult:
        """Retry queued messages; undelivered ones go back on the queue."""
        if not await self.probe.is_online():
            return FlushResult(sent=0, remaining=self.queue.size())
        messages = self.queue.pending()
        sent = 0
        attempted = 0
        failed: list[OutboundEmail] = []
        try:
            for message in messages:
                try:
                    await self.mailer.send(
                        message.address, message.subject, message.html_body
                    )
                except DeliveryError:
                    _logger.warning(
                        "Queued email to %s still undeliverable", message.address
                    )
                    failed.append(message)
                else:
                    sent += 1
                attempted += 1
        finally:
            # Anything not yet confirmed stays queued, even if the loop is interrupted.
            self.queue.settle(len(messages), failed + messages[attempted:])
        return FlushResult(sent=sent, remaining=len(failed))


def render_payment_confirmation(
    user: UserRecord, order: OrderRecord, food_total: float
) -> OutboundEmail:
    """Build the checkout confirmation email."""
    body = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2>Payment Successful!</h2>
  <p>Dear {escape(user.name)},</p>
  <p>Thank you for your order at Spoke Restaurant! Your payment of
  {_money(order.total)} for Order #{order.id} has been successfully processed.</p>
  <h3>Order Details</h3>
  <p><strong>Delivery Location:</strong> {escape(order.user_location)}</p>
  <table style="width: 100%; border-collapse: collapse;">
    {_items_header()}
    <tbody>{_item_rows(order.items)}</tbody>
    <tfoot>
      {_footer_row("Food Total:", food_total)}
      {_footer_row("Delivery Fee:", order.delivery_fee)}
      {_footer_row("Total:", order.total, bold=True)}
    </tfoot>
  </table>
  <p>We're preparing your order and will notify you when it's out for delivery.</p>
  <p>Best regards,<br>Spoke Restaurant Team</p>
</div>
"""
    return OutboundEmail(
        address=user.email,
        subject=f"Spoke: Payment Confirmation for Order #{order.id}",
        html_body=body,
    )


def render_out_for_delivery(user: UserRecord, order: OrderRecord) -> OutboundEmail:
    """Build the out-for-delivery email."""
    body = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2>Your Order is Out for Delivery!</h2>
  <p>Dear {escape(user.name)},</p>
  <p>Great news! Your order #{order.id} from Spoke Restaurant is now out for
  delivery.</p>
  <table style="width: 100%; border-collapse: collapse;">
    {_items_header()}
    <tbody>{_item_rows(order.items)}</tbody>
    <tfoot>{_footer_row("Total:", order.total, bold=True)}</tfoot>
  </table>
  <p>Estimated Delivery: Within the next hour.</p>
  <p>Enjoy your meal!<br>Spoke Restaurant Team</p>
</div>
"""
    return OutboundEmail(
        address=user.email,
        subject=f"Spoke: Order #{order.id} Out for Delivery",
        html_body=body,
    )


def _money(value: float) -> str:
    return f"{_CURRENCY}{value:.2f}"


def _items_header() -> str:
    return (
        "<thead><tr><th>Item</th><th>Quantity</th>"
        "<th>Price</th><th>Subtotal</th></tr></thead>"
    )


def _item_rows(items: list[OrderItem]) -> str:
    rows = []
    for item in items:
        rows.append(
            f"<tr><td>{escape(item.name)}</td><td>{item.quantity}</td>"
            f"<td>{_money(item.price)}</td>"
            f"<td>{_money(item.price * item.quantity)}</td></tr>"
        )
    return "".join(rows)


def _footer_row(label: str, value: float, bold: bool = False) -> str:
    style = ' style="font-weight: bold;"' if bold else ""
    return (
        f'<tr><td colspan="3"{style}>{label}</td>'
        f"<td{style}>{_money(value)}</td></tr>"
    )
