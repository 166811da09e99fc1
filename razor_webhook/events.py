"""Razorpay webhook event catalogue and envelope model."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import InvalidPayloadError, UnsupportedEventError

EntityContain = Literal[
    "payment",
    "order",
    "refund",
    "dispute",
    "invoice",
    "subscription",
    "settlement",
    "virtual_account",
]


class EventType(str, Enum):
    """Every event name the platform delivers to a webhook."""

    ORDER_PAID = "order.paid"
    PAYMENT_AUTHORIZED = "payment.authorized"
    PAYMENT_CAPTURED = "payment.captured"
    PAYMENT_FAILED = "payment.failed"
    REFUND_CREATED = "refund.created"
    DISPUTE_CREATED = "payment.dispute.created"
    DISPUTE_WON = "payment.dispute.won"
    DISPUTE_LOST = "payment.dispute.lost"
    DISPUTE_CLOSED = "payment.dispute.closed"
    INVOICE_PARTIALLY_PAID = "invoice.partially_paid"
    INVOICE_PAID = "invoice.paid"
    INVOICE_EXPIRED = "invoice.expired"
    SUBSCRIPTION_ACTIVATED = "subscription.activated"
    SUBSCRIPTION_CHARGED = "subscription.charged"
    SUBSCRIPTION_COMPLETED = "subscription.completed"
    SUBSCRIPTION_UPDATED = "subscription.updated"
    SUBSCRIPTION_PENDING = "subscription.pending"
    SUBSCRIPTION_HALTED = "subscription.halted"
    SUBSCRIPTION_CANCELLED = "subscription.cancelled"
    SETTLEMENT_PROCESSED = "settlement.processed"
    VIRTUAL_ACCOUNT_CREATED = "virtual_account.created"
    VIRTUAL_ACCOUNT_CREDITED = "virtual_account.credited"
    VIRTUAL_ACCOUNT_CLOSED = "virtual_account.closed"


Slot = tuple[str, str]

# Event name -> (category, sub_event) handler slot. Dispute events arrive
# under the ``payment.`` prefix but have their own category.
EVENT_SLOTS: dict[EventType, Slot] = {
    EventType.ORDER_PAID: ("order", "paid"),
    EventType.PAYMENT_AUTHORIZED: ("payment", "authorized"),
    EventType.PAYMENT_CAPTURED: ("payment", "captured"),
    EventType.PAYMENT_FAILED: ("payment", "failed"),
    EventType.REFUND_CREATED: ("refund", "created"),
    EventType.DISPUTE_CREATED: ("dispute", "created"),
    EventType.DISPUTE_WON: ("dispute", "won"),
    EventType.DISPUTE_LOST: ("dispute", "lost"),
    EventType.DISPUTE_CLOSED: ("dispute", "closed"),
    EventType.INVOICE_PARTIALLY_PAID: ("invoice", "partially_paid"),
    EventType.INVOICE_PAID: ("invoice", "paid"),
    EventType.INVOICE_EXPIRED: ("invoice", "expired"),
    EventType.SUBSCRIPTION_ACTIVATED: ("subscription", "activated"),
    EventType.SUBSCRIPTION_CHARGED: ("subscription", "charged"),
    EventType.SUBSCRIPTION_COMPLETED: ("subscription", "completed"),
    EventType.SUBSCRIPTION_UPDATED: ("subscription", "updated"),
    EventType.SUBSCRIPTION_PENDING: ("subscription", "pending"),
    EventType.SUBSCRIPTION_HALTED: ("subscription", "halted"),
    EventType.SUBSCRIPTION_CANCELLED: ("subscription", "cancelled"),
    EventType.SETTLEMENT_PROCESSED: ("settlement", "processed"),
    EventType.VIRTUAL_ACCOUNT_CREATED: ("virtual_account", "created"),
    EventType.VIRTUAL_ACCOUNT_CREDITED: ("virtual_account", "credited"),
    EventType.VIRTUAL_ACCOUNT_CLOSED: ("virtual_account", "closed"),
}

_SLOTS_BY_NAME: dict[str, Slot] = {event.value: slot for event, slot in EVENT_SLOTS.items()}

CATEGORIES: tuple[str, ...] = tuple(dict.fromkeys(cat for cat, _ in EVENT_SLOTS.values()))


def slot_for(event: object) -> Slot:
    """Return the handler slot for ``event`` or raise :class:`UnsupportedEventError`."""
    if isinstance(event, EventType):
        event = event.value
    if not isinstance(event, str):
        raise UnsupportedEventError(event)
    slot = _SLOTS_BY_NAME.get(event)
    if slot is None:
        raise UnsupportedEventError(event)
    return slot


def get_event(payload: Any) -> Any:
    """Read the discriminant from a model or a raw mapping."""
    if isinstance(payload, Mapping):
        return payload.get("event")
    return getattr(payload, "event", None)


class WebhookPayload(BaseModel):
    """Event envelope POSTed by the platform.

    ``event`` stays a plain string so an unknown event still reaches the
    dispatcher, which rejects it explicitly.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    entity: Literal["event"] = "event"
    account_id: str
    event: str
    contains: list[EntityContain] = []
    payload: dict[str, dict[str, Any]] = {}
    created_at: int

    def entity_of(self, category: str) -> Any:
        """Return the object embedded under ``payload[category]["entity"]``."""
        return self.payload.get(category, {}).get("entity")


def parse_payload(data: Mapping[str, Any] | str | bytes) -> WebhookPayload:
    try:
        if isinstance(data, (str, bytes)):
            return WebhookPayload.model_validate_json(data)
        return WebhookPayload.model_validate(data)
    except ValidationError as exc:
        raise InvalidPayloadError(str(exc)) from exc
