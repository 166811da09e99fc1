"""Per-event callback registry for webhook dispatch."""

from __future__ import annotations

import logging
import threading
from collections.abc import Awaitable, Callable
from typing import Any

from ..errors import RegistryFrozenError, UnknownSlotError
from ..events import EVENT_SLOTS, EventType, slot_for

logger = logging.getLogger(__name__)

WebhookHandler = Callable[[Any], Awaitable[Any]]


async def noop_handler(payload: Any) -> bool:
    """Default callback for events nobody registered."""
    return True


def _slot(category: str, sub_event: str, doc: str) -> property:
    def fget(self: HandlerRegistry) -> WebhookHandler:
        return self.get(category, sub_event)

    def fset(self: HandlerRegistry, handler: WebhookHandler) -> None:
        self.set(category, sub_event, handler)

    return property(fget, fset, doc=doc)


class HandlerRegistry:
    """Closed table of webhook callbacks, one slot per known event.

    Every slot starts out as :func:`noop_handler`. Slots are replaced either
    through the named attributes::

        registry = HandlerRegistry()
        registry.payment_captured = on_captured

    by event name::

        registry.register("payment.captured", on_captured)

    or with :meth:`on` as a decorator::

        @registry.on("payment.captured")
        async def on_captured(payload): ...

    Writes are last-write-wins. Call :meth:`freeze` once wiring is done to
    make the table read-only.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._frozen = False
        self._handlers: dict[str, dict[str, WebhookHandler]] = {}
        for category, sub_event in EVENT_SLOTS.values():
            self._handlers.setdefault(category, {})[sub_event] = noop_handler

    @property
    def handlers(self) -> dict[str, dict[str, WebhookHandler]]:
        """Snapshot of the table as ``{category: {sub_event: handler}}``."""
        with self._lock:
            return {category: dict(slots) for category, slots in self._handlers.items()}

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    def get(self, category: str, sub_event: str) -> WebhookHandler:
        with self._lock:
            try:
                return self._handlers[category][sub_event]
            except KeyError:
                raise UnknownSlotError(category, sub_event) from None

    def set(self, category: str, sub_event: str, handler: WebhookHandler) -> None:
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(
                    f"cannot replace {category}.{sub_event}: registry is frozen"
                )
            slots = self._handlers.get(category)
            if slots is None or sub_event not in slots:
                raise UnknownSlotError(category, sub_event)
            slots[sub_event] = handler
        logger.debug(
            "webhook_handler_registered",
            extra={"category": category, "sub_event": sub_event},
        )

    def resolve(self, event: str | EventType) -> WebhookHandler:
        """Return the callback currently registered for ``event``."""
        return self.get(*slot_for(event))

    def register(self, event: str | EventType, handler: WebhookHandler) -> None:
        self.set(*slot_for(event), handler)

    def on(
        self, event: str | EventType, handler: WebhookHandler | None = None
    ) -> WebhookHandler | Callable[[WebhookHandler], WebhookHandler]:
        """Register ``handler`` for ``event``.

        If ``handler`` is ``None`` this functions as a decorator factory.
        """

        if handler is not None:
            self.register(event, handler)
            return handler

        def decorator(func: WebhookHandler) -> WebhookHandler:
            self.register(event, func)
            return func

        return decorator

    # Named slots -------------------------------------------------------------

    order_paid = _slot("order", "paid", "Triggered when an order is successfully paid.")

    payment_authorized = _slot(
        "payment", "authorized", "Triggered when a payment is authorized."
    )
    payment_captured = _slot(
        "payment", "captured", "Triggered when a payment is successfully captured."
    )
    payment_failed = _slot("payment", "failed", "Triggered when a payment fails.")

    refund_created = _slot("refund", "created", "Triggered when you create a refund.")

    dispute_created = _slot(
        "dispute",
        "created",
        "Triggered when the customer's issuing bank raises a dispute against a payment.",
    )
    dispute_won = _slot("dispute", "won", "Triggered when the merchant wins a dispute.")
    dispute_lost = _slot("dispute", "lost", "Triggered when the merchant loses a dispute.")
    dispute_closed = _slot("dispute", "closed", "Triggered when a dispute is closed.")

    invoice_partially_paid = _slot(
        "invoice",
        "partially_paid",
        "Triggered when a partial payment is made against an invoice.",
    )
    invoice_paid = _slot("invoice", "paid", "Triggered when an invoice is successfully paid.")
    invoice_expired = _slot("invoice", "expired", "Triggered when an invoice expires.")

    subscription_activated = _slot(
        "subscription",
        "activated",
        "Sent when the subscription moves to the ``active`` state from the "
        "``authenticated``, ``pending`` or ``halted`` state.",
    )
    subscription_charged = _slot(
        "subscription",
        "charged",
        "Sent every time a successful charge is made on the subscription.",
    )
    subscription_completed = _slot(
        "subscription",
        "completed",
        "Sent when all invoices are generated and the subscription is ``completed``.",
    )
    subscription_updated = _slot(
        "subscription", "updated", "Sent when a subscription is updated; no state change."
    )
    subscription_pending = _slot(
        "subscription",
        "pending",
        "Sent when a charge on the card fails and the subscription moves to ``pending``.",
    )
    subscription_halted = _slot(
        "subscription",
        "halted",
        "Sent when all retries are exhausted and the subscription moves to ``halted``.",
    )
    subscription_cancelled = _slot(
        "subscription", "cancelled", "Sent when a subscription is ``cancelled``."
    )

    settlement_processed = _slot(
        "settlement",
        "processed",
        "Triggered when a transfer to a linked account is settled with the parent merchant.",
    )

    virtual_account_created = _slot(
        "virtual_account", "created", "Triggered when a virtual account is created."
    )
    virtual_account_credited = _slot(
        "virtual_account", "credited", "Triggered when a payment is made to a virtual account."
    )
    virtual_account_closed = _slot(
        "virtual_account",
        "closed",
        "Triggered when a virtual account expires or is closed manually.",
    )
