"""Razorpay webhook event router.

A host application hands an authenticated, deserialized webhook payload to
:class:`WebhookDispatcher`, which awaits the single callback registered for
the payload's event in a :class:`HandlerRegistry`.
"""

from .errors import (
    ErrorCategory,
    InvalidPayloadError,
    MissingPayloadError,
    RegistryFrozenError,
    UnknownSlotError,
    UnsupportedEventError,
    WebhookError,
)
from .events import EVENT_SLOTS, EventType, WebhookPayload, parse_payload
from .handlers.dispatcher import WebhookDispatcher, dispatch
from .handlers.registry import HandlerRegistry, WebhookHandler, noop_handler

__all__ = [
    "__version__",
    "EVENT_SLOTS",
    "ErrorCategory",
    "EventType",
    "HandlerRegistry",
    "InvalidPayloadError",
    "MissingPayloadError",
    "RegistryFrozenError",
    "UnknownSlotError",
    "UnsupportedEventError",
    "WebhookDispatcher",
    "WebhookError",
    "WebhookHandler",
    "WebhookPayload",
    "dispatch",
    "noop_handler",
    "parse_payload",
]

__version__ = "0.1.0"
