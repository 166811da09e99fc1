from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Classification for error logging."""

    PAYLOAD = "payload"
    UNSUPPORTED_EVENT = "unsupported_event"
    REGISTRY = "registry"


class WebhookError(Exception):
    category: ErrorCategory = ErrorCategory.PAYLOAD


class MissingPayloadError(WebhookError, ValueError):
    def __init__(self) -> None:
        super().__init__("`payload` is mandatory")


class InvalidPayloadError(WebhookError, ValueError):
    """Raised when a webhook body does not have the event envelope shape."""


class UnsupportedEventError(WebhookError):
    category = ErrorCategory.UNSUPPORTED_EVENT

    def __init__(self, event: object) -> None:
        self.event = event
        super().__init__(f"Webhook event {event!r} is not supported")


class UnknownSlotError(WebhookError, KeyError):
    category = ErrorCategory.REGISTRY

    def __init__(self, category: str, sub_event: str) -> None:
        self.slot = (category, sub_event)
        super().__init__(f"No handler slot for {category}.{sub_event}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class RegistryFrozenError(WebhookError, RuntimeError):
    category = ErrorCategory.REGISTRY
