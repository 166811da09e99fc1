from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Mapping
from typing import Any

from ..errors import MissingPayloadError, UnsupportedEventError
from ..events import get_event, slot_for
from .registry import HandlerRegistry

logger = logging.getLogger(__name__)


class WebhookDispatcher:
    """Route one webhook payload to the callback registered for its event.

    ``payload`` is either a :class:`~razor_webhook.events.WebhookPayload` or
    a raw mapping with the same keys; it reaches the callback untouched.
    Without ``registry`` the dispatcher owns a fresh :class:`HandlerRegistry`
    exposed as :attr:`handler`.
    """

    def __init__(self, payload: Any, registry: HandlerRegistry | None = None) -> None:
        if payload is None:
            raise MissingPayloadError()
        self._payload = payload
        self._handler = registry if registry is not None else HandlerRegistry()
        self.executed = False

    @property
    def payload(self) -> Any:
        return self._payload

    @property
    def handler(self) -> HandlerRegistry:
        return self._handler

    async def execute(self) -> Any:
        """Await the matching callback and return its result unchanged.

        Raises :class:`UnsupportedEventError` when the event is not one the
        platform is known to send. Errors from the callback propagate as is.
        """

        self.executed = True
        event = get_event(self._payload)
        try:
            category, sub_event = slot_for(event)
        except UnsupportedEventError:
            logger.warning(
                "webhook_event_unsupported",
                extra={"event_type": event, "account_id": self._account_id()},
            )
            raise
        handler = self._handler.get(category, sub_event)

        start = time.perf_counter()
        result = handler(self._payload)
        if inspect.isawaitable(result):
            result = await result
        logger.debug(
            "webhook_dispatched",
            extra={
                "event_type": event,
                "account_id": self._account_id(),
                "category": category,
                "sub_event": sub_event,
                "latency_ms": (time.perf_counter() - start) * 1000,
            },
        )
        return result

    def _account_id(self) -> Any:
        if isinstance(self._payload, Mapping):
            return self._payload.get("account_id")
        return getattr(self._payload, "account_id", None)


async def dispatch(payload: Any, registry: HandlerRegistry | None = None) -> Any:
    """Build a dispatcher for ``payload`` and execute it once."""
    return await WebhookDispatcher(payload, registry).execute()
