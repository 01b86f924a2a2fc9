"""Notification surface used by views and timers.

Two kinds of output, both published on an EventBus so the web layer can
relay them to the browser:

  * toasts: fire-and-forget ``success`` / ``error`` messages
  * system notifications: OS-level popups, only delivered while the
    permission state is ``granted``

The permission starts ``unset``. The first timer start calls
``ensure_permission()``, which asks the configured requester once; the
browser can also report its real answer through ``set_permission()``.
"""
from __future__ import annotations
import logging
from typing import Callable, Optional

from .Event_Bus import EventBus, NOTIFY_SUCCESS, NOTIFY_ERROR, NOTIFY_SYSTEM

logger = logging.getLogger(__name__)

PERMISSION_UNSET = "unset"
PERMISSION_GRANTED = "granted"
PERMISSION_DENIED = "denied"
PERMISSION_STATES = (PERMISSION_UNSET, PERMISSION_GRANTED, PERMISSION_DENIED)


class Notifier:
    def __init__(self, bus: EventBus, permission_requester: Optional[Callable[[], str]] = None):
        self._bus = bus
        self._requester = permission_requester
        self.permission = PERMISSION_UNSET

    def success(self, message: str):
        self._bus.publish(NOTIFY_SUCCESS, {"message": message})

    def error(self, message: str):
        logger.info("User-facing error: %s", message)
        self._bus.publish(NOTIFY_ERROR, {"message": message})

    def set_permission(self, state: str):
        if state not in PERMISSION_STATES:
            raise ValueError(f"Unknown notification permission: {state}")
        self.permission = state

    def ensure_permission(self) -> str:
        '''Ask for OS notification permission once, while it is still unset.'''
        if self.permission == PERMISSION_UNSET and self._requester is not None:
            answer = self._requester()
            self.permission = answer if answer in PERMISSION_STATES else PERMISSION_DENIED
            logger.debug("Notification permission resolved to %s", self.permission)
        return self.permission

    def system(self, title: str, body: str) -> bool:
        if self.permission != PERMISSION_GRANTED:
            return False
        self._bus.publish(NOTIFY_SYSTEM, {"title": title, "body": body})
        return True
