"""Simple Event Bus / Observer implementation for user-facing notifications.

Event names used so far:
  notify.success -> payload {"message": str}
  notify.error -> payload {"message": str}
  notify.system -> payload {"title": str, "body": str}
  timer.expired -> payload {"timer": CookingTimer, "ingredient": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
NOTIFY_SUCCESS = "notify.success"
NOTIFY_ERROR = "notify.error"
NOTIFY_SYSTEM = "notify.system"
TIMER_EXPIRED = "timer.expired"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:  # pragma: no cover
				logger.exception("[EventBus] Error delivering %s to %s", event_name, cb)


__all__ = [
	'EventBus',
	'NOTIFY_SUCCESS', 'NOTIFY_ERROR', 'NOTIFY_SYSTEM', 'TIMER_EXPIRED'
]
