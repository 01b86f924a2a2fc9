"""Web-facing observers for notification events.

A WebObserver subscribes to an EventBus for:
  - notify.success / notify.error (toasts)
  - notify.system (OS-level notifications, already permission-gated)
  - timer.expired

and stores a lightweight in-memory ring buffer of recent events that the
browser polls (/api/notifications) to show toasts without a page reload.

Design:
  * Each event stored with an auto-increment integer id (cursor) so clients
    can request only newer events (since=<last_id_seen>).
  * Thread-safety ensured with a simple Lock (sync endpoints run in the
    threadpool while timer ticks run on the event loop).
  * A max_events cap prevents unbounded memory growth.
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import EventBus, NOTIFY_SUCCESS, NOTIFY_ERROR, NOTIFY_SYSTEM, TIMER_EXPIRED

WATCHED_EVENTS = (NOTIFY_SUCCESS, NOTIFY_ERROR, NOTIFY_SYSTEM, TIMER_EXPIRED)


class WebObserver:
    def __init__(self, bus: EventBus, max_events: int = 300):
        self._bus = bus
        self._lock = Lock()
        self._events: List[Dict[str, Any]] = []
        self._next_id = 1
        self.max_events = max_events
        self._started = False

    def _record(self, event_name: str, payload: Any):  # signature expected by EventBus
        with self._lock:
            evt = {
                'id': self._next_id,
                'type': event_name,
                'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
            }
            # Normalize payload fields we care about for UI
            if isinstance(payload, dict):
                for k in ('message', 'title', 'body', 'ingredient', 'recipe_id', 'ingredient_id'):
                    if k in payload:
                        evt[k] = payload[k]
            self._events.append(evt)
            self._next_id += 1
            # Trim buffer
            if len(self._events) > self.max_events:
                del self._events[: len(self._events) - self.max_events]

    def start(self):
        """Idempotent start: subscribe observers once."""
        if self._started:
            return
        for name in WATCHED_EVENTS:
            self._bus.subscribe(name, self._record)
        self._started = True

    def stop(self):
        for name in WATCHED_EVENTS:
            self._bus.unsubscribe(name, self._record)
        self._started = False

    def get_events(self, since: int | None = None) -> Dict[str, Any]:
        """Return events newer than 'since' (exclusive).

        If since is None, returns the last N (up to max_events) events.
        Response includes next_cursor (largest id) so client can poll with since=next_cursor.
        """
        with self._lock:
            if since is None:
                data = list(self._events)
            else:
                data = [e for e in self._events if e['id'] > since]
            next_cursor = self._events[-1]['id'] if self._events else since or 0
        return {'events': data, 'next_cursor': next_cursor}


__all__ = ['WebObserver', 'WATCHED_EVENTS']
