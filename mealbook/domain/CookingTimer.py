"""CookingTimer: per-ingredient countdown.

States:
  idle     - not started, time_left = full duration
  running  - time_left drops by one every tick (one tick = one second)
  paused   - frozen at the current time_left
  expired  - time_left = 0, completion already announced for this run

Transitions: idle/paused -> running on start, running -> paused on pause,
any -> idle on reset, running -> expired when time_left reaches 0.
Starting an expired timer restarts it at full duration.
"""
import logging
from typing import Optional

from mealbook.events.Event_Bus import TIMER_EXPIRED

logger = logging.getLogger(__name__)

IDLE = "idle"
RUNNING = "running"
PAUSED = "paused"
EXPIRED = "expired"


class CookingTimer:
    def __init__(self, ingredient_name: str, cooking_time: int, alerts_enabled: bool = False,
                 ticker=None, notifier=None, bus=None, context: Optional[dict] = None):
        if not cooking_time or cooking_time <= 0:
            raise ValueError(f"'{ingredient_name}' has no cooking time")
        self.ingredient_name = ingredient_name
        self.cooking_time = cooking_time
        self.alerts_enabled = alerts_enabled
        self.duration = cooking_time * 60
        self.time_left = self.duration
        self.state = IDLE
        self.completions = 0
        self._ticker = ticker
        self._notifier = notifier
        self._bus = bus
        self.context = dict(context or {})
        self._handle = None
        self._permission_checked = False

    # --- transitions -------------------------------------------------------
    def start(self):
        if self.state == RUNNING:
            return self
        if self.state == EXPIRED or self.time_left <= 0:
            self.time_left = self.duration
        if not self._permission_checked and self._notifier is not None:
            self._notifier.ensure_permission()
            self._permission_checked = True
        self.state = RUNNING
        if self._ticker is not None:
            self._handle = self._ticker.schedule(self.tick)
        return self

    def pause(self):
        if self.state != RUNNING:
            return self
        self._release()
        self.state = PAUSED
        return self

    def toggle(self):
        '''Play/pause button: pause a running timer, start any other.'''
        return self.pause() if self.state == RUNNING else self.start()

    def reset(self):
        self._release()
        self.time_left = self.duration
        self.state = IDLE
        return self

    def tick(self):
        if self.state != RUNNING:
            return
        self.time_left -= 1
        if self.time_left <= 0:
            self.time_left = 0
            self._expire()

    def _expire(self):
        self._release()
        self.state = EXPIRED
        self.completions += 1
        logger.info("Timer for %s finished", self.ingredient_name)
        if self._bus is not None:
            payload = {"timer": self, "ingredient": self.ingredient_name}
            payload.update(self.context)
            self._bus.publish(TIMER_EXPIRED, payload)
        if self.alerts_enabled and self._notifier is not None:
            message = f"{self.ingredient_name} is ready!"
            self._notifier.success(message)
            self._notifier.system("Cooking Timer", message)

    def _release(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    # --- display -----------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.state == RUNNING

    def display(self) -> str:
        mins, secs = divmod(self.time_left, 60)
        return f"{mins}:{secs:02d}"

    def to_dict(self):
        data = {
            "ingredient": self.ingredient_name,
            "state": self.state,
            "time_left": self.time_left,
            "duration": self.duration,
            "display": self.display(),
            "alerts_enabled": self.alerts_enabled,
        }
        data.update(self.context)
        return data
