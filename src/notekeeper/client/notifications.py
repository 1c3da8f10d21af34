from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Literal, Optional

NotificationKind = Literal["success", "error", "info"]


class ChannelState(str, Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    text: str
    shown_at: float


# PUBLIC_INTERFACE
class NotificationChannel:
    """
    Single-slot, auto-dismissing notification area.

    At most one notification is visible. A new one pre-empts the current one
    and restarts the timer; after `duration` seconds without a new result the
    channel goes back to HIDDEN. The clock is injectable so tests can step
    time instead of sleeping.
    """

    def __init__(self, duration: float = 3.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.duration = duration
        self._clock = clock
        self._last: Optional[Notification] = None

    def notify(self, kind: NotificationKind, text: str) -> Notification:
        self._last = Notification(kind=kind, text=text, shown_at=self._clock())
        return self._last

    def success(self, text: str) -> Notification:
        return self.notify("success", text)

    def error(self, text: str) -> Notification:
        return self.notify("error", text)

    def info(self, text: str) -> Notification:
        return self.notify("info", text)

    def dismiss(self) -> None:
        self._last = None

    @property
    def current(self) -> Optional[Notification]:
        """The visible notification, or None once it has expired."""
        if self._last is None:
            return None
        if self._clock() - self._last.shown_at >= self.duration:
            self._last = None
        return self._last

    @property
    def state(self) -> ChannelState:
        return ChannelState.VISIBLE if self.current is not None else ChannelState.HIDDEN

    @property
    def visible(self) -> bool:
        return self.state is ChannelState.VISIBLE
