from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Iterable, TypeVar

from .models import DEFAULT_WINDOW, MessageWindow

T = TypeVar("T")


def compute_status(
    last_inbound_at: datetime | None,
    now: datetime,
    window: timedelta = DEFAULT_WINDOW,
) -> MessageWindow:
    """Return the WhatsApp service window state at ``now``.

    The window opens on each inbound customer message and closes ``window``
    later. A timestamp in the future counts as just received.
    """
    if last_inbound_at is None:
        return MessageWindow(None, False, 0, window)

    elapsed = now - last_inbound_at
    if elapsed < timedelta(0):
        elapsed = timedelta(0)
    if elapsed >= window:
        return MessageWindow(last_inbound_at, False, 0, window)

    remaining = int((window - elapsed).total_seconds())
    if remaining <= 0:
        # under a second left floors to zero; report it as closed
        return MessageWindow(last_inbound_at, False, 0, window)
    return MessageWindow(last_inbound_at, True, remaining, window)


def format_remaining(window: MessageWindow) -> str:
    seconds = max(0, window.remaining_seconds) if window.is_open else 0
    return f"{seconds // 3600}h {(seconds % 3600) // 60}m"


def is_expiring_soon(window: MessageWindow, threshold: timedelta = timedelta(hours=2)) -> bool:
    return window.is_open and window.remaining_seconds <= threshold.total_seconds()


def rank_by_window(items: Iterable[T], key: Callable[[T], MessageWindow]) -> list[T]:
    # open windows first, most time left first
    return sorted(items, key=lambda item: (not key(item).is_open, -key(item).remaining_seconds))
