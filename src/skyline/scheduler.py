# src/skyline/scheduler.py
from __future__ import annotations
from typing import Callable, Dict

FrameCallback = Callable[[], None]


class FrameScheduler:
    """
    requestAnimationFrame-style frame queue.
    - request() queues a callback for the next frame and returns its handle
    - callbacks requested while a frame runs wait for the following frame
    """
    def __init__(self):
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 1
        self.frame = 0

    def request(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> bool:
        return self._pending.pop(handle, None) is not None

    def pending(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        """Run everything queued before this frame started. Returns how many ran."""
        due, self._pending = self._pending, {}
        self.frame += 1
        for cb in due.values():
            cb()
        return len(due)
