"""A background event reader with periodic ticks, and a terminal wrapper around it."""

from __future__ import annotations

import queue
import threading
import time
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Optional

from .terminal import KeyEvent, KeyEventKind, ResizeEvent


@dataclass(frozen=True)
class TickEvent:
    """Sent every tick interval."""


class EventHandler:
    """Reads terminal events on a thread and queues them with regular ticks."""

    def __init__(self, tick_rate: int, terminal):
        self._tick_rate = tick_rate / 1000.0
        self._terminal = terminal
        self._queue: "queue.Queue[object]" = queue.Queue()
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._loop, daemon=True)
        self._thread.start()

    def _loop(self) -> None:
        tick = self._tick_rate
        last_tick = time.monotonic()
        while not self._stop.is_set():
            remaining = tick - (time.monotonic() - last_tick)
            timeout = remaining if remaining > 0 else tick
            try:
                event = self._terminal.read_event(timeout)
            except Exception as err:  # handed to the reader of next()
                self._queue.put(err)
                return
            if isinstance(event, KeyEvent):
                # Releases are reported by some platforms and are not wanted.
                if event.kind is KeyEventKind.PRESS:
                    self._queue.put(event)
            elif isinstance(event, ResizeEvent):
                self._queue.put(event)
            if time.monotonic() - last_tick >= tick:
                self._queue.put(TickEvent())
                last_tick = time.monotonic()

    def next(self):
        """Block until the next event arrives; re-raise a reader failure."""
        item = self._queue.get()
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        """Stop the reader thread."""
        self._stop.set()
        if self._thread is not threading.current_thread():
            self._thread.join(timeout=max(1.0, 2 * self._tick_rate))


class Tui:
    """Sets up the terminal, draws frames and restores it on exit."""

    def __init__(self, terminal, events: EventHandler):
        self.terminal = terminal
        self.events = events
        self._stack: Optional[ExitStack] = None

    def enter(self) -> None:
        """Put the terminal into interactive full-screen mode."""
        stack = ExitStack()
        stack.enter_context(self.terminal)
        self._stack = stack

    def draw(self, render):
        return self.terminal.draw(render)

    def exit(self) -> None:
        """Restore the terminal and stop reading events."""
        try:
            if self._stack is not None:
                self._stack.close()
                self._stack = None
        finally:
            self.events.close()

    def __enter__(self) -> "Tui":
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.exit()
        return False