"""An asyncio counter with ticks, frame-rate renders and delayed "network" updates."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from contextlib import ExitStack
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union

import blessed

from .render import Alignment, Block, BorderSet, Color, Paragraph, Style
from .terminal import Frame, KeyEvent, KeyEventKind, ResizeEvent, Terminal

_log = logging.getLogger(__name__)

_STOP_TIMEOUT = 0.1


class Event(Enum):
    """Events without a payload; keys and resizes arrive as KeyEvent and ResizeEvent."""

    INIT = auto()
    QUIT = auto()
    ERROR = auto()
    CLOSED = auto()
    TICK = auto()
    RENDER = auto()
    FOCUS_GAINED = auto()
    FOCUS_LOST = auto()


AnyEvent = Union[Event, KeyEvent, ResizeEvent]


class Action(Enum):
    TICK = auto()
    INCREMENT = auto()
    DECREMENT = auto()
    NETWORK_REQUEST_AND_THEN_INCREMENT = auto()
    NETWORK_REQUEST_AND_THEN_DECREMENT = auto()
    QUIT = auto()
    RENDER = auto()
    NONE = auto()


def _advance(deadline: float, delay: float, now: float) -> float:
    deadline += delay
    return deadline if deadline > now else now + delay


class AsyncTui:
    """A terminal feeding key, tick and render events into an asyncio queue."""

    def __init__(self, terminal=None, *, tick_rate: float = 4.0, frame_rate: float = 60.0):
        if tick_rate <= 0 or frame_rate <= 0:
            raise ValueError("tick_rate and frame_rate must be positive")
        self.terminal = terminal if terminal is not None else Terminal(
            blessed.Terminal(stream=sys.stderr))
        self.tick_rate = tick_rate
        self.frame_rate = frame_rate
        self._events: "asyncio.Queue[AnyEvent]" = asyncio.Queue()
        self._task: Optional[asyncio.Task] = None
        self._stack: Optional[ExitStack] = None

    def start(self) -> None:
        """Start (or restart) the background event reader; needs a running loop."""
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._read_events())

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()

    async def stop(self) -> None:
        """Cancel the reader and wait briefly for it to finish."""
        self.cancel()
        task = self._task
        if task is None:
            return
        done, _ = await asyncio.wait({task}, timeout=_STOP_TIMEOUT)
        if not done:
            _log.error("Failed to abort task in 100 milliseconds for unknown reason")
            return
        if not task.cancelled():
            task.exception()

    def enter(self) -> None:
        """Switch the terminal to interactive mode and start reading events."""
        if self._stack is None:
            stack = ExitStack()
            stack.enter_context(self.terminal)
            self._stack = stack
        self.start()

    async def exit(self) -> None:
        """Stop reading events and restore the terminal."""
        await self.stop()
        if self._stack is not None:
            stack, self._stack = self._stack, None
            stack.close()

    async def next(self) -> AnyEvent:
        """Wait for the next event."""
        return await self._events.get()

    def draw(self, render):
        return self.terminal.draw(render)

    async def __aenter__(self) -> "AsyncTui":
        self.enter()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        await self.exit()
        return False

    async def _read_events(self) -> None:
        loop = asyncio.get_running_loop()
        tick_delay = 1.0 / self.tick_rate
        render_delay = 1.0 / self.frame_rate
        put = self._events.put_nowait
        put(Event.INIT)
        next_tick = next_render = loop.time()
        while True:
            now = loop.time()
            if now >= next_tick:
                put(Event.TICK)
                next_tick = _advance(next_tick, tick_delay, now)
            if now >= next_render:
                put(Event.RENDER)
                next_render = _advance(next_render, render_delay, now)
            timeout = max(0.0, min(next_tick, next_render) - loop.time())
            try:
                event = await asyncio.to_thread(self.terminal.read_event, timeout)
            except Exception:
                put(Event.ERROR)
                continue
            if isinstance(event, KeyEvent):
                if event.kind is KeyEventKind.PRESS:
                    put(event)
            elif isinstance(event, ResizeEvent):
                put(event)


@dataclass
class AsyncCounterApp:
    """Counter state plus the queue that actions are sent through."""

    counter: int = 0
    should_quit: bool = False
    action_tx: "asyncio.Queue[Action]" = field(default_factory=asyncio.Queue, repr=False)
    network_delay: float = 5.0
    _pending: set = field(default_factory=set, repr=False)


def get_action(app: AsyncCounterApp, event: AnyEvent) -> Action:
    """Map an event to the action it asks for."""
    if event is Event.ERROR:
        return Action.NONE
    if event is Event.TICK:
        return Action.TICK
    if event is Event.RENDER:
        return Action.RENDER
    if isinstance(event, KeyEvent):
        return {
            "j": Action.INCREMENT,
            "k": Action.DECREMENT,
            "J": Action.NETWORK_REQUEST_AND_THEN_INCREMENT,
            "K": Action.NETWORK_REQUEST_AND_THEN_DECREMENT,
            "q": Action.QUIT,
        }.get(event.code, Action.NONE) if isinstance(event.code, str) else Action.NONE
    return Action.NONE


async def _delayed_send(app: AsyncCounterApp, action: Action) -> None:
    await asyncio.sleep(app.network_delay)  # stands in for a slow request
    app.action_tx.put_nowait(action)


def _spawn(app: AsyncCounterApp, action: Action) -> None:
    task = asyncio.get_running_loop().create_task(_delayed_send(app, action))
    app._pending.add(task)
    task.add_done_callback(app._pending.discard)


def update(app: AsyncCounterApp, action: Action) -> None:
    """Apply an action to the app; network requests send their result later."""
    if action is Action.INCREMENT:
        app.counter += 1
    elif action is Action.DECREMENT:
        app.counter -= 1
    elif action is Action.NETWORK_REQUEST_AND_THEN_INCREMENT:
        _spawn(app, Action.INCREMENT)
    elif action is Action.NETWORK_REQUEST_AND_THEN_DECREMENT:
        _spawn(app, Action.DECREMENT)
    elif action is Action.QUIT:
        app.should_quit = True


def ui(frame: Frame, app: AsyncCounterApp) -> None:
    text = f"Press j or k to increment or decrement.\n\nCounter: {app.counter}"
    block = Block(
        title="async counter app",
        title_alignment=Alignment.CENTER,
        borders=True,
        border_set=BorderSet.ROUNDED,
    )
    paragraph = Paragraph(text, block=block, style=Style(fg=Color.CYAN),
                          alignment=Alignment.CENTER)
    frame.render_widget(paragraph, frame.area)


_FORWARDED = {Event.QUIT: Action.QUIT, Event.TICK: Action.TICK, Event.RENDER: Action.RENDER}


async def _run_loop(tui: AsyncTui, app: AsyncCounterApp) -> None:
    tui.enter()
    try:
        while True:
            event = await tui.next()
            if isinstance(event, Event) and event in _FORWARDED:
                app.action_tx.put_nowait(_FORWARDED[event])
            elif isinstance(event, KeyEvent):
                app.action_tx.put_nowait(get_action(app, event))
            while True:
                try:
                    action = app.action_tx.get_nowait()
                except asyncio.QueueEmpty:
                    break
                update(app, action)
                if action is Action.RENDER:
                    tui.draw(lambda frame: ui(frame, app))
            if app.should_quit:
                break
    finally:
        await tui.exit()
        for task in list(app._pending):
            task.cancel()


async def run() -> None:
    """Run the counter on the terminal until the user quits."""
    tui = AsyncTui(tick_rate=1.0, frame_rate=30.0)
    await _run_loop(tui, AsyncCounterApp())


def main(argv=None) -> int:
    argparse.ArgumentParser(
        description="An async counter: j/k change it, J/K change it after a delay, q quits."
    ).parse_args(argv)
    asyncio.run(run())
    return 0