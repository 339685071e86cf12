"""A stopwatch with split times and a frame-rate readout."""

from __future__ import annotations

import argparse
import asyncio
import math
import sys
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable

import blessed

from .render import (
    Alignment,
    Color,
    Direction,
    Length,
    Line,
    Min,
    Paragraph,
    Rect,
    Span,
    Style,
    split,
)
from .terminal import Frame, KeyCode, KeyEvent, KeyEventKind, Terminal

_TICK_INTERVAL = 0.06
_TICK = object()  # marker for a tick with no key pressed


class AppState(Enum):
    STOPPED = auto()
    RUNNING = auto()
    QUITTING = auto()


class Message(Enum):
    START_OR_SPLIT = auto()
    STOP = auto()
    TICK = auto()
    QUIT = auto()


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as ``MM:SS.mmm``, truncating to milliseconds."""
    if seconds < 0:
        raise ValueError("duration cannot be negative")
    total_ms = math.floor(seconds * 1000 + 1e-6)
    whole, millis = divmod(total_ms, 1000)
    return f"{whole // 60:02}:{whole % 60:02}.{millis:03}"


@dataclass
class StopwatchApp:
    """Stopwatch state: split instants, running state and frame counting."""

    state: AppState = AppState.STOPPED
    splits: list[float] = field(default_factory=list)
    frames: int = 0
    fps: float = 0.0
    clock: Callable[[], float] = field(default=time.monotonic, repr=False, compare=False)
    start_time: float = field(init=False)

    def __post_init__(self) -> None:
        self.start_time = self.clock()

    def handle_event(self, event) -> Message:
        """Turn an event into the message it stands for."""
        if isinstance(event, KeyEvent):
            code = event.code
            if code == "q":
                return Message.QUIT
            if code == " ":
                return Message.START_OR_SPLIT
            if code == "s" or code is KeyCode.ENTER:
                return Message.STOP
        return Message.TICK

    def update(self, message: Message) -> None:
        {
            Message.START_OR_SPLIT: self.start_or_split,
            Message.STOP: self.stop,
            Message.TICK: self.tick,
            Message.QUIT: self.quit,
        }[message]()

    def start_or_split(self) -> None:
        if self.state is AppState.STOPPED:
            self.start()
        else:
            self.record_split()

    def stop(self) -> None:
        self.record_split()
        self.state = AppState.STOPPED

    def tick(self) -> None:
        """Count a frame and refresh the frame rate once a second has passed."""
        self.frames += 1
        now = self.clock()
        elapsed = now - self.start_time
        if elapsed >= 1.0:
            self.fps = self.frames / elapsed
            self.start_time = now
            self.frames = 0

    def quit(self) -> None:
        self.state = AppState.QUITTING

    def start(self) -> None:
        self.splits.clear()
        self.state = AppState.RUNNING
        self.record_split()

    def record_split(self) -> None:
        if self.state is not AppState.RUNNING:
            return
        self.splits.append(self.clock())

    def elapsed(self) -> float:
        """Seconds since the start while running, else from first to last split."""
        if self.state is AppState.RUNNING:
            return self.clock() - self.splits[0] if self.splits else 0.0
        if not self.splits:
            return 0.0
        return self.splits[-1] - self.splits[0]

    def split_lines(self) -> list[Line]:
        """One line per split, newest first: number, split time, total time."""
        start = self.splits[0] if self.splits else self.clock()
        lines = [
            Line([
                Span(f"#{index:02} -- "),
                Span(format_duration(current - previous), Style(fg=Color.YELLOW)),
                Span(" -- "),
                Span(format_duration(current - start)),
            ])
            for index, (previous, current) in enumerate(
                zip(self.splits, self.splits[1:]), start=1)
        ]
        lines.reverse()
        return lines

    def _layout(self, area: Rect) -> list[Rect]:
        rows = split(area, Direction.VERTICAL, [
            Length(2),  # top bar
            Length(8),  # timer
            Length(1),  # splits header
            Min(0),     # splits
            Length(1),  # help
        ])
        top = split(rows[0], Direction.HORIZONTAL, [Length(20), Min(0)])
        return top + rows[1:]

    def _fps_paragraph(self) -> Paragraph:
        return Paragraph(f"{self.fps:.2f} fps", style=Style(dim=True),
                         alignment=Alignment.RIGHT)

    def _timer_paragraph(self) -> Paragraph:
        colour = Color.GREEN if self.state is AppState.RUNNING else Color.RED
        return Paragraph(format_duration(self.elapsed()), style=Style(fg=colour, bold=True))

    def _help_paragraph(self) -> Paragraph:
        space_action = "start" if self.state is AppState.STOPPED else "split"
        dim = Style(dim=True)
        help_text = Line([
            Span("space "),
            Span(space_action, dim),
            Span(" enter "),
            Span("stop", dim),
            Span(" q "),
            Span("quit", dim),
        ])
        return Paragraph(help_text, style=Style(fg=Color.GRAY))

    def ui(self, frame: Frame) -> None:
        layout = self._layout(frame.area)
        frame.render_widget(Paragraph("Stopwatch Example"), layout[0])
        frame.render_widget(self._fps_paragraph(), layout[1])
        frame.render_widget(self._timer_paragraph(), layout[2])
        frame.render_widget(Paragraph("Splits:"), layout[3])
        frame.render_widget(Paragraph(self.split_lines()), layout[4])
        frame.render_widget(self._help_paragraph(), layout[5])

    async def _next_event(self, terminal, deadline: float):
        loop = asyncio.get_running_loop()
        while True:
            timeout = deadline - loop.time()
            if timeout <= 0:
                return _TICK
            try:
                event = await asyncio.to_thread(terminal.read_event, timeout)
            except Exception:
                return _TICK
            if isinstance(event, KeyEvent) and event.kind is KeyEventKind.PRESS:
                return event

    async def _run_on(self, terminal) -> None:
        loop = asyncio.get_running_loop()
        with terminal:
            deadline = loop.time() + _TICK_INTERVAL
            while self.state is not AppState.QUITTING:
                terminal.draw(self.ui)
                event = await self._next_event(terminal, deadline)
                if event is _TICK:
                    deadline = max(deadline + _TICK_INTERVAL, loop.time())
                self.update(self.handle_event(event))

    async def run(self) -> None:
        """Run the stopwatch on the terminal until the user quits."""
        await self._run_on(Terminal(blessed.Terminal(stream=sys.stderr)))


def main(argv=None) -> int:
    argparse.ArgumentParser(
        description="A stopwatch: space starts or splits, enter stops, q quits."
    ).parse_args(argv)
    asyncio.run(StopwatchApp().run())
    return 0